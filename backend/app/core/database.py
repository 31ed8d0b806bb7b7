"""
数据库连接管理
使用 DATABASE_URL 环境变量；SQLite 用于本地开发与测试，PostgreSQL 用于生产
"""
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from app.core.config import settings


def _engine_kwargs(url: str) -> dict:
    if url.startswith("sqlite"):
        # SQLite 连接默认不允许跨线程使用，FastAPI 的线程池需要关闭该检查
        kwargs = {"connect_args": {"check_same_thread": False}, "echo": False}
        if url in ("sqlite://", "sqlite:///:memory:"):
            # 内存数据库：所有会话共用同一连接，否则每个连接都是一个空库
            kwargs["poolclass"] = StaticPool
        return kwargs
    return {
        "pool_pre_ping": True,  # 连接前检查连接是否有效
        "pool_size": 10,  # 连接池大小
        "max_overflow": 20,  # 最大溢出连接数
        "echo": False,
    }


engine = create_engine(settings.database_url, **_engine_kwargs(settings.database_url))
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


# 依赖注入：获取数据库会话
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
