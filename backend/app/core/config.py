"""
应用配置管理
"""
import os
from pydantic_settings import BaseSettings
from typing import List

_BACKEND_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


class Settings(BaseSettings):
    # 数据库配置
    DATABASE_URL: str = "sqlite:///./onsen_map.db"

    # 郵便番号検索 API（zipcloud，无需认证）
    ZIPCLOUD_API_BASE: str = "https://zipcloud.ibsnet.co.jp/api/search"
    ZIPCLOUD_TIMEOUT_SECONDS: int = 10

    # Google Geocoding API
    GOOGLE_MAPS_API_KEY: str = ""
    GOOGLE_GEOCODING_API_BASE: str = "https://maps.googleapis.com/maps/api/geocode/json"
    GEOCODING_TIMEOUT_SECONDS: int = 15

    # 上传文件目录（温泉 / 评价图片）
    UPLOAD_DIR: str = os.path.join(_BACKEND_DIR, "uploads")

    # 位置检索半径限制（km）
    SEARCH_MIN_RADIUS_KM: float = 1.0
    SEARCH_MAX_RADIUS_KM: float = 50.0

    # CSV 导入文件大小上限
    CSV_MAX_FILE_BYTES: int = 10 * 1024 * 1024

    # CORS 配置
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5173"]

    LOG_LEVEL: str = "INFO"

    @property
    def database_url(self) -> str:
        return self.DATABASE_URL

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
