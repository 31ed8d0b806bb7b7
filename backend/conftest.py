"""
pytest 公共夹具：内存 SQLite + 临时上传目录
"""
import os
import tempfile

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="onsen_uploads_")
os.environ["GOOGLE_MAPS_API_KEY"] = ""

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from app.core.database import Base, SessionLocal, engine  # noqa: E402
from app.models import Onsen, Review  # noqa: E402
from main import app as fastapi_app  # noqa: E402

PNG_BYTES = (
    b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01"
    b"\x08\x06\x00\x00\x00\x1f\x15\xc4\x89\x00\x00\x00\rIDATx\x9cc\xf8\x0f"
    b"\x00\x00\x01\x01\x00\x05\x18\xd8N\x00\x00\x00\x00IEND\xaeB`\x82"
)


@pytest.fixture(autouse=True)
def _tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(fastapi_app)


@pytest.fixture
def make_onsen(db):
    def _make(reviews=(), **overrides):
        data = {"name": "テスト温泉", "geo_lat": 35.0, "geo_lng": 133.0}
        data.update(overrides)
        onsen = Onsen(**data)
        for rating in reviews:
            onsen.reviews.append(Review(rating=rating, comment="良かった"))
        db.add(onsen)
        db.commit()
        db.refresh(onsen)
        return onsen
    return _make
