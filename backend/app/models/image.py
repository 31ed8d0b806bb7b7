"""
图片附件数据模型（温泉图片 / 评价图片）
"""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.core.database import Base


class _ImageColumns:
    id = Column(Integer, primary_key=True, index=True)
    filename = Column(String(255), nullable=False)  # 上传时的原始文件名
    stored_name = Column(String(100), nullable=False, unique=True)
    content_type = Column(String(50), nullable=False)
    byte_size = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    @property
    def url(self) -> str:
        return f"/uploads/{self.stored_name}"


class OnsenImage(_ImageColumns, Base):
    __tablename__ = "onsen_images"

    onsen_id = Column(Integer, ForeignKey("onsens.id", ondelete="CASCADE"), nullable=False, index=True)
    onsen = relationship("Onsen", back_populates="images")


class ReviewImage(_ImageColumns, Base):
    __tablename__ = "review_images"

    review_id = Column(Integer, ForeignKey("reviews.id", ondelete="CASCADE"), nullable=False, index=True)
    review = relationship("Review", back_populates="images")
