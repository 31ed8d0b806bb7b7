"""
评价数据模型
"""
from sqlalchemy import Column, Integer, Text, DateTime, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.core.database import Base


class Review(Base):
    __tablename__ = "reviews"

    id = Column(Integer, primary_key=True, index=True)
    rating = Column(Integer, nullable=False)  # 1-5 星
    comment = Column(Text)
    onsen_id = Column(Integer, ForeignKey("onsens.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    onsen = relationship("Onsen", back_populates="reviews")
    images = relationship(
        "ReviewImage",
        back_populates="review",
        cascade="all, delete-orphan",
        order_by="ReviewImage.id",
    )
