"""
温泉数据模型
"""
from sqlalchemy import Column, Integer, String, Text, Numeric, DateTime
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.core.database import Base


class Onsen(Base):
    __tablename__ = "onsens"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, index=True)
    geo_lat = Column(Numeric(10, 6, asdecimal=False), nullable=False, index=True)
    geo_lng = Column(Numeric(10, 6, asdecimal=False), nullable=False, index=True)
    description = Column(Text)
    tags = Column(String(255))  # 逗号分隔，例如 "美肌,露天風呂"
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # 删除温泉时一并删除评价与图片
    reviews = relationship(
        "Review",
        back_populates="onsen",
        cascade="all, delete-orphan",
        order_by="desc(Review.created_at), desc(Review.id)",
    )
    images = relationship(
        "OnsenImage",
        back_populates="onsen",
        cascade="all, delete-orphan",
        order_by="OnsenImage.id",
    )

    @property
    def tag_list(self):
        if not self.tags:
            return []
        return [t.strip() for t in self.tags.split(",") if t.strip()]

    @property
    def average_rating(self) -> int:
        """平均评分（四舍五入为整数），没有评价时为 0"""
        if not self.reviews:
            return 0
        avg = sum(r.rating for r in self.reviews) / len(self.reviews)
        return int(avg + 0.5)
