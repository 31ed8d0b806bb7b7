"""
数据模型
"""
from app.models.onsen import Onsen
from app.models.review import Review
from app.models.image import OnsenImage, ReviewImage

__all__ = ["Onsen", "Review", "OnsenImage", "ReviewImage"]
