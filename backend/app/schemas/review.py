"""
评价相关的请求 / 响应结构
"""
from typing import Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_core import PydanticCustomError

from app.schemas.onsen import ReviewResponse
from app.schemas.validation import blank_error

REVIEW_IMAGE_LIMITS = {"max_count": 3, "max_bytes": 3 * 1024 * 1024}


class ReviewCreate(BaseModel):
    rating: int
    comment: Optional[str] = Field(None, max_length=500)

    @field_validator("rating", mode="before")
    @classmethod
    def _rating_present(cls, value):
        if value is None or (isinstance(value, str) and not value.strip()):
            raise blank_error()
        return value

    @field_validator("rating")
    @classmethod
    def _rating_range(cls, value: int) -> int:
        if not 1 <= value <= 5:
            raise PydanticCustomError("inclusion", "must be between 1 and 5")
        return value

    @field_validator("comment", mode="before")
    @classmethod
    def _blank_comment(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class ReviewCreatedResponse(BaseModel):
    notice: str
    review: ReviewResponse
