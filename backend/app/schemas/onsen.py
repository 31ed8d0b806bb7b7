"""
温泉相关的请求 / 响应结构
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from app.schemas.validation import blank_error

ONSEN_IMAGE_LIMITS = {"max_count": 5, "max_bytes": 5 * 1024 * 1024}


def _is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class OnsenCreate(BaseModel):
    """新建温泉；CSV 导入的每一行也按此规则校验"""
    name: str = Field(..., max_length=100)
    geo_lat: float = Field(..., allow_inf_nan=False)
    geo_lng: float = Field(..., allow_inf_nan=False)
    description: Optional[str] = Field(None, max_length=1000)
    tags: Optional[str] = Field(None, max_length=255)

    @field_validator("name", "geo_lat", "geo_lng", mode="before")
    @classmethod
    def _required(cls, value):
        if _is_blank(value):
            raise blank_error()
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("description", "tags", mode="before")
    @classmethod
    def _optional(cls, value):
        return None if _is_blank(value) else value


class OnsenUpdate(BaseModel):
    """部分更新；合并后的记录再按 OnsenCreate 校验"""
    name: Optional[str] = None
    geo_lat: Optional[float] = None
    geo_lng: Optional[float] = None
    description: Optional[str] = None
    tags: Optional[str] = None
    remove_image_ids: List[int] = Field(default_factory=list)


class ImageResponse(BaseModel):
    id: int
    filename: str
    content_type: str
    byte_size: int
    url: str

    class Config:
        from_attributes = True


class ReviewResponse(BaseModel):
    id: int
    onsen_id: int
    rating: int
    comment: Optional[str]
    images: List[ImageResponse] = []
    created_at: Optional[datetime]

    class Config:
        from_attributes = True


class OnsenResponse(BaseModel):
    id: int
    name: str
    geo_lat: float
    geo_lng: float
    description: Optional[str]
    tags: Optional[str]
    tag_list: List[str] = []
    average_rating: int = 0
    images: List[ImageResponse] = []
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    class Config:
        from_attributes = True


class OnsenDetailResponse(OnsenResponse):
    reviews: List[ReviewResponse] = []


class OnsenMutationResponse(BaseModel):
    notice: str
    onsen: OnsenDetailResponse
