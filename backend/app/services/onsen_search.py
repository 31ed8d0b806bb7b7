"""
温泉检索服务

三种条件按顺序收窄结果（AND 组合）：
1. 关键词：名称或介绍中包含（不区分大小写）
2. 标签：逗号分隔，任意一个标签匹配即可（OR）
3. 位置：先用矩形范围在数据库侧粗筛，再在内存中用 Haversine 精确过滤
"""
import logging
from typing import Callable, List, Optional, Tuple

from pydantic import BaseModel, Field, field_validator
from sqlalchemy import or_
from sqlalchemy.orm import Query, Session

from app.core.config import settings
from app.models.onsen import Onsen
from app.utils.geo import bounding_box, clamp_radius, within_range

logger = logging.getLogger(__name__)

ExactPredicate = Callable[[Onsen], bool]


class SearchCriteria(BaseModel):
    """检索条件；空字符串视为未指定"""
    q: Optional[str] = None
    tags: Optional[str] = None
    lat: Optional[float] = Field(None, ge=-90, le=90, allow_inf_nan=False)
    lng: Optional[float] = Field(None, ge=-180, le=180, allow_inf_nan=False)
    radius_km: Optional[float] = Field(None, allow_inf_nan=False)

    @field_validator("lat", "lng", "radius_km", mode="before")
    @classmethod
    def _blank_as_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def text(self) -> Optional[str]:
        if self.q and self.q.strip():
            return self.q.strip()
        return None

    @property
    def tag_list(self) -> List[str]:
        if not self.tags:
            return []
        return [t.strip() for t in self.tags.split(",") if t.strip()]

    @property
    def has_location(self) -> bool:
        return self.lat is not None and self.lng is not None and self.radius_km is not None

    @property
    def clamped_radius(self) -> Optional[float]:
        if self.radius_km is None:
            return None
        return clamp_radius(
            self.radius_km,
            settings.SEARCH_MIN_RADIUS_KM,
            settings.SEARCH_MAX_RADIUS_KM,
        )


def apply_text_filter(query: Query, text: Optional[str]) -> Query:
    if not text:
        return query
    return query.filter(
        or_(
            Onsen.name.icontains(text, autoescape=True),
            Onsen.description.icontains(text, autoescape=True),
        )
    )


def apply_tag_filter(query: Query, tags: List[str]) -> Query:
    if not tags:
        return query
    return query.filter(or_(*[Onsen.tags.icontains(tag, autoescape=True) for tag in tags]))


def apply_location_filter(
    query: Query, lat: float, lng: float, radius_km: float
) -> Tuple[Query, ExactPredicate]:
    """返回矩形粗筛后的查询和精确距离判断函数"""
    box = bounding_box(lat, lng, radius_km)
    query = query.filter(
        Onsen.geo_lat.between(box.min_lat, box.max_lat),
        Onsen.geo_lng.between(box.min_lng, box.max_lng),
    )

    def _within(onsen: Onsen) -> bool:
        return within_range(lat, lng, onsen.geo_lat, onsen.geo_lng, radius_km)

    return query, _within


def build_search(db: Session, criteria: SearchCriteria) -> Tuple[Query, Optional[ExactPredicate]]:
    query = db.query(Onsen)
    query = apply_text_filter(query, criteria.text)
    query = apply_tag_filter(query, criteria.tag_list)

    predicate = None
    if criteria.has_location:
        query, predicate = apply_location_filter(
            query, criteria.lat, criteria.lng, criteria.clamped_radius
        )
    return query.order_by(Onsen.created_at.desc(), Onsen.id.desc()), predicate


def search_onsens(db: Session, criteria: SearchCriteria) -> List[Onsen]:
    """执行检索，结果按登记时间倒序"""
    query, predicate = build_search(db, criteria)
    candidates = query.all()
    if predicate is None:
        return candidates

    results = [onsen for onsen in candidates if predicate(onsen)]
    logger.debug(
        "location search: %d candidates in box, %d within %.1f km",
        len(candidates), len(results), criteria.clamped_radius,
    )
    return results
