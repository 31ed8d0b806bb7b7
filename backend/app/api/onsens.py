"""
温泉公开 API：检索、详情、新评价推送
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, WebSocket, WebSocketDisconnect
from pydantic import ValidationError
from sqlalchemy.orm import Session

from app.core.database import SessionLocal, get_db
from app.models.onsen import Onsen
from app.schemas.onsen import OnsenDetailResponse, OnsenResponse
from app.schemas.validation import format_validation_errors
from app.services.onsen_search import SearchCriteria, search_onsens
from app.services.review_broadcaster import review_broadcaster

logger = logging.getLogger(__name__)

router = APIRouter()


def get_onsen_or_404(db: Session, onsen_id: int) -> Onsen:
    onsen = db.get(Onsen, onsen_id)
    if not onsen:
        raise HTTPException(status_code=404, detail="Onsen not found")
    return onsen


@router.get("/", response_model=List[OnsenResponse])
async def list_onsens(
    q: Optional[str] = Query(None, description="名称或介绍中的关键词"),
    tags: Optional[str] = Query(None, description="逗号分隔的标签，任意一个匹配即可"),
    lat: Optional[str] = Query(None, description="中心点纬度（-90 到 90）"),
    lng: Optional[str] = Query(None, description="中心点经度（-180 到 180）"),
    radius_km: Optional[str] = Query(None, description="检索半径（km），限制在 1-50 之间"),
    db: Session = Depends(get_db),
):
    """
    检索温泉列表（按登记时间倒序）

    - 关键词、标签、位置三种条件可以任意组合（AND）
    - 位置检索需要同时提供 lat / lng / radius_km，空值视为未指定
    """
    try:
        criteria = SearchCriteria(q=q, tags=tags, lat=lat, lng=lng, radius_km=radius_km)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=format_validation_errors(e.errors()))
    return search_onsens(db, criteria)


@router.get("/{onsen_id}", response_model=OnsenDetailResponse)
async def get_onsen(onsen_id: int, db: Session = Depends(get_db)):
    """温泉详情（含评价，最新在前）"""
    return get_onsen_or_404(db, onsen_id)


@router.websocket("/{onsen_id}/reviews/ws")
async def review_stream(websocket: WebSocket, onsen_id: int):
    """订阅指定温泉的新评价"""
    # 连接存续期间不占用数据库连接
    with SessionLocal() as db:
        exists = db.get(Onsen, onsen_id) is not None
    if not exists:
        await websocket.close(code=1008)
        return

    await websocket.accept()
    review_broadcaster.subscribe(onsen_id, websocket)
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        logger.debug("review stream for onsen %s closed", onsen_id)
    finally:
        review_broadcaster.unsubscribe(onsen_id, websocket)
