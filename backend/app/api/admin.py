"""
管理员 API：温泉的增删改查与图片管理
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from fastapi.responses import RedirectResponse
from pydantic import ValidationError
from sqlalchemy.orm import Session

from app.api.onsens import get_onsen_or_404
from app.core.database import get_db
from app.models.image import OnsenImage
from app.models.onsen import Onsen
from app.schemas.onsen import (
    ONSEN_IMAGE_LIMITS,
    OnsenCreate,
    OnsenDetailResponse,
    OnsenMutationResponse,
    OnsenResponse,
    OnsenUpdate,
)
from app.schemas.validation import format_validation_errors
from app.services.image_storage import ImagePayload, drop_empty, remove_files, store_image, validate_images

logger = logging.getLogger(__name__)

router = APIRouter()

ADMIN_ONSENS_PATH = "/api/v1/admin/onsens"
EDITABLE_FIELDS = ("name", "geo_lat", "geo_lng", "description", "tags")


def _mutation_response(db: Session, onsen: Onsen, notice: str) -> OnsenMutationResponse:
    db.refresh(onsen)
    return OnsenMutationResponse(notice=notice, onsen=OnsenDetailResponse.model_validate(onsen))


@router.get("/onsens", response_model=List[OnsenResponse])
async def list_onsens(db: Session = Depends(get_db)):
    """温泉一览（按登记时间倒序）"""
    return db.query(Onsen).order_by(Onsen.created_at.desc(), Onsen.id.desc()).all()


@router.get("/onsens/{onsen_id}", response_model=OnsenDetailResponse)
async def get_onsen(onsen_id: int, db: Session = Depends(get_db)):
    return get_onsen_or_404(db, onsen_id)


@router.post("/onsens", response_model=OnsenMutationResponse, status_code=201)
async def create_onsen(onsen: OnsenCreate, db: Session = Depends(get_db)):
    """创建温泉"""
    db_onsen = Onsen(**onsen.model_dump())
    db.add(db_onsen)
    db.commit()
    logger.info("onsen %s created", db_onsen.id)
    return _mutation_response(db, db_onsen, "Onsen was successfully created.")


@router.api_route("/onsens/{onsen_id}", methods=["PUT", "PATCH"], response_model=OnsenMutationResponse)
async def update_onsen(onsen_id: int, onsen: OnsenUpdate, db: Session = Depends(get_db)):
    """
    更新温泉

    只更新请求中提供的字段，合并后的记录按新建规则重新校验；
    remove_image_ids 中的图片会被删除。
    """
    db_onsen = get_onsen_or_404(db, onsen_id)

    merged = {field: getattr(db_onsen, field) for field in EDITABLE_FIELDS}
    merged.update(onsen.model_dump(exclude_unset=True, exclude={"remove_image_ids"}))
    try:
        data = OnsenCreate.model_validate(merged)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=format_validation_errors(e.errors()))

    removed = []
    for image in list(db_onsen.images):
        if image.id in onsen.remove_image_ids:
            removed.append(image.stored_name)
            db_onsen.images.remove(image)

    for field, value in data.model_dump().items():
        setattr(db_onsen, field, value)
    db.commit()
    remove_files(removed)
    return _mutation_response(db, db_onsen, "Onsen was successfully updated.")


@router.delete("/onsens/{onsen_id}", status_code=303)
async def delete_onsen(onsen_id: int, db: Session = Depends(get_db)):
    """删除温泉（评价与图片一并删除），然后重定向到一览"""
    db_onsen = get_onsen_or_404(db, onsen_id)

    stored_names = [image.stored_name for image in db_onsen.images]
    for review in db_onsen.reviews:
        stored_names.extend(image.stored_name for image in review.images)

    db.delete(db_onsen)
    db.commit()
    remove_files(stored_names)
    logger.info("onsen %s deleted (%d image files)", onsen_id, len(stored_names))

    notice = "Onsen was successfully destroyed."
    return RedirectResponse(ADMIN_ONSENS_PATH, status_code=303, headers={"X-Flash-Notice": notice})


@router.post("/onsens/{onsen_id}/images", response_model=OnsenMutationResponse, status_code=201)
async def upload_onsen_images(
    onsen_id: int,
    images: List[UploadFile] = File(...),
    db: Session = Depends(get_db),
):
    """为温泉追加图片（最多 5 张，每张小于 5MB，JPEG/PNG/GIF）"""
    db_onsen = get_onsen_or_404(db, onsen_id)

    payloads = drop_empty(
        [ImagePayload(f.filename or "", f.content_type, await f.read()) for f in images]
    )
    if not payloads:
        raise HTTPException(status_code=422, detail=["Images can't be blank"])
    errors = validate_images(payloads, len(db_onsen.images), ONSEN_IMAGE_LIMITS)
    if errors:
        raise HTTPException(status_code=422, detail=errors)

    stored = []
    try:
        for payload in payloads:
            image = store_image(payload, OnsenImage, onsen_id=db_onsen.id)
            stored.append(image.stored_name)
            db.add(image)
        db.commit()
    except Exception:
        db.rollback()
        remove_files(stored)
        raise
    return _mutation_response(db, db_onsen, f"{len(stored)} image(s) uploaded.")


@router.delete("/onsens/{onsen_id}/images/{image_id}", response_model=OnsenMutationResponse)
async def delete_onsen_image(onsen_id: int, image_id: int, db: Session = Depends(get_db)):
    db_onsen = get_onsen_or_404(db, onsen_id)
    image = db.get(OnsenImage, image_id)
    if image is None or image.onsen_id != db_onsen.id:
        raise HTTPException(status_code=404, detail="Image not found")

    stored_name = image.stored_name
    db.delete(image)
    db.commit()
    remove_files([stored_name])
    return _mutation_response(db, db_onsen, "Image was successfully removed.")
