"""
评价 API：为温泉发布星级评价（可附带图片）
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, File, Form, HTTPException, UploadFile
from pydantic import ValidationError
from sqlalchemy.orm import Session

from app.api.onsens import get_onsen_or_404
from app.core.database import get_db
from app.models.image import ReviewImage
from app.models.review import Review
from app.schemas.onsen import ReviewResponse
from app.schemas.review import REVIEW_IMAGE_LIMITS, ReviewCreate, ReviewCreatedResponse
from app.schemas.validation import format_validation_errors
from app.services.image_storage import ImagePayload, drop_empty, remove_files, store_image, validate_images
from app.services.review_broadcaster import review_broadcaster

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/{onsen_id}/reviews", response_model=ReviewCreatedResponse, status_code=201)
async def create_review(
    onsen_id: int,
    background_tasks: BackgroundTasks,
    rating: Optional[str] = Form(None),
    comment: Optional[str] = Form(None),
    images: Optional[List[UploadFile]] = File(None),
    db: Session = Depends(get_db),
):
    """发布评价；校验失败返回 422 和错误信息列表"""
    onsen = get_onsen_or_404(db, onsen_id)

    errors: List[str] = []
    try:
        data = ReviewCreate.model_validate({"rating": rating, "comment": comment})
    except ValidationError as e:
        data = None
        errors.extend(format_validation_errors(e.errors()))

    payloads = drop_empty(
        [ImagePayload(f.filename or "", f.content_type, await f.read()) for f in images or []]
    )
    errors.extend(validate_images(payloads, 0, REVIEW_IMAGE_LIMITS))
    if errors:
        raise HTTPException(status_code=422, detail=errors)

    review = Review(onsen_id=onsen.id, rating=data.rating, comment=data.comment)
    db.add(review)
    stored = []
    try:
        db.flush()
        for payload in payloads:
            image = store_image(payload, ReviewImage, review_id=review.id)
            stored.append(image.stored_name)
            db.add(image)
        db.commit()
    except Exception:
        db.rollback()
        remove_files(stored)
        raise
    db.refresh(review)

    response = ReviewResponse.model_validate(review)
    background_tasks.add_task(review_broadcaster.broadcast, onsen.id, response.model_dump(mode="json"))
    logger.info("review %s created for onsen %s", review.id, onsen.id)
    return ReviewCreatedResponse(notice="Review was successfully posted.", review=response)
