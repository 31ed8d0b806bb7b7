"""
图片附件存储

校验上传图片（格式 / 大小 / 数量），写入 UPLOAD_DIR，并在删除时清理文件。
"""
import logging
import os
import uuid
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from app.core.config import settings

logger = logging.getLogger(__name__)

ALLOWED_CONTENT_TYPES = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
}


@dataclass
class ImagePayload:
    filename: str
    content_type: Optional[str]
    data: bytes


def drop_empty(payloads: Iterable[ImagePayload]) -> List[ImagePayload]:
    """表单未选择文件时会提交一个空的文件字段，忽略之"""
    return [p for p in payloads if p.filename or p.data]


def validate_images(payloads: List[ImagePayload], existing_count: int, limits: Dict[str, int]) -> List[str]:
    errors = []
    max_count = limits["max_count"]
    max_bytes = limits["max_bytes"]

    if existing_count + len(payloads) > max_count:
        errors.append(f"Images cannot exceed {max_count} files")
    for payload in payloads:
        if payload.content_type not in ALLOWED_CONTENT_TYPES:
            errors.append(f"Images {payload.filename} must be a JPEG, PNG or GIF")
        if len(payload.data) >= max_bytes:
            errors.append(f"Images {payload.filename} must be smaller than {max_bytes // (1024 * 1024)} MB")
    return errors


def upload_path(stored_name: str) -> str:
    return os.path.join(settings.UPLOAD_DIR, stored_name)


def store_image(payload: ImagePayload, image_cls, **owner):
    """写入文件并返回未提交的图片记录"""
    os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
    stored_name = uuid.uuid4().hex + ALLOWED_CONTENT_TYPES[payload.content_type]
    with open(upload_path(stored_name), "wb") as f:
        f.write(payload.data)
    return image_cls(
        filename=payload.filename or stored_name,
        stored_name=stored_name,
        content_type=payload.content_type,
        byte_size=len(payload.data),
        **owner,
    )


def remove_files(stored_names: Iterable[str]) -> None:
    """删除磁盘文件；文件不存在或删除失败只记录日志"""
    for name in stored_names:
        path = upload_path(name)
        try:
            os.remove(path)
        except FileNotFoundError:
            logger.debug("image file already gone: %s", path)
        except OSError as e:
            logger.warning("failed to remove image file %s: %s", path, e)
