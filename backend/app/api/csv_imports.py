"""
CSV 导入 API（管理员）
"""
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, Response, UploadFile
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.schemas.csv_import import CsvImportResponse
from app.services.csv_import_service import import_onsens_csv

router = APIRouter()


@router.post("", response_model=CsvImportResponse)
async def create_csv_import(
    response: Response,
    file: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
):
    """
    上传温泉 CSV 并批量登记

    CSV 表头必须包含 name, geo_lat, geo_lng（description, tags 可选）。
    文件级错误返回 422 且不登记任何数据；单行校验失败的行会被跳过并列在结果中。
    """
    if file is None or not file.filename:
        raise HTTPException(status_code=400, detail="Please choose a CSV file")

    content = await file.read()
    result = import_onsens_csv(db, content)
    if result.error:
        response.status_code = 422
        return CsvImportResponse(**result.model_dump(), alert=result.message)
    return CsvImportResponse(**result.model_dump(), notice=result.message)
