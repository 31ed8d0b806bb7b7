"""
温泉 CSV 批量导入

CSV 格式（UTF-8，首行为表头）：
  name,geo_lat,geo_lng,description,tags
  玉造温泉,35.4167,133.0167,美肌の湯として有名,"美肌,露天風呂"

- 每行按新建温泉的规则单独校验，失败的行记入结果并跳过
- 文件级错误（过大、编码错误、缺少必需表头、CSV 格式错误、数据库错误）
  会回滚整个导入，不写入任何一行
"""
import io
import logging
from typing import Any, Dict, List

import pandas as pd
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.models.onsen import Onsen
from app.schemas.csv_import import CsvImportResult, CsvRowResult
from app.schemas.onsen import OnsenCreate
from app.schemas.validation import format_validation_errors

logger = logging.getLogger(__name__)

REQUIRED_HEADERS = ("name", "geo_lat", "geo_lng")
IMPORT_COLUMNS = ("name", "geo_lat", "geo_lng", "description", "tags")


class CsvImportError(Exception):
    """导致整个文件被拒绝的错误"""


def _decode(content: bytes) -> str:
    if len(content) > settings.CSV_MAX_FILE_BYTES:
        limit_mb = settings.CSV_MAX_FILE_BYTES // (1024 * 1024)
        raise CsvImportError(f"File is too large (maximum is {limit_mb} MB)")
    try:
        # utf-8-sig 兼容 Excel 导出的 BOM
        return content.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise CsvImportError(f"File is not valid UTF-8 ({e.reason} at byte {e.start})")


def _check_headers(columns: List[str]) -> None:
    missing = [h for h in REQUIRED_HEADERS if h not in columns]
    if missing:
        raise CsvImportError(f"Missing required headers: {', '.join(missing)}")


def read_frame(content: bytes) -> pd.DataFrame:
    """读取 CSV 为全字符串的 DataFrame，空单元格为空字符串"""
    text = _decode(content)
    try:
        df = pd.read_csv(
            io.StringIO(text),
            dtype=str,
            keep_default_na=False,
            index_col=False,
        )
    except pd.errors.EmptyDataError:
        df = pd.DataFrame()
    except pd.errors.ParserError as e:
        raise CsvImportError(f"CSV is malformed ({e})")

    df.columns = [str(c).strip() for c in df.columns]
    _check_headers(list(df.columns))
    # 字段数不足的行会留下 NaN
    return df.fillna("")


def _row_attributes(record: Dict[str, Any]) -> Dict[str, Any]:
    return {column: record.get(column) for column in IMPORT_COLUMNS}


def import_onsens_csv(db: Session, content: bytes) -> CsvImportResult:
    """导入 CSV 内容并返回逐行结果"""
    results: List[CsvRowResult] = []
    imported = 0
    skipped = 0

    try:
        df = read_frame(content)

        for index, record in zip(df.index, df.to_dict(orient="records")):
            line = int(index) + 2  # 第 1 行为表头
            try:
                data = OnsenCreate.model_validate(_row_attributes(record))
            except ValidationError as e:
                skipped += 1
                results.append(
                    CsvRowResult(row=line, success=False, errors=format_validation_errors(e.errors()))
                )
                continue

            onsen = Onsen(**data.model_dump())
            db.add(onsen)
            db.flush()
            imported += 1
            results.append(CsvRowResult(row=line, success=True, onsen_id=onsen.id))

        db.commit()
    except (CsvImportError, SQLAlchemyError) as e:
        db.rollback()
        logger.exception("[CsvImportService] import failed: %s", e)
        return CsvImportResult(results=[], imported=0, skipped=0, error=str(e))

    logger.info("[CsvImportService] imported=%d skipped=%d", imported, skipped)
    return CsvImportResult(results=results, imported=imported, skipped=skipped)
