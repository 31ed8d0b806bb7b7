"""
CSV 导入结果结构
"""
from typing import List, Optional

from pydantic import BaseModel, Field


class CsvRowResult(BaseModel):
    row: int  # CSV 文件中的行号（表头为第 1 行）
    success: bool
    onsen_id: Optional[int] = None
    errors: List[str] = Field(default_factory=list)


class CsvImportResult(BaseModel):
    results: List[CsvRowResult] = Field(default_factory=list)
    imported: int = 0
    skipped: int = 0
    error: Optional[str] = None

    @property
    def message(self) -> str:
        if self.error:
            return f"CSV import failed: {self.error}"
        if self.skipped > 0:
            return f"Import complete: {self.imported} imported, {self.skipped} skipped"
        return f"CSV import complete: {self.imported} onsens imported"


class CsvImportResponse(CsvImportResult):
    notice: Optional[str] = None
    alert: Optional[str] = None
