"""
CSV 批量导入
"""
from sqlalchemy.exc import OperationalError

from app.core.config import settings
from app.models import Onsen
from app.services.csv_import_service import import_onsens_csv


def _csv(text: str) -> bytes:
    return text.encode("utf-8")


def test_valid_row_is_imported(db):
    result = import_onsens_csv(db, _csv("name,geo_lat,geo_lng,description,tags\nテスト温泉,35.0,133.0,説明,タグ1"))

    assert result.error is None
    assert result.imported == 1
    assert result.skipped == 0
    assert [r.success for r in result.results] == [True]
    assert result.results[0].row == 2

    onsen = db.query(Onsen).one()
    assert result.results[0].onsen_id == onsen.id
    assert (onsen.name, onsen.geo_lat, onsen.geo_lng, onsen.description, onsen.tags) == (
        "テスト温泉", 35.0, 133.0, "説明", "タグ1"
    )


def test_row_missing_required_field_is_skipped(db):
    content = _csv(
        "name,geo_lat,geo_lng,description,tags\n"
        "玉造温泉,35.4167,133.0167,美肌の湯,\"美肌,露天風呂\"\n"
        ",35.0,133.0,名前なし,\n"
    )
    result = import_onsens_csv(db, content)

    assert sum(1 for r in result.results if r.success) == 1
    assert result.skipped == 1
    skipped = [r for r in result.results if not r.success][0]
    assert skipped.row == 3
    assert "Name can't be blank" in skipped.errors
    assert db.query(Onsen).one().tags == "美肌,露天風呂"


def test_invalid_coordinates_are_reported_per_row(db):
    result = import_onsens_csv(db, _csv("name,geo_lat,geo_lng\nA,north,133.0\nB,35.0,133.0\n"))
    assert result.imported == 1
    assert result.results[0].errors == ["Geo lat is not a number"]


def test_optional_columns_may_be_absent_and_extra_columns_ignored(db):
    result = import_onsens_csv(db, _csv("geo_lng,name,geo_lat,memo\n133.0,A,35.0,ignored\n"))
    assert result.imported == 1
    assert db.query(Onsen).one().description is None


def test_utf8_bom_is_accepted(db):
    result = import_onsens_csv(db, "name,geo_lat,geo_lng\nA,35.0,133.0\n".encode("utf-8-sig"))
    assert result.error is None
    assert result.imported == 1


def test_missing_headers_abort_import(db):
    result = import_onsens_csv(db, _csv("name,lat,lng\nA,35.0,133.0\n"))
    assert result.error == "Missing required headers: geo_lat, geo_lng"
    assert result.results == []
    assert result.skipped == 0
    assert db.query(Onsen).count() == 0


def test_empty_file_aborts_import(db):
    result = import_onsens_csv(db, b"")
    assert result.error.startswith("Missing required headers")


def test_invalid_encoding_aborts_import(db):
    content = "name,geo_lat,geo_lng\n玉造温泉,35.0,133.0\n".encode("shift_jis")
    result = import_onsens_csv(db, content)
    assert result.error.startswith("File is not valid UTF-8")
    assert db.query(Onsen).count() == 0


def test_file_too_large_aborts_import(db, monkeypatch):
    monkeypatch.setattr(settings, "CSV_MAX_FILE_BYTES", 10)
    result = import_onsens_csv(db, _csv("name,geo_lat,geo_lng\nA,35.0,133.0\n"))
    assert result.error.startswith("File is too large")


def test_database_error_rolls_back_every_row(db, monkeypatch):
    def _fail():
        raise OperationalError("COMMIT", {}, Exception("disk I/O error"))

    monkeypatch.setattr(db, "commit", _fail)
    result = import_onsens_csv(db, _csv("name,geo_lat,geo_lng\nA,35.0,133.0\nB,35.1,133.1\n"))

    assert result.error is not None
    assert result.results == []
    monkeypatch.undo()
    assert db.query(Onsen).count() == 0


def test_result_message():
    from app.schemas.csv_import import CsvImportResult

    assert CsvImportResult(imported=2).message == "CSV import complete: 2 onsens imported"
    assert CsvImportResult(imported=1, skipped=1).message == "Import complete: 1 imported, 1 skipped"
    assert CsvImportResult(error="boom").message == "CSV import failed: boom"


def test_malformed_csv_aborts_import(db):
    content = _csv("name,geo_lat,geo_lng\nA,35.0,133.0\nB,35.1,133.1,extra,fields\n")
    result = import_onsens_csv(db, content)

    assert result.error.startswith("CSV is malformed")
    assert result.imported == 0
    assert db.query(Onsen).count() == 0


def test_short_rows_leave_optional_columns_empty(db):
    result = import_onsens_csv(db, _csv("name,geo_lat,geo_lng,description,tags\nA,35.0,133.0\n"))

    assert result.error is None
    onsen = db.query(Onsen).one()
    assert (onsen.description, onsen.tags) == (None, None)
