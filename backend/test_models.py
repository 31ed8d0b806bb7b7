"""
温泉 / 评价的校验规则与关联
"""
import pytest
from pydantic import ValidationError

from app.models import Onsen, Review
from app.schemas.onsen import OnsenCreate
from app.schemas.review import ReviewCreate
from app.schemas.validation import format_validation_errors


def _errors(schema, data):
    with pytest.raises(ValidationError) as exc_info:
        schema.model_validate(data)
    return format_validation_errors(exc_info.value.errors())


def test_valid_onsen():
    onsen = OnsenCreate.model_validate({"name": "テスト温泉", "geo_lat": "35.0", "geo_lng": 133})
    assert onsen.geo_lat == 35.0
    assert onsen.description is None


@pytest.mark.parametrize("field", ["name", "geo_lat", "geo_lng"])
def test_onsen_required_fields(field):
    data = {"name": "テスト温泉", "geo_lat": 35.0, "geo_lng": 133.0}
    data[field] = None
    errors = _errors(OnsenCreate, data)
    assert len(errors) == 1
    assert errors[0].endswith("can't be blank")


def test_onsen_missing_and_blank_name():
    assert _errors(OnsenCreate, {"geo_lat": 35.0, "geo_lng": 133.0}) == ["Name can't be blank"]
    assert _errors(OnsenCreate, {"name": "   ", "geo_lat": 35.0, "geo_lng": 133.0}) == ["Name can't be blank"]


def test_onsen_coordinates_must_be_numeric():
    errors = _errors(OnsenCreate, {"name": "x", "geo_lat": "north", "geo_lng": "nan"})
    assert errors == ["Geo lat is not a number", "Geo lng is not a number"]


def test_onsen_length_limits():
    base = {"name": "x", "geo_lat": 35.0, "geo_lng": 133.0}
    assert _errors(OnsenCreate, {**base, "name": "あ" * 101}) == ["Name is too long (maximum is 100 characters)"]
    assert _errors(OnsenCreate, {**base, "description": "a" * 1001}) == [
        "Description is too long (maximum is 1000 characters)"
    ]
    assert _errors(OnsenCreate, {**base, "tags": "a" * 256}) == ["Tags is too long (maximum is 255 characters)"]
    OnsenCreate.model_validate({**base, "name": "あ" * 100, "description": "a" * 1000, "tags": "a" * 255})


def test_onsen_blank_optional_fields_become_none():
    onsen = OnsenCreate.model_validate({"name": "x", "geo_lat": 35, "geo_lng": 133, "description": " ", "tags": ""})
    assert onsen.description is None
    assert onsen.tags is None


@pytest.mark.parametrize("rating", [1, 2, 3, 4, 5, "4"])
def test_review_rating_in_range_is_valid(rating):
    assert 1 <= ReviewCreate.model_validate({"rating": rating}).rating <= 5


@pytest.mark.parametrize("rating", [0, 6, -1])
def test_review_rating_out_of_range_is_invalid(rating):
    assert _errors(ReviewCreate, {"rating": rating}) == ["Rating must be between 1 and 5"]


def test_review_rating_is_required():
    assert _errors(ReviewCreate, {"rating": None}) == ["Rating can't be blank"]
    assert _errors(ReviewCreate, {"rating": ""}) == ["Rating can't be blank"]
    assert _errors(ReviewCreate, {}) == ["Rating can't be blank"]


def test_review_comment_limit():
    assert _errors(ReviewCreate, {"rating": 3, "comment": "あ" * 501}) == [
        "Comment is too long (maximum is 500 characters)"
    ]
    assert ReviewCreate.model_validate({"rating": 3, "comment": "あ" * 500}).comment == "あ" * 500


def test_deleting_onsen_cascades_to_reviews(db, make_onsen):
    onsen = make_onsen(reviews=[3, 4])
    other = make_onsen(name="別の温泉", reviews=[5])
    assert db.query(Review).count() == 3

    db.delete(onsen)
    db.commit()

    assert db.query(Onsen).count() == 1
    remaining = db.query(Review).all()
    assert [r.onsen_id for r in remaining] == [other.id]


def test_average_rating(make_onsen):
    assert make_onsen().average_rating == 0
    assert make_onsen(reviews=[4, 5]).average_rating == 5
    assert make_onsen(reviews=[1, 2, 2]).average_rating == 2


def test_tag_list(make_onsen):
    assert make_onsen(tags=" 美肌, ,露天風呂 ").tag_list == ["美肌", "露天風呂"]
    assert make_onsen().tag_list == []
