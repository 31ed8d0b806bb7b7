"""
校验错误格式化

把 Pydantic 的错误列表转换为面向用户的完整提示语，
请求体、表单与 CSV 行校验共用同一套文案。
"""
from typing import Any, Dict, Iterable, List

from pydantic_core import PydanticCustomError

BLANK_ERROR = "blank"

# 字段显示名，未登记的字段按 snake_case 自动转换
FIELD_LABELS: Dict[str, str] = {
    "geo_lat": "Geo lat",
    "geo_lng": "Geo lng",
}


def blank_error() -> PydanticCustomError:
    return PydanticCustomError(BLANK_ERROR, "can't be blank")


def field_label(field: str) -> str:
    if field in FIELD_LABELS:
        return FIELD_LABELS[field]
    return field.replace("_", " ").capitalize()


def _field_of(loc: Iterable[Any]) -> str:
    # loc 可能是 ("body", "name") / ("query", "lat") / ("name",)
    names = [str(part) for part in loc if isinstance(part, str) and part not in ("body", "query", "path", "form")]
    return names[-1] if names else ""


def _message_for(error: Dict[str, Any]) -> str:
    etype = error.get("type", "")
    ctx = error.get("ctx") or {}
    if etype in ("missing", BLANK_ERROR):
        return "can't be blank"
    if etype in ("float_parsing", "float_type", "decimal_parsing", "finite_number"):
        return "is not a number"
    if etype in ("int_parsing", "int_type", "int_from_float"):
        return "is not an integer"
    if etype == "string_too_long":
        return f"is too long (maximum is {ctx.get('max_length')} characters)"
    if etype == "greater_than_equal":
        return f"must be greater than or equal to {ctx.get('ge')}"
    if etype == "less_than_equal":
        return f"must be less than or equal to {ctx.get('le')}"
    if etype in ("greater_than", "less_than"):
        return error.get("msg", "is out of range")
    return error.get("msg", "is invalid")


def format_validation_errors(errors: Iterable[Dict[str, Any]]) -> List[str]:
    """将 Pydantic 错误转换为 "Name can't be blank" 形式的消息列表"""
    messages = []
    for error in errors:
        field = _field_of(error.get("loc", ()))
        message = _message_for(error)
        full = f"{field_label(field)} {message}" if field else message
        if full not in messages:
            messages.append(full)
    return messages
