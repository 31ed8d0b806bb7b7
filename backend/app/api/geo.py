"""
地理信息查询 API：郵便番号 → 住所、住所 ↔ 坐标

外部 API 失败时返回 null，不会报错。
"""
from fastapi import APIRouter, Query

from app.services.address_service import address_service
from app.services.geocoding_service import geocoding_service

router = APIRouter()


@router.get("/zipcode/{zipcode}")
def lookup_zipcode(zipcode: str):
    """郵便番号（例如 690-0887）→ 住所"""
    return {"zipcode": zipcode, "address": address_service.lookup_by_zipcode(zipcode)}


@router.get("/zipcode/{zipcode}/latlng")
def lookup_zipcode_latlng(zipcode: str):
    return {"zipcode": zipcode, "result": geocoding_service.latlng_from_zip(zipcode)}


@router.get("/geocode")
def geocode(address: str = Query(..., description="住所或地名")):
    """住所 → {lat, lng, accuracy}"""
    normalized = address_service.normalize_address(address)
    return {"address": normalized, "result": geocoding_service.geocode(normalized)}


@router.get("/reverse")
def reverse_geocode(lat: float = Query(...), lng: float = Query(...)):
    return {"lat": lat, "lng": lng, "address": geocoding_service.reverse_geocode(lat, lng)}
