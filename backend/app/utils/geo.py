"""
地理计算工具：Haversine 距离、矩形范围、检索半径限制
"""
import math
from typing import NamedTuple

EARTH_RADIUS_KM = 6371.0
KM_PER_DEGREE_LAT = 111.0


class BoundingBox(NamedTuple):
    min_lat: float
    max_lat: float
    min_lng: float
    max_lng: float


def _to_float(value) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


def _valid_coordinates(*coords: float) -> bool:
    if any(math.isnan(c) or math.isinf(c) for c in coords):
        return False
    lat1, lng1, lat2, lng2 = coords
    if not (-90.0 <= lat1 <= 90.0 and -90.0 <= lat2 <= 90.0):
        return False
    return -180.0 <= lng1 <= 180.0 and -180.0 <= lng2 <= 180.0


def distance_km(lat1, lng1, lat2, lng2) -> float:
    """
    计算两点间的大圆距离（km，保留 3 位小数）

    坐标无法转换为数值、为 NaN/无穷或超出经纬度范围时返回 math.inf，
    不抛出异常，调用方按"距离无限远"处理即可。
    """
    coords = [_to_float(v) for v in (lat1, lng1, lat2, lng2)]
    if not _valid_coordinates(*coords):
        return math.inf

    lat1_rad, lng1_rad, lat2_rad, lng2_rad = (math.radians(c) for c in coords)
    dlat = lat2_rad - lat1_rad
    dlng = lng2_rad - lng1_rad

    a = math.sin(dlat / 2) ** 2 + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(dlng / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return round(EARTH_RADIUS_KM * c, 3)


def within_range(lat1, lng1, lat2, lng2, max_distance_km) -> bool:
    distance = distance_km(lat1, lng1, lat2, lng2)
    if math.isinf(distance):
        return False
    return distance <= float(max_distance_km)


def bounding_box(lat: float, lng: float, radius_km: float) -> BoundingBox:
    """以 (lat, lng) 为中心、覆盖 radius_km 圆的粗略矩形"""
    lat_delta = radius_km / KM_PER_DEGREE_LAT
    cos_lat = math.cos(math.radians(lat))
    if cos_lat < 1e-9:
        # 极点附近经度方向没有意义，取全部经度
        return BoundingBox(lat - lat_delta, lat + lat_delta, -180.0, 180.0)
    lng_delta = radius_km / (KM_PER_DEGREE_LAT * cos_lat)
    min_lng, max_lng = lng - lng_delta, lng + lng_delta
    if min_lng < -180.0 or max_lng > 180.0:
        # 跨越 180 度经线时无法用单一区间表示，取全部经度
        min_lng, max_lng = -180.0, 180.0
    return BoundingBox(lat - lat_delta, lat + lat_delta, min_lng, max_lng)


def clamp_radius(radius_km: float, min_km: float = 1.0, max_km: float = 50.0) -> float:
    return max(min(float(radius_km), max_km), min_km)
