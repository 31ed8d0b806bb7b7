"""
Google Geocoding API 封装

- geocode: 住所 → {lat, lng, accuracy}
- reverse_geocode: 坐标 → 住所
- latlng_from_zip: 郵便番号 → 住所 → 坐标

未配置 GOOGLE_MAPS_API_KEY、超时、非 2xx、status != OK 等情况一律记录日志并返回 None。
"""
import logging
import math
import time
from typing import Dict, Iterable, List, Optional

import requests

from app.core.config import settings
from app.services.address_service import address_service

logger = logging.getLogger(__name__)

# location_type 精度排序（数值越小越精确）
ACCURACY_LEVELS: Dict[str, int] = {
    "ROOFTOP": 1,
    "RANGE_INTERPOLATED": 2,
    "GEOMETRIC_CENTER": 3,
    "APPROXIMATE": 4,
}


class GeocodingService:
    """Google Geocoding API 客户端"""

    def __init__(self, api_key: Optional[str] = None, api_base: Optional[str] = None, timeout: Optional[int] = None):
        self._api_key = api_key
        self.api_base = api_base or settings.GOOGLE_GEOCODING_API_BASE
        self.timeout = timeout or settings.GEOCODING_TIMEOUT_SECONDS

    @property
    def api_key(self) -> Optional[str]:
        key = self._api_key if self._api_key is not None else settings.GOOGLE_MAPS_API_KEY
        if not key:
            logger.warning("[GeocodingService] GOOGLE_MAPS_API_KEY is not configured")
            return None
        return key

    def geocode(self, address: Optional[str]) -> Optional[Dict]:
        if not address or not address.strip():
            return None
        api_key = self.api_key
        if not api_key:
            return None

        params = {"address": address, "key": api_key, "language": "ja", "region": "jp"}
        data = self._request(params, address)
        if data is None:
            return None

        results = data.get("results") or []
        if not results:
            return None
        geometry = results[0].get("geometry") or {}
        location = geometry.get("location") or {}
        try:
            return {
                "lat": float(location["lat"]),
                "lng": float(location["lng"]),
                "accuracy": geometry.get("location_type") or "UNKNOWN",
            }
        except (KeyError, TypeError, ValueError) as e:
            self._log_api_error("Malformed Result", address, str(e))
            return None

    def reverse_geocode(self, latitude, longitude) -> Optional[str]:
        if not self._valid_coordinates(latitude, longitude):
            return None
        api_key = self.api_key
        if not api_key:
            return None

        latlng = f"{latitude},{longitude}"
        params = {"latlng": latlng, "key": api_key, "language": "ja", "region": "jp"}
        data = self._request(params, latlng)
        if data is None:
            return None

        results = data.get("results") or []
        if not results:
            return None
        return results[0].get("formatted_address")

    def batch_geocode(self, addresses: Optional[Iterable[str]], delay_ms: int = 100) -> List[Optional[Dict]]:
        """逐个地理编码，两次请求之间暂停 delay_ms 毫秒以避免触发限流"""
        if not addresses:
            return []
        results = []
        for index, address in enumerate(addresses):
            if index > 0 and delay_ms > 0:
                time.sleep(delay_ms / 1000.0)
            results.append(self.geocode(address))
        return results

    def latlng_from_zip(self, zipcode) -> Optional[Dict]:
        address = address_service.lookup_by_zipcode(zipcode)
        if not address:
            return None
        return self.geocode(address)

    def _request(self, params: Dict, input_value: str) -> Optional[Dict]:
        try:
            response = requests.get(self.api_base, params=params, timeout=self.timeout)
            if not response.ok:
                self._log_api_error("HTTP Error", input_value, f"Status: {response.status_code}")
                return None
            data = response.json()
            if not isinstance(data, dict) or data.get("status") != "OK":
                status = data.get("status") if isinstance(data, dict) else None
                self._log_api_error("API Status Error", input_value, f"Status: {status}")
                return None
            return data
        except requests.Timeout as e:
            self._log_api_error("Timeout Error", input_value, str(e))
            return None
        except ValueError as e:
            self._log_api_error("JSON Parse Error", input_value, str(e))
            return None
        except Exception as e:
            self._log_api_error("Unexpected Error", input_value, str(e))
            return None

    @staticmethod
    def _valid_coordinates(latitude, longitude) -> bool:
        try:
            lat = float(latitude)
            lng = float(longitude)
        except (TypeError, ValueError):
            return False
        if not (math.isfinite(lat) and math.isfinite(lng)):
            return False
        return -90.0 <= lat <= 90.0 and -180.0 <= lng <= 180.0

    @staticmethod
    def _log_api_error(error_type: str, input_value, details: str) -> None:
        logger.warning("[GeocodingService] %s: input=%s, details=%s", error_type, input_value, details)


geocoding_service = GeocodingService()
