"""
郵便番号 → 住所 查询服务（zipcloud API，无需认证）

所有失败（超时、非 2xx、JSON 解析失败、无结果）都记录日志并返回 None。
"""
import logging
import re
from typing import Iterable, List, Optional

import requests

from app.core.config import settings

logger = logging.getLogger(__name__)

_FULLWIDTH_DIGITS = str.maketrans("０１２３４５６７８９", "0123456789")
_ADDRESS_TRANSLATION = str.maketrans({
    **{chr(0xFF10 + i): str(i) for i in range(10)},
    "－": "-",
    "−": "-",
    "　": " ",
})


class AddressService:
    """郵便番号查询"""

    def __init__(self, api_base: Optional[str] = None, timeout: Optional[int] = None):
        self.api_base = api_base or settings.ZIPCLOUD_API_BASE
        self.timeout = timeout or settings.ZIPCLOUD_TIMEOUT_SECONDS

    def lookup_by_zipcode(self, zipcode) -> Optional[str]:
        """
        郵便番号（7 位，可含连字符 / 全角数字）→ "都道府県+市区町村+町域"

        Returns:
            住所字符串；查询失败或无结果时为 None
        """
        if zipcode is None or not str(zipcode).strip():
            return None

        normalized = self.normalize_zipcode(zipcode)
        if not re.fullmatch(r"\d{7}", normalized):
            return None

        try:
            response = requests.get(
                self.api_base,
                params={"zipcode": normalized},
                timeout=self.timeout,
            )
            if not response.ok:
                self._log_api_error("HTTP Error", zipcode, f"Status: {response.status_code}")
                return None

            data = response.json()
            results = data.get("results") if isinstance(data, dict) else None
            if not isinstance(results, list) or not results:
                self._log_api_error("No results found", zipcode, repr(data))
                return None

            return self._build_full_address(results[0])
        except requests.Timeout as e:
            self._log_api_error("Timeout Error", zipcode, str(e))
            return None
        except ValueError as e:
            self._log_api_error("JSON Parse Error", zipcode, str(e))
            return None
        except Exception as e:
            self._log_api_error("Unexpected Error", zipcode, str(e))
            return None

    def batch_lookup(self, zipcodes: Optional[Iterable]) -> List[Optional[str]]:
        if not zipcodes:
            return []
        return [self.lookup_by_zipcode(z) for z in zipcodes]

    @staticmethod
    def normalize_zipcode(zipcode) -> str:
        text = str(zipcode).translate(_FULLWIDTH_DIGITS)
        return re.sub(r"[^0-9]", "", text)

    @staticmethod
    def normalize_address(address: Optional[str]) -> str:
        """全角数字 / 连字符 / 空格 → 半角，并去除首尾空白"""
        if not address:
            return ""
        return address.translate(_ADDRESS_TRANSLATION).strip()

    @staticmethod
    def _build_full_address(result: dict) -> Optional[str]:
        prefecture = result.get("address1")  # 都道府県
        city = result.get("address2")  # 市区町村
        town = result.get("address3")  # 町域
        if not prefecture or not city:
            return None
        return f"{prefecture}{city}{town or ''}"

    @staticmethod
    def _log_api_error(error_type: str, zipcode, details: str) -> None:
        logger.warning("[AddressService] %s: zipcode=%s, details=%s", error_type, zipcode, details)


address_service = AddressService()
