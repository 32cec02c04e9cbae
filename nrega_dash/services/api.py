"""HTTP client for the dashboard data service."""

from __future__ import annotations

from typing import Any, Protocol

import requests

from ..core.errors import DataFetchError
from ..core.logging_config import get_logger
from ..core.models import GeoLocation, PerformanceRecord

logger = get_logger(__name__)


class DataService(Protocol):
    """The three read-only calls the dashboard consumes."""

    def list_districts(self, state_name: str) -> list[str]: ...

    def get_performance(self, district_name: str, month_count: int = 12) -> PerformanceRecord: ...

    def reverse_geocode(self, lat: float, lon: float) -> GeoLocation: ...


class DataServiceClient:
    """``requests`` implementation of ``DataService``.

    Every failure (transport, non-200 status, undecodable or misshapen body)
    surfaces as ``DataFetchError``; callers decide how to degrade.
    """

    def __init__(self, base_url: str, timeout: float = 15.0):
        """Initialize the client.

        Args:
            base_url: Service root, e.g. ``http://localhost:8000/api``
            timeout: Per-request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def list_districts(self, state_name: str) -> list[str]:
        payload = self._get("districts", {"state": state_name})
        if isinstance(payload, dict):
            payload = payload.get("districts")
        if not isinstance(payload, list):
            raise DataFetchError("District list response is not a list")
        return [str(d) for d in payload if d]

    def get_performance(self, district_name: str, month_count: int = 12) -> PerformanceRecord:
        payload = self._get("performance", {"district": district_name, "months": month_count})
        if not isinstance(payload, dict):
            raise DataFetchError("Performance response is not an object")
        try:
            return PerformanceRecord.from_payload(district_name, payload)
        except (TypeError, ValueError) as e:
            logger.warning(
                "Malformed performance response",
                extra={"district": district_name, "error": str(e)},
            )
            raise DataFetchError(f"Malformed performance response: {e}") from e

    def reverse_geocode(self, lat: float, lon: float) -> GeoLocation:
        payload = self._get("locate", {"lat": lat, "lon": lon})
        if not isinstance(payload, dict):
            raise DataFetchError("Locate response is not an object")
        return GeoLocation.from_payload(payload)

    def _get(self, path: str, params: dict[str, Any]) -> Any:
        url = f"{self.base_url}/{path}"
        try:
            resp = requests.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning("Data service request failed", extra={"url": url, "error": str(e)})
            raise DataFetchError(f"Request to {path} failed: {e}") from e

        if resp.status_code != 200:
            logger.warning(
                "Data service returned an error status",
                extra={"url": url, "status": resp.status_code},
            )
            raise DataFetchError(f"{path} returned HTTP {resp.status_code}")

        try:
            payload = resp.json()
        except ValueError as e:
            raise DataFetchError(f"{path} returned invalid JSON") from e

        logger.debug("Data service call succeeded", extra={"url": url, "params": params})
        return payload
