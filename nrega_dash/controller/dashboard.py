"""Performance loading for the selected district."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass

from ..core.config import DEFAULT_MONTHS
from ..core.enums import MessageKey
from ..core.errors import DataFetchError, message_key_for
from ..core.logging_config import get_logger
from ..core.models import PerformanceRecord
from ..services.api import DataService
from .tracking import RequestTracker

logger = get_logger(__name__)


@dataclass(frozen=True)
class DashboardView:
    district: str | None = None
    loading: bool = False
    record: PerformanceRecord | None = None
    error_key: MessageKey | None = None

    @property
    def ready(self) -> bool:
        """True when the charts may be drawn."""
        return self.record is not None and self.error_key is None and not self.loading


class DashboardController:
    """Fetch performance data with latest-request-wins semantics.

    ``load`` returns ``None`` when its response arrived after a newer ``load``
    or after ``teardown``; ``view`` is left untouched in that case.
    """

    def __init__(self, service: DataService, months: int = DEFAULT_MONTHS):
        self.service = service
        self.months = months
        self.view = DashboardView()
        self._requests = RequestTracker()

    async def load(self, district: str) -> DashboardView | None:
        token = self._requests.issue()
        self.view = DashboardView(district=district, loading=True)

        try:
            record = await asyncio.to_thread(self.service.get_performance, district, self.months)
        except DataFetchError as e:
            if not self._requests.is_current(token):
                return None
            logger.warning(
                "Performance fetch failed", extra={"district": district, "error": str(e)}
            )
            self.view = DashboardView(district=district, error_key=message_key_for(e))
            return self.view

        if not self._requests.is_current(token):
            logger.debug("Discarding stale performance response", extra={"district": district})
            return None

        self.view = DashboardView(district=district, record=record)
        logger.info(
            "Loaded performance data",
            extra={"district": district, "points": len(record.timeseries)},
        )
        return self.view

    def teardown(self) -> None:
        self._requests.teardown()
