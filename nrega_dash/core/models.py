from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class DataPoint:
    label: str
    value: Any = 0


@dataclass(frozen=True)
class Position:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class GeoLocation:
    state: str | None
    district: str | None
    supported: bool = False

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> GeoLocation:
        return cls(
            state=payload.get("state") or None,
            district=payload.get("district") or None,
            supported=_as_flag(payload.get("supported")),
        )


@dataclass
class PerformanceRecord:
    """Latest-month metrics plus a trailing monthly series for one district."""

    district: str
    latest_month: dict[str, Any] = field(default_factory=dict)
    timeseries: list[DataPoint] = field(default_factory=list)

    MAX_POINTS = 12

    @classmethod
    def from_payload(cls, district: str, payload: Mapping[str, Any]) -> PerformanceRecord:
        """Build a record from a performance response body.

        Raises:
            ValueError: If ``latestMonth`` is not an object or the series is not a list
        """
        latest = payload.get("latestMonth") or {}
        if not isinstance(latest, Mapping):
            raise ValueError(f"latestMonth must be an object, got {type(latest).__name__}")
        # The backend has shipped the series under both names
        series = payload.get("timeseries")
        if series is None:
            series = payload.get("timeseriesDays") or []
        if not isinstance(series, (list, tuple)):
            raise ValueError(f"timeseries must be a list, got {type(series).__name__}")
        points = list(_to_points(series))[-cls.MAX_POINTS:]
        return cls(district=district, latest_month=dict(latest), timeseries=points)

    @property
    def works_completed(self) -> Any:
        return self.latest_month.get("worksCompleted") or 0

    @property
    def works_ongoing(self) -> Any:
        return self.latest_month.get("worksOngoing") or 0


def _to_points(series: Iterable[Any]) -> Iterable[DataPoint]:
    for item in series:
        if isinstance(item, DataPoint):
            yield item
        elif isinstance(item, Mapping):
            label = item.get("label")
            yield DataPoint(label="" if label is None else str(label), value=item.get("value"))


def _as_flag(value: Any) -> bool:
    # JSON booleans, or the string forms some deployments send
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes")
    return value is True or (type(value) is int and value == 1)
