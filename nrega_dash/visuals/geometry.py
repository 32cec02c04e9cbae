"""Canvas arithmetic shared by the chart renderers.

Everything here is a pure function of its inputs. Numeric sanitising happens
once, at the boundary (``sanitize_series`` / ``RatioSegments.from_counts``),
so the geometry code below it only ever sees finite floats.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from ..core.models import DataPoint

CHART_WIDTH = 600
GRID_RATIOS = (0.0, 0.25, 0.5, 0.75, 1.0)
BAR_INSET = 0.1
BAR_FILL = 0.7
MIN_INNER = 1.0


def coerce_number(value: Any) -> float:
    """Coerce anything to a finite float; failures and NaN/inf become 0."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


def half_up_round(value: float) -> int:
    """Round halves toward +inf, as browsers' ``Math.round`` does."""
    return math.floor(value + 0.5)


def format_number(value: float) -> str:
    """Compact display form: ``40`` not ``40.0``, at most two decimals."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.2f}".rstrip("0").rstrip(".")


def sanitize_series(data: Iterable[Any] | None) -> tuple[list[str], list[float]]:
    """Split a data sequence into labels and coerced values, keeping order.

    Accepts ``DataPoint`` objects, ``{"label", "value"}`` mappings or
    ``(label, value)`` pairs; anything else counts as an unlabeled zero.
    """
    labels: list[str] = []
    values: list[float] = []
    for item in data or ():
        if isinstance(item, DataPoint):
            label, raw = item.label, item.value
        elif isinstance(item, Mapping):
            label, raw = item.get("label"), item.get("value")
        elif isinstance(item, (tuple, list)) and len(item) == 2:
            label, raw = item
        else:
            label, raw = "", 0
        labels.append("" if label is None else str(label))
        values.append(coerce_number(raw))
    return labels, values


@dataclass(frozen=True)
class CanvasGeometry:
    width: float
    height: float
    padding: float
    data_count: int

    @property
    def inner_width(self) -> float:
        return max(MIN_INNER, self.width - 2 * self.padding)

    @property
    def inner_height(self) -> float:
        return max(MIN_INNER, self.height - 2 * self.padding)

    @property
    def slot_width(self) -> float:
        if self.data_count > 0:
            return self.inner_width / self.data_count
        return self.inner_width

    @property
    def baseline(self) -> float:
        return self.height - self.padding

    @property
    def right(self) -> float:
        return self.width - self.padding

    @property
    def bar_width(self) -> float:
        return self.slot_width * BAR_FILL

    def bar_x(self, index: int) -> float:
        return self.padding + index * self.slot_width + self.slot_width * BAR_INSET

    def bar_center(self, index: int) -> float:
        return self.bar_x(index) + self.bar_width / 2

    def gridline_y(self, ratio: float) -> float:
        return self.padding + self.inner_height * (1 - ratio)


@dataclass(frozen=True)
class RatioSegments:
    completed: float
    ongoing: float

    @classmethod
    def from_counts(cls, completed: Any, ongoing: Any) -> RatioSegments:
        return cls(
            completed=max(0.0, coerce_number(completed)),
            ongoing=max(0.0, coerce_number(ongoing)),
        )

    @property
    def total(self) -> float:
        return self.completed + self.ongoing

    @property
    def completed_fraction(self) -> float:
        return 0.0 if self.total == 0 else self.completed / self.total

    @property
    def ongoing_fraction(self) -> float:
        return 0.0 if self.total == 0 else self.ongoing / self.total

    def percentage_of(self, value: float) -> int:
        """Independently rounded share of the total; the two shares may not sum to 100."""
        if self.total == 0:
            return 0
        return half_up_round(value / self.total * 100)
