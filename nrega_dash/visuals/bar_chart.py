"""Proportional bar chart geometry."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Any

from ..core.enums import TextAnchor
from ..core.logging_config import get_logger
from ..i18n.resolver import LabelResolver
from .geometry import (
    CHART_WIDTH,
    GRID_RATIOS,
    CanvasGeometry,
    format_number,
    sanitize_series,
)
from .shapes import Line, Rect, Text

logger = get_logger(__name__)

TICK_LENGTH = 4
X_LABEL_OFFSET = 16
Y_LABEL_GAP = 8
VALUE_LABEL_GAP = 6


@dataclass(frozen=True)
class Tick:
    label: Text
    mark: Line | None = None
    index: int | None = None


@dataclass(frozen=True)
class Bar:
    index: int
    label: str
    value: float
    height: float
    rect: Rect
    hover_area: Rect
    value_label: Text


@dataclass(frozen=True)
class BarChart:
    geometry: CanvasGeometry
    max_value: float
    gridlines: tuple[Line, ...]
    axes: tuple[Line, ...]
    y_ticks: tuple[Tick, ...]
    x_ticks: tuple[Tick, ...]
    axis_titles: tuple[Text, ...]
    bars: tuple[Bar, ...]

    @property
    def width(self) -> float:
        return self.geometry.width

    @property
    def height(self) -> float:
        return self.geometry.height

    @property
    def view_box(self) -> str:
        return f"0 0 {format_number(self.width)} {format_number(self.height)}"

    def coordinates(self) -> Iterator[float]:
        """Every numeric coordinate in the drawing."""
        for line in (*self.gridlines, *self.axes):
            yield from line.coordinates()
        for tick in (*self.y_ticks, *self.x_ticks):
            yield from tick.label.coordinates()
            if tick.mark is not None:
                yield from tick.mark.coordinates()
        for title in self.axis_titles:
            yield from title.coordinates()
        for bar in self.bars:
            yield from bar.rect.coordinates()
            yield from bar.hover_area.coordinates()
            yield from bar.value_label.coordinates()


def bar_height(value: float, max_value: float, inner_height: float) -> float:
    """Linear bar height; ``max_value`` is at least 1 so it never divides by zero."""
    return value / max_value * inner_height


def x_tick_indices(count: int) -> list[int]:
    """First, last and (from three points on) the floor midpoint, ascending."""
    if count <= 0:
        return []
    indices = {0, count - 1}
    if count > 2:
        indices.add(count // 2)
    return sorted(indices)


def _anchor_for(index: int, count: int) -> TextAnchor:
    if index == 0:
        return TextAnchor.START
    if index == count - 1:
        return TextAnchor.END
    return TextAnchor.MIDDLE


class BarChartRenderer:
    """Lay out an ordered series as vertical bars on a fixed-width canvas.

    Only the first, last and middle month labels are drawn, and the y axis
    carries just ``0`` and the maximum; the chart is meant for compact inline
    use next to the summary cards.
    """

    def __init__(self, resolver: LabelResolver, width: float = CHART_WIDTH):
        self.resolver = resolver
        self.width = width

    def render(
        self,
        data: Iterable[Any] | None,
        height: float = 200,
        padding: float = 32,
        x_label: str = "",
        y_label: str = "",
    ) -> BarChart:
        labels, values = sanitize_series(data)
        count = len(values)
        geo = CanvasGeometry(width=self.width, height=height, padding=padding, data_count=count)
        max_value = max([1.0, *values])

        if not count:
            logger.debug("No data points, rendering empty bar chart")

        chart = BarChart(
            geometry=geo,
            max_value=max_value,
            gridlines=tuple(
                Line(padding, geo.gridline_y(r), geo.right, geo.gridline_y(r), "grid")
                for r in GRID_RATIOS
            ),
            axes=(
                Line(padding, padding, padding, geo.baseline, "axis"),
                Line(padding, geo.baseline, geo.right, geo.baseline, "axis"),
            ),
            y_ticks=self._y_ticks(geo, max_value),
            x_ticks=self._x_ticks(geo, labels),
            axis_titles=self._axis_titles(geo, x_label, y_label),
            bars=tuple(
                self._bar(geo, i, labels[i], v, max_value) for i, v in enumerate(values)
            ),
        )
        logger.debug(
            "Rendered bar chart",
            extra={"points": count, "max_value": max_value, "locale": self.resolver.code},
        )
        return chart

    def _y_ticks(self, geo: CanvasGeometry, max_value: float) -> tuple[Tick, ...]:
        ticks = []
        for value, y, nudge in ((0.0, geo.baseline, 3), (max_value, geo.padding, -3)):
            ticks.append(
                Tick(
                    label=Text(
                        geo.padding - Y_LABEL_GAP,
                        y + nudge,
                        format_number(value),
                        TextAnchor.END,
                        "tick-label",
                    ),
                    mark=Line(geo.padding - TICK_LENGTH, y, geo.padding, y, "tick"),
                )
            )
        return tuple(ticks)

    def _x_ticks(self, geo: CanvasGeometry, labels: list[str]) -> tuple[Tick, ...]:
        count = len(labels)
        ticks = []
        for i in x_tick_indices(count):
            raw = labels[i]
            cx = geo.bar_center(i)
            boundary = i in (0, count - 1)
            ticks.append(
                Tick(
                    label=Text(
                        cx,
                        geo.baseline + X_LABEL_OFFSET,
                        self.resolver.resolve_tolerant(f"months.{raw}", raw),
                        _anchor_for(i, count),
                        "x-label",
                    ),
                    # The midpoint label is drawn without a tick mark
                    mark=Line(cx, geo.baseline, cx, geo.baseline + TICK_LENGTH, "tick") if boundary else None,
                    index=i,
                )
            )
        return tuple(ticks)

    def _axis_titles(self, geo: CanvasGeometry, x_label: str, y_label: str) -> tuple[Text, ...]:
        titles = []
        if x_label:
            titles.append(Text(geo.width / 2, geo.height - 8, x_label, TextAnchor.MIDDLE, "axis-title"))
        if y_label:
            titles.append(
                Text(16, geo.height / 2, y_label, TextAnchor.MIDDLE, "axis-title", rotation=-90)
            )
        return tuple(titles)

    def _bar(self, geo: CanvasGeometry, index: int, label: str, value: float, max_value: float) -> Bar:
        h = bar_height(value, max_value, geo.inner_height)
        x = geo.bar_x(index)
        # Negative values hang below the baseline with a positive rect height
        top = geo.baseline - h if h >= 0 else geo.baseline
        label_y = top - VALUE_LABEL_GAP if h >= 0 else geo.baseline - h + 2 * VALUE_LABEL_GAP
        return Bar(
            index=index,
            label=label,
            value=value,
            height=h,
            rect=Rect(x, top, geo.bar_width, abs(h), "bar-rect"),
            hover_area=Rect(x, geo.padding, geo.bar_width, geo.inner_height, "bar-hover"),
            value_label=Text(
                geo.bar_center(index),
                label_y,
                format_number(value),
                TextAnchor.MIDDLE,
                "bar-value",
                hidden=True,
            ),
        )
