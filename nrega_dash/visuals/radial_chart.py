"""Stacked two-segment ring for completed vs. ongoing works."""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from ..core.enums import Segment
from ..core.logging_config import get_logger
from ..i18n.resolver import LabelResolver
from .geometry import RatioSegments, format_number, half_up_round

logger = get_logger(__name__)

RING_MARGIN = 12
STROKE_WIDTH = 20
HALO_GAP = 4
NO_DATA = "—"


@dataclass(frozen=True)
class Arc:
    """A circle stroked with one dash, i.e. an arc of ``dash_length``.

    Angles are clockwise from 12 o'clock, matching the ring after its
    -90 degree rotation.
    """

    segment: Segment | None
    cx: float
    cy: float
    radius: float
    stroke_width: float
    dash_length: float
    circumference: float
    dash_offset: float = 0.0

    @property
    def dash_array(self) -> str:
        return f"{self.dash_length:.4f} {self.circumference:.4f}"

    @property
    def start_angle(self) -> float:
        if self.circumference == 0:
            return 0.0
        return -self.dash_offset / self.circumference * 360

    @property
    def sweep(self) -> float:
        if self.circumference == 0:
            return 0.0
        return self.dash_length / self.circumference * 360

    def coordinates(self) -> Iterator[float]:
        yield from (self.cx, self.cy, self.radius, self.dash_length, self.circumference, self.dash_offset)


@dataclass(frozen=True)
class LegendRow:
    segment: Segment
    title: str
    value: float
    percentage: int

    @property
    def display_value(self) -> str:
        return format_number(self.value)


@dataclass(frozen=True)
class RadialChart:
    size: float
    segments: RatioSegments
    radius: float
    circumference: float
    track: Arc
    halo: Arc
    arcs: tuple[Arc, ...]
    center_label: str
    caption: str
    detail: str
    legend: tuple[LegendRow, ...]
    total_title: str

    @property
    def cx(self) -> float:
        return self.size / 2

    @property
    def cy(self) -> float:
        return self.size / 2

    @property
    def view_box(self) -> str:
        return f"0 0 {format_number(self.size)} {format_number(self.size)}"

    @property
    def total_display(self) -> str:
        return format_number(self.segments.total)

    def coordinates(self) -> Iterator[float]:
        for arc in (self.track, self.halo, *self.arcs):
            yield from arc.coordinates()


class RatioRadialRenderer:
    def __init__(self, resolver: LabelResolver):
        self.resolver = resolver

    def render(self, completed: Any, ongoing: Any, size: float = 200) -> RadialChart:
        segments = RatioSegments.from_counts(completed, ongoing)
        radius = max(0.0, size / 2 - RING_MARGIN)
        circumference = 2 * math.pi * radius
        cx = cy = size / 2

        def arc(segment: Segment | None, length: float, offset: float = 0.0) -> Arc:
            return Arc(segment, cx, cy, radius, STROKE_WIDTH, length, circumference, offset)

        halo_circumference = 2 * math.pi * (radius + HALO_GAP)

        arcs = []
        if segments.completed_fraction > 0:
            arcs.append(arc(Segment.COMPLETED, circumference * segments.completed_fraction))
        if segments.ongoing_fraction > 0:
            # Starts exactly where the completed arc ends
            arcs.append(
                arc(
                    Segment.ONGOING,
                    circumference * segments.ongoing_fraction,
                    -circumference * segments.completed_fraction,
                )
            )

        if segments.total > 0:
            center_label = f"{half_up_round(segments.completed_fraction * 100)}%"
        else:
            center_label = NO_DATA

        works = self.resolver.resolve_tolerant("works", "works")
        chart = RadialChart(
            size=size,
            segments=segments,
            radius=radius,
            circumference=circumference,
            track=arc(None, circumference),
            halo=Arc(None, cx, cy, radius + HALO_GAP, 1, halo_circumference, halo_circumference),
            arcs=tuple(arcs),
            center_label=center_label,
            caption=self.resolver.resolve_strict(Segment.COMPLETED.value),
            detail=f"{format_number(segments.completed)}/{format_number(segments.total)} {works}",
            legend=self.legend(segments),
            total_title=self.resolver.resolve_tolerant("totalWorks", "Total Works"),
        )
        logger.debug(
            "Rendered radial chart",
            extra={
                "completed": segments.completed,
                "ongoing": segments.ongoing,
                "locale": self.resolver.code,
            },
        )
        return chart

    def legend(self, segments: RatioSegments) -> tuple[LegendRow, ...]:
        """Legend rows with independently rounded percentages."""
        return tuple(
            LegendRow(
                segment=segment,
                title=self.resolver.resolve_strict(segment.value),
                value=value,
                percentage=segments.percentage_of(value),
            )
            for segment, value in (
                (Segment.COMPLETED, segments.completed),
                (Segment.ONGOING, segments.ongoing),
            )
        )
