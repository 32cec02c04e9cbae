from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from ..core.enums import TextAnchor


@dataclass(frozen=True)
class Line:
    x1: float
    y1: float
    x2: float
    y2: float
    css_class: str = ""

    def coordinates(self) -> Iterator[float]:
        yield from (self.x1, self.y1, self.x2, self.y2)


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float
    css_class: str = ""

    def coordinates(self) -> Iterator[float]:
        yield from (self.x, self.y, self.width, self.height)


@dataclass(frozen=True)
class Text:
    x: float
    y: float
    content: str
    anchor: TextAnchor = TextAnchor.MIDDLE
    css_class: str = ""
    rotation: float | None = None
    hidden: bool = False

    def coordinates(self) -> Iterator[float]:
        yield from (self.x, self.y)
