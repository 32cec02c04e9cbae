"""PNG export of chart geometry using matplotlib.

The exporter draws the already-computed geometry in the chart's own logical
coordinate space (y grows downward, as in SVG), so the PNG and the SVG come
from the same numbers. Hover-only value labels are not drawn.
"""

from __future__ import annotations

import base64
from io import BytesIO
from pathlib import Path

import matplotlib
import matplotlib.pyplot as plt
import numpy as np
from matplotlib.patches import Rectangle, Wedge

from ..core.enums import Segment, TextAnchor
from ..core.logging_config import get_logger
from .bar_chart import BarChart
from .radial_chart import RadialChart
from .shapes import Line, Text

# Use non-interactive backend for server environments
matplotlib.use("Agg")

logger = get_logger(__name__)

COLORS = {
    "bar": "#2563eb",
    "grid": "#e2e8f0",
    "axis": "#cbd5e1",
    "tick": "#64748b",
    "label": "#475569",
    "track": "#f1f5f9",
    Segment.COMPLETED: "#10b981",
    Segment.ONGOING: "#3b82f6",
}

_HA = {TextAnchor.START: "left", TextAnchor.MIDDLE: "center", TextAnchor.END: "right"}


class RasterExporter:
    """Render chart geometry to PNG files and/or base64 strings."""

    def __init__(self, output_dir: Path | None = None, dpi: int = 100):
        """Initialize the exporter.

        Args:
            output_dir: Directory for PNG files. If None, only base64 is returned.
            dpi: Pixels per inch; one logical unit maps to one pixel at 100 dpi.
        """
        self.output_dir = output_dir
        self.dpi = dpi
        if output_dir:
            output_dir.mkdir(parents=True, exist_ok=True)

    def export_bar_chart(self, chart: BarChart, name: str = "bar_chart") -> dict[str, str]:
        fig, ax = self._canvas(chart.width, chart.height)

        for line in chart.gridlines:
            self._line(ax, line, COLORS["grid"], 1.0, linestyle=(0, (2, 2)))
        for line in chart.axes:
            self._line(ax, line, COLORS["axis"], 1.5)
        for bar in chart.bars:
            r = bar.rect
            ax.add_patch(Rectangle((r.x, r.y), r.width, r.height, facecolor=COLORS["bar"]))
        for tick in (*chart.y_ticks, *chart.x_ticks):
            if tick.mark is not None:
                self._line(ax, tick.mark, COLORS["tick"], 1.0)
            self._text(ax, tick.label, 8, COLORS["label"])
        for title in chart.axis_titles:
            self._text(ax, title, 9, COLORS["tick"], weight="bold")

        return self._save_chart(fig, name)

    def export_radial_chart(self, chart: RadialChart, name: str = "radial_chart") -> dict[str, str]:
        fig, ax = self._canvas(chart.size, chart.size)
        center = (chart.cx, chart.cy)
        width = chart.track.stroke_width
        outer = chart.radius + width / 2

        ax.add_patch(Wedge(center, outer, 0, 360, width=width, facecolor=COLORS["track"]))

        # With the y axis inverted, increasing data angles run clockwise on
        # screen; -90 puts the start at 12 o'clock.
        starts = np.array([a.start_angle for a in chart.arcs], dtype=float) - 90.0
        ends = starts + np.array([a.sweep for a in chart.arcs], dtype=float)
        for arc, theta1, theta2 in zip(chart.arcs, starts, ends, strict=True):
            ax.add_patch(
                Wedge(center, outer, float(theta1), float(theta2), width=width,
                      facecolor=COLORS[arc.segment])
            )

        ax.text(chart.cx, chart.cy - 8, chart.center_label, ha="center", va="center",
                fontsize=18, fontweight="bold", color="#1e293b")
        ax.text(chart.cx, chart.cy + 14, chart.caption, ha="center", va="center",
                fontsize=8, color=COLORS["tick"])
        ax.text(chart.cx, chart.cy + 28, chart.detail, ha="center", va="center",
                fontsize=7, color="#94a3b8")

        return self._save_chart(fig, name)

    def _canvas(self, width: float, height: float) -> tuple[plt.Figure, plt.Axes]:
        fig = plt.figure(figsize=(width / self.dpi, height / self.dpi), dpi=self.dpi)
        ax = fig.add_axes((0, 0, 1, 1))
        ax.set_xlim(0, width)
        ax.set_ylim(height, 0)
        ax.set_aspect("equal")
        ax.axis("off")
        return fig, ax

    @staticmethod
    def _line(ax: plt.Axes, line: Line, color: str, width: float, linestyle: object = "-") -> None:
        ax.plot([line.x1, line.x2], [line.y1, line.y2], color=color, linewidth=width,
                linestyle=linestyle)

    @staticmethod
    def _text(ax: plt.Axes, text: Text, size: int, color: str, weight: str = "normal") -> None:
        # SVG rotations are clockwise on screen, matplotlib's counter-clockwise
        rotation = -text.rotation if text.rotation else 0
        ax.text(text.x, text.y, text.content, ha=_HA[text.anchor], va="baseline",
                fontsize=size, color=color, fontweight=weight, rotation=rotation,
                rotation_mode="anchor")

    def _save_chart(self, fig: plt.Figure, filename: str) -> dict[str, str]:
        """Save chart to file and/or encode as base64.

        Returns:
            Dict with 'path' (if output_dir set) and 'base64' keys
        """
        result = {}

        try:
            if self.output_dir:
                filepath = self.output_dir / f"{filename}.png"
                try:
                    fig.savefig(filepath, dpi=self.dpi, format="png")
                    result["path"] = str(filepath)
                    logger.debug(f"Chart saved to {filepath}")
                except (OSError, ValueError) as e:
                    logger.warning(f"Failed to save chart to {filepath}: {e}")

            try:
                buffer = BytesIO()
                fig.savefig(buffer, dpi=self.dpi, format="png")
                buffer.seek(0)
                result["base64"] = base64.b64encode(buffer.read()).decode("utf-8")
                buffer.close()
            except (OSError, ValueError) as e:
                logger.warning(f"Failed to generate base64 for chart: {e}")
        finally:
            plt.close(fig)
        return result
