"""Chart geometry for the district dashboard.

This package turns numeric series into vector geometry. Renderers are
stateless: every call is a pure function of its inputs plus the label
resolver handed to the renderer, and the result is an immutable drawing that
``nrega_dash.render`` serialises to SVG and ``RasterExporter`` rasterises to PNG.

Main Components:
    - BarChartRenderer: ordered labelled values as proportional bars
    - RatioRadialRenderer: completed vs. ongoing as a stacked two-segment ring
    - CanvasGeometry / RatioSegments: the arithmetic both renderers share
    - RasterExporter: matplotlib PNG / base64 output of the same geometry

Usage:
    from nrega_dash.i18n import default_catalog
    from nrega_dash.visuals import BarChartRenderer

    resolver = default_catalog().resolver("hi")
    chart = BarChartRenderer(resolver).render(
        [{"label": "April", "value": 12}, {"label": "May", "value": 18}]
    )
"""

from __future__ import annotations

from .bar_chart import BarChart, BarChartRenderer
from .geometry import CanvasGeometry, RatioSegments
from .radial_chart import RadialChart, RatioRadialRenderer
from .raster import RasterExporter

__all__ = [
    "BarChart",
    "BarChartRenderer",
    "CanvasGeometry",
    "RadialChart",
    "RasterExporter",
    "RatioRadialRenderer",
    "RatioSegments",
]
