"""Tests for the completed/ongoing ring."""
from __future__ import annotations

import math

import pytest

from nrega_dash.core.enums import Segment
from nrega_dash.visuals.radial_chart import NO_DATA, RatioRadialRenderer


@pytest.fixture
def renderer(en):
    return RatioRadialRenderer(en)


def test_three_quarters_completed(renderer) -> None:
    chart = renderer.render(30, 10)

    assert chart.center_label == "75%"
    assert [row.percentage for row in chart.legend] == [75, 25]
    assert [row.segment for row in chart.legend] == [Segment.COMPLETED, Segment.ONGOING]
    assert chart.detail == "30/40 works"
    assert chart.caption == "completed"
    assert chart.total_title == "Total Works"
    assert chart.total_display == "40"


def test_ring_geometry(renderer) -> None:
    chart = renderer.render(30, 10)
    assert chart.radius == 88
    assert chart.circumference == pytest.approx(2 * math.pi * 88)
    assert (chart.cx, chart.cy) == (100, 100)
    assert chart.view_box == "0 0 200 200"
    assert chart.track.dash_length == pytest.approx(chart.circumference)


def test_arcs_are_contiguous(renderer) -> None:
    chart = renderer.render(30, 10)
    completed, ongoing = chart.arcs

    assert completed.start_angle == 0
    assert completed.sweep == pytest.approx(270)
    assert ongoing.start_angle == pytest.approx(270)
    assert ongoing.sweep == pytest.approx(90)
    assert completed.dash_length + ongoing.dash_length == pytest.approx(chart.circumference)


def test_legend_percentages_rounded_independently(renderer) -> None:
    chart = renderer.render(1, 7)
    assert [row.percentage for row in chart.legend] == [13, 88]
    assert chart.center_label == "13%"


def test_thirds(renderer) -> None:
    chart = renderer.render(1, 2)
    assert [row.percentage for row in chart.legend] == [33, 67]
    assert chart.center_label == "33%"


def test_zero_total_has_no_arcs(renderer) -> None:
    chart = renderer.render(0, 0)
    assert chart.center_label == NO_DATA
    assert chart.arcs == ()
    assert [row.percentage for row in chart.legend] == [0, 0]
    assert chart.detail == "0/0 works"
    assert all(math.isfinite(c) for c in chart.coordinates())


@pytest.mark.parametrize("completed, ongoing", [(5, 0), (0, 5)])
def test_single_segment_draws_full_ring(renderer, completed, ongoing) -> None:
    chart = renderer.render(completed, ongoing)
    (arc,) = chart.arcs
    assert arc.sweep == pytest.approx(360)


def test_negative_counts_clamp_to_zero(renderer) -> None:
    assert renderer.render(-5, 10) == renderer.render(0, 10)
    assert renderer.render(-5, 10).center_label == "0%"


def test_non_numeric_counts(renderer) -> None:
    chart = renderer.render("abc", None)
    assert chart.center_label == NO_DATA
    assert all(math.isfinite(c) for c in chart.coordinates())


def test_small_size_clamps_radius(renderer) -> None:
    chart = renderer.render(1, 1, size=10)
    assert chart.radius == 0
    assert chart.circumference == 0
    assert all(arc.sweep == 0 for arc in chart.arcs)


def test_hindi_titles(hi) -> None:
    chart = RatioRadialRenderer(hi).render(30, 10)
    assert [row.title for row in chart.legend] == ["पूर्ण", "चालू"]
    assert chart.caption == "पूर्ण"
    assert chart.detail == "30/40 कार्य"
    assert chart.total_title == "कुल कार्य"


def test_dash_array_format(renderer) -> None:
    chart = renderer.render(30, 10)
    completed = chart.arcs[0]
    length, circumference = completed.dash_array.split()
    assert float(length) == pytest.approx(completed.dash_length, abs=1e-4)
    assert float(circumference) == pytest.approx(chart.circumference, abs=1e-4)


def test_fractional_counts_display(renderer) -> None:
    chart = renderer.render(2.5, 2.5)
    assert chart.legend[0].display_value == "2.5"
    assert chart.total_display == "5"
    assert chart.center_label == "50%"
