from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, TemplateNotFound
from markupsafe import Markup

from .. import __version__
from ..core.config import DEFAULT_STATE
from ..core.logging_config import get_logger
from ..core.models import PerformanceRecord
from ..i18n.resolver import LabelResolver
from ..visuals.bar_chart import BarChart, BarChartRenderer
from ..visuals.radial_chart import RadialChart, RatioRadialRenderer
from .formatting import MISSING, format_indian, format_money, format_percent

logger = get_logger(__name__)

LEGEND_COLORS = {"completed": "#10b981", "ongoing": "#3b82f6"}


def _coord(value: float) -> str:
    """Serialise a coordinate with at most three decimals."""
    text = f"{float(value):.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


@dataclass(frozen=True)
class SummaryCard:
    label: str
    value: str


@dataclass(frozen=True)
class SummarySection:
    title: str
    cards: tuple[SummaryCard, ...]


def build_sections(record: PerformanceRecord, resolver: LabelResolver) -> list[SummarySection]:
    """Summary cards for the latest month, grouped as on the dashboard page."""
    m = record.latest_month
    t = resolver.resolve_strict
    return [
        SummarySection(
            t("employmentSummary"),
            (
                SummaryCard(t("households"), format_indian(m.get("households"))),
                SummaryCard(t("avgDays"), format_indian(m.get("avgDaysPerHH"))),
                SummaryCard(t("womenPersondays"), format_indian(m.get("womenPersondays"))),
                SummaryCard(t("differentlyAbled"), format_indian(m.get("differentlyAbledWorked"))),
            ),
        ),
        SummarySection(
            t("wagesPayments"),
            (
                SummaryCard(t("avgWage"), format_money(m.get("avgWagePerDay"))),
                SummaryCard(t("totalExpenditure"), format_money(m.get("expenditure"))),
                SummaryCard(t("paymentsWithin"), format_percent(m.get("paymentWithin15DaysPct"))),
            ),
        ),
        SummarySection(
            t("worksProjects"),
            (
                SummaryCard(t("completed"), format_indian(m.get("worksCompleted"))),
                SummaryCard(t("ongoing"), format_indian(m.get("worksOngoing"))),
                SummaryCard(t("total"), format_indian(m.get("worksTotal"))),
            ),
        ),
    ]


class DashboardRenderer:
    """Serialises chart geometry to SVG and composes the dashboard page with Jinja2."""

    def __init__(self, templates_dir: Path | None = None):
        if templates_dir is None:
            templates_dir = Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(str(templates_dir)),
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["coord"] = _coord

    def render_bar_svg(self, chart: BarChart) -> str:
        return self._render("bar_chart.svg.j2", chart=chart)

    def render_radial_svg(self, chart: RadialChart) -> str:
        return self._render("radial_chart.svg.j2", chart=chart)

    def render_dashboard(
        self,
        record: PerformanceRecord,
        resolver: LabelResolver,
        state_name: str = DEFAULT_STATE,
    ) -> str:
        """Render the full dashboard page for one district in the resolver's locale.

        Raises:
            RuntimeError: If a template is missing or fails to render
        """
        t = resolver.resolve_strict
        bar = BarChartRenderer(resolver).render(
            record.timeseries, x_label=t("monthLabel"), y_label=t("avgDays")
        )
        radial = RatioRadialRenderer(resolver).render(record.works_completed, record.works_ongoing)

        month = record.latest_month.get("monthLabel")
        logger.debug(
            "Rendering dashboard",
            extra={"district": record.district, "locale": resolver.code},
        )
        return self._render(
            "dashboard.html.j2",
            locale=resolver.code,
            title=t("appTitle"),
            state_name=resolver.resolve_tolerant(f"states.{state_name}", state_name) if state_name else MISSING,
            district_name=resolver.resolve_tolerant(f"districts.{record.district}", record.district),
            month_name=resolver.resolve_tolerant(f"months.{month}", str(month)) if month else MISSING,
            fin_year=record.latest_month.get("finYear") or "",
            labels={
                "state": t("stateLabel"),
                "district": t("districtLabel"),
                "month": t("monthLabel"),
                "trend": t("employmentTrend"),
                "works": t("worksCompletion"),
            },
            sections=build_sections(record, resolver),
            # Both strings come out of autoescaped templates
            bar_svg=Markup(self.render_bar_svg(bar)),
            radial_svg=Markup(self.render_radial_svg(radial)),
            chart=radial,
            colors=LEGEND_COLORS,
            version=__version__,
        )

    def _render(self, template_name: str, **context: object) -> str:
        try:
            template = self.env.get_template(template_name)
            return template.render(**context)
        except TemplateNotFound as e:
            logger.error("Template not found", extra={"template": template_name, "error": str(e)})
            raise RuntimeError(
                f"Template not found: {e}. "
                f"Ensure nrega_dash/render/templates/{template_name} exists."
            ) from e
        except Exception as e:
            logger.error("Failed to render template", extra={"template": template_name, "error": str(e)})
            raise RuntimeError(f"Failed to render {template_name}: {e}") from e


def write_text(path: str, content: str) -> None:
    """Write text content to file."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(content, encoding="utf-8")
