from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any

import typer
import yaml

from .. import __version__
from ..controller.dashboard import DashboardController
from ..controller.geolocation import FixedPosition
from ..controller.selection import SelectionController
from ..core.config import Settings, get_settings
from ..core.enums import DetectionState
from ..core.errors import UnknownLocaleError
from ..core.logging_config import get_logger, setup_logging
from ..i18n.catalog import LocaleCatalog, default_catalog
from ..i18n.resolver import LabelResolver
from ..render.renderer import DashboardRenderer, write_text
from ..services.api import DataServiceClient
from ..visuals.bar_chart import BarChartRenderer
from ..visuals.radial_chart import RatioRadialRenderer
from ..visuals.raster import RasterExporter
from . import output as cli_output

app = typer.Typer(help="MGNREGA district dashboard CLI")

logger = get_logger(__name__)


@app.callback()
def callback(
    json_logs: bool = typer.Option(False, "--json-logs", help="Output logs in JSON format"),
    log_level: str = typer.Option("WARNING", "--log-level", help="Logging level (DEBUG, INFO, WARNING, ERROR)"),
) -> None:
    """Configure global CLI options."""
    setup_logging(json_output=json_logs, log_level=log_level)
    logger.debug("CLI initialized", extra={"json_logs": json_logs, "log_level": log_level})


def _catalog(settings: Settings) -> LocaleCatalog:
    if settings.locales_dir:
        return LocaleCatalog.load(settings.locales_dir)
    return default_catalog()


def _resolver(settings: Settings, locale: str | None) -> LabelResolver:
    catalog = _catalog(settings)
    try:
        return catalog.resolver(locale or settings.default_locale)
    except UnknownLocaleError as e:
        cli_output.error(f"{e}. Available: {', '.join(catalog.codes())}")
        raise typer.Exit(code=1) from e


def _client(settings: Settings) -> DataServiceClient:
    return DataServiceClient(settings.api_base_url, timeout=settings.request_timeout)


def _read_series(path: Path) -> list[Any]:
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() in (".yaml", ".yml"):
        payload = yaml.safe_load(text)
    else:
        payload = json.loads(text)
    if isinstance(payload, dict):
        payload = payload.get("timeseries", payload.get("timeseriesDays", []))
    if not isinstance(payload, list):
        raise ValueError("expected a list of {label, value} objects")
    return payload


def _export_png(exporter_dir: Path, chart: Any, name: str, radial: bool = False) -> None:
    exporter = RasterExporter(output_dir=exporter_dir)
    result = exporter.export_radial_chart(chart, name) if radial else exporter.export_bar_chart(chart, name)
    if "path" in result:
        cli_output.success(f"PNG written to {result['path']}")
    else:
        cli_output.warning("PNG export failed; see logs")


@app.command()
def version() -> None:
    """Print version."""
    typer.echo(__version__)


@app.command()
def locales() -> None:
    """List the available locales."""
    catalog = _catalog(get_settings())
    rows = [
        [loc.code, loc.name, loc.fallback.code if loc.fallback else "-", len(loc.messages)]
        for loc in catalog
    ]
    cli_output.table(rows, headers=["Code", "Name", "Fallback", "Keys"])


@app.command()
def districts(
    state: str | None = typer.Option(None, help="State name (default from NRD_STATE)"),
    query: str = typer.Option("", help="Case-insensitive substring filter"),
    locale: str | None = typer.Option(None, help="Locale code for display names"),
) -> None:
    """List districts of a state, falling back to the static list when offline."""
    settings = get_settings()
    resolver = _resolver(settings, locale)
    controller = SelectionController(_client(settings), state_name=state or settings.state_name)

    asyncio.run(controller.load_districts())
    options = controller.district_options(resolver, query)
    if not options:
        cli_output.warning(resolver.resolve_strict("noDistricts"))
        return
    cli_output.table(
        [[i, name, display] for i, (name, display) in enumerate(options, start=1)],
        headers=["#", "District", resolver.resolve_strict("chooseDistrict")],
    )
    cli_output.info(resolver.resolve_strict("districtsFound", count=len(options)))


@app.command()
def bar(
    input_path: Path = typer.Option(..., "--input", exists=True, dir_okay=False, help="JSON/YAML list of {label, value}"),  # noqa: B008
    output: Path = typer.Option(Path("bar_chart.svg"), help="Output SVG path"),  # noqa: B008
    locale: str | None = typer.Option(None, help="Locale code for month labels"),
    height: float = typer.Option(200, min=1, help="Logical canvas height"),
    padding: float = typer.Option(32, min=0, help="Canvas padding"),
    x_label: str = typer.Option("", help="X axis title"),
    y_label: str = typer.Option("", help="Y axis title"),
    png: bool = typer.Option(False, help="Also write a PNG next to the SVG"),
) -> None:
    """Render a proportional bar chart to SVG."""
    settings = get_settings()
    resolver = _resolver(settings, locale)
    try:
        series = _read_series(input_path)
    except (OSError, ValueError, yaml.YAMLError) as e:
        cli_output.error(f"Could not read {input_path}: {e}")
        raise typer.Exit(code=1) from e

    chart = BarChartRenderer(resolver).render(
        series, height=height, padding=padding, x_label=x_label, y_label=y_label
    )
    write_text(str(output), DashboardRenderer().render_bar_svg(chart))
    cli_output.success(f"Bar chart written to {output}")
    if png:
        _export_png(output.parent, chart, output.stem)


@app.command()
def radial(
    completed: float = typer.Option(..., help="Completed works"),
    ongoing: float = typer.Option(..., help="Ongoing works"),
    size: float = typer.Option(200, min=1, help="Logical canvas size"),
    output: Path = typer.Option(Path("radial_chart.svg"), help="Output SVG path"),  # noqa: B008
    locale: str | None = typer.Option(None, help="Locale code for legend titles"),
    png: bool = typer.Option(False, help="Also write a PNG next to the SVG"),
) -> None:
    """Render the completed/ongoing ring to SVG and print its legend."""
    settings = get_settings()
    resolver = _resolver(settings, locale)
    chart = RatioRadialRenderer(resolver).render(completed, ongoing, size=size)

    write_text(str(output), DashboardRenderer().render_radial_svg(chart))
    cli_output.success(f"Radial chart written to {output}")
    cli_output.table(
        [[row.title, row.display_value, f"{row.percentage}%"] for row in chart.legend]
        + [[chart.total_title, chart.total_display, chart.center_label]],
        headers=["", "#", "%"],
    )
    if png:
        _export_png(output.parent, chart, output.stem, radial=True)


@app.command()
def dashboard(
    district: str = typer.Option(..., help="District name"),
    output: Path = typer.Option(Path("dashboard.html"), help="Output HTML path"),  # noqa: B008
    months: int | None = typer.Option(None, min=1, max=12, help="Trailing months (default from NRD_MONTHS)"),
    locale: str | None = typer.Option(None, help="Locale code"),
    state: str | None = typer.Option(None, help="State name shown in the header"),
) -> None:
    """Fetch a district's performance and render the dashboard page."""
    settings = get_settings()
    resolver = _resolver(settings, locale)
    controller = DashboardController(_client(settings), months=months or settings.months)

    view = asyncio.run(controller.load(district))
    if view is None or view.error_key is not None or view.record is None:
        key = view.error_key.value if view and view.error_key else "fetchError"
        cli_output.error(resolver.resolve_strict(key))
        raise typer.Exit(code=1)

    html = DashboardRenderer().render_dashboard(view.record, resolver, state or settings.state_name)
    write_text(str(output), html)
    cli_output.success(f"Dashboard written to {output}")


@app.command()
def locate(
    lat: float = typer.Option(..., help="Latitude"),
    lon: float = typer.Option(..., help="Longitude"),
    locale: str | None = typer.Option(None, help="Locale code"),
) -> None:
    """Reverse-geocode coordinates to a supported district."""
    settings = get_settings()
    resolver = _resolver(settings, locale)
    controller = SelectionController(
        _client(settings), geolocation=FixedPosition(lat, lon), state_name=settings.state_name
    )

    state = asyncio.run(controller.auto_detect())
    message = controller.message(resolver) or ""
    if state is DetectionState.DETECTED_SUPPORTED:
        cli_output.success(message)
    elif state is DetectionState.DETECTED_UNSUPPORTED:
        cli_output.warning(message)
    else:
        cli_output.error(message)
        raise typer.Exit(code=1)
