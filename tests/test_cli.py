"""CLI tests driven through typer's CliRunner."""
from __future__ import annotations

import json
import logging

import pytest
import yaml
from typer.testing import CliRunner

from nrega_dash import __version__
from nrega_dash.cli.main import app
from nrega_dash.core.models import GeoLocation

runner = CliRunner()

SERIES = [{"label": "Jan", "value": 10}, {"label": "Feb", "value": 40}, {"label": "Mar", "value": 20}]


@pytest.fixture(autouse=True)
def isolated(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    for name in (
        "NRD_API_BASE_URL",
        "API_BASE_URL",
        "NRD_DEFAULT_LOCALE",
        "NRD_STATE",
        "NRD_LOCALES_DIR",
        "NRD_MONTHS",
    ):
        monkeypatch.delenv(name, raising=False)
    yield tmp_path
    # The CLI callback binds handlers to the runner's streams
    for name in ("nrega_dash", None):
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()


@pytest.fixture
def fake_client(monkeypatch, make_service):
    """Route the CLI's data service client to an in-memory fake."""

    def install(**kwargs):
        service = make_service(**kwargs)
        monkeypatch.setattr("nrega_dash.cli.main._client", lambda settings: service)
        return service

    return install


def test_version() -> None:
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_locales() -> None:
    result = runner.invoke(app, ["locales"])
    assert result.exit_code == 0
    assert "English" in result.output
    assert "हिन्दी" in result.output


def test_districts(fake_client) -> None:
    fake_client()
    result = runner.invoke(app, ["districts", "--query", "pat"])
    assert result.exit_code == 0
    assert "Patna" in result.output
    assert "Gaya" not in result.output
    assert "1 districts found" in result.output


def test_districts_hindi(fake_client) -> None:
    fake_client()
    result = runner.invoke(app, ["districts", "--locale", "hi"])
    assert result.exit_code == 0
    assert "पटना" in result.output
    assert "3 ज़िले मिले" in result.output


def test_districts_offline_fallback(fake_client) -> None:
    fake_client(fail={"districts"})
    result = runner.invoke(app, ["districts"])
    assert result.exit_code == 0
    assert "Madhubani" in result.output


def test_districts_no_match(fake_client) -> None:
    fake_client()
    result = runner.invoke(app, ["districts", "--query", "zzz"])
    assert result.exit_code == 0
    assert "No districts found" in result.output


def test_unknown_locale(fake_client) -> None:
    fake_client()
    result = runner.invoke(app, ["districts", "--locale", "fr"])
    assert result.exit_code == 1
    assert "Unknown locale: 'fr'" in result.output


def test_default_locale_from_env(fake_client, monkeypatch) -> None:
    fake_client()
    monkeypatch.setenv("NRD_DEFAULT_LOCALE", "hi")
    result = runner.invoke(app, ["districts"])
    assert result.exit_code == 0
    assert "पटना" in result.output


def test_bar_from_json(isolated) -> None:
    source = isolated / "series.json"
    source.write_text(json.dumps(SERIES), encoding="utf-8")

    result = runner.invoke(app, ["bar", "--input", str(source), "--output", "out/bar.svg"])

    assert result.exit_code == 0, result.output
    svg = (isolated / "out" / "bar.svg").read_text(encoding="utf-8")
    assert 'viewBox="0 0 600 200"' in svg
    assert svg.count('class="bar"') == 3


def test_bar_from_yaml_payload(isolated) -> None:
    source = isolated / "record.yaml"
    source.write_text(yaml.safe_dump({"timeseriesDays": SERIES}), encoding="utf-8")

    result = runner.invoke(
        app, ["bar", "--input", str(source), "--output", "bar.svg", "--locale", "hi", "--y-label", "Days"]
    )

    assert result.exit_code == 0, result.output
    svg = (isolated / "bar.svg").read_text(encoding="utf-8")
    assert "फ़र" in svg
    assert "Days" in svg


def test_bar_rejects_bad_input(isolated) -> None:
    source = isolated / "bad.json"
    source.write_text("{not json", encoding="utf-8")

    result = runner.invoke(app, ["bar", "--input", str(source)])

    assert result.exit_code == 1
    assert "Could not read" in result.output


def test_bar_rejects_non_list(isolated) -> None:
    source = isolated / "scalar.json"
    source.write_text("42", encoding="utf-8")

    result = runner.invoke(app, ["bar", "--input", str(source)])

    assert result.exit_code == 1


def test_bar_with_png(isolated) -> None:
    source = isolated / "series.json"
    source.write_text(json.dumps(SERIES), encoding="utf-8")

    result = runner.invoke(app, ["bar", "--input", str(source), "--output", "charts/bar.svg", "--png"])

    assert result.exit_code == 0, result.output
    assert (isolated / "charts" / "bar.png").read_bytes().startswith(b"\x89PNG")


def test_radial(isolated) -> None:
    result = runner.invoke(app, ["radial", "--completed", "30", "--ongoing", "10", "--output", "ring.svg"])

    assert result.exit_code == 0, result.output
    assert "75%" in result.output
    assert "25%" in result.output
    assert "Total Works" in result.output
    assert ">75%</text>" in (isolated / "ring.svg").read_text(encoding="utf-8")


def test_radial_zero(isolated) -> None:
    result = runner.invoke(app, ["radial", "--completed", "0", "--ongoing", "0"])
    assert result.exit_code == 0, result.output
    assert "—" in result.output


def test_dashboard(fake_client, isolated) -> None:
    service = fake_client()
    result = runner.invoke(
        app, ["dashboard", "--district", "Patna", "--output", "page.html", "--locale", "hi", "--months", "6"]
    )

    assert result.exit_code == 0, result.output
    html = (isolated / "page.html").read_text(encoding="utf-8")
    assert "पटना" in html
    assert service.calls == [("get_performance", "Patna", 6)]


def test_dashboard_fetch_error(fake_client, isolated) -> None:
    fake_client(fail={"performance"})
    result = runner.invoke(app, ["dashboard", "--district", "Patna"])

    assert result.exit_code == 1
    assert "Unable to fetch performance data." in result.output
    assert not (isolated / "dashboard.html").exists()


def test_locate_supported(fake_client) -> None:
    fake_client()
    result = runner.invoke(app, ["locate", "--lat", "25.59", "--lon", "85.13"])
    assert result.exit_code == 0
    assert "Detected location: Bihar, Patna" in result.output


def test_locate_unsupported(fake_client) -> None:
    fake_client(location=GeoLocation("Uttar Pradesh", "Lucknow", False))
    result = runner.invoke(app, ["locate", "--lat", "26.8", "--lon", "80.9"])
    assert result.exit_code == 0
    assert "outside the supported state" in result.output


def test_locate_lookup_failure(fake_client) -> None:
    fake_client(fail={"locate"})
    result = runner.invoke(app, ["locate", "--lat", "25.59", "--lon", "85.13", "--locale", "hi"])
    assert result.exit_code == 1
    assert "आपका ज़िला पता नहीं चल सका" in result.output


def test_json_logs_option(fake_client, isolated) -> None:
    fake_client()
    result = runner.invoke(app, ["--json-logs", "--log-level", "DEBUG", "districts"])
    assert result.exit_code == 0
    assert (isolated / "logs" / "nrega_dash.log").exists()
