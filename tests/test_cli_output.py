"""Tests for CLI output helpers."""

from __future__ import annotations

from nrega_dash.cli import output
from nrega_dash.cli.output import OutputColor


def test_success_with_prefix(capsys) -> None:
    output.success("Chart written")
    captured = capsys.readouterr()
    assert "✅ Chart written" in captured.out


def test_success_without_prefix(capsys) -> None:
    output.success("Chart written", prefix=False)
    captured = capsys.readouterr()
    assert "✅" not in captured.out
    assert "Chart written" in captured.out


def test_error_writes_to_stderr(capsys) -> None:
    output.error("Fetch failed")
    captured = capsys.readouterr()
    assert "❌ Fetch failed" in captured.err
    assert captured.out == ""


def test_error_to_stdout(capsys) -> None:
    output.error("Fetch failed", err=False)
    captured = capsys.readouterr()
    assert "❌ Fetch failed" in captured.out


def test_info_and_warning(capsys) -> None:
    output.info("38 districts found")
    output.warning("No districts found", prefix=False)
    captured = capsys.readouterr()
    assert "ℹ️" in captured.out
    assert "38 districts found" in captured.out
    assert "⚠️" not in captured.out
    assert "No districts found" in captured.out


def test_plain(capsys) -> None:
    output.plain("uncolored")
    output.plain("colored", color=OutputColor.CYAN)
    captured = capsys.readouterr()
    assert "uncolored" in captured.out
    assert "colored" in captured.out


def test_table(capsys) -> None:
    output.table([["Patna", "पटना"], ["Gaya", "गया"]], headers=["District", "Name"])
    lines = capsys.readouterr().out.splitlines()
    assert lines[0].split() == ["District", "Name"]
    assert lines[2].split() == ["Patna", "पटना"]
    assert len(lines) == 4
