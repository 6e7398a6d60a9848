from __future__ import annotations

from pathlib import Path
from typing import Any

from typer.testing import CliRunner

from sortviz.cli import app
from sortviz.config import ensure_sortviz_cfg
from sortviz.playback import decode_stats


def test_sorts_command_lists_builtin_drivers() -> None:
    result = CliRunner().invoke(app, ["sorts"])

    assert result.exit_code == 0, result.output
    assert "bubble" in result.output
    assert "Merge sort" in result.output


def test_stats_json_matches_step_counts() -> None:
    runner = CliRunner()
    args = ["stats", "bubble", "--size", "12", "--distribution", "descending", "--json"]
    result = runner.invoke(app, args)

    assert result.exit_code == 0, result.output
    report = decode_stats(result.output.strip())
    assert report.sort == "bubble"
    assert report.size == 12
    assert report.distribution == "descending"
    # Reversed input: every adjacent compare in every pass swaps.
    assert report.swap == 12 * 11 // 2
    assert report.cmp == 12 * 11 // 2
    assert report.cycles == report.cmp * 3 + report.swap * 2 * 6


def test_trace_command_prints_steps_in_order() -> None:
    result = CliRunner().invoke(app, ["trace", "selection", "--size", "3", "--distribution", "ascending"])

    assert result.exit_code == 0, result.output
    lines = result.output.splitlines()
    assert lines[0] == "Selection sort n=3 ascending (6 steps)"
    assert "start  index=   0  value=0" in lines[1]
    assert "cmp    index=   1  value=1" in lines[4]


def test_unknown_sort_exits_with_error() -> None:
    result = CliRunner().invoke(app, ["stats", "bogo"])

    assert result.exit_code == 1
    assert "unknown sort 'bogo'" in result.output


def test_unknown_distribution_exits_with_error() -> None:
    result = CliRunner().invoke(app, ["trace", "quick", "--distribution", "sorted"])

    assert result.exit_code == 1
    assert "unknown distribution 'sorted'" in result.output


def test_config_command_dumps_fields(tmp_path: Path) -> None:
    ensure_sortviz_cfg(tmp_path)
    result = CliRunner().invoke(app, ["config", "--base-dir", str(tmp_path)])

    assert result.exit_code == 0, result.output
    assert "screen: 1024x768" in result.output
    assert "sort_name: 'quick' (len=32)" in result.output
    assert "cycles_per_tick: 10" in result.output


def test_default_command_builds_view_from_config(monkeypatch, tmp_path: Path) -> None:
    captured: dict[str, Any] = {}

    def _fake_run_view(view, **kwargs):  # noqa: ANN001
        captured["view"] = view
        captured.update(kwargs)

    monkeypatch.setattr("sortviz.app.run_view", _fake_run_view)

    result = CliRunner().invoke(
        app,
        ["--sort", "heap", "--size", "12", "--interval-hz", "30", "--base-dir", str(tmp_path)],
    )

    assert result.exit_code == 0, result.output
    assert captured["width"] == 1024
    assert captured["height"] == 768
    assert captured["fps"] == 60
    assert captured["title"] == "sortviz - Heapsort"
    assert (tmp_path / "sortviz.cfg").exists()


def test_config_command_reports_unknown_distribution_byte(tmp_path: Path) -> None:
    cfg = ensure_sortviz_cfg(tmp_path)
    cfg.data["distribution"] = 9
    cfg.save()

    result = CliRunner().invoke(app, ["config", "--path", str(cfg.path)])

    assert result.exit_code == 1
    assert not isinstance(result.exception, IndexError)
    assert "unknown distribution index 9" in result.output
