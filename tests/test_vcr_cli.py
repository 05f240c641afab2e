from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
from typer.testing import CliRunner

from inputvcr.cli import app, run_simulation


def test_simulation_replays_every_frame() -> None:
    result = run_simulation(frame_rate=60, tick_dt=1.0 / 30.0, playback_dt=1.0 / 144.0, duration=1.0, period=0.25)

    assert result.recording.total_frames >= 60
    assert result.checked > 0
    assert result.mismatches == ()
    assert result.finished_events == 1
    assert result.stopped_events == 1


def test_simulate_command_reports_success(tmp_path: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(
        app,
        [
            "simulate",
            "--frame-rate",
            "50",
            "--duration",
            "0.5",
            "--trace-dir",
            str(tmp_path),
        ],
    )

    assert result.exit_code == 0, result.output
    assert "recorded" in result.output
    assert "mismatches=0" in result.output
    logs = list((tmp_path / "logs" / "vcr").glob("simulate-*.log"))
    assert len(logs) == 1
    assert "event=playback_finished" in logs[0].read_text(encoding="utf-8")


def test_simulate_command_exits_nonzero_on_mismatch(monkeypatch: pytest.MonkeyPatch) -> None:
    import inputvcr.cli as cli

    real = cli.run_simulation

    def _broken(**kwargs: Any) -> cli.SimulationResult:
        out = real(**kwargs)
        rows = list(out.rows)
        first = next(idx for idx, row in enumerate(rows) if row.expected is not None)
        rows[first] = cli.PlaybackRow(tick=rows[first].tick, frame=rows[first].frame, expected=rows[first].expected, actual=42.0)
        return cli.SimulationResult(
            recording=out.recording,
            record_ticks=out.record_ticks,
            rows=tuple(rows),
            finished_events=out.finished_events,
            stopped_events=out.stopped_events,
        )

    monkeypatch.setattr(cli, "run_simulation", _broken)
    result = CliRunner().invoke(app, ["simulate", "--duration", "0.5"])

    assert result.exit_code == 1
    assert "mismatches=1" in result.output


def test_config_command_prints_resolved_config(tmp_path: Path) -> None:
    path = tmp_path / "custom.toml"
    path.write_text('frame_rate = 25\nchannels = ["Jump"]\n', encoding="utf-8")

    result = CliRunner().invoke(app, ["config", str(path)])

    assert result.exit_code == 0, result.output
    assert '"frame_rate": 25' in result.output
    assert '"Jump"' in result.output


def test_config_command_rejects_bad_file(tmp_path: Path) -> None:
    path = tmp_path / "bad.toml"
    path.write_text("frame_rate = [\n", encoding="utf-8")

    result = CliRunner().invoke(app, ["config", str(path)])

    assert result.exit_code == 1


def test_demo_command_runs_view(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    captured: dict[str, Any] = {}

    def _fake_run_view(view, **kwargs):  # noqa: ANN001
        captured["view"] = view
        captured.update(kwargs)

    monkeypatch.setattr("inputvcr.raylib_app.run_view", _fake_run_view)
    monkeypatch.chdir(tmp_path)
    (tmp_path / "inputvcr.toml").write_text("frame_rate = 30\n", encoding="utf-8")

    result = CliRunner().invoke(app, ["demo", "--width", "640", "--height", "480"])

    assert result.exit_code == 0, result.output
    view = captured["view"]
    assert view.vcr.frame_rate == 30
    assert captured["width"] == 640
    assert captured["height"] == 480
    assert captured["vcr"] is view.vcr
