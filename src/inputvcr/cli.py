from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from .config import CONFIG_NAME, VcrConfig, VcrConfigError, dump_config, load_config, resolve_config
from .engine import InputVcr, VcrMode
from .interfaces import CallbackListener, NullInputSource, ScriptedInputSource, square_wave
from .recording import Recording

app = typer.Typer(add_completion=False)

SIM_AXIS = "Horizontal"


@dataclass(frozen=True, slots=True)
class PlaybackRow:
    tick: int
    frame: int
    expected: float | None
    actual: float


@dataclass(frozen=True, slots=True)
class SimulationResult:
    recording: Recording
    record_ticks: int
    rows: tuple[PlaybackRow, ...]
    finished_events: int
    stopped_events: int

    @property
    def checked(self) -> int:
        return sum(1 for row in self.rows if row.expected is not None)

    @property
    def mismatches(self) -> tuple[PlaybackRow, ...]:
        return tuple(row for row in self.rows if row.expected is not None and row.expected != row.actual)


def _load_cli_config(path: Path | None) -> VcrConfig:
    if path is None:
        local = Path.cwd() / CONFIG_NAME
        if local.is_file():
            path = local
    try:
        return resolve_config(path)
    except VcrConfigError as exc:
        raise typer.BadParameter(str(exc), param_hint="--config") from exc


def run_simulation(
    *,
    frame_rate: int,
    tick_dt: float,
    playback_dt: float,
    duration: float,
    period: float,
    max_ticks: int = 1_000_000,
) -> SimulationResult:
    """Record a scripted square wave, then replay the snapshot at another tick rate."""
    source = ScriptedInputSource(scripts={SIM_AXIS: square_wave(period=period)})
    recorder = InputVcr(input_source=source, channels=(SIM_AXIS,), frame_rate=frame_rate)
    recorder.new_recording()
    record_ticks = 0
    while recorder.current_time < float(duration) and record_ticks < max_ticks:
        recorder.advance(tick_dt)
        source.advance(tick_dt)
        record_ticks += 1
    recorder.stop()
    recording = recorder.snapshot()
    assert recording is not None

    events = {"finished": 0, "stopped": 0}

    def _count(name: str):
        def _inc() -> None:
            events[name] += 1

        return _inc

    player = InputVcr(
        input_source=NullInputSource(),
        channels=(SIM_AXIS,),
        frame_rate=frame_rate,
        listeners=[CallbackListener(finished=_count("finished"), stopped=_count("stopped"))],
    )
    player.play(recording)
    rows: list[PlaybackRow] = []
    tick = 0
    while player.mode == VcrMode.PLAYBACK and tick < max_ticks:
        player.advance(playback_dt)
        tick += 1
        if player.mode != VcrMode.PLAYBACK:
            break
        frame = player.current_frame
        expected_sample = recording.get_sample(frame, SIM_AXIS) if frame >= 1 else None
        expected = float(expected_sample.axis_value) if expected_sample is not None else None
        rows.append(PlaybackRow(tick=tick, frame=frame, expected=expected, actual=player.get_axis(SIM_AXIS)))

    return SimulationResult(
        recording=recording,
        record_ticks=record_ticks,
        rows=tuple(rows),
        finished_events=int(events["finished"]),
        stopped_events=int(events["stopped"]),
    )


def _format_value(value: float | None) -> str:
    if value is None:
        return "    -"
    return f"{value:+.2f}"


@app.command("simulate")
def cmd_simulate(
    frame_rate: int = typer.Option(60, "--frame-rate", help="recording frame rate (frames per second)"),
    tick_dt: float = typer.Option(1.0 / 30.0, "--tick-dt", min=0.0001, help="host tick length while recording (seconds)"),
    playback_dt: float = typer.Option(
        1.0 / 144.0, "--playback-dt", min=0.0001, help="host tick length while playing back (seconds)"
    ),
    duration: float = typer.Option(2.0, "--duration", min=0.0, help="seconds of input to record"),
    period: float = typer.Option(0.5, "--period", min=0.0, help="square wave period of the scripted axis (seconds)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="print every playback tick"),
    trace_dir: Path | None = typer.Option(None, "--trace-dir", help="write a VCR debug trace under this directory"),
) -> None:
    """Record scripted input headlessly, replay it, and check the values match frame by frame."""
    from .debug_log import close_vcr_debug_log, init_vcr_debug_log

    if trace_dir is not None:
        trace_path = init_vcr_debug_log(
            base_dir=trace_dir,
            session="simulate",
            frame_rate=frame_rate,
            channels=(SIM_AXIS,),
        )
        typer.echo(f"trace: {trace_path}")
    try:
        result = run_simulation(
            frame_rate=frame_rate,
            tick_dt=tick_dt,
            playback_dt=playback_dt,
            duration=duration,
            period=period,
        )
    finally:
        if trace_dir is not None:
            close_vcr_debug_log()

    recording = result.recording
    typer.echo(
        f"recorded {recording.total_frames} frames at {recording.frame_rate} fps "
        f"({recording.duration_seconds:.3f}s) in {result.record_ticks} ticks"
    )
    if verbose:
        for row in result.rows:
            typer.echo(f"tick={row.tick:5d}  frame={row.frame:5d}  expected={_format_value(row.expected)}  actual={_format_value(row.actual)}")
    mismatches = result.mismatches
    typer.echo(
        f"played back {len(result.rows)} ticks, checked {result.checked} frames, "
        f"finished={result.finished_events} stopped={result.stopped_events}, mismatches={len(mismatches)}"
    )
    if mismatches:
        first = mismatches[0]
        typer.echo(
            f"first mismatch at tick {first.tick} frame {first.frame}: "
            f"expected {_format_value(first.expected)} got {_format_value(first.actual)}",
            err=True,
        )
        raise typer.Exit(code=1)


@app.command("config")
def cmd_config(
    path: Path | None = typer.Argument(None, help=f"config file (.toml or .json; default: ./{CONFIG_NAME} if present)"),
) -> None:
    """Print the resolved configuration."""
    if path is not None:
        try:
            config = load_config(path)
        except VcrConfigError as exc:
            typer.echo(str(exc), err=True)
            raise typer.Exit(code=1) from exc
    else:
        config = _load_cli_config(None)
    typer.echo(dump_config(config).decode("utf-8"))


@app.command("demo")
def cmd_demo(
    config_path: Path | None = typer.Option(None, "--config", help=f"config file (default: ./{CONFIG_NAME} if present)"),
    width: int = typer.Option(1280, help="window width"),
    height: int = typer.Option(720, help="window height"),
    fps: int = typer.Option(60, help="target fps"),
) -> None:
    """Open the interactive record/playback demo window."""
    from .demo import VcrDemoView
    from .raylib_app import run_view

    config = _load_cli_config(config_path)
    view = VcrDemoView(config)
    run_view(view, vcr=view.vcr, width=width, height=height, title="Input VCR demo", fps=fps)


def main(argv: list[str] | None = None) -> None:
    app(prog_name="inputvcr", args=argv)


if __name__ == "__main__":
    main()
