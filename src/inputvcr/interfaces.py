from __future__ import annotations

import math
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Protocol


class InputSource(Protocol):
    """Live input supplier polled by the VCR.

    Unknown axis names return `0.0`. Sources may also provide `get_button_down(name)` and
    `get_button_up(name)`; the VCR uses them when present.
    """

    def get_axis_value(self, axis_name: str) -> float: ...


class PlaybackListener(Protocol):
    def on_playback_finished(self) -> None: ...

    def on_playback_stopped(self) -> None: ...


class NullInputSource:
    def get_axis_value(self, axis_name: str) -> float:
        return 0.0


@dataclass(slots=True)
class ManualInputSource:
    """Dict-backed input source for headless hosts and tests."""

    values: dict[str, float] = field(default_factory=dict)
    _pressed: set[str] = field(default_factory=set)
    _released: set[str] = field(default_factory=set)

    def set_axis(self, axis_name: str, value: float) -> None:
        name = str(axis_name)
        value = float(value)
        was_down = float(self.values.get(name, 0.0)) != 0.0
        is_down = value != 0.0
        if is_down and not was_down:
            self._pressed.add(name)
        elif was_down and not is_down:
            self._released.add(name)
        self.values[name] = value

    def update(self, values: Mapping[str, float]) -> None:
        for name, value in values.items():
            self.set_axis(name, value)

    def begin_frame(self) -> None:
        """Drop the button edges reported during the previous frame."""
        self._pressed.clear()
        self._released.clear()

    def get_axis_value(self, axis_name: str) -> float:
        return float(self.values.get(str(axis_name), 0.0))

    def get_button_down(self, axis_name: str) -> bool:
        return str(axis_name) in self._pressed

    def get_button_up(self, axis_name: str) -> bool:
        return str(axis_name) in self._released


@dataclass(slots=True)
class ScriptedInputSource:
    """Input source whose axes are functions of an internal clock.

    The host advances the clock with `advance(dt)`; each axis script maps the elapsed
    time in seconds to an axis value.
    """

    scripts: dict[str, Callable[[float], float]] = field(default_factory=dict)
    time: float = 0.0

    def advance(self, dt: float) -> None:
        dt = float(dt)
        if math.isfinite(dt) and dt > 0.0:
            self.time += dt

    def get_axis_value(self, axis_name: str) -> float:
        script = self.scripts.get(str(axis_name))
        if script is None:
            return 0.0
        return float(script(float(self.time)))


def square_wave(*, period: float, high: float = 1.0, low: float = -1.0) -> Callable[[float], float]:
    period = float(period)

    def _wave(t: float) -> float:
        if period <= 0.0:
            return float(high)
        phase = math.fmod(float(t), period) / period
        return float(high) if phase < 0.5 else float(low)

    return _wave


@dataclass(slots=True)
class CallbackListener:
    """Adapts plain callables to `PlaybackListener`."""

    finished: Callable[[], None] | None = None
    stopped: Callable[[], None] | None = None

    def on_playback_finished(self) -> None:
        if self.finished is not None:
            self.finished()

    def on_playback_stopped(self) -> None:
        if self.stopped is not None:
            self.stopped()


__all__ = [
    "CallbackListener",
    "InputSource",
    "ManualInputSource",
    "NullInputSource",
    "PlaybackListener",
    "ScriptedInputSource",
    "square_wave",
]
