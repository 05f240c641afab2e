from __future__ import annotations

import math
import warnings
from dataclasses import dataclass

DEFAULT_FRAME_RATE = 60
MIN_FRAME_RATE = 1


class FrameRateClampWarning(UserWarning):
    """A configured frame rate was below the minimum and has been clamped."""


def clamp_frame_rate(frame_rate: int, *, stacklevel: int = 2) -> int:
    """Return `frame_rate` clamped to `MIN_FRAME_RATE`, warning when it had to change."""

    value = int(frame_rate)
    if value < MIN_FRAME_RATE:
        warnings.warn(
            f"frame_rate must be at least {MIN_FRAME_RATE}, got {value}; using {MIN_FRAME_RATE}.",
            category=FrameRateClampWarning,
            stacklevel=stacklevel + 1,
        )
        return MIN_FRAME_RATE
    return value


@dataclass(frozen=True, slots=True)
class RecordingClock:
    """Time <-> frame conversion at a fixed logical frame rate.

    Recording and playback both go through this so a sample captured at frame `k`
    is read back at frame `k`, never one early or late.
    """

    frame_rate: int = DEFAULT_FRAME_RATE

    def __post_init__(self) -> None:
        object.__setattr__(self, "frame_rate", clamp_frame_rate(self.frame_rate, stacklevel=3))

    @property
    def frame_duration(self) -> float:
        return 1.0 / float(self.frame_rate)

    def frame_at(self, time: float) -> int:
        time = float(time)
        if not math.isfinite(time):
            return 0
        return int(math.floor(time * float(self.frame_rate)))

    def time_at(self, frame: int) -> float:
        return float(int(frame)) / float(self.frame_rate)
