from __future__ import annotations

from .clock import DEFAULT_FRAME_RATE, MIN_FRAME_RATE, FrameRateClampWarning, RecordingClock, clamp_frame_rate
from .log import Recording
from .types import EMPTY_FRAME, AxisSample, FrameProperty, RecordingFrame

__all__ = [
    "DEFAULT_FRAME_RATE",
    "EMPTY_FRAME",
    "MIN_FRAME_RATE",
    "AxisSample",
    "FrameProperty",
    "FrameRateClampWarning",
    "Recording",
    "RecordingClock",
    "RecordingFrame",
    "clamp_frame_rate",
]
