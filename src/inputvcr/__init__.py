from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("inputvcr")
except PackageNotFoundError:  # pragma: no cover
    # Allow running from source (e.g. `PYTHONPATH=src`) without installed package metadata.
    __version__ = "0.0.0+dev"

from .engine import DEFAULT_CHANNELS, InputVcr, VcrMode
from .interfaces import (
    CallbackListener,
    InputSource,
    ManualInputSource,
    NullInputSource,
    PlaybackListener,
    ScriptedInputSource,
)
from .recording import AxisSample, FrameProperty, FrameRateClampWarning, Recording, RecordingClock, RecordingFrame

__all__ = [
    "DEFAULT_CHANNELS",
    "AxisSample",
    "CallbackListener",
    "FrameProperty",
    "FrameRateClampWarning",
    "InputSource",
    "InputVcr",
    "ManualInputSource",
    "NullInputSource",
    "PlaybackListener",
    "Recording",
    "RecordingClock",
    "RecordingFrame",
    "ScriptedInputSource",
    "VcrMode",
    "__version__",
]
