from __future__ import annotations

import math
from collections import deque
from collections.abc import Iterable, Sequence
from enum import IntEnum
from typing import TYPE_CHECKING

from .debug_log import vcr_debug_log
from .interfaces import InputSource, NullInputSource, PlaybackListener
from .recording import DEFAULT_FRAME_RATE, AxisSample, FrameProperty, Recording, clamp_frame_rate

if TYPE_CHECKING:
    from .config import VcrConfig

DEFAULT_CHANNELS: tuple[str, ...] = ("Horizontal", "Vertical")


class VcrMode(IntEnum):
    """Operating modes of an `InputVcr`."""

    PASSTHRU = 0
    RECORD = 1
    PLAYBACK = 2
    PAUSE = 3


def _sanitize_seconds(value: float) -> float:
    value = float(value)
    if not math.isfinite(value) or value < 0.0:
        return 0.0
    return value


def _unique_channels(channels: Iterable[str]) -> tuple[str, ...]:
    out: list[str] = []
    for name in channels:
        name = str(name)
        if name and name not in out:
            out.append(name)
    return tuple(out)


class InputVcr:
    """Records live axis input frame-by-frame and plays it back deterministically.

    The host calls `advance(dt)` once per tick and reads input through `get_axis`, which
    answers from the recording during playback and from the live source otherwise.

      - PASSTHRU: live input
      - RECORD: live input, also appended to the active recording
      - PLAYBACK: recorded input where available, live input for everything else
      - PAUSE: all axes read as 0
    """

    def __init__(
        self,
        *,
        input_source: InputSource | None = None,
        channels: Sequence[str] = DEFAULT_CHANNELS,
        frame_rate: int = DEFAULT_FRAME_RATE,
        listeners: Iterable[PlaybackListener] = (),
    ) -> None:
        self._frame_rate = clamp_frame_rate(frame_rate)
        self._channels = _unique_channels(channels)
        self._input: InputSource = input_source if input_source is not None else NullInputSource()
        self._listeners: list[PlaybackListener] = list(listeners)

        self._mode = VcrMode.PASSTHRU
        self._paused_mode: VcrMode | None = None
        self._stopped_from: VcrMode | None = None
        self._recording: Recording | None = None

        self._current_frame = 0
        self._real_record_time = 0.0
        self._playback_time = 0.0

        # Per-axis values known to playback this tick and last tick.
        self._this_tick: dict[str, AxisSample] = {}
        self._last_tick: dict[str, AxisSample] = {}

        self._pending_properties: deque[FrameProperty] = deque()
        self._properties: dict[str, str] = {}

    @classmethod
    def from_config(
        cls,
        config: VcrConfig,
        *,
        input_source: InputSource | None = None,
        listeners: Iterable[PlaybackListener] = (),
    ) -> InputVcr:
        return cls(
            input_source=input_source,
            channels=tuple(config.channels),
            frame_rate=int(config.frame_rate),
            listeners=listeners,
        )

    @property
    def mode(self) -> VcrMode:
        return self._mode

    @property
    def channels(self) -> tuple[str, ...]:
        return self._channels

    @property
    def frame_rate(self) -> int:
        return int(self._frame_rate)

    @property
    def recording(self) -> Recording | None:
        """The active recording (not a copy; see `snapshot`)."""
        return self._recording

    @property
    def current_frame(self) -> int:
        return int(self._current_frame)

    @property
    def current_frame_rate(self) -> int:
        if self._recording is None:
            return int(self._frame_rate)
        return int(self._recording.frame_rate)

    @property
    def current_time(self) -> float:
        return float(self._current_frame) / float(self.current_frame_rate)

    @property
    def playback_time(self) -> float:
        return float(self._playback_time)

    @property
    def real_record_time(self) -> float:
        return float(self._real_record_time)

    @property
    def stopped_from(self) -> VcrMode | None:
        """The mode the last `stop()` interrupted; a pause reports what it had paused."""
        return self._stopped_from

    @property
    def input_source(self) -> InputSource:
        return self._input

    def set_input_source(self, source: InputSource | None) -> None:
        self._input = source if source is not None else NullInputSource()

    def add_listener(self, listener: PlaybackListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: PlaybackListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def snapshot(self) -> Recording | None:
        """Independent copy of the active recording, for the caller to keep."""
        if self._recording is None:
            return None
        return self._recording.copy()

    def _set_mode(self, mode: VcrMode, *, reason: str) -> None:
        if mode != self._mode:
            vcr_debug_log("mode", reason=reason, from_mode=self._mode, to_mode=mode, frame=self._current_frame)
        self._mode = mode

    def _reset_playback_state(self) -> None:
        self._this_tick.clear()
        self._last_tick.clear()
        self._properties.clear()

    # Commands

    def new_recording(self) -> None:
        """Start a fresh recording. The previous one is dropped; `snapshot()` it first to keep it."""
        self._recording = Recording(frame_rate=self._frame_rate)
        self._current_frame = 0
        self._real_record_time = 0.0
        self._playback_time = 0.0
        self._pending_properties.clear()
        self._reset_playback_state()
        self._paused_mode = None
        vcr_debug_log("new_recording", frame_rate=self._recording.frame_rate, channels=self._channels)
        self._set_mode(VcrMode.RECORD, reason="new_recording")

    def record(self) -> None:
        """Record, appending to the active recording from the current frame when it has data."""
        if self._recording is None or self._recording.total_frames == 0:
            self.new_recording()
            return
        resuming = self._mode == VcrMode.RECORD or (
            self._mode == VcrMode.PAUSE and self._paused_mode == VcrMode.RECORD
        )
        if not resuming:
            # Realign real time with the cursor so catch-up starts from the current frame.
            self._real_record_time = self._recording.time_at_frame(self._current_frame)
        self._paused_mode = None
        self._set_mode(VcrMode.RECORD, reason="record")

    def play(self, recording: Recording | None = None, start_time: float = 0.0) -> None:
        """Play `recording` (or the active one) from `start_time` seconds.

        Without an explicit recording, a paused VCR resumes playback with its cursor
        untouched, whatever it was doing before the pause. With no recording at all this
        falls back to `new_recording()`.
        """

        if recording is None:
            if self._mode == VcrMode.PAUSE and self._recording is not None:
                self._paused_mode = None
                self._set_mode(VcrMode.PLAYBACK, reason="resume")
                return
            if self._recording is None:
                self.new_recording()
                return
            recording = self._recording

        start_time = _sanitize_seconds(start_time)
        self._recording = recording
        self._current_frame = recording.closest_frame(start_time)
        self._playback_time = start_time
        self._reset_playback_state()
        self._paused_mode = None
        vcr_debug_log(
            "play",
            start_time=start_time,
            start_frame=self._current_frame,
            total_frames=recording.total_frames,
            frame_rate=recording.frame_rate,
        )
        self._set_mode(VcrMode.PLAYBACK, reason="play")

    def pause(self) -> None:
        """Freeze recording or playback. Every axis reads 0 while paused."""
        if self._mode != VcrMode.PAUSE:
            self._paused_mode = self._mode
        self._set_mode(VcrMode.PAUSE, reason="pause")

    def stop(self) -> None:
        """Stop and rewind; live input passes through afterwards."""
        self._stopped_from = self._paused_mode if self._mode == VcrMode.PAUSE else self._mode
        self._set_mode(VcrMode.PASSTHRU, reason="stop")
        self._paused_mode = None
        self._current_frame = 0
        self._playback_time = 0.0
        self._real_record_time = 0.0
        for listener in list(self._listeners):
            listener.on_playback_stopped()

    def sync_property(self, name: str, value: object) -> None:
        """Queue a named property to be stored in the next recorded frame."""
        if self._mode != VcrMode.RECORD:
            return
        self._pending_properties.append(FrameProperty(name=str(name), value=str(value)))

    # Tick

    def advance(self, dt: float) -> None:
        dt = _sanitize_seconds(dt)
        if self._mode == VcrMode.PLAYBACK:
            self._advance_playback(dt)
        elif self._mode == VcrMode.RECORD:
            self._advance_record(dt)

    def _finish_playback(self) -> None:
        recording = self._recording
        vcr_debug_log(
            "playback_finished",
            frame=self._current_frame,
            total_frames=recording.total_frames if recording is not None else 0,
        )
        for listener in list(self._listeners):
            listener.on_playback_finished()
        self.stop()

    def _advance_playback(self, dt: float) -> None:
        recording = self._recording
        if recording is None:
            self.stop()
            return

        self._last_tick = dict(self._this_tick)

        last_frame = int(self._current_frame)
        new_frame = recording.closest_frame(self._playback_time)
        self._current_frame = new_frame

        # Frame index `total_frames` is still a valid (empty) playback tick.
        if new_frame > recording.total_frames:
            self._finish_playback()
            return

        # Last sample per axis across every frame crossed since the previous tick, so a
        # change shorter than one host tick still lands and a change that reverts within
        # the range does not.
        crossed: dict[str, AxisSample] = {}
        crossed_props: dict[str, str] = {}
        for frame_index in range(last_frame + 1, new_frame + 1):
            frame = recording.frame(frame_index)
            for sample in frame.samples:
                crossed[sample.axis_name] = sample
            for prop in frame.properties:
                crossed_props[prop.name] = prop.value

        for axis_name, sample in crossed.items():
            if self._this_tick.get(axis_name) != sample:
                self._this_tick[axis_name] = sample
        self._properties.update(crossed_props)

        self._playback_time += dt

    def _advance_record(self, dt: float) -> None:
        recording = self._recording
        if recording is None:
            self.new_recording()
            recording = self._recording
            assert recording is not None

        self._real_record_time += dt
        clock = recording.clock
        while clock.time_at(self._current_frame) < self._real_record_time:
            frame = int(self._current_frame)
            for axis_name in self._channels:
                value = float(self._input.get_axis_value(axis_name))
                recording.add_sample(frame, AxisSample(axis_name=axis_name, axis_value=value))
            while self._pending_properties:
                recording.add_property(frame, self._pending_properties.popleft())
            self._current_frame += 1

    # Queries

    def get_axis(self, axis_name: str) -> float:
        if self._mode == VcrMode.PAUSE:
            return 0.0
        if self._mode == VcrMode.PLAYBACK:
            sample = self._this_tick.get(axis_name)
            if sample is not None:
                return float(sample.axis_value)
        return float(self._input.get_axis_value(axis_name))

    def get_button(self, axis_name: str) -> bool:
        return self.get_axis(axis_name) != 0.0

    def _playback_edge(self, axis_name: str, *, down: bool) -> bool | None:
        sample = self._this_tick.get(axis_name)
        if sample is None:
            return None
        prev = self._last_tick.get(axis_name)
        was_down = prev is not None and float(prev.axis_value) != 0.0
        is_down = float(sample.axis_value) != 0.0
        if down:
            return is_down and not was_down
        return was_down and not is_down

    def _source_edge(self, axis_name: str, method: str) -> bool:
        fn = getattr(self._input, method, None)
        if not callable(fn):
            return False
        return bool(fn(axis_name))

    def get_button_down(self, axis_name: str) -> bool:
        if self._mode == VcrMode.PAUSE:
            return False
        if self._mode == VcrMode.PLAYBACK:
            edge = self._playback_edge(axis_name, down=True)
            if edge is not None:
                return edge
        return self._source_edge(axis_name, "get_button_down")

    def get_button_up(self, axis_name: str) -> bool:
        if self._mode == VcrMode.PAUSE:
            return False
        if self._mode == VcrMode.PLAYBACK:
            edge = self._playback_edge(axis_name, down=False)
            if edge is not None:
                return edge
        return self._source_edge(axis_name, "get_button_up")

    def get_property(self, name: str) -> str | None:
        if self._mode != VcrMode.PLAYBACK:
            return None
        return self._properties.get(str(name))


__all__ = [
    "DEFAULT_CHANNELS",
    "InputVcr",
    "VcrMode",
]
