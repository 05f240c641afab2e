from __future__ import annotations

from dataclasses import dataclass, field

from ..debug_log import vcr_debug_log
from .clock import DEFAULT_FRAME_RATE, RecordingClock
from .types import EMPTY_FRAME, AxisSample, FrameProperty, RecordingFrame


@dataclass(slots=True)
class Recording:
    """Frame-indexed log of named axis samples.

    `frames` is dense by index and sparse by content: writing frame `k` backfills empty
    frames up to `k`. The list only ever grows.
    """

    frame_rate: int = DEFAULT_FRAME_RATE
    frames: list[RecordingFrame] = field(default_factory=list)
    _clock: RecordingClock = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self._clock = RecordingClock(self.frame_rate)
        self.frame_rate = int(self._clock.frame_rate)
        self.frames = list(self.frames)

    @property
    def clock(self) -> RecordingClock:
        return self._clock

    @property
    def total_frames(self) -> int:
        return len(self.frames)

    @property
    def duration_seconds(self) -> float:
        return float(self.total_frames) / float(self.frame_rate)

    def __len__(self) -> int:
        return len(self.frames)

    def copy(self) -> Recording:
        return Recording(frame_rate=int(self.frame_rate), frames=list(self.frames))

    def __copy__(self) -> Recording:
        return self.copy()

    def closest_frame(self, at_time: float) -> int:
        return self._clock.frame_at(at_time)

    def time_at_frame(self, frame: int) -> float:
        return self._clock.time_at(frame)

    def _ensure_frame(self, frame: int) -> None:
        missing = int(frame) + 1 - len(self.frames)
        if missing > 0:
            self.frames.extend([EMPTY_FRAME] * missing)

    def add_sample(self, at_frame: int, sample: AxisSample) -> None:
        at_frame = int(at_frame)
        if at_frame < 0:
            vcr_debug_log("add_sample_rejected", frame=at_frame, axis=sample.axis_name)
            return
        self._ensure_frame(at_frame)
        self.frames[at_frame] = self.frames[at_frame].with_sample(sample)

    def add_property(self, at_frame: int, prop: FrameProperty) -> None:
        at_frame = int(at_frame)
        if at_frame < 0:
            vcr_debug_log("add_property_rejected", frame=at_frame, name=prop.name)
            return
        self._ensure_frame(at_frame)
        self.frames[at_frame] = self.frames[at_frame].with_property(prop)

    def frame(self, at_frame: int) -> RecordingFrame:
        at_frame = int(at_frame)
        if 0 <= at_frame < len(self.frames):
            return self.frames[at_frame]
        return EMPTY_FRAME

    def get_sample(self, at_frame: int, axis_name: str) -> AxisSample | None:
        """Return the sample for `axis_name` at `at_frame`, or None when there is none.

        None is the ordinary "no new value" answer (out-of-range frame, or the axis was
        not written in that frame), not an error.
        """

        at_frame = int(at_frame)
        if at_frame < 0 or at_frame >= len(self.frames):
            vcr_debug_log("sample_frame_out_of_range", frame=at_frame, total_frames=len(self.frames))
            return None
        sample = self.frames[at_frame].sample(axis_name)
        if sample is None:
            vcr_debug_log("sample_missing", frame=at_frame, axis=axis_name)
        return sample

    def get_frame_samples(self, at_frame: int) -> tuple[AxisSample, ...]:
        return self.frame(at_frame).samples

    def get_frame_properties(self, at_frame: int) -> tuple[FrameProperty, ...]:
        return self.frame(at_frame).properties
