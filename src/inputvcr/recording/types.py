from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class AxisSample:
    """State of one named input channel at one instant."""

    axis_name: str
    axis_value: float = 0.0


@dataclass(frozen=True, slots=True)
class FrameProperty:
    name: str
    value: str = ""


def _replace_by_key(items: tuple, item, key: str) -> tuple:
    name = getattr(item, key)
    for idx, existing in enumerate(items):
        if getattr(existing, key) == name:
            return items[:idx] + (item,) + items[idx + 1 :]
    return items + (item,)


@dataclass(frozen=True, slots=True)
class RecordingFrame:
    """One logical frame of a recording.

    Frames are immutable: writing a sample produces a new frame, so a frame list can be
    shallow-copied and shared between recordings safely. Axis names are unique per frame,
    as are property names.
    """

    samples: tuple[AxisSample, ...] = field(default_factory=tuple)
    properties: tuple[FrameProperty, ...] = field(default_factory=tuple)

    def with_sample(self, sample: AxisSample) -> RecordingFrame:
        return RecordingFrame(
            samples=_replace_by_key(self.samples, sample, "axis_name"),
            properties=self.properties,
        )

    def with_property(self, prop: FrameProperty) -> RecordingFrame:
        return RecordingFrame(
            samples=self.samples,
            properties=_replace_by_key(self.properties, prop, "name"),
        )

    def sample(self, axis_name: str) -> AxisSample | None:
        for sample in self.samples:
            if sample.axis_name == axis_name:
                return sample
        return None

    @property
    def is_empty(self) -> bool:
        return not self.samples and not self.properties


EMPTY_FRAME = RecordingFrame()
