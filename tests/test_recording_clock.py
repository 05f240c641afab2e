from __future__ import annotations

import math

import pytest

from inputvcr.recording import FrameRateClampWarning, RecordingClock, clamp_frame_rate


def test_clock_frame_at_and_time_at_agree() -> None:
    clock = RecordingClock(frame_rate=50)

    assert clock.frame_duration == pytest.approx(0.02)
    assert clock.frame_at(0.0) == 0
    assert clock.frame_at(0.019) == 0
    assert clock.frame_at(0.0201) == 1
    assert clock.time_at(25) == pytest.approx(0.5)

    pow2 = RecordingClock(frame_rate=64)
    for frame in range(200):
        assert pow2.frame_at(pow2.time_at(frame)) == frame


def test_clock_non_finite_time_maps_to_frame_zero() -> None:
    clock = RecordingClock(frame_rate=60)

    assert clock.frame_at(math.inf) == 0
    assert clock.frame_at(math.nan) == 0


def test_clock_clamps_frame_rate() -> None:
    with pytest.warns(FrameRateClampWarning, match="at least 1"):
        clock = RecordingClock(frame_rate=0)

    assert clock.frame_rate == 1


def test_clamp_frame_rate_passes_valid_values_through() -> None:
    assert clamp_frame_rate(1) == 1
    assert clamp_frame_rate(144) == 144
    with pytest.warns(FrameRateClampWarning):
        assert clamp_frame_rate(-30) == 1
