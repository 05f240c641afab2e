from __future__ import annotations

import pytest

import inputvcr.input_axes as input_axes
from inputvcr import InputVcr, VcrMode
from inputvcr.config import AxisBinding
from inputvcr.input_axes import RaylibInputSource, key_code


def _patch_keys(monkeypatch: pytest.MonkeyPatch, *, down: set[str], pressed: set[str] = frozenset()) -> None:
    down_codes = {key_code(name) for name in down}
    pressed_codes = {key_code(name) for name in pressed}
    monkeypatch.setattr(input_axes.rl, "is_key_down", lambda key: int(key) in down_codes)
    monkeypatch.setattr(input_axes.rl, "is_key_pressed", lambda key: int(key) in pressed_codes)
    monkeypatch.setattr(input_axes.rl, "is_key_released", lambda _key: False)
    monkeypatch.setattr(input_axes.rl, "is_gamepad_available", lambda _gamepad: False)


def test_key_code_accepts_short_and_prefixed_names() -> None:
    assert key_code("left") == int(input_axes.rl.KeyboardKey.KEY_LEFT)
    assert key_code("KEY_SPACE") == int(input_axes.rl.KeyboardKey.KEY_SPACE)
    assert key_code("not-a-key") is None
    assert key_code("") is None


@pytest.mark.parametrize(
    ("down", "expected"),
    (
        (set(), 0.0),
        ({"D"}, 1.0),
        ({"LEFT"}, -1.0),
        ({"A", "RIGHT"}, 0.0),
    ),
)
def test_keyboard_axis_values(monkeypatch: pytest.MonkeyPatch, down: set[str], expected: float) -> None:
    _patch_keys(monkeypatch, down=down)
    source = RaylibInputSource()

    assert source.get_axis_value("Horizontal") == expected


def test_unknown_axis_reads_zero(monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_keys(monkeypatch, down={"D"})
    source = RaylibInputSource()

    assert source.get_axis_value("Throttle") == 0.0
    assert source.get_button_down("Throttle") is False


def test_gamepad_axis_used_when_no_key_is_held(monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_keys(monkeypatch, down=set())
    monkeypatch.setattr(input_axes.rl, "is_gamepad_available", lambda gamepad: gamepad == 0)
    movement = {0: 0.1, 1: 0.6}
    monkeypatch.setattr(input_axes.rl, "get_gamepad_axis_movement", lambda _gamepad, axis: movement[axis])
    source = RaylibInputSource(
        {
            "Horizontal": AxisBinding(gamepad_axis=0, deadzone=0.2),
            "Vertical": AxisBinding(gamepad_axis=1, invert=True),
        }
    )

    assert source.get_axis_value("Horizontal") == 0.0
    assert source.get_axis_value("Vertical") == pytest.approx(-0.6)


def test_vcr_records_from_raylib_source(monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_keys(monkeypatch, down={"RIGHT", "W"}, pressed={"SPACE"})
    source = RaylibInputSource()
    vcr = InputVcr(input_source=source, channels=("Horizontal", "Vertical"), frame_rate=4)
    vcr.new_recording()
    vcr.advance(0.25)

    assert vcr.mode == VcrMode.RECORD
    assert vcr.recording is not None
    assert [(s.axis_name, s.axis_value) for s in vcr.recording.get_frame_samples(0)] == [
        ("Horizontal", 1.0),
        ("Vertical", 1.0),
    ]
    assert vcr.get_button_down("Jump") is True
