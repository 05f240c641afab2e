from __future__ import annotations

from collections.abc import Mapping, Sequence
from functools import lru_cache

import pyray as rl

from .config import AxisBinding, default_axis_bindings


@lru_cache(maxsize=None)
def key_code(name: str) -> int | None:
    """Resolve a raylib key name (`"LEFT"`, `"a"`, `"KEY_SPACE"`) to its key code."""
    normalized = str(name).strip().upper()
    if not normalized:
        return None
    if not normalized.startswith("KEY_"):
        normalized = f"KEY_{normalized}"
    key = getattr(rl.KeyboardKey, normalized, None)
    if key is None:
        return None
    return int(key)


def _any_key_down(names: Sequence[str]) -> bool:
    for name in names:
        code = key_code(name)
        if code is not None and bool(rl.is_key_down(code)):
            return True
    return False


def _any_key_pressed(names: Sequence[str]) -> bool:
    for name in names:
        code = key_code(name)
        if code is not None and bool(rl.is_key_pressed(code)):
            return True
    return False


def _any_key_released(names: Sequence[str]) -> bool:
    for name in names:
        code = key_code(name)
        if code is not None and bool(rl.is_key_released(code)):
            return True
    return False


def _gamepad_value(binding: AxisBinding) -> float:
    if binding.gamepad_axis is None:
        return 0.0
    gamepad = int(binding.gamepad)
    if not bool(rl.is_gamepad_available(gamepad)):
        return 0.0
    value = float(rl.get_gamepad_axis_movement(gamepad, int(binding.gamepad_axis)))
    if abs(value) < float(binding.deadzone):
        return 0.0
    return -value if binding.invert else value


class RaylibInputSource:
    """`InputSource` polling the raylib keyboard and gamepads by named axis."""

    def __init__(self, bindings: Mapping[str, AxisBinding] | None = None) -> None:
        self._bindings: dict[str, AxisBinding] = dict(bindings if bindings is not None else default_axis_bindings())

    @property
    def axis_names(self) -> tuple[str, ...]:
        return tuple(self._bindings)

    def get_axis_value(self, axis_name: str) -> float:
        binding = self._bindings.get(str(axis_name))
        if binding is None:
            return 0.0
        value = 0.0
        if _any_key_down(binding.positive_keys):
            value += 1.0
        if _any_key_down(binding.negative_keys):
            value -= 1.0
        if value != 0.0:
            return value
        return _gamepad_value(binding)

    def get_button_down(self, axis_name: str) -> bool:
        binding = self._bindings.get(str(axis_name))
        if binding is None:
            return False
        return _any_key_pressed(binding.positive_keys) or _any_key_pressed(binding.negative_keys)

    def get_button_up(self, axis_name: str) -> bool:
        binding = self._bindings.get(str(axis_name))
        if binding is None:
            return False
        return _any_key_released(binding.positive_keys) or _any_key_released(binding.negative_keys)
