from __future__ import annotations

from pathlib import Path
from typing import Literal, TypeAlias

import msgspec

from .engine import DEFAULT_CHANNELS
from .recording import DEFAULT_FRAME_RATE, clamp_frame_rate

ConfigFormat: TypeAlias = Literal["toml", "json"]

CONFIG_NAME = "inputvcr.toml"


class VcrConfigError(ValueError):
    pass


class AxisBinding(msgspec.Struct, forbid_unknown_fields=True):
    """Keyboard / gamepad sources for one named axis.

    Key names are raylib `KeyboardKey` names without the `KEY_` prefix (`"LEFT"`, `"A"`).
    The axis reads +1 while any positive key is down, -1 for negative keys, and falls
    back to the gamepad axis (outside the deadzone) when no key is held.
    """

    negative_keys: list[str] = msgspec.field(default_factory=list)
    positive_keys: list[str] = msgspec.field(default_factory=list)
    gamepad: int = 0
    gamepad_axis: int | None = None
    deadzone: float = 0.2
    invert: bool = False


def default_axis_bindings() -> dict[str, AxisBinding]:
    return {
        "Horizontal": AxisBinding(negative_keys=["A", "LEFT"], positive_keys=["D", "RIGHT"], gamepad_axis=0),
        "Vertical": AxisBinding(negative_keys=["S", "DOWN"], positive_keys=["W", "UP"], gamepad_axis=1, invert=True),
        "Jump": AxisBinding(positive_keys=["SPACE"]),
    }


class VcrConfig(msgspec.Struct, forbid_unknown_fields=True):
    frame_rate: int = DEFAULT_FRAME_RATE
    channels: list[str] = msgspec.field(default_factory=lambda: list(DEFAULT_CHANNELS))
    axis_bindings: dict[str, AxisBinding] = msgspec.field(default_factory=default_axis_bindings)
    player_speed: float = 120.0
    turn_rate: float = 90.0

    def normalized(self) -> VcrConfig:
        """Copy with the frame rate clamped and channel names de-duplicated in order."""
        channels: list[str] = []
        for name in self.channels:
            name = str(name).strip()
            if name and name not in channels:
                channels.append(name)
        return msgspec.structs.replace(
            self,
            frame_rate=clamp_frame_rate(self.frame_rate, stacklevel=2),
            channels=channels,
        )


def default_config() -> VcrConfig:
    return VcrConfig()


def _format_for_path(path: Path) -> ConfigFormat:
    suffix = path.suffix.lower()
    if suffix == ".toml":
        return "toml"
    if suffix == ".json":
        return "json"
    raise VcrConfigError(f"unsupported config file type: {path.name!r} (expected .toml or .json)")


def load_config_bytes(data: bytes, *, fmt: ConfigFormat = "toml") -> VcrConfig:
    try:
        if fmt == "toml":
            config = msgspec.toml.decode(data, type=VcrConfig)
        elif fmt == "json":
            config = msgspec.json.decode(data, type=VcrConfig)
        else:
            raise VcrConfigError(f"unknown config format: {fmt!r}")
    except msgspec.DecodeError as exc:
        raise VcrConfigError(f"invalid {fmt} config: {exc}") from exc
    return config.normalized()


def load_config(path: Path) -> VcrConfig:
    path = Path(path)
    fmt = _format_for_path(path)
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise VcrConfigError(f"cannot read config {path}: {exc}") from exc
    return load_config_bytes(data, fmt=fmt)


def resolve_config(path: Path | None) -> VcrConfig:
    if path is None:
        return default_config()
    return load_config(path)


def dump_config(config: VcrConfig) -> bytes:
    return msgspec.json.format(msgspec.json.encode(config), indent=2)


__all__ = [
    "CONFIG_NAME",
    "AxisBinding",
    "VcrConfig",
    "VcrConfigError",
    "default_axis_bindings",
    "default_config",
    "dump_config",
    "load_config",
    "load_config_bytes",
    "resolve_config",
]
