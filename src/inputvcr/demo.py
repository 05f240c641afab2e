from __future__ import annotations

import math

import pyray as rl

from .config import VcrConfig
from .engine import InputVcr, VcrMode
from .input_axes import RaylibInputSource
from .motion import Indicator, MotionController

BG_COLOR = rl.Color(18, 20, 24, 255)
TEXT_COLOR = rl.Color(230, 230, 230, 255)
BODY_COLOR = rl.Color(200, 200, 210, 255)
HEADING_COLOR = rl.Color(250, 200, 90, 255)

INDICATOR_COLORS: dict[Indicator, rl.Color] = {
    Indicator.IDLE: rl.Color(255, 255, 255, 255),
    Indicator.RECORDING: rl.Color(230, 41, 55, 255),
    Indicator.PLAYING: rl.Color(255, 255, 255, 255),
    Indicator.PAUSED: rl.Color(253, 249, 0, 255),
    Indicator.FINISHED: rl.Color(0, 228, 48, 255),
    Indicator.STOPPED: rl.Color(130, 130, 130, 255),
}

HELP_LINES = (
    "hold SPACE: record a new take, release: play it back",
    "R: replay   P: pause/resume   S: stop",
)


class VcrDemoView:
    """Record a steering take with the keyboard, then watch it replayed."""

    def __init__(self, config: VcrConfig) -> None:
        self.config = config
        self.vcr = InputVcr.from_config(config, input_source=RaylibInputSource(config.axis_bindings))
        self.motion = MotionController(
            self.vcr,
            speed=float(config.player_speed),
            turn_rate=float(config.turn_rate),
        )

    def _restart_playback(self) -> None:
        # An explicit recording forces a rewind even when paused mid-playback.
        self.motion.reset()
        self.vcr.play(self.vcr.recording)

    def handle_input(self) -> None:
        if rl.is_key_pressed(rl.KeyboardKey.KEY_SPACE):
            self.vcr.new_recording()
        if rl.is_key_released(rl.KeyboardKey.KEY_SPACE):
            self._restart_playback()
        if rl.is_key_pressed(rl.KeyboardKey.KEY_R):
            self._restart_playback()
        if rl.is_key_pressed(rl.KeyboardKey.KEY_P):
            if self.vcr.mode == VcrMode.PAUSE:
                self.vcr.play()
            else:
                self.vcr.pause()
        if rl.is_key_pressed(rl.KeyboardKey.KEY_S):
            self.vcr.stop()

    def update(self, dt: float) -> None:
        self.motion.update(dt)

    def draw(self) -> None:
        rl.clear_background(BG_COLOR)
        cx = rl.get_screen_width() * 0.5 + self.motion.x
        cy = rl.get_screen_height() * 0.5 + self.motion.y
        rad = math.radians(self.motion.heading)
        rl.draw_circle(int(cx), int(cy), 14.0, BODY_COLOR)
        rl.draw_line(int(cx), int(cy), int(cx + math.cos(rad) * 28.0), int(cy + math.sin(rad) * 28.0), HEADING_COLOR)

        indicator = self.motion.indicator
        rl.draw_rectangle(16, 16, 24, 24, INDICATOR_COLORS[indicator])
        recording = self.vcr.recording
        total = recording.total_frames if recording is not None else 0
        status = f"{self.vcr.mode.name.lower()}  frame {self.vcr.current_frame}/{total}  [{indicator.value}]"
        rl.draw_text(status, 52, 18, 20, TEXT_COLOR)
        for idx, line in enumerate(HELP_LINES):
            rl.draw_text(line, 16, 52 + idx * 22, 18, TEXT_COLOR)
