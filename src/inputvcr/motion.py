from __future__ import annotations

import math
from enum import Enum

from .engine import InputVcr, VcrMode


class Indicator(Enum):
    IDLE = "idle"
    RECORDING = "recording"
    PLAYING = "playing"
    PAUSED = "paused"
    FINISHED = "finished"
    STOPPED = "stopped"


class MotionController:
    """Steers a point from VCR playback: the steer axis turns it, and it always moves forward.

    Registered as a playback listener, it also tracks whether the last playback ran to
    completion or was stopped early (`finished` always arrives before `stopped`). Stopping a
    recording or an idle VCR leaves that outcome alone.
    """

    def __init__(
        self,
        vcr: InputVcr,
        *,
        speed: float = 120.0,
        turn_rate: float = 90.0,
        steer_axis: str = "Horizontal",
        x: float = 0.0,
        y: float = 0.0,
        heading: float = 0.0,
    ) -> None:
        self.vcr = vcr
        self.speed = float(speed)
        self.turn_rate = float(turn_rate)
        self.steer_axis = str(steer_axis)
        self.x = float(x)
        self.y = float(y)
        self.heading = float(heading)
        self._finished_pending = False
        self._outcome = Indicator.IDLE
        vcr.add_listener(self)

    @property
    def indicator(self) -> Indicator:
        mode = self.vcr.mode
        if mode == VcrMode.RECORD:
            return Indicator.RECORDING
        if mode == VcrMode.PLAYBACK:
            return Indicator.PLAYING
        if mode == VcrMode.PAUSE:
            return Indicator.PAUSED
        return self._outcome

    def reset(self, *, x: float = 0.0, y: float = 0.0, heading: float = 0.0) -> None:
        self.x = float(x)
        self.y = float(y)
        self.heading = float(heading)

    def update(self, dt: float) -> None:
        if self.vcr.mode != VcrMode.PLAYBACK:
            return
        dt = float(dt)
        steer = float(self.vcr.get_axis(self.steer_axis))
        self.heading = math.fmod(self.heading + steer * self.turn_rate * dt, 360.0)
        rad = math.radians(self.heading)
        self.x += math.cos(rad) * self.speed * dt
        self.y += math.sin(rad) * self.speed * dt

    def on_playback_finished(self) -> None:
        self._finished_pending = True

    def on_playback_stopped(self) -> None:
        if self._finished_pending:
            self._outcome = Indicator.FINISHED
        elif self.vcr.stopped_from == VcrMode.PLAYBACK:
            self._outcome = Indicator.STOPPED
        self._finished_pending = False
