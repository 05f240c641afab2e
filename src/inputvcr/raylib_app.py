from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

import pyray as rl

from .debug_log import vcr_debug_log

if TYPE_CHECKING:
    from .engine import InputVcr

MAX_FRAME_DT = 0.25


class View(Protocol):
    def update(self, dt: float) -> None: ...

    def draw(self) -> None: ...


def run_view(
    view: View,
    *,
    vcr: InputVcr | None = None,
    width: int = 1280,
    height: int = 720,
    title: str = "Input VCR",
    fps: int = 60,
    max_dt: float = MAX_FRAME_DT,
) -> int:
    """Run a Raylib window around a view until the window is closed.

    Each frame runs `view.handle_input()` (when present), then `vcr.advance(dt)`, then
    `view.update(dt)` and `view.draw()`, so commands issued from input take effect on the
    same tick. Long stalls are capped at `max_dt` so recording does not catch up a burst
    of frames after a window drag. Returns the number of frames run.
    """
    rl.init_window(int(width), int(height), str(title))
    rl.set_target_fps(int(fps))
    vcr_debug_log("view_open", width=int(width), height=int(height), fps=int(fps))
    handle_input = getattr(view, "handle_input", None)
    open_fn = getattr(view, "open", None)
    if callable(open_fn):
        open_fn()
    frames = 0
    try:
        while not rl.window_should_close():
            dt = min(float(rl.get_frame_time()), float(max_dt))
            if callable(handle_input):
                handle_input()
            if vcr is not None:
                vcr.advance(dt)
            view.update(dt)
            rl.begin_drawing()
            view.draw()
            rl.end_drawing()
            frames += 1
    finally:
        close_fn = getattr(view, "close", None)
        if callable(close_fn):
            close_fn()
        rl.close_window()
        vcr_debug_log("view_close", frames=frames)
    return frames
