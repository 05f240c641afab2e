from __future__ import annotations

import datetime as dt
import enum
import itertools
import os
from collections.abc import Iterator
from pathlib import Path
from threading import Lock


_TRACE_LOCK = Lock()
_TRACE_PATH: Path | None = None
_TRACE_SEQ: Iterator[int] = itertools.count(1)


def _format_value(value: object) -> str:
    if isinstance(value, enum.Enum):
        text = value.name
    elif isinstance(value, bool):
        text = "1" if value else "0"
    elif isinstance(value, float):
        text = format(value, ".9g")
    elif isinstance(value, (tuple, list, frozenset, set)):
        text = ",".join(_format_value(item) for item in value)
    else:
        text = str(value)
    text = text.replace("\n", "\\n")
    if " " in text or "=" in text:
        text = '"' + text.replace('"', '\\"') + '"'
    return text


def vcr_debug_log_path() -> Path | None:
    with _TRACE_LOCK:
        return _TRACE_PATH


def init_vcr_debug_log(
    *,
    base_dir: Path,
    session: str = "vcr",
    frame_rate: int,
    channels: tuple[str, ...] = (),
) -> Path:
    """Start a trace file at `<base_dir>/logs/vcr/<session>-pid<pid>-<utc>.log`.

    Until this is called every `vcr_debug_log` call is a no-op. Lines are
    `<iso time> seq=<n> event=<name> key=value ...` with keys sorted.
    """
    global _TRACE_PATH, _TRACE_SEQ

    session_name = str(session).strip().lower() or "vcr"
    timestamp = dt.datetime.now(dt.timezone.utc).strftime("%Y%m%dT%H%M%S.%fZ")
    path = Path(base_dir) / "logs" / "vcr" / f"{session_name}-pid{os.getpid()}-{timestamp}.log"
    path.parent.mkdir(parents=True, exist_ok=True)

    with _TRACE_LOCK:
        _TRACE_PATH = path
        _TRACE_SEQ = itertools.count(1)

    vcr_debug_log("init", session=session_name, frame_rate=int(frame_rate), channels=tuple(channels), pid=os.getpid())
    return path


def vcr_debug_log(event: str, **fields: object) -> None:
    with _TRACE_LOCK:
        if _TRACE_PATH is None:
            return
        stamp = dt.datetime.now(dt.timezone.utc).isoformat(timespec="milliseconds")
        parts = [stamp, f"seq={next(_TRACE_SEQ)}", f"event={str(event).strip()}"]
        parts.extend(f"{key}={_format_value(fields[key])}" for key in sorted(fields))
        with _TRACE_PATH.open("a", encoding="utf-8") as handle:
            handle.write(" ".join(parts) + "\n")


def close_vcr_debug_log() -> None:
    global _TRACE_PATH
    with _TRACE_LOCK:
        _TRACE_PATH = None


__all__ = [
    "close_vcr_debug_log",
    "init_vcr_debug_log",
    "vcr_debug_log",
    "vcr_debug_log_path",
]
