from __future__ import annotations

from pathlib import Path

from inputvcr.debug_log import (
    close_vcr_debug_log,
    init_vcr_debug_log,
    vcr_debug_log,
    vcr_debug_log_path,
)


def test_vcr_debug_log_writes_events_to_file(tmp_path: Path) -> None:
    log_path = init_vcr_debug_log(
        base_dir=tmp_path,
        session="Demo",
        frame_rate=60,
        channels=("Horizontal", "Vertical"),
    )
    vcr_debug_log("mode", from_mode="PASSTHRU", to_mode="RECORD", note="two\nlines")

    assert vcr_debug_log_path() == log_path
    assert log_path.parent == tmp_path / "logs" / "vcr"
    assert log_path.name.startswith("demo-pid")
    text = log_path.read_text(encoding="utf-8")
    assert "event=init" in text
    assert "channels=Horizontal,Vertical" in text
    assert "event=mode from_mode=PASSTHRU note=two\\nlines to_mode=RECORD" in text

    close_vcr_debug_log()
    assert vcr_debug_log_path() is None


def test_vcr_debug_log_is_noop_until_initialized(tmp_path: Path) -> None:
    vcr_debug_log("orphan", value=1)

    assert vcr_debug_log_path() is None
    assert not (tmp_path / "logs").exists()


def test_vcr_debug_log_formats_values_and_numbers_lines(tmp_path: Path) -> None:
    from inputvcr import VcrMode

    log_path = init_vcr_debug_log(base_dir=tmp_path, frame_rate=4)
    vcr_debug_log("mode", to_mode=VcrMode.PAUSE, dt=0.25, ok=True, axes=["Horizontal", "Jump"])
    vcr_debug_log("note", text="a b=c")

    lines = log_path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 3
    assert " seq=1 event=init " in lines[0]
    assert lines[1].endswith("seq=2 event=mode axes=Horizontal,Jump dt=0.25 ok=1 to_mode=PAUSE")
    assert lines[2].endswith('seq=3 event=note text="a b=c"')
