"""Frames-per-second counter driven by a millisecond clock."""

from __future__ import annotations

from dataclasses import dataclass

WINDOW_MS = 1000


@dataclass
class FpsCounter:
    """Counts frames and reports how many fell in the last full second."""

    window_end: int = 0
    fps: int = 0
    frames: int = 0
    frames_at_window_start: int = 0

    def tick(self, time_ticks: float) -> int:
        """Record one frame at ``time_ticks`` milliseconds and return the rate."""
        now = int(time_ticks)
        if now >= self.window_end:
            self.fps = self.frames - self.frames_at_window_start
            self.window_end = now + WINDOW_MS
            self.frames_at_window_start = self.frames
        self.frames += 1
        return self.fps