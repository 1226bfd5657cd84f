"""
Rolling frames-per-second estimate over one-second windows.
"""

from __future__ import annotations

import time
from typing import Callable, Optional

WINDOW_SECONDS = 1.0


class RateEstimator:
    """
    Counts frames and recomputes FPS once at least a second has passed.

    One instance belongs to one pipeline session. The last computed FPS is
    kept between windows so the overlay never drops back to zero.

    Example:
        rate = RateEstimator()
        for frame in frames:
            ...
            fps = rate.tick()
    """

    def __init__(
        self,
        start_time: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Args:
            start_time: Start of the first window. If None, the first tick starts it.
            clock: Time source used when tick() is called without a timestamp.
        """
        self._clock = clock
        self.last_sample_time: Optional[float] = start_time
        self.frame_count = 0
        self.fps = 0.0

    @property
    def started(self) -> bool:
        return self.last_sample_time is not None

    def tick(self, now: Optional[float] = None) -> float:
        """Record one processed frame and return the current FPS."""
        if now is None:
            now = self._clock()
        if self.last_sample_time is None:
            self.last_sample_time = now

        self.frame_count += 1
        elapsed = now - self.last_sample_time
        if elapsed >= WINDOW_SECONDS:
            self.fps = self.frame_count / elapsed
            self.frame_count = 0
            self.last_sample_time = now
        return self.fps

