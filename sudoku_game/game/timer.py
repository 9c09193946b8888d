"""Game clock that can be paused and resumed without losing time."""

from __future__ import annotations
import time
from typing import Callable, Optional


def format_elapsed(seconds: int) -> str:
    """Render seconds as m:ss."""
    minutes, secs = divmod(int(seconds), 60)
    return f"{minutes}:{secs:02d}"


class GameTimer:
    """
    Elapsed-time tracker read from a monotonic clock.

    At most one run is counting at any time: start() discards the current
    run before beginning a new one, and pause()/resume() fold the running
    span into the accumulated total.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._accumulated = 0.0
        self._started_at: Optional[float] = None

    @property
    def running(self) -> bool:
        return self._started_at is not None

    @property
    def paused(self) -> bool:
        return not self.running

    @property
    def elapsed(self) -> int:
        """Whole seconds counted so far."""
        total = self._accumulated
        if self._started_at is not None:
            total += self._clock() - self._started_at
        return int(total)

    def start(self) -> None:
        """Restart from zero."""
        self._accumulated = 0.0
        self._started_at = self._clock()

    def pause(self) -> None:
        if self._started_at is not None:
            self._accumulated += self._clock() - self._started_at
            self._started_at = None

    def resume(self) -> None:
        if self._started_at is None:
            self._started_at = self._clock()

    def reset(self) -> None:
        """Stop and zero the timer."""
        self._accumulated = 0.0
        self._started_at = None

    def load(self, seconds: int) -> None:
        """Continue counting from a saved elapsed time, keeping the running state."""
        if seconds < 0:
            raise ValueError(f"Elapsed time cannot be negative, got {seconds}")
        self._accumulated = float(seconds)
        if self._started_at is not None:
            self._started_at = self._clock()

    def __str__(self) -> str:
        return format_elapsed(self.elapsed)
