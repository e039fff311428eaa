"""Random photo selection and slideshow state for the home page."""

import random
from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")

DEFAULT_SAMPLE_SIZE = 5
DEFAULT_INTERVAL_SECONDS = 4.0


def select_random_photos(
    photos: Sequence[T], count: int = DEFAULT_SAMPLE_SIZE, rng: random.Random | None = None
) -> list[T]:
    """
    Pick up to ``count`` photos uniformly at random.

    Every photo gets an independent uniform random sort key, the list is
    ordered by those keys and truncated. The input is left untouched.

    Args:
        photos: Candidate photos
        count: Maximum sample size
        rng: Random source (defaults to a freshly seeded generator)

    Returns:
        list: Sample of min(count, len(photos)) distinct photos
    """
    rng = rng or random.Random()
    keyed = [(rng.random(), index) for index in range(len(photos))]
    keyed.sort()
    return [photos[index] for _, index in keyed[: max(0, min(count, len(photos)))]]


class Slideshow:
    """
    Slideshow position and auto-advance timer.

    Navigation wraps around in both directions. ``tick`` is called with a
    monotonic clock reading and advances once ``interval`` seconds have
    passed since the last move.
    """

    def __init__(self, size: int, interval: float = DEFAULT_INTERVAL_SECONDS, playing: bool = True, now: float = 0.0):
        if size < 0:
            raise ValueError("Slideshow size cannot be negative")
        if interval <= 0:
            raise ValueError("Slideshow interval must be positive")

        self.size = size
        self.interval = interval
        self.playing = playing
        self.index = 0
        self.last_advanced = now

    @property
    def current(self) -> int:
        return self.index

    def next(self, now: float | None = None) -> int:
        if self.size:
            self.index = (self.index + 1) % self.size
        self._restart_timer(now)
        return self.index

    def previous(self, now: float | None = None) -> int:
        if self.size:
            self.index = (self.index - 1) % self.size
        self._restart_timer(now)
        return self.index

    def go_to(self, index: int, now: float | None = None) -> int:
        if self.size:
            self.index = index % self.size
        self._restart_timer(now)
        return self.index

    def play(self, now: float | None = None) -> None:
        self.playing = True
        self._restart_timer(now)

    def pause(self) -> None:
        self.playing = False

    def toggle(self, now: float | None = None) -> bool:
        """Switch between playing and paused; returns the new playing state."""
        if self.playing:
            self.pause()
        else:
            self.play(now)
        return self.playing

    def tick(self, now: float) -> bool:
        """
        Advance if the slideshow is playing and the interval has elapsed.

        Returns:
            bool: True if the slideshow moved to the next photo
        """
        if not self.playing or self.size < 2:
            return False
        if now - self.last_advanced < self.interval:
            return False

        self.index = (self.index + 1) % self.size
        self.last_advanced = now
        return True

    def _restart_timer(self, now: float | None) -> None:
        if now is not None:
            self.last_advanced = now
