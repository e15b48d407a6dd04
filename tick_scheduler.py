import abc
import logging
from typing import Optional

import pygame

logger = logging.getLogger(__name__)

MOVE_EVENT = pygame.USEREVENT + 1


def _to_timer_ms(interval_ms: float) -> int:
    if interval_ms <= 0:
        raise ValueError(f"tick interval must be positive, got {interval_ms}")
    return max(1, int(round(interval_ms)))


class TickScheduler(abc.ABC):
    """Single periodic trigger that can be started, stopped and rescheduled.

    Only one trigger exists at a time; rescheduling replaces it, so ticks
    never overlap.
    """

    def __init__(self):
        self.interval_ms: Optional[float] = None

    @property
    def running(self) -> bool:
        return self.interval_ms is not None

    def start(self, interval_ms: float) -> None:
        self._arm(interval_ms)
        self.interval_ms = float(interval_ms)

    def reschedule(self, interval_ms: float) -> None:
        self.stop()
        self.start(interval_ms)

    def stop(self) -> None:
        if self.interval_ms is not None:
            self._disarm()
        self.interval_ms = None

    @abc.abstractmethod
    def _arm(self, interval_ms: float) -> None:
        """Install the periodic trigger."""

    @abc.abstractmethod
    def _disarm(self) -> None:
        """Remove the periodic trigger."""


class PygameTickScheduler(TickScheduler):
    """Posts ``event_type`` to the pygame event queue every interval."""

    def __init__(self, event_type: int = MOVE_EVENT):
        super().__init__()
        self.event_type = event_type

    def _arm(self, interval_ms: float) -> None:
        ms = _to_timer_ms(interval_ms)
        pygame.time.set_timer(self.event_type, ms)
        logger.debug("tick timer armed at %d ms", ms)

    def _disarm(self) -> None:
        pygame.time.set_timer(self.event_type, 0)


class ManualTickScheduler(TickScheduler):
    """Headless tick source driven by an explicit clock."""

    def __init__(self):
        super().__init__()
        self._elapsed = 0.0
        self.restarts = 0

    def _arm(self, interval_ms: float) -> None:
        _to_timer_ms(interval_ms)
        self._elapsed = 0.0
        self.restarts += 1

    def _disarm(self) -> None:
        self._elapsed = 0.0

    def advance(self, ms: float) -> int:
        """Advance the clock by ``ms`` and return how many ticks fire."""
        if self.interval_ms is None:
            return 0
        self._elapsed += ms
        fired = int(self._elapsed // self.interval_ms)
        self._elapsed -= fired * self.interval_ms
        return fired
