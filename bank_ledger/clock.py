"""
Clock Module

Source of timestamps for transaction records. The ledger asks an injected
clock for the time instead of calling datetime.now() directly, so tests can
pin or advance time.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from typing import Optional
import threading


class Clock(ABC):
    """Abstract time source"""

    @abstractmethod
    def now(self) -> datetime:
        """Return the current timezone-aware time"""
        pass


class SystemClock(Clock):
    """Wall-clock time in UTC"""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class ManualClock(Clock):
    """
    Clock that only moves when told to

    Optionally advances by a fixed step after every reading so consecutive
    records get distinct, predictable timestamps.
    """

    def __init__(self, start: Optional[datetime] = None, step: Optional[timedelta] = None):
        self._current = start or datetime(2024, 1, 1, tzinfo=timezone.utc)
        self._step = step
        self._lock = threading.Lock()

    def now(self) -> datetime:
        with self._lock:
            current = self._current
            if self._step:
                self._current = current + self._step
            return current

    def advance(self, delta: timedelta) -> None:
        """Move the clock forward"""
        with self._lock:
            self._current = self._current + delta

    def set(self, moment: datetime) -> None:
        """Jump to an exact moment"""
        with self._lock:
            self._current = moment
