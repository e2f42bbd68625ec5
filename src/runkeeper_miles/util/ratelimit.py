from __future__ import annotations

from collections.abc import Callable
import threading
import time
from typing import TypeVar

T = TypeVar("T")


def sleep_seconds(seconds: float) -> None:
    if seconds > 0:
        time.sleep(seconds)


class Throttle:
    """Single-slot gate: one call at a time, each preceded by a fixed pause.

    The pause is taken before every call, including the first one.
    """

    def __init__(self, delay_seconds: float, sleep: Callable[[float], None] = sleep_seconds) -> None:
        if delay_seconds < 0:
            raise ValueError("delay_seconds must be >= 0")
        self.delay_seconds = delay_seconds
        self._sleep = sleep
        self._lock = threading.Lock()

    def run(self, func: Callable[[], T]) -> T:
        with self._lock:
            self._sleep(self.delay_seconds)
            return func()
