"""
Time-bounded cache for configuration read from the settings store.

One instance per cached concern, owned by the application object rather
than the module, so tests and separate app instances never share state.
"""

import time
from typing import Callable, Generic, Optional, TypeVar

T = TypeVar("T")


class SettingsCache(Generic[T]):
    def __init__(self, ttl_seconds: float = 60, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._value: Optional[T] = None
        self._stored_at = 0.0

    def get(self) -> Optional[T]:
        if self._value is None:
            return None
        if self._clock() - self._stored_at >= self.ttl_seconds:
            return None
        return self._value

    def set(self, value: T) -> None:
        self._value = value
        self._stored_at = self._clock()

    def invalidate(self) -> None:
        self._value = None
        self._stored_at = 0.0
