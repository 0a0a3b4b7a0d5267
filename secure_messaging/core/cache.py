"""Single-entry time-to-live cache."""

import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    """A cached value with the time it was captured."""

    value: T
    captured_at: float


class ExpiringSlot(Generic[T]):
    """
    Holds at most one value for a fixed time-to-live.

    Expiry is lazy: a read past the TTL clears the slot and reports it empty.
    Thread-safe; every operation runs under a single lock.
    """

    def __init__(
        self,
        ttl: float,
        *,
        clock: Callable[[], float] = time.monotonic,
        on_evict: Callable[[T], None] | None = None,
    ) -> None:
        """
        Args:
            ttl: Seconds a value stays valid.
            clock: Monotonic time source.
            on_evict: Called with a value when it is replaced, cleared or expires.
                Runs under the lock, so it must be quick.
        """
        if ttl <= 0:
            msg = "ttl must be positive"
            raise ValueError(msg)
        self._ttl = ttl
        self._clock = clock
        self._on_evict = on_evict
        self._entry: CacheEntry[T] | None = None
        self._lock = threading.Lock()

    @property
    def ttl(self) -> float:
        return self._ttl

    def set(self, value: T) -> None:
        """Store value, replacing any previous one."""
        with self._lock:
            self._evict()
            self._entry = CacheEntry(value=value, captured_at=self._clock())

    def get(self, copy: Callable[[T], T] | None = None) -> T | None:
        """
        Get the value if still valid, clearing it otherwise.

        Args:
            copy: Applied to the value before it leaves the lock.

        Returns:
            The value (or its copy), or None if empty or expired.
        """
        with self._lock:
            if self._entry is None:
                return None
            if self._clock() - self._entry.captured_at >= self._ttl:
                self._evict()
                return None
            value = self._entry.value
            return copy(value) if copy is not None else value

    def clear(self) -> None:
        """Empty the slot."""
        with self._lock:
            self._evict()

    def __bool__(self) -> bool:
        return self.get() is not None

    def _evict(self) -> None:
        entry, self._entry = self._entry, None
        if entry is not None and self._on_evict is not None:
            self._on_evict(entry.value)
