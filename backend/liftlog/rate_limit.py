"""
Fixed-window limiter for authentication attempts.

Counters live in a ``RateLimitStore`` keyed by ``auth:<client ip>``. The
in-memory store is per process and forgets everything on restart; a shared
store (redis, memcached, ...) can be dropped in behind the same protocol for
multi-process deployments.

The in-memory map is never pruned unless ``sweep()`` is called (or
``sweep_on_check`` is set), so many distinct client addresses grow it without
bound for the lifetime of the process.

Each attempt is recorded by a single ``hit()`` on the store, which opens or
resets the window, compares against the limit and increments in one step, so
concurrent attempts from one address are never lost or double counted.
"""
from __future__ import annotations

import ipaddress
import logging
import math
import threading
import time
from dataclasses import dataclass
from typing import Callable, Mapping, Protocol

log = logging.getLogger(__name__)

UNKNOWN_CLIENT = "unknown"
DEFAULT_MAX_ATTEMPTS = 5
DEFAULT_WINDOW_SECONDS = 15 * 60


class RateLimitExceeded(Exception):
    def __init__(self, retry_after: float, message: str = "Too many requests. Try again later."):
        super().__init__(message)
        self.retry_after = retry_after

    @property
    def retry_after_seconds(self) -> int:
        return max(1, math.ceil(self.retry_after))


@dataclass(slots=True)
class RateLimitEntry:
    count: int
    reset_at: float


class RateLimitStore(Protocol):
    def get(self, key: str) -> RateLimitEntry | None: ...
    def set(self, key: str, entry: RateLimitEntry) -> None: ...
    def delete(self, key: str) -> None: ...
    def increment(self, key: str) -> int: ...
    def hit(self, key: str, now: float, window_seconds: float, max_attempts: int) -> tuple[bool, RateLimitEntry]: ...
    def prune(self, now: float) -> int: ...


class InMemoryRateLimitStore:
    def __init__(self) -> None:
        self._entries: dict[str, RateLimitEntry] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: str) -> RateLimitEntry | None:
        with self._lock:
            entry = self._entries.get(key)
            # hand out a copy so callers never mutate shared state
            return None if entry is None else RateLimitEntry(entry.count, entry.reset_at)

    def set(self, key: str, entry: RateLimitEntry) -> None:
        with self._lock:
            self._entries[key] = RateLimitEntry(entry.count, entry.reset_at)

    def delete(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def increment(self, key: str) -> int:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return 0
            entry.count += 1
            return entry.count

    def hit(self, key: str, now: float, window_seconds: float, max_attempts: int) -> tuple[bool, RateLimitEntry]:
        """
        Record one attempt under the lock. Opens a fresh window when the key
        is absent or expired, refuses without counting once ``max_attempts``
        is reached. Returns ``(permitted, copy of the entry)``.
        """
        with self._lock:
            entry = self._entries.get(key)
            if entry is None or now > entry.reset_at:
                entry = self._entries[key] = RateLimitEntry(count=1, reset_at=now + window_seconds)
                permitted = True
            elif entry.count >= max_attempts:
                permitted = False
            else:
                entry.count += 1
                permitted = True
            return permitted, RateLimitEntry(entry.count, entry.reset_at)

    def prune(self, now: float) -> int:
        with self._lock:
            expired = [k for k, e in self._entries.items() if now > e.reset_at]
            for k in expired:
                del self._entries[k]
            return len(expired)


def resolve_client_ip(headers: Mapping[str, str]) -> str:
    forwarded = headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    return headers.get("x-real-ip") or headers.get("cf-connecting-ip") or UNKNOWN_CLIENT


def is_exempt(ip: str) -> bool:
    """Local and unattributed traffic is never throttled."""
    if ip in (UNKNOWN_CLIENT, "localhost"):
        return True
    try:
        return ipaddress.ip_address(ip).is_loopback
    except ValueError:
        return False


class RateLimiter:
    def __init__(
        self,
        store: RateLimitStore | None = None,
        *,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        window_seconds: float = DEFAULT_WINDOW_SECONDS,
        clock: Callable[[], float] = time.time,
        sweep_on_check: bool = False,
    ):
        self.store = store if store is not None else InMemoryRateLimitStore()
        self.max_attempts = max_attempts
        self.window_seconds = window_seconds
        self.clock = clock
        self.sweep_on_check = sweep_on_check

    @staticmethod
    def key_for(ip: str) -> str:
        return f"auth:{ip}"

    def check(
        self,
        ip: str,
        max_attempts: int | None = None,
        window_seconds: float | None = None,
    ) -> None:
        """Record one attempt from ``ip``; raise ``RateLimitExceeded`` when over the limit."""
        if is_exempt(ip):
            return
        max_attempts = self.max_attempts if max_attempts is None else max_attempts
        window_seconds = self.window_seconds if window_seconds is None else window_seconds

        now = self.clock()
        if self.sweep_on_check:
            self.sweep(now)

        key = self.key_for(ip)
        permitted, entry = self.store.hit(key, now, window_seconds, max_attempts)
        if not permitted:
            log.warning("rate limit exceeded key=%s count=%d", key, entry.count)
            raise RateLimitExceeded(retry_after=entry.reset_at - now)

    def sweep(self, now: float | None = None) -> int:
        removed = self.store.prune(self.clock() if now is None else now)
        if removed:
            log.info("pruned %d expired rate limit entries", removed)
        return removed
