# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import math
import time
from collections.abc import Callable
from dataclasses import dataclass
from threading import Lock
from typing import Protocol

from balitour.shared.logging import logger


@dataclass(slots=True)
class AttemptEntry:
    client_key: str
    attempt_count: int
    last_attempt_at: float


class AttemptStore(Protocol):
    """Backing state for the limiter; a shared cache can stand in for memory."""

    def get(self, client_key: str) -> AttemptEntry | None: ...
    def put(self, entry: AttemptEntry) -> None: ...
    def delete(self, client_key: str) -> None: ...
    def prune(self, older_than: float) -> int: ...


class InMemoryAttemptStore:
    def __init__(self) -> None:
        self._entries: dict[str, AttemptEntry] = {}

    def get(self, client_key: str) -> AttemptEntry | None:
        return self._entries.get(client_key)

    def put(self, entry: AttemptEntry) -> None:
        self._entries[entry.client_key] = entry

    def delete(self, client_key: str) -> None:
        self._entries.pop(client_key, None)

    def prune(self, older_than: float) -> int:
        stale = [key for key, entry in self._entries.items() if entry.last_attempt_at < older_than]
        for key in stale:
            del self._entries[key]
        return len(stale)

    def __len__(self) -> int:
        return len(self._entries)


class LoginRateLimiter:
    """Fixed-window login attempt counter keyed by client address.

    Every attempt counts. Once ``max_attempts`` have been recorded the key is
    refused until ``lockout_seconds`` pass since the last recorded attempt.
    Refused attempts do not move that timestamp.
    """

    def __init__(
        self,
        store: AttemptStore | None = None,
        *,
        max_attempts: int = 5,
        lockout_seconds: float = 15 * 60,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._store = store if store is not None else InMemoryAttemptStore()
        self._max_attempts = max_attempts
        self._lockout_seconds = lockout_seconds
        self._clock = clock
        self._lock = Lock()
        self._last_prune = clock()

    @property
    def max_attempts(self) -> int:
        return self._max_attempts

    def check_and_record_attempt(self, client_key: str) -> bool:
        now = self._clock()
        with self._lock:
            self._prune_expired(now)
            entry = self._store.get(client_key)

            if entry is None or now - entry.last_attempt_at > self._lockout_seconds:
                self._store.put(AttemptEntry(client_key, 1, now))
                return True

            if entry.attempt_count >= self._max_attempts:
                logger.warning(
                    f"login_attempts: blocked client={client_key} "
                    f"attempts={entry.attempt_count}"
                )
                return False

            self._store.put(AttemptEntry(client_key, entry.attempt_count + 1, now))
            return True

    def _prune_expired(self, now: float) -> None:
        # Entries past the window would be reset on their next attempt anyway.
        if now - self._last_prune < self._lockout_seconds:
            return
        self._last_prune = now
        removed = self._store.prune(now - self._lockout_seconds)
        if removed:
            logger.debug(f"login_attempts: pruned {removed} expired entries")

    def reset(self, client_key: str) -> None:
        with self._lock:
            self._store.delete(client_key)

    def retry_after(self, client_key: str) -> int:
        """Seconds until ``client_key`` may try again, 0 when not blocked."""
        now = self._clock()
        with self._lock:
            entry = self._store.get(client_key)
            if entry is None or entry.attempt_count < self._max_attempts:
                return 0
            remaining = entry.last_attempt_at + self._lockout_seconds - now
        return max(0, math.ceil(remaining))

    def attempts(self, client_key: str) -> int:
        with self._lock:
            entry = self._store.get(client_key)
            return entry.attempt_count if entry else 0


__all__ = [
    "AttemptEntry",
    "AttemptStore",
    "InMemoryAttemptStore",
    "LoginRateLimiter",
]
