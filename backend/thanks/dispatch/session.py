"""Ephemeral per-session thanks flags."""

from __future__ import annotations

import threading
import time
from abc import ABC, abstractmethod
from collections.abc import Callable

from thanks.dispatch.keys import ThanksKey, session_flag_keys

DEFAULT_SESSION_TTL_SECONDS = 24 * 60 * 60


class SessionFlagStore(ABC):
    """Storage for session-scoped boolean flags."""

    @abstractmethod
    def get_flag(self, session_id: str, name: str) -> bool:
        """Return whether a flag is set for the session."""

    @abstractmethod
    def set_flag(self, session_id: str, name: str) -> None:
        """Set a flag for the session."""

    @abstractmethod
    def end_session(self, session_id: str) -> None:
        """Drop every flag of a session that no longer exists."""

    def flags_for(self, session_id: str) -> SessionFlags:
        return SessionFlags(self, session_id)


class InMemorySessionStore(SessionFlagStore):
    """Process-local flag store; flags vanish on restart.

    A session's flags expire after ``ttl_seconds`` without activity. Expired
    sessions are swept at most once per TTL period. ``ttl_seconds <= 0``
    keeps flags until ``end_session`` or ``clear``.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_SESSION_TTL_SECONDS,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._flags: dict[str, set[str]] = {}
        self._last_seen: dict[str, float] = {}
        self._last_sweep = clock()
        self._lock = threading.Lock()

    def get_flag(self, session_id: str, name: str) -> bool:
        now = self._clock()
        with self._lock:
            self._expire(now, session_id)
            flags = self._flags.get(session_id)
            if flags is None:
                return False
            self._last_seen[session_id] = now
            return name in flags

    def set_flag(self, session_id: str, name: str) -> None:
        now = self._clock()
        with self._lock:
            self._expire(now, session_id)
            self._flags.setdefault(session_id, set()).add(name)
            self._last_seen[session_id] = now

    def end_session(self, session_id: str) -> None:
        with self._lock:
            self._drop(session_id)

    def session_count(self) -> int:
        with self._lock:
            return len(self._flags)

    def clear(self) -> None:
        with self._lock:
            self._flags.clear()
            self._last_seen.clear()

    def _expire(self, now: float, session_id: str) -> None:
        if self.ttl_seconds <= 0:
            return
        cutoff = now - self.ttl_seconds
        if self._last_seen.get(session_id, now) <= cutoff:
            self._drop(session_id)
        if now - self._last_sweep < self.ttl_seconds:
            return
        self._last_sweep = now
        for stale in [sid for sid, stamp in self._last_seen.items() if stamp <= cutoff]:
            self._drop(stale)

    def _drop(self, session_id: str) -> None:
        self._flags.pop(session_id, None)
        self._last_seen.pop(session_id, None)


class SessionFlags:
    """Flag accessor bound to one session."""

    def __init__(self, store: SessionFlagStore, session_id: str) -> None:
        self._store = store
        self.session_id = session_id

    def has(self, name: str) -> bool:
        return self._store.get_flag(self.session_id, name)

    def set(self, name: str) -> None:
        self._store.set_flag(self.session_id, name)

    def has_thanked(self, key: ThanksKey) -> bool:
        return any(self.has(name) for name in session_flag_keys(key))


def mark_sent(session: SessionFlags, key: ThanksKey) -> None:
    """Record ``key`` as thanked in the session under every known flag format."""

    for name in session_flag_keys(key):
        session.set(name)
