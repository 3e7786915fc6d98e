"""Thanks idempotency keys and their session flag names."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Literal

EventKind = Literal["rev", "log"]

EDIT_KIND: EventKind = "rev"
ACTION_KIND: EventKind = "log"

SESSION_FLAG_PREFIX = "thanks-thanked-"


@dataclass(frozen=True, slots=True)
class ThanksKey:
    """Idempotency key for one thankable event."""

    kind: EventKind
    id: int

    @property
    def value(self) -> str:
        return f"{self.kind}-{self.id}"

    def __str__(self) -> str:
        return self.value


def _current_flag(key: ThanksKey) -> str:
    return f"{SESSION_FLAG_PREFIX}{key.value}"


def _legacy_edit_flag(key: ThanksKey) -> str | None:
    # Older clients wrote edit flags with the bare id.
    if key.kind != EDIT_KIND:
        return None
    return f"{SESSION_FLAG_PREFIX}{key.id}"


# Newest format first.
_SESSION_FLAG_FORMATS: tuple[Callable[[ThanksKey], str | None], ...] = (
    _current_flag,
    _legacy_edit_flag,
)


def session_flag_keys(key: ThanksKey) -> tuple[str, ...]:
    """Return every session flag name under which ``key`` may have been marked."""

    names: list[str] = []
    for key_format in _SESSION_FLAG_FORMATS:
        name = key_format(key)
        if name is not None and name not in names:
            names.append(name)
    return tuple(names)
