"""Interfaces for the external services the thanks pipeline consumes."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime

from thanks.platform.types import ActionRecord, EditRecord, Identity


class IdentityService(ABC):
    """Resolves actors and recipients and reports their standing."""

    @abstractmethod
    def from_session_token(self, token: str) -> Identity:
        """Return the logged-in identity for a token, or an anonymous identity."""

    @abstractmethod
    def get_by_id(self, user_id: int) -> Identity | None:
        """Return an identity by account id."""

    @abstractmethod
    def get_by_name(self, name: str) -> Identity | None:
        """Return an identity by account name."""

    @abstractmethod
    def ping_limiter(self, identity: Identity, category: str) -> bool:
        """Count one action in ``category``; return True when the identity is over its limit."""


class ContentStore(ABC):
    """Read access to page edits."""

    @abstractmethod
    def get_edit(self, edit_id: int) -> EditRecord | None:
        """Return an edit by id."""

    @abstractmethod
    def has_predecessor(self, edit: EditRecord) -> bool:
        """Return whether an earlier edit exists on the same page."""


class ActionLogStore(ABC):
    """Read access to the administrative action log."""

    @abstractmethod
    def get_action(self, action_id: int) -> ActionRecord | None:
        """Return a log entry by id."""


@dataclass(frozen=True, slots=True)
class DedupRecord:
    """Durable proof that an actor thanked a key."""

    actor_id: int
    actor_name: str
    thanks_key: str
    recipient_id: int
    recipient_name: str
    recorded_at: datetime
    source: str | None = None


class AuditStore(ABC):
    """Append-only durable thanks log."""

    @abstractmethod
    def has_record(self, actor_id: int, thanks_key: str) -> bool:
        """Return whether the actor already has a record for the key."""

    @abstractmethod
    def append(self, record: DedupRecord) -> bool:
        """Write a record; return False when one already existed for (actor, key)."""
