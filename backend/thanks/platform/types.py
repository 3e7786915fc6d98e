"""Typed views of platform data, independent of persistence."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from urllib.parse import quote

PROFILE_NAMESPACE = "UserProfile"


@dataclass(frozen=True, slots=True)
class Identity:
    """Actor or recipient handle as reported by the identity service."""

    id: int
    name: str
    profile_url: str = ""
    is_anonymous: bool = False
    is_bot: bool = False
    is_blocked: bool = False
    is_partially_blocked: bool = False
    is_globally_blocked: bool = False

    @property
    def has_any_block(self) -> bool:
        return self.is_blocked or self.is_partially_blocked


def anonymous_identity(name: str = "Anonymous") -> Identity:
    """Return the identity used for requests without a valid session."""

    return Identity(id=0, name=name, is_anonymous=True)


@dataclass(frozen=True, slots=True)
class TargetRef:
    """Addressable page with its display text and URL."""

    display_text: str
    url: str


@dataclass(frozen=True, slots=True)
class EditRecord:
    """One page edit with the visibility flags the thanks pipeline needs."""

    id: int | None
    page_id: int | None
    target: TargetRef | None
    author: Identity | None
    parent_id: int | None
    text_hidden: bool
    timestamp: datetime | None = None


@dataclass(frozen=True, slots=True)
class ActionRecord:
    """One administrative log entry."""

    id: int
    type: str
    action: str
    performer: Identity | None
    target: TargetRef | None
    associated_edit_id: int | None
    is_hidden: bool


def page_url(site_base_url: str, title: str) -> str:
    """Build the canonical URL of a page title."""

    path = quote(title.replace(" ", "_"), safe=":/")
    return f"{site_base_url.rstrip('/')}/wiki/{path}"


def profile_url(site_base_url: str, user_name: str) -> str:
    """Build the URL of a user's profile page."""

    return page_url(site_base_url, f"{PROFILE_NAMESPACE}:{user_name}")
