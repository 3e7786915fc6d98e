"""SQLAlchemy-backed adapters over the platform's user, page and log tables."""

from __future__ import annotations

from sqlalchemy import and_, exists, or_, select
from sqlalchemy.orm import Session

from thanks.models.log_entry import LogEntry
from thanks.models.page import Page
from thanks.models.revision import Revision
from thanks.models.user import User
from thanks.models.user_session import UserSession
from thanks.platform.interfaces import ActionLogStore, ContentStore, IdentityService
from thanks.platform.rate_limit import SlidingWindowRateLimiter
from thanks.platform.types import (
    ActionRecord,
    EditRecord,
    Identity,
    TargetRef,
    anonymous_identity,
    page_url,
    profile_url,
)


class SqlIdentityService(IdentityService):
    """Identity lookups against the ``users`` and ``user_sessions`` tables."""

    def __init__(
        self,
        db: Session,
        *,
        site_base_url: str,
        rate_limiter: SlidingWindowRateLimiter,
    ) -> None:
        self._db = db
        self._site_base_url = site_base_url
        self._rate_limiter = rate_limiter

    def from_session_token(self, token: str) -> Identity:
        clean_token = token.strip()
        if not clean_token:
            return anonymous_identity()
        user = self._db.scalar(
            select(User)
            .join(UserSession, UserSession.user_id == User.id)
            .where(UserSession.token == clean_token)
        )
        if user is None:
            return anonymous_identity()
        return self.to_identity(user)

    def get_by_id(self, user_id: int) -> Identity | None:
        user = self._db.get(User, user_id)
        return self.to_identity(user) if user is not None else None

    def get_by_name(self, name: str) -> Identity | None:
        user = self._db.scalar(select(User).where(User.name == name.strip()))
        return self.to_identity(user) if user is not None else None

    def ping_limiter(self, identity: Identity, category: str) -> bool:
        return self._rate_limiter.hit(f"{category}:{identity.id}")

    def to_identity(self, user: User) -> Identity:
        return Identity(
            id=user.id,
            name=user.name,
            profile_url=profile_url(self._site_base_url, user.name),
            is_bot=user.is_bot,
            is_blocked=user.block_scope == "sitewide",
            is_partially_blocked=user.block_scope == "partial",
            is_globally_blocked=user.is_globally_blocked,
        )


class SqlContentStore(ContentStore):
    """Edit lookups against the ``revisions`` and ``pages`` tables."""

    def __init__(self, db: Session, identities: SqlIdentityService, *, site_base_url: str) -> None:
        self._db = db
        self._identities = identities
        self._site_base_url = site_base_url

    def get_edit(self, edit_id: int) -> EditRecord | None:
        revision = self._db.get(Revision, edit_id)
        if revision is None:
            return None
        page = self._db.get(Page, revision.page_id) if revision.page_id is not None else None
        author = (
            self._identities.get_by_id(revision.user_id) if revision.user_id is not None else None
        )
        return EditRecord(
            id=revision.id,
            page_id=revision.page_id,
            target=_target_for_page(page, self._site_base_url),
            author=author,
            parent_id=revision.parent_id,
            text_hidden=revision.text_deleted,
            timestamp=revision.timestamp,
        )

    def has_predecessor(self, edit: EditRecord) -> bool:
        if edit.page_id is None or edit.id is None:
            return False
        earlier = Revision.id < edit.id
        if edit.timestamp is not None:
            earlier = or_(
                Revision.timestamp < edit.timestamp,
                and_(Revision.timestamp == edit.timestamp, Revision.id < edit.id),
            )
        stmt = select(exists().where(Revision.page_id == edit.page_id, Revision.id != edit.id, earlier))
        return bool(self._db.scalar(stmt))


class SqlActionLogStore(ActionLogStore):
    """Action lookups against the ``log_entries`` table."""

    def __init__(self, db: Session, identities: SqlIdentityService, *, site_base_url: str) -> None:
        self._db = db
        self._identities = identities
        self._site_base_url = site_base_url

    def get_action(self, action_id: int) -> ActionRecord | None:
        entry = self._db.get(LogEntry, action_id)
        if entry is None:
            return None
        page = self._db.get(Page, entry.page_id) if entry.page_id is not None else None
        performer = (
            self._identities.get_by_id(entry.performer_id) if entry.performer_id is not None else None
        )
        return ActionRecord(
            id=entry.id,
            type=entry.log_type,
            action=entry.log_action,
            performer=performer,
            target=_target_for_page(page, self._site_base_url),
            associated_edit_id=entry.associated_rev_id or None,
            is_hidden=entry.deleted != 0,
        )


def _target_for_page(page: Page | None, site_base_url: str) -> TargetRef | None:
    if page is None:
        return None
    return TargetRef(display_text=page.title, url=page_url(site_base_url, page.title))
