"""View listeners that decide where a thank affordance applies.

Rendering is left to the host UI; listeners only report which contribution
rows can be thanked and whether the current session already did so.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Literal

from sqlalchemy.orm import Session

from thanks.config import Settings
from thanks.dispatch.context import RequestContext
from thanks.dispatch.errors import ThanksNotFoundError
from thanks.dispatch.guard import can_receive_thanks, is_registered
from thanks.dispatch.keys import ACTION_KIND, EDIT_KIND, ThanksKey
from thanks.platform.sql import SqlActionLogStore, SqlContentStore, SqlIdentityService
from thanks.platform.types import ActionRecord, EditRecord, Identity

SPECIAL_PAGE_PATH = "/special/thanks"


@dataclass(frozen=True, slots=True)
class ThankAffordance:
    """A thankable contribution row as seen by one actor."""

    kind: Literal["rev", "log"]
    id: int
    recipient: str
    already_thanked: bool
    href: str
    confirmation_required: bool


def confirmation_path(key: ThanksKey) -> str:
    if key.kind == ACTION_KIND:
        return f"{SPECIAL_PAGE_PATH}/Log/{key.id}"
    return f"{SPECIAL_PAGE_PATH}/{key.id}"


class ContributionViewListener(ABC):
    """Receives one callback per contribution row the host UI renders."""

    @abstractmethod
    def on_history_view(
        self,
        ctx: RequestContext,
        edit: EditRecord,
        previous: EditRecord | None,
    ) -> ThankAffordance | None:
        """Page history row."""

    @abstractmethod
    def on_diff_view(
        self,
        ctx: RequestContext,
        new: EditRecord,
        old: EditRecord | None,
    ) -> ThankAffordance | None:
        """Diff header for ``new`` compared against ``old``."""

    @abstractmethod
    def on_log_line(self, ctx: RequestContext, entry: ActionRecord) -> ThankAffordance | None:
        """Action log line."""


class ThanksAffordanceListener(ContributionViewListener):
    """Offers a thank affordance wherever the pipeline would accept a thanks."""

    def __init__(
        self,
        *,
        send_to_bots: bool = False,
        log_type_allowlist: Iterable[str] = (),
        confirmation_required: bool = True,
    ) -> None:
        self._send_to_bots = send_to_bots
        self._log_type_allowlist = frozenset(log_type_allowlist)
        self._confirmation_required = confirmation_required

    @classmethod
    def from_settings(cls, settings: Settings) -> ThanksAffordanceListener:
        return cls(
            send_to_bots=settings.thanks_send_to_bots,
            log_type_allowlist=settings.thanks_log_type_allowlist,
            confirmation_required=settings.thanks_confirmation_required,
        )

    def on_history_view(
        self,
        ctx: RequestContext,
        edit: EditRecord,
        previous: EditRecord | None,
    ) -> ThankAffordance | None:
        return self._edit_affordance(ctx, edit, previous)

    def on_diff_view(
        self,
        ctx: RequestContext,
        new: EditRecord,
        old: EditRecord | None,
    ) -> ThankAffordance | None:
        return self._edit_affordance(ctx, new, old)

    def on_log_line(self, ctx: RequestContext, entry: ActionRecord) -> ThankAffordance | None:
        if not self._actor_may_thank(ctx.actor):
            return None
        if entry.type not in self._log_type_allowlist:
            return None
        if not self._recipient_ok(ctx.actor, entry.performer):
            return None

        if entry.associated_edit_id:
            key = ThanksKey(kind=EDIT_KIND, id=entry.associated_edit_id)
        else:
            key = ThanksKey(kind=ACTION_KIND, id=entry.id)
        return self._affordance(ctx, key, entry.performer)

    def _edit_affordance(
        self,
        ctx: RequestContext,
        edit: EditRecord,
        previous: EditRecord | None,
    ) -> ThankAffordance | None:
        if edit.id is None or edit.author is None or edit.text_hidden:
            return None
        if not self._actor_may_thank(ctx.actor) or not self._recipient_ok(ctx.actor, edit.author):
            return None
        # Diffs spanning several edits cannot be attributed to one author.
        if previous is not None and edit.parent_id and edit.parent_id != previous.id:
            return None
        return self._affordance(ctx, ThanksKey(kind=EDIT_KIND, id=edit.id), edit.author)

    def _actor_may_thank(self, actor: Identity) -> bool:
        return is_registered(actor) and not actor.has_any_block and not actor.is_globally_blocked

    def _recipient_ok(self, actor: Identity, recipient: Identity | None) -> bool:
        if recipient is None or recipient.id == actor.id:
            return False
        return can_receive_thanks(recipient, send_to_bots=self._send_to_bots)

    def _affordance(self, ctx: RequestContext, key: ThanksKey, recipient: Identity) -> ThankAffordance:
        return ThankAffordance(
            kind=key.kind,
            id=key.id,
            recipient=recipient.name,
            already_thanked=ctx.session.has_thanked(key),
            href=confirmation_path(key),
            confirmation_required=self._confirmation_required,
        )


class ViewEventBus:
    """Fans view events out to a fixed list of listeners."""

    def __init__(self, listeners: Sequence[ContributionViewListener]) -> None:
        self._listeners = tuple(listeners)

    def history_view(
        self,
        ctx: RequestContext,
        edit: EditRecord,
        previous: EditRecord | None = None,
    ) -> list[ThankAffordance]:
        return _collect(listener.on_history_view(ctx, edit, previous) for listener in self._listeners)

    def diff_view(
        self,
        ctx: RequestContext,
        new: EditRecord,
        old: EditRecord | None = None,
    ) -> list[ThankAffordance]:
        return _collect(listener.on_diff_view(ctx, new, old) for listener in self._listeners)

    def log_line(self, ctx: RequestContext, entry: ActionRecord) -> list[ThankAffordance]:
        return _collect(listener.on_log_line(ctx, entry) for listener in self._listeners)


def build_view_bus(settings: Settings) -> ViewEventBus:
    """Register the startup listener list."""

    return ViewEventBus((ThanksAffordanceListener.from_settings(settings),))


def revision_affordances(
    db: Session,
    bus: ViewEventBus,
    ctx: RequestContext,
    identities: SqlIdentityService,
    settings: Settings,
    *,
    revision_id: int,
    previous_id: int | None = None,
    view: Literal["history", "diff"] = "history",
) -> list[ThankAffordance]:
    """Run the history or diff listeners for one stored edit."""

    content = SqlContentStore(db, identities, site_base_url=settings.site_base_url)
    edit = content.get_edit(revision_id)
    if edit is None:
        raise ThanksNotFoundError("thanks-error-invalidrevision")
    previous = content.get_edit(previous_id) if previous_id is not None else None
    if view == "diff":
        return bus.diff_view(ctx, edit, previous)
    return bus.history_view(ctx, edit, previous)


def log_entry_affordances(
    db: Session,
    bus: ViewEventBus,
    ctx: RequestContext,
    identities: SqlIdentityService,
    settings: Settings,
    *,
    log_id: int,
) -> list[ThankAffordance]:
    """Run the log line listeners for one stored action."""

    entry = SqlActionLogStore(db, identities, site_base_url=settings.site_base_url).get_action(log_id)
    if entry is None:
        raise ThanksNotFoundError("thanks-error-invalid-log-id")
    return bus.log_line(ctx, entry)


def _collect(results: Iterable[ThankAffordance | None]) -> list[ThankAffordance]:
    return [result for result in results if result is not None]
