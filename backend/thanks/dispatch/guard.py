"""Actor and recipient eligibility checks."""

from __future__ import annotations

from collections.abc import Callable

from thanks.dispatch.errors import (
    BlockedError,
    BotRecipientError,
    InvalidRecipientError,
    NotLoggedInError,
    RateLimitedError,
    SelfThanksError,
)
from thanks.dispatch.events import ContributionEvent
from thanks.platform.interfaces import IdentityService
from thanks.platform.types import Identity

RATE_LIMIT_CATEGORY = "thanks-notification"


def is_registered(actor: Identity) -> bool:
    return not actor.is_anonymous


def is_blocked_sitewide(actor: Identity) -> bool:
    return actor.is_blocked or actor.is_globally_blocked


def is_self_thanks(actor: Identity, recipient: Identity) -> bool:
    return actor.id == recipient.id


def can_receive_thanks(recipient: Identity, *, send_to_bots: bool) -> bool:
    """Return whether ``recipient`` may be thanked at all."""

    if recipient.is_anonymous:
        return False
    if recipient.is_bot and not send_to_bots:
        return False
    return True


class AuthorizationGuard:
    """Runs the ordered eligibility checks; the first failure is raised."""

    def __init__(self, identities: IdentityService, *, send_to_bots: bool = False) -> None:
        self._identities = identities
        self._send_to_bots = send_to_bots

    def authorize(self, actor: Identity, event: ContributionEvent) -> None:
        checks: tuple[Callable[[Identity, ContributionEvent], None], ...] = (
            self._check_logged_in,
            self._check_rate_limit,
            self._check_not_blocked,
            self._check_not_self,
            self._check_recipient_registered,
            self._check_recipient_not_bot,
        )
        for check in checks:
            check(actor, event)

    def _check_logged_in(self, actor: Identity, _: ContributionEvent) -> None:
        if not is_registered(actor):
            raise NotLoggedInError()

    def _check_rate_limit(self, actor: Identity, _: ContributionEvent) -> None:
        if self._identities.ping_limiter(actor, RATE_LIMIT_CATEGORY):
            raise RateLimitedError(actor=actor.name)

    def _check_not_blocked(self, actor: Identity, _: ContributionEvent) -> None:
        if is_blocked_sitewide(actor):
            raise BlockedError(actor=actor.name)

    def _check_not_self(self, actor: Identity, event: ContributionEvent) -> None:
        if is_self_thanks(actor, event.recipient):
            raise SelfThanksError()

    def _check_recipient_registered(self, _: Identity, event: ContributionEvent) -> None:
        if event.recipient.is_anonymous:
            raise InvalidRecipientError()

    def _check_recipient_not_bot(self, _: Identity, event: ContributionEvent) -> None:
        if event.recipient.is_bot and not self._send_to_bots:
            raise BotRecipientError()
