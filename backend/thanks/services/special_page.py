"""Confirmation page flow for sending thanks from a plain link."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.orm import Session

from thanks.config import Settings
from thanks.dispatch.errors import MESSAGES, ThanksValidationError
from thanks.dispatch.keys import ACTION_KIND, EDIT_KIND, EventKind
from thanks.dispatch.session import SessionFlagStore
from thanks.platform.notifications import NotificationChannel
from thanks.platform.rate_limit import SlidingWindowRateLimiter
from thanks.schemas.special import ConfirmationPrompt, ThankedNotice
from thanks.services.thanks import build_identity_service, build_request_context, build_thanks_pipeline

SPECIAL_PAGE_SOURCE = "specialpage"
INVALID_ID = "0"

_PROMPT_MESSAGES: dict[str, str] = {
    "thanks-confirmation-special-rev": "Do you want to publicly send thanks for this edit?",
    "thanks-confirmation-special-log": "Do you want to publicly send thanks for this log action?",
}
_NOTICE_MESSAGE = "{recipient} received your thanks."


@dataclass(frozen=True, slots=True)
class SubpageTarget:
    """Parsed confirmation page target; ``id`` is ``"0"`` when unusable."""

    kind: EventKind | None
    id: str = INVALID_ID

    @property
    def is_valid(self) -> bool:
        return self.kind is not None and self.id != INVALID_ID


def parse_thanks_subpage(par: str | None) -> SubpageTarget:
    """Parse ``"<id>"`` or ``"Log/<id>"``."""

    if not par:
        return SubpageTarget(kind=None)

    tokens = par.split("/")
    if tokens[0].lower() == "log":
        if len(tokens) == 1 or not _is_ascii_digits(tokens[1]):
            return SubpageTarget(kind=ACTION_KIND)
        return SubpageTarget(kind=ACTION_KIND, id=tokens[1])

    return SubpageTarget(kind=EDIT_KIND, id=par if _is_ascii_digits(par) else INVALID_ID)


def build_confirmation_prompt(target: SubpageTarget, *, confirmation_required: bool) -> ConfirmationPrompt:
    if target.kind is None:
        message_key = "thanks-error-no-id-specified"
    elif target.id == INVALID_ID:
        message_key = (
            "thanks-error-invalidrevision" if target.kind == EDIT_KIND else "thanks-error-invalid-log-id"
        )
    else:
        message_key = f"thanks-confirmation-special-{target.kind}"

    return ConfirmationPrompt(
        type=target.kind,
        id=target.id,
        message_key=message_key,
        message=_PROMPT_MESSAGES.get(message_key) or MESSAGES[message_key],
        can_submit=target.is_valid,
        confirmation_required=confirmation_required,
    )


def submit_confirmation(
    db: Session,
    target: SubpageTarget,
    auth_token: str,
    *,
    settings: Settings,
    channel: NotificationChannel,
    session_store: SessionFlagStore,
    rate_limiter: SlidingWindowRateLimiter,
) -> ThankedNotice:
    """Send the thanks confirmed on the page and build the success notice."""

    if target.kind is None:
        raise ThanksValidationError("thanks-error-no-id-specified")

    identities = build_identity_service(db, settings, rate_limiter)
    ctx = build_request_context(identities, session_store, auth_token)
    pipeline = build_thanks_pipeline(db, settings, identities=identities, channel=channel)
    result = pipeline.thank_reference(ctx, target.kind, target.id, source=SPECIAL_PAGE_SOURCE)

    recipient = identities.get_by_name(result.recipient_name)
    return ThankedNotice(
        message=_NOTICE_MESSAGE.format(recipient=result.recipient_name),
        recipient=result.recipient_name,
        recipient_url=recipient.profile_url if recipient is not None else None,
        sender=ctx.actor.name,
    )


def _is_ascii_digits(value: str) -> bool:
    return value.isascii() and value.isdigit()
