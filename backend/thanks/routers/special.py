"""Confirmation page routes for thanks sent from plain links."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from thanks.config import Settings, get_settings
from thanks.db.dependencies import get_db
from thanks.dependencies import get_notification_channel, get_rate_limiter, get_session_store
from thanks.dispatch.session import SessionFlagStore
from thanks.platform.notifications import NotificationChannel
from thanks.platform.rate_limit import SlidingWindowRateLimiter
from thanks.schemas.common import ApiResponse
from thanks.schemas.special import ConfirmationPrompt, ConfirmationSubmit, ThankedNotice
from thanks.services.special_page import build_confirmation_prompt, parse_thanks_subpage, submit_confirmation

router = APIRouter(prefix="/special/thanks")


@router.get("", response_model=ApiResponse[ConfirmationPrompt])
@router.get("/{par:path}", response_model=ApiResponse[ConfirmationPrompt])
def get_confirmation(
    par: str = "",
    settings: Settings = Depends(get_settings),
) -> ApiResponse[ConfirmationPrompt]:
    """Describe the confirmation step for an edit id or ``Log/<id>``."""

    prompt = build_confirmation_prompt(
        parse_thanks_subpage(par),
        confirmation_required=settings.thanks_confirmation_required,
    )
    return ApiResponse(data=prompt)


@router.post("/{par:path}", response_model=ApiResponse[ThankedNotice])
def post_confirmation(
    payload: ConfirmationSubmit,
    par: str,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    channel: NotificationChannel = Depends(get_notification_channel),
    session_store: SessionFlagStore = Depends(get_session_store),
    rate_limiter: SlidingWindowRateLimiter = Depends(get_rate_limiter),
) -> ApiResponse[ThankedNotice]:
    """Send the confirmed thanks."""

    notice = submit_confirmation(
        db,
        parse_thanks_subpage(par),
        payload.auth_token,
        settings=settings,
        channel=channel,
        session_store=session_store,
        rate_limiter=rate_limiter,
    )
    return ApiResponse(data=notice)
