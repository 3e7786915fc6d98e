"""Send-thanks route."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from thanks.config import Settings, get_settings
from thanks.db.dependencies import get_db
from thanks.dependencies import get_notification_channel, get_rate_limiter, get_session_store
from thanks.dispatch.session import SessionFlagStore
from thanks.platform.notifications import NotificationChannel
from thanks.platform.rate_limit import SlidingWindowRateLimiter
from thanks.schemas.common import ErrorResponse
from thanks.schemas.thanks import ThankRequest, ThankResult
from thanks.services.thanks import send_thanks

router = APIRouter()

_ERROR_RESPONSES: dict[int | str, dict[str, object]] = {
    status: {"model": ErrorResponse} for status in (400, 401, 403, 404, 429)
}


@router.post("/thank", response_model=ThankResult, responses=_ERROR_RESPONSES)
def post_thank(
    payload: ThankRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    channel: NotificationChannel = Depends(get_notification_channel),
    session_store: SessionFlagStore = Depends(get_session_store),
    rate_limiter: SlidingWindowRateLimiter = Depends(get_rate_limiter),
) -> ThankResult:
    """Thank the author of an edit or the performer of a logged action."""

    return send_thanks(
        db,
        payload,
        settings=settings,
        channel=channel,
        session_store=session_store,
        rate_limiter=rate_limiter,
    )
