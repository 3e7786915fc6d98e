"""Thanks audit trail routes."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from thanks.config import Settings, get_settings
from thanks.db.dependencies import get_db
from thanks.schemas.common import ApiResponse
from thanks.schemas.thanks_log import ThanksLogLine
from thanks.services.audit import format_thanks_log_entry, list_thanks_log

router = APIRouter(prefix="/thanks")


@router.get("/log", response_model=ApiResponse[list[ThanksLogLine]])
def get_thanks_log(
    actor_id: int | None = Query(default=None, ge=1),
    recipient_id: int | None = Query(default=None, ge=1),
    limit: int = Query(default=50, ge=1, le=500),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> ApiResponse[list[ThanksLogLine]]:
    """List recorded thanks, newest first."""

    records = list_thanks_log(db, actor_id=actor_id, recipient_id=recipient_id, limit=limit)
    return ApiResponse(
        data=[format_thanks_log_entry(record, site_base_url=settings.site_base_url) for record in records]
    )
