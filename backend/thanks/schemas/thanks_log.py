"""Thanks audit log response schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class ThanksLogEntryRead(BaseModel):
    """Serialized thanks log record."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    actor_id: int
    actor_name: str
    thanks_key: str
    recipient_id: int
    recipient_name: str
    source: str | None
    recorded_at: datetime


class ThanksLogLine(BaseModel):
    """Human-facing rendering of a thanks log record."""

    entry: ThanksLogEntryRead
    actor_url: str
    recipient_url: str
    summary: str
