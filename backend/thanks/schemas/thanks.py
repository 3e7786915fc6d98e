"""Thank request/response schemas."""

from pydantic import BaseModel, Field


class ThankRequest(BaseModel):
    """Send-thanks payload; exactly one of ``edit_id``/``action_id`` is expected."""

    edit_id: int | None = Field(default=None, ge=1)
    action_id: int | None = Field(default=None, ge=1)
    source: str | None = Field(default=None, max_length=64)
    auth_token: str = Field(min_length=1)


class ThankResult(BaseModel):
    """Successful thanks, fresh or already sent."""

    success: bool = True
    recipient: str
