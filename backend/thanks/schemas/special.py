"""Schemas for the thanks confirmation page."""

from typing import Literal

from pydantic import BaseModel, Field


class ConfirmationPrompt(BaseModel):
    """What to show before the actor confirms a thanks."""

    type: Literal["rev", "log"] | None
    id: str
    message_key: str
    message: str
    can_submit: bool
    confirmation_required: bool


class ConfirmationSubmit(BaseModel):
    """Form submission for the confirmation page."""

    auth_token: str = Field(min_length=1)


class ThankedNotice(BaseModel):
    """Notice shown after a successful confirmation-page thanks."""

    message_key: str = "thanks-thanked-notice"
    message: str
    recipient: str
    recipient_url: str | None
    sender: str
