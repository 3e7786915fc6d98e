"""Schemas for thank affordance lookups."""

from typing import Literal

from pydantic import BaseModel


class ThankAffordanceRead(BaseModel):
    """A thank link (or its already-thanked state) for one contribution row."""

    kind: Literal["rev", "log"]
    id: int
    recipient: str
    already_thanked: bool
    href: str
    confirmation_required: bool
