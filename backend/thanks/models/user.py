"""Platform user account model (read-only for this service)."""

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from thanks.models.base import Base, CreatedAtMixin, IdMixin


class User(Base, IdMixin, CreatedAtMixin):
    """Registered platform account."""

    __tablename__ = "users"

    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    is_bot: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    # None, "sitewide" or "partial"
    block_scope: Mapped[str | None] = mapped_column(String(16), nullable=True)
    is_globally_blocked: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
