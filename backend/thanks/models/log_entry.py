"""Platform administrative action log model."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from thanks.models.base import Base, IdMixin


class LogEntry(Base, IdMixin):
    """Recorded administrative action (move, upload, protect, ...)."""

    __tablename__ = "log_entries"

    log_type: Mapped[str] = mapped_column(String(64), index=True, nullable=False)
    log_action: Mapped[str] = mapped_column(String(64), nullable=False)
    performer_id: Mapped[int | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    page_id: Mapped[int | None] = mapped_column(
        ForeignKey("pages.id", ondelete="SET NULL"),
        nullable=True,
    )
    associated_rev_id: Mapped[int | None] = mapped_column(nullable=True)
    # Bitfield; any non-zero value hides part of the entry.
    deleted: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
