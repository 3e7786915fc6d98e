"""Thanks audit log model."""

from datetime import datetime

from sqlalchemy import DateTime, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from thanks.models.base import Base, IdMixin


class ThanksLogEntry(Base, IdMixin):
    """Append-only record proving an actor thanked a given key."""

    __tablename__ = "thanks_log"
    __table_args__ = (UniqueConstraint("actor_id", "thanks_key", name="uq_thanks_log_actor_key"),)

    actor_id: Mapped[int] = mapped_column(index=True, nullable=False)
    actor_name: Mapped[str] = mapped_column(String(255), nullable=False)
    thanks_key: Mapped[str] = mapped_column(String(64), nullable=False)
    recipient_id: Mapped[int] = mapped_column(index=True, nullable=False)
    recipient_name: Mapped[str] = mapped_column(String(255), nullable=False)
    source: Mapped[str | None] = mapped_column(String(64), nullable=True)
    recorded_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
