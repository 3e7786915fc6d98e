"""Platform page revision (edit) model."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, func
from sqlalchemy.orm import Mapped, mapped_column

from thanks.models.base import Base, IdMixin


class Revision(Base, IdMixin):
    """One edit of a page."""

    __tablename__ = "revisions"

    page_id: Mapped[int | None] = mapped_column(
        ForeignKey("pages.id", ondelete="SET NULL"),
        index=True,
        nullable=True,
    )
    # Null when authorship has been suppressed.
    user_id: Mapped[int | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"),
        index=True,
        nullable=True,
    )
    parent_id: Mapped[int | None] = mapped_column(nullable=True)
    text_deleted: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        index=True,
    )
