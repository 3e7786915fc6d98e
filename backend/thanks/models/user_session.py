"""Platform login session model."""

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from thanks.models.base import Base, CreatedAtMixin, IdMixin


class UserSession(Base, IdMixin, CreatedAtMixin):
    """Maps an auth token to a logged-in account."""

    __tablename__ = "user_sessions"

    token: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
