"""Platform page model."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from thanks.models.base import Base, CreatedAtMixin, IdMixin


class Page(Base, IdMixin, CreatedAtMixin):
    """Addressable content page."""

    __tablename__ = "pages"

    title: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
