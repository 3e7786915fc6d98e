"""SQLAlchemy metadata registry import for Alembic."""

from thanks.models import LogEntry, Page, Revision, ThanksLogEntry, User, UserSession
from thanks.models.base import Base

__all__ = ["Base", "LogEntry", "Page", "Revision", "ThanksLogEntry", "User", "UserSession"]
