"""ORM models package exports."""

from thanks.models.log_entry import LogEntry
from thanks.models.page import Page
from thanks.models.revision import Revision
from thanks.models.thanks_log_entry import ThanksLogEntry
from thanks.models.user import User
from thanks.models.user_session import UserSession

__all__ = [
    "LogEntry",
    "Page",
    "Revision",
    "ThanksLogEntry",
    "User",
    "UserSession",
]
