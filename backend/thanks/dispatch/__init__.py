"""Thanks dispatch-and-deduplication core."""

from thanks.dispatch.context import RequestContext
from thanks.dispatch.dedup import DuplicateDetector
from thanks.dispatch.dispatcher import Dispatcher, DispatchResult, build_notification
from thanks.dispatch.events import ContributionEvent
from thanks.dispatch.guard import AuthorizationGuard, can_receive_thanks
from thanks.dispatch.keys import ACTION_KIND, EDIT_KIND, ThanksKey, session_flag_keys
from thanks.dispatch.pipeline import ThanksPipeline
from thanks.dispatch.resolver import INVALID_EDIT_ID, ReferenceResolver
from thanks.dispatch.session import InMemorySessionStore, SessionFlags, SessionFlagStore, mark_sent

__all__ = [
    "ACTION_KIND",
    "EDIT_KIND",
    "INVALID_EDIT_ID",
    "AuthorizationGuard",
    "ContributionEvent",
    "DispatchResult",
    "Dispatcher",
    "DuplicateDetector",
    "InMemorySessionStore",
    "ReferenceResolver",
    "RequestContext",
    "SessionFlagStore",
    "SessionFlags",
    "ThanksKey",
    "ThanksPipeline",
    "build_notification",
    "can_receive_thanks",
    "mark_sent",
    "session_flag_keys",
]
