"""FastAPI providers for process-wide thanks collaborators."""

from functools import lru_cache

from fastapi import Depends, Request

from thanks.config import Settings, get_settings
from thanks.dispatch.session import InMemorySessionStore, SessionFlagStore
from thanks.platform.notifications import NotificationChannel, build_notification_channel
from thanks.platform.rate_limit import SlidingWindowRateLimiter
from thanks.services.affordances import ViewEventBus


@lru_cache
def _shared_session_store(ttl_seconds: int) -> InMemorySessionStore:
    return InMemorySessionStore(ttl_seconds)


def get_session_store(settings: Settings = Depends(get_settings)) -> SessionFlagStore:
    """Return the process-wide session flag store."""

    return _shared_session_store(settings.thanks_session_ttl_seconds)


@lru_cache
def _shared_rate_limiter(limit: int, window_seconds: int) -> SlidingWindowRateLimiter:
    return SlidingWindowRateLimiter(limit, window_seconds)


def get_rate_limiter(settings: Settings = Depends(get_settings)) -> SlidingWindowRateLimiter:
    return _shared_rate_limiter(settings.thanks_rate_limit_count, settings.thanks_rate_limit_window_seconds)


def get_notification_channel(settings: Settings = Depends(get_settings)) -> NotificationChannel:
    return build_notification_channel(
        settings.notification_webhook_url,
        settings.notification_timeout_seconds,
    )


def get_view_bus(request: Request) -> ViewEventBus:
    """Return the listener bus registered on the app at startup."""

    return request.app.state.view_bus
