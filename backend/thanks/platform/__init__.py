"""Adapters and interfaces for the host platform's services."""

from thanks.platform.interfaces import (
    ActionLogStore,
    AuditStore,
    ContentStore,
    DedupRecord,
    IdentityService,
)
from thanks.platform.notifications import (
    NOTIFICATION_TYPES,
    NotificationChannel,
    NotificationPayload,
    TransmissionError,
)
from thanks.platform.types import ActionRecord, EditRecord, Identity, TargetRef, anonymous_identity

__all__ = [
    "NOTIFICATION_TYPES",
    "ActionLogStore",
    "ActionRecord",
    "AuditStore",
    "ContentStore",
    "DedupRecord",
    "EditRecord",
    "Identity",
    "IdentityService",
    "NotificationChannel",
    "NotificationPayload",
    "TargetRef",
    "TransmissionError",
    "anonymous_identity",
]
