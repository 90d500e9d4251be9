from .jobs import (
    ArchiveResult,
    EmailDispatchRequest,
    EmailDispatchResult,
    EventNotificationRequest,
    EventNotificationResult,
    FieldChange,
    ReminderRunResult,
    RsvpNotificationRequest,
)
from .notification import (
    BulkUpdateResult,
    EventSummaryRead,
    NotificationMarkReadRequest,
    NotificationRead,
    UnreadCountRead,
)
from .preference import NotificationPreferenceRead, NotificationPreferenceUpdate

__all__ = [
    "ArchiveResult",
    "BulkUpdateResult",
    "EmailDispatchRequest",
    "EmailDispatchResult",
    "EventNotificationRequest",
    "EventNotificationResult",
    "EventSummaryRead",
    "FieldChange",
    "NotificationMarkReadRequest",
    "NotificationPreferenceRead",
    "NotificationPreferenceUpdate",
    "NotificationRead",
    "ReminderRunResult",
    "RsvpNotificationRequest",
    "UnreadCountRead",
]
