"""Public helpers for producing, delivering and managing notifications."""

from .archive import DEFAULT_RETENTION_DAYS, archive_old_notifications
from .dispatch_email import NotificationDispatcher
from .email_templates import DEFAULT_STYLE, EmailContent, EmailRequest, render_email
from .events import (
    DeliveryResult,
    create_notification_with_preference_check,
    get_event_or_error,
    notify_event_attendees,
    notify_event_cancelled,
    notify_event_updated,
    notify_rsvp,
)
from .inbox import (
    InboxItem,
    count_unread,
    delete_all_notifications,
    delete_notification,
    list_notifications,
    mark_all_as_read,
    mark_as_read,
    mark_many_as_read,
)
from .preferences import (
    get_or_create_preferences,
    is_notification_enabled,
    update_preferences,
)
from .templates import (
    format_cancellation_notification,
    format_confirmation_notification,
    format_reminder_notification,
    format_update_notification,
)

__all__ = [
    "DEFAULT_RETENTION_DAYS",
    "DEFAULT_STYLE",
    "DeliveryResult",
    "EmailContent",
    "EmailRequest",
    "InboxItem",
    "NotificationDispatcher",
    "archive_old_notifications",
    "count_unread",
    "create_notification_with_preference_check",
    "delete_all_notifications",
    "delete_notification",
    "format_cancellation_notification",
    "format_confirmation_notification",
    "format_reminder_notification",
    "format_update_notification",
    "get_event_or_error",
    "get_or_create_preferences",
    "is_notification_enabled",
    "list_notifications",
    "mark_all_as_read",
    "mark_as_read",
    "mark_many_as_read",
    "notify_event_attendees",
    "notify_event_cancelled",
    "notify_event_updated",
    "notify_rsvp",
    "render_email",
    "update_preferences",
]
