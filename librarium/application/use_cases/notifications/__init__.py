"""Public helpers for emitting and reading member notifications."""

from .center import (
    DEFAULT_NOTIFICATION_LIMIT,
    NotificationFeed,
    acknowledge_notifications,
    delete_notification,
    list_notifications,
    mark_all_notifications_read,
    set_notification_read_state,
)
from .events import (
    create_notification,
    publish_notifications,
    stage_fine_added,
    stage_notification,
    stage_overdue_reminder,
    stage_reservation_ready,
)

__all__ = [
    "DEFAULT_NOTIFICATION_LIMIT",
    "NotificationFeed",
    "acknowledge_notifications",
    "create_notification",
    "delete_notification",
    "list_notifications",
    "mark_all_notifications_read",
    "publish_notifications",
    "set_notification_read_state",
    "stage_fine_added",
    "stage_notification",
    "stage_overdue_reminder",
    "stage_reservation_ready",
]
