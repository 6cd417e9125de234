"""Notification system: events, formatting and channels."""

from diditrun.notifications.base import (
    Event,
    NotificationDispatcher,
    NotificationInfo,
    RunFinished,
)
from diditrun.notifications.formatting import format_notification
from diditrun.notifications.manager import Notifier

__all__ = [
    "Event",
    "NotificationDispatcher",
    "NotificationInfo",
    "Notifier",
    "RunFinished",
    "format_notification",
]
