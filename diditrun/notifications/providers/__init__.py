"""Notification channel implementations."""

from diditrun.notifications.providers.desktop import DesktopDispatcher
from diditrun.notifications.providers.email import Mailer

__all__ = ["DesktopDispatcher", "Mailer"]
