"""Events, rendered notifications and the dispatcher interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import timedelta
from typing import Union

from diditrun.incantation import Incantation

APP_NAME = "Did it Run?"
APP_EMAIL = "notifications@didit.run"


@dataclass(frozen=True)
class RunFinished:
    """The wrapped command ran to completion (or failed to start)."""

    incantation: Incantation
    exit_code: int
    elapsed: timedelta


# Closed set of events; add variants here.
Event = Union[RunFinished]


@dataclass(frozen=True)
class NotificationInfo:
    """Channel agnostic rendering of an event."""

    summary: str
    details: str
    html_details: str


class NotificationDispatcher(ABC):
    """A notification channel."""

    @abstractmethod
    def dispatch(self, info: NotificationInfo) -> None:
        """Deliver ``info``; raise a NotifierError subclass on failure."""

    def close(self) -> None:
        """Release resources held by the channel."""
