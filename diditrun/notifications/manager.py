"""Notifier orchestrating the configured channels."""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Sequence

from diditrun.common.errors import MissingCredentialsError, NotifierError
from diditrun.config.models import Config, Credentials, SmtpCredentials
from diditrun.notifications.base import Event, NotificationDispatcher
from diditrun.notifications.formatting import format_notification
from diditrun.notifications.providers.desktop import DesktopDispatcher
from diditrun.notifications.providers.email import Mailer

logger = logging.getLogger(__name__)

DesktopFactory = Callable[[], NotificationDispatcher]
MailerFactory = Callable[[Config, SmtpCredentials], NotificationDispatcher]


class Notifier:
    """Builds the active channels once and fans events out to them in order.

    Delivery is fail-fast: the first channel error stops the remaining
    channels and propagates. Channels that already delivered are not undone.
    """

    def __init__(
        self,
        config: Config,
        credentials: Credentials,
        *,
        desktop_factory: Optional[DesktopFactory] = None,
        mailer_factory: Optional[MailerFactory] = None,
    ) -> None:
        self._dispatchers: List[NotificationDispatcher] = []
        try:
            self._initialize_dispatchers(
                config,
                credentials,
                desktop_factory or DesktopDispatcher,
                mailer_factory or Mailer,
            )
        except NotifierError:
            self.close()
            raise

    def _initialize_dispatchers(
        self,
        config: Config,
        credentials: Credentials,
        desktop_factory: DesktopFactory,
        mailer_factory: MailerFactory,
    ) -> None:
        if config.desktop_notifications:
            self._dispatchers.append(desktop_factory())

        if config.email is not None and credentials.smtp is None:
            raise MissingCredentialsError(
                "No smtp credentials provided.",
                context={"recipients": config.email.recipients},
            )
        if config.email is not None and credentials.smtp is not None:
            self._dispatchers.append(mailer_factory(config, credentials.smtp))

        logger.debug(
            "Notification channels: %s",
            ", ".join(type(d).__name__ for d in self._dispatchers) or "none",
        )

    @property
    def dispatchers(self) -> Sequence[NotificationDispatcher]:
        return tuple(self._dispatchers)

    def notify(self, event: Event) -> None:
        """Format ``event`` once and deliver it through every channel."""
        info = format_notification(event)
        for dispatcher in self._dispatchers:
            logger.debug("Dispatching via %s", type(dispatcher).__name__)
            try:
                dispatcher.dispatch(info)
            except NotifierError as exc:
                logger.debug("Notification via %s failed: %s", type(dispatcher).__name__, exc)
                raise

    def close(self) -> None:
        """Release every channel."""
        for dispatcher in self._dispatchers:
            dispatcher.close()

    def __enter__(self) -> "Notifier":
        return self

    def __exit__(self, *exc_info: Optional[object]) -> None:
        self.close()
