"""Public API surface for did-it-run."""

from diditrun.common.errors import (
    ConfigurationError,
    DesktopError,
    DidItRunError,
    InvalidVersionError,
    LoadConfigError,
    MailerError,
    MalformedVersionError,
    MissingCredentialsError,
    NotifierError,
)
from diditrun.common.logging import configure_logging
from diditrun.config import (
    Config,
    Credentials,
    MergeOptions,
    UserConfig,
    UserCredentials,
    load_file,
    merge,
)
from diditrun.duration_format import format_duration
from diditrun.incantation import Incantation, IncantationOutcome, run
from diditrun.notifications import NotificationInfo, Notifier, RunFinished, format_notification

__all__ = [
    "Config",
    "ConfigurationError",
    "Credentials",
    "DesktopError",
    "DidItRunError",
    "Incantation",
    "IncantationOutcome",
    "InvalidVersionError",
    "LoadConfigError",
    "MailerError",
    "MalformedVersionError",
    "MergeOptions",
    "MissingCredentialsError",
    "NotificationInfo",
    "Notifier",
    "NotifierError",
    "RunFinished",
    "UserConfig",
    "UserCredentials",
    "configure_logging",
    "format_duration",
    "format_notification",
    "load_file",
    "merge",
    "run",
]
