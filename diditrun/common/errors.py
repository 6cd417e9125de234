"""Shared error taxonomy for did-it-run."""

from __future__ import annotations

from typing import Any, Mapping


def _normalize_context_value(value: Any) -> Any:
    if isinstance(value, Mapping):
        return normalize_context(value)
    if isinstance(value, (list, tuple)):
        return [_normalize_context_value(item) for item in value]
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    return str(value)


def normalize_context(context: Mapping[str, Any]) -> dict[str, Any]:
    """Return a JSON-friendly copy of an error context mapping."""
    return {key: _normalize_context_value(val) for key, val in context.items()}


class DidItRunError(Exception):
    """Base error type for typed failure handling."""

    def __init__(
        self,
        message: str,
        *,
        context: Mapping[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.context = normalize_context(context or {})
        if cause is not None:
            self.__cause__ = cause

    @property
    def error_type(self) -> str:
        return self.__class__.__name__

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.error_type, "message": str(self), "context": self.context}


class ConfigurationError(DidItRunError):
    """Failure due to invalid configuration or credentials."""


class LoadConfigError(ConfigurationError):
    """A config or credentials file could not be read or parsed."""


class MalformedVersionError(ConfigurationError):
    """A schema version string is not a valid semantic version."""


class InvalidVersionError(ConfigurationError):
    """A schema version is newer than the latest supported one."""


class NotifierError(DidItRunError):
    """Failure while building or using a notification channel."""


class DesktopError(NotifierError):
    """The platform notification backend failed."""


class MailerError(NotifierError):
    """Failure in the email channel."""


class MailerIoError(MailerError):
    """Socket level failure while talking to the SMTP server."""


class MailerTlsError(MailerError):
    """TLS context creation or handshake failure."""


class SmtpProtocolError(MailerError):
    """The SMTP server rejected a command or replied unexpectedly."""


class AddressResolutionError(SmtpProtocolError):
    """The SMTP hostname did not resolve to any socket address."""


class MessageBuildError(MailerError):
    """A notification email could not be assembled."""


class MissingCredentialsError(MailerError):
    """Email notifications were requested without SMTP credentials."""


class NoEmailConfigError(MailerError):
    """The mailer was constructed without an email configuration."""
