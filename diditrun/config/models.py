"""Configuration and credentials models.

``User*`` models mirror what a file or the command line may provide, so every
field is optional. ``Config`` and ``Credentials`` are the resolved forms handed
to the notifier; build them with ``from_user_config`` and
``from_user_credentials``.
"""

from __future__ import annotations

from datetime import timedelta
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from semver import Version

from diditrun.config.defaults import (
    LATEST_CONFIG_VERSION,
    LATEST_CREDENTIALS_VERSION,
    STARTTLS_PORT,
)
from diditrun.config.versioning import resolve_version


class EmailConfig(BaseModel):
    """Recipients of email notifications."""

    model_config = ConfigDict(frozen=True)

    recipients: List[str] = Field(default_factory=list, strict=True, description="Email addresses to notify")


class SmtpCredentials(BaseModel):
    """Login details for the outgoing SMTP server."""

    model_config = ConfigDict(frozen=True)

    hostname: str = Field(strict=True, description="SMTP server hostname")
    port: Optional[int] = Field(default=None, gt=0, le=65535, strict=True, description="SMTP port (STARTTLS)")
    username: str = Field(strict=True, description="SMTP login")
    password: str = Field(repr=False, strict=True, description="SMTP password")

    @property
    def effective_port(self) -> int:
        return self.port if self.port is not None else STARTTLS_PORT


class UserConfig(BaseModel):
    """Partial configuration as read from a file or the command line."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    version: Optional[str] = Field(default=None, strict=True, description="Config schema version")
    desktop_notifications: Optional[bool] = Field(
        default=None, strict=True, description="Show desktop notifications"
    )
    email: Optional[EmailConfig] = Field(default=None, description="Email notification settings")
    validate_inputs: Optional[bool] = Field(
        default=None,
        alias="validate",
        strict=True,
        description="Validate credentials and inputs before running the command",
    )
    timeout: Optional[int] = Field(default=None, ge=0, strict=True, description="Connect timeout in seconds")


class MergeOptions(BaseModel):
    """Flags that only influence merging and are never persisted."""

    model_config = ConfigDict(frozen=True)

    no_email: bool = False


class Config(BaseModel):
    """Fully resolved configuration."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True, populate_by_name=True)

    version: Version = LATEST_CONFIG_VERSION
    desktop_notifications: bool = True
    email: Optional[EmailConfig] = None
    validate_inputs: bool = Field(default=True, alias="validate")
    timeout: Optional[timedelta] = None

    @classmethod
    def from_user_config(
        cls,
        user_config: UserConfig,
        *,
        latest: Version = LATEST_CONFIG_VERSION,
    ) -> "Config":
        """Apply defaults and validate the schema version.

        An email section without recipients counts as no email channel.
        """
        version = resolve_version(user_config.version, latest=latest, kind="config")
        email = user_config.email
        if email is not None and not email.recipients:
            email = None
        timeout = None
        if user_config.timeout is not None:
            timeout = timedelta(seconds=user_config.timeout)
        desktop = user_config.desktop_notifications
        validate_inputs = user_config.validate_inputs
        return cls(
            version=version,
            desktop_notifications=True if desktop is None else desktop,
            email=email,
            validate_inputs=True if validate_inputs is None else validate_inputs,
            timeout=timeout,
        )


class UserCredentials(BaseModel):
    """Partial credentials as read from a file."""

    model_config = ConfigDict(frozen=True)

    version: Optional[str] = Field(default=None, strict=True, description="Credentials schema version")
    smtp: Optional[SmtpCredentials] = Field(default=None, description="SMTP login details")


class Credentials(BaseModel):
    """Resolved credentials, versioned independently from ``Config``."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    version: Version = LATEST_CREDENTIALS_VERSION
    smtp: Optional[SmtpCredentials] = None

    @classmethod
    def from_user_credentials(
        cls,
        user_credentials: UserCredentials,
        *,
        latest: Version = LATEST_CREDENTIALS_VERSION,
    ) -> "Credentials":
        """Validate the schema version; the SMTP record passes through."""
        version = resolve_version(user_credentials.version, latest=latest, kind="credentials")
        return cls(version=version, smtp=user_credentials.smtp)
