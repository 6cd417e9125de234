"""Layering of command line and file settings."""

from __future__ import annotations

from typing import Optional, TypeVar

from diditrun.config.models import MergeOptions, UserConfig

T = TypeVar("T")


def _first(*values: Optional[T]) -> Optional[T]:
    for value in values:
        if value is not None:
            return value
    return None


def merge(
    cli_config: UserConfig,
    file_config: UserConfig,
    options: Optional[MergeOptions] = None,
) -> UserConfig:
    """Combine two partial configs field by field, command line first.

    ``options.no_email`` drops the email section from both sources.
    """
    options = options or MergeOptions()
    email = None if options.no_email else _first(cli_config.email, file_config.email)
    return UserConfig(
        version=_first(cli_config.version, file_config.version),
        desktop_notifications=_first(
            cli_config.desktop_notifications, file_config.desktop_notifications
        ),
        email=email,
        validate_inputs=_first(cli_config.validate_inputs, file_config.validate_inputs),
        timeout=_first(cli_config.timeout, file_config.timeout),
    )
