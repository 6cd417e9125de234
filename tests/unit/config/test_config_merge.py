"""Tests for layering command line settings over file settings."""

from __future__ import annotations

import pytest

from diditrun.config import EmailConfig, MergeOptions, UserConfig, merge

pytestmark = pytest.mark.unit_config

FILE_CONFIG = UserConfig(
    version="0.0.1",
    desktop_notifications=False,
    email=EmailConfig(recipients=["file@example.com"]),
    validate_inputs=True,
    timeout=30,
)


def test_file_values_fill_missing_cli_values() -> None:
    merged = merge(UserConfig(), FILE_CONFIG)

    assert merged == FILE_CONFIG


def test_cli_values_win_per_field() -> None:
    cli_config = UserConfig(
        email=EmailConfig(recipients=["cli@example.com"]),
        validate_inputs=False,
    )

    merged = merge(cli_config, FILE_CONFIG)

    assert merged.email == EmailConfig(recipients=["cli@example.com"])
    assert merged.validate_inputs is False
    assert merged.desktop_notifications is False
    assert merged.timeout == 30
    assert merged.version == "0.0.1"


def test_false_cli_value_is_not_treated_as_missing() -> None:
    merged = merge(UserConfig(desktop_notifications=False), UserConfig(desktop_notifications=True))

    assert merged.desktop_notifications is False


def test_no_email_drops_email_from_every_source() -> None:
    cli_config = UserConfig(email=EmailConfig(recipients=["cli@example.com"]))

    merged = merge(cli_config, FILE_CONFIG, MergeOptions(no_email=True))

    assert merged.email is None
    assert merged.timeout == 30


def test_no_email_false_keeps_file_email() -> None:
    merged = merge(UserConfig(), FILE_CONFIG, MergeOptions(no_email=False))

    assert merged.email == EmailConfig(recipients=["file@example.com"])


def test_merging_two_empty_configs_stays_empty() -> None:
    assert merge(UserConfig(), UserConfig()) == UserConfig()
