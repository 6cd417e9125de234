"""Configuration layer: models, file loading, merging and validation."""

from diditrun.config.defaults import (
    LATEST_CONFIG_VERSION,
    LATEST_CREDENTIALS_VERSION,
    default_config_files,
    default_credentials_files,
)
from diditrun.config.loader import find_file, load_file
from diditrun.config.models import (
    Config,
    Credentials,
    EmailConfig,
    MergeOptions,
    SmtpCredentials,
    UserConfig,
    UserCredentials,
)
from diditrun.config.resolver import merge

__all__ = [
    "Config",
    "Credentials",
    "EmailConfig",
    "LATEST_CONFIG_VERSION",
    "LATEST_CREDENTIALS_VERSION",
    "MergeOptions",
    "SmtpCredentials",
    "UserConfig",
    "UserCredentials",
    "default_config_files",
    "default_credentials_files",
    "find_file",
    "load_file",
    "merge",
]
