"""Schema versions and default file locations."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from semver import Version

LATEST_CONFIG_VERSION = Version(0, 0, 1)
LATEST_CREDENTIALS_VERSION = Version(0, 0, 1)

CONFIG_FILE_NAME = "config.toml"
CREDENTIALS_FILE_NAME = "credentials.toml"

STARTTLS_PORT = 587


def default_directories(home: Optional[Path] = None) -> List[Path]:
    """Directories searched for config and credentials, in priority order."""
    base = home if home is not None else Path.home()
    return [base / "diditrun", base / ".diditrun"]


def default_config_files(home: Optional[Path] = None) -> List[Path]:
    return [directory / CONFIG_FILE_NAME for directory in default_directories(home)]


def default_credentials_files(home: Optional[Path] = None) -> List[Path]:
    return [directory / CREDENTIALS_FILE_NAME for directory in default_directories(home)]
