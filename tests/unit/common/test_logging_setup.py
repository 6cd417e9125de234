"""Tests for the structlog backed logging setup."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterator

import pytest
import structlog

from diditrun.common.errors import LoadConfigError
from diditrun.common.logging import configure_logging

pytestmark = pytest.mark.unit_cli


@pytest.fixture
def root_logger() -> Iterator[logging.Logger]:
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()


def test_default_level_is_warning(root_logger: logging.Logger) -> None:
    configure_logging(force=True)

    assert root_logger.level == logging.WARNING
    assert len(root_logger.handlers) == 1
    assert isinstance(root_logger.handlers[0].formatter, structlog.stdlib.ProcessorFormatter)


def test_debug_flag_wins(root_logger: logging.Logger) -> None:
    configure_logging(level="ERROR", debug=True, force=True)

    assert root_logger.level == logging.DEBUG


def test_level_from_environment(root_logger: logging.Logger, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DIDITRUN_LOG_LEVEL", "info")

    configure_logging(force=True)

    assert root_logger.level == logging.INFO


def test_unknown_level_falls_back_to_warning(root_logger: logging.Logger) -> None:
    configure_logging(level="chatty", force=True)

    assert root_logger.level == logging.WARNING


def test_log_file_gets_a_handler(root_logger: logging.Logger, tmp_path: Path) -> None:
    log_file = tmp_path / "diditrun.log"

    configure_logging(log_file=str(log_file), force=True)
    logging.getLogger("diditrun.test").warning("written to file")
    for handler in root_logger.handlers:
        handler.flush()

    assert len(root_logger.handlers) == 2
    assert "written to file" in log_file.read_text(encoding="utf-8")


def test_existing_handlers_are_kept_without_force(root_logger: logging.Logger) -> None:
    sentinel = logging.NullHandler()
    root_logger.addHandler(sentinel)

    configure_logging()

    assert sentinel in root_logger.handlers


def test_error_payload_is_rendered_as_json(root_logger: logging.Logger, tmp_path: Path) -> None:
    log_file = tmp_path / "diditrun.jsonl"
    error = LoadConfigError("bad file", context={"path": Path("/etc/diditrun.toml")})

    configure_logging(log_file=str(log_file), json=True, force=True)
    logging.getLogger("diditrun.test").warning(
        "Reported %s", error.error_type, extra={"error": error.to_dict()}
    )
    for handler in root_logger.handlers:
        handler.flush()

    entry = json.loads(log_file.read_text(encoding="utf-8").splitlines()[-1])
    assert entry["event"] == "Reported LoadConfigError"
    assert entry["level"] == "warning"
    assert entry["error"] == {
        "type": "LoadConfigError",
        "message": "bad file",
        "context": {"path": "/etc/diditrun.toml"},
    }
