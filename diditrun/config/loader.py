"""Loading of config and credentials files."""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Iterable, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from diditrun.common.errors import LoadConfigError

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def find_file(explicit: Optional[Path], defaults: Iterable[Path]) -> Optional[Path]:
    """Return the explicit path if given, else the first existing default."""
    if explicit is not None:
        return explicit
    for candidate in defaults:
        if candidate.exists():
            return candidate
    return None


def load_file(model: Type[M], path: Optional[Path], defaults: Iterable[Path]) -> M:
    """Parse a TOML file into ``model``.

    With no explicit path and no existing default file, an empty ``model``
    is returned.
    """
    resolved = find_file(path, defaults)
    if resolved is None:
        logger.debug("No %s file found, using defaults", model.__name__)
        return model()

    logger.debug("Loading %s from %s", model.__name__, resolved)
    try:
        with resolved.open("rb") as fh:
            data = tomllib.load(fh)
    except OSError as exc:
        raise LoadConfigError(
            f"Cannot read {resolved}: {exc.strerror or exc}",
            context={"path": resolved},
            cause=exc,
        ) from exc
    except tomllib.TOMLDecodeError as exc:
        raise LoadConfigError(
            f"{resolved} is not valid TOML: {exc}",
            context={"path": resolved},
            cause=exc,
        ) from exc

    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise LoadConfigError(
            f"{resolved} has invalid settings: {exc}",
            context={"path": resolved, "errors": exc.errors(include_url=False)},
            cause=exc,
        ) from exc
