"""Running the wrapped command and timing it."""

from __future__ import annotations

import logging
import subprocess
import time
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Optional, Sequence, Tuple

from diditrun import exit_codes

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Incantation:
    """A command together with its arguments."""

    command: str
    args: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_argv(cls, command: str, args: Optional[Sequence[str]] = None) -> "Incantation":
        return cls(command=command, args=tuple(args or ()))

    def argv(self) -> list[str]:
        return [self.command, *self.args]

    def __str__(self) -> str:
        return " ".join(self.argv())


@dataclass(frozen=True)
class IncantationOutcome:
    """Result of running an incantation.

    ``error`` is set when the command could not be started at all.
    """

    returncode: Optional[int]
    elapsed: timedelta
    error: Optional[OSError] = None

    @property
    def exit_code(self) -> int:
        """Exit code to report for the child, shell style for signals."""
        if self.error is not None:
            return self.error.errno or exit_codes.FAILURE
        if self.returncode is None:
            return exit_codes.FAILURE
        if self.returncode < 0:
            return exit_codes.SIGNAL_BASE - self.returncode
        return self.returncode


def run(incantation: Incantation) -> IncantationOutcome:
    """Run the command with inherited stdio and wait for it to finish."""
    logger.debug("Running %s", incantation)
    started = time.monotonic()
    try:
        completed = subprocess.run(incantation.argv(), check=False)
    except OSError as exc:
        elapsed = timedelta(seconds=time.monotonic() - started)
        logger.debug("Could not start %s: %s", incantation.command, exc)
        return IncantationOutcome(returncode=None, elapsed=elapsed, error=exc)
    elapsed = timedelta(seconds=time.monotonic() - started)
    logger.debug("%s exited with %s after %s", incantation.command, completed.returncode, elapsed)
    return IncantationOutcome(returncode=completed.returncode, elapsed=elapsed)
