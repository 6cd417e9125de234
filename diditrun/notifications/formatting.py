"""Rendering of events into notification text."""

from __future__ import annotations

import html

from diditrun import exit_codes
from diditrun.duration_format import format_duration
from diditrun.notifications.base import Event, NotificationInfo, RunFinished


def _format_run_finished(event: RunFinished) -> NotificationInfo:
    command = event.incantation.command
    invocation = str(event.incantation)
    duration = format_duration(event.elapsed)

    if event.exit_code == exit_codes.SUCCESS:
        summary = f"`{command}` succeeded"
        outcome = f"succeeded in {duration}."
    else:
        summary = f"`{command}` failed"
        outcome = f"failed with exit code {event.exit_code} in {duration}."

    return NotificationInfo(
        summary=summary,
        details=f"`{invocation}` {outcome}",
        html_details=f"<code>{html.escape(invocation)}</code> {outcome}",
    )


def format_notification(event: Event) -> NotificationInfo:
    """Return the summary, plaintext and HTML renderings of ``event``."""
    if isinstance(event, RunFinished):
        return _format_run_finished(event)
    raise TypeError(f"Unsupported notification event: {type(event).__name__}")
