"""Desktop notification channel with per-platform backends."""

from __future__ import annotations

import asyncio
import logging
import os
import platform
import subprocess
from typing import Callable, Optional, Protocol

from diditrun.common.errors import DesktopError
from diditrun.notifications.base import APP_NAME, NotificationDispatcher, NotificationInfo

# Optional dependencies
try:
    from plyer import notification
except ImportError:
    notification = None

try:
    from desktop_notifier import DesktopNotifier
except ImportError:
    DesktopNotifier = None

logger = logging.getLogger(__name__)


class DesktopBackend(Protocol):
    """Shows a short title/body message on the local desktop."""

    def show(self, title: str, message: str) -> None:
        ...


class PlyerBackend:
    """Linux and Windows notifications through plyer."""

    def __init__(self, app_name: str) -> None:
        if notification is None:
            raise DesktopError("plyer is not installed; desktop notifications are unavailable")
        self.app_name = app_name

    def show(self, title: str, message: str) -> None:
        notification.notify(title=title, message=message, app_name=self.app_name, timeout=10)


class MacOsBackend:
    """macOS notifications through desktop-notifier."""

    def __init__(self, app_name: str) -> None:
        if DesktopNotifier is None:
            raise DesktopError("desktop-notifier is not installed")
        self._notifier = DesktopNotifier(app_name=app_name)

    def show(self, title: str, message: str) -> None:
        asyncio.run(self._notifier.send(title=title, message=message))


class OsascriptBackend:
    """macOS fallback using AppleScript."""

    def show(self, title: str, message: str) -> None:
        safe_title = title.replace('"', '\\"')
        safe_message = message.replace('"', '\\"')
        script = f'display notification "{safe_message}" with title "{safe_title}"'
        result = subprocess.run(["osascript", "-e", script], capture_output=True, text=True, timeout=5)
        if result.returncode != 0:
            raise DesktopError(f"osascript failed: {result.stderr.strip()}")


def select_backend(system: Optional[str] = None, app_name: str = APP_NAME) -> DesktopBackend:
    """Build the backend for ``system`` (defaults to the running platform)."""
    system = system or platform.system()
    if system in ("Linux", "Windows"):
        return PlyerBackend(app_name)
    if system == "Darwin":
        if DesktopNotifier is not None:
            return MacOsBackend(app_name)
        logger.debug("desktop-notifier not installed, using osascript")
        return OsascriptBackend()
    raise DesktopError(f"Desktop notifications are not supported on {system}", context={"system": system})


def is_headless(system: Optional[str] = None) -> bool:
    """Check if we are running without a GUI."""
    if (system or platform.system()) == "Linux":
        return not (os.environ.get("DISPLAY") or os.environ.get("WAYLAND_DISPLAY"))
    return False


class DesktopDispatcher(NotificationDispatcher):
    """Shows the summary line as a desktop toast."""

    def __init__(
        self,
        app_name: str = APP_NAME,
        *,
        system: Optional[str] = None,
        backend_factory: Callable[[Optional[str], str], DesktopBackend] = select_backend,
    ) -> None:
        self.app_name = app_name
        self.headless = is_headless(system)
        try:
            self._backend: Optional[DesktopBackend] = backend_factory(system, app_name)
        except DesktopError:
            raise
        except Exception as exc:
            raise DesktopError(f"Could not initialise desktop notifications: {exc}", cause=exc) from exc

    def dispatch(self, info: NotificationInfo) -> None:
        if self._backend is None:
            raise DesktopError("Desktop dispatcher is closed")
        if self.headless:
            logger.debug("Headless environment detected; skipping desktop notification")
            return
        try:
            self._backend.show(self.app_name, info.summary)
        except DesktopError:
            raise
        except Exception as exc:
            raise DesktopError(f"Desktop notification failed: {exc}", cause=exc) from exc

    def close(self) -> None:
        self._backend = None
