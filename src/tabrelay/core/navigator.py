"""Platform navigation strategies.

Each navigator knows one way of making a desktop browser show a URL:
launching it when it is not running, or driving its existing window with
synthetic keystrokes. The navigator is chosen once at startup from the
host platform.
"""

import logging
import re
import sys
from typing import Protocol

from tabrelay.config import BrowserConfig
from tabrelay.core.process import ProcessError, ProcessRunner
from tabrelay.core.scripts import build_applescript, build_powershell_script
from tabrelay.core.types import NavigationResult

logger = logging.getLogger(__name__)


class NavigationError(Exception):
    """A navigation step failed. The message describes the step."""


class Navigator(Protocol):
    """Points a browser at a URL."""

    def navigate(self, url: str) -> NavigationResult: ...


class _BaseNavigator:
    """Shared plumbing: converts step failures into a failed result."""

    def __init__(self, runner: ProcessRunner, browser: BrowserConfig) -> None:
        self._runner = runner
        self._browser = browser

    def navigate(self, url: str) -> NavigationResult:
        try:
            self._navigate(url)
        except NavigationError as e:
            return NavigationResult.failed(str(e))
        return NavigationResult.ok(f"Navigated {self._browser.name} to {url}")

    def _navigate(self, url: str) -> None:
        raise NotImplementedError

    def _step(self, args: list[str], description: str | None = None) -> None:
        """Run one automation command.

        Args:
            args: Command and arguments
            description: Prefix for the error message; None reports the
                process error unwrapped

        Raises:
            NavigationError: If the command fails
        """
        try:
            self._runner.run(args)
        except ProcessError as e:
            if description is None:
                raise NavigationError(str(e)) from e
            raise NavigationError(f"{description}: {e}") from e


class XdotoolNavigator(_BaseNavigator):
    """Linux/X11 navigator driven by pgrep and xdotool."""

    def _is_running(self) -> bool:
        try:
            self._runner.run(["pgrep", self._browser.process_name])
        except ProcessError:
            return False
        return True

    def _navigate(self, url: str) -> None:
        browser = self._browser
        if not self._is_running():
            logger.info(f"{browser.name} is not running, launching it")
            self._step([browser.executable, url])
            return

        logger.info(f"Driving running {browser.name} window")
        self._step(
            [
                "xdotool",
                "search",
                "--onlyvisible",
                "--class",
                browser.window_class,
                "windowactivate",
            ],
            f"failed to focus {browser.name} window",
        )
        self._step(["xdotool", "key", "ctrl+l"], "failed to select address bar")
        self._step(
            ["xdotool", "type", "--clearmodifiers", url],
            "failed to type URL",
        )
        self._step(["xdotool", "key", "Return"])


class AppleScriptNavigator(_BaseNavigator):
    """macOS navigator driven by osascript.

    Always runs the keystroke script, whether or not the browser is open;
    activating the application launches it if needed.
    """

    def _navigate(self, url: str) -> None:
        logger.info(f"Running AppleScript against {self._browser.app_name}")
        script = build_applescript(url, self._browser)
        self._step(["osascript", "-e", script])


class PowerShellNavigator(_BaseNavigator):
    """Windows navigator driven by tasklist and PowerShell."""

    def _is_running(self) -> bool:
        image = self._browser.image_name
        try:
            listing = self._runner.output(
                ["tasklist", "/FI", f"IMAGENAME eq {image}", "/NH"],
            )
        except ProcessError as e:
            # A failed listing is still searched for the image name
            listing = e.output
        return image.lower() in listing.lower()

    def _navigate(self, url: str) -> None:
        browser = self._browser
        if not self._is_running():
            logger.info(f"{browser.name} is not running, launching it")
            self._step(["cmd", "/C", "start", browser.image_name, url])
            return

        logger.info(f"Driving running {browser.name} window")
        script = build_powershell_script(url, browser)
        self._step(["powershell", "-Command", script])


class UnsupportedNavigator:
    """Navigator for platforms without an automation strategy."""

    def __init__(self, os_name: str) -> None:
        self._os_name = os_name

    def navigate(self, url: str) -> NavigationResult:
        return NavigationResult.failed(f"unsupported operating system: {self._os_name}")


def current_os() -> str:
    """Return the host platform as linux, darwin, windows or another OS family.

    Release numbers are dropped from other platforms, so freebsd14 reports
    as freebsd.
    """
    if sys.platform.startswith("linux"):
        return "linux"
    if sys.platform == "win32":
        return "windows"
    return re.sub(r"\d+$", "", sys.platform)


def select_navigator(
    os_name: str,
    runner: ProcessRunner,
    browser: BrowserConfig | None = None,
) -> Navigator:
    """Pick the navigator for a platform.

    Args:
        os_name: Platform name as returned by current_os()
        runner: Executes external commands
        browser: Browser identity (default: Firefox)

    Returns:
        Navigator for the platform; UnsupportedNavigator for unknown ones
    """
    browser = browser or BrowserConfig()
    if os_name == "linux":
        return XdotoolNavigator(runner, browser)
    if os_name == "darwin":
        return AppleScriptNavigator(runner, browser)
    if os_name == "windows":
        return PowerShellNavigator(runner, browser)
    return UnsupportedNavigator(os_name)
