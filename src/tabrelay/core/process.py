"""External process execution.

Navigators never call subprocess directly. They go through a ProcessRunner so
tests can record invocations and script outcomes instead of driving a real
desktop.
"""

import logging
import subprocess
from typing import Protocol

logger = logging.getLogger(__name__)


class ProcessError(Exception):
    """A command exited non-zero or could not be started.

    output holds whatever the command wrote to stdout before failing.
    """

    def __init__(self, message: str, output: str = "") -> None:
        super().__init__(message)
        self.output = output


class ProcessRunner(Protocol):
    """Runs external commands to completion."""

    def run(self, args: list[str]) -> None:
        """Run a command, raising ProcessError on non-zero exit."""
        ...

    def output(self, args: list[str]) -> str:
        """Run a command and return its stdout, raising ProcessError on failure."""
        ...


class SubprocessRunner:
    """ProcessRunner backed by subprocess.run.

    Blocks until the command exits. No timeout is applied.
    """

    def run(self, args: list[str]) -> None:
        logger.debug(f"Running {args[0]} with {len(args) - 1} arguments")
        self._execute(args)

    def output(self, args: list[str]) -> str:
        logger.debug(f"Capturing output of {args[0]}")
        return self._execute(args)

    def _execute(self, args: list[str]) -> str:
        try:
            completed = subprocess.run(
                args,
                stdout=subprocess.PIPE,
                stderr=subprocess.DEVNULL,
                text=True,
                check=False,
            )
        except FileNotFoundError as e:
            raise ProcessError(
                f'exec: "{args[0]}": executable file not found'
            ) from e
        except (OSError, ValueError) as e:
            # ValueError covers embedded NUL bytes and unencodable arguments
            raise ProcessError(str(e)) from e

        if completed.returncode != 0:
            raise ProcessError(
                f"exit status {completed.returncode}",
                output=completed.stdout or "",
            )
        return completed.stdout or ""
