"""Console / build log output formatting for mozmillci."""

from __future__ import annotations

import sys
from typing import Optional, TextIO


class Console:
    """Centralized console output formatting."""

    def __init__(self, debug: bool = False, stream: Optional[TextIO] = None):
        """
        Initialize console formatter.

        Args:
            debug: If True, show detailed output including stack traces
            stream: Where build log lines go (defaults to sys.stdout at write time)
        """
        self.debug = debug
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def _out(self, message: str = "") -> None:
        print(message, file=self.stream)

    def print_run_started(self, display_name: str, workspace: str, tests: str) -> None:
        """Print run start information."""
        self._out(f"\nSTEP STARTED: {display_name}")
        self._out(f"Workspace: {workspace}")
        self._out(f"Tests: {tests}")
        self._out()

    def print_command(self, command: str) -> None:
        self._out(f"$ {command}")

    def print_outcome(self, outcome: str, exit_code: Optional[int] = None) -> None:
        """Print the final outcome of the step."""
        self._out()
        self._out(f"STATUS: {outcome.upper()}")
        if exit_code is not None:
            self._out(f"Exit code: {exit_code}")

    def print_build_error(self, message: str) -> None:
        """Print an error line into the build log (the step keeps going)."""
        self._out(f"ERROR: {message}")

    def print_validation(self, field: str, kind: str, message: str) -> None:
        label = kind.upper()
        if message:
            self._out(f"  {field}: {label} - {message}")
        else:
            self._out(f"  {field}: {label}")

    def print_error(
        self,
        title: str,
        message: str,
        details: Optional[list[str]] = None,
        suggestion: Optional[str] = None,
    ) -> None:
        """
        Print structured error message.

        Args:
            title: Error title
            message: Main error message
            details: Optional list of detail lines
            suggestion: Optional suggestion for user
        """
        print(f"\nERROR: {title}", file=sys.stderr)
        print(f"{message}", file=sys.stderr)
        if details:
            for detail in details:
                print(f"  {detail}", file=sys.stderr)
        if suggestion:
            print(f"\n{suggestion}", file=sys.stderr)

    def print_exception(self, exc: BaseException) -> None:
        """Print exception, with full traceback only in debug mode."""
        if self.debug:
            import traceback
            traceback.print_exception(type(exc), exc, exc.__traceback__, file=sys.stderr)
        else:
            print(f"Error: {exc}", file=sys.stderr)

    def print_info(self, message: str) -> None:
        """Print informational message."""
        self._out(message)

    def print_debug(self, message: str) -> None:
        """Print debug message (only if debug mode enabled)."""
        if self.debug:
            print(f"[DEBUG] {message}", file=sys.stderr)


# Global console instance (will be initialized by CLI)
_console: Optional[Console] = None


def get_console() -> Console:
    """Get the global console instance."""
    global _console
    if _console is None:
        _console = Console()
    return _console


def set_console(console: Console) -> None:
    """Set the global console instance."""
    global _console
    _console = console
