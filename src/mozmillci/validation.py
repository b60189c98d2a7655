# validation.py
# Form validation for the mozmill step, as plain functions.
from __future__ import annotations

import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

from .command import tokenize
from .errors import ConfigurationError
from .model import StepConfig


DISPLAY_NAME = "Mozmill Test"

# (persisted name, type, help)
FIELDS = (
    ("tests", str, "Test file or directory passed to mozmill with -t (required)"),
    ("wrapper", str, "Script to launch instead of mozmill"),
    ("logfile", str, "Write mozmill's log to this file"),
    ("showall", bool, "Show all test output"),
    ("showerrors", bool, "Print logger errors to the console"),
    ("port", str, "jsbridge port mozmill connects on"),
)

OK = "ok"
WARNING = "warning"
ERROR = "error"


@dataclass(frozen=True)
class Validation:
    kind: str
    message: str = ""

    @classmethod
    def ok(cls) -> Validation:
        return cls(OK)

    @classmethod
    def warning(cls, message: str) -> Validation:
        return cls(WARNING, message)

    @classmethod
    def error(cls, message: str) -> Validation:
        return cls(ERROR, message)


def check_tests(value: str) -> Validation:
    if not value or not value.strip():
        return Validation.error("Please set the tests to run")
    if _arguments(value) is None:
        return Validation.error("Unbalanced quotes in tests")
    return Validation.ok()


def check_port(value: str) -> Validation:
    if not value:
        return Validation.ok()
    try:
        port = int(value)
    except ValueError:
        return Validation.error(f"Port must be a number, got {value!r}")
    if not 1 <= port <= 65535:
        return Validation.error(f"Port out of range: {port}")
    return Validation.ok()


def _arguments(value: str) -> Optional[list[str]]:
    """Arguments a value turns into on the command line; None if quotes are unbalanced."""
    try:
        return tokenize(value)
    except ConfigurationError:
        return None


def check_logfile(value: str) -> Validation:
    if not value:
        return Validation.ok()
    args = _arguments(value)
    if args is None:
        return Validation.error("Unbalanced quotes in log file path")
    if len(args) > 1:
        return Validation.warning("Log file paths containing spaces are split into separate arguments; quote them")
    return Validation.ok()


def check_wrapper(value: str, workspace: Optional[str | Path] = None) -> Validation:
    if not value:
        return Validation.ok()
    args = _arguments(value)
    if args is None:
        return Validation.error("Unbalanced quotes in wrapper path")
    if len(args) > 1:
        return Validation.warning("Wrapper paths containing spaces are split into separate arguments; quote them")
    if not args:
        return Validation.error("Wrapper path is empty")
    path = args[0]
    if shutil.which(path):
        return Validation.ok()
    if workspace is not None and (Path(workspace) / path).exists():
        return Validation.ok()
    return Validation.warning(f"Wrapper {path!r} was not found on PATH or in the workspace")


def validate(config: StepConfig, workspace: Optional[str | Path] = None) -> Dict[str, Validation]:
    """Run every field check. Keys are persisted field names."""
    return {
        "tests": check_tests(config.tests),
        "wrapper": check_wrapper(config.wrapper, workspace),
        "logfile": check_logfile(config.logfile),
        "port": check_port(config.port),
    }


def has_errors(results: Dict[str, Validation]) -> bool:
    return any(v.kind == ERROR for v in results.values())
