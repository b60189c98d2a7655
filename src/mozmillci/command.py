# command.py
from __future__ import annotations

import shlex
from typing import List

from .errors import ConfigurationError
from .model import StepConfig


DEFAULT_EXECUTABLE = "mozmill"


def build_command(config: StepConfig) -> str:
    """
    Render a StepConfig into a single mozmill command line.

    Order is fixed: executable, --logfile, --port, -t, --showall, --show-errors.
    Values are not quoted here: an unquoted value containing whitespace
    is split apart again by tokenize(). Users quote such values themselves.
    """
    if not config.tests:
        raise ConfigurationError(field="tests", message="Mozmill cannot run without any tests specified.")

    # use the wrapper script instead of mozmill if it exists
    parts: List[str] = [config.wrapper or DEFAULT_EXECUTABLE]

    if config.logfile:
        parts.append(f"--logfile {config.logfile}")
    if config.port:
        parts.append(f"--port={config.port}")

    parts.append(f"-t {config.tests}")

    if config.show_all:
        parts.append("--showall")
    if config.show_errors:
        parts.append("--show-errors")

    return " ".join(parts)


def tokenize(command: str) -> List[str]:
    """
    Split a command line on whitespace, keeping quoted text together.

    Single and double quotes group text into one argument and are removed.
    Backslashes and "#" are ordinary characters.
    """
    lexer = shlex.shlex(command, posix=True)
    lexer.whitespace_split = True
    lexer.commenters = ""
    lexer.escape = ""
    try:
        return list(lexer)
    except ValueError as e:
        raise ConfigurationError(field="command", message=f"Unbalanced quotes in command: {command}") from e
