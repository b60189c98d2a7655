# errors.py
from __future__ import annotations

from dataclasses import dataclass, field


TOOL_HINTS = {
    "mozmill": "Install mozmill (e.g., pip install mozmill) or fix PATH.",
    "python": "Install Python or fix PATH.",
    "python3": "Install Python 3 or fix PATH (python3).",
}


@dataclass
class ConfigurationError(Exception):
    """The step is configured in a way that makes running it pointless."""
    field: str
    message: str

    def __str__(self) -> str:
        return f"configuration error: {self.message} (field={self.field})"


@dataclass
class ExecutionError(Exception):
    """
    The external process could not be launched.

    Non-zero exits are NOT execution errors; those map to an outcome.
    """
    command: str
    message: str
    cwd: str | None = None
    details: dict = field(default_factory=dict)

    @property
    def hint(self) -> str | None:
        tokens = self.command.split()
        if not tokens:
            return None
        return TOOL_HINTS.get(tokens[0])

    def __str__(self) -> str:
        lines = [f"execution error: {self.message}", f"command={self.command}"]
        if self.cwd:
            lines.append(f"cwd={self.cwd}")
        for k, v in self.details.items():
            lines.append(f"{k}={v}")
        return "\n".join(lines)


class StepInterrupted(KeyboardInterrupt):
    """A termination signal arrived while the step was running."""

    def __init__(self, signum: int):
        super().__init__(signum)
        self.signum = signum
