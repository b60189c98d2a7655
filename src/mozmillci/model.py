# model.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional


class Outcome(str, Enum):
    """Coarse build health signal reported by the step."""
    SUCCESS = "success"
    UNSTABLE = "unstable"
    CONFIG_ERROR = "config_error"


@dataclass(frozen=True)
class StepConfig:
    """
    User configuration of a mozmill build step.

    Created once from form/CLI input and read-only afterwards.
    """
    tests: str
    wrapper: str = ""
    logfile: str = ""
    port: str = ""
    show_all: bool = False
    show_errors: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tests": self.tests,
            "wrapper": self.wrapper,
            "logfile": self.logfile,
            "showall": self.show_all,
            "showerrors": self.show_errors,
            "port": self.port,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> StepConfig:
        """
        Create a StepConfig from persisted field names.

        Missing or null strings become "", missing booleans become False.
        """
        if not isinstance(data, Mapping):
            raise TypeError(f"Step configuration must be a mapping, got {type(data).__name__}")
        if "tests" not in data:
            raise ValueError("Step configuration is missing the 'tests' field")

        def _s(key: str) -> str:
            value = data.get(key)
            return "" if value is None else str(value)

        return cls(
            tests=_s("tests"),
            wrapper=_s("wrapper"),
            logfile=_s("logfile"),
            port=_s("port"),
            show_all=bool(data.get("showall", False)),
            show_errors=bool(data.get("showerrors", False)),
        )


@dataclass
class StepResult:
    """What happened when the step was performed."""
    outcome: Outcome
    command: Optional[str] = None
    exit_code: Optional[int] = None

    @property
    def ran(self) -> bool:
        return self.exit_code is not None
