# src/mozmillci/dsl.py
from __future__ import annotations

import json
import runpy
from pathlib import Path
from typing import Optional

from .errors import ConfigurationError
from .model import StepConfig


# ---------------------------------------------------------------------
# Step helper
# ---------------------------------------------------------------------

def mozmill(
    tests: str,
    *,
    wrapper: str = "",
    logfile: str = "",
    port: str | int | None = None,
    showall: bool = False,
    show_errors: bool = False,
) -> StepConfig:
    """Create a mozmill step."""
    return StepConfig(
        tests=tests,
        wrapper=wrapper,
        logfile=logfile,
        port="" if port is None else str(port),
        show_all=showall,
        show_errors=show_errors,
    )


# ---------------------------------------------------------------------
# Step file loading
# ---------------------------------------------------------------------

def load_step(path: str | Path) -> StepConfig:
    """
    Load a step configuration from a file.

    A .py file must define either:
      - step() -> StepConfig
      - STEP = StepConfig(...)

    A .json file holds the persisted field names
    (tests, wrapper, logfile, showall, showerrors, port).
    """
    step_path = Path(path).expanduser().resolve()
    if not step_path.exists():
        raise ConfigurationError(field="step", message=f"Step file not found: {step_path}")

    if step_path.suffix == ".json":
        return _load_json(step_path)
    if step_path.suffix == ".py":
        return _load_python(step_path)

    raise ConfigurationError(
        field="step",
        message=f"Step file must be a .py or .json file, got: {step_path.name}",
    )


def _load_json(step_path: Path) -> StepConfig:
    try:
        data = json.loads(step_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ConfigurationError(field="step", message=f"Invalid JSON in {step_path.name}: {e}") from e

    try:
        return StepConfig.from_dict(data)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(field="step", message=f"{step_path.name}: {e}") from e


def _load_python(step_path: Path) -> StepConfig:
    module_name = f"mozmillci_step_{step_path.stem}"
    globals_dict = runpy.run_path(str(step_path), run_name=module_name)

    config: Optional[object] = None
    if "step" in globals_dict and callable(globals_dict["step"]):
        config = globals_dict["step"]()
    elif "STEP" in globals_dict:
        config = globals_dict["STEP"]

    if not isinstance(config, StepConfig):
        raise ConfigurationError(
            field="step",
            message=(
                f"{step_path.name} must return/define a StepConfig. "
                "Define step() -> StepConfig or STEP = mozmill(...)."
            ),
        )
    return config
