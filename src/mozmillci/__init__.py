from .dsl import mozmill, load_step
from .command import build_command, tokenize
from .runner import perform, run_process, map_exit_code, build_environment
from .model import StepConfig, StepResult, Outcome
from .errors import ConfigurationError, ExecutionError

__all__ = [
    "mozmill",
    "load_step",
    "build_command",
    "tokenize",
    "perform",
    "run_process",
    "map_exit_code",
    "build_environment",
    "StepConfig",
    "StepResult",
    "Outcome",
    "ConfigurationError",
    "ExecutionError",
]
