# runner.py
from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path
from typing import Dict, Mapping, Optional, Sequence, TextIO

from .command import build_command, tokenize
from .errors import ExecutionError
from .model import Outcome, StepConfig, StepResult
from .ui.console import Console, get_console


NO_TESTS_MESSAGE = "Mozmill cannot run without any tests specified."

# Seconds a terminated child gets before it is killed.
TERMINATE_GRACE = 10


# ----------------------------------------------------------------------
# Result mapping
# ----------------------------------------------------------------------

def map_exit_code(exit_code: int) -> Outcome:
    """0 is SUCCESS; every other exit code is UNSTABLE, never a hard failure."""
    if exit_code == 0:
        return Outcome.SUCCESS
    return Outcome.UNSTABLE


# ----------------------------------------------------------------------
# Environment
# ----------------------------------------------------------------------

def build_environment(
    workspace: str | Path,
    variables: Optional[Mapping[str, object]] = None,
    base: Optional[Mapping[str, str]] = None,
) -> Dict[str, str]:
    """
    Inherited environment + WORKSPACE + build-scoped variables.

    Build-scoped variables win on key collision.
    """
    env = dict(os.environ if base is None else base)
    env["WORKSPACE"] = str(Path(workspace).resolve())
    env.update({k: str(v) for k, v in (variables or {}).items()})
    return env


# ----------------------------------------------------------------------
# Execution primitives
# ----------------------------------------------------------------------

def run_process(
    tokens: Sequence[str],
    env: Mapping[str, str],
    cwd: str | Path,
    stdout: Optional[TextIO] = None,
) -> int:
    """
    Run a command to completion, copying its output into `stdout`.

    stderr is merged into stdout. Blocks until the child exits.

    Raises:
        ExecutionError: if the process cannot be started
        KeyboardInterrupt: re-raised after the child has been stopped

    Any exception raised while the child runs (an interrupt, a failing
    sink) terminates the child before propagating.
    """
    sink = stdout if stdout is not None else sys.stdout
    cmd = " ".join(tokens)
    cwd_p = Path(cwd)

    if not tokens:
        raise ExecutionError(command=cmd, message="empty command", cwd=str(cwd_p))
    if not cwd_p.is_dir():
        raise ExecutionError(command=cmd, message=f"working directory not found: {cwd_p}", cwd=str(cwd_p))

    try:
        proc = subprocess.Popen(
            list(tokens),
            cwd=str(cwd_p),
            env=dict(env),
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            errors="replace",
        )
    except FileNotFoundError as e:
        raise ExecutionError(
            command=cmd,
            message=f"{tokens[0]} not found",
            cwd=str(cwd_p),
            details={"error": e.strerror or str(e)},
        ) from e
    except PermissionError as e:
        raise ExecutionError(
            command=cmd,
            message=f"permission denied: {tokens[0]}",
            cwd=str(cwd_p),
            details={"error": e.strerror or str(e)},
        ) from e
    except OSError as e:
        raise ExecutionError(command=cmd, message=str(e), cwd=str(cwd_p)) from e

    try:
        for line in proc.stdout:
            sink.write(line)
        sink.flush()
        return proc.wait()
    finally:
        # no-op if the child already exited
        _stop(proc)
        if proc.stdout is not None:
            proc.stdout.close()


def _stop(proc: subprocess.Popen) -> None:
    if proc.poll() is not None:
        return
    proc.terminate()
    try:
        proc.wait(timeout=TERMINATE_GRACE)
    except subprocess.TimeoutExpired:
        proc.kill()
        proc.wait()


# ----------------------------------------------------------------------
# Public API
# ----------------------------------------------------------------------

def perform(
    config: StepConfig,
    *,
    workspace: str | Path = ".",
    variables: Optional[Mapping[str, object]] = None,
    base_env: Optional[Mapping[str, str]] = None,
    stdout: Optional[TextIO] = None,
    console: Optional[Console] = None,
) -> StepResult:
    """
    Perform the mozmill step once.

    An empty `tests` field is reported into the build log and yields
    CONFIG_ERROR without launching anything. Launch failures and
    interruptions propagate to the caller.
    """
    console = console or get_console()

    if not config.tests:
        console.print_build_error(NO_TESTS_MESSAGE)
        return StepResult(outcome=Outcome.CONFIG_ERROR)

    workspace_p = Path(workspace).resolve()
    env = build_environment(workspace_p, variables, base=base_env)
    cmd = build_command(config)

    console.print_command(cmd)
    console.print_debug(f"cwd={workspace_p}")

    exit_code = run_process(tokenize(cmd), env, workspace_p, stdout=stdout or console.stream)
    return StepResult(outcome=map_exit_code(exit_code), command=cmd, exit_code=exit_code)
