# cli.py
from __future__ import annotations

import signal
import sys
from dataclasses import replace
from pathlib import Path

import click

from mozmillci.command import build_command
from mozmillci.dsl import load_step
from mozmillci.errors import ConfigurationError, ExecutionError, StepInterrupted
from mozmillci.model import Outcome, StepConfig
from mozmillci.runner import NO_TESTS_MESSAGE, perform
from mozmillci.ui.console import Console, set_console, get_console
from mozmillci.validation import DISPLAY_NAME, FIELDS, has_errors, validate


def resolve_config(
    step_file: str | None,
    *,
    tests: str | None = None,
    wrapper: str | None = None,
    logfile: str | None = None,
    port: str | None = None,
    showall: bool | None = None,
    show_errors: bool | None = None,
) -> StepConfig:
    """
    Combine the step file (if any) with command line / environment values.

    Values given explicitly win over the step file.
    """
    base = load_step(step_file) if step_file else StepConfig(tests="")
    overrides = {
        "tests": tests,
        "wrapper": wrapper,
        "logfile": logfile,
        "port": port,
        "show_all": showall,
        "show_errors": show_errors,
    }
    return replace(base, **{k: v for k, v in overrides.items() if v is not None})


def parse_variables(ctx, param, values) -> dict[str, str]:
    """click callback: turn repeated KEY=VALUE options into a dict."""
    variables: dict[str, str] = {}
    for item in values or ():
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected KEY=VALUE, got {item!r}")
        variables[key] = value
    return variables


def _interrupt_on_signal(signum, frame):
    """Turn SIGTERM into the same interrupt path as Ctrl-C."""
    raise StepInterrupted(signum)


def step_options(f):
    """Options shared by every command that needs a step configuration."""
    options = [
        click.option("--step", "step_file", default=None, help="Step file (.py or .json) to read the configuration from"),
        click.option("-t", "--tests", default=None, envvar="MOZMILL_TESTS", help="Tests to run (passed to mozmill -t)"),
        click.option("--wrapper", default=None, envvar="MOZMILL_WRAPPER", help="Launch this script instead of mozmill"),
        click.option("--logfile", default=None, envvar="MOZMILL_LOGFILE", help="Pass --logfile to mozmill"),
        click.option("--port", default=None, envvar="MOZMILL_PORT", help="Pass --port to mozmill"),
        click.option("--showall/--no-showall", default=None, help="Pass --showall to mozmill"),
        click.option("--show-errors/--no-show-errors", default=None, help="Pass --show-errors to mozmill"),
    ]
    for option in reversed(options):
        f = option(f)
    return f


def _load_or_exit(ctx, **kwargs) -> StepConfig:
    console = get_console()
    try:
        return resolve_config(**kwargs)
    except ConfigurationError as e:
        console.print_error(
            "Invalid step configuration",
            e.message,
            suggestion="Fix the step file or pass the options on the command line:\n  mozmillci run -t tests/",
        )
        sys.exit(1)
    except Exception as e:
        console.print_error("Failed to load step", f"Could not load step from {kwargs.get('step_file')}", details=[str(e)])
        if ctx.obj.get("debug", False):
            console.print_exception(e)
        sys.exit(1)


@click.group()
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Enable debug mode (show stack traces and detailed output)",
)
@click.pass_context
def cli(ctx, debug):
    """mozmillci: run mozmill tests as a CI build step."""
    console = Console(debug=debug)
    set_console(console)
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug


@cli.command()
@step_options
@click.option("--workspace", default=".", show_default=True, help="Build workspace; mozmill runs from here")
@click.option(
    "--var",
    "variables",
    multiple=True,
    callback=parse_variables,
    metavar="KEY=VALUE",
    help="Build variable exported to mozmill (repeatable, overrides the environment)",
)
@click.option("--fail-unstable/--no-fail-unstable", default=False, show_default=True, help="Exit 1 when the build is unstable")
@click.pass_context
def run(ctx, step_file, tests, wrapper, logfile, port, showall, show_errors, workspace, variables, fail_unstable):
    """Run mozmill and report the build outcome."""
    console = get_console()
    config = _load_or_exit(
        ctx,
        step_file=step_file,
        tests=tests,
        wrapper=wrapper,
        logfile=logfile,
        port=port,
        showall=showall,
        show_errors=show_errors,
    )

    previous_handler = signal.signal(signal.SIGTERM, _interrupt_on_signal)
    try:
        console.print_run_started(
            display_name=DISPLAY_NAME,
            workspace=str(Path(workspace).resolve()),
            tests=config.tests or "(none)",
        )
        result = perform(config, workspace=workspace, variables=variables, console=console)
        console.print_outcome(result.outcome.value, result.exit_code)

    except ConfigurationError as e:
        console.print_error("Invalid step configuration", e.message)
        sys.exit(1)
    except ExecutionError as e:
        console.print_error(
            "Mozmill could not be started",
            e.message,
            details=[f"command: {e.command}"],
            suggestion=e.hint,
        )
        sys.exit(1)
    except StepInterrupted as e:
        console.print_info(f"\nTerminated by {signal.Signals(e.signum).name}")
        sys.exit(128 + e.signum)
    except KeyboardInterrupt:
        console.print_info("\nInterrupted by user")
        sys.exit(130)
    except Exception as e:
        console.print_exception(e)
        sys.exit(1)
    finally:
        signal.signal(signal.SIGTERM, previous_handler)

    if result.outcome is Outcome.CONFIG_ERROR:
        sys.exit(1)
    if result.outcome is Outcome.UNSTABLE and fail_unstable:
        sys.exit(1)


@cli.command()
@step_options
@click.pass_context
def command(ctx, step_file, tests, wrapper, logfile, port, showall, show_errors):
    """Print the mozmill command line without running it."""
    console = get_console()
    config = _load_or_exit(
        ctx,
        step_file=step_file,
        tests=tests,
        wrapper=wrapper,
        logfile=logfile,
        port=port,
        showall=showall,
        show_errors=show_errors,
    )
    if not config.tests:
        console.print_error("No tests specified", NO_TESTS_MESSAGE)
        sys.exit(1)

    console.print_info(build_command(config))


@cli.command()
@step_options
@click.option("--workspace", default=None, help="Workspace to resolve a relative wrapper against")
@click.pass_context
def check(ctx, step_file, tests, wrapper, logfile, port, showall, show_errors, workspace):
    """Validate the step configuration."""
    console = get_console()
    config = _load_or_exit(
        ctx,
        step_file=step_file,
        tests=tests,
        wrapper=wrapper,
        logfile=logfile,
        port=port,
        showall=showall,
        show_errors=show_errors,
    )

    results = validate(config, workspace=workspace)
    console.print_info(f"{DISPLAY_NAME}:")
    for name, _type, _help in FIELDS:
        if name in results:
            console.print_validation(name, results[name].kind, results[name].message)

    if has_errors(results):
        sys.exit(1)


if __name__ == "__main__":
    cli()
