"""CLI entry point for unitharness."""
from __future__ import annotations

import logging
import sys
from typing import Optional, Tuple

import click

from unitharness import __version__, bootstrap
from unitharness.config import REPORT_FORMATS, HarnessConfig, find_config, load_config
from unitharness.core.results import RunReport
from unitharness.core.runner import TestRunner
from unitharness.registry import get_registry
from unitharness.reporting import JsonReporter, ReportManager, Reporter, TerminalReporter
from unitharness.utils.importing import load_modules


CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}

DEFAULT_JSON_REPORT = "unitharness-report.json"


class CliState:
    """Holds global CLI state."""

    def __init__(self, verbose: bool) -> None:
        self.verbose = verbose


def _print_version(_: click.Context, __: click.Parameter, value: bool) -> None:
    if not value or click.get_current_context().resilient_parsing:
        return
    click.echo(f"unitharness {__version__}")
    raise click.exceptions.Exit()


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    logging.getLogger().setLevel(level)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.option("--verbose", is_flag=True, help="Enable verbose logging output.")
@click.option(
    "--version",
    is_flag=True,
    callback=_print_version,
    expose_value=False,
    is_eager=True,
    help="Show the unitharness version and exit.",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Top level CLI group for unitharness."""

    _configure_logging(verbose)
    ctx.obj = CliState(verbose=verbose)


config_option = click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="YAML config file (defaults to ./unitharness.yaml when present).",
)


@cli.command()
@click.argument("modules", nargs=-1)
@config_option
@click.option(
    "--report",
    "report_format",
    type=click.Choice(REPORT_FORMATS),
    help="Report format (terminal by default).",
)
@click.option("--report-path", type=str, help="When --report json, write to this path.")
@click.option("--no-color", is_flag=True, help="Disable ANSI colors in terminal output.")
@click.pass_obj
def run(
    state: CliState,
    modules: Tuple[str, ...],
    config_path: Optional[str],
    report_format: Optional[str],
    report_path: Optional[str],
    no_color: bool,
) -> None:
    """Import MODULES (dotted names or .py files) and run every registered case."""

    config = _prepare(
        state,
        modules,
        config_path,
        report=report_format,
        report_path=report_path,
        color=False if no_color else None,
    )
    report = run_with_reporters(_build_reporters(config))
    raise click.exceptions.Exit(report.exit_code)


@cli.command(name="list")
@click.argument("modules", nargs=-1)
@config_option
@click.pass_obj
def list_cases(state: CliState, modules: Tuple[str, ...], config_path: Optional[str]) -> None:
    """Print the registered cases as Suite.name, in execution order."""

    _prepare(state, modules, config_path)
    for case in get_registry().cases():
        click.echo(case.identifier())


def run_with_reporters(reporters: list[Reporter]) -> RunReport:
    """Run the process registry while streaming outcomes to ``reporters``."""

    registry = get_registry()
    manager = ReportManager(reporters)
    manager.start(len(registry))
    report = TestRunner(registry).run(on_result=manager.handle_result)
    manager.complete(report)
    return report


def _prepare(
    state: CliState,
    modules: Tuple[str, ...],
    config_path: Optional[str],
    *,
    report: Optional[str] = None,
    report_path: Optional[str] = None,
    color: Optional[bool] = None,
) -> HarnessConfig:
    try:
        found = find_config(config_path)
        config = load_config(found) if found else HarnessConfig()
        config = config.merged(
            modules=modules,
            report=report,
            report_path=report_path,
            color=color,
            verbose=state.verbose or None,
        )
        if config.verbose and not state.verbose:
            _configure_logging(True)
        bootstrap()
        load_modules(config.modules)
    except Exception as exc:  # pragma: no cover - CLI error translation
        raise click.ClickException(str(exc)) from exc
    return config


def _build_reporters(config: HarnessConfig) -> list[Reporter]:
    if config.report == "json":
        return [JsonReporter(config.report_path or DEFAULT_JSON_REPORT)]
    return [TerminalReporter(use_color=config.color)]


def main(argv: Optional[list[str]] = None) -> int:
    """Program entry point for console_scripts shim."""

    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=argv, prog_name="unitharness", standalone_mode=True)
    except click.ClickException as err:  # pragma: no cover - click handles display
        err.show()
        return err.exit_code
    except SystemExit as exc:  # click may raise exit code
        return int(exc.code or 0)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
