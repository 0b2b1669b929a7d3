"""CLI entry point for the pipelight monitor.

Two modes:
- monitor: one GitLab project on the default LED pins
- multi: several projects from projects.yml, each on its own LED pins
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import click
from dotenv import load_dotenv

from pipelight.config import (
    DEFAULT_BRANCH,
    DEFAULT_PROJECTS_FILE,
    MULTI_PROJECT_INTERVAL,
    SINGLE_PROJECT_INTERVAL,
    ConfigError,
    MonitorConfig,
)
from pipelight.indicator import FirmataDriver, IndicatorDriver, IndicatorError, SimulatedDriver
from pipelight.logging import setup_logging
from pipelight.scheduler import PollScheduler


def _common_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Options shared by both monitor commands."""
    func = click.option(
        "-v",
        "--verbose",
        is_flag=True,
        help="Enable debug logging",
    )(func)
    func = click.option(
        "--port",
        default=None,
        help="Serial port of the Arduino (autodetected if not specified)",
    )(func)
    func = click.option(
        "--simulate",
        is_flag=True,
        help="Run without hardware, logging LED changes instead",
    )(func)
    func = click.option(
        "--only-red-green",
        is_flag=True,
        help="Leave the LEDs untouched while a build is pending",
    )(func)
    return func


def _open_driver(simulate: bool, port: str | None) -> IndicatorDriver:
    if simulate:
        return SimulatedDriver()
    return FirmataDriver.connect(port)


def _start(config: MonitorConfig, simulate: bool, port: str | None) -> None:
    try:
        driver = _open_driver(simulate, port)
    except IndicatorError as e:
        click.echo(f"Indicator error: {e}", err=True)
        sys.exit(1)

    scheduler = PollScheduler.from_config(config, driver)
    scheduler.install_signal_handlers()
    scheduler.run()


@click.group()
@click.version_option()
@click.option(
    "--env-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=".env",
    show_default=True,
    help="File with GITLAB_* variables; the real environment takes precedence",
)
def main(env_file: Path) -> None:
    """Show GitLab pipeline status on LEDs and a buzzer."""
    load_dotenv(env_file)


@main.command()
@click.argument("interval", type=int, default=SINGLE_PROJECT_INTERVAL)
@click.option(
    "--project-id",
    default=None,
    help="GitLab project path or ID (default: $GITLAB_PROJECT_ID)",
)
@click.option(
    "--branch",
    default=DEFAULT_BRANCH,
    show_default=True,
    help="Branch to track",
)
@_common_options
def monitor(
    interval: int,
    project_id: str | None,
    branch: str,
    only_red_green: bool,
    simulate: bool,
    port: str | None,
    verbose: bool,
) -> None:
    """Monitor the latest pipeline of a single project.

    Polls every INTERVAL seconds (default: 120).
    """
    setup_logging(level="DEBUG" if verbose else None, log_file="monitor.log")

    try:
        config = MonitorConfig.single(
            project_id=project_id,
            branch=branch,
            interval=interval,
            only_red_green=only_red_green,
        )
    except ConfigError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)

    _start(config, simulate, port)


@main.command()
@click.argument("interval", type=int, default=MULTI_PROJECT_INTERVAL)
@click.option(
    "-p",
    "--projects",
    "projects_file",
    type=click.Path(path_type=Path),
    default=DEFAULT_PROJECTS_FILE,
    show_default=True,
    help="YAML file listing the projects to track",
)
@click.option(
    "--concurrent",
    is_flag=True,
    help="Poll every project in its own thread instead of one after another",
)
@_common_options
def multi(
    interval: int,
    projects_file: Path,
    concurrent: bool,
    only_red_green: bool,
    simulate: bool,
    port: str | None,
    verbose: bool,
) -> None:
    """Monitor several projects, each on its own set of LEDs.

    Without --concurrent the projects are polled in file order with
    INTERVAL seconds (default: 60) between each one.
    """
    setup_logging(level="DEBUG" if verbose else None, log_file="multi-monitor.log")

    try:
        config = MonitorConfig.multi(
            projects_file=projects_file,
            interval=interval,
            only_red_green=only_red_green,
            concurrent=concurrent,
        )
    except ConfigError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)

    _start(config, simulate, port)


if __name__ == "__main__":
    main()
