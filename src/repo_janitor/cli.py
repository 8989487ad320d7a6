"""CLI entry point for Repo Janitor."""

import logging
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler

from repo_janitor.config import Config, load_config
from repo_janitor.core.executor import CommandExecutor
from repo_janitor.core.locator import RepositoryLocator
from repo_janitor.core.runner import BatchRunner
from repo_janitor.core.sequencer import CleanupSequencer
from repo_janitor.exceptions import ConfigError, DiscoveryError
from repo_janitor.reporting import ConsoleReporter

console = Console()


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def get_config(
    config_path: Optional[str],
    timeout: Optional[float],
    workers: Optional[int],
) -> Config:
    """
    Load configuration and apply command-line overrides.

    Raises:
        click.ClickException: If the config file cannot be loaded.
    """
    try:
        config = load_config(config_path)
    except ConfigError as e:
        raise click.ClickException(str(e)) from e

    overrides = {}
    if timeout is not None:
        overrides["command_timeout"] = timeout
    if workers is not None:
        overrides["max_workers"] = workers

    return config.model_copy(update=overrides) if overrides else config


@click.command()
@click.option(
    "-r",
    "--root",
    type=click.Path(path_type=Path),
    default=None,
    help="Directory to search for repositories (default: current directory).",
)
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Path to a TOML configuration file.",
)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help="Seconds before a single git command is killed (default: no limit).",
)
@click.option(
    "-w",
    "--workers",
    type=click.IntRange(min=1),
    default=None,
    help="Maximum repositories cleaned at once (default: all at once).",
)
@click.option(
    "--list",
    "list_only",
    is_flag=True,
    help="Only list discovered repositories, do not clean them.",
)
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Enable debug logging and print a summary table.",
)
@click.version_option(package_name="repo-janitor")
def main(
    root: Optional[Path],
    config_path: Optional[str],
    timeout: Optional[float],
    workers: Optional[int],
    list_only: bool,
    verbose: bool,
) -> None:
    """Repo Janitor - reset every git repository below a directory.

    Each repository found is hard reset, switched to master (or main),
    cleaned of untracked files, pulled with pruning, and stripped of every
    other local branch. Repositories are processed concurrently; failures
    are reported once all of them are done.

    Example:
        repo-janitor
        repo-janitor --root ~/src --timeout 300
        repo-janitor --list
    """
    configure_logging(verbose)
    config = get_config(config_path, timeout, workers)
    search_root = (root or Path.cwd()).absolute()

    locator = RepositoryLocator(marker=config.marker_directory)
    try:
        repositories = locator.find_repositories(search_root)
    except DiscoveryError as e:
        raise click.ClickException(str(e)) from e

    reporter = ConsoleReporter(console)

    if list_only:
        reporter.print_repositories(repositories)
        return

    executor = CommandExecutor(
        git_executable=config.git_executable,
        timeout=config.command_timeout,
    )
    runner = BatchRunner(CleanupSequencer(executor), max_workers=config.max_workers)

    report = runner.run(repositories, root=search_root, on_result=reporter.print_progress)
    reporter.print_report(report, verbose=verbose)
