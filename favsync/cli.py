"""Click-based CLI for favsync - Bilibili favorite-list sync daemon."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from favsync import __version__
from favsync.config import (
    ConfigError,
    SyncConfiguration,
    get_config_path,
    load_config,
    validate_config_file,
    write_default_config,
)
from favsync.logger import setup_logging
from favsync.notify.mailer import NotificationDispatcher
from favsync.output.console import Console, create_console
from favsync.remote.client import FavClient, RemoteError
from favsync.sync.pipeline import CollectionSyncPipeline
from favsync.sync.scheduler import DirectoryPreparationError, SyncScheduler
from favsync.sync.session import CriticalFailure, SessionGate

logger = logging.getLogger(__name__)

config_option = click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to config.yaml (default: $FAVSYNC_CONFIG or ./config.yaml)",
)


def _load_or_exit(console: Console, config_path: Optional[Path]) -> SyncConfiguration:
    """Load configuration, exiting with code 1 on ConfigError."""
    try:
        return load_config(config_path)
    except ConfigError as e:
        console.print_error(str(e))
        sys.exit(1)


def build_scheduler(config: SyncConfiguration) -> SyncScheduler:
    """Wire the client, session gate, and pipeline for a configuration."""
    client = FavClient(config.client.binary, timeout=config.client.timeout)
    dispatcher = NotificationDispatcher(config.smtp)
    session_gate = SessionGate(client, config.credential, dispatcher)
    return SyncScheduler(config, client, session_gate, CollectionSyncPipeline(client))


@click.group()
@click.version_option(version=__version__, prog_name="favsync")
def cli() -> None:
    """favsync - keep Bilibili favorite lists synced to local directories.

    Logs in with browser cookies, then on every interval re-checks the
    session and pulls each favorite list into its own directory. An email
    alert is sent when the cookies stop working.

    \b
    Quick start:
      favsync config init      Write a config.yaml template
      favsync check            Verify config and cookies
      favsync run              Start the sync loop
    """
    pass


@cli.command()
@config_option
@click.option("--once", is_flag=True, help="Run a single round and exit")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option("--log-file", type=click.Path(dir_okay=False, path_type=Path), help="Also write the log to this file")
def run(config_path: Optional[Path], once: bool, verbose: bool, log_file: Optional[Path]) -> None:
    """Run the synchronization loop.

    Exits with code 1 when the session cannot be established or has expired,
    when a target directory cannot be created, or when the initial metadata
    fetch fails. A failing favorite list is logged and skipped for the round.
    """
    console = create_console(verbose=verbose)
    config = _load_or_exit(console, config_path)

    setup_logging(
        verbose=verbose or config.output.verbose,
        log_file=log_file or config.output.log_file,
        colored=config.output.colored,
    )
    logger.info("Loaded configuration with %s favorite lists", len(config.favorite_list))

    scheduler = build_scheduler(config)
    try:
        if once:
            scheduler.run(max_rounds=1, on_round=console.print_round_result)
        else:
            scheduler.run()
    except CriticalFailure as e:
        logger.error("Terminated by critical error: %s", e.subject)
        console.print_error(e.subject)
        sys.exit(1)
    except (RemoteError, DirectoryPreparationError) as e:
        logger.error("Terminated by fatal error: %s", e)
        console.print_error(str(e))
        sys.exit(1)
    except KeyboardInterrupt:
        console.print_warning("Interrupted, stopping.")


@cli.command()
@config_option
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def check(config_path: Optional[Path], verbose: bool) -> None:
    """Validate the configuration and the session cookies once."""
    console = create_console(verbose=verbose)
    config = _load_or_exit(console, config_path)
    setup_logging(verbose=verbose or config.output.verbose, colored=config.output.colored)

    scheduler = build_scheduler(config)
    try:
        scheduler.session_gate.validate_startup()
        scheduler.session_gate.validate_round()
    except CriticalFailure as e:
        console.print_error(e.subject)
        sys.exit(1)

    console.print_success("Session is valid.")


# ============================================================================
# Configuration Commands
# ============================================================================


@cli.group()
def config() -> None:
    """Configuration file commands."""
    pass


@config.command("init")
@config_option
@click.option("--force", "-f", is_flag=True, help="Overwrite an existing file")
def config_init(config_path: Optional[Path], force: bool) -> None:
    """Write a commented default configuration."""
    console = create_console()
    path, created = write_default_config(config_path, force=force)
    if created:
        console.print_success(f"Created {path}")
        console.print_info("Fill in the credential section before running 'favsync run'.")
    else:
        console.print_warning(f"{path} already exists (use --force to overwrite)")


@config.command("validate")
@config_option
def config_validate(config_path: Optional[Path]) -> None:
    """Validate the configuration file."""
    console = create_console()
    path = config_path or get_config_path()
    is_valid, messages = validate_config_file(path)

    if is_valid:
        for warning in messages:
            console.print_warning(warning)
        console.print_success(f"Configuration is valid: {path}")
        return

    for error in messages:
        console.print_error(error)
    sys.exit(1)


@config.command("show")
@config_option
def config_show(config_path: Optional[Path]) -> None:
    """Show the configuration summary and favorite lists."""
    console = create_console()
    config = _load_or_exit(console, config_path)
    console.print_config_summary(str(config_path or get_config_path()), config)
    console.print_collections(config)
