"""
Defines the command-line interface for the application using Typer.
"""

import asyncio
import logging
from enum import Enum

import typer
from rich.console import Console
from rich.logging import RichHandler

from alfred_caniuse import __version__
from alfred_caniuse.core.context import AppContext
from alfred_caniuse.exceptions import CaniuseCliError, FeatureNotFoundError
from alfred_caniuse.models.config import AppConfig
from alfred_caniuse.models.database import FeatureDatabase
from alfred_caniuse.models.update import UpdateNotification
from alfred_caniuse.storage.config_manager import ConfigManager
from alfred_caniuse.utils.path import get_config_dir

from .formatters import (
    error_item,
    feature_item,
    format_error_with_suggestions,
    print_config,
    print_feature_table,
    print_update_notice,
    print_versions_table,
    render_alfred,
    update_item,
    version_items,
)

# stdout is reserved for launcher output; everything else goes to stderr
console = Console()
err_console = Console(stderr=True)

logging.basicConfig(
    level="INFO",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[
        RichHandler(
            console=err_console,
            rich_tracebacks=True,
            show_path=False,
            show_level=False,
            markup=True,
        )
    ],
)
log = logging.getLogger("alfred_caniuse")

app = typer.Typer(
    name="alfred-caniuse",
    help="Check since which Rust version a feature is available, via caniuse.rs.",
    rich_markup_mode="rich",
    pretty_exceptions_show_locals=False,
    add_completion=False,
)

CONFIG_DIR = get_config_dir()
CONFIG_FILE = CONFIG_DIR / "config.ini"

RECENT_VERSIONS_LIMIT = 5


class OutputFormat(str, Enum):
    ALFRED = "alfred"
    TEXT = "text"


def _load_config() -> AppConfig:
    return ConfigManager(CONFIG_FILE).load_config()


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase logging verbosity (-vv for debug).",
    ),
    version: bool = typer.Option(
        False, "--version", help="Show version and exit.", is_eager=True
    ),
    show_config: bool = typer.Option(
        False, "--show-config", help="Display the effective configuration."
    ),
    clear_cache: bool = typer.Option(
        False, "--clear-cache", help="Delete the cached database and update record."
    ),
):
    """alfred-caniuse CLI"""
    if version:
        console.print(f"[bold]alfred-caniuse[/bold] version [cyan]{__version__}[/cyan]")
        raise typer.Exit()

    log_level = "INFO"
    if verbose >= 2:
        log_level = "DEBUG"
    logging.getLogger("alfred_caniuse").setLevel(log_level)

    if show_config or clear_cache:
        try:
            config = _load_config()
        except CaniuseCliError as e:
            err_console.print(format_error_with_suggestions(e))
            raise typer.Exit(code=1) from e

        if show_config:
            print_config(console, CONFIG_FILE, config.model_dump(mode="json"))

        if clear_cache:
            context = AppContext.from_config(config)
            if context.clear_caches():
                console.print(
                    f"[green]✓ Cache cleared ({config.cache_dir}).[/green]"
                )
            else:
                console.print("[red]✗ Failed to clear cache.[/red]")
                raise typer.Exit(code=1)
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


async def _gather(
    context: AppContext, check_updates: bool
) -> tuple[UpdateNotification | None, FeatureDatabase]:
    notification = None
    if check_updates and context.update_checker is not None:
        notification = await context.update_checker.check_for_update()
    db = await context.database_provider.get_database()
    return notification, db


def _report_error(error: Exception, output_format: OutputFormat) -> None:
    if output_format is OutputFormat.ALFRED:
        typer.echo(render_alfred([error_item(error)]))
    else:
        err_console.print(format_error_with_suggestions(error))


@app.command()
def query(
    text: str = typer.Argument(
        "", help="Feature slug to look up. Leave empty to list recent versions."
    ),
    output_format: OutputFormat = typer.Option(
        OutputFormat.ALFRED,
        "--format",
        "-f",
        case_sensitive=False,
        help="Alfred script-filter JSON or a human-readable table.",
    ),
    no_update_check: bool = typer.Option(
        False, "--no-update-check", help="Skip the self-update check for this run."
    ),
):
    """Look up a feature on caniuse.rs."""
    needle = text.strip()
    try:
        config = _load_config()
        context = AppContext.from_config(config)
        notification, db = asyncio.run(
            _gather(context, config.check_updates and not no_update_check)
        )

        match = None
        if needle:
            match = db.lookup(needle)
            if match is None:
                raise FeatureNotFoundError(f"No feature matches '{needle}'.")
    except CaniuseCliError as e:
        _report_error(e, output_format)
        raise typer.Exit(code=1) from e
    except Exception as e:
        log.debug("Full traceback:", exc_info=True)
        _report_error(e, output_format)
        raise typer.Exit(code=1) from e

    if output_format is OutputFormat.ALFRED:
        items = [update_item(notification)] if notification else []
        if match:
            items.append(feature_item(match, config.site_url))
        else:
            items.extend(version_items(db, config.site_url, RECENT_VERSIONS_LIMIT))
        typer.echo(render_alfred(items))
        return

    if notification:
        print_update_notice(console, notification)
    if match:
        print_feature_table(console, match, config.site_url)
    else:
        print_versions_table(console, db, RECENT_VERSIONS_LIMIT)
