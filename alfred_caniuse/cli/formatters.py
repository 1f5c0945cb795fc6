"""
Functions for rendering results as Alfred script-filter JSON or as Rich tables.
"""

from pathlib import Path
from typing import Any

from pydantic import BaseModel
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from alfred_caniuse.models.database import FeatureDatabase, FeatureMatch, VersionData
from alfred_caniuse.models.update import UpdateNotification


class AlfredItem(BaseModel):
    """One row in an Alfred script-filter result list."""

    title: str
    subtitle: str | None = None
    arg: str | None = None
    valid: bool = True


class AlfredFeedback(BaseModel):
    items: list[AlfredItem]


def render_alfred(items: list[AlfredItem]) -> str:
    return AlfredFeedback(items=items).model_dump_json(exclude_none=True)


def feature_url(site_url: str, slug: str) -> str:
    return f"{site_url}/features/{slug}"


def version_url(site_url: str, number: str) -> str:
    return f"{site_url}/versions/{number}"


def feature_subtitle(match: FeatureMatch) -> str:
    if not match.feature.version_number:
        return "unstable"
    subtitle = f"since v{match.feature.version_number}"
    if match.version and match.version.release_date:
        subtitle += f" (released {match.version.release_date})"
    return subtitle


def version_subtitle(version: VersionData, feature_count: int) -> str:
    released = version.release_date or "unreleased"
    return (
        f"{version.channel.value} · {released} · "
        f"{feature_count} feature{'s' if feature_count != 1 else ''} stabilized"
    )


def feature_item(match: FeatureMatch, site_url: str) -> AlfredItem:
    return AlfredItem(
        title=match.feature.title,
        subtitle=feature_subtitle(match),
        arg=feature_url(site_url, match.slug),
    )


def version_items(db: FeatureDatabase, site_url: str, limit: int = 5) -> list[AlfredItem]:
    """Builds one item per recent version, newest first."""
    return [
        AlfredItem(
            title=f"Rust {version.number}",
            subtitle=version_subtitle(version, len(db.features_since(version.number))),
            arg=version_url(site_url, version.number),
        )
        for version in db.recent_versions(limit)
    ]


def update_item(notification: UpdateNotification) -> AlfredItem:
    return AlfredItem(
        title=notification.title,
        subtitle=notification.subtitle,
        arg=notification.url,
    )


def error_item(error: Exception) -> AlfredItem:
    return AlfredItem(title="error", subtitle=str(error) or type(error).__name__, valid=False)


def print_feature_table(console: Console, match: FeatureMatch, site_url: str):
    """Displays a single feature with its stabilization details."""
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(style="bold cyan")
    table.add_column()

    feature = match.feature
    if feature.version_number:
        table.add_row("Since:", f"[green]v{feature.version_number}[/green]")
    else:
        table.add_row("Since:", "[yellow]unstable[/yellow]")
    if match.version:
        table.add_row("Channel:", match.version.channel.value)
        if match.version.release_date:
            table.add_row("Released:", match.version.release_date)
    if feature.flag:
        table.add_row("Feature flag:", f"[dim]{feature.flag}[/dim]")
    if feature.items:
        table.add_row("Items:", ", ".join(feature.items))
    table.add_row("More:", f"[dim]{feature_url(site_url, match.slug)}[/dim]")

    console.print(Panel(table, title=f"[bold]{feature.title}[/bold]", border_style="cyan"))


def print_versions_table(console: Console, db: FeatureDatabase, limit: int = 5):
    """Displays the most recent Rust versions."""
    table = Table(title="Recent Rust Versions")
    table.add_column("Version", style="cyan")
    table.add_column("Channel")
    table.add_column("Released", style="dim")
    table.add_column("Features", justify="right", style="green")

    for version in db.recent_versions(limit):
        table.add_row(
            version.number,
            version.channel.value,
            version.release_date or "-",
            str(len(db.features_since(version.number))),
        )
    console.print(table)


def print_update_notice(console: Console, notification: UpdateNotification):
    console.print(
        f"[yellow]{notification.title}[/yellow] [dim]{notification.url}[/dim]"
    )


def format_error_with_suggestions(
    error: Exception, context: dict | None = None
) -> Panel:
    """Formats an error with actionable suggestions into a Rich Panel."""
    error_type = type(error).__name__
    error_msg = str(error)

    suggestions_map = {
        "FeatureNotFoundError": [
            "• Queries must match a caniuse.rs feature slug exactly.",
            "• Run `query` without arguments to list recent versions.",
        ],
        "DatabaseFetchError": [
            "• Check your internet connection.",
            "• caniuse.rs might be temporarily unavailable.",
            "• Please try again in a few minutes.",
        ],
        "ConfigurationError": [
            "• Review the values in your config.ini.",
            "• Run with --show-config to see the effective settings.",
        ],
    }

    suggestions = suggestions_map.get(
        error_type, ["• Run the command with -vv for detailed logs."]
    )

    error_text = Text()
    error_text.append(f"{error_type}: ", style="bold red")
    error_text.append(error_msg)

    content = Table.grid(padding=(1, 0))
    content.add_row(error_text)
    content.add_row()
    content.add_row(Text("Suggestions", style="bold yellow"))
    content.add_row(Text("\n".join(suggestions)))

    if context:
        content.add_row()
        content.add_row(Text(f"Context: {context}", style="dim"))

    return Panel(
        content,
        title="[bold red]An Error Occurred[/bold red]",
        border_style="red",
        expand=False,
    )


def print_config(console: Console, config_path: Path, config_data: dict[str, Any]):
    """Displays the effective configuration."""
    content = "\n".join(f"{key} = {value}" for key, value in sorted(config_data.items()))
    console.print(
        Panel(
            content,
            title=f"Configuration ([dim]{config_path}[/dim])",
            border_style="cyan",
        )
    )
