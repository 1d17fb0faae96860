"""
Main CLI application using Typer.
"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..adapters.ics_feed_client import IcsFeedClient
from ..adapters.mock_feed_client import MockFeedClient
from ..config import AppConfig, get_default_config_path
from ..domain.exceptions import AvailabilityError
from ..services.availability_service import AvailabilityService, FeedClientProtocol
from ..services.command_router import CommandRouter

app = typer.Typer(
    name="freeslots",
    help="Show free meeting slots computed from an iCalendar feed",
    add_completion=False
)

console = Console()

ConfigOption = Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")]
UrlOption = Annotated[Optional[str], typer.Option("--url", help="Override the calendar feed URL from the config.")]
IcsFileOption = Annotated[Optional[Path], typer.Option("--ics-file", help="Read the calendar from a local .ics file instead of the feed URL.")]
VerboseOption = Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")]


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
        force=True,
    )


def _load_config(config_file: Optional[Path], url: Optional[str]) -> AppConfig:
    """
    Load the YAML config and apply the URL override.

    Without a config file, ``--url`` alone is enough to run with defaults.
    """
    config_path = config_file or get_default_config_path()

    try:
        config = AppConfig.load_from_yaml(config_path)
    except FileNotFoundError:
        if not url:
            raise
        return AppConfig(calendar_url=url)

    if url:
        config = config.model_copy(update={"calendar_url": url})
    return config


def _build_feed_client(config: AppConfig, ics_file: Optional[Path]) -> FeedClientProtocol:
    if ics_file:
        console.print(f"[yellow]⚠  Using local calendar file: {ics_file}[/yellow]")
        return MockFeedClient(path=ics_file, timezone=config.timezone)

    return IcsFeedClient(
        url=config.calendar_url,
        timezone=config.timezone,
        timeout_seconds=config.request_timeout_seconds,
        user_agent=config.user_agent
    )


def _build_service(config_file: Optional[Path], url: Optional[str], ics_file: Optional[Path]) -> AvailabilityService:
    config = _load_config(config_file, url)
    return AvailabilityService(feed_client=_build_feed_client(config, ics_file), config=config)


@app.command()
def report(
    config_file: ConfigOption = None,
    url: UrlOption = None,
    ics_file: IcsFileOption = None,
    verbose: VerboseOption = False,
):
    """
    Print free slots for the configured horizon.

    Examples:

        freeslots report
        freeslots report --url https://calendar.example.com/export.ics
        freeslots report --ics-file ./calendar.ics
    """
    _configure_logging(verbose)

    try:
        service = _build_service(config_file, url, ics_file)
        text = service.compute_availability_report()

    except AvailabilityError as e:
        console.print(f"[bold red]Error:[/bold red] Could not compute availability ({e})")
        raise typer.Exit(1)

    except (FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    console.print()
    console.print(text, highlight=False)
    console.print()


@app.command()
def events(
    config_file: ConfigOption = None,
    url: UrlOption = None,
    ics_file: IcsFileOption = None,
    verbose: VerboseOption = False,
):
    """
    List busy intervals from the feed after clipping to working hours.
    """
    _configure_logging(verbose)

    try:
        service = _build_service(config_file, url, ics_file)
        busy = service.fetch_busy_intervals()

    except AvailabilityError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    except (FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    if not busy:
        console.print("[yellow]No busy intervals within working hours.[/yellow]")
        return

    table = Table(
        title="Busy intervals",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Date", style="bold yellow")
    table.add_column("From")
    table.add_column("To")
    table.add_column("Minutes", justify="right", style="dim")

    for interval in sorted(busy, key=lambda i: i.start):
        table.add_row(
            interval.start.format("DD.MM.YYYY"),
            interval.start.format("HH:mm"),
            interval.end.format("DD.MM.YYYY HH:mm") if interval.end.date() != interval.start.date() else interval.end.format("HH:mm"),
            str(interval.duration_minutes())
        )

    console.print()
    console.print(table)
    console.print()


@app.command()
def menu(
    config_file: ConfigOption = None,
    url: UrlOption = None,
    ics_file: IcsFileOption = None,
    verbose: VerboseOption = False,
):
    """
    Preview the main menu message the chat bot would send.
    """
    _configure_logging(verbose)

    try:
        service = _build_service(config_file, url, ics_file)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    router = CommandRouter(service, owner_contact_url=service.config.owner_contact_url)
    reply = router.build_menu(chat_id=0)

    buttons = "\n".join(
        " | ".join(
            escape(f"[{button.text}]") + (f" → {escape(button.url)}" if button.url else "")
            for button in row
        )
        for row in reply.keyboard
    )

    console.print(Panel.fit(
        f"{escape(reply.text)}\n\n[dim]{buttons}[/dim]",
        title="✗ Menu" if reply.failed else "✓ Menu",
        border_style="red" if reply.failed else "green"
    ), highlight=False)

    if reply.failed:
        raise typer.Exit(1)


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]freeslots[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
