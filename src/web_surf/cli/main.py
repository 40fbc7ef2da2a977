"""
Main CLI application for web-surf.

Provides the command-line interface for:
- Fetching a page and inspecting its links and forms
- Managing and opening bookmarks
- Viewing configuration
"""

from pathlib import Path
from typing import NoReturn, Optional

import httpx
import typer
import yaml
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from web_surf import __version__
from web_surf.browser import Attribute, Browser
from web_surf.config import Settings, get_default_config_path, load_config
from web_surf.core.exceptions import WebSurfError
from web_surf.jar.bookmarks import FileBookmarks
from web_surf.utils.logging import get_logger, setup_logging

DEFAULT_BOOKMARKS_PATH = Path.home() / ".web_surf" / "bookmarks.json"

app = typer.Typer(
    name="web-surf",
    help="Programmable HTTP browser - open pages, follow links, submit forms",
    add_completion=False,
    no_args_is_help=True,
)

bookmark_app = typer.Typer(help="Manage bookmarks", no_args_is_help=True)
config_app = typer.Typer(help="Configuration commands", no_args_is_help=True)
app.add_typer(bookmark_app, name="bookmark")
app.add_typer(config_app, name="config")

console = Console()
logger = get_logger(__name__)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"[bold blue]web-surf[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    config_file: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to configuration file",
        exists=True,
        dir_okay=False,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Enable verbose logging",
    ),
) -> None:
    """
    web-surf - browse the web from the command line.

    Use 'web-surf --help' for command list.
    """
    try:
        settings = load_config(config_file or get_default_config_path())
    except (WebSurfError, OSError) as e:
        _fail(e)
    setup_logging(settings.logging, level="DEBUG" if verbose else None)
    ctx.obj = {"settings": settings}


def _settings(ctx: typer.Context) -> Settings:
    obj = ctx.obj or {}
    return obj.get("settings") or load_config(None)


def _create_browser(settings: Settings) -> Browser:
    """Build the browser used by the commands."""
    return Browser.from_settings(settings)


def _bookmarks(settings: Settings) -> FileBookmarks:
    return FileBookmarks(settings.bookmarks.file_path or DEFAULT_BOOKMARKS_PATH)


def _fail(error: Exception) -> NoReturn:
    console.print(f"[red]Error:[/red] {error}")
    logger.debug("Command failed", exc_info=error)
    raise typer.Exit(1)


def _print_page(browser: Browser) -> None:
    console.print(Panel(
        f"[bold]{browser.title or '(no title)'}[/bold]\n"
        f"[dim]{browser.url}[/dim]\n"
        f"Status: {browser.status_code}",
        title="Page",
        border_style="blue",
    ))


@app.command()
def fetch(
    ctx: typer.Context,
    url: str = typer.Argument(
        ...,
        help="URL to open",
    ),
    follow_redirects: bool = typer.Option(
        True,
        "--redirects/--no-redirects",
        help="Follow Location headers",
    ),
    show_links: bool = typer.Option(
        False,
        "--links",
        "-l",
        help="List the links on the page",
    ),
    show_forms: bool = typer.Option(
        False,
        "--forms",
        "-f",
        help="List the forms on the page",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the page markup to this file",
    ),
) -> None:
    """
    Open a page and show what is on it.

    Example:
        web-surf fetch https://example.com/ --links
    """
    settings = _settings(ctx)

    try:
        with _create_browser(settings) as browser:
            browser.set_attribute(Attribute.FOLLOW_REDIRECTS, follow_redirects)
            browser.open(url)
            _print_page(browser)

            if show_links:
                table = Table(title="Links")
                table.add_column("Text")
                table.add_column("URL", style="cyan")
                for link in browser.links():
                    table.add_row(link.text.strip(), link.href)
                console.print(table)

            if show_forms:
                table = Table(title="Forms")
                table.add_column("Method")
                table.add_column("Action", style="cyan")
                table.add_column("Fields")
                for form in browser.forms():
                    table.add_row(form.method, form.action,
                                  ", ".join(form.values()))
                console.print(table)

            if output is not None:
                with open(output, "wb") as f:
                    written = browser.download(f)
                console.print(f"[green]Saved {written} bytes to {output}[/green]")

    except (WebSurfError, httpx.HTTPError) as e:
        _fail(e)


@bookmark_app.command("add")
def bookmark_add(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Bookmark name"),
    url: str = typer.Argument(..., help="URL to bookmark"),
) -> None:
    """Save a URL under a name."""
    try:
        _bookmarks(_settings(ctx)).save(name, url)
    except WebSurfError as e:
        _fail(e)
    console.print(f"[green]Bookmarked[/green] {name} -> {url}")


@bookmark_app.command("remove")
def bookmark_remove(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Bookmark name"),
) -> None:
    """Delete a bookmark."""
    try:
        _bookmarks(_settings(ctx)).remove(name)
    except WebSurfError as e:
        _fail(e)
    console.print(f"[green]Removed[/green] {name}")


@bookmark_app.command("list")
def bookmark_list(ctx: typer.Context) -> None:
    """Show every bookmark."""
    bookmarks = _bookmarks(_settings(ctx)).all()
    if not bookmarks:
        console.print("[yellow]No bookmarks[/yellow]")
        return

    table = Table(title="Bookmarks")
    table.add_column("Name", style="bold")
    table.add_column("URL", style="cyan")
    for name, url in sorted(bookmarks.items()):
        table.add_row(name, url)
    console.print(table)


@bookmark_app.command("open")
def bookmark_open(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Bookmark name"),
) -> None:
    """Open a bookmarked page."""
    settings = _settings(ctx)
    try:
        with _create_browser(settings) as browser:
            browser.bookmarks = _bookmarks(settings)
            browser.open_bookmark(name)
            _print_page(browser)
    except (WebSurfError, httpx.HTTPError) as e:
        _fail(e)


@config_app.command("show")
def config_show(ctx: typer.Context) -> None:
    """Print the effective configuration."""
    settings = _settings(ctx)
    console.print(
        yaml.safe_dump(settings.model_dump(mode="json"), sort_keys=False),
        markup=False,
    )


@config_app.command("path")
def config_path() -> None:
    """Print the configuration file in use."""
    path = get_default_config_path()
    if path is None:
        console.print("[yellow]No configuration file found, using defaults[/yellow]")
    else:
        console.print(str(path))
