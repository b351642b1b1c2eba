"""Command line interface for docso."""

from __future__ import annotations

import asyncio
import logging
import time
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from docso.config import AppConfig, locate_index_dir
from docso.errors import DocsoError
from docso.models import Block
from docso.pagination.state import ListingKind, PaginationState
from docso.providers.json_files import JsonIndexProvider
from docso.query.service import DocsService
from docso.render.formatter import error_block, render_page

console = Console()
app = typer.Typer(help="docso - look up package documentation from local indexes")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _print_block(block: Block, *, error: bool = False) -> None:
    console.print(
        Panel(
            Text(block.description),
            title=Text(block.title, style="bold"),
            subtitle=Text(block.footer) if block.footer else None,
            border_style="red" if error else "cyan",
        )
    )


@app.command()
def doc(
    args: Optional[List[str]] = typer.Argument(
        None, help="Package, optionally followed by a name or Type.Method expression."
    ),
    index_dir: Path = typer.Option(None, "--index-dir", help="Directory with JSON indexes"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Look up a package, function, type or method."""
    _setup_logging(verbose)
    provider = JsonIndexProvider(locate_index_dir(index_dir))
    service = DocsService(provider, prefix="docso ", command="doc")

    try:
        block = asyncio.run(service.query(["doc", *(args or [])]))
    except DocsoError as exc:
        _print_block(error_block(exc), error=True)
        raise typer.Exit(code=1)
    _print_block(block)


@app.command("list")
def list_entries(
    package: str = typer.Argument(..., help="Package to list"),
    kind: ListingKind = typer.Option(ListingKind.FUNCTIONS, "--kind", help="What to list"),
    page: int = typer.Option(1, "--page", min=1, help="Page to show"),
    index_dir: Path = typer.Option(None, "--index-dir", help="Directory with JSON indexes"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Print one page of the functions or types of a package."""
    _setup_logging(verbose)
    provider = JsonIndexProvider(locate_index_dir(index_dir))

    try:
        index = asyncio.run(provider.fetch_index(package))
    except DocsoError as exc:
        _print_block(error_block(exc), error=True)
        raise typer.Exit(code=1)

    state = PaginationState.create(
        kind, index, owner_id="cli", channel_id="cli", now=time.monotonic()
    )
    state.current_page = state.clamp_page(page)
    _print_block(render_page(state))


@app.command()
def web(
    host: str = typer.Option("127.0.0.1", help="Host interface"),
    port: int = typer.Option(8000, help="Server port"),
    index_dir: Path = typer.Option(None, "--index-dir", help="Directory with JSON indexes"),
    idle_timeout: float = typer.Option(
        AppConfig().idle_timeout, help="Seconds before an untouched listing stops paging"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Start the HTTP chat adapter."""
    _setup_logging(verbose)
    try:
        import uvicorn
    except ImportError as exc:  # pragma: no cover - defensive
        raise typer.BadParameter(
            "uvicorn is not installed. Install the web extras with \"python -m pip install '.[web]'\""
        ) from exc

    from docso.web.app import create_app

    resolved = locate_index_dir(index_dir)
    if not resolved.exists():
        console.print("[yellow]Warning: index directory not found, lookups will fail.[/yellow]")

    config = AppConfig(index_dir=resolved, idle_timeout=idle_timeout)
    console.print(f"Starting docso on http://{host}:{port} (indexes: {resolved})")
    uvicorn.run(
        create_app(config),
        host=host,
        port=port,
        reload=False,
        log_level="info",
    )
