import json
from typing import Sequence

import typer
from pydantic import BaseModel
from rich.table import Table

from wiki.core.categories import EncyclopediaCategory, MediaType
from wiki.core.context import AppContext
from wiki.core.models import CollectionItem, PreviewItem
from wiki.fetchers import ensure_browser_installed
from wiki.main import app
from wiki.services import ITEM_KINDS, PageKind
from wiki.utils import (
    console,
    error,
    handle_fetch_errors,
    wait_for_result,
    with_default_scheme,
)


# -------------------------
# Output Formatting
# -------------------------
def format_preview_table(items: Sequence[PreviewItem]) -> None:
    """Print catalogue cards as a Rich table."""
    table = Table(show_header=True, header_style="bold cyan", border_style="dim")
    table.add_column("Item ID", style="dim", no_wrap=True)
    table.add_column("Name", style="magenta")
    table.add_column("Image", style="blue", no_wrap=False)

    for item in items:
        table.add_row(
            item.item_id,
            item.name,
            f"[link={item.image_url}]{item.image_url}[/link]" if item.image_url else "",
        )

    console.print(table)


def format_collection_table(items: Sequence[CollectionItem]) -> None:
    """Print collection cards as a Rich table."""
    table = Table(show_header=True, header_style="bold cyan", border_style="dim")
    table.add_column("Item ID", style="dim", no_wrap=True)
    table.add_column("Title", style="magenta")
    table.add_column("Cover", style="blue", no_wrap=False)

    for item in items:
        table.add_row(
            item.item_id or "",
            item.title or "",
            f"[link={item.cover}]{item.cover}[/link]" if item.cover else "",
        )

    console.print(table)


def print_models_json(items: Sequence[BaseModel]) -> None:
    data = [item.model_dump(mode="json") for item in items]
    typer.echo(json.dumps(data, indent=2, ensure_ascii=False))


# -------------------------
# Commands
# -------------------------
@app.command()
def categories() -> None:
    """List encyclopedia categories and media collections."""
    table = Table(show_header=True, header_style="bold cyan", border_style="dim")
    table.add_column("Name", style="magenta", no_wrap=True)
    table.add_column("Title", style="green")
    table.add_column("Catalogue", style="dim", justify="right")
    table.add_column("Use with", style="dim")

    for category in EncyclopediaCategory:
        table.add_row(
            category.value, category.title, str(category.catalogue_id), "wiki list"
        )
    for media_type in MediaType:
        table.add_row(
            media_type.value,
            media_type.title,
            str(media_type.catalogue_id),
            "wiki media",
        )

    console.print(table)


@app.command(name="ls", hidden=True)
@app.command(name="list")
def list_entries(
    ctx: typer.Context,
    category: EncyclopediaCategory = typer.Argument(..., help="Catalogue category"),
    refresh: bool = typer.Option(False, "--refresh", "-r", help="Bypass the cache"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table"),
) -> None:
    """List the entries of an encyclopedia category. (Alias: ls)"""
    app_ctx: AppContext = ctx.obj
    handle = app_ctx.client.fetch_entries(category, force_refresh=refresh)
    items = wait_for_result(
        handle, app_ctx.config.fetch_timeout, f"{category.value} catalogue"
    )

    if as_json:
        print_models_json(items)
        return
    if not items:
        typer.echo("No entries found.")
        return
    format_preview_table(items)


@app.command()
def media(
    ctx: typer.Context,
    media_type: MediaType = typer.Argument(..., help="Media collection"),
    refresh: bool = typer.Option(False, "--refresh", "-r", help="Bypass the cache"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table"),
) -> None:
    """List the items of a media collection."""
    app_ctx: AppContext = ctx.obj
    handle = app_ctx.client.fetch_media(media_type, force_refresh=refresh)
    items = wait_for_result(
        handle, app_ctx.config.fetch_timeout, f"{media_type.value} collection"
    )

    if as_json:
        print_models_json(items)
        return
    if not items:
        typer.echo("No items found.")
        return
    format_collection_table(items)


@app.command()
def strategies(
    ctx: typer.Context,
    refresh: bool = typer.Option(False, "--refresh", "-r", help="Bypass the cache"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table"),
) -> None:
    """List the strategy guide collection."""
    app_ctx: AppContext = ctx.obj
    handle = app_ctx.client.fetch_strategies(force_refresh=refresh)
    items = wait_for_result(handle, app_ctx.config.fetch_timeout, "strategy guides")

    if as_json:
        print_models_json(items)
        return
    if not items:
        typer.echo("No guides found.")
        return
    format_collection_table(items)


@app.command()
def show(
    ctx: typer.Context,
    kind: PageKind = typer.Argument(..., help="Kind of item page"),
    identifier: str = typer.Argument(..., help="Item ID or item page URL"),
    refresh: bool = typer.Option(False, "--refresh", "-r", help="Bypass the cache"),
) -> None:
    """Show a single item page as JSON.

    Examples:
        wiki show weapon 1438830164665520128
        wiki show guide https://wiki.kurobbs.com/mc/item/1437636572639440896
    """
    app_ctx: AppContext = ctx.obj

    if kind not in ITEM_KINDS:
        names = ", ".join(k.value for k in ITEM_KINDS)
        error(f"'{kind.value}' is not an item page kind (use one of: {names})")
        raise typer.Exit(1)

    operation = f"{kind.value} page"
    if identifier.isdigit():
        handle = app_ctx.client.fetch_item(kind, identifier, force_refresh=refresh)
    else:
        # Malformed addresses are rejected before anything is scheduled
        with handle_fetch_errors(operation):
            handle = app_ctx.client.fetch(
                kind, with_default_scheme(identifier), force_refresh=refresh
            )

    result = wait_for_result(handle, app_ctx.config.fetch_timeout, operation)
    typer.echo(result.model_dump_json(indent=2))


@app.command()
def setup(ctx: typer.Context) -> None:
    """Install the Chromium build used to render pages."""
    app_ctx: AppContext = ctx.obj
    with console.status("[bold dim]Checking browser installation...[/bold dim]"):
        try:
            ensure_browser_installed(app_ctx.logger)
        except RuntimeError as e:
            error(str(e))
            raise typer.Exit(1)
    console.print("[green]✓[/green] Browser ready")
