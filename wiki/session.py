"""Interactive session and cache inspection commands.

Every CLI invocation builds a fresh client, so its in-memory caches only
pay off when several commands run in one process. ``wiki shell`` keeps a
single client alive and dispatches each line through the regular command
tree; ``wiki cache`` reports or clears what that client holds.
"""

import json
import shlex

import click
import typer
from rich.table import Table

from wiki.core.context import AppContext
from wiki.main import app
from wiki.services import PageKind
from wiki.utils import DATETIME_FORMAT, console, error

EXIT_WORDS = ("exit", "quit")

cache_app = typer.Typer(invoke_without_command=True)


@cache_app.callback()
def cache(
    ctx: typer.Context,
    as_json: bool = typer.Option(False, "--json", help="Print as JSON"),
) -> None:
    """Show how many pages each kind has cached."""
    if ctx.invoked_subcommand is not None:
        return
    app_ctx: AppContext = ctx.obj
    snapshots = app_ctx.client.cache_snapshot()

    if as_json:
        data = {kind.value: snapshot.as_dict() for kind, snapshot in snapshots.items()}
        typer.echo(json.dumps(data, indent=2, ensure_ascii=False))
        return

    table = Table(show_header=True, header_style="bold cyan", border_style="dim")
    table.add_column("Kind", style="magenta")
    table.add_column("Entries", justify="right")
    table.add_column("Last fetched", style="dim")
    for kind, snapshot in snapshots.items():
        latest = max(snapshot.timestamps.values(), default=None)
        table.add_row(
            kind.value,
            str(snapshot.count),
            latest.strftime(DATETIME_FORMAT) if latest else "",
        )
    console.print(table)


@cache_app.command()
def clear(
    ctx: typer.Context,
    kind: PageKind = typer.Argument(None, help="Only clear this page kind"),
) -> None:
    """Drop cached pages so the next fetch renders again."""
    app_ctx: AppContext = ctx.obj
    app_ctx.client.clear_cache(kind)
    typer.echo(f"Cleared {kind.value if kind else 'all'} cache")


def run_line(app_ctx: AppContext, line: str) -> bool:
    """Run one shell line as a wiki command. Returns False when the session should end."""
    try:
        args = shlex.split(line)
    except ValueError as e:
        error(f"Could not parse input: {e}")
        return True

    if not args:
        return True
    if args[0] in EXIT_WORDS:
        return False
    if args[0] == "help":
        args = [*args[1:], "--help"]
    if args[0] == "shell":
        error("Already in a shell")
        return True

    command = typer.main.get_command(app)
    try:
        command.main(args=args, prog_name="wiki", obj=app_ctx, standalone_mode=False)
    except click.ClickException as e:
        e.show()
    except click.exceptions.Abort:
        typer.echo("Aborted!", err=True)
    return True


@app.command()
def shell(ctx: typer.Context) -> None:
    """
    Run commands interactively against one long-lived client.

    Pages fetched during the session stay cached until it ends,
    so repeated commands are served without rendering again.

    Examples:
        wiki shell
        wiki> list weapons
        wiki> cache
        wiki> exit
    """
    app_ctx: AppContext = ctx.obj
    console.print("[dim]Type a command (e.g. 'list weapons'), 'help' or 'exit'.[/dim]")

    while True:
        try:
            line = typer.prompt("wiki", default="", show_default=False, prompt_suffix="> ")
        except click.exceptions.Abort:
            # Ctrl-D / Ctrl-C
            typer.echo()
            break
        if not run_line(app_ctx, line):
            break

    app_ctx.logger.debug("shell_closed")
