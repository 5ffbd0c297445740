import typer
from rich.console import Console
from rich.table import Table
from sqlmodel import Session, desc, select

from wiki.core.context import AppContext
from wiki.core.models import Favorite
from wiki.utils import DATETIME_FORMAT, error

console = Console()

# Create sub-app for favorite commands
app = typer.Typer(no_args_is_help=True)


@app.command()
def add(
    ctx: typer.Context,
    item_id: str = typer.Argument(..., help="Item ID"),
    tab: str = typer.Option(..., "--tab", "-t", help="Browse tab, e.g. encyclopedia"),
    sub: str = typer.Option(..., "--sub", "-s", help="Sub type, e.g. weapons"),
    name: str = typer.Option(None, "--name", "-n", help="Display name"),
    image: str = typer.Option(None, "--image", help="Image URL"),
) -> None:
    """
    Save an item as a favorite.

    Examples:
        wiki fav add 1438830164665520128 --tab encyclopedia --sub weapons -n "Verdant Summit"
    """
    app_ctx: AppContext = ctx.obj

    with Session(app_ctx.db_engine) as session:
        existing = session.exec(
            select(Favorite).where(
                Favorite.item_id == item_id, Favorite.tab_type == tab
            )
        ).first()
        if existing:
            typer.echo(f"Already saved as favorite {existing.id}")
            return

        favorite = Favorite(
            item_id=item_id, tab_type=tab, sub_type=sub, name=name, image_url=image
        )
        session.add(favorite)
        session.commit()
        session.refresh(favorite)
        app_ctx.logger.debug("favorite_saved", id=favorite.id, item_id=item_id)
        typer.echo(f"Saved favorite {favorite.id}: {name or item_id}")


@app.command(name="ls")
def list_favorites(
    ctx: typer.Context,
    tab: str = typer.Option(None, "--tab", "-t", help="Only show this tab"),
) -> None:
    """List saved favorites, newest first."""
    app_ctx: AppContext = ctx.obj

    with Session(app_ctx.db_engine) as session:
        stmt = select(Favorite).order_by(desc(Favorite.created_at))
        if tab:
            stmt = stmt.where(Favorite.tab_type == tab)
        favorites = session.exec(stmt).all()

    if not favorites:
        typer.echo("No favorites found.")
        return

    table = Table(show_header=True, header_style="bold cyan", border_style="dim")
    table.add_column("ID", style="dim", justify="right", no_wrap=True)
    table.add_column("Name", style="magenta")
    table.add_column("Tab", style="green")
    table.add_column("Type", style="green")
    table.add_column("Item ID", style="dim", no_wrap=True)
    table.add_column("Saved", style="dim", no_wrap=True)

    for favorite in favorites:
        table.add_row(
            str(favorite.id),
            favorite.name or "",
            favorite.tab_type,
            favorite.sub_type,
            favorite.item_id or "",
            favorite.created_at.strftime(DATETIME_FORMAT),
        )

    console.print(table)


@app.command()
def rm(
    ctx: typer.Context,
    favorite_id: int = typer.Argument(..., help="Favorite ID"),
) -> None:
    """Delete a favorite by ID."""
    app_ctx: AppContext = ctx.obj

    with Session(app_ctx.db_engine) as session:
        favorite = session.get(Favorite, favorite_id)
        if not favorite:
            error(f"No favorite found with ID: {favorite_id}")
            raise typer.Exit(1)

        label = favorite.name or favorite.item_id
        session.delete(favorite)
        session.commit()

    typer.echo(f"Deleted favorite {favorite_id}: {label}")
