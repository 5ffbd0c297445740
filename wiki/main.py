import typer
from dotenv import load_dotenv

from wiki.config import Settings
from wiki.core.context import AppContext

load_dotenv()

app = typer.Typer(
    invoke_without_command=True,
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose/debug output"
    ),
    static: bool = typer.Option(
        False,
        "--static",
        help="Fetch raw server markup instead of rendering pages in a browser",
    ),
    json_logs: bool = typer.Option(
        False, "--json-logs", help="Write logs to stderr as JSON lines"
    ),
) -> None:
    """Wiki CLI - browse the game encyclopedia."""
    # An injected context (tests, the interactive shell) is closed by its owner
    if ctx.obj is None:
        config = Settings()
        if verbose:
            config.verbose = True
        if static:
            config.renderer = "static"
        if json_logs:
            config.json_logs = True
        ctx.obj = AppContext(config=config)
        ctx.call_on_close(ctx.obj.close)

    app_ctx: AppContext = ctx.obj
    app_ctx.logger.debug("renderer_selected", renderer=app_ctx.config.renderer)


# Import commands to register them with the app
from wiki import browse  # noqa: E402, F401
from wiki import favorites  # noqa: E402
from wiki import session  # noqa: E402

app.add_typer(favorites.app, name="fav", help="Manage locally saved favorites")
app.add_typer(session.cache_app, name="cache", help="Inspect or clear page caches")

if __name__ == "__main__":
    app()
