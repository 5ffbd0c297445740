import concurrent.futures
from contextlib import contextmanager
from typing import TypeVar

import typer
from rich.console import Console

from wiki.engine import (
    ExtractionFailure,
    FetchError,
    FetchHandle,
    InvalidAddress,
    NavigationFailure,
    NavigationTimeout,
    SerializationFailure,
)

DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"

console = Console()

T = TypeVar("T")


def error(message: str) -> None:
    """Print an error message to stderr."""
    typer.echo(f"Error: {message}", err=True)


def with_default_scheme(address: str) -> str:
    """Strip surrounding whitespace and assume https when no scheme is given."""
    address = address.strip()
    if address and "://" not in address:
        address = f"https://{address}"
    return address


@contextmanager
def handle_fetch_errors(operation: str):
    """Context manager for turning fetch failures into CLI errors.

    Args:
        operation: Description of what is being fetched (e.g., "weapon page")

    Raises:
        typer.Exit: On any fetch failure
    """
    try:
        yield
    except NavigationTimeout as e:
        error(f"Page did not settle while fetching {operation}: {e}")
        raise typer.Exit(1)
    except NavigationFailure as e:
        error(f"Could not load {operation}: {e}")
        raise typer.Exit(1)
    except SerializationFailure as e:
        error(f"Could not read rendered {operation}: {e}")
        raise typer.Exit(1)
    except ExtractionFailure as e:
        error(f"Unexpected page layout for {operation}: {e}")
        raise typer.Exit(1)
    except FetchError as e:
        error(f"Failed to fetch {operation}: {e}")
        raise typer.Exit(1)
    except InvalidAddress as e:
        error(f"Invalid address: {e}")
        raise typer.Exit(1)
    except concurrent.futures.CancelledError:
        error(f"Fetching {operation} was cancelled")
        raise typer.Exit(1)


def wait_for_result(handle: FetchHandle[T], timeout: float, operation: str) -> T:
    """Block on a fetch handle behind a spinner.

    Raises:
        typer.Exit: If the fetch fails or does not finish within timeout
    """
    with console.status(f"[bold dim]Fetching {operation}...[/bold dim]"):
        finished = handle.wait(timeout)
    if not finished:
        handle.cancel()
        error(f"Timed out after {timeout:.0f}s waiting for {operation}")
        raise typer.Exit(1)
    with handle_fetch_errors(operation):
        return handle.result()
