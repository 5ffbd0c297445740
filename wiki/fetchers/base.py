"""Base protocol for rendering surfaces."""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from typing import Protocol


class RenderingSurface(Protocol):
    """Protocol for a page renderer owned by exactly one fetch.

    A surface is acquired with ``async with`` and released on exit,
    whatever the outcome of the fetch.
    """

    async def navigate(self, address: str) -> None:
        """
        Load the page and return once navigation has settled.

        Args:
            address: The URL to load

        Raises:
            NavigationFailure: If the page fails to load
            NavigationTimeout: If the page never settles
        """
        ...

    async def serialize(self) -> str:
        """
        Serialize the current document markup.

        Returns:
            The markup of the whole document

        Raises:
            SerializationFailure: If no markup can be produced
        """
        ...


# Called once per fetch; the returned context manager yields a fresh surface.
SurfaceFactory = Callable[[], AbstractAsyncContextManager[RenderingSurface]]
