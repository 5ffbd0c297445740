"""Rendering surface for pages that need no scripts, using requests."""

import asyncio

import requests
from structlog.typing import FilteringBoundLogger

from wiki.core.logging import get_logger
from wiki.engine.errors import (
    NavigationFailure,
    NavigationTimeout,
    SerializationFailure,
)


class StaticSurface:
    """Fetch raw server markup with requests; no script execution.

    Navigation settles as soon as the response body has been read.
    """

    def __init__(
        self,
        timeout: int = 15,
        user_agent: str | None = None,
        logger: FilteringBoundLogger | None = None,
    ):
        """
        Initialize static surface.

        Args:
            timeout: Request timeout in seconds
            user_agent: Optional User-Agent header
            logger: Optional structlog logger
        """
        self.timeout = timeout
        self.user_agent = user_agent
        self.logger = logger or get_logger()
        self._markup: str | None = None

    async def __aenter__(self) -> "StaticSurface":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self._markup = None

    def _get(self, address: str) -> requests.Response:
        headers = {"User-Agent": self.user_agent} if self.user_agent else None
        return requests.get(address, timeout=self.timeout, headers=headers)

    async def navigate(self, address: str) -> None:
        self.logger.debug("fetching_static", address=address)
        try:
            resp = await asyncio.to_thread(self._get, address)
            resp.raise_for_status()
        except requests.Timeout as e:
            self.logger.warning("request_timeout", timeout_seconds=self.timeout)
            raise NavigationTimeout(
                f"Request timed out after {self.timeout}s", address
            ) from e
        except requests.RequestException as e:
            self.logger.error("request_failed", error=str(e))
            raise NavigationFailure(f"Request failed: {e}", address) from e
        self._markup = resp.text
        self.logger.debug("fetch_complete", chars=len(resp.text))

    async def serialize(self) -> str:
        if self._markup is None:
            raise SerializationFailure("No page has been loaded")
        return self._markup
