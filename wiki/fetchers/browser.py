"""Script-executing rendering surface backed by Playwright Chromium."""

import asyncio
import subprocess
import sys

from playwright.async_api import (
    Browser,
    Error as PlaywrightError,
    Page,
    Playwright,
    TimeoutError as PlaywrightTimeout,
    async_playwright,
)
from playwright.sync_api import sync_playwright
from structlog.typing import FilteringBoundLogger

from wiki.core.logging import get_logger
from wiki.engine.errors import (
    NavigationFailure,
    NavigationTimeout,
    SerializationFailure,
)

SERIALIZE_SCRIPT = "document.documentElement.outerHTML"

CHROMIUM_ARGS = [
    "--no-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
]


def ensure_browser_installed(logger: FilteringBoundLogger | None = None) -> None:
    """Ensure the Playwright Chromium build is installed.

    Raises:
        RuntimeError: If the browser is missing and installation fails
    """
    logger = logger or get_logger()
    try:
        with sync_playwright() as p:
            browser = p.chromium.launch(headless=True)
            browser.close()
        logger.debug("browser_available")
    except Exception as e:
        logger.info("browser_not_available", error=str(e))
        logger.info("installing_browser")
        result = subprocess.run(
            [sys.executable, "-m", "playwright", "install", "chromium"],
            check=False,
            capture_output=True,
            text=True,
        )
        if result.returncode != 0:
            raise RuntimeError(f"Failed to install browser: {result.stderr}")


class BrowserSurface:
    """One headless Chromium page, launched on enter and torn down on exit.

    Navigation is considered settled when the page fires its ``load`` event.
    """

    def __init__(
        self,
        timeout_ms: int = 30000,
        headless: bool = True,
        user_agent: str | None = None,
        logger: FilteringBoundLogger | None = None,
    ):
        """
        Initialize browser surface.

        Args:
            timeout_ms: Playwright page load timeout in milliseconds
            headless: Run Chromium without a window
            user_agent: Optional User-Agent override
            logger: Optional structlog logger
        """
        self.timeout_ms = timeout_ms
        self.headless = headless
        self.user_agent = user_agent
        self.logger = logger or get_logger()
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._page: Page | None = None

    async def __aenter__(self) -> "BrowserSurface":
        self.logger.debug("launching_browser", headless=self.headless)
        try:
            self._playwright = await async_playwright().start()
            self._browser = await self._playwright.chromium.launch(
                headless=self.headless, args=CHROMIUM_ARGS
            )
            self._page = await self._browser.new_page(user_agent=self.user_agent)
        except PlaywrightError as e:
            await asyncio.shield(self._shutdown())
            raise NavigationFailure(f"Failed to launch browser: {e}") from e
        except BaseException:
            # __aexit__ never runs when entering fails (cancellation included)
            await asyncio.shield(self._shutdown())
            raise
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await asyncio.shield(self._shutdown())

    async def _shutdown(self) -> None:
        browser, playwright = self._browser, self._playwright
        self._page = None
        self._browser = None
        self._playwright = None
        try:
            if browser is not None:
                try:
                    await browser.close()
                except PlaywrightError as e:
                    self.logger.debug("browser_close_failed", error=str(e))
        finally:
            if playwright is not None:
                await playwright.stop()
        self.logger.debug("browser_released")

    def _require_page(self) -> Page:
        if self._page is None:
            raise RuntimeError("BrowserSurface used outside 'async with'")
        return self._page

    async def navigate(self, address: str) -> None:
        page = self._require_page()
        self.logger.debug("navigating", address=address)
        try:
            response = await page.goto(
                address, wait_until="load", timeout=self.timeout_ms
            )
        except PlaywrightTimeout as e:
            self.logger.error("page_timeout", timeout_ms=self.timeout_ms)
            raise NavigationTimeout(
                f"Page did not load within {self.timeout_ms}ms", address
            ) from e
        except PlaywrightError as e:
            raise NavigationFailure(f"Navigation failed: {e}", address) from e
        self.logger.debug(
            "navigation_settled",
            address=address,
            status=response.status if response else None,
        )

    async def serialize(self) -> str:
        page = self._require_page()
        try:
            markup = await page.evaluate(SERIALIZE_SCRIPT)
        except PlaywrightError as e:
            raise SerializationFailure(f"Could not read document: {e}") from e
        if not isinstance(markup, str):
            raise SerializationFailure(
                f"Document serialized to {type(markup).__name__}, expected str"
            )
        return markup
