"""Tests for rendering surfaces."""

import asyncio
from unittest.mock import AsyncMock, Mock, patch

import pytest
import requests
from playwright.async_api import Error as PlaywrightError

from wiki.engine import NavigationFailure, NavigationTimeout, SerializationFailure
from wiki.fetchers import BrowserSurface, StaticSurface


async def load(surface: StaticSurface, address: str) -> str:
    async with surface:
        await surface.navigate(address)
        return await surface.serialize()


def test_static_surface_success():
    """Test successful static page load."""
    surface = StaticSurface(timeout=5)

    with patch("requests.get") as mock_get:
        mock_response = Mock()
        mock_response.text = "<html><body>Test content</body></html>"
        mock_response.raise_for_status = Mock()
        mock_get.return_value = mock_response

        result = asyncio.run(load(surface, "https://example.com"))

        assert "Test content" in result
        mock_get.assert_called_once_with(
            "https://example.com", timeout=5, headers=None
        )


def test_static_surface_sends_user_agent():
    surface = StaticSurface(timeout=5, user_agent="wiki-test")

    with patch("requests.get") as mock_get:
        mock_get.return_value = Mock(text="<html></html>")
        asyncio.run(load(surface, "https://example.com"))

    assert mock_get.call_args.kwargs["headers"] == {"User-Agent": "wiki-test"}


def test_static_surface_timeout():
    """Test static surface timeout handling."""
    # Create mock logger that accepts structlog's keyword arguments
    mock_logger = Mock()

    surface = StaticSurface(timeout=5, logger=mock_logger)

    with patch("requests.get", side_effect=requests.Timeout):
        with pytest.raises(NavigationTimeout) as exc_info:
            asyncio.run(load(surface, "https://example.com"))

    assert exc_info.value.address == "https://example.com"
    # Verify warning was called with structlog-style keyword args
    mock_logger.warning.assert_called_once_with("request_timeout", timeout_seconds=5)


def test_static_surface_request_error():
    """Test static surface error handling."""
    surface = StaticSurface(timeout=5)

    with patch("requests.get", side_effect=requests.RequestException("Network error")):
        with pytest.raises(NavigationFailure, match="Network error"):
            asyncio.run(load(surface, "https://example.com"))


def test_static_surface_http_error_status():
    surface = StaticSurface(timeout=5)
    response = Mock()
    response.raise_for_status.side_effect = requests.HTTPError("404 Not Found")

    with patch("requests.get", return_value=response):
        with pytest.raises(NavigationFailure):
            asyncio.run(load(surface, "https://example.com/missing"))


def test_static_surface_serialize_before_navigate():
    surface = StaticSurface()

    with pytest.raises(SerializationFailure):
        asyncio.run(surface.serialize())


def mock_playwright(page: AsyncMock) -> AsyncMock:
    """Playwright object whose chromium launches a browser serving ``page``."""
    browser = AsyncMock()
    browser.new_page.return_value = page
    playwright = AsyncMock()
    playwright.chromium.launch.return_value = browser
    return playwright


def test_browser_surface_renders_and_releases():
    page = AsyncMock()
    page.evaluate.return_value = "<html><h1>Rendered</h1></html>"
    playwright = mock_playwright(page)

    async def run() -> str:
        async with BrowserSurface(timeout_ms=1000) as surface:
            await surface.navigate("https://example.com")
            return await surface.serialize()

    with patch("wiki.fetchers.browser.async_playwright") as mock_async_playwright:
        mock_async_playwright.return_value.start = AsyncMock(return_value=playwright)
        markup = asyncio.run(run())

    assert markup == "<html><h1>Rendered</h1></html>"
    page.goto.assert_awaited_once_with(
        "https://example.com", wait_until="load", timeout=1000
    )
    playwright.chromium.launch.return_value.close.assert_awaited_once()
    playwright.stop.assert_awaited_once()


def test_browser_surface_rejects_non_string_markup():
    page = AsyncMock()
    page.evaluate.return_value = None
    playwright = mock_playwright(page)

    async def run() -> str:
        async with BrowserSurface() as surface:
            await surface.navigate("https://example.com")
            return await surface.serialize()

    with patch("wiki.fetchers.browser.async_playwright") as mock_async_playwright:
        mock_async_playwright.return_value.start = AsyncMock(return_value=playwright)
        with pytest.raises(SerializationFailure):
            asyncio.run(run())


def test_browser_surface_cancelled_during_launch_stops_playwright():
    playwright = mock_playwright(AsyncMock())
    launch_started = asyncio.Event()

    async def slow_launch(**kwargs):
        launch_started.set()
        await asyncio.sleep(10)

    playwright.chromium.launch.side_effect = slow_launch

    async def run() -> None:
        async def enter() -> None:
            async with BrowserSurface():
                pass

        task = asyncio.create_task(enter())
        await launch_started.wait()
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

    with patch("wiki.fetchers.browser.async_playwright") as mock_async_playwright:
        mock_async_playwright.return_value.start = AsyncMock(return_value=playwright)
        asyncio.run(run())

    playwright.stop.assert_awaited_once()


def test_browser_surface_launch_error_is_navigation_failure():
    playwright = mock_playwright(AsyncMock())
    playwright.chromium.launch.side_effect = PlaywrightError("no chromium")

    async def run() -> None:
        async with BrowserSurface():
            pass

    with patch("wiki.fetchers.browser.async_playwright") as mock_async_playwright:
        mock_async_playwright.return_value.start = AsyncMock(return_value=playwright)
        with pytest.raises(NavigationFailure, match="Failed to launch browser"):
            asyncio.run(run())

    playwright.stop.assert_awaited_once()
