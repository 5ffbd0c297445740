"""Pytest configuration and fixtures."""

import asyncio
from contextlib import asynccontextmanager
from pathlib import Path

import pytest
import structlog

from wiki.config import RenderSettings, Settings
from wiki.core.context import AppContext
from wiki.engine import ExtractionFailure


class FakeSurface:
    """Rendering surface serving canned markup from its factory."""

    def __init__(self, factory: "FakeSurfaceFactory"):
        self.factory = factory
        self.address: str | None = None

    async def navigate(self, address: str) -> None:
        self.factory.navigations.append(address)
        if self.factory.navigate_delay:
            await asyncio.sleep(self.factory.navigate_delay)
        if address in self.factory.navigate_errors:
            raise self.factory.navigate_errors[address]
        self.address = address

    async def serialize(self):
        page = self.factory.pages.get(self.address, "")
        # Callables model markup that keeps changing while scripts run
        return page() if callable(page) else page


class FakeSurfaceFactory:
    """Surface factory that counts how many surfaces were opened and released."""

    def __init__(self, pages: dict | None = None, navigate_delay: float = 0.0):
        self.pages = dict(pages or {})
        self.navigate_errors: dict[str, Exception] = {}
        self.navigate_delay = navigate_delay
        self.navigations: list[str] = []
        self.opened = 0
        self.released = 0

    @asynccontextmanager
    async def __call__(self):
        self.opened += 1
        try:
            yield FakeSurface(self)
        finally:
            self.released += 1


def title_strategy(document) -> str:
    """Extract the text of the first <h1>."""
    heading = document.select_one("h1")
    if heading is None:
        raise ExtractionFailure("Page has no title")
    return heading.get_text(strip=True)


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop logging config bound to a CliRunner stream once the test ends."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def surface_factory() -> FakeSurfaceFactory:
    return FakeSurfaceFactory()


@pytest.fixture
def test_db_path(tmp_path: Path) -> Path:
    """Provide a temporary database path for testing."""
    return tmp_path / "test_wiki.db"


@pytest.fixture
def test_config(test_db_path: Path) -> Settings:
    """Provide test configuration with no settle waits."""
    config = Settings(
        render=RenderSettings(settle_delay=0, stability_interval=0),
    )
    config.db_path = str(test_db_path)
    config.verbose = False
    config.fetch_timeout = 5
    return config


@pytest.fixture
def app_context(test_config: Settings, surface_factory: FakeSurfaceFactory):
    """Provide application context for testing."""
    ctx = AppContext(config=test_config, surface_factory=surface_factory)
    yield ctx
    ctx.close()
