"""Rendering surfaces."""

from wiki.fetchers.base import RenderingSurface, SurfaceFactory
from wiki.fetchers.browser import BrowserSurface, ensure_browser_installed
from wiki.fetchers.static import StaticSurface

__all__ = [
    "RenderingSurface",
    "SurfaceFactory",
    "BrowserSurface",
    "StaticSurface",
    "ensure_browser_installed",
]
