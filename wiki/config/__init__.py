"""Configuration management for the wiki client.

Settings are loaded from:
1. Environment variables (WIKI_ prefix)
2. wiki.toml file (multiple locations)
3. Default values
"""

from .settings import RenderSettings, Settings

__all__ = ["RenderSettings", "Settings"]
