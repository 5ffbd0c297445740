"""Wiki CLI - browse and cache pages of the game encyclopedia."""

__version__ = "0.1.0"

from wiki.config import Settings
from wiki.core.context import AppContext
from wiki.main import app
from wiki.services import PageKind, WikiClient

__all__ = ["app", "AppContext", "PageKind", "Settings", "WikiClient", "__version__"]
