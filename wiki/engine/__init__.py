"""Render-fetch-cache pipeline."""

from wiki.engine.cache import CacheEntry, CacheSnapshot, FetchCache
from wiki.engine.errors import (
    ExtractionFailure,
    FetchError,
    InvalidAddress,
    NavigationFailure,
    NavigationTimeout,
    SerializationFailure,
)
from wiki.engine.handle import FetchHandle, FetchState
from wiki.engine.render import RenderFetchEngine
from wiki.engine.runner import BackgroundLoop
from wiki.engine.strategy import Document, ExtractionStrategy, parse_document

__all__ = [
    "BackgroundLoop",
    "CacheEntry",
    "CacheSnapshot",
    "Document",
    "ExtractionFailure",
    "ExtractionStrategy",
    "FetchCache",
    "FetchError",
    "FetchHandle",
    "FetchState",
    "InvalidAddress",
    "NavigationFailure",
    "NavigationTimeout",
    "RenderFetchEngine",
    "SerializationFailure",
    "parse_document",
]
