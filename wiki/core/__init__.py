"""Core domain models, addresses and logging."""

from wiki.core.categories import EncyclopediaCategory, MediaType, item_url
from wiki.core.logging import configure_logging, get_logger
from wiki.core.models import (
    CharacterDetail,
    CharacterGuide,
    CollectionItem,
    EmoticonDetails,
    FanArt,
    Favorite,
    PreviewItem,
    VersionPVInfo,
    WallpaperDetails,
    WeaponDetails,
)

__all__ = [
    "EncyclopediaCategory",
    "MediaType",
    "item_url",
    "configure_logging",
    "get_logger",
    "CharacterDetail",
    "CharacterGuide",
    "CollectionItem",
    "EmoticonDetails",
    "FanArt",
    "Favorite",
    "PreviewItem",
    "VersionPVInfo",
    "WallpaperDetails",
    "WeaponDetails",
]
