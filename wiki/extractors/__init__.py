"""Extraction strategies, one per kind of wiki page.

Each is a pure function from a rendered Document to a result model and can
be tested against fixed markup without a rendering surface.
"""

from wiki.extractors.catalogue import extract_collection, extract_previews
from wiki.extractors.character import extract_character, extract_guide
from wiki.extractors.media import (
    extract_emoticons,
    extract_fan_art,
    extract_version_pv,
    extract_wallpapers,
)
from wiki.extractors.weapon import extract_weapon

__all__ = [
    "extract_character",
    "extract_collection",
    "extract_emoticons",
    "extract_fan_art",
    "extract_guide",
    "extract_previews",
    "extract_version_pv",
    "extract_wallpapers",
    "extract_weapon",
]
