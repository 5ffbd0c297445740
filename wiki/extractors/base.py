"""Selector helpers shared by extraction strategies."""

import re

from bs4 import Tag

from wiki.engine.errors import ExtractionFailure

ITEM_ID_PATTERN = re.compile(r"/mc/item/(\d+)")

# Full-width colon used by the wiki in "key：value" cells
PAIR_SEPARATOR = "："


def module_container(index: int, root: str = "main > ") -> str:
    """Selector of the component container of the n-th page module."""
    return f"{root}div.module-layout > div:nth-child({index}) > div.component-container"


def select_required(node: Tag, selector: str) -> Tag:
    """Return the first match or fail the extraction."""
    element = node.select_one(selector)
    if element is None:
        raise ExtractionFailure(f"Required element not found: {selector}")
    return element


def clean_text(node: Tag) -> str:
    return " ".join(node.get_text(" ", strip=True).split())


def text_of(node: Tag, selector: str) -> str | None:
    """Joined text of every match, or None when nothing matches."""
    elements = node.select(selector)
    if not elements:
        return None
    return " ".join(clean_text(el) for el in elements if clean_text(el))


def attr_of(node: Tag, selector: str, attr: str) -> str | None:
    """Attribute of the first match that carries it."""
    for element in node.select(selector):
        value = element.get(attr)
        if isinstance(value, str):
            return value
    return None


def url_or_none(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip() or None


def item_id_from_href(href: str) -> str:
    """Item id from an ``/mc/item/<id>`` link, or the href itself."""
    match = ITEM_ID_PATTERN.search(href)
    return match.group(1) if match else href


def split_pair(text: str, separator: str = PAIR_SEPARATOR) -> tuple[str, str] | None:
    parts = text.split(separator)
    if len(parts) != 2:
        return None
    return parts[0].strip(), parts[1].strip()


def cells_of(row: Tag) -> list[Tag]:
    return row.find_all("td", recursive=False)
