"""Catalogue and collection list pages."""

from wiki.core.models import CollectionItem, PreviewItem
from wiki.engine.strategy import Document
from wiki.extractors.base import attr_of, item_id_from_href, text_of, url_or_none

ENTRY_SELECTOR = "div.entry-wrapper"


def extract_previews(document: Document) -> list[PreviewItem]:
    """Cards of an encyclopedia catalogue list."""
    previews = []
    for element in document.select(ENTRY_SELECTOR):
        href = attr_of(element, "a", "href") or ""
        previews.append(
            PreviewItem(
                name=text_of(element, "div.card-footer-inner") or "Unknown",
                item_id=item_id_from_href(href),
                skill_attr_url=url_or_none(
                    attr_of(element, "div.card-skill-attr-icon > img", "src")
                ),
                image_url=url_or_none(
                    attr_of(element, "div.card-content-inner > img", "data-src")
                ),
            )
        )
    return previews


def extract_collection(document: Document) -> list[CollectionItem]:
    """Cards of a media or strategy-guide collection."""
    items = []
    for element in document.select(ENTRY_SELECTOR):
        href = attr_of(element, "a", "href")
        items.append(
            CollectionItem(
                title=text_of(element, "div.card-footer"),
                cover=url_or_none(
                    attr_of(element, "div.card-content-inner img", "data-src")
                ),
                item_id=item_id_from_href(href) if href else None,
            )
        )
    return items
