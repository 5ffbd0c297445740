"""Weapon item page."""

from wiki.core.models import WeaponDetails
from wiki.engine.strategy import Document
from wiki.extractors.base import (
    attr_of,
    cells_of,
    clean_text,
    module_container,
    select_required,
    split_pair,
    text_of,
    url_or_none,
)

BASE_INFO_ROWS = (
    module_container(1)
    + " > div.J-component-layout.component.component-size-small"
    + ".component-float-none.basic-component > div"
    + " > div.component-content.component-content-basic-component"
    + " > div > div > table > tbody > tr"
)

DESCRIPTION_ROWS = (
    module_container(1)
    + " > div:nth-child(2) > div"
    + " > div.component-content.component-content-basic-component"
    + " > div > div > table > tbody > tr"
)


def extract_weapon(document: Document) -> WeaponDetails:
    select_required(document, "main")

    rows = document.select(BASE_INFO_ROWS)
    image_url = None
    base_info: dict[str, str] = {}
    if rows:
        # First row holds the weapon artwork, the rest are key/value cells
        image_url = url_or_none(attr_of(rows[0], "td > span > img", "src"))
        for row in rows[1:]:
            cells = cells_of(row)
            if len(cells) != 2:
                continue
            key = clean_text(cells[0])
            value = clean_text(cells[1]) or attr_of(cells[1], "img", "src") or ""
            base_info[key] = value

    description: dict[str, str] = {}
    for row in document.select(DESCRIPTION_ROWS):
        if len(row.select("td p")) == 3:
            title = text_of(row, "td > p:nth-child(1)") or ""
            description[title] = text_of(row, "td > p:nth-child(3)") or ""
        elif len(row.select("td span")) == 1:
            content = clean_text(row)
            pair = split_pair(content)
            if pair:
                description[pair[0]] = pair[1]
            else:
                description[content] = content

    return WeaponDetails(
        image_url=image_url, base_info=base_info, description=description
    )
