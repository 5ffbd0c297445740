"""Resonator encyclopedia page and strategy guide."""

from bs4 import Tag

from wiki.core.models import (
    CharacterDetail,
    CharacterGuide,
    CharacterInfo,
    EchoSetRecommendation,
    FightingStyle,
)
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

# Statistics tabs appear in this level order
STAT_LEVELS = (1, 20, 40, 50, 60, 70, 80, 90)

_BASIC_SMALL = (
    " > div.J-component-layout.component.component-size-small"
    ".component-float-none.basic-component > div"
    " > div.component-content.component-content-basic-component"
    " > div > div > table > tbody"
)

ADDITIONAL_INFO_ROWS = module_container(1) + _BASIC_SMALL + " > tr"

STATISTICS_TABLES = (
    module_container(1)
    + " > div.J-component-layout.component.component-size-medium"
    + ".component-float-none.tabs-component > div"
    + " > div.component-content.component-content-tabs-component"
    + " > div > div > table > tbody"
)

FIGHTING_STYLE_ROWS = (
    module_container(1)
    + " > div:nth-child(4) > div"
    + " > div.component-content.component-content-basic-component"
    + " > div > div > table > tbody > tr"
)

# Guide selectors are relative to <main>
GUIDE_FIGHTING_STYLE_ROWS = (
    module_container(1, root="")
    + " > div.J-component-layout.component.component-size-large"
    + ".component-float-none.basic-component > div"
    + " > div.component-content.component-content-basic-component"
    + " > div > div > table > tbody > tr"
)

GUIDE_SKILL_POINTS = (
    module_container(2, root="")
    + " > div > div > div.component-content.component-content-basic-component"
    + " > div > div > table:nth-child(1) > tbody > tr > td:nth-child(2)"
)

_GUIDE_TABS = (
    " > div > div > div.component-content.component-content-tabs-component > div"
)

GUIDE_CORE_MECHANISM = (
    module_container(3, root="")
    + _GUIDE_TABS
    + " > div:nth-child(1) > table > tbody > tr > td:nth-child(2)"
)

GUIDE_OUTPUT_PROCESS = (
    module_container(3, root="")
    + _GUIDE_TABS
    + " > div:nth-child(2) > table > tbody > tr > td:nth-child(2) > p"
)

GUIDE_ECHO_SET_ROWS = (
    module_container(4, root="")
    + _GUIDE_TABS
    + " > div:nth-child(1) > table > tbody > tr"
)

BASE_PROCESS_KEY = "基础流程"


def _fighting_style(row: Tag) -> FightingStyle | None:
    cells = cells_of(row)
    if len(cells) < 2:
        return None
    return FightingStyle(
        icon=url_or_none(attr_of(cells[0], "img", "src")),
        name=text_of(cells[1], "p:nth-child(1)"),
        description=text_of(cells[1], "p:nth-child(2)"),
    )


def _fighting_styles(node: Tag, selector: str) -> list[FightingStyle]:
    styles = (_fighting_style(row) for row in node.select(selector))
    return [style for style in styles if style is not None]


def _level_statistics(table: Tag) -> dict[str, str]:
    """Rows are either key, value, key, value or key, low, high, key, value."""
    stats: dict[str, str] = {}
    for row in table.select("tr"):
        texts = [clean_text(td) for td in cells_of(row)]
        if len(texts) == 4 and texts[0] and texts[2]:
            stats[texts[0]] = texts[1]
            stats[texts[2]] = texts[3]
        elif len(texts) >= 5 and texts[0] and texts[3]:
            stats[texts[0]] = f"{texts[1]}-{texts[2]}"
            stats[texts[3]] = texts[4]
    return stats


def extract_character(document: Document) -> CharacterDetail:
    select_required(document, "main")

    info = CharacterInfo(
        name=text_of(document, "div.main-info div.name"),
        description=text_of(document, "div.main-info div.description"),
        role_description_title=text_of(
            document, "div.role-profile div.role-description-title"
        ),
        role_description=text_of(document, "div.role-profile div.role-description"),
        role_tags=[
            tag
            for tag in (
                clean_text(el)
                for el in document.select("div.role-profile div.role-tags div")
            )
            if tag
        ],
        role_images=[
            src
            for src in (
                url_or_none(img.get("src"))
                for img in document.select("div.role-images img")
            )
            if src
        ],
    )

    additional_info: dict[str, str] = {}
    for row in document.select(ADDITIONAL_INFO_ROWS):
        cells = cells_of(row)
        if len(cells) >= 2:
            additional_info[clean_text(cells[0])] = clean_text(cells[1])

    statistics = {
        level: _level_statistics(table)
        for level, table in zip(STAT_LEVELS, document.select(STATISTICS_TABLES))
    }

    return CharacterDetail(
        info=info,
        additional_info=additional_info,
        statistics=statistics,
        fighting_styles=_fighting_styles(document, FIGHTING_STYLE_ROWS),
    )


def extract_guide(document: Document) -> CharacterGuide:
    main = select_required(document, "main")

    role_tags: dict[str, str] = {}
    for element in main.select("div.role-profile > div.role-tags > div"):
        pair = split_pair(clean_text(element))
        if pair:
            role_tags[pair[0]] = pair[1]

    output_process: dict[str, str] = {}
    for paragraph in main.select(GUIDE_OUTPUT_PROCESS):
        text = clean_text(paragraph)
        pair = split_pair(text)
        if pair:
            output_process[pair[0]] = pair[1]
        elif text:
            output_process[BASE_PROCESS_KEY] = text

    echo_sets = []
    for row in main.select(GUIDE_ECHO_SET_ROWS):
        cells = cells_of(row)
        if len(cells) < 2:
            continue
        echo_sets.append(
            EchoSetRecommendation(
                name=clean_text(cells[0]) or None,
                attr_icon=url_or_none(attr_of(cells[0], "img", "src")),
                icons=[url_or_none(img.get("src")) for img in cells[1].select("img")],
                description=clean_text(cells[1]) or None,
            )
        )

    return CharacterGuide(
        name=text_of(main, "div.name.text-ellipsis"),
        description=text_of(main, "div.description"),
        profile_image=url_or_none(attr_of(main, "div.role-images img", "src")),
        attr_image=url_or_none(
            attr_of(
                main, "div.role-profile > div.main-info > div.left-attribute img", "src"
            )
        ),
        brief=text_of(main, "div.role-description"),
        role_tags=role_tags,
        fighting_styles=_fighting_styles(main, GUIDE_FIGHTING_STYLE_ROWS),
        skill_point_recommendation=text_of(main, GUIDE_SKILL_POINTS),
        core_mechanism=text_of(main, GUIDE_CORE_MECHANISM),
        output_process=output_process,
        echo_sets=echo_sets,
    )
