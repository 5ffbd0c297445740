"""Media item pages: fan art, emoticons, wallpapers and videos."""

from wiki.core.models import (
    CharacterWallpapers,
    EmoticonDetails,
    FanArt,
    VersionPVInfo,
    WallpaperDetails,
    WallpaperGroup,
)
from wiki.engine.strategy import Document
from wiki.extractors.base import (
    attr_of,
    select_required,
    text_of,
    url_or_none,
)

EMOTICON_IMAGES = (
    "main > div.module-layout > div > div.component-container > div > div"
    " > div.component-content.component-content-basic-component"
    " > div > div > table img"
)


def extract_fan_art(document: Document) -> FanArt:
    return FanArt(
        images=[
            url_or_none(attr_of(element, "img", "src"))
            for element in document.select("div.component-content-text")
        ]
    )


def extract_emoticons(document: Document) -> EmoticonDetails:
    select_required(document, "main")
    return EmoticonDetails(
        title=text_of(document, "h1"),
        emoticons=[
            url_or_none(img.get("src")) for img in document.select(EMOTICON_IMAGES)
        ],
    )


def extract_wallpapers(document: Document) -> WallpaperDetails:
    select_required(document, "main")
    characters = []
    for module in document.select("main > div.module-layout > div"):
        # Only the module's own container; galleries may nest further containers
        container = module.select_one("div.component-container")
        components = (
            container.find_all("div", recursive=False) if container is not None else []
        )
        groups = [
            WallpaperGroup(
                title=text_of(component, "div.component-title-wrapper"),
                wallpapers=[
                    url_or_none(img.get("src"))
                    for img in component.select("div.component-content-inner img")
                ],
            )
            for component in components
        ]
        characters.append(
            CharacterWallpapers(
                character_name=text_of(module, "div.module-title"), groups=groups
            )
        )
    return WallpaperDetails(title=text_of(document, "h1"), characters=characters)


def extract_version_pv(document: Document) -> VersionPVInfo:
    video = select_required(document, "video")
    src = video.get("src") or attr_of(video, "source", "src")
    return VersionPVInfo(
        title=text_of(document, "h1"),
        thumbnail_url=url_or_none(video.get("poster")),
        video_url=url_or_none(src),
    )
