"""Catalogue categories and the addresses built from them."""

from enum import Enum

DEFAULT_BASE_URL = "https://wiki.kurobbs.com"

ENCYCLOPEDIA_FID = 1099
MEDIA_FID = 1292
STRATEGY_FID = 1322


class EncyclopediaCategory(str, Enum):
    """Encyclopedia catalogue categories, keyed by CLI-friendly names."""

    CHARACTERS = "characters"
    WEAPONS = "weapons"
    WEAPON_PROJECTIONS = "weapon-projections"
    ECHOES = "echoes"
    RESONANCE_EFFECTS = "resonance-effects"
    ENEMIES = "enemies"
    HOLOGRAPHIC_STRATEGY = "holographic-strategy"
    CRAFTABLE_ITEMS = "craftable-items"
    CRAFTING_BLUEPRINTS = "crafting-blueprints"
    SPECIAL_ITEMS = "special-items"
    SUPPLIES = "supplies"
    RESOURCES = "resources"
    MATERIALS = "materials"
    JOURNEY_STAMPS = "journey-stamps"
    AVATARS = "avatars"

    @property
    def catalogue_id(self) -> int:
        return _ENCYCLOPEDIA_IDS[self]

    @property
    def title(self) -> str:
        """Title as shown on the site."""
        return _ENCYCLOPEDIA_TITLES[self]

    def build_url(self, base_url: str = DEFAULT_BASE_URL) -> str:
        return catalogue_url(ENCYCLOPEDIA_FID, self.catalogue_id, base_url)


_ENCYCLOPEDIA_IDS = {
    EncyclopediaCategory.CHARACTERS: 1105,
    EncyclopediaCategory.WEAPONS: 1106,
    EncyclopediaCategory.WEAPON_PROJECTIONS: 1315,
    EncyclopediaCategory.ECHOES: 1107,
    EncyclopediaCategory.RESONANCE_EFFECTS: 1219,
    EncyclopediaCategory.ENEMIES: 1158,
    EncyclopediaCategory.HOLOGRAPHIC_STRATEGY: 1313,
    EncyclopediaCategory.CRAFTABLE_ITEMS: 1264,
    EncyclopediaCategory.CRAFTING_BLUEPRINTS: 1265,
    EncyclopediaCategory.SPECIAL_ITEMS: 1223,
    EncyclopediaCategory.SUPPLIES: 1217,
    EncyclopediaCategory.RESOURCES: 1161,
    EncyclopediaCategory.MATERIALS: 1218,
    EncyclopediaCategory.JOURNEY_STAMPS: 1350,
    EncyclopediaCategory.AVATARS: 1363,
}

_ENCYCLOPEDIA_TITLES = {
    EncyclopediaCategory.CHARACTERS: "共鸣者",
    EncyclopediaCategory.WEAPONS: "武器",
    EncyclopediaCategory.WEAPON_PROJECTIONS: "武器投影",
    EncyclopediaCategory.ECHOES: "声骸",
    EncyclopediaCategory.RESONANCE_EFFECTS: "合鸣效果",
    EncyclopediaCategory.ENEMIES: "敌人",
    EncyclopediaCategory.HOLOGRAPHIC_STRATEGY: "全息战略",
    EncyclopediaCategory.CRAFTABLE_ITEMS: "可合成道具",
    EncyclopediaCategory.CRAFTING_BLUEPRINTS: "道具合成图纸",
    EncyclopediaCategory.SPECIAL_ITEMS: "特殊道具",
    EncyclopediaCategory.SUPPLIES: "补给",
    EncyclopediaCategory.RESOURCES: "资源",
    EncyclopediaCategory.MATERIALS: "素材",
    EncyclopediaCategory.JOURNEY_STAMPS: "羁旅印章",
    EncyclopediaCategory.AVATARS: "头像",
}


class MediaType(str, Enum):
    """Media collections (fan art, wallpapers, videos, music)."""

    FAN_ART = "fan-art"
    EMOTICON = "emoticon"
    WALLPAPER = "wallpaper"
    VERSION_PV = "version-pv"
    CHARACTER_PV = "character-pv"
    CHARACTER_COMBAT_DEMO = "character-combat-demo"
    STORY_ANIMATION = "story-animation"
    RADIO_EP = "radio-ep"
    RADIO_OST = "radio-ost"
    OTHER_MEDIA = "other-media"

    @property
    def catalogue_id(self) -> int:
        return _MEDIA_IDS[self]

    @property
    def title(self) -> str:
        return _MEDIA_TITLES[self]

    def build_url(self, base_url: str = DEFAULT_BASE_URL) -> str:
        return catalogue_url(MEDIA_FID, self.catalogue_id, base_url)


_MEDIA_IDS = {
    MediaType.FAN_ART: 1343,
    MediaType.EMOTICON: 1344,
    MediaType.WALLPAPER: 1342,
    MediaType.VERSION_PV: 1348,
    MediaType.CHARACTER_PV: 1339,
    MediaType.CHARACTER_COMBAT_DEMO: 1340,
    MediaType.STORY_ANIMATION: 1347,
    MediaType.RADIO_EP: 1341,
    MediaType.RADIO_OST: 1346,
    MediaType.OTHER_MEDIA: 1286,
}

_MEDIA_TITLES = {
    MediaType.FAN_ART: "同人绘画",
    MediaType.EMOTICON: "表情包",
    MediaType.WALLPAPER: "壁纸合集",
    MediaType.VERSION_PV: "版本PV",
    MediaType.CHARACTER_PV: "共鸣者PV",
    MediaType.CHARACTER_COMBAT_DEMO: "共鸣者战斗演示",
    MediaType.STORY_ANIMATION: "剧情动画",
    MediaType.RADIO_EP: "先约电台EP",
    MediaType.RADIO_OST: "先约电台OST",
    MediaType.OTHER_MEDIA: "其他影音",
}


def catalogue_url(
    fid: int, sid: int | None = None, base_url: str = DEFAULT_BASE_URL
) -> str:
    """Build a catalogue list URL."""
    url = f"{base_url.rstrip('/')}/mc/catalogue/list?fid={fid}"
    if sid is not None:
        url += f"&sid={sid}"
    return url


def strategy_url(base_url: str = DEFAULT_BASE_URL) -> str:
    """URL of the strategy-guide collection."""
    return catalogue_url(STRATEGY_FID, base_url=base_url)


def item_url(item_id: str, base_url: str = DEFAULT_BASE_URL) -> str:
    """URL of a single item page."""
    return f"{base_url.rstrip('/')}/mc/item/{item_id}"
