"""Extraction result models and the favorites table."""

from datetime import datetime, timezone

from pydantic import BaseModel, Field as PydanticField
from sqlmodel import Field, SQLModel


# =============================================================================
# Catalogue and collection lists
# =============================================================================


class PreviewItem(BaseModel):
    """One card of an encyclopedia catalogue list."""

    name: str
    item_id: str
    skill_attr_url: str | None = None
    image_url: str | None = None


class CollectionItem(BaseModel):
    """One card of a media or strategy-guide collection."""

    title: str | None = None
    cover: str | None = None
    item_id: str | None = None


# =============================================================================
# Item details
# =============================================================================


class WeaponDetails(BaseModel):
    image_url: str | None = None
    base_info: dict[str, str] = PydanticField(default_factory=dict)
    description: dict[str, str] = PydanticField(default_factory=dict)


class FightingStyle(BaseModel):
    icon: str | None = None
    name: str | None = None
    description: str | None = None


class CharacterInfo(BaseModel):
    name: str | None = None
    description: str | None = None
    role_description_title: str | None = None
    role_description: str | None = None
    role_tags: list[str] = PydanticField(default_factory=list)
    role_images: list[str] = PydanticField(default_factory=list)


class CharacterDetail(BaseModel):
    """Encyclopedia page of a resonator."""

    info: CharacterInfo
    additional_info: dict[str, str] = PydanticField(default_factory=dict)
    # Level -> stat name -> value
    statistics: dict[int, dict[str, str]] = PydanticField(default_factory=dict)
    fighting_styles: list[FightingStyle] = PydanticField(default_factory=list)

    def stats_at(self, level: int) -> dict[str, str]:
        return self.statistics.get(level, {})


class EchoSetRecommendation(BaseModel):
    name: str | None = None
    attr_icon: str | None = None
    icons: list[str | None] = PydanticField(default_factory=list)
    description: str | None = None


class CharacterGuide(BaseModel):
    """Strategy guide page of a resonator."""

    name: str | None = None
    description: str | None = None
    profile_image: str | None = None
    attr_image: str | None = None
    brief: str | None = None
    role_tags: dict[str, str] = PydanticField(default_factory=dict)
    fighting_styles: list[FightingStyle] = PydanticField(default_factory=list)
    skill_point_recommendation: str | None = None
    core_mechanism: str | None = None
    output_process: dict[str, str] = PydanticField(default_factory=dict)
    echo_sets: list[EchoSetRecommendation] = PydanticField(default_factory=list)


class FanArt(BaseModel):
    images: list[str | None] = PydanticField(default_factory=list)


class EmoticonDetails(BaseModel):
    title: str | None = None
    emoticons: list[str | None] = PydanticField(default_factory=list)


class WallpaperGroup(BaseModel):
    title: str | None = None
    wallpapers: list[str | None] = PydanticField(default_factory=list)


class CharacterWallpapers(BaseModel):
    character_name: str | None = None
    groups: list[WallpaperGroup] = PydanticField(default_factory=list)


class WallpaperDetails(BaseModel):
    title: str | None = None
    characters: list[CharacterWallpapers] = PydanticField(default_factory=list)


class VersionPVInfo(BaseModel):
    title: str | None = None
    thumbnail_url: str | None = None
    video_url: str | None = None


# =============================================================================
# Favorites
# =============================================================================


class Favorite(SQLModel, table=True):
    """An item saved locally from one of the browse tabs."""

    id: int | None = Field(default=None, primary_key=True)
    name: str | None = None
    image_url: str | None = None
    item_id: str | None = Field(default=None, index=True)
    tab_type: str = Field(index=True)
    sub_type: str
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), index=True
    )
