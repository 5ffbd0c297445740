"""Per-entity fetch services built on the render-fetch engine."""

from collections.abc import Callable
from enum import Enum
from functools import partial
from typing import Any

from structlog.typing import FilteringBoundLogger

from wiki.config import Settings
from wiki.core.categories import (
    EncyclopediaCategory,
    MediaType,
    item_url,
    strategy_url,
)
from wiki.core.logging import get_logger
from wiki.core.models import (
    CharacterDetail,
    CharacterGuide,
    CollectionItem,
    EmoticonDetails,
    FanArt,
    PreviewItem,
    VersionPVInfo,
    WallpaperDetails,
    WeaponDetails,
)
from wiki.engine import (
    BackgroundLoop,
    CacheSnapshot,
    ExtractionStrategy,
    FetchHandle,
    RenderFetchEngine,
)
from wiki.extractors import (
    extract_character,
    extract_collection,
    extract_emoticons,
    extract_fan_art,
    extract_guide,
    extract_previews,
    extract_version_pv,
    extract_wallpapers,
    extract_weapon,
)
from wiki.fetchers import BrowserSurface, StaticSurface, SurfaceFactory


class PageKind(str, Enum):
    """Kinds of page the client knows how to extract; one cache each."""

    CATALOGUE = "catalogue"
    MEDIA = "media"
    STRATEGIES = "strategies"
    WEAPON = "weapon"
    CHARACTER = "character"
    GUIDE = "guide"
    FAN_ART = "fan-art"
    EMOTICONS = "emoticons"
    WALLPAPERS = "wallpapers"
    VERSION_PV = "version-pv"


STRATEGIES: dict[PageKind, ExtractionStrategy[Any]] = {
    PageKind.CATALOGUE: extract_previews,
    PageKind.MEDIA: extract_collection,
    PageKind.STRATEGIES: extract_collection,
    PageKind.WEAPON: extract_weapon,
    PageKind.CHARACTER: extract_character,
    PageKind.GUIDE: extract_guide,
    PageKind.FAN_ART: extract_fan_art,
    PageKind.EMOTICONS: extract_emoticons,
    PageKind.WALLPAPERS: extract_wallpapers,
    PageKind.VERSION_PV: extract_version_pv,
}

# Item-page kinds, addressed by item id
ITEM_KINDS = (
    PageKind.WEAPON,
    PageKind.CHARACTER,
    PageKind.GUIDE,
    PageKind.FAN_ART,
    PageKind.EMOTICONS,
    PageKind.WALLPAPERS,
    PageKind.VERSION_PV,
)


def surface_factory_for(
    settings: Settings, logger: FilteringBoundLogger | None = None
) -> SurfaceFactory:
    """Build the surface factory selected by ``settings.renderer``."""
    if settings.renderer == "static":
        return partial(
            StaticSurface,
            timeout=settings.REQUEST_TIMEOUT,
            user_agent=settings.render.user_agent,
            logger=logger,
        )
    return partial(
        BrowserSurface,
        timeout_ms=settings.render.navigation_timeout_ms,
        headless=settings.render.headless,
        user_agent=settings.render.user_agent,
        logger=logger,
    )


class WikiClient:
    """Fetches and caches every kind of wiki page.

    Engines share one background loop and one surface factory, but each
    kind has its own cache.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        surface_factory: SurfaceFactory | None = None,
        logger: FilteringBoundLogger | None = None,
    ):
        self.settings = settings or Settings()
        self.logger = logger or get_logger()
        self.surface_factory = surface_factory or surface_factory_for(
            self.settings, self.logger
        )
        self.runner = BackgroundLoop(logger=self.logger)
        render = self.settings.render
        self.engines: dict[PageKind, RenderFetchEngine[Any]] = {
            kind: RenderFetchEngine(
                strategy,
                self.surface_factory,
                name=kind.value,
                settle_delay=render.settle_delay,
                navigation_timeout=render.navigation_timeout,
                stability_interval=render.stability_interval,
                settle_timeout=render.settle_timeout,
                runner=self.runner,
                logger=self.logger,
            )
            for kind, strategy in STRATEGIES.items()
        }

    def __enter__(self) -> "WikiClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        self.runner.stop()

    # ------------------------------------------------------------------
    # Generic access
    # ------------------------------------------------------------------

    def fetch(
        self,
        kind: PageKind,
        address: str,
        force_refresh: bool = False,
        on_result: Callable[[Any], object] | None = None,
    ) -> FetchHandle[Any]:
        return self.engines[kind].fetch(
            address, bypass_cache=force_refresh, on_result=on_result
        )

    def fetch_item(
        self,
        kind: PageKind,
        item_id: str,
        force_refresh: bool = False,
        on_result: Callable[[Any], object] | None = None,
    ) -> FetchHandle[Any]:
        """Fetch an item page of one of the ``ITEM_KINDS``."""
        if kind not in ITEM_KINDS:
            raise ValueError(f"'{kind.value}' pages are not addressed by item id")
        return self.fetch(
            kind,
            item_url(item_id, self.settings.base_url),
            force_refresh=force_refresh,
            on_result=on_result,
        )

    def clear_cache(self, kind: PageKind | None = None) -> None:
        """Clear one kind's cache, or every cache."""
        engines = [self.engines[kind]] if kind is not None else self.engines.values()
        for engine in engines:
            engine.clear_cache()

    def cache_snapshot(self) -> dict[PageKind, CacheSnapshot]:
        return {kind: engine.cache_snapshot() for kind, engine in self.engines.items()}

    # ------------------------------------------------------------------
    # Lists
    # ------------------------------------------------------------------

    def fetch_entries(
        self,
        category: EncyclopediaCategory,
        force_refresh: bool = False,
        on_result: Callable[[list[PreviewItem]], object] | None = None,
    ) -> FetchHandle[list[PreviewItem]]:
        """Fetch the preview cards of an encyclopedia category."""
        return self.fetch(
            PageKind.CATALOGUE,
            category.build_url(self.settings.base_url),
            force_refresh=force_refresh,
            on_result=on_result,
        )

    def fetch_media(
        self,
        media_type: MediaType,
        force_refresh: bool = False,
        on_result: Callable[[list[CollectionItem]], object] | None = None,
    ) -> FetchHandle[list[CollectionItem]]:
        return self.fetch(
            PageKind.MEDIA,
            media_type.build_url(self.settings.base_url),
            force_refresh=force_refresh,
            on_result=on_result,
        )

    def fetch_strategies(
        self,
        force_refresh: bool = False,
        on_result: Callable[[list[CollectionItem]], object] | None = None,
    ) -> FetchHandle[list[CollectionItem]]:
        return self.fetch(
            PageKind.STRATEGIES,
            strategy_url(self.settings.base_url),
            force_refresh=force_refresh,
            on_result=on_result,
        )

    # ------------------------------------------------------------------
    # Item pages
    # ------------------------------------------------------------------

    def fetch_weapon(
        self,
        item_id: str,
        force_refresh: bool = False,
        on_result: Callable[[WeaponDetails], object] | None = None,
    ) -> FetchHandle[WeaponDetails]:
        return self.fetch_item(PageKind.WEAPON, item_id, force_refresh, on_result)

    def fetch_character(
        self,
        item_id: str,
        force_refresh: bool = False,
        on_result: Callable[[CharacterDetail], object] | None = None,
    ) -> FetchHandle[CharacterDetail]:
        return self.fetch_item(PageKind.CHARACTER, item_id, force_refresh, on_result)

    def fetch_guide(
        self,
        item_id: str,
        force_refresh: bool = False,
        on_result: Callable[[CharacterGuide], object] | None = None,
    ) -> FetchHandle[CharacterGuide]:
        return self.fetch_item(PageKind.GUIDE, item_id, force_refresh, on_result)

    def fetch_fan_art(
        self,
        item_id: str,
        force_refresh: bool = False,
        on_result: Callable[[FanArt], object] | None = None,
    ) -> FetchHandle[FanArt]:
        return self.fetch_item(PageKind.FAN_ART, item_id, force_refresh, on_result)

    def fetch_emoticons(
        self,
        item_id: str,
        force_refresh: bool = False,
        on_result: Callable[[EmoticonDetails], object] | None = None,
    ) -> FetchHandle[EmoticonDetails]:
        return self.fetch_item(PageKind.EMOTICONS, item_id, force_refresh, on_result)

    def fetch_wallpapers(
        self,
        item_id: str,
        force_refresh: bool = False,
        on_result: Callable[[WallpaperDetails], object] | None = None,
    ) -> FetchHandle[WallpaperDetails]:
        return self.fetch_item(PageKind.WALLPAPERS, item_id, force_refresh, on_result)

    def fetch_version_pv(
        self,
        item_id: str,
        force_refresh: bool = False,
        on_result: Callable[[VersionPVInfo], object] | None = None,
    ) -> FetchHandle[VersionPVInfo]:
        return self.fetch_item(PageKind.VERSION_PV, item_id, force_refresh, on_result)
