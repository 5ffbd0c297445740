"""Tests for the wiki client and page addresses."""

import pytest

from conftest import FakeSurfaceFactory
from test_extractors import CATALOGUE_HTML, WEAPON_HTML
from wiki.core.categories import (
    EncyclopediaCategory,
    MediaType,
    item_url,
    strategy_url,
)
from wiki.fetchers import BrowserSurface, StaticSurface
from wiki.services import ITEM_KINDS, PageKind, WikiClient, surface_factory_for

WEAPON_ID = "1438830164665520128"


@pytest.fixture
def client(test_config, surface_factory):
    with WikiClient(test_config, surface_factory=surface_factory) as client:
        yield client


def test_catalogue_urls():
    assert (
        EncyclopediaCategory.WEAPONS.build_url()
        == "https://wiki.kurobbs.com/mc/catalogue/list?fid=1099&sid=1106"
    )
    assert (
        MediaType.WALLPAPER.build_url("https://mirror.test/")
        == "https://mirror.test/mc/catalogue/list?fid=1292&sid=1342"
    )
    assert strategy_url() == "https://wiki.kurobbs.com/mc/catalogue/list?fid=1322"
    assert item_url("42") == "https://wiki.kurobbs.com/mc/item/42"


def test_every_category_has_id_and_title():
    for category in [*EncyclopediaCategory, *MediaType]:
        assert category.catalogue_id > 0
        assert category.title


def test_surface_factory_follows_renderer(test_config):
    test_config.renderer = "static"
    assert isinstance(surface_factory_for(test_config)(), StaticSurface)

    test_config.renderer = "browser"
    surface = surface_factory_for(test_config)()
    assert isinstance(surface, BrowserSurface)
    assert surface.timeout_ms == test_config.render.navigation_timeout_ms


def test_fetch_entries(client, surface_factory: FakeSurfaceFactory, test_config):
    address = EncyclopediaCategory.CHARACTERS.build_url(test_config.base_url)
    surface_factory.pages[address] = CATALOGUE_HTML

    entries = client.fetch_entries(EncyclopediaCategory.CHARACTERS).result(timeout=5)

    assert [entry.item_id for entry in entries] == ["1001", "1002"]
    assert surface_factory.navigations == [address]


def test_fetch_weapon_by_item_id(client, surface_factory, test_config):
    surface_factory.pages[item_url(WEAPON_ID, test_config.base_url)] = WEAPON_HTML
    results = []

    weapon = client.fetch_weapon(WEAPON_ID, on_result=results.append).result(timeout=5)

    assert weapon.base_info["Type"] == "Broadblade"
    assert results == [weapon]


def test_each_kind_has_its_own_cache(client, surface_factory, test_config):
    address = item_url(WEAPON_ID, test_config.base_url)
    surface_factory.pages[address] = WEAPON_HTML

    client.fetch_weapon(WEAPON_ID).result(timeout=5)
    snapshots = client.cache_snapshot()

    assert snapshots[PageKind.WEAPON].addresses == (address,)
    assert snapshots[PageKind.CHARACTER].count == 0

    client.clear_cache(PageKind.WEAPON)
    assert client.cache_snapshot()[PageKind.WEAPON].count == 0


def test_force_refresh_bypasses_cache(client, surface_factory, test_config):
    address = item_url(WEAPON_ID, test_config.base_url)
    surface_factory.pages[address] = WEAPON_HTML

    client.fetch_weapon(WEAPON_ID).result(timeout=5)
    client.fetch_weapon(WEAPON_ID).result(timeout=5)
    client.fetch_weapon(WEAPON_ID, force_refresh=True).result(timeout=5)

    assert surface_factory.navigations == [address, address]


def test_fetch_item_rejects_list_kinds(client):
    assert PageKind.CATALOGUE not in ITEM_KINDS
    with pytest.raises(ValueError):
        client.fetch_item(PageKind.CATALOGUE, "1001")
