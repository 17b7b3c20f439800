"""Tests for the character query service."""

import pytest

from chartable.config.models import AppConfig
from chartable.errors import DataUnavailableError
from chartable.query.models import FilterCriteria, SortSpec
from chartable.storage.base import RecordSource
from chartable.storage.loader import RecordStoreLoader
from chartable.web.services.character_service import CharacterService


class ListSource(RecordSource):
    def __init__(self, rows, fail=False):
        self.rows = rows
        self.fail = fail
        self.calls = 0

    def load(self):
        self.calls += 1
        if self.fail:
            raise DataUnavailableError("offline")
        return self.rows

    def describe(self):
        return "list"


def _rows(n):
    locations = ["Earth", "Namek", "Earth"]
    healths = ["Healthy", "Injured", "Critical"]
    return [
        {
            "id": str(i),
            "name": f"Fighter {i}",
            "location": locations[i % 3],
            "health": healths[i % 3],
            "power": i * 10,
        }
        for i in range(1, n + 1)
    ]


@pytest.fixture
def service():
    return CharacterService(RecordStoreLoader(ListSource(_rows(23))))


class TestListCharacters:
    def test_defaults(self, service):
        page = service.list_characters()
        assert page.meta.total_items == 23
        assert page.meta.item_count == 10
        assert page.meta.items_per_page == 10
        assert page.meta.total_pages == 3

    def test_filters_before_paginating(self, service):
        page = service.list_characters(FilterCriteria(locations={"Namek"}), page=1, page_size=5)
        assert page.meta.total_items == 8
        assert all(c.location == "Namek" for c in page.items)

    def test_sorts_before_paginating(self, service):
        sort = SortSpec("power", "desc")
        first = service.list_characters(page=1, page_size=10, sort=sort)
        second = service.list_characters(page=2, page_size=10, sort=sort)
        powers = [c.power for c in first.items + second.items]
        assert powers == sorted(powers, reverse=True)
        assert powers[0] == 230
        assert "sortBy=power" in first.links.next

    def test_links_carry_filters(self, service):
        page = service.list_characters(FilterCriteria(name="fighter", max_power=200))
        assert "name=fighter" in page.links.next
        assert "power=200" in page.links.next

    def test_page_size_capped(self):
        svc = CharacterService(RecordStoreLoader(ListSource(_rows(23))), max_page_size=5)
        assert svc.list_characters(page_size=50).meta.items_per_page == 5

    def test_invalid_page_inputs_fall_back(self, service):
        page = service.list_characters(page="x", page_size="0")
        assert page.meta.current_page == 1
        assert page.meta.items_per_page == 10

    def test_data_unavailable_propagates(self):
        svc = CharacterService(RecordStoreLoader(ListSource([], fail=True)))
        with pytest.raises(DataUnavailableError):
            svc.list_characters()


class TestFilterOptions:
    def test_computed_over_whole_store(self):
        rows = [
            {"id": "1", "name": "a", "location": "A", "health": "Injured", "power": 5},
            {"id": "2", "name": "b", "location": "B", "health": "Healthy", "power": 100},
            {"id": "3", "name": "c", "location": "A", "health": "Healthy", "power": 50},
        ]
        svc = CharacterService(RecordStoreLoader(ListSource(rows)))
        opts = svc.get_filter_options()
        assert opts.locations == ["A", "B"]
        assert opts.health_states == ["Healthy", "Injured"]
        assert opts.max_power == 100

    def test_cached(self, service):
        assert service.get_filter_options() is service.get_filter_options()

    def test_empty_store(self):
        svc = CharacterService(RecordStoreLoader(ListSource([])))
        opts = svc.get_filter_options()
        assert opts.locations == []
        assert opts.max_power == 0

    def test_failure_not_cached(self):
        source = ListSource(_rows(3), fail=True)
        svc = CharacterService(RecordStoreLoader(source))
        with pytest.raises(DataUnavailableError):
            svc.get_filter_options()
        source.fail = False
        assert svc.get_filter_options().max_power == 30


class TestMisc:
    def test_get_character(self, service):
        assert service.get_character("7").name == "Fighter 7"
        assert service.get_character("999") is None

    def test_warm_reports_failure(self):
        svc = CharacterService(RecordStoreLoader(ListSource([], fail=True)))
        assert svc.warm() is False

    def test_from_config_uses_bundled_data(self):
        svc = CharacterService.from_config(AppConfig(default_page_size=5))
        page = svc.list_characters()
        assert page.meta.items_per_page == 5
        assert page.meta.total_items > 20
