"""Tests for the filter predicate engine."""

import pytest

from chartable.query.filters import filter_records, matches
from chartable.query.models import Character, FilterCriteria


def _make_character(id="1", name="Goku", location="Earth", health="Healthy", power=9000):
    return Character(id=id, name=name, location=location, health=health, power=power)


@pytest.fixture
def records():
    return [
        _make_character("1", "Goku", "Earth", "Healthy", 9000),
        _make_character("2", "Vegeta", "Planet Vegeta", "Injured", 8500),
        _make_character("3", "Piccolo", "Namek", "Healthy", 4000),
        _make_character("4", "Gohan", "Earth", "Critical", 7500),
        _make_character("5", "Bulma", "Earth", "Healthy", 0),
    ]


class TestMatches:
    def test_empty_criteria_matches_everything(self, records):
        assert all(matches(r, FilterCriteria()) for r in records)

    def test_name_is_case_insensitive_substring(self):
        record = _make_character(name="Master Roshi")
        assert matches(record, FilterCriteria(name="roshi"))
        assert matches(record, FilterCriteria(name="MASTER"))
        assert not matches(record, FilterCriteria(name="goku"))

    def test_empty_location_set_is_no_constraint(self):
        record = _make_character(location="Namek")
        assert matches(record, FilterCriteria(locations=frozenset()))

    def test_location_set_restricts(self):
        record = _make_character(location="B")
        assert not matches(record, FilterCriteria(locations={"A"}))
        assert matches(record, FilterCriteria(locations={"A", "B"}))

    def test_health_set_restricts(self):
        record = _make_character(health="Injured")
        assert matches(record, FilterCriteria(health_states={"Injured", "Critical"}))
        assert not matches(record, FilterCriteria(health_states={"Healthy"}))

    def test_max_power_is_inclusive(self):
        record = _make_character(power=100)
        assert matches(record, FilterCriteria(max_power=100))
        assert not matches(record, FilterCriteria(max_power=99))

    def test_max_power_zero_is_a_real_bound(self):
        assert matches(_make_character(power=0), FilterCriteria(max_power=0))
        assert not matches(_make_character(power=1), FilterCriteria(max_power=0))

    def test_max_power_none_means_no_limit(self):
        assert matches(_make_character(power=10**9), FilterCriteria(max_power=None))

    def test_fields_are_anded(self):
        record = _make_character(name="Goku", location="Earth", health="Healthy", power=9000)
        criteria = FilterCriteria(name="gok", locations={"Earth"}, max_power=8000)
        assert not matches(record, criteria)


class TestFilterRecords:
    def test_preserves_order(self, records):
        result = filter_records(records, FilterCriteria(locations={"Earth"}))
        assert [r.id for r in result] == ["1", "4", "5"]

    def test_is_idempotent(self, records):
        criteria = FilterCriteria(health_states={"Healthy"}, max_power=5000)
        once = filter_records(records, criteria)
        twice = filter_records(once, criteria)
        assert once == twice
        assert [r.id for r in once] == ["3", "5"]

    def test_no_match_returns_empty_list(self, records):
        assert filter_records(records, FilterCriteria(name="freezer")) == []

    def test_empty_criteria_returns_copy(self, records):
        result = filter_records(records, FilterCriteria())
        assert result == records
        assert result is not records
