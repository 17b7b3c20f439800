"""Tests for single-column sorting."""

from chartable.query.models import Character, SortSpec
from chartable.query.paginator import paginate
from chartable.query.sorting import sort_records


def _c(id, name, power, location="Earth", health="Healthy"):
    return Character(id=id, name=name, location=location, health=health, power=power)


RECORDS = [
    _c("1", "goku", 9000),
    _c("2", "Vegeta", 8500),
    _c("3", "Bulma", 5),
    _c("4", "Android 18", 8500),
]


def test_no_sort_keeps_store_order():
    assert sort_records(RECORDS, None) == RECORDS
    assert sort_records(RECORDS, SortSpec()) == RECORDS


def test_name_sort_is_case_insensitive():
    result = sort_records(RECORDS, SortSpec("name", "asc"))
    assert [c.name for c in result] == ["Android 18", "Bulma", "goku", "Vegeta"]


def test_power_desc_is_stable_for_ties():
    result = sort_records(RECORDS, SortSpec("power", "desc"))
    assert [c.id for c in result] == ["1", "2", "4", "3"]


def test_sort_before_paginate_spans_pages():
    ordered = sort_records(RECORDS, SortSpec("power", "asc"))
    first = paginate(ordered, page=1, page_size=2)
    second = paginate(ordered, page=2, page_size=2)
    assert [c.power for c in first.items] == [5, 8500]
    assert [c.power for c in second.items] == [8500, 9000]
