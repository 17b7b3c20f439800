"""Filter predicates for character records."""

from collections.abc import Iterable

from .models import Character, FilterCriteria


def _name_matches(record: Character, criteria: FilterCriteria) -> bool:
    if not criteria.name:
        return True
    return criteria.name.casefold() in record.name.casefold()


def _location_matches(record: Character, criteria: FilterCriteria) -> bool:
    # An empty selection means "all", not "none".
    if not criteria.locations:
        return True
    return record.location in criteria.locations


def _health_matches(record: Character, criteria: FilterCriteria) -> bool:
    if not criteria.health_states:
        return True
    return record.health in criteria.health_states


def _power_matches(record: Character, criteria: FilterCriteria) -> bool:
    if criteria.max_power is None:
        return True
    return record.power <= criteria.max_power


_PREDICATES = (_name_matches, _location_matches, _health_matches, _power_matches)


def matches(record: Character, criteria: FilterCriteria) -> bool:
    """Return True if ``record`` satisfies every field of ``criteria``."""
    return all(predicate(record, criteria) for predicate in _PREDICATES)


def filter_records(
    records: Iterable[Character], criteria: FilterCriteria
) -> list[Character]:
    """Keep the records matching ``criteria``, preserving input order."""
    if criteria.is_empty:
        return list(records)
    return [r for r in records if matches(r, criteria)]
