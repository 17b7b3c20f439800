"""Single-column sorting applied before pagination."""

from collections.abc import Iterable
from typing import Any, Optional

from .models import Character, SortSpec


def _sort_key(column: str):
    def key(record: Character) -> Any:
        value = getattr(record, column)
        if isinstance(value, str):
            return value.casefold()
        return value

    return key


def sort_records(
    records: Iterable[Character], sort: Optional[SortSpec]
) -> list[Character]:
    """Return records ordered by ``sort``.

    The sort is stable, so ties keep store order in both directions.
    """
    records = list(records)
    if sort is None or not sort.column:
        return records
    return sorted(records, key=_sort_key(sort.column), reverse=sort.descending)
