"""Filtering, sorting and pagination over the character record set."""

from .filters import filter_records, matches
from .models import (
    Character,
    FilterCriteria,
    FilterOptions,
    Page,
    PageLinks,
    PageMeta,
    SortSpec,
)
from .paginator import paginate, parse_positive_int
from .sorting import sort_records

__all__ = [
    "Character",
    "FilterCriteria",
    "FilterOptions",
    "Page",
    "PageLinks",
    "PageMeta",
    "SortSpec",
    "filter_records",
    "matches",
    "paginate",
    "parse_positive_int",
    "sort_records",
]
