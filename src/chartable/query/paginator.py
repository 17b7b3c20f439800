"""Windowing of an already filtered and ordered record list."""

import logging
import math
from collections.abc import Mapping, Sequence
from typing import Any, Optional
from urllib.parse import urlencode

from chartable.errors import ValidationInputError

from .models import Character, Page, PageLinks, PageMeta

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10
DEFAULT_BASE_PATH = "/api/characters"


def parse_int(value: Any) -> int:
    """Strictly parse ``value`` as an integer.

    Raises:
        ValidationInputError: If the value is missing or not an integer.
    """
    if value is None or isinstance(value, bool):
        raise ValidationInputError(f"Not an integer: {value!r}")
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        raise ValidationInputError(f"Not an integer: {value!r}") from None


def parse_positive_int(value: Any, default: int) -> int:
    """Parse-or-default: return ``value`` as a positive int, else ``default``.

    Missing, non-numeric, zero and negative values all fall back to the
    default. This never rejects a request.
    """
    if value is None or value == "":
        return default
    try:
        parsed = parse_int(value)
    except ValidationInputError as e:
        logger.debug(f"Using default {default}: {e}")
        return default
    if parsed < 1:
        logger.debug(f"Using default {default} for non-positive value {parsed}")
        return default
    return parsed


def _link(base_path: str, page: int, page_size: int, extra: Mapping[str, str]) -> str:
    params = dict(extra)
    params["page"] = str(page)
    params["limit"] = str(page_size)
    return f"{base_path}?{urlencode(params)}"


def paginate(
    records: Sequence[Character],
    page: Any = 1,
    page_size: Any = DEFAULT_PAGE_SIZE,
    base_path: str = DEFAULT_BASE_PATH,
    extra_params: Optional[Mapping[str, str]] = None,
    default_page_size: int = DEFAULT_PAGE_SIZE,
    max_page_size: Optional[int] = None,
) -> Page:
    """Cut one page out of ``records``.

    ``records`` must already be in their final order; nothing is sorted
    here. Pages past the end yield no items but keep correct counts.

    Args:
        records: Filtered (and sorted) records.
        page: Requested 1-based page; parse-or-default to 1.
        page_size: Requested page size; parse-or-default to ``default_page_size``.
        base_path: Path used to build navigation links.
        extra_params: Query parameters (filters, sort) carried on every link.
        default_page_size: Fallback page size.
        max_page_size: Optional upper bound on the page size.
    """
    current = parse_positive_int(page, 1)
    size = parse_positive_int(page_size, default_page_size)
    if max_page_size is not None and size > max_page_size:
        size = max_page_size

    total_items = len(records)
    total_pages = math.ceil(total_items / size) if total_items else 0

    start = (current - 1) * size
    items = list(records[start : start + size])

    extra = extra_params or {}
    links = PageLinks(
        first=_link(base_path, 1, size, extra),
        previous=_link(base_path, current - 1, size, extra) if current > 1 else "",
        next=(
            _link(base_path, current + 1, size, extra)
            if current < total_pages
            else ""
        ),
        last=_link(base_path, max(total_pages, 1), size, extra),
    )
    meta = PageMeta(
        total_items=total_items,
        item_count=len(items),
        items_per_page=size,
        total_pages=total_pages,
        current_page=current,
    )
    return Page(items=items, meta=meta, links=links)
