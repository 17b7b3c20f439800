"""HTTP client for the characters API."""

import json
import logging
import socket
import urllib.error
import urllib.parse
import urllib.request
from typing import Any, Optional

from pydantic import ValidationError

from chartable.errors import (
    DataUnavailableError,
    HTTPStatusError,
    NetworkError,
    RequestTimeoutError,
)
from chartable.query.models import FilterCriteria, FilterOptions, Page, SortSpec

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_S = 10.0


def build_query_params(
    criteria: Optional[FilterCriteria],
    page: int,
    page_size: int,
    sort: Optional[SortSpec] = None,
) -> dict[str, str]:
    """Encode a listing request the way the server parses it."""
    params = {"page": str(page), "limit": str(page_size)}
    if criteria is not None:
        params.update(criteria.to_params())
    if sort is not None:
        params.update(sort.to_params())
    return params


def _is_timeout(exc: BaseException) -> bool:
    if isinstance(exc, (socket.timeout, TimeoutError)):
        return True
    reason = getattr(exc, "reason", None)
    return isinstance(reason, (socket.timeout, TimeoutError))


class CharacterClient:
    """Talks to a running chartable server over HTTP.

    Every failure is normalized to the client error taxonomy:
    ``RequestTimeoutError``, ``HTTPStatusError`` or ``NetworkError``.
    """

    def __init__(self, base_url: str, timeout_s: float = DEFAULT_TIMEOUT_S) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout_s = timeout_s

    def fetch_characters(
        self,
        criteria: Optional[FilterCriteria] = None,
        page: int = 1,
        page_size: int = 10,
        sort: Optional[SortSpec] = None,
    ) -> Page:
        """Fetch one page of characters."""
        params = build_query_params(criteria, page, page_size, sort)
        data = self._get_json("/api/characters", params)
        try:
            return Page.model_validate(data)
        except ValidationError as e:
            raise DataUnavailableError(f"Malformed page response: {e}") from e

    def fetch_filter_options(self) -> FilterOptions:
        """Fetch the filter options inventory."""
        data = self._get_json("/api/characters/filter-options")
        try:
            return FilterOptions.model_validate(data)
        except ValidationError as e:
            raise DataUnavailableError(f"Malformed filter options response: {e}") from e

    def follow(self, link: str) -> Page:
        """Fetch the page a ``links`` entry points at."""
        if not link:
            raise ValueError("Cannot follow an empty link")
        data = self._get_json(link)
        try:
            return Page.model_validate(data)
        except ValidationError as e:
            raise DataUnavailableError(f"Malformed page response from {link}: {e}") from e

    def _get_json(self, path: str, params: Optional[dict[str, str]] = None) -> Any:
        url = f"{self.base_url}{path}"
        if params:
            url += f"?{urllib.parse.urlencode(params)}"
        logger.debug(f"GET {url}")

        req = urllib.request.Request(
            url, headers={"Accept": "application/json"}, method="GET"
        )
        try:
            with urllib.request.urlopen(req, timeout=self.timeout_s) as resp:
                body = resp.read()
        except urllib.error.HTTPError as e:
            raise HTTPStatusError(
                f"Request failed: {e.code} {e.reason}", status=e.code, reason=str(e.reason)
            ) from e
        except (urllib.error.URLError, OSError) as e:
            if _is_timeout(e):
                raise RequestTimeoutError(
                    f"Request timeout: no response within {self.timeout_s}s"
                ) from e
            raise NetworkError(f"Network error: cannot reach {self.base_url}: {e}") from e

        try:
            return json.loads(body.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise DataUnavailableError(f"Invalid JSON from {url}: {e}") from e
