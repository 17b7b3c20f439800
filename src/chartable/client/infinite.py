"""Infinite-scroll page cache driven by the paginated characters contract.

One ``InfiniteCharacterQuery`` owns the accumulated pages for a single
(criteria, page size, sort) key. Page requests are strictly sequential:
at most one is in flight, and page N+1 is never requested before page N
has been observed. Changing the key discards everything and bumps a
generation counter so late responses for the old key are dropped.
"""

import logging
import threading
from collections.abc import Callable
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from enum import Enum
from typing import Any, Optional

from chartable.errors import should_retry
from chartable.query.models import Character, FilterCriteria, Page, SortSpec

logger = logging.getLogger(__name__)

FetchPage = Callable[[FilterCriteria, int, int, Optional[SortSpec]], Page]

_UNSET: Any = object()


class LoadState(str, Enum):
    IDLE = "idle"
    LOADING_FIRST = "loading-first"
    HAS_PAGES = "has-pages"
    LOADING_NEXT = "loading-next"
    EXHAUSTED = "exhausted"
    ERROR = "error"


_BUSY_STATES = (LoadState.LOADING_FIRST, LoadState.LOADING_NEXT, LoadState.EXHAUSTED)


class InfiniteCharacterQuery:
    """Accumulates pages for one query and fetches the next one on demand.

    Args:
        fetch_page: Callable ``(criteria, page, page_size, sort) -> Page``,
            typically ``CharacterClient.fetch_characters``.
        criteria: Initial filter criteria.
        page_size: Items per page.
        sort: Optional single-column sort.
        executor: Where requests run. Defaults to a private single-worker
            pool, which keeps requests sequential.
    """

    def __init__(
        self,
        fetch_page: FetchPage,
        criteria: Optional[FilterCriteria] = None,
        page_size: int = 10,
        sort: Optional[SortSpec] = None,
        executor: Optional[Executor] = None,
    ) -> None:
        if page_size < 1:
            raise ValueError(f"page_size must be positive, got {page_size}")
        self._fetch_page = fetch_page
        self._criteria = criteria or FilterCriteria()
        self._page_size = page_size
        self._sort = sort
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="chartable-fetch"
        )
        # Reentrant so an inline executor can complete a fetch inside fetch_next().
        self._lock = threading.RLock()
        self._generation = 0
        self._pages: list[Page] = []
        self._state = LoadState.IDLE
        self._last_error: Optional[BaseException] = None
        self._in_flight: Optional[Future] = None
        self.request_count = 0

    # ------------------------------------------------------------------
    # Key management
    # ------------------------------------------------------------------

    @property
    def key(self) -> tuple:
        return (self._criteria, self._page_size, self._sort)

    def set_query(
        self,
        criteria: Optional[FilterCriteria] = None,
        page_size: Optional[int] = None,
        sort: Optional[SortSpec] = _UNSET,
    ) -> bool:
        """Switch to a new key. Returns True if anything was discarded.

        Pages are replaced wholesale, never patched across keys.
        """
        if page_size is not None and page_size < 1:
            raise ValueError(f"page_size must be positive, got {page_size}")
        with self._lock:
            new_key = (
                criteria if criteria is not None else self._criteria,
                page_size if page_size is not None else self._page_size,
                self._sort if sort is _UNSET else sort,
            )
            if new_key == self.key:
                return False
            self._criteria, self._page_size, self._sort = new_key
            self._generation += 1
            self._pages = []
            self._state = LoadState.IDLE
            self._last_error = None
            self._in_flight = None
            logger.debug(f"Query key changed, generation {self._generation}")
            return True

    # ------------------------------------------------------------------
    # Fetching
    # ------------------------------------------------------------------

    def fetch_next(self) -> Optional[Future]:
        """Request the next page unless one is already loading or none remain.

        Returns:
            A Future resolving to the fetched Page (or None if the response
            arrived after a key change), or None when no request was issued.
        """
        with self._lock:
            if self._state in _BUSY_STATES:
                return None
            page_number = self._next_page_number()
            self._state = (
                LoadState.LOADING_NEXT if self._pages else LoadState.LOADING_FIRST
            )
            self.request_count += 1
            future = self._executor.submit(
                self._run_fetch,
                self._generation,
                self._criteria,
                self._page_size,
                self._sort,
                page_number,
            )
            if not future.done():
                self._in_flight = future
            return future

    def retry(self) -> Optional[Future]:
        """Re-issue the request that failed last."""
        with self._lock:
            if self._state is not LoadState.ERROR:
                return None
        return self.fetch_next()

    def wait(self, timeout: Optional[float] = None) -> Optional[Page]:
        """Block until the in-flight request, if any, completes."""
        future = self._in_flight
        if future is None:
            return None
        return future.result(timeout=timeout)

    def fetch_all(self) -> list[Character]:
        """Fetch pages until the query is exhausted.

        Raises:
            ChartableError: The first failure, after it has been recorded.
        """
        while self.has_next_page:
            future = self.fetch_next()
            if future is None:
                if self._in_flight is None:
                    break
                self.wait()
                continue
            future.result()
        return self.all_items

    def _next_page_number(self) -> int:
        if not self._pages:
            return 1
        return self._pages[-1].meta.current_page + 1

    def _run_fetch(
        self,
        generation: int,
        criteria: FilterCriteria,
        page_size: int,
        sort: Optional[SortSpec],
        page_number: int,
    ) -> Optional[Page]:
        try:
            page = self._fetch_page(criteria, page_number, page_size, sort)
        except Exception as e:
            with self._lock:
                if generation != self._generation:
                    logger.debug(f"Dropping failure for stale generation {generation}")
                    return None
                self._last_error = e
                self._state = LoadState.ERROR
                self._in_flight = None
            logger.warning(f"Fetching page {page_number} failed: {e}")
            raise

        with self._lock:
            if generation != self._generation:
                logger.debug(
                    f"Dropping stale page {page_number} for generation {generation}"
                )
                return None
            self._pages.append(page)
            self._last_error = None
            self._in_flight = None
            if page.meta.current_page >= page.meta.total_pages:
                self._state = LoadState.EXHAUSTED
            else:
                self._state = LoadState.HAS_PAGES
        return page

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    @property
    def state(self) -> LoadState:
        return self._state

    @property
    def last_error(self) -> Optional[BaseException]:
        return self._last_error

    @property
    def pages(self) -> list[Page]:
        with self._lock:
            return list(self._pages)

    @property
    def all_items(self) -> list[Character]:
        with self._lock:
            return [item for page in self._pages for item in page.items]

    @property
    def total_items(self) -> Optional[int]:
        with self._lock:
            if not self._pages:
                return None
            return self._pages[-1].meta.total_items

    @property
    def has_next_page(self) -> bool:
        state = self._state
        if state is LoadState.EXHAUSTED:
            return False
        if state is LoadState.ERROR and not should_retry(self._last_error):
            return False
        return True

    @property
    def is_loading(self) -> bool:
        return self._state is LoadState.LOADING_FIRST

    @property
    def is_fetching_next_page(self) -> bool:
        return self._state is LoadState.LOADING_NEXT

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Shut down the private executor, if this query created one."""
        if self._owns_executor:
            self._executor.shutdown(wait=False)

    def __enter__(self) -> "InfiniteCharacterQuery":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
