"""Character query service used by the web API and the CLI."""

import logging
import threading
from typing import Optional

from chartable.config.models import AppConfig
from chartable.errors import DataUnavailableError
from chartable.query.filters import filter_records
from chartable.query.models import Character, FilterCriteria, FilterOptions, Page, SortSpec
from chartable.query.paginator import DEFAULT_BASE_PATH, DEFAULT_PAGE_SIZE, paginate
from chartable.query.sorting import sort_records
from chartable.storage.loader import RecordStoreLoader, build_source

logger = logging.getLogger(__name__)


class CharacterService:
    """Filters, sorts and paginates the character store.

    The only shared mutable state is the loader's one-time fill and the
    filter-options cache, both written once under a lock.
    """

    def __init__(
        self,
        loader: RecordStoreLoader,
        default_page_size: int = DEFAULT_PAGE_SIZE,
        max_page_size: int = 100,
        base_path: str = DEFAULT_BASE_PATH,
    ) -> None:
        self._loader = loader
        self.default_page_size = default_page_size
        self.max_page_size = max_page_size
        self.base_path = base_path
        self._options: Optional[FilterOptions] = None
        self._options_lock = threading.Lock()

    @classmethod
    def from_config(cls, config: AppConfig) -> "CharacterService":
        """Wire a service to the backing store selected by ``config``."""
        source = build_source(
            data_url=config.data_url,
            data_path=config.data_path,
            timeout_s=config.request_timeout_s,
        )
        return cls(
            RecordStoreLoader(source),
            default_page_size=config.default_page_size,
            max_page_size=config.max_page_size,
        )

    @property
    def loader(self) -> RecordStoreLoader:
        return self._loader

    def list_characters(
        self,
        criteria: Optional[FilterCriteria] = None,
        page=1,
        page_size=None,
        sort: Optional[SortSpec] = None,
    ) -> Page:
        """Return one page of characters matching ``criteria``.

        Raises:
            DataUnavailableError: If the record store cannot be loaded.
        """
        criteria = criteria or FilterCriteria()
        records = self._loader.load()
        matching = sort_records(filter_records(records, criteria), sort)

        extra = criteria.to_params()
        if sort is not None:
            extra.update(sort.to_params())

        result = paginate(
            matching,
            page=page,
            page_size=page_size,
            base_path=self.base_path,
            extra_params=extra,
            default_page_size=self.default_page_size,
            max_page_size=self.max_page_size,
        )
        logger.debug(
            f"list_characters: page={result.meta.current_page} "
            f"size={result.meta.items_per_page} total={result.meta.total_items} "
            f"returned={result.meta.item_count}"
        )
        return result

    def get_filter_options(self) -> FilterOptions:
        """Distinct locations, health states and max power over the whole store."""
        options = self._options
        if options is None:
            with self._options_lock:
                if self._options is None:
                    self._options = _compute_options(self._loader.load())
                options = self._options
        return options

    def get_character(self, character_id: str) -> Optional[Character]:
        """Look up one character by id."""
        for record in self._loader.load():
            if record.id == character_id:
                return record
        return None

    def warm(self) -> bool:
        """Load the store eagerly. Returns False if it is unavailable."""
        try:
            self._loader.load()
            return True
        except DataUnavailableError as e:
            logger.warning(f"Record store not available at startup: {e}")
            return False


def _compute_options(records: list[Character]) -> FilterOptions:
    return FilterOptions(
        locations=sorted({r.location for r in records}),
        health_states=sorted({r.health for r in records}),
        max_power=max((r.power for r in records), default=0),
    )
