"""Load-once access to the full character record set."""

import logging
import threading
from typing import Any, List, Optional

from pydantic import ValidationError

from chartable.errors import DataUnavailableError
from chartable.query.models import Character

from .base import RecordSource
from .json_source import JsonFileSource
from .remote_source import RemoteJsonSource

logger = logging.getLogger(__name__)


class RecordStoreLoader:
    """Memoizes the validated record set for the process lifetime.

    The first ``load()`` runs under a lock, so callers racing on a cold
    loader share one source read instead of each loading their own copy.
    A failed load caches nothing and the next call tries again.
    """

    def __init__(self, source: RecordSource) -> None:
        self._source = source
        self._lock = threading.Lock()
        self._records: Optional[tuple[Character, ...]] = None
        self.load_count = 0

    @property
    def source(self) -> RecordSource:
        return self._source

    @property
    def is_loaded(self) -> bool:
        return self._records is not None

    def load(self) -> List[Character]:
        """Return every record in store order.

        Raises:
            DataUnavailableError: If the source fails or holds invalid records.
        """
        records = self._records
        if records is None:
            with self._lock:
                if self._records is None:
                    self._records = self._load_from_source()
                records = self._records
        return list(records)

    def reset(self) -> None:
        """Forget the cached record set."""
        with self._lock:
            self._records = None

    def _load_from_source(self) -> tuple[Character, ...]:
        self.load_count += 1
        label = self._source.describe()
        logger.info(f"Loading character records from {label}")
        try:
            rows = self._source.load()
        except DataUnavailableError as e:
            logger.error(f"Failed to load records from {label}: {e}")
            raise
        except Exception as e:
            logger.error(f"Failed to load records from {label}: {e}")
            raise DataUnavailableError(f"Failed to load records from {label}") from e

        records = _validate(rows, label)
        logger.info(f"Loaded {len(records)} character records from {label}")
        return records


def _validate(rows: List[Any], label: str) -> tuple[Character, ...]:
    records: list[Character] = []
    seen: set[str] = set()
    for i, row in enumerate(rows):
        try:
            record = Character.model_validate(row)
        except ValidationError as e:
            raise DataUnavailableError(
                f"Invalid record at index {i} in {label}: {e}"
            ) from e
        if record.id in seen:
            raise DataUnavailableError(f"Duplicate record id '{record.id}' in {label}")
        seen.add(record.id)
        records.append(record)
    return tuple(records)


def build_source(
    data_url: str = "",
    data_path: Optional[Any] = None,
    timeout_s: float = 10.0,
) -> RecordSource:
    """Pick the backing store: remote URL first, then a file, then the bundle."""
    if data_url:
        return RemoteJsonSource(data_url, timeout_s=timeout_s)
    return JsonFileSource(data_path)
