"""JSON file record source."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from chartable.errors import DataUnavailableError

from .base import RecordSource

logger = logging.getLogger(__name__)

BUNDLED_DATA_PATH = Path(__file__).resolve().parent.parent / "data" / "characters.json"


def extract_records(data: Any, origin: str) -> List[Dict[str, Any]]:
    """Accept a bare JSON array, or an object wrapping one under ``items``."""
    if isinstance(data, dict) and isinstance(data.get("items"), list):
        data = data["items"]
    if not isinstance(data, list):
        raise DataUnavailableError(f"Expected a JSON array of records in {origin}")
    return data


class JsonFileSource(RecordSource):
    """Records stored as a JSON array on disk.

    Defaults to the dataset bundled with the package.
    """

    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = Path(path) if path else BUNDLED_DATA_PATH

    def load(self) -> List[Dict[str, Any]]:
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            raise DataUnavailableError(f"Data file not found: {self.path}") from None
        except json.JSONDecodeError as e:
            raise DataUnavailableError(f"Invalid JSON in {self.path}: {e}") from e
        except OSError as e:
            raise DataUnavailableError(f"Cannot read {self.path}: {e}") from e
        return extract_records(data, str(self.path))

    def describe(self) -> str:
        return f"file:{self.path}"
