"""Abstract base class for record sources."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List


class RecordSource(ABC):
    """Opaque collaborator that can list every raw record."""

    @abstractmethod
    def load(self) -> List[Dict[str, Any]]:
        """Read all raw records.

        Returns:
            List of record dicts, in store order.

        Raises:
            DataUnavailableError: If the source cannot be read or parsed.
        """

    @abstractmethod
    def describe(self) -> str:
        """Short human-readable label used in logs."""
