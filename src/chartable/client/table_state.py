"""Sort and row-selection state for a character table."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Optional

from chartable.query.models import SORTABLE_COLUMNS, SortSpec


@dataclass
class SortState:
    """Column header sort cycle: unsorted -> asc -> desc -> unsorted."""

    column: Optional[str] = None
    direction: Optional[str] = None

    def toggle(self, column: str) -> None:
        if column not in SORTABLE_COLUMNS:
            raise ValueError(f"Column '{column}' is not sortable")
        if self.column != column:
            self.column, self.direction = column, "asc"
        elif self.direction == "asc":
            self.direction = "desc"
        else:
            self.column, self.direction = None, None

    def as_sort_spec(self) -> Optional[SortSpec]:
        if self.column is None:
            return None
        return SortSpec(column=self.column, direction=self.direction or "asc")


@dataclass
class SelectionState:
    """Selected row ids, tracked against the currently visible rows."""

    selected_ids: set = field(default_factory=set)
    visible_count: int = 0

    def toggle(self, row_id: str, visible_ids: Iterable[str]) -> None:
        """Select or deselect one row."""
        visible = set(visible_ids)
        if row_id in self.selected_ids:
            self.selected_ids.discard(row_id)
        else:
            self.selected_ids.add(row_id)
        self.visible_count = len(visible)

    def toggle_all(self, visible_ids: Iterable[str]) -> None:
        """Select every visible row, or clear if all are already selected."""
        visible = set(visible_ids)
        self.visible_count = len(visible)
        if self.is_all_selected:
            self.selected_ids = set()
        else:
            self.selected_ids = visible

    def clear(self) -> None:
        self.selected_ids = set()

    def sync(self, visible_ids: Iterable[str]) -> None:
        """Drop selections for rows that are no longer visible."""
        visible = set(visible_ids)
        self.selected_ids &= visible
        self.visible_count = len(visible)

    def is_selected(self, row_id: str) -> bool:
        return row_id in self.selected_ids

    @property
    def selected_count(self) -> int:
        return len(self.selected_ids)

    @property
    def is_all_selected(self) -> bool:
        return 0 < self.selected_count == self.visible_count

    @property
    def is_indeterminate(self) -> bool:
        return 0 < self.selected_count < self.visible_count
