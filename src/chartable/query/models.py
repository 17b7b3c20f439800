"""Record, criteria and page models."""

import re
from dataclasses import dataclass, field
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

HealthState = Literal["Healthy", "Injured", "Critical"]

SORTABLE_COLUMNS = ("id", "name", "location", "health", "power")

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class Character(BaseModel):
    """One character in the catalog. Immutable once loaded."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    name: str
    location: str
    health: HealthState
    power: int = Field(ge=0)


def _split_list(value: Optional[str]) -> frozenset:
    if not value:
        return frozenset()
    return frozenset(part.strip() for part in value.split(",") if part.strip())


@dataclass(frozen=True)
class FilterCriteria:
    """Combined filter criteria for one query.

    Fields are ANDed together; values inside ``locations`` and
    ``health_states`` are ORed. An empty set means no constraint.
    ``max_power=None`` means no limit and is distinct from ``0``.
    """

    name: str = ""
    locations: frozenset = field(default_factory=frozenset)
    health_states: frozenset = field(default_factory=frozenset)
    max_power: Optional[int] = None

    def __post_init__(self) -> None:
        # Accept any iterable for the set fields but keep the instance hashable.
        object.__setattr__(self, "locations", frozenset(self.locations))
        object.__setattr__(self, "health_states", frozenset(self.health_states))

    @classmethod
    def from_params(
        cls,
        name: Optional[str] = None,
        location: Optional[str] = None,
        health: Optional[str] = None,
        power: Optional[str] = None,
    ) -> "FilterCriteria":
        """Build criteria from raw query-string values.

        ``location`` and ``health`` are comma-separated lists. ``power`` is
        read from its leading integer, so ``"10abc"`` and ``"10.5"`` both mean
        10; a value with no leading digits is ignored (no limit). ``name`` is
        used as given, surrounding whitespace included.
        """
        max_power: Optional[int] = None
        if power is not None:
            match = _LEADING_INT.match(str(power))
            if match:
                max_power = int(match.group(1))
        return cls(
            name=name or "",
            locations=_split_list(location),
            health_states=_split_list(health),
            max_power=max_power,
        )

    def to_params(self) -> dict[str, str]:
        """Encode as query-string values, omitting unconstrained fields."""
        params: dict[str, str] = {}
        if self.name:
            params["name"] = self.name
        if self.locations:
            params["location"] = ",".join(sorted(self.locations))
        if self.health_states:
            params["health"] = ",".join(sorted(self.health_states))
        if self.max_power is not None:
            params["power"] = str(self.max_power)
        return params

    @property
    def is_empty(self) -> bool:
        return (
            not self.name
            and not self.locations
            and not self.health_states
            and self.max_power is None
        )


@dataclass(frozen=True)
class SortSpec:
    """Single-column sort. ``column=None`` keeps store order."""

    column: Optional[str] = None
    direction: str = "asc"

    @classmethod
    def from_params(
        cls, sort_by: Optional[str] = None, sort_order: Optional[str] = None
    ) -> Optional["SortSpec"]:
        """Parse ``sortBy``/``sortOrder``; unknown columns mean no sort."""
        if not sort_by or sort_by not in SORTABLE_COLUMNS:
            return None
        direction = "desc" if (sort_order or "").lower() == "desc" else "asc"
        return cls(column=sort_by, direction=direction)

    @property
    def descending(self) -> bool:
        return self.direction == "desc"

    def to_params(self) -> dict[str, str]:
        if not self.column:
            return {}
        return {"sortBy": self.column, "sortOrder": self.direction}


class PageMeta(BaseModel):
    """Counts describing one page of a listing."""

    model_config = ConfigDict(populate_by_name=True)

    total_items: int = Field(default=0, alias="totalItems")
    item_count: int = Field(default=0, alias="itemCount")
    items_per_page: int = Field(default=10, alias="itemsPerPage")
    total_pages: int = Field(default=0, alias="totalPages")
    current_page: int = Field(default=1, alias="currentPage")


class PageLinks(BaseModel):
    """Navigation links. An empty string marks a missing neighbour."""

    first: str = ""
    previous: str = ""
    next: str = ""
    last: str = ""


class Page(BaseModel):
    """One windowed response to a listing query."""

    model_config = ConfigDict(populate_by_name=True)

    items: list[Character] = Field(default_factory=list)
    meta: PageMeta = Field(default_factory=PageMeta)
    links: PageLinks = Field(default_factory=PageLinks)

    @property
    def has_next(self) -> bool:
        return self.meta.current_page < self.meta.total_pages

    @property
    def has_previous(self) -> bool:
        return self.meta.current_page > 1

    def to_dict(self) -> dict:
        """JSON-ready dict using the wire (camelCase) field names."""
        return self.model_dump(by_alias=True)


class FilterOptions(BaseModel):
    """Distinct values and bounds across the whole, unfiltered store."""

    model_config = ConfigDict(populate_by_name=True)

    locations: list[str] = Field(default_factory=list)
    health_states: list[str] = Field(default_factory=list, alias="healthStates")
    max_power: int = Field(default=0, alias="maxPower")

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True)
