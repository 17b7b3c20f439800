"""Request parameter model for the characters listing."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from chartable.query.models import FilterCriteria, SortSpec
from chartable.query.paginator import DEFAULT_PAGE_SIZE, parse_positive_int


class CharacterQueryParams(BaseModel):
    """Raw query-string values for ``GET /api/characters``.

    Values stay as strings here; numeric ones are parse-or-default, so a
    malformed ``page`` or ``limit`` never fails the request.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    location: Optional[str] = None
    health: Optional[str] = None
    power: Optional[str] = None
    page: Optional[str] = None
    limit: Optional[str] = None
    sort_by: Optional[str] = Field(default=None, alias="sortBy")
    sort_order: Optional[str] = Field(default=None, alias="sortOrder")

    @classmethod
    def from_args(cls, args) -> "CharacterQueryParams":
        """Build from a Flask ``request.args`` style mapping."""
        return cls.model_validate(
            {key: args.get(key) for key in _ARG_NAMES if args.get(key) is not None}
        )

    @property
    def criteria(self) -> FilterCriteria:
        return FilterCriteria.from_params(
            name=self.name,
            location=self.location,
            health=self.health,
            power=self.power,
        )

    @property
    def sort(self) -> Optional[SortSpec]:
        return SortSpec.from_params(self.sort_by, self.sort_order)

    @property
    def page_number(self) -> int:
        return parse_positive_int(self.page, 1)

    def page_size(
        self, default: int = DEFAULT_PAGE_SIZE, maximum: Optional[int] = None
    ) -> int:
        size = parse_positive_int(self.limit, default)
        if maximum is not None:
            size = min(size, maximum)
        return size


_ARG_NAMES = ("name", "location", "health", "power", "page", "limit", "sortBy", "sortOrder")
