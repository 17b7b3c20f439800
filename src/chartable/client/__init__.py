"""Client-side access to the character query service."""

from .api import CharacterClient, build_query_params
from .infinite import InfiniteCharacterQuery, LoadState
from .table_state import SelectionState, SortState

__all__ = [
    "CharacterClient",
    "InfiniteCharacterQuery",
    "LoadState",
    "SelectionState",
    "SortState",
    "build_query_params",
]
