"""Backing stores for the character record set."""

from .base import RecordSource
from .json_source import BUNDLED_DATA_PATH, JsonFileSource
from .loader import RecordStoreLoader, build_source
from .remote_source import RemoteJsonSource

__all__ = [
    "BUNDLED_DATA_PATH",
    "JsonFileSource",
    "RecordSource",
    "RecordStoreLoader",
    "RemoteJsonSource",
    "build_source",
]
