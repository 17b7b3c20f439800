"""Remote JSON record source fetched over HTTP."""

import json
import logging
import socket
import urllib.error
import urllib.request
from typing import Any, Dict, List

from chartable.errors import DataUnavailableError

from .base import RecordSource
from .json_source import extract_records

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_S = 10.0


class RemoteJsonSource(RecordSource):
    """Records served as a JSON array from a URL.

    A failed fetch is a hard failure; there is no fallback to local data.
    """

    def __init__(self, url: str, timeout_s: float = DEFAULT_TIMEOUT_S) -> None:
        self.url = url
        self.timeout_s = timeout_s

    def load(self) -> List[Dict[str, Any]]:
        req = urllib.request.Request(
            self.url,
            headers={"Accept": "application/json", "User-Agent": "chartable"},
        )
        try:
            with urllib.request.urlopen(req, timeout=self.timeout_s) as resp:
                body = resp.read()
        except urllib.error.HTTPError as e:
            logger.warning(f"Remote data source returned HTTP {e.code}: {self.url}")
            raise DataUnavailableError(
                f"Remote data source returned HTTP {e.code}"
            ) from e
        except (urllib.error.URLError, socket.timeout, OSError) as e:
            logger.warning(f"Remote data source unreachable: {self.url}: {e}")
            raise DataUnavailableError(f"Remote data source unreachable: {e}") from e

        try:
            data = json.loads(body.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise DataUnavailableError(f"Invalid JSON from {self.url}: {e}") from e
        return extract_records(data, self.url)

    def describe(self) -> str:
        return f"url:{self.url}"
