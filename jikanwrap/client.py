"""Rate-limited JSON client for the v4 Jikan REST API."""

from __future__ import annotations

import json
import os
import threading
import time
from datetime import timedelta
from typing import Any

import requests

DEFAULT_BASE_URL = "https://api.jikan.moe/v4"
DEFAULT_TIMEOUT = 10.0
DEFAULT_MIN_INTERVAL = 1.0
USER_AGENT = "JikanAPIWrapper/1.0"

SERVER_READ_TIMEOUT = timedelta(seconds=5)
SERVER_WRITE_TIMEOUT = timedelta(seconds=10)
SERVER_IDLE_TIMEOUT = timedelta(seconds=120)


class JikanClientError(Exception):
    """A request to the API failed or its response could not be decoded."""


class JikanClient:
    """Sends GET requests to the API, leaving at least ``min_interval`` seconds between them."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        min_interval: float = DEFAULT_MIN_INTERVAL,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url
        self.timeout = timeout
        self.min_interval = min_interval
        self.session = session or requests.Session()
        self._lock = threading.Lock()
        self._last_call = time.monotonic() - 2.0

    def _wait_for_slot(self) -> None:
        with self._lock:
            elapsed = time.monotonic() - self._last_call
            if elapsed < self.min_interval:
                time.sleep(self.min_interval - elapsed)
            self._last_call = time.monotonic()

    def get(self, endpoint: str) -> bytes:
        """Return the raw body of a GET of ``endpoint`` under the base URL."""
        self._wait_for_slot()
        url = self.base_url + endpoint
        try:
            response = self.session.get(
                url,
                headers={"Accept": "application/json", "User-Agent": USER_AGENT},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise JikanClientError(f"error executing request: {exc}") from exc
        if response.status_code != 200:
            raise JikanClientError(f"API returned error status: {response.status_code}")
        return response.content

    def get_json(self, endpoint: str) -> Any:
        """GET ``endpoint`` and decode the body as JSON."""
        data = self.get(endpoint)
        try:
            return json.loads(data)
        except ValueError as exc:
            raise JikanClientError(f"error unmarshaling response: {exc}") from exc


def get_env_with_default(key: str, default: str) -> str:
    """The environment variable ``key`` if it is set, even to an empty value, else ``default``."""
    return os.environ.get(key, default)


default_client = JikanClient()