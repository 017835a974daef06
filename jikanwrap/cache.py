"""HTTP GET with an on-disk (and optional in-memory) cache and ETag revalidation."""

from __future__ import annotations

import base64
import hashlib
import json
import logging
import tempfile
import threading
import time
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

import requests

log = logging.getLogger(__name__)

MIN_UNCACHED_INTERVAL = 0.5
REQUEST_TIMEOUT = 30.0

_ERROR_STATUSES = {
    404: "resource not found",
    400: "bad request",
    405: "method not allowed",
    429: "invalid request",
    500: "internal server error",
}
_UNCACHED_MARKER = b'"request_cached": false'
_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Config:
    """Where the API lives and how responses are cached."""

    api: str = "https://api.jikan.moe/v3"
    cache_dir: Path = field(default_factory=lambda: Path(tempfile.gettempdir()))
    cache_lifetime: timedelta = timedelta(minutes=30)
    use_memory_cache: bool = False

    def append_api(self, endpoint: str, *args: Any) -> str:
        """Return the full URL for ``endpoint``, formatted with ``args`` if any."""
        if args:
            endpoint = endpoint.format(*args)
        return f"{self.api}{endpoint}"


config = Config()


class ApiError(Exception):
    """A request to the API or to the response cache failed."""


@dataclass
class CachedRequest:
    """A raw response body together with when it was fetched and its ETag."""

    data: bytes = b""
    requested_on: datetime = field(default_factory=_now)
    etag: str = ""

    def to_json(self) -> Any:
        """Decode the body as JSON."""
        return json.loads(self.data)

    def to_dict(self) -> dict[str, str]:
        """Serialise for storage in the cache directory."""
        return {
            "Data": base64.b64encode(self.data).decode("ascii"),
            "RequestedOn": self.requested_on.isoformat(),
            "ETag": self.etag,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CachedRequest:
        """Rebuild an entry from :meth:`to_dict` output."""
        stamp = data.get("RequestedOn")
        requested_on = datetime.fromisoformat(stamp) if stamp else _EPOCH
        if requested_on.tzinfo is None:
            requested_on = requested_on.replace(tzinfo=timezone.utc)
        return cls(
            data=base64.b64decode(data.get("Data") or ""),
            requested_on=requested_on,
            etag=data.get("ETag") or "",
        )


_memory_cache: dict[str, CachedRequest] = {}
_last_uncached_request = time.monotonic()


def flush_memory_cache() -> None:
    """Drop every entry held in memory."""
    _memory_cache.clear()


def _format_value(value: Any) -> str:
    if value is None:
        return "<nil>"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, Mapping):
        items = " ".join(f"{key}:{_format_value(value[key])}" for key in sorted(value))
        return f"map[{items}]"
    if isinstance(value, (list, tuple)):
        return "[" + " ".join(_format_value(item) for item in value) + "]"
    return str(value)


def request_hash(url: str, params: Mapping[str, Any] | None = None) -> str:
    """Cache key for a GET of ``url`` with ``params``; the API base is ignored."""
    path = url.replace(config.api, "") if config.api else url
    extra = [] if params is None else [params]
    digest = hashlib.sha1((path + _format_value(extra)).encode("utf-8")).hexdigest()
    return f"j2gc-{digest}"


@contextmanager
def lifetime_context(lifetime: timedelta | float) -> Iterator[Config]:
    """Temporarily change how long cached entries count as fresh."""
    if not isinstance(lifetime, timedelta):
        lifetime = timedelta(seconds=lifetime)
    previous = config.cache_lifetime
    config.cache_lifetime = lifetime
    try:
        yield config
    finally:
        config.cache_lifetime = previous


def _cache_path(key: str) -> Path:
    return Path(config.cache_dir) / key


def _write_in_background(path: Path, payload: bytes) -> None:
    try:
        path.write_bytes(payload)
    except OSError as exc:
        log.warning("failed to write to cache: %s", exc)


def _write_cache(key: str, entry: CachedRequest) -> None:
    path = _cache_path(key)
    payload = json.dumps(entry.to_dict()).encode("utf-8")
    if config.use_memory_cache:
        _memory_cache[key] = entry
        threading.Thread(
            target=_write_in_background, args=(path, payload), daemon=True
        ).start()
        return
    path.write_bytes(payload)


def _read_cache(key: str) -> CachedRequest:
    if config.use_memory_cache and key in _memory_cache:
        return _memory_cache[key]
    try:
        raw = _cache_path(key).read_bytes()
    except FileNotFoundError:
        raise ApiError("cache file not found") from None
    except OSError as exc:
        raise ApiError(f"[{key}] failed to read cache: {exc}") from exc
    try:
        entry = CachedRequest.from_dict(json.loads(raw))
    except (ValueError, TypeError, AttributeError) as exc:
        raise ApiError(f"[{key}] corrupt cache entry: {exc}") from exc
    if config.use_memory_cache:
        _memory_cache[key] = entry
    return entry


def _throttle() -> None:
    elapsed = time.monotonic() - _last_uncached_request
    if elapsed < MIN_UNCACHED_INTERVAL:
        delay = MIN_UNCACHED_INTERVAL - elapsed
        log.info("sleeping for %.3fs", delay)
        time.sleep(delay)


def _note_uncached(data: bytes) -> None:
    global _last_uncached_request
    if _UNCACHED_MARKER in data:
        log.info("uncached request, setting timeout for next call")
        _last_uncached_request = time.monotonic()


def cached_get(url: str, params: Mapping[str, Any] | None = None) -> CachedRequest:
    """GET ``url``, serving from the cache and revalidating stale entries."""
    _throttle()
    key = request_hash(url, params)

    if not _cache_path(key).exists():
        try:
            response = requests.get(url, params=params, timeout=REQUEST_TIMEOUT)
        except requests.RequestException as exc:
            raise ApiError(str(exc)) from exc
        message = _ERROR_STATUSES.get(response.status_code)
        if message:
            raise ApiError(message)
        entry = CachedRequest(
            data=response.content,
            requested_on=_now(),
            etag=response.headers.get("ETag", ""),
        )
        _note_uncached(entry.data)
        try:
            _write_cache(key, entry)
        except OSError as exc:
            raise ApiError(f"[{key}] failed to write cache: {exc}") from exc
        return entry

    entry = _read_cache(key)
    if _now() - entry.requested_on > config.cache_lifetime:
        try:
            response = requests.get(
                url,
                params=params,
                headers={"If-None-Match": entry.etag},
                timeout=REQUEST_TIMEOUT,
            )
        except requests.RequestException as exc:
            log.warning("[%s] failed to renew data: %s", key, exc)
            raise ApiError(f"[{key}] failed to renew data: {exc}") from exc
        if response.status_code == 304:
            log.info("[%s] cached data is still synced with remote resource", key)
        elif response.status_code == 200:
            entry.data = response.content
            entry.etag = response.headers.get("ETag", "")
        entry.requested_on = _now()
        _note_uncached(entry.data)
        try:
            _write_cache(key, entry)
        except OSError as exc:
            raise ApiError(f"[{key}] failed to write cache: {exc}") from exc
    return entry