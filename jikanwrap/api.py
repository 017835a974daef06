"""Response envelope of the local API and WSGI helpers shared by its handlers."""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field, fields, is_dataclass
from datetime import timedelta
from typing import Any

log = logging.getLogger(__name__)

WSGIApp = Callable[[dict, Callable], Iterable[bytes]]

_HTML_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def _jsonable(value: Any) -> Any:
    if is_dataclass(value) and not isinstance(value, type):
        aliases = getattr(type(value), "json_aliases", {}) or {}
        return {
            aliases.get(item.name, item.name): _jsonable(getattr(value, item.name))
            for item in fields(value)
        }
    if isinstance(value, Mapping):
        return {str(key): _jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(item) for item in value]
    if isinstance(value, bytes):
        return value.decode("utf-8", "replace")
    return value


@dataclass
class APIResponse:
    """The envelope every successful or failed API call answers with."""

    success: bool
    data: Any = None
    error: str = ""
    count: int = 0
    total_count: int = 0
    page: int = 0
    total_pages: int = 0
    query_time: str = ""

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready form; empty optional fields are left out."""
        result: dict[str, Any] = {"success": self.success}
        if self.data is not None:
            result["data"] = _jsonable(self.data)
        for name in ("error", "count", "total_count", "page", "total_pages", "query_time"):
            value = getattr(self, name)
            if value:
                result[name] = value
        return result


@dataclass
class JsonResponse:
    """A status code and a body to be sent as JSON."""

    body: Any
    status_code: int = 200
    headers: dict[str, str] = field(
        default_factory=lambda: {"Content-Type": "application/json"}
    )

    def to_bytes(self) -> bytes:
        """Compact JSON with HTML-sensitive characters escaped, newline-terminated."""
        text = json.dumps(_jsonable(self.body), ensure_ascii=False, separators=(",", ":"))
        for char, escaped in _HTML_ESCAPES.items():
            text = text.replace(char, escaped)
        return (text + "\n").encode("utf-8")


def _format_seconds(query_time: timedelta | float) -> str:
    seconds = (
        query_time.total_seconds() if isinstance(query_time, timedelta) else float(query_time)
    )
    return f"{seconds:.3f} seconds"


def success(data: Any, query_time: timedelta | float) -> APIResponse:
    """A successful envelope; ``query_time`` is a timedelta or seconds."""
    return APIResponse(success=True, data=data, query_time=_format_seconds(query_time))


def error(message: str) -> APIResponse:
    """A failed envelope carrying ``message``."""
    return APIResponse(success=False, error=message)


def error_response(message: str, status_code: int) -> JsonResponse:
    """A JSON body ``{"error": message}`` with the given status."""
    return JsonResponse(body={"error": message}, status_code=status_code)


def logging_middleware(app: WSGIApp) -> WSGIApp:
    """Wrap a WSGI app so every request is logged with its method, URI and duration."""

    def wrapped(environ: dict, start_response: Callable) -> Iterable[bytes]:
        start = time.perf_counter()
        result = app(environ, start_response)
        uri = environ.get("PATH_INFO", "") or "/"
        if environ.get("QUERY_STRING"):
            uri = f"{uri}?{environ['QUERY_STRING']}"
        log.info(
            "%s %s %.6fs",
            environ.get("REQUEST_METHOD", ""),
            uri,
            time.perf_counter() - start,
        )
        return result

    return wrapped