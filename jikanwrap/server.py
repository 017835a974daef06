"""HTTP handlers of the local anime API and the WSGI application serving them."""

from __future__ import annotations

import re
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from http import HTTPStatus
from urllib.parse import parse_qs

from jikanwrap import anime_service
from jikanwrap.api import (
    APIResponse,
    JsonResponse,
    error_response,
    logging_middleware,
    success,
)
from jikanwrap.client import JikanClientError

DEFAULT_LIMIT = 25
MAX_LIMIT = 100
ANIME_PREFIX = "/api/anime/"

_INTEGER = re.compile(r"[+-]?[0-9]+")


@dataclass
class Request:
    """The parts of an HTTP request the handlers look at."""

    method: str = "GET"
    path: str = "/"
    query: dict[str, str] = field(default_factory=dict)


def _request_from_environ(environ: dict) -> Request:
    parsed = parse_qs(environ.get("QUERY_STRING", ""), keep_blank_values=True)
    return Request(
        method=environ.get("REQUEST_METHOD", "GET"),
        path=environ.get("PATH_INFO", "") or "/",
        query={key: values[0] for key, values in parsed.items()},
    )


def _parse_int(text: str) -> int | None:
    return int(text) if _INTEGER.fullmatch(text) else None


def _limit(request: Request) -> int:
    value = _parse_int(request.query.get("limit", ""))
    return value if value is not None and 0 < value <= MAX_LIMIT else DEFAULT_LIMIT


def _page(request: Request) -> int:
    value = _parse_int(request.query.get("page", ""))
    return value if value is not None and value > 0 else 1


def _page_response(
    results: list, total: int, page: int, limit: int, started: float
) -> JsonResponse:
    envelope = APIResponse(
        success=True,
        data=results,
        count=len(results),
        total_count=total,
        page=page,
        total_pages=(total + limit - 1) // limit,
        query_time=f"{time.perf_counter() - started:.3f} seconds",
    )
    return JsonResponse(body=envelope.to_dict())


def _method_not_allowed() -> JsonResponse:
    return error_response("Method not allowed", HTTPStatus.METHOD_NOT_ALLOWED)


def search_handler(request: Request) -> JsonResponse:
    """Search anime by the title given in ``q``."""
    if request.method != "GET":
        return _method_not_allowed()
    query = request.query.get("q", "")
    if not query:
        return error_response(
            "Search query parameter 'q' is required", HTTPStatus.BAD_REQUEST
        )
    limit, page = _limit(request), _page(request)
    started = time.perf_counter()
    try:
        results, total = anime_service.search_anime(query, limit, page)
    except JikanClientError as exc:
        return error_response(
            f"Error searching anime: {exc}", HTTPStatus.INTERNAL_SERVER_ERROR
        )
    return _page_response(results, total, page, limit, started)


def get_anime_handler(request: Request) -> JsonResponse:
    """Details of the anime whose id ends the path."""
    if request.method != "GET":
        return _method_not_allowed()
    path = request.path.removeprefix(ANIME_PREFIX)
    if not path:
        return error_response("Anime ID is required", HTTPStatus.BAD_REQUEST)
    anime_id = _parse_int(path)
    if anime_id is None:
        return error_response("Invalid anime ID", HTTPStatus.BAD_REQUEST)
    started = time.perf_counter()
    try:
        anime = anime_service.get_anime_details(anime_id)
    except JikanClientError as exc:
        return error_response(
            f"Error fetching anime details: {exc}", HTTPStatus.INTERNAL_SERVER_ERROR
        )
    return JsonResponse(body=success(anime, time.perf_counter() - started).to_dict())


def get_top_anime_handler(request: Request) -> JsonResponse:
    """The top-rated anime, optionally narrowed by ``filter``."""
    if request.method != "GET":
        return _method_not_allowed()
    limit, page = _limit(request), _page(request)
    filter_ = request.query.get("filter", "")
    started = time.perf_counter()
    try:
        results, total = anime_service.get_top_anime(filter_, limit, page)
    except JikanClientError as exc:
        return error_response(
            f"Error fetching top anime: {exc}", HTTPStatus.INTERNAL_SERVER_ERROR
        )
    return _page_response(results, total, page, limit, started)


_EXACT_ROUTES: dict[str, Callable[[Request], JsonResponse]] = {
    "/api/anime/search": search_handler,
    "/api/anime/top": get_top_anime_handler,
}


def _route(path: str) -> Callable[[Request], JsonResponse] | None:
    if path in _EXACT_ROUTES:
        return _EXACT_ROUTES[path]
    if path.startswith(ANIME_PREFIX):
        return get_anime_handler
    return None


def create_app() -> Callable[[dict, Callable], Iterable[bytes]]:
    """A logged WSGI application serving the anime endpoints."""

    def app(environ: dict, start_response: Callable) -> Iterable[bytes]:
        request = _request_from_environ(environ)
        handler = _route(request.path)
        response = handler(request) if handler else error_response(
            "Not found", HTTPStatus.NOT_FOUND
        )
        status = HTTPStatus(response.status_code)
        start_response(f"{status.value} {status.phrase}", list(response.headers.items()))
        return [response.to_bytes()]

    return logging_middleware(app)