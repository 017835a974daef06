"""Anime lookups against the v4 API: search, details and top lists."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, TypeVar
from urllib.parse import quote_plus

from jikanwrap import client as jikan_client
from jikanwrap.client import JikanClient, JikanClientError
from jikanwrap.common import JsonModel

M = TypeVar("M", bound=JsonModel)


@dataclass
class GenreInfo(JsonModel):
    mal_id: int = 0
    type: str = ""
    name: str = ""


@dataclass
class StudioInfo(JsonModel):
    mal_id: int = 0
    type: str = ""
    name: str = ""


@dataclass
class ImageInfo(JsonModel):
    image_url: str = ""
    small_image_url: str = ""
    large_image_url: str = ""


@dataclass
class Images(JsonModel):
    jpg: ImageInfo = field(default_factory=ImageInfo)
    webp: ImageInfo = field(default_factory=ImageInfo)


@dataclass
class AnimeData(JsonModel):
    """One anime as the v4 API describes it."""

    mal_id: int = 0
    url: str = ""
    title: str = ""
    title_english: str = ""
    title_japanese: str = ""
    title_synonyms: list[str] = field(default_factory=list)
    type: str = ""
    source: str = ""
    episodes: int = 0
    status: str = ""
    airing: bool = False
    synopsis: str = ""
    background: str = ""
    season: str = ""
    year: int = 0
    score: float = 0.0
    scored_by: int = 0
    rank: int = 0
    popularity: int = 0
    members: int = 0
    favorites: int = 0
    genres: list[GenreInfo] = field(default_factory=list)
    studios: list[StudioInfo] = field(default_factory=list)
    images: Images = field(default_factory=Images)


@dataclass
class _Items(JsonModel):
    count: int = 0
    per_page: int = 0
    total: int = 0


@dataclass
class _Pagination(JsonModel):
    last_visible_page: int = 0
    has_next_page: bool = False
    current_page: int = 0
    items: _Items = field(default_factory=_Items)


@dataclass
class _AnimePage(JsonModel):
    data: list[AnimeData] = field(default_factory=list)
    pagination: _Pagination = field(default_factory=_Pagination)


@dataclass
class _SingleAnime(JsonModel):
    data: AnimeData = field(default_factory=AnimeData)


def _fetch(model: type[M], endpoint: str, client: JikanClient | None) -> M:
    payload: Any = (client or jikan_client.default_client).get_json(endpoint)
    try:
        return model.from_dict(payload)
    except ValueError as exc:
        raise JikanClientError(f"error unmarshaling response: {exc}") from exc


def search_anime(
    query: str, limit: int, page: int, client: JikanClient | None = None
) -> tuple[list[AnimeData], int]:
    """Anime whose titles match ``query``, with the total number of matches."""
    endpoint = f"/anime?q={quote_plus(query)}&limit={limit}&page={page}"
    result = _fetch(_AnimePage, endpoint, client)
    return result.data, result.pagination.items.total


def get_anime_details(anime_id: int, client: JikanClient | None = None) -> AnimeData:
    """Full details of the anime with ``anime_id``."""
    return _fetch(_SingleAnime, f"/anime/{anime_id}", client).data


def get_top_anime(
    filter_: str, limit: int, page: int, client: JikanClient | None = None
) -> tuple[list[AnimeData], int]:
    """The top-rated anime, optionally filtered, with the total number listed."""
    endpoint = f"/top/anime?limit={limit}&page={page}"
    if filter_:
        endpoint += "&filter=" + quote_plus(filter_)
    result = _fetch(_AnimePage, endpoint, client)
    return result.data, result.pagination.items.total