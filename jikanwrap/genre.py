"""Genre endpoint: the anime listed under a genre, fetched without caching."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import ClassVar

import requests

from jikanwrap import cache
from jikanwrap.cache import ApiError
from jikanwrap.common import CachedResponse, MALEntity
from jikanwrap.mal_types import MALType


class Source(StrEnum):
    LIGHT_NOVEL = "Light novel"
    MANGA = "Manga"
    ORIGINAL = "Original"
    VISUAL_NOVEL = "Visual novel"
    WEB_MANGA = "Web manga"


class AnimeType(StrEnum):
    MOVIE = "Movie"
    OVA = "OVA"
    TV = "TV"


@dataclass
class Genre(MALEntity):
    """A genre reference; its URL type is ``genre/<type>``."""

    type: str = ""
    name: str = ""
    url: str = ""

    def get_type(self) -> str:
        return "genre/" + self.type


@dataclass
class Studio(MALEntity):
    mal_type: ClassVar[str] = MALType.PRODUCER

    type: str = ""
    name: str = ""
    url: str = ""


@dataclass
class AnimeElement(MALEntity):
    mal_type: ClassVar[str] = MALType.ANIME

    url: str = ""
    title: str = ""
    image_url: str = ""
    synopsis: str = ""
    type: str = ""
    airing_start: str = ""
    episodes: int | None = None
    members: int = 0
    genres: list[Genre] = field(default_factory=list)
    source: str = ""
    producers: list[Studio] = field(default_factory=list)
    score: float = 0.0
    licensors: list[str] = field(default_factory=list)
    r18: bool = False
    kids: bool = False


@dataclass
class AnimeGenrePage(CachedResponse):
    mal_url: Genre = field(default_factory=Genre)
    item_count: int = 0
    anime: list[AnimeElement] = field(default_factory=list)


def get_anime(genre: int, page: int) -> AnimeGenrePage:
    """One page of the anime listed under ``genre``; always fetched fresh."""
    url = cache.config.append_api(f"/genre/anime/{int(genre)}/{page}")
    try:
        response = requests.get(url, timeout=cache.REQUEST_TIMEOUT)
    except requests.RequestException as exc:
        raise ApiError(str(exc)) from exc
    try:
        payload = response.json()
    except ValueError as exc:
        raise ApiError(f"cannot decode response: {exc}") from exc
    return AnimeGenrePage.from_dict(payload)