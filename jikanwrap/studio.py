"""Studio endpoint: the anime produced by a studio or producer."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import ClassVar

from jikanwrap import genre
from jikanwrap.common import CachedResponse, MALEntity, MALItem, fetch
from jikanwrap.mal_types import MALType


class MetaType(StrEnum):
    ANIME = "anime"


class Source(StrEnum):
    EMPTY = "-"
    GAME = "Game"
    LIGHT_NOVEL = "Light novel"
    MANGA = "Manga"
    MUSIC = "Music"
    NOVEL = "Novel"
    ORIGINAL = "Original"


class AnimeType(StrEnum):
    MOVIE = "Movie"
    ONA = "ONA"
    OVA = "OVA"
    SPECIAL = "Special"
    TV = "TV"


@dataclass
class StudioMeta(MALEntity):
    """A reference to a studio or producer."""

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
    airing_start: str | None = None
    episodes: int | None = None
    members: int = 0
    genres: list[genre.Genre] = field(default_factory=list)
    source: str = ""
    producers: list[StudioMeta] = field(default_factory=list)
    score: float = 0.0
    licensors: list[str] = field(default_factory=list)
    r18: bool = False
    kids: bool = False


@dataclass
class Studio(CachedResponse):
    meta: StudioMeta = field(default_factory=StudioMeta)
    anime: list[AnimeElement] = field(default_factory=list)


def get_studio(item: MALItem, page: int) -> Studio:
    """One page of the anime of the studio identified by ``item``.

    ``item`` must refer to a studio or producer, or the data returned is wrong.
    """
    return fetch(Studio, f"/producer/{item.get_id()}/{page}")