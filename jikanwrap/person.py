"""Person endpoints: details, search and the top ranking."""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from enum import StrEnum
from typing import Any, ClassVar

from jikanwrap.common import CachedResponse, JsonModel, MALEntity, MALItem, fetch
from jikanwrap.mal_types import MALType


class Position(StrEnum):
    INSERTED_SONG_PERFORMANCE = "Inserted Song Performance"
    THEME_SONG_PERFORMANCE = "Theme Song Performance"


class Role(StrEnum):
    MAIN = "Main"
    SUPPORTING = "Supporting"


@dataclass
class Anime(MALEntity):
    mal_type: ClassVar[str] = MALType.ANIME

    url: str = ""
    image_url: str = ""
    name: str = ""


@dataclass
class Manga(MALEntity):
    mal_type: ClassVar[str] = MALType.MANGA

    url: str = ""
    image_url: str = ""
    name: str = ""


@dataclass
class Character(MALEntity):
    mal_type: ClassVar[str] = MALType.CHARACTER

    url: str = ""
    image_url: str = ""
    name: str = ""


@dataclass
class PublishedManga(JsonModel):
    position: str = ""
    manga: Manga = field(default_factory=Manga)


@dataclass
class AnimeStaffPosition(JsonModel):
    position: str = ""
    anime: Anime = field(default_factory=Anime)


@dataclass
class VoiceActingRole(JsonModel):
    role: str = ""
    anime: Anime = field(default_factory=Anime)
    character: Character = field(default_factory=Character)


@dataclass
class Person(CachedResponse, MALEntity):
    """A single person with their roles and works."""

    mal_type: ClassVar[str] = MALType.PERSON

    url: str = ""
    image_url: str = ""
    website_url: str = ""
    name: str = ""
    given_name: str = ""
    family_name: str = ""
    alternate_names: list[str] = field(default_factory=list)
    birthday: str = ""
    member_favorites: int = 0
    about: str = ""
    voice_acting_roles: list[VoiceActingRole] = field(default_factory=list)
    anime_staff_positions: list[AnimeStaffPosition] = field(default_factory=list)
    published_manga: list[PublishedManga] = field(default_factory=list)


@dataclass
class Query:
    """Search criteria; empty criteria are not sent."""

    q: str = ""
    page: int = 0
    score: float = 0.0
    genre_exclude: bool = False
    limit: int = 0
    producer: int = 0
    magazine: int = 0
    letter: str = ""

    def to_params(self) -> dict[str, Any]:
        """Query-string parameters for the non-empty criteria."""
        params: dict[str, Any] = {}
        for item in fields(self):
            value = getattr(self, item.name)
            if not value:
                continue
            if isinstance(value, bool):
                params[item.name] = "true"
            elif isinstance(value, float):
                params[item.name] = int(value) if value.is_integer() else value
            elif isinstance(value, int):
                params[item.name] = int(value)
            else:
                params[item.name] = str(value)
        return params


@dataclass
class Result(MALEntity):
    mal_type: ClassVar[str] = MALType.PERSON

    url: str = ""
    image_url: str = ""
    name: str = ""
    alternative_names: list[str] = field(default_factory=list)


@dataclass
class SearchResult(CachedResponse):
    results: list[Result] = field(default_factory=list)
    last_page: int = 0


@dataclass
class TopElement(MALEntity):
    mal_type: ClassVar[str] = MALType.PERSON

    rank: int = 0
    title: str = ""
    url: str = ""
    name_kanji: str | None = None
    favorites: int = 0
    image_url: str = ""
    birthday: str = ""


@dataclass
class Top(CachedResponse):
    top: list[TopElement] = field(default_factory=list)


def get_person(item: MALItem) -> Person:
    """The details of the person identified by ``item``."""
    return fetch(Person, f"/person/{item.get_id()}")


def search(query: Query) -> SearchResult:
    """Search people; a missing page number means the first page."""
    if not query.page:
        query = replace(query, page=1)
    return fetch(SearchResult, "/search/people", query.to_params())


def get_top(page: int) -> Top:
    """One page of the top people ranking."""
    return fetch(Top, f"/top/people/{page}")