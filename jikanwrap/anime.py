"""Anime endpoints: details, characters and staff, episodes, search, top lists, videos."""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from enum import IntEnum, StrEnum
from typing import Any, ClassVar

from jikanwrap.common import (
    CachedResponse,
    JsonModel,
    MALEntity,
    MALItem,
    TypedMALItem,
    fetch,
)
from jikanwrap.mal_types import MALType


class AnimeGenre(IntEnum):
    """Genre identifiers accepted by the search and genre endpoints."""

    RESERVED = 0
    ACTION = 1
    ADVENTURE = 2
    CARS = 3
    COMEDY = 4
    DEMENTIA = 5
    DEMONS = 6
    MYSTERY = 7
    DRAMA = 8
    ECCHI = 9
    FANTASY = 10
    GAME = 11
    HENTAI = 12
    HISTORICAL = 13
    HORROR = 14
    KIDS = 15
    MAGIC = 16
    MARTIAL_ARTS = 17
    MECHA = 18
    MUSIC = 19
    PARODY = 20
    SAMURAI = 21
    ROMANCE = 22
    SCHOOL = 23
    SCI_FI = 24
    SHOUJO = 25
    SHOUJO_AI = 26
    SHOUNEN = 27
    SHOUNEN_AI = 28
    SPACE = 29
    SPORTS = 30
    SUPER_POWER = 31
    VAMPIRE = 32
    YAOI = 33
    YURI = 34
    HAREM = 35
    SLICE_OF_LIFE = 36
    SUPERNATURAL = 37
    MILITARY = 38
    POLICE = 39
    PSYCHOLOGICAL = 40
    THRILLER = 41
    SEINEN = 42
    JOSEI = 43


class Role(StrEnum):
    MAIN = "Main"
    SUPPORTING = "Supporting"


class Language(StrEnum):
    ENGLISH = "English"
    GERMAN = "German"
    JAPANESE = "Japanese"


class Rated(StrEnum):
    G = "G"
    PG = "PG"
    PG13 = "PG-13"
    R = "R"
    R_PLUS = "R+"
    RX = "Rx"


class AnimeType(StrEnum):
    MOVIE = "Movie"
    ONA = "ONA"
    OVA = "OVA"
    SPECIAL = "Special"
    TV = "TV"
    MUSIC = "Music"


class Status(StrEnum):
    AIRING = "airing"
    COMPLETED = "completed"
    COMPLETE = "complete"
    TO_BE_AIRED = "to_be_aired"
    TBA = "tba"
    UPCOMING = "upcoming"


class Sort(StrEnum):
    ASC = "ascending"
    DESC = "descending"


class Order(StrEnum):
    TITLE = "title"
    START_DATE = "start_date"
    END_DATE = "end_date"
    SCORE = "score"
    TYPE = "type"
    MEMBERS = "members"
    ID = "id"
    EPISODES = "episodes"
    RATING = "rating"


class SubType(StrEnum):
    """Sub-lists of the top anime ranking; ``NONE`` is the overall ranking."""

    AIRING = "airing"
    UPCOMING = "upcoming"
    TV = "tv"
    MOVIE = "movie"
    OVA = "ova"
    SPECIAL = "special"
    POPULARITY = "bypopularity"
    FAVOURITE = "favorite"
    NONE = ""


@dataclass
class Date(JsonModel):
    day: int = 0
    month: int = 0
    year: int = 0


@dataclass
class Prop(JsonModel):
    json_aliases: ClassVar[dict[str, str]] = {"from_": "from"}

    from_: Date = field(default_factory=Date)
    to: Date = field(default_factory=Date)


@dataclass
class Aired(JsonModel):
    json_aliases: ClassVar[dict[str, str]] = {"from_": "from"}

    from_: str = ""
    to: str = ""
    prop: Prop = field(default_factory=Prop)
    string: str = ""


@dataclass
class Related(JsonModel):
    json_aliases: ClassVar[dict[str, str]] = {
        "adaptation": "Adaptation",
        "side_story": "Side story",
        "summary": "Summary",
    }

    adaptation: list[TypedMALItem] = field(default_factory=list)
    side_story: list[TypedMALItem] = field(default_factory=list)
    summary: list[TypedMALItem] = field(default_factory=list)


@dataclass
class Anime(CachedResponse, MALEntity):
    """A single anime with all its canonical details."""

    mal_type: ClassVar[str] = MALType.ANIME

    url: str = ""
    image_url: str = ""
    trailer_url: str = ""
    title: str = ""
    title_english: str = ""
    title_japanese: str = ""
    title_synonyms: list[str] = field(default_factory=list)
    type: str = ""
    source: str = ""
    episodes: int = 0
    status: str = ""
    airing: bool = False
    aired: Aired = field(default_factory=Aired)
    duration: str = ""
    rating: str = ""
    score: float = 0.0
    scored_by: int = 0
    rank: int = 0
    popularity: int = 0
    members: int = 0
    favorites: int = 0
    synopsis: str = ""
    background: str = ""
    premiered: str = ""
    broadcast: str = ""
    related: Related = field(default_factory=Related)
    producers: list[TypedMALItem] = field(default_factory=list)
    licensors: list[TypedMALItem] = field(default_factory=list)
    studios: list[TypedMALItem] = field(default_factory=list)
    genres: list[TypedMALItem] = field(default_factory=list)
    opening_themes: list[str] = field(default_factory=list)
    ending_themes: list[str] = field(default_factory=list)


@dataclass
class Staff(MALEntity):
    """A staff member or voice actor."""

    mal_type: ClassVar[str] = MALType.PERSON

    name: str = ""
    url: str = ""
    image_url: str = ""
    language: Language | None = None
    positions: list[str] = field(default_factory=list)


@dataclass
class Character(MALEntity):
    mal_type: ClassVar[str] = MALType.CHARACTER

    url: str = ""
    image_url: str = ""
    name: str = ""
    role: str = ""
    voice_actors: list[Staff] = field(default_factory=list)


@dataclass
class CharacterStaff(CachedResponse):
    characters: list[Character] = field(default_factory=list)
    staff: list[Staff] = field(default_factory=list)


@dataclass
class Episode(JsonModel):
    episode_id: int = 0
    title: str = ""
    title_japanese: str = ""
    title_romanji: str = ""
    aired: str = ""
    filler: bool = False
    recap: bool = False
    video_url: Any = None
    forum_url: str = ""


@dataclass
class Episodes(CachedResponse):
    episodes_last_page: int = 0
    episodes: list[Episode] = field(default_factory=list)


@dataclass
class Recommendation(MALEntity):
    mal_type: ClassVar[str] = MALType.ANIME

    url: str = ""
    image_url: str = ""
    recommendation_url: str = ""
    title: str = ""
    recommendation_count: int = 0


@dataclass
class Recommendations(CachedResponse):
    recommendations: list[Recommendation] = field(default_factory=list)


@dataclass
class Query:
    """Search criteria; empty criteria are not sent."""

    q: str = ""
    page: int = 0
    type: str = ""
    status: str = ""
    rated: str = ""
    genre: int = 0
    score: float = 0.0
    genre_exclude: bool = False
    limit: int = 0
    order: str = ""
    sort: str = ""
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
    mal_type: ClassVar[str] = MALType.ANIME

    url: str = ""
    image_url: str = ""
    title: str = ""
    airing: bool = False
    synopsis: str = ""
    type: str = ""
    episodes: int = 0
    score: float = 0.0
    start_date: str = ""
    end_date: str | None = None
    members: int = 0
    rated: str = ""


@dataclass
class SearchResult(CachedResponse):
    results: list[Result] = field(default_factory=list)
    last_page: int = 0


@dataclass
class TopElement(MALEntity):
    mal_type: ClassVar[str] = MALType.ANIME

    rank: int = 0
    title: str = ""
    url: str = ""
    image_url: str = ""
    type: str = ""
    episodes: int = 0
    start_date: str = ""
    end_date: str | None = None
    members: int = 0
    score: float = 0.0


@dataclass
class Top(CachedResponse):
    top: list[TopElement] = field(default_factory=list)


@dataclass
class EpisodeInfo(JsonModel):
    title: str = ""
    episode: str = ""
    url: str = ""
    image_url: str = ""


@dataclass
class Promo(JsonModel):
    title: str = ""
    image_url: str = ""
    video_url: str = ""


@dataclass
class Videos(CachedResponse):
    promo: list[Promo] = field(default_factory=list)
    episodes: list[EpisodeInfo] = field(default_factory=list)


def get_anime(item: MALItem) -> Anime:
    """The canonical details of the anime identified by ``item``."""
    return fetch(Anime, f"/anime/{item.get_id()}")


def get_character_staff(item: MALItem) -> CharacterStaff:
    """Characters and staff of the anime identified by ``item``."""
    return fetch(CharacterStaff, f"/anime/{item.get_id()}/characters_staff")


def get_episodes(item: MALItem) -> Episodes:
    """Episode list of the anime identified by ``item``."""
    return fetch(Episodes, f"/anime/{item.get_id()}/episodes")


def get_recommendations(item: MALItem) -> Recommendations:
    """Anime recommended to fans of ``item``."""
    return fetch(Recommendations, f"/anime/{item.get_id()}/recommendations")


def search(query: Query) -> SearchResult:
    """Search anime; a missing page number means the first page."""
    if not query.page:
        query = replace(query, page=1)
    return fetch(SearchResult, "/search/anime", query.to_params())


def get_top(page: int, subtype: SubType | str = SubType.NONE) -> Top:
    """One page of the top anime ranking, optionally a sub-list of it."""
    return fetch(Top, f"/top/anime/{page}/{subtype}")


def get_videos(item: MALItem) -> Videos:
    """Promotional and episode videos of the anime identified by ``item``."""
    return fetch(Videos, f"/anime/{item.get_id()}/videos")