"""Season endpoints: seasonal anime lists and the weekly broadcast schedule."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import ClassVar

from jikanwrap import common
from jikanwrap.common import CachedResponse, MALEntity, fetch
from jikanwrap.mal_types import MALType


class SeasonName(StrEnum):
    WINTER = "winter"
    SUMMER = "summer"
    FALL = "fall"
    SPRING = "spring"


class Day(StrEnum):
    """Days of the broadcast schedule; ``ALL`` asks for the whole week."""

    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"
    ALL = ""


class Source(StrEnum):
    CARD_GAME = "Card game"
    EMPTY = "-"
    GAME = "Game"
    LIGHT_NOVEL = "Light novel"
    MANGA = "Manga"
    NOVEL = "Novel"
    ORIGINAL = "Original"
    OTHER = "Other"
    PICTURE_BOOK = "Picture book"
    FOUR_KOMA_MANGA = "4-koma manga"
    VISUAL_NOVEL = "Visual novel"
    WEB_MANGA = "Web manga"


@dataclass
class AnimeElement(MALEntity):
    """An anime airing in a season or listed in the schedule."""

    mal_type: ClassVar[str] = MALType.ANIME

    url: str = ""
    title: str = ""
    image_url: str = ""
    synopsis: str = ""
    type: str = ""
    airing_start: str = ""
    episodes: int = 0
    members: int = 0
    genres: list[common.Genre] = field(default_factory=list)
    source: str = ""
    producers: list[common.Genre] = field(default_factory=list)
    score: float = 0.0
    licensors: list[str] = field(default_factory=list)
    r18: bool = False
    kids: bool = False
    continuing: bool = False


@dataclass
class Season(CachedResponse):
    season_name: str = ""
    season_year: int = 0
    anime: list[AnimeElement] = field(default_factory=list)


@dataclass
class Schedule(CachedResponse):
    monday: list[AnimeElement] = field(default_factory=list)
    tuesday: list[AnimeElement] = field(default_factory=list)
    wednesday: list[AnimeElement] = field(default_factory=list)
    thursday: list[AnimeElement] = field(default_factory=list)
    friday: list[AnimeElement] = field(default_factory=list)
    saturday: list[AnimeElement] = field(default_factory=list)
    sunday: list[AnimeElement] = field(default_factory=list)
    other: list[AnimeElement] = field(default_factory=list)
    unknown: list[AnimeElement] = field(default_factory=list)


def get_season_later() -> Season:
    """Anime announced for seasons after the upcoming one."""
    return fetch(Season, "/season/later")


def get_season(season: SeasonName | str, year: int) -> Season:
    """The anime of ``season`` in ``year``."""
    return fetch(Season, f"/season/{year}/{season}")


def get_schedule(day: Day | str = Day.ALL) -> Schedule:
    """The broadcast schedule for ``day``, or for the whole week."""
    return fetch(Schedule, f"/schedule/{day}")