"""User endpoints: friends, history and anime or manga lists."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, TypeVar

import requests

from jikanwrap import cache
from jikanwrap.cache import ApiError
from jikanwrap.common import CachedResponse, JsonModel, MALItem, TypedMALItem, fetch
from jikanwrap.mal_types import MALType

M = TypeVar("M", bound=JsonModel)


class HistoryType(StrEnum):
    """Which history to list; ``ALL`` covers both anime and manga."""

    ALL = ""
    MANGA = "manga"
    ANIME = "anime"


class ListFilter(StrEnum):
    ALL = "all"
    WATCHING = "watching"
    READING = "reading"
    COMPLETED = "completed"
    ON_HOLD = "onhold"
    PLAN_TO_WATCH = "plantowatch"
    PLAN_TO_READ = "plantoread"


@dataclass
class Friend(JsonModel):
    """A friend of a user, identified by username."""

    url: str = ""
    username: str = ""
    image_url: str = ""
    last_online: str = ""
    friends_since: str | None = None

    def get_id(self) -> str:
        return self.username

    def get_type(self) -> str:
        return MALType.USER


@dataclass
class Friends(CachedResponse):
    friends: list[Friend] = field(default_factory=list)


@dataclass
class HistoryElement(JsonModel):
    meta: TypedMALItem = field(default_factory=TypedMALItem)
    increment: int = 0
    date: str = ""


@dataclass
class History(CachedResponse):
    history: list[HistoryElement] = field(default_factory=list)


@dataclass
class AnimeListItem(JsonModel):
    mal_id: int = 0
    title: str = ""
    video_url: str = ""
    url: str = ""
    image_url: str = ""
    type: str = ""
    watching_status: int = 0
    score: int = 0
    watched_episodes: int = 0
    total_episodes: int = 0
    airing_status: int = 0
    season_name: Any = None
    season_year: Any = None
    has_episode_video: bool = False
    has_promo_video: bool = False
    has_video: bool = False
    is_rewatching: bool = False
    tags: Any = None
    rating: str = ""
    start_date: str = ""
    end_date: str = ""
    watch_start_date: Any = None
    watch_end_date: Any = None
    days: Any = None
    storage: Any = None
    priority: str = ""
    added_to_list: bool = False
    studios: list[str] = field(default_factory=list)
    licensors: list[str] = field(default_factory=list)


@dataclass
class MangaListItem(JsonModel):
    mal_id: int = 0
    title: str = ""
    url: str = ""
    image_url: str = ""
    type: str = ""
    reading_status: int = 0
    score: int = 0
    read_chapters: int = 0
    read_volumes: int = 0
    total_chapters: int = 0
    total_volumes: int = 0
    publishing_status: int = 0
    is_rereading: bool = False
    tags: Any = None
    start_date: str = ""
    end_date: str = ""
    read_start_date: Any = None
    read_end_date: Any = None
    days: Any = None
    retail: Any = None
    priority: str = ""
    added_to_list: bool = False
    magazines: list[str] = field(default_factory=list)


@dataclass
class AnimeList(CachedResponse):
    anime: list[AnimeListItem] = field(default_factory=list)


@dataclass
class MangaList(CachedResponse):
    manga: list[MangaListItem] = field(default_factory=list)


def _fetch_fresh(model: type[M], path: str) -> M:
    url = cache.config.append_api(path)
    try:
        response = requests.get(url, timeout=cache.REQUEST_TIMEOUT)
    except requests.RequestException as exc:
        raise ApiError(str(exc)) from exc
    try:
        payload = response.json()
    except ValueError as exc:
        raise ApiError(f"cannot decode response: {exc}") from exc
    return model.from_dict(payload)


def get_friends(item: MALItem, page: int) -> Friends:
    """One page of the friends of the user identified by ``item``."""
    return fetch(Friends, f"/user/{item.get_id()}/friends/{page}")


def get_history(item: MALItem, history_type: HistoryType | str = HistoryType.ALL) -> History:
    """Recent list updates of the user identified by ``item``."""
    return fetch(History, f"/user/{item.get_id()}/history/{history_type}")


def get_anime_list(user: MALItem, list_filter: ListFilter | str) -> AnimeList:
    """The anime list of ``user``; always fetched fresh."""
    return _fetch_fresh(AnimeList, f"/user/{user.get_id()}/animelist/{list_filter}")


def get_manga_list(user: MALItem, list_filter: ListFilter | str) -> MangaList:
    """The manga list of ``user``; always fetched fresh."""
    return _fetch_fresh(MangaList, f"/user/{user.get_id()}/mangalist/{list_filter}")