"""Shared item models, JSON decoding and endpoints that work for any item."""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from types import UnionType
from typing import Any, ClassVar, TypeVar, Union, get_args, get_origin

from jikanwrap import cache
from jikanwrap.mal_types import MALType

M = TypeVar("M", bound="JsonModel")


def _zero(tp: Any) -> Any:
    origin = get_origin(tp)
    if tp is Any or origin in (Union, UnionType):
        return None
    if origin is list:
        return []
    if origin is dict:
        return {}
    return tp()


def _decode(tp: Any, value: Any, where: str) -> Any:
    if tp is Any:
        return value
    origin = get_origin(tp)
    if origin in (Union, UnionType):
        if value is None:
            return None
        inner = [arg for arg in get_args(tp) if arg is not type(None)]
        return _decode(inner[0], value, where)
    if value is None:
        return _zero(tp)
    if origin is list:
        if not isinstance(value, list):
            raise ValueError(f"{where}: expected a list, got {value!r}")
        (item_type,) = get_args(tp)
        return [_decode(item_type, item, where) for item in value]
    if origin is dict:
        if not isinstance(value, Mapping):
            raise ValueError(f"{where}: expected an object, got {value!r}")
        _, item_type = get_args(tp)
        return {str(key): _decode(item_type, item, where) for key, item in value.items()}
    if isinstance(tp, type) and issubclass(tp, JsonModel):
        return tp.from_dict(value)
    if tp is bool:
        if isinstance(value, bool):
            return value
    elif tp is int:
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    elif tp is float:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return float(value)
    elif isinstance(tp, type) and issubclass(tp, str):
        if isinstance(value, str):
            return value
    raise ValueError(f"{where}: cannot decode {value!r} as {getattr(tp, '__name__', tp)}")


class JsonModel:
    """Base for dataclasses decoded from API JSON objects.

    Fields are read from keys of the same name; ``json_aliases`` maps field
    names to differing JSON keys. Missing keys and nulls leave defaults.
    Field annotations must be real types, not strings.
    """

    json_aliases: ClassVar[dict[str, str]] = {}

    @classmethod
    def from_dict(cls: type[M], data: Any) -> M:
        """Build an instance from a decoded JSON object."""
        if not isinstance(data, Mapping):
            raise ValueError(f"cannot decode {type(data).__name__} into {cls.__name__}")
        values = {}
        for item in fields(cls):
            if not item.init:
                continue
            if isinstance(item.type, str):
                raise TypeError(
                    f"{cls.__name__}.{item.name}: annotation {item.type!r} is not a type"
                )
            key = cls.json_aliases.get(item.name, item.name)
            if key in data:
                values[item.name] = _decode(
                    item.type, data[key], f"{cls.__name__}.{item.name}"
                )
        return cls(**values)


class MALItem(ABC):
    """Anything that can be addressed on the API by type and identifier."""

    @abstractmethod
    def get_id(self) -> Any:
        """The identifier used in the item's URL."""

    @abstractmethod
    def get_type(self) -> str:
        """The type segment used in the item's URL."""


@dataclass
class MALEntity(JsonModel, MALItem):
    """An item identified by its numeric ``mal_id``."""

    mal_type: ClassVar[str] = ""

    mal_id: int = 0

    def get_id(self) -> Any:
        return self.mal_id

    def get_type(self) -> str:
        return self.mal_type


@dataclass
class CachedResponse(JsonModel):
    """Fields the API adds to every top-level response."""

    request_hash: str = ""
    request_cached: bool = False
    request_cache_expiry: int = 0


@dataclass
class TypedMALItem(MALEntity):
    """An item reference that carries its own type."""

    type: str = ""
    name: str = ""
    url: str = ""

    def get_type(self) -> str:
        return self.type


@dataclass
class Anime(MALEntity):
    mal_type: ClassVar[str] = MALType.ANIME

    name: str = ""
    url: str = ""
    image_url: str = ""


@dataclass
class Manga(MALEntity):
    mal_type: ClassVar[str] = MALType.MANGA

    name: str = ""
    url: str = ""
    image_url: str = ""


@dataclass
class Character(MALEntity):
    mal_type: ClassVar[str] = MALType.CHARACTER

    name: str = ""
    url: str = ""
    image_url: str = ""


@dataclass
class Person(MALEntity):
    mal_type: ClassVar[str] = MALType.PERSON

    name: str = ""
    url: str = ""
    image_url: str = ""
    language: str = ""


@dataclass
class User(MALEntity):
    """A user, addressed by name rather than by numeric id."""

    mal_type: ClassVar[str] = MALType.USER

    name: str = ""
    url: str = ""
    image_url: str = ""

    def get_id(self) -> Any:
        return self.name


@dataclass
class Member(MALEntity):
    """A club member, addressed by username."""

    mal_type: ClassVar[str] = MALType.USER

    username: str = ""
    url: str = ""
    image_url: str = ""

    def get_id(self) -> Any:
        return self.username


@dataclass
class Genre(MALEntity):
    mal_type: ClassVar[str] = "genre"

    type: str = ""
    name: str = ""
    url: str = ""


@dataclass
class LastPost(JsonModel):
    url: str = ""
    author_name: str = ""
    author_url: str = ""
    date_posted: str = ""


@dataclass
class Topic(JsonModel):
    topic_id: int = 0
    url: str = ""
    title: str = ""
    date_posted: str = ""
    author_name: str = ""
    author_url: str = ""
    replies: int = 0
    last_post: LastPost = field(default_factory=LastPost)


@dataclass
class Forum(CachedResponse):
    topics: list[Topic] = field(default_factory=list)


@dataclass
class Info(CachedResponse):
    json_aliases: ClassVar[dict[str, str]] = {"info": "moreinfo"}

    info: str = ""


@dataclass
class Article(JsonModel):
    url: str = ""
    title: str = ""
    date: str = ""
    author_name: str = ""
    author_url: str = ""
    forum_url: str = ""
    image_url: str = ""
    comments: int = 0
    intro: str = ""


@dataclass
class News(CachedResponse):
    articles: list[Article] = field(default_factory=list)


@dataclass
class Picture(JsonModel):
    large: str = ""
    small: str = ""


@dataclass
class Pictures(CachedResponse):
    pictures: list[Picture] = field(default_factory=list)


@dataclass
class Scores(JsonModel):
    overall: int = 0
    story: int = 0
    animation: int = 0
    sound: int = 0
    character: int = 0
    enjoyment: int = 0


@dataclass
class Reviewer(JsonModel):
    url: str = ""
    image_url: str = ""
    username: str = ""
    episodes_seen: int = 0
    scores: Scores = field(default_factory=Scores)


@dataclass
class Review(JsonModel):
    mal_id: int = 0
    url: str = ""
    type: Any = None
    helpful_count: int = 0
    date: str = ""
    reviewer: Reviewer = field(default_factory=Reviewer)
    content: str = ""


@dataclass
class Reviews(CachedResponse):
    reviews: list[Review] = field(default_factory=list)


@dataclass
class Score(JsonModel):
    votes: int = 0
    percentage: float = 0.0


@dataclass
class Stats(CachedResponse):
    watching: int = 0
    completed: int = 0
    on_hold: int = 0
    dropped: int = 0
    plan_to_watch: int = 0
    plan_to_read: int = 0
    total: int = 0
    scores: dict[str, Score] = field(default_factory=dict)


def fetch(model: type[M], path: str, params: Mapping[str, Any] | None = None) -> M:
    """GET ``path`` under the API base through the cache and decode it as ``model``."""
    response = cache.cached_get(cache.config.append_api(path), params)
    return model.from_dict(response.to_json())


def _item_path(item: MALItem, section: str) -> str:
    return f"/{item.get_type()}/{item.get_id()}/{section}"


def get_forum(item: MALItem) -> Forum:
    """Forum topics about ``item``."""
    return fetch(Forum, _item_path(item, "forum"))


def get_info(item: MALItem) -> Info:
    """The "more info" text of ``item``."""
    return fetch(Info, _item_path(item, "moreinfo"))


def get_news(item: MALItem) -> News:
    """News articles about ``item``."""
    return fetch(News, _item_path(item, "news"))


def get_pictures(item: MALItem) -> Pictures:
    """Pictures of ``item``."""
    return fetch(Pictures, _item_path(item, "pictures"))


def get_reviews(item: MALItem) -> Reviews:
    """User reviews of ``item``."""
    return fetch(Reviews, _item_path(item, "reviews"))


def get_stats(item: MALItem) -> Stats:
    """List and score statistics of ``item``."""
    return fetch(Stats, _item_path(item, "stats"))