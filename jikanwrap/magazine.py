"""Magazine endpoint: the manga serialized in a magazine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

from jikanwrap.common import CachedResponse, MALEntity, MALItem, fetch
from jikanwrap.mal_types import MALType


@dataclass
class Meta(MALEntity):
    """A typed reference to a magazine, genre or author."""

    type: str = ""
    name: str = ""
    url: str = ""

    def get_type(self) -> str:
        return "type"


@dataclass
class MangaElement(MALEntity):
    mal_type: ClassVar[str] = MALType.MANGA

    url: str = ""
    title: str = ""
    image_url: str = ""
    synopsis: str = ""
    type: str = ""
    publishing_start: str | None = None
    volumes: int | None = None
    members: int = 0
    genres: list[Meta] = field(default_factory=list)
    authors: list[Meta] = field(default_factory=list)
    score: float | None = None
    serialization: list[str] = field(default_factory=list)


@dataclass
class Magazine(CachedResponse):
    meta: Meta = field(default_factory=Meta)
    manga: list[MangaElement] = field(default_factory=list)


def get_magazine(item: MALItem, page: int) -> Magazine:
    """One page of the manga published by the magazine identified by ``item``."""
    return fetch(Magazine, f"/magazine/{item.get_id()}/{page}")