"""Club endpoints: details and member lists."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

from jikanwrap import common
from jikanwrap.common import CachedResponse, MALEntity, MALItem, fetch
from jikanwrap.mal_types import MALType


@dataclass
class Club(CachedResponse, MALEntity):
    """A club with its staff and related entries."""

    mal_type: ClassVar[str] = MALType.CLUB

    url: str = ""
    image_url: str = ""
    title: str = ""
    members_count: int = 0
    pictures_count: int = 0
    category: str = ""
    created: str = ""
    type: str = ""
    staff: list[common.User] = field(default_factory=list)
    anime_relations: list[common.Anime] = field(default_factory=list)
    manga_relations: list[common.Manga] = field(default_factory=list)
    character_relations: list[common.Character] = field(default_factory=list)


@dataclass
class Members(CachedResponse):
    members: list[common.Member] = field(default_factory=list)


def get_club(item: MALItem) -> Club:
    """The details of the club identified by ``item``."""
    return fetch(Club, f"/club/{item.get_id()}")


def get_members(item: MALItem, page: int) -> Members:
    """One page of the members of the club identified by ``item``."""
    return fetch(Members, f"/club/{item.get_id()}/members/{page}")