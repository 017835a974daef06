"""Kinds of items known to MyAnimeList, as used in API paths."""

from enum import StrEnum


class MALType(StrEnum):
    """The type segment used in item URLs such as ``/anime/1``."""

    ANIME = "anime"
    MANGA = "manga"
    PERSON = "person"
    CHARACTER = "character"
    USER = "user"
    PRODUCER = "producer"
    STUDIO = "studio"
    CLUB = "club"