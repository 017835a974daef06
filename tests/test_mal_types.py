import pytest

from jikanwrap.mal_types import MALType

API_VALUES = [
    "anime",
    "manga",
    "person",
    "character",
    "user",
    "producer",
    "studio",
    "club",
]


def test_members_have_api_values():
    assert [MALType(value).value for value in API_VALUES] == API_VALUES
    assert len(MALType) == len(API_VALUES)


def test_lookup_by_value():
    assert MALType("producer") is MALType.PRODUCER
    assert MALType("anime") is MALType.ANIME


def test_members_compare_equal_to_strings():
    assert MALType("character") == "character"
    assert MALType("user") == "user"


def test_formats_as_plain_value_in_paths():
    assert f"/{MALType('club')}/1" == "/club/1"
    assert str(MALType("manga")) == "manga"


def test_unknown_value_rejected():
    with pytest.raises(ValueError):
        MALType("episode")