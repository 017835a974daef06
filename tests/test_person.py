from urllib.parse import parse_qs, urlsplit

import pytest
import responses

from jikanwrap import cache, person
from jikanwrap.cache import ApiError

BASE = "https://api.jikan.moe/v3"


@pytest.fixture(autouse=True)
def isolated_cache(tmp_path, monkeypatch):
    monkeypatch.setattr(cache.config, "cache_dir", tmp_path)
    monkeypatch.setattr(cache.config, "api", BASE)
    monkeypatch.setattr(cache, "MIN_UNCACHED_INTERVAL", 0)
    cache.flush_memory_cache()


@pytest.fixture
def mocked():
    with responses.RequestsMock() as rsps:
        yield rsps


def test_get_person_decodes_nested_roles(mocked):
    mocked.get(
        f"{BASE}/person/5",
        json={
            "request_hash": "hash",
            "request_cached": False,
            "mal_id": 5,
            "name": "Jane",
            "alternate_names": ["J"],
            "voice_acting_roles": [
                {
                    "role": "Main",
                    "anime": {"mal_id": 10, "name": "Show"},
                    "character": {"mal_id": 20, "name": "Hero"},
                }
            ],
            "anime_staff_positions": [
                {"position": "Theme Song Performance", "anime": {"mal_id": 11}}
            ],
            "published_manga": [{"position": "Story", "manga": {"mal_id": 30}}],
        },
    )
    result = person.get_person(person.Person(mal_id=5))
    assert result.name == "Jane"
    assert result.get_id() == 5
    assert result.get_type() == "person"
    role = result.voice_acting_roles[0]
    assert role.role == person.Role.MAIN
    assert role.character.get_id() == 20
    assert role.character.get_type() == "character"
    assert role.anime.get_type() == "anime"
    assert result.anime_staff_positions[0].position == person.Position.THEME_SONG_PERFORMANCE
    assert result.published_manga[0].manga.get_type() == "manga"
    assert result.alternate_names == ["J"]


def test_query_to_params_skips_empty():
    assert person.Query().to_params() == {}
    params = person.Query(q="Jane", genre_exclude=True, limit=5).to_params()
    assert params == {"q": "Jane", "genre_exclude": "true", "limit": 5}


def test_search_defaults_to_first_page(mocked):
    mocked.get(
        f"{BASE}/search/people",
        json={"results": [{"mal_id": 1, "name": "Jane"}], "last_page": 1},
    )
    query = person.Query(q="Jane", limit=5)
    result = person.search(query)
    assert [r.name for r in result.results] == ["Jane"]
    assert result.results[0].get_type() == "person"
    sent = parse_qs(urlsplit(mocked.calls[0].request.url).query)
    assert sent == {"q": ["Jane"], "page": ["1"], "limit": ["5"]}
    assert query.page == 0


def test_get_top_allows_null_kanji(mocked):
    mocked.get(
        f"{BASE}/top/people/2",
        json={"top": [{"mal_id": 3, "rank": 1, "title": "Jane", "name_kanji": None}]},
    )
    top = person.get_top(2)
    assert top.top[0].name_kanji is None
    assert top.top[0].title == "Jane"
    assert top.top[0].get_id() == 3


def test_not_found_raises(mocked):
    mocked.get(f"{BASE}/person/2", status=404, json={})
    with pytest.raises(ApiError, match="resource not found"):
        person.get_person(person.Person(mal_id=2))