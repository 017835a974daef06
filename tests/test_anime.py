import pytest
import responses
from responses import matchers

from jikanwrap import anime, cache
from jikanwrap.anime import (
    Anime,
    AnimeGenre,
    Language,
    Order,
    Query,
    Role,
    SubType,
)
from jikanwrap.cache import ApiError

BASE = "https://api.jikan.moe/v3"
MIA_ID = 34599


@pytest.fixture
def rsps(tmp_path, monkeypatch):
    monkeypatch.setattr(cache.config, "cache_dir", tmp_path)
    monkeypatch.setattr(cache.config, "api", BASE)
    monkeypatch.setattr(cache.config, "use_memory_cache", False)
    monkeypatch.setattr(cache, "MIN_UNCACHED_INTERVAL", 0.0)
    with responses.RequestsMock() as mock:
        yield mock


def _anime_payload():
    return {
        "request_hash": "request:anime:abc",
        "request_cached": False,
        "request_cache_expiry": 43200,
        "mal_id": MIA_ID,
        "title": "Made in Abyss",
        "episodes": 13,
        "score": 8.7,
        "airing": False,
        "aired": {
            "from": "2017-07-07T00:00:00+00:00",
            "to": "2017-09-29T00:00:00+00:00",
            "prop": {
                "from": {"day": 7, "month": 7, "year": 2017},
                "to": {"day": 29, "month": 9, "year": 2017},
            },
            "string": "Jul 7, 2017 to Sep 29, 2017",
        },
        "related": {
            "Adaptation": [
                {"mal_id": 91941, "type": "manga", "name": "Made in Abyss", "url": ""}
            ],
            "Side story": [],
        },
        "studios": [
            {"mal_id": 859, "type": "anime", "name": "Kinema Citrus", "url": ""}
        ],
        "title_synonyms": None,
    }


def test_get_anime_decodes_details(rsps):
    rsps.add(responses.GET, f"{BASE}/anime/{MIA_ID}", json=_anime_payload())
    mia = anime.get_anime(Anime(mal_id=MIA_ID))
    assert mia.get_type() == "anime"
    assert mia.get_id() == MIA_ID
    assert mia.mal_id == MIA_ID
    assert mia.title == "Made in Abyss"
    assert mia.studios[0].name == "Kinema Citrus"
    assert mia.studios[0].get_id() == 859
    assert mia.studios[0].get_type() == "anime"
    assert mia.aired.prop.from_.year == 2017
    assert mia.aired.prop.to.month == 9
    assert mia.aired.from_.startswith("2017-07-07")
    assert mia.related.adaptation[0].mal_id == 91941
    assert mia.related.side_story == []
    assert mia.title_synonyms == []
    assert mia.request_cached is False


def test_get_anime_not_found_raises(rsps):
    rsps.add(responses.GET, f"{BASE}/anime/2", status=404, json={"error": "x"})
    with pytest.raises(ApiError, match="resource not found"):
        anime.get_anime(Anime(mal_id=2))


def test_search_sends_params_and_defaults_page(rsps):
    rsps.add(
        responses.GET,
        f"{BASE}/search/anime",
        json={"results": [{"mal_id": MIA_ID, "title": "Made in Abyss"}], "last_page": 1},
        match=[
            matchers.query_param_matcher(
                {"q": "made in abyss", "limit": "1", "genre": "2", "page": "1"}
            )
        ],
    )
    query = Query(q="made in abyss", limit=1, genre=AnimeGenre.ADVENTURE)
    result = anime.search(query)
    assert len(result.results) == 1
    assert result.results[0].mal_id == MIA_ID
    assert result.results[0].get_type() == "anime"
    assert query.page == 0


def test_repeated_search_is_served_from_cache(rsps):
    rsps.add(
        responses.GET,
        f"{BASE}/search/anime",
        json={"results": [{"mal_id": MIA_ID, "title": "Made in Abyss"}]},
    )
    query = Query(q="made in abyss", limit=1, genre=AnimeGenre.ADVENTURE)
    first = anime.search(query)
    second = anime.search(query)
    assert second.results[0].mal_id == first.results[0].mal_id
    assert len(rsps.calls) == 1


def test_search_with_order(rsps):
    rsps.add(
        responses.GET,
        f"{BASE}/search/anime",
        json={"results": [{"mal_id": 5114, "title": "FMAB", "members": 3000000}]},
        match=[matchers.query_param_matcher({"q": "FMAB", "order": "score", "page": "1"})],
    )
    result = anime.search(Query(q="FMAB", order=Order.SCORE))
    assert result.results[0].members == 3000000


def test_query_to_params_omits_empty_values():
    params = Query(q="naruto", genre=AnimeGenre.JOSEI, score=7.0, genre_exclude=True).to_params()
    assert params == {"q": "naruto", "genre": 43, "score": 7, "genre_exclude": "true"}


def test_query_to_params_empty():
    assert Query().to_params() == {}


def test_get_character_staff(rsps):
    rsps.add(
        responses.GET,
        f"{BASE}/anime/{MIA_ID}/characters_staff",
        json={
            "characters": [
                {
                    "mal_id": 140097,
                    "name": "Riko",
                    "role": "Main",
                    "voice_actors": [
                        {"mal_id": 1, "name": "Someone", "language": "Japanese"}
                    ],
                }
            ],
            "staff": [{"mal_id": 2, "name": "Staffer", "positions": ["Director"]}],
        },
    )
    staff = anime.get_character_staff(Anime(mal_id=MIA_ID))
    assert len(staff.characters) == 1
    assert staff.characters[0].name == "Riko"
    assert staff.characters[0].role == Role.MAIN
    assert staff.characters[0].voice_actors[0].language == Language.JAPANESE
    assert staff.characters[0].voice_actors[0].get_type() == "person"
    assert staff.staff[0].language is None
    assert staff.staff[0].positions == ["Director"]


def test_get_episodes(rsps):
    episodes = [{"episode_id": n, "title": f"Episode {n}"} for n in range(1, 14)]
    episodes[0]["title"] = "The City of the Great Pit"
    rsps.add(
        responses.GET,
        f"{BASE}/anime/{MIA_ID}/episodes",
        json={"episodes_last_page": 1, "episodes": episodes},
    )
    result = anime.get_episodes(Anime(mal_id=MIA_ID))
    assert len(result.episodes) == 13
    assert result.episodes[0].title == "The City of the Great Pit"
    assert result.episodes[0].video_url is None


def test_get_recommendations(rsps):
    recs = [{"mal_id": n, "title": f"Rec {n}", "recommendation_count": n} for n in range(20)]
    rsps.add(
        responses.GET,
        f"{BASE}/anime/{MIA_ID}/recommendations",
        json={"recommendations": recs},
    )
    result = anime.get_recommendations(Anime(mal_id=MIA_ID))
    assert len(result.recommendations) > 12
    assert result.recommendations[3].recommendation_count == 3


def test_get_top_without_subtype(rsps):
    rsps.add(
        responses.GET,
        f"{BASE}/top/anime/1/",
        json={"top": [{"mal_id": 5114, "rank": 1, "title": "FMAB", "end_date": None}]},
    )
    result = anime.get_top(1, "")
    assert len(result.top) > 0
    assert result.top[0].rank == 1
    assert result.top[0].end_date is None


def test_get_top_with_subtype(rsps):
    rsps.add(
        responses.GET,
        f"{BASE}/top/anime/1/movie",
        json={"top": [{"mal_id": 28851, "rank": 1, "title": "A Movie", "type": "Movie"}]},
    )
    result = anime.get_top(1, SubType.MOVIE)
    assert result.top[0].type == "Movie"
    assert result.top[0].get_id() == 28851


def test_get_videos(rsps):
    rsps.add(
        responses.GET,
        f"{BASE}/anime/1/videos",
        json={
            "promo": [{"title": "PV", "video_url": "https://video.example.com/1"}],
            "episodes": [{"title": "Ep", "episode": "Episode 1"}],
        },
    )
    vids = anime.get_videos(Anime(mal_id=1))
    assert len(vids.promo) > 0
    assert vids.episodes[0].episode == "Episode 1"


def test_malformed_payload_raises(rsps):
    rsps.add(responses.GET, f"{BASE}/anime/7", json={"mal_id": "seven"})
    with pytest.raises(ValueError):
        anime.get_anime(Anime(mal_id=7))