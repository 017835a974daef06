import pytest
import responses

from jikanwrap import cache, magazine
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


def test_get_magazine_decodes_optional_fields(mocked):
    mocked.get(
        f"{BASE}/magazine/83/1",
        json={
            "meta": {"mal_id": 83, "type": "manga", "name": "Weekly"},
            "manga": [
                {
                    "mal_id": 7,
                    "title": "First",
                    "publishing_start": None,
                    "volumes": None,
                    "score": None,
                    "authors": [{"mal_id": 2, "name": "Author"}],
                },
                {"mal_id": 8, "title": "Second", "volumes": 4, "score": 7.5},
            ],
        },
    )
    result = magazine.get_magazine(magazine.Meta(mal_id=83), 1)
    assert result.meta.name == "Weekly"
    first, second = result.manga
    assert first.volumes is None
    assert first.score is None
    assert first.publishing_start is None
    assert first.authors[0].name == "Author"
    assert second.volumes == 4
    assert second.score == 7.5
    assert second.get_type() == "manga"
    assert second.get_id() == 8


def test_meta_type_is_fixed():
    meta = magazine.Meta(mal_id=1, type="manga")
    assert meta.get_type() == "type"
    assert meta.get_id() == 1


def test_missing_magazine_raises(mocked):
    mocked.get(f"{BASE}/magazine/1/3", status=404, json={})
    with pytest.raises(ApiError, match="resource not found"):
        magazine.get_magazine(magazine.Meta(mal_id=1), 3)