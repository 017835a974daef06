# jikanwrap

A Python client for the Jikan API, the unofficial MyAnimeList API.

It gives you:

- dataclass models for anime, people, clubs, magazines, genres, seasons,
  schedules, studios and users, decoded from the API's JSON;
- a response cache kept on disk, and optionally in memory, with ETag
  revalidation once an entry is older than the cache lifetime;
- a short pause after any request that the remote service did not answer
  from its own cache;
- a rate-limited client for the v4 endpoints, and a small WSGI service that
  searches anime, looks up a single anime and lists the top anime.

## Looking things up

Every lookup function takes any object with `get_id()` and `get_type()`
(a `jikanwrap.common.MALItem`). The models the functions return are such
objects too, so one call can feed the next:

```python
from jikanwrap import anime

made_in_abyss = anime.get_anime(anime.Anime(mal_id=34599))
print(made_in_abyss.title)

episodes = anime.get_episodes(made_in_abyss)
staff = anime.get_character_staff(made_in_abyss)
recommendations = anime.get_recommendations(made_in_abyss)
videos = anime.get_videos(made_in_abyss)
```

Searches take a `Query`. Fields left empty are not sent, and the page is 1
when none is given:

```python
from jikanwrap import anime

result = anime.search(anime.Query(q="made in abyss", limit=1, genre=anime.AnimeGenre.ADVENTURE))
for entry in result.results:
    print(entry.mal_id, entry.title)

top_movies = anime.get_top(1, anime.SubType.MOVIE)
```

Data that every item kind has — forum topics, news, pictures, reviews,
statistics and extra information — is fetched with the functions in
`jikanwrap.common`:

```python
from jikanwrap import common

stats = common.get_stats(made_in_abyss)
news = common.get_news(made_in_abyss)
forum = common.get_forum(made_in_abyss)
```

The other modules:

- `jikanwrap.person`: `get_person`, `search`, `get_top`;
- `jikanwrap.club`: `get_club`, `get_members`;
- `jikanwrap.magazine`: `get_magazine`;
- `jikanwrap.genre`: `get_anime(genre, page)`;
- `jikanwrap.season`: `get_season`, `get_season_later`, `get_schedule`;
- `jikanwrap.studio`: `get_studio`;
- `jikanwrap.user`: `get_friends`, `get_history`, `get_anime_list`,
  `get_manga_list`;
- `jikanwrap.mal_types.MALType`: the item kinds used in API paths.

`genre.get_anime`, `user.get_anime_list` and `user.get_manga_list` always
fetch fresh data and bypass the cache; everything else goes through it.

## Errors

A failed request raises `jikanwrap.cache.ApiError`: for example when the
service answers 404 ("resource not found"), 400 ("bad request"), 405, 429 or
500, when the network fails, or when a cache entry cannot be read or written.
A body that does not fit the model raises `ValueError`.

## The cache

Settings live in `jikanwrap.cache.config`, a `Config` with `api`,
`cache_dir` (the system temporary directory by default), `cache_lifetime`
(thirty minutes by default) and `use_memory_cache` (off by default).

Each entry is a file named after a hash of the endpoint and its parameters.
An entry is served as-is until it is older than the lifetime; then it is
revalidated with its ETag and its timestamp renewed.

- `jikanwrap.cache.lifetime_context(lifetime)` is a context manager that
  changes the lifetime (a `timedelta` or seconds) for the calls made inside
  it. A short lifetime forces revalidation.
- `jikanwrap.cache.flush_memory_cache()` empties the in-memory layer.
- `jikanwrap.cache.cached_get(url, params)` is the underlying GET, returning
  a `CachedRequest` whose `to_json()` decodes the body.

## The search service

`jikanwrap.server.create_app()` builds a WSGI application that serves:

- `GET /api/anime/search?q=...&limit=...&page=...`
- `GET /api/anime/<id>`
- `GET /api/anime/top?filter=...&limit=...&page=...`

`limit` defaults to 25 and must be between 1 and 100, otherwise 25 is used;
`page` defaults to 1. Other methods get 405, a missing `q` or a bad id gets
400, an upstream failure gets 500, and unknown paths get 404.

Answers are JSON. A successful answer has `success` and `data`, plus
`count`, `total_count`, `page`, `total_pages` and `query_time` where they are
not empty. An error answer has a single `error` field.

The service reaches the v4 API through `jikanwrap.client.JikanClient`, which
leaves at least one second between calls and raises `JikanClientError` on
failure. The same lookups are available directly in
`jikanwrap.anime_service` (`search_anime`, `get_anime_details`,
`get_top_anime`). Any WSGI server can host the application, for instance the
standard library's:

```python
from wsgiref.simple_server import make_server
from jikanwrap.server import create_app

with make_server("", 8080, create_app()) as httpd:
    httpd.serve_forever()
```

## What is not included

- There are no manga lookups (manga details, search, characters,
  recommendations or top lists) and no character lookups (character details
  or the character ranking). Manga and characters appear only as references
  inside other models, and through `jikanwrap.magazine` and the generic
  functions in `jikanwrap.common`.
- There is no command-line program and no HTML front end; the service
  answers JSON only and must be started from Python as shown above.