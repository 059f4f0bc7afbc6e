"""Tests for provider record normalization."""

import pytest

from moodrecs.core.contracts import ContentType
from moodrecs.providers import (
    MissingIdentifierError,
    ProviderKind,
    collect_tmdb_genres,
    normalize,
)


def _movie(**overrides):
    record = {
        "id": 550,
        "title": "Quiet Harbor",
        "overview": "A gentle story about a family who run a seaside inn.",
        "release_date": "2025-09-12",
        "genre_ids": [35, 10751],
        "popularity": 250.0,
        "vote_average": 7.6,
        "runtime": 104,
        "poster_path": "/harbor.jpg",
    }
    record.update(overrides)
    return record


def test_normalize_tmdb_movie(today):
    item = normalize(_movie(), ProviderKind.TMDB_MOVIE, today=today)

    assert item.id == "tmdb_movie_550"
    assert item.content_type == ContentType.WATCH
    assert item.source == "tmdb"
    assert item.genres == ("comedy", "family")
    assert item.primary_genre == "comedy"
    assert item.duration_min == 104
    assert item.rating == pytest.approx(0.76)
    assert item.popularity == pytest.approx(0.25)
    assert item.novelty == pytest.approx(0.7)
    assert item.intensity == pytest.approx(0.1)
    assert item.link == "https://www.themoviedb.org/movie/550"
    assert item.image_url == "https://image.tmdb.org/t/p/w500/harbor.jpg"
    assert "light" in item.tags
    assert "gentle" in item.tags


def test_normalize_accepts_kind_string(today):
    item = normalize(_movie(), "tmdb_movie", today=today)

    assert item.id == "tmdb_movie_550"


def test_normalize_is_idempotent(today):
    first = normalize(_movie(), ProviderKind.TMDB_MOVIE, today=today)
    second = normalize(_movie(), ProviderKind.TMDB_MOVIE, today=today)

    assert first == second


def test_normalize_movie_missing_runtime(today):
    item = normalize(_movie(runtime=None), ProviderKind.TMDB_MOVIE, today=today)

    assert item.duration_min is None


def test_normalize_movie_zero_rating(today):
    item = normalize(_movie(vote_average=0), ProviderKind.TMDB_MOVIE, today=today)

    assert item.rating is None


def test_normalize_movie_without_id(today):
    with pytest.raises(MissingIdentifierError) as exc_info:
        normalize(_movie(id=None), ProviderKind.TMDB_MOVIE, today=today)

    assert exc_info.value.provider_kind == "tmdb_movie"


def test_collect_genres_merges_objects_and_ids():
    record = {
        "genres": [{"id": 18, "name": "Drama"}, {"id": 99}],
        "genre_ids": [18, 53, 999999],
    }

    assert collect_tmdb_genres(record) == ["drama", "documentary", "thriller"]


def test_normalize_tmdb_tv(today):
    record = {
        "id": 1399,
        "name": "Northern Lights",
        "overview": "An intense saga.",
        "first_air_date": "2011-04-17",
        "genre_ids": [10765, 18],
        "episode_run_time": [52, 60],
        "vote_average": 8.4,
    }

    item = normalize(record, ProviderKind.TMDB_TV, today=today)

    assert item.id == "tmdb_tv_1399"
    assert item.title == "Northern Lights"
    assert item.genres == ("science fiction", "fantasy", "drama")
    assert item.duration_min == 52
    assert item.link == "https://www.themoviedb.org/tv/1399"
    assert item.novelty == pytest.approx(0.4)


def test_normalize_tmdb_tv_default_episode_length(today):
    record = {"id": 7, "name": "Short Show", "episode_run_time": []}

    item = normalize(record, ProviderKind.TMDB_TV, today=today)

    assert item.duration_min == 45


def test_normalize_open_library_book(today):
    record = {
        "key": "/works/OL27448W",
        "title": "The Quiet Mind",
        "subject": ["Poetry", "Meditation", "Nature", "Spirituality", "Essays", "Zen"],
        "first_sentence": ["A calm morning begins."],
        "cover_i": 12345,
        "isbn": ["9780000000001"],
    }

    item = normalize(record, ProviderKind.OPEN_LIBRARY, today=today)

    assert item.id == "open_library__works_OL27448W"
    assert item.content_type == ContentType.READ
    assert item.source == "open_library"
    assert item.genres == ("poetry", "meditation", "nature", "spirituality", "essays")
    assert item.duration_min == 300
    assert item.popularity == pytest.approx(0.5)
    assert item.rating is None
    assert item.intensity == pytest.approx(0.0)
    assert item.link == "https://openlibrary.org/works/OL27448W"
    assert item.image_url == "https://covers.openlibrary.org/b/id/12345-L.jpg"
    assert item.description == "A calm morning begins."
    assert "beauty" in item.tags
    assert "faith" in item.tags


def test_normalize_open_library_isbn_fallback(today):
    record = {"title": "No Key", "isbn": ["978-0-00-000000-2"]}

    item = normalize(record, ProviderKind.OPEN_LIBRARY, today=today)

    assert item.id == "open_library_978_0_00_000000_2"
    assert item.link is None


def test_normalize_open_library_missing_identifier(today):
    with pytest.raises(MissingIdentifierError):
        normalize({"title": "Anonymous"}, ProviderKind.OPEN_LIBRARY, today=today)


def test_normalize_curated(today):
    record = {
        "slug": "box-breathing",
        "type": "reset",
        "title": "Box breathing",
        "tags": ["Calm", "minimal", "calm"],
        "genres": ["breathing"],
        "intensity": 0.1,
        "cognitive_load": 0.1,
        "novelty": 0.2,
        "duration_min": 5,
    }

    item = normalize(record, ProviderKind.CURATED, today=today)

    assert item.id == "curated_box-breathing"
    assert item.content_type == ContentType.RESET
    assert item.source == "curated"
    assert item.tags == ("calm", "minimal")
    assert item.duration_min == 5
    assert item.intensity == pytest.approx(0.1)


def test_normalize_curated_missing_identifier(today):
    with pytest.raises(MissingIdentifierError):
        normalize({"title": "Nameless"}, ProviderKind.CURATED, today=today)


def test_normalize_unknown_kind(today):
    with pytest.raises(ValueError):
        normalize(_movie(), "spotify", today=today)


def test_normalize_tmdb_tv_scalar_episode_runtime(today):
    record = {"id": 1, "name": "Show", "episode_run_time": 42}

    item = normalize(record, ProviderKind.TMDB_TV, today=today)

    assert item.duration_min == 42


def test_normalize_curated_null_numerics(today):
    """Missing or malformed attributes fall back to defaults instead of raising."""
    record = {
        "id": "x",
        "type": "reset",
        "intensity": None,
        "cognitive_load": "heavy",
        "novelty": 1.7,
        "popularity": None,
        "rating": "n/a",
        "duration_min": "ten",
    }

    item = normalize(record, ProviderKind.CURATED, today=today)

    assert item.intensity == pytest.approx(0.5)
    assert item.cognitive_load == pytest.approx(0.5)
    assert item.novelty == 1.0
    assert item.popularity == pytest.approx(0.5)
    assert item.rating is None
    assert item.duration_min is None
