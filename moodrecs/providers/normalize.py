"""Normalization of raw provider records into ContentItems."""

import re
from datetime import date
from enum import Enum
from typing import Any, Callable

from moodrecs.config import config
from moodrecs.core.contracts import ContentItem, ContentType, coerce_float
from moodrecs.logging import get_logger
from moodrecs.providers.genres import collect_tmdb_genres
from moodrecs.providers.heuristics import (
    infer_book_cognitive_load,
    infer_book_intensity,
    infer_book_novelty,
    infer_book_tags,
    infer_cognitive_load,
    infer_intensity,
    infer_novelty,
    infer_tags,
    normalize_popularity,
    normalize_rating,
)

logger = get_logger(__name__)

TMDB_WEB_URL = "https://www.themoviedb.org"
TMDB_IMAGE_URL = "https://image.tmdb.org/t/p/w500"
OPEN_LIBRARY_URL = "https://openlibrary.org"
OPEN_LIBRARY_COVER_URL = "https://covers.openlibrary.org/b/id"

BOOK_POPULARITY = 0.5
# Missing or malformed numeric attributes on curated records
CURATED_DEFAULT = 0.5

_NON_ALNUM = re.compile(r"[^a-zA-Z0-9]")


class ProviderKind(str, Enum):
    """Shapes of raw records accepted by :func:`normalize`."""

    TMDB_MOVIE = "tmdb_movie"
    TMDB_TV = "tmdb_tv"
    OPEN_LIBRARY = "open_library"
    CURATED = "curated"


class MissingIdentifierError(ValueError):
    """Raised when a raw record has no usable stable identifier."""

    def __init__(self, provider_kind: str, message: str | None = None):
        super().__init__(message or f"{provider_kind} record has no usable identifier")
        self.provider_kind = provider_kind


def _lower(text: Any) -> str:
    return str(text).lower() if text else ""


def _tmdb_id(record: dict[str, Any], kind: ProviderKind) -> str:
    tmdb_id = record.get("id")
    if tmdb_id is None or str(tmdb_id).strip() == "":
        logger.warning(
            f"Dropping record without id: title={record.get('title') or record.get('name')!r}",
            extra={"provider_kind": kind.value},
        )
        raise MissingIdentifierError(kind.value)
    return str(tmdb_id).strip()


def _poster_url(record: dict[str, Any]) -> str | None:
    poster_path = record.get("poster_path")
    return f"{TMDB_IMAGE_URL}{poster_path}" if poster_path else None


def _positive_minutes(value: Any) -> int | None:
    try:
        minutes = int(value)
    except (TypeError, ValueError):
        return None
    return minutes if minutes > 0 else None


def _normalize_tmdb(
    record: dict[str, Any],
    kind: ProviderKind,
    title: str,
    release_date: str | None,
    duration_min: int | None,
    today: date | None,
) -> ContentItem:
    tmdb_id = _tmdb_id(record, kind)
    media = "movie" if kind == ProviderKind.TMDB_MOVIE else "tv"

    genres = collect_tmdb_genres(record)
    overview = record.get("overview") or None
    description = _lower(overview)
    lower_title = _lower(title)

    return ContentItem(
        id=f"{kind.value}_{tmdb_id}",
        content_type=ContentType.WATCH,
        title=title,
        source="tmdb",
        tags=tuple(infer_tags(genres, description, lower_title)),
        genres=tuple(genres),
        intensity=infer_intensity(genres, description),
        cognitive_load=infer_cognitive_load(genres, description),
        novelty=infer_novelty(release_date, genres, today),
        duration_min=duration_min,
        popularity=normalize_popularity(record.get("popularity"), config.recs_popularity_divisor),
        rating=normalize_rating(record.get("vote_average")),
        link=f"{TMDB_WEB_URL}/{media}/{tmdb_id}",
        description=overview,
        image_url=_poster_url(record),
    )


def normalize_tmdb_movie(record: dict[str, Any], today: date | None = None) -> ContentItem:
    """Normalize a TMDB movie record (search/discover or details payload)."""
    return _normalize_tmdb(
        record,
        ProviderKind.TMDB_MOVIE,
        title=record.get("title") or "Untitled",
        release_date=record.get("release_date"),
        duration_min=_positive_minutes(record.get("runtime")),
        today=today,
    )


def normalize_tmdb_tv(record: dict[str, Any], today: date | None = None) -> ContentItem:
    """Normalize a TMDB TV record.

    Duration is the first ``episode_run_time`` entry (a bare number is also
    accepted), falling back to the configured episode length.
    """
    runtimes = record.get("episode_run_time")
    if isinstance(runtimes, (list, tuple)):
        runtimes = runtimes[0] if runtimes else None
    duration = _positive_minutes(runtimes)

    return _normalize_tmdb(
        record,
        ProviderKind.TMDB_TV,
        title=record.get("name") or record.get("title") or "Untitled",
        release_date=record.get("first_air_date"),
        duration_min=duration or config.recs_tv_episode_min,
        today=today,
    )


def normalize_open_library_book(record: dict[str, Any], today: date | None = None) -> ContentItem:
    """Normalize an Open Library search doc.

    The identifier is the work ``key``, falling back to the first ISBN.
    """
    isbns = record.get("isbn") or []
    provider_id = record.get("key") or (isbns[0] if isbns else None)
    if not provider_id:
        logger.warning(
            f"Dropping record without key or isbn: title={record.get('title')!r}",
            extra={"provider_kind": ProviderKind.OPEN_LIBRARY.value},
        )
        raise MissingIdentifierError(ProviderKind.OPEN_LIBRARY.value, "Open Library doc missing key and isbn")

    title = record.get("title") or "Untitled"
    subjects = [str(s).lower() for s in record.get("subject") or []]

    first_sentence = record.get("first_sentence")
    if isinstance(first_sentence, list):
        description = " ".join(str(s) for s in first_sentence) or None
    else:
        description = first_sentence or None
    lower_desc = _lower(description)

    genres = list(dict.fromkeys(subjects[: config.recs_book_max_genres]))
    cover_id = record.get("cover_i")
    key = record.get("key")

    return ContentItem(
        id=f"open_library_{_NON_ALNUM.sub('_', str(provider_id))}",
        content_type=ContentType.READ,
        title=title,
        source="open_library",
        tags=tuple(infer_book_tags(subjects, lower_desc, _lower(title))),
        genres=tuple(genres),
        intensity=infer_book_intensity(subjects, lower_desc),
        cognitive_load=infer_book_cognitive_load(subjects, lower_desc),
        novelty=infer_book_novelty(subjects),
        duration_min=config.recs_book_duration_min,
        popularity=BOOK_POPULARITY,
        rating=None,
        link=f"{OPEN_LIBRARY_URL}{key}" if key else None,
        description=description,
        image_url=f"{OPEN_LIBRARY_COVER_URL}/{cover_id}-L.jpg" if cover_id else None,
    )


def normalize_curated(record: dict[str, Any], today: date | None = None) -> ContentItem:
    """Normalize an internally authored practice with explicit attributes.

    The identifier is ``id``, falling back to ``slug``.
    """
    provider_id = record.get("id") or record.get("slug")
    if not provider_id:
        logger.warning(
            f"Dropping record without id or slug: title={record.get('title')!r}",
            extra={"provider_kind": ProviderKind.CURATED.value},
        )
        raise MissingIdentifierError(ProviderKind.CURATED.value)

    tags = [str(t).lower().strip() for t in record.get("tags") or [] if str(t).strip()]
    genres = [str(g).lower().strip() for g in record.get("genres") or [] if str(g).strip()]

    return ContentItem(
        id=f"curated_{provider_id}",
        content_type=ContentType(record.get("type") or record.get("content_type") or "reset"),
        title=record.get("title") or "Untitled",
        source=record.get("source") or "curated",
        tags=tuple(dict.fromkeys(tags)),
        genres=tuple(dict.fromkeys(genres)),
        intensity=coerce_float(record.get("intensity"), CURATED_DEFAULT),
        cognitive_load=coerce_float(record.get("cognitive_load"), CURATED_DEFAULT),
        novelty=coerce_float(record.get("novelty"), CURATED_DEFAULT),
        duration_min=_positive_minutes(record.get("duration_min")),
        popularity=coerce_float(record.get("popularity"), CURATED_DEFAULT),
        rating=coerce_float(record.get("rating"), None),
        link=record.get("link"),
        description=record.get("description"),
        image_url=record.get("image_url"),
    )


_NORMALIZERS: dict[ProviderKind, Callable[[dict[str, Any], date | None], ContentItem]] = {
    ProviderKind.TMDB_MOVIE: normalize_tmdb_movie,
    ProviderKind.TMDB_TV: normalize_tmdb_tv,
    ProviderKind.OPEN_LIBRARY: normalize_open_library_book,
    ProviderKind.CURATED: normalize_curated,
}


def normalize(
    raw_record: dict[str, Any],
    provider_kind: ProviderKind | str,
    today: date | None = None,
) -> ContentItem:
    """Convert one raw provider record into a ContentItem.

    Pure function of its inputs; ``today`` pins the clock used for recency.

    Args:
        raw_record: Provider payload
        provider_kind: Which provider shape the record has
        today: Reference date for novelty (defaults to today)

    Returns:
        Normalized ContentItem

    Raises:
        MissingIdentifierError: If the record has no usable identifier
        ValueError: If provider_kind is not recognised
    """
    kind = ProviderKind(provider_kind)
    item = _NORMALIZERS[kind](raw_record, today)
    logger.debug("Normalized record", extra={"provider_kind": kind.value, "item_id": item.id})
    return item
