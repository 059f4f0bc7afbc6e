"""Provider record normalization."""

from moodrecs.providers.genres import collect_tmdb_genres, genre_ids_to_names
from moodrecs.providers.normalize import (
    MissingIdentifierError,
    ProviderKind,
    normalize,
    normalize_curated,
    normalize_open_library_book,
    normalize_tmdb_movie,
    normalize_tmdb_tv,
)

__all__ = [
    "MissingIdentifierError",
    "ProviderKind",
    "collect_tmdb_genres",
    "genre_ids_to_names",
    "normalize",
    "normalize_curated",
    "normalize_open_library_book",
    "normalize_tmdb_movie",
    "normalize_tmdb_tv",
]
