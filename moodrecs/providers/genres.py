"""TMDB genre ids and names."""

from typing import Any

# Combined movie + TV genre map (TMDB genre IDs -> lowercase names)
TMDB_GENRE_MAP: dict[int, str] = {
    28: "action",
    12: "adventure",
    16: "animation",
    35: "comedy",
    80: "crime",
    99: "documentary",
    18: "drama",
    10751: "family",
    14: "fantasy",
    36: "history",
    27: "horror",
    10402: "music",
    9648: "mystery",
    10749: "romance",
    878: "science fiction",
    10770: "tv movie",
    53: "thriller",
    10752: "war",
    37: "western",
    # TV-specific
    10759: "action & adventure",
    10762: "kids",
    10763: "news",
    10764: "reality",
    10765: "sci-fi & fantasy",
    10766: "soap",
    10767: "talk",
    10768: "war & politics",
}

# TV compound genres expanded to the movie genres the scorer knows about
COMPOUND_GENRES: dict[str, tuple[str, ...]] = {
    "action & adventure": ("action", "adventure"),
    "sci-fi & fantasy": ("science fiction", "fantasy"),
    "war & politics": ("war", "politics"),
}


def genre_ids_to_names(genre_ids: list[int]) -> list[str]:
    """Convert TMDB genre IDs to lowercase names, skipping unknown IDs."""
    return [TMDB_GENRE_MAP[gid] for gid in genre_ids if gid in TMDB_GENRE_MAP]


def _expand(name: str) -> tuple[str, ...]:
    return COMPOUND_GENRES.get(name, (name,))


def collect_tmdb_genres(record: dict[str, Any]) -> list[str]:
    """Merge ``genres`` objects and bare ``genre_ids`` into unique lowercase names.

    Order follows first appearance so the primary genre stays stable.
    """
    names: list[str] = []
    for genre in record.get("genres") or []:
        if isinstance(genre, dict):
            name = genre.get("name") or TMDB_GENRE_MAP.get(genre.get("id"), "")
        else:
            name = str(genre)
        if name:
            names.append(name.lower().strip())

    ids = [gid for gid in record.get("genre_ids") or [] if isinstance(gid, int)]
    names.extend(genre_ids_to_names(ids))

    result: list[str] = []
    for name in names:
        for expanded in _expand(name):
            if expanded not in result:
                result.append(expanded)
    return result
