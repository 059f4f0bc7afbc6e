"""Heuristic feature inference for provider records.

Each function infers one attribute from already-lowercased inputs: genre
names, descriptions and titles. Numeric results are clamped to [0, 1].
"""

from datetime import date

from moodrecs.core.contracts import clamp

KEYWORD_NUDGE = 0.2

# --- Film / TV ---

HIGH_INTENSITY_GENRES = {"action", "horror", "thriller"}
MEDIUM_INTENSITY_GENRES = {"drama", "adventure", "science fiction"}
LOW_INTENSITY_GENRES = {"comedy", "family", "romance"}

HIGH_LOAD_GENRES = {"mystery", "science fiction", "documentary"}
LOW_LOAD_GENRES = {"comedy", "family", "romance"}

SPECULATIVE_GENRES = {"science fiction", "fantasy", "mystery"}

INTENSITY_UP_KEYWORDS = ("intense", "violent", "dark")
INTENSITY_DOWN_KEYWORDS = ("gentle", "calm", "peaceful")
LOAD_UP_KEYWORDS = ("complex", "philosophical", "intellectual")
LOAD_DOWN_KEYWORDS = ("simple", "light", "easy")

# Genre -> tags
GENRE_TAGS: dict[str, tuple[str, ...]] = {
    "comedy": ("light", "fun"),
    "drama": ("reflection", "emotional"),
    "horror": ("intense", "cathartic"),
    "thriller": ("intense", "cathartic"),
    "romance": ("comfort", "warm"),
    "documentary": ("curiosity", "learning"),
    "family": ("gentle", "safe"),
}

# Keyword found in title/overview -> tags
TEXT_TAGS: list[tuple[tuple[str, ...], tuple[str, ...], bool]] = [
    # (keywords, tags, also search title)
    (("faith",), ("faith",), True),
    (("spiritual",), ("faith", "reflection"), True),
    (("cozy", "comfort"), ("comfort",), False),
    (("mindful", "meditation"), ("calm", "minimal"), False),
    (("action", "adventure"), ("energetic",), False),
]

# --- Books ---

BOOK_SUBJECT_TAGS: list[tuple[tuple[str, ...], tuple[str, ...]]] = [
    (("fiction",), ("story", "narrative")),
    (("self-help", "self help"), ("growth", "practical")),
    (("spiritual", "religion"), ("faith", "reflection")),
    (("philosophy",), ("reflection", "deep")),
    (("poetry",), ("beauty", "minimal")),
    (("biography",), ("curiosity", "learning")),
]

BOOK_TEXT_TAGS: list[tuple[tuple[str, ...], tuple[str, ...], bool]] = [
    (("cozy", "comfort"), ("comfort",), False),
    (("faith",), ("faith",), True),
    (("mindful", "meditation"), ("calm", "minimal"), False),
    (("inspiration", "motivation"), ("growth", "expansive"), False),
]


def _contains_any(text: str, keywords: tuple[str, ...]) -> bool:
    return any(kw in text for kw in keywords)


def _dedupe(tags: list[str]) -> list[str]:
    return list(dict.fromkeys(tags))


def _text_tags(
    rules: list[tuple[tuple[str, ...], tuple[str, ...], bool]],
    description: str,
    title: str,
) -> list[str]:
    tags: list[str] = []
    for keywords, rule_tags, check_title in rules:
        if _contains_any(description, keywords) or (check_title and _contains_any(title, keywords)):
            tags.extend(rule_tags)
    return tags


def infer_tags(genres: list[str], description: str, title: str) -> list[str]:
    """Tags for film/TV from genre membership and keyword hits."""
    tags: list[str] = []
    for genre, genre_tags in GENRE_TAGS.items():
        if genre in genres:
            tags.extend(genre_tags)
    tags.extend(_text_tags(TEXT_TAGS, description, title))
    return _dedupe(tags)


def infer_intensity(genres: list[str], description: str) -> float:
    """Genre-bucket base intensity nudged by explicit intensity language."""
    if HIGH_INTENSITY_GENRES.intersection(genres):
        intensity = 0.7
    elif MEDIUM_INTENSITY_GENRES.intersection(genres):
        intensity = 0.5
    elif LOW_INTENSITY_GENRES.intersection(genres):
        intensity = 0.3
    else:
        intensity = 0.5

    if _contains_any(description, INTENSITY_UP_KEYWORDS):
        intensity += KEYWORD_NUDGE
    if _contains_any(description, INTENSITY_DOWN_KEYWORDS):
        intensity -= KEYWORD_NUDGE

    return clamp(intensity)


def infer_cognitive_load(genres: list[str], description: str) -> float:
    """Genre-bucket base cognitive load nudged by keyword hits."""
    if HIGH_LOAD_GENRES.intersection(genres):
        load = 0.7
    elif LOW_LOAD_GENRES.intersection(genres):
        load = 0.3
    else:
        load = 0.5

    if _contains_any(description, LOAD_UP_KEYWORDS):
        load += KEYWORD_NUDGE
    if _contains_any(description, LOAD_DOWN_KEYWORDS):
        load -= KEYWORD_NUDGE

    return clamp(load)


def parse_release_year(release_date: str | None) -> int | None:
    """Year from an ISO-ish ``YYYY[-MM-DD]`` string, or None."""
    if not release_date:
        return None
    head = str(release_date).strip()[:4]
    return int(head) if head.isdigit() else None


def infer_novelty(release_date: str | None, genres: list[str], today: date | None = None) -> float:
    """Recency-driven novelty with a bonus for speculative genres.

    Age under 2 years -> 0.7, under 5 -> 0.5, under 10 -> 0.4, else 0.3.
    Unknown release date -> 0.5.
    """
    today = today or date.today()
    novelty = 0.5

    year = parse_release_year(release_date)
    if year is not None:
        age = today.year - year
        if age < 2:
            novelty = 0.7
        elif age < 5:
            novelty = 0.5
        elif age < 10:
            novelty = 0.4
        else:
            novelty = 0.3

    if SPECULATIVE_GENRES.intersection(genres):
        novelty += 0.1

    return clamp(novelty)


def normalize_rating(vote_average: float | None, scale: float = 10.0) -> float | None:
    """Rescale a provider rating to [0, 1]. Missing or zero ratings give None."""
    if not vote_average:
        return None
    return clamp(float(vote_average) / scale)


def normalize_popularity(popularity: float | None, divisor: float = 1000.0) -> float:
    """Rescale raw popularity by a fixed divisor and clamp."""
    if not popularity:
        return 0.0
    return clamp(float(popularity) / divisor)


# --- Books ---


def infer_book_tags(subjects: list[str], description: str, title: str) -> list[str]:
    """Tags for books from subject headings and keyword hits."""
    tags: list[str] = []
    for keywords, rule_tags in BOOK_SUBJECT_TAGS:
        if any(_contains_any(subject, keywords) for subject in subjects):
            tags.extend(rule_tags)
    tags.extend(_text_tags(BOOK_TEXT_TAGS, description, title))
    return _dedupe(tags)


def infer_book_intensity(subjects: list[str], description: str) -> float:
    """Books start calmer than film; poetry and meditation lowest."""
    joined = " ".join(subjects)
    intensity = 0.3

    if _contains_any(joined, ("thriller", "horror", "mystery")):
        intensity = 0.5
    if _contains_any(joined, ("poetry", "meditation", "mindfulness")):
        intensity = 0.1

    if _contains_any(description, INTENSITY_UP_KEYWORDS):
        intensity += KEYWORD_NUDGE
    if _contains_any(description, INTENSITY_DOWN_KEYWORDS):
        intensity -= 0.1

    return clamp(intensity)


def infer_book_cognitive_load(subjects: list[str], description: str) -> float:
    """Reading load from subject headings, nudged by keyword hits."""
    joined = " ".join(subjects)
    load = 0.6

    if _contains_any(joined, ("philosophy", "science", "academic")):
        load = 0.8
    if _contains_any(joined, ("fiction", "romance", "young adult")):
        load = 0.4
    if _contains_any(joined, ("poetry", "self-help", "guide")):
        load = 0.3

    if _contains_any(description, ("complex", "intellectual", "academic")):
        load += KEYWORD_NUDGE
    if _contains_any(description, ("simple", "easy", "light")):
        load -= KEYWORD_NUDGE

    return clamp(load)


def infer_book_novelty(subjects: list[str]) -> float:
    """Books default to 0.4; speculative subjects raise it, classics lower it."""
    joined = " ".join(subjects)
    novelty = 0.4

    if _contains_any(joined, ("science fiction", "fantasy", "speculative")):
        novelty = 0.6
    if _contains_any(joined, ("classic", "traditional", "historical")):
        novelty = 0.2

    return clamp(novelty)
