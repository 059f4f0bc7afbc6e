"""Multi-factor scoring of content items against a request context.

Every factor is a 0-100 subscore. The combined score is a weighted sum using
the active state profile's weights, multiplied by the focus/content-type
multiplier and clamped to 0-100::

    total = clamp((mood*w_mood + time*w_time + energy*w_energy
                   + preference*w_pref + quality*w_quality
                   + novelty*w_novelty) / 100 * focus_multiplier)

The scalar score and the explanation breakdown come from the same
computation (:func:`compute_breakdown`).
"""

from moodrecs.core.contracts import (
    ContentItem,
    ScoreBreakdown,
    ScoringContext,
    StateProfile,
    UserPreferences,
    clamp,
)
from moodrecs.core.profiles import (
    focus_multiplier,
    intensity_in_range,
    novelty_fit,
    profile_of,
)

# Mood fit budget: intensity 40 + genre 30 + state tags 30
INTENSITY_POINTS = 40.0
GENRE_POINTS = 30.0
GENRE_BASE = 20.0
GENRE_POINTS_PER_TIER = 5.0
GENRE_PENALTY_POINTS = 10.0
TAG_POINTS = 30.0

TIME_GRACE_RATIO = 0.2
TIME_SHORT_FLOOR = 60.0
TIME_EXCESS_PENALTY = 150.0

HEAVY_INTENSITY = 0.5
HEAVY_SCORE_CAP = 30.0
ENERGY_DISTANCE_PENALTY = 150.0

LIKED_TAG_POINTS = 10
DISLIKED_TAG_POINTS = 15
LIKED_GENRE_POINTS = 8
DISLIKED_GENRE_POINTS = 12


def _clamp_score(value: float) -> float:
    return clamp(value, 0.0, 100.0)


def _boost_tiers(boost: float) -> int:
    """Number of 0.1 steps a boost multiplier sits above 1.0."""
    return max(0, round((boost - 1.0) * 10))


def mood_fit_score(item: ContentItem, profile: StateProfile) -> float:
    """How well the item suits the state: intensity, genres and tag vocabulary."""
    low, high = profile.intensity_range
    if intensity_in_range(item.intensity, profile.intensity_range):
        distance = 0.0
    elif item.intensity < low:
        distance = low - item.intensity
    else:
        distance = item.intensity - high
    intensity_points = max(0.0, INTENSITY_POINTS - distance * 100)

    genre_points = GENRE_BASE
    for genre in item.genres:
        boost = profile.genre_boosts.get(genre)
        if boost:
            genre_points += GENRE_POINTS_PER_TIER * _boost_tiers(boost)
        penalty = profile.genre_penalties.get(genre)
        if penalty is not None:
            genre_points -= GENRE_PENALTY_POINTS * (1 - penalty)
    genre_points = clamp(genre_points, 0.0, GENRE_POINTS)

    # Substring match in either direction ("fun" ~ "funny")
    matched = {
        state_tag
        for state_tag in profile.mood_tags
        if any(state_tag in tag or tag in state_tag for tag in item.tags if tag)
    }
    tag_points = len(matched) / len(profile.mood_tags) * TAG_POINTS

    return _clamp_score(intensity_points + genre_points + tag_points)


def time_fit_score(item: ContentItem, time_available_min: int) -> float:
    """Fit of the item's duration to the available window."""
    if not item.duration_min:
        return 100.0

    window = max(1, time_available_min)
    duration = item.duration_min

    if abs(duration - window) <= window * TIME_GRACE_RATIO:
        return 100.0

    if duration <= window:
        return max(TIME_SHORT_FLOOR, duration / window * 100)

    excess_ratio = (duration - window) / window
    return max(0.0, 100 - excess_ratio * TIME_EXCESS_PENALTY)


def energy_tolerance(energy_level: int) -> float:
    """Map energy level 1-5 onto an intensity tolerance in [0, 1]."""
    level = clamp(energy_level, 1, 5)
    return (level - 1) / 4


def energy_fit_score(item: ContentItem, energy_level: int, no_heavy: bool = False) -> float:
    """Match between item intensity and the user's energy.

    With ``no_heavy`` set, anything above 0.5 intensity is capped at 30 and
    falls linearly toward 0.
    """
    if no_heavy and item.intensity > HEAVY_INTENSITY:
        return max(0.0, HEAVY_SCORE_CAP - (item.intensity - HEAVY_INTENSITY) * 100)

    distance = abs(item.intensity - energy_tolerance(energy_level))
    return max(0.0, 100 - distance * ENERGY_DISTANCE_PENALTY)


def preference_fit_score(item: ContentItem, prefs: UserPreferences) -> float:
    """Liked/disliked tag and genre matches around a neutral 50."""
    liked_tags = set(prefs.liked_tags)
    disliked_tags = set(prefs.disliked_tags)
    liked_genres = set(prefs.liked_genres)
    disliked_genres = set(prefs.disliked_genres)

    score = 50.0
    score += LIKED_TAG_POINTS * sum(1 for tag in item.tags if tag in liked_tags)
    score -= DISLIKED_TAG_POINTS * sum(1 for tag in item.tags if tag in disliked_tags)
    score += LIKED_GENRE_POINTS * sum(1 for genre in item.genres if genre in liked_genres)
    score -= DISLIKED_GENRE_POINTS * sum(1 for genre in item.genres if genre in disliked_genres)

    return _clamp_score(score)


def quality_score(item: ContentItem) -> float:
    """Rating (up to 30) and popularity (up to 20) on a base of 50."""
    score = 50.0
    if item.rating is not None:
        score += item.rating * 30
    score += item.popularity * 20
    return _clamp_score(score)


def novelty_fit_score(item: ContentItem, profile: StateProfile) -> float:
    """The profile's novelty curve applied to the item, scaled to 0-100."""
    return novelty_fit(item.novelty, profile.novelty_preference) * 100


def compute_breakdown(item: ContentItem, context: ScoringContext) -> ScoreBreakdown:
    """Compute all factor subscores and the final total for one item.

    Args:
        item: Candidate content item
        context: Per-request scoring context

    Returns:
        ScoreBreakdown whose ``total`` is the item's score
    """
    profile = profile_of(context.state)
    weights = profile.weights

    mood = mood_fit_score(item, profile)
    time = time_fit_score(item, context.time_available_min)
    energy = energy_fit_score(item, context.energy_level, context.no_heavy)
    preference = preference_fit_score(item, context.user_prefs)
    quality = quality_score(item)
    novelty = novelty_fit_score(item, profile)
    multiplier = focus_multiplier(context.focus, item.content_type)

    weighted = (
        mood * weights.mood
        + time * weights.time
        + energy * weights.energy
        + preference * weights.preference
        + quality * weights.quality
        + novelty * weights.novelty
    ) / 100

    return ScoreBreakdown(
        mood=mood,
        time=time,
        energy=energy,
        preference=preference,
        quality=quality,
        novelty=novelty,
        focus_multiplier=multiplier,
        total=_clamp_score(weighted * multiplier),
    )


def get_score_breakdown(item: ContentItem, context: ScoringContext) -> ScoreBreakdown:
    """Public alias of :func:`compute_breakdown` for explainability tooling."""
    return compute_breakdown(item, context)


def score_item(item: ContentItem, context: ScoringContext) -> float:
    """Return the item's 0-100 compatibility score."""
    return compute_breakdown(item, context).total
