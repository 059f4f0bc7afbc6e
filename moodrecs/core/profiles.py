"""Static state profiles, focus multipliers and novelty curves."""

from types import MappingProxyType
from typing import Mapping

from moodrecs.core.contracts import (
    ContentType,
    Focus,
    NoveltyPreference,
    ScoringWeights,
    StateProfile,
    UserState,
)


class UnknownStateError(LookupError):
    """Raised when a user state has no profile."""


class ProfileConfigurationError(Exception):
    """Raised when the profile table is internally inconsistent."""


MOOD_TAGS_PER_STATE = 4

_PROFILES: dict[UserState, StateProfile] = {
    UserState.CALM_SEEKING: StateProfile(
        intensity_range=(0.05, 0.35),
        novelty_preference="low",
        genre_boosts={
            "comedy": 1.3,
            "family": 1.2,
            "romance": 1.2,
            "documentary": 1.1,
        },
        genre_penalties={
            "horror": 0.5,
            "thriller": 0.6,
            "action": 0.7,
        },
        weights=ScoringWeights(
            mood=35, time=20, energy=20, preference=15, quality=10, novelty=5,
        ),
        mood_tags=("gentle", "light", "comfort", "fun"),
    ),
    UserState.HIGH_ENERGY_RELEASE: StateProfile(
        intensity_range=(0.45, 0.90),
        novelty_preference="medium",
        genre_boosts={
            "action": 1.4,
            "thriller": 1.3,
            "horror": 1.2,
            "crime": 1.2,
        },
        genre_penalties={
            "romance": 0.6,
            "family": 0.5,
            "comedy": 0.7,
        },
        weights=ScoringWeights(
            mood=30, time=15, energy=25, preference=15, quality=10, novelty=5,
        ),
        mood_tags=("cathartic", "intense", "energetic", "release"),
    ),
    UserState.GROWTH_SEEKING: StateProfile(
        intensity_range=(0.25, 0.75),
        novelty_preference="high",
        genre_boosts={
            "science fiction": 1.4,
            "documentary": 1.3,
            "mystery": 1.2,
            "fantasy": 1.2,
            "adventure": 1.1,
        },
        genre_penalties={
            "romance": 0.7,
            "family": 0.8,
        },
        weights=ScoringWeights(
            mood=25, time=15, energy=10, preference=15, quality=15, novelty=20,
        ),
        mood_tags=("curiosity", "learning", "growth", "exploration"),
    ),
    UserState.LOW_STIMULATION: StateProfile(
        intensity_range=(0.0, 0.25),
        novelty_preference="low",
        genre_boosts={
            "poetry": 1.4,
            "meditation": 1.3,
            "mindfulness": 1.3,
            "family": 1.2,
            "romance": 1.1,
        },
        genre_penalties={
            "action": 0.3,
            "horror": 0.2,
            "thriller": 0.4,
            "science fiction": 0.7,
        },
        weights=ScoringWeights(
            mood=35, time=25, energy=15, preference=15, quality=10, novelty=10,
        ),
        mood_tags=("calm", "minimal", "simple", "peaceful"),
    ),
    UserState.UNDECIDED: StateProfile(
        intensity_range=(0.2, 0.6),
        novelty_preference="medium",
        genre_boosts={
            "comedy": 1.1,
            "adventure": 1.1,
            "documentary": 1.1,
        },
        genre_penalties={
            "horror": 0.7,
        },
        weights=ScoringWeights(
            mood=25, time=20, energy=20, preference=20, quality=15, novelty=5,
        ),
        mood_tags=("light", "curiosity", "comfort", "story"),
    ),
}

# Rows are the requested focus, columns the item's content type.
_FOCUS_MULTIPLIERS: dict[Focus, dict[ContentType, float]] = {
    Focus.LISTEN: {
        ContentType.LISTEN: 1.1,
        ContentType.RESET: 1.0,
        ContentType.CREATE: 0.95,
        ContentType.MOVE: 0.85,
        ContentType.WATCH: 0.8,
        ContentType.READ: 0.7,
    },
    Focus.WATCH: {
        ContentType.WATCH: 1.1,
        ContentType.RESET: 0.95,
        ContentType.LISTEN: 0.9,
        ContentType.CREATE: 0.85,
        ContentType.MOVE: 0.8,
        ContentType.READ: 0.7,
    },
    Focus.READ: {
        ContentType.READ: 1.1,
        ContentType.CREATE: 0.95,
        ContentType.LISTEN: 0.9,
        ContentType.RESET: 0.85,
        ContentType.WATCH: 0.75,
        ContentType.MOVE: 0.7,
    },
    Focus.MOVE: {
        ContentType.MOVE: 1.1,
        ContentType.LISTEN: 0.95,
        ContentType.RESET: 0.9,
        ContentType.WATCH: 0.8,
        ContentType.CREATE: 0.8,
        ContentType.READ: 0.7,
    },
    Focus.CREATE: {
        ContentType.CREATE: 1.1,
        ContentType.LISTEN: 1.0,
        ContentType.READ: 0.95,
        ContentType.RESET: 0.9,
        ContentType.MOVE: 0.8,
        ContentType.WATCH: 0.8,
    },
    Focus.RESET: {
        ContentType.RESET: 1.1,
        ContentType.LISTEN: 1.0,
        ContentType.WATCH: 0.95,
        ContentType.MOVE: 0.85,
        ContentType.CREATE: 0.85,
        ContentType.READ: 0.8,
    },
}


def _validate_profiles(profiles: Mapping[UserState, StateProfile]) -> None:
    """Check the profile table is total and well formed.

    Raises:
        UnknownStateError: If any UserState has no profile
        ProfileConfigurationError: If a profile has invalid values
    """
    missing = [state.value for state in UserState if state not in profiles]
    if missing:
        raise UnknownStateError(f"No state profile for: {', '.join(missing)}")

    for state, profile in profiles.items():
        low, high = profile.intensity_range
        if not 0.0 <= low <= high <= 1.0:
            raise ProfileConfigurationError(
                f"{state.value}: intensity range {profile.intensity_range} is invalid"
            )
        if len(profile.mood_tags) != MOOD_TAGS_PER_STATE:
            raise ProfileConfigurationError(
                f"{state.value}: expected {MOOD_TAGS_PER_STATE} mood tags, "
                f"got {len(profile.mood_tags)}"
            )
        if any(weight < 0 for weight in profile.weights.as_dict().values()):
            raise ProfileConfigurationError(f"{state.value}: weights must be non-negative")
        if profile.novelty_preference not in ("low", "medium", "high"):
            raise ProfileConfigurationError(
                f"{state.value}: unknown novelty preference {profile.novelty_preference!r}"
            )


_validate_profiles(_PROFILES)

STATE_PROFILES: Mapping[UserState, StateProfile] = MappingProxyType(_PROFILES)
FOCUS_MULTIPLIERS: Mapping[Focus, Mapping[ContentType, float]] = MappingProxyType(
    {focus: MappingProxyType(row) for focus, row in _FOCUS_MULTIPLIERS.items()}
)


def profile_of(state: UserState | str) -> StateProfile:
    """Look up the static profile for a state.

    Args:
        state: UserState or its string value

    Returns:
        The state's profile

    Raises:
        UnknownStateError: If state is not a known UserState
    """
    try:
        return STATE_PROFILES[UserState(state)]
    except (ValueError, KeyError):
        raise UnknownStateError(f"Unknown user state: {state!r}") from None


def focus_multiplier(focus: Focus | str, content_type: ContentType | str) -> float:
    """Multiplier applied to a combined score for a focus/content-type pair.

    Unlisted or unrecognised combinations return 1.0.
    """
    try:
        row = FOCUS_MULTIPLIERS.get(Focus(focus), {})
        return row.get(ContentType(content_type), 1.0)
    except ValueError:
        return 1.0


def intensity_in_range(intensity: float, intensity_range: tuple[float, float]) -> bool:
    """Check if intensity lies in the closed range."""
    return intensity_range[0] <= intensity <= intensity_range[1]


def novelty_fit(novelty: float, preference: NoveltyPreference) -> float:
    """Score novelty against a preference curve.

    Each curve is a three-tier step function returning a value in [0, 1]:

    - low: <=0.4 -> 1.0, <=0.6 -> 0.7, else 0.4
    - medium: 0.3-0.7 -> 1.0, 0.2-0.8 -> 0.8, else 0.5
    - high: >=0.6 -> 1.0, >=0.4 -> 0.7, else 0.4
    """
    if preference == "low":
        if novelty <= 0.4:
            return 1.0
        if novelty <= 0.6:
            return 0.7
        return 0.4
    if preference == "medium":
        if 0.3 <= novelty <= 0.7:
            return 1.0
        if 0.2 <= novelty <= 0.8:
            return 0.8
        return 0.5
    if preference == "high":
        if novelty >= 0.6:
            return 1.0
        if novelty >= 0.4:
            return 0.7
        return 0.4
    raise ValueError(f"Unknown novelty preference: {preference!r}")
