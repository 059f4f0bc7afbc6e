"""Domain contracts and type definitions."""

from dataclasses import asdict, dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Literal, Mapping

NoveltyPreference = Literal["low", "medium", "high"]


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    """Clamp value into [low, high]."""
    return max(low, min(high, value))


def coerce_float(value: Any, default: float | None) -> float | None:
    """Parse a numeric field, falling back to ``default`` when missing or malformed."""
    if value is None or isinstance(value, bool):
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


class UserState(str, Enum):
    """Coarse emotional state options."""

    CALM_SEEKING = "calm-seeking"
    HIGH_ENERGY_RELEASE = "high-energy-release"
    GROWTH_SEEKING = "growth-seeking"
    LOW_STIMULATION = "low-stimulation"
    UNDECIDED = "undecided"


class Focus(str, Enum):
    """Activity category requested for one recommendation run."""

    LISTEN = "listen"
    WATCH = "watch"
    READ = "read"
    MOVE = "move"
    CREATE = "create"
    RESET = "reset"

    @classmethod
    def _missing_(cls, value: object) -> "Focus | None":
        # Older clients still send "music"
        if isinstance(value, str) and value.lower() == "music":
            return cls.LISTEN
        return None


class ContentType(str, Enum):
    """Medium of a content item."""

    WATCH = "watch"
    READ = "read"
    LISTEN = "listen"
    MOVE = "move"
    CREATE = "create"
    RESET = "reset"


@dataclass(frozen=True)
class ContentItem:
    """A single piece of recommendable content.

    Numeric attributes are clamped on construction so upstream noise never
    reaches the scorer. ``duration_min`` is either a positive whole number of
    minutes or None.
    """

    id: str
    content_type: ContentType
    title: str
    source: str
    tags: tuple[str, ...] = ()
    genres: tuple[str, ...] = ()
    intensity: float = 0.5
    cognitive_load: float = 0.5
    novelty: float = 0.5
    duration_min: int | None = None
    popularity: float = 0.0
    rating: float | None = None
    link: str | None = None
    description: str | None = None
    image_url: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "content_type", ContentType(self.content_type))
        object.__setattr__(self, "tags", tuple(self.tags))
        object.__setattr__(self, "genres", tuple(self.genres))
        object.__setattr__(self, "intensity", clamp(coerce_float(self.intensity, 0.5)))
        object.__setattr__(self, "cognitive_load", clamp(coerce_float(self.cognitive_load, 0.5)))
        object.__setattr__(self, "novelty", clamp(coerce_float(self.novelty, 0.5)))
        object.__setattr__(self, "popularity", clamp(coerce_float(self.popularity, 0.0)))

        rating = coerce_float(self.rating, None)
        object.__setattr__(self, "rating", None if rating is None else clamp(rating))

        duration = coerce_float(self.duration_min, None)
        minutes = int(round(duration)) if duration is not None else 0
        object.__setattr__(self, "duration_min", minutes if minutes > 0 else None)

    @property
    def primary_genre(self) -> str:
        """First genre, or ``"unknown"`` when the item has none."""
        return self.genres[0] if self.genres else "unknown"

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        data = asdict(self)
        data["content_type"] = self.content_type.value
        data["tags"] = list(self.tags)
        data["genres"] = list(self.genres)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ContentItem":
        """Create from dictionary (accepts ``type`` as alias of ``content_type``)."""
        return cls(
            id=str(data["id"]),
            content_type=ContentType(data.get("content_type") or data.get("type")),
            title=data.get("title") or "Untitled",
            source=data.get("source") or "unknown",
            tags=tuple(data.get("tags") or ()),
            genres=tuple(data.get("genres") or ()),
            intensity=data.get("intensity", 0.5),
            cognitive_load=data.get("cognitive_load", 0.5),
            novelty=data.get("novelty", 0.5),
            duration_min=data.get("duration_min"),
            popularity=data.get("popularity", 0.0),
            rating=data.get("rating"),
            link=data.get("link"),
            description=data.get("description"),
            image_url=data.get("image_url"),
        )


@dataclass
class UserPreferences:
    """Static liked/disliked lists for one user."""

    user_id: str = ""
    liked_tags: list[str] = field(default_factory=list)
    disliked_tags: list[str] = field(default_factory=list)
    liked_genres: list[str] = field(default_factory=list)
    disliked_genres: list[str] = field(default_factory=list)
    intensity_tolerance: float = 0.5
    novelty_tolerance: float = 0.5

    def __post_init__(self) -> None:
        self.intensity_tolerance = clamp(coerce_float(self.intensity_tolerance, 0.5))
        self.novelty_tolerance = clamp(coerce_float(self.novelty_tolerance, 0.5))

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "UserPreferences":
        """Create from dictionary, tolerating missing keys."""
        data = data or {}
        return cls(
            user_id=data.get("user_id", ""),
            liked_tags=list(data.get("liked_tags") or []),
            disliked_tags=list(data.get("disliked_tags") or []),
            liked_genres=list(data.get("liked_genres") or []),
            disliked_genres=list(data.get("disliked_genres") or []),
            intensity_tolerance=data.get("intensity_tolerance", 0.5),
            novelty_tolerance=data.get("novelty_tolerance", 0.5),
        )


@dataclass(frozen=True)
class ScoringWeights:
    """Per-state factor weights.

    The five positive factors are percentages summing close to 100. Novelty is
    an independent unsigned magnitude; its direction lives in the profile's
    novelty preference curve.
    """

    mood: float
    time: float
    energy: float
    preference: float
    quality: float
    novelty: float

    def as_dict(self) -> dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class StateProfile:
    """Static tuning parameters for one user state."""

    intensity_range: tuple[float, float]
    novelty_preference: NoveltyPreference
    genre_boosts: Mapping[str, float]
    genre_penalties: Mapping[str, float]
    weights: ScoringWeights
    mood_tags: tuple[str, ...]

    def __post_init__(self) -> None:
        # Detached read-only copies; profiles are shared by every request
        object.__setattr__(self, "genre_boosts", MappingProxyType(dict(self.genre_boosts)))
        object.__setattr__(self, "genre_penalties", MappingProxyType(dict(self.genre_penalties)))
        object.__setattr__(self, "intensity_range", tuple(self.intensity_range))
        object.__setattr__(self, "mood_tags", tuple(self.mood_tags))

    def to_dict(self) -> dict[str, Any]:
        return {
            "intensity_range": list(self.intensity_range),
            "novelty_preference": self.novelty_preference,
            "genre_boosts": dict(self.genre_boosts),
            "genre_penalties": dict(self.genre_penalties),
            "weights": self.weights.as_dict(),
            "mood_tags": list(self.mood_tags),
        }


@dataclass
class RecommendationRequest:
    """A single request for recommendations."""

    state: UserState
    focus: Focus
    time_available_min: int
    energy_level: int
    user_id: str = ""
    no_heavy: bool = False

    def __post_init__(self) -> None:
        self.state = UserState(self.state)
        self.focus = Focus(self.focus)


@dataclass(frozen=True)
class ScoringContext:
    """Per-request inputs to the scoring function."""

    state: UserState
    focus: Focus
    time_available_min: int
    energy_level: int
    user_prefs: UserPreferences
    no_heavy: bool = False

    @classmethod
    def from_request(
        cls,
        request: RecommendationRequest,
        user_prefs: UserPreferences,
    ) -> "ScoringContext":
        """Build a context, clamping energy to 1-5 and time to at least 1 minute."""
        return cls(
            state=UserState(request.state),
            focus=Focus(request.focus),
            time_available_min=max(1, int(request.time_available_min)),
            energy_level=int(clamp(int(request.energy_level), 1, 5)),
            user_prefs=user_prefs,
            no_heavy=bool(request.no_heavy),
        )


@dataclass(frozen=True)
class ScoreBreakdown:
    """Factor subscores (0-100 each), focus multiplier and final total."""

    mood: float
    time: float
    energy: float
    preference: float
    quality: float
    novelty: float
    focus_multiplier: float
    total: float

    def factors(self) -> dict[str, float]:
        """Return the six factor subscores keyed by factor name."""
        return {
            "mood": self.mood,
            "time": self.time,
            "energy": self.energy,
            "preference": self.preference,
            "quality": self.quality,
            "novelty": self.novelty,
        }


@dataclass
class Recommendation:
    """A selected item with its final score and explanation."""

    id: str
    content_type: ContentType
    title: str
    link: str | None
    score: float
    tags: list[str]
    source: str
    why: str = ""
    description: str | None = None
    image_url: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["content_type"] = self.content_type.value
        return data


@dataclass
class RecommendationResult:
    """Ranked recommendations plus request metadata."""

    recommendations: list[Recommendation]
    total_candidates: int
    state: UserState
    focus: Focus

    @property
    def metadata(self) -> dict[str, Any]:
        return {
            "total_candidates": self.total_candidates,
            "state": self.state.value,
            "focus": self.focus.value,
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            "recommendations": [rec.to_dict() for rec in self.recommendations],
            "metadata": self.metadata,
        }
