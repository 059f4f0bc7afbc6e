"""Core module containing the scoring engine and domain types."""

from moodrecs.core.contracts import (
    ContentItem,
    ContentType,
    Focus,
    Recommendation,
    RecommendationRequest,
    RecommendationResult,
    ScoreBreakdown,
    ScoringContext,
    ScoringWeights,
    StateProfile,
    UserPreferences,
    UserState,
)
from moodrecs.core.diversity import ScoredItem, diversify, tag_cluster
from moodrecs.core.profiles import (
    FOCUS_MULTIPLIERS,
    STATE_PROFILES,
    ProfileConfigurationError,
    UnknownStateError,
    focus_multiplier,
    novelty_fit,
    profile_of,
)
from moodrecs.core.rationale import explain_recommendation
from moodrecs.core.recommender import filter_candidates, generate_recommendations
from moodrecs.core.scoring import compute_breakdown, get_score_breakdown, score_item

__all__ = [
    # Contracts/Types
    "ContentItem",
    "ContentType",
    "Focus",
    "Recommendation",
    "RecommendationRequest",
    "RecommendationResult",
    "ScoreBreakdown",
    "ScoringContext",
    "ScoringWeights",
    "StateProfile",
    "UserPreferences",
    "UserState",
    # Profiles
    "FOCUS_MULTIPLIERS",
    "STATE_PROFILES",
    "ProfileConfigurationError",
    "UnknownStateError",
    "focus_multiplier",
    "novelty_fit",
    "profile_of",
    # Scoring
    "compute_breakdown",
    "get_score_breakdown",
    "score_item",
    # Selection
    "ScoredItem",
    "diversify",
    "tag_cluster",
    # Explainability
    "explain_recommendation",
    # Engine
    "filter_candidates",
    "generate_recommendations",
]
