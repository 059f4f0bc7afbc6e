"""Recommendation engine: filter, score, diversify and explain."""

from typing import Iterable

from moodrecs.config import config
from moodrecs.core.contracts import (
    ContentItem,
    ContentType,
    Focus,
    Recommendation,
    RecommendationRequest,
    RecommendationResult,
    ScoringContext,
    UserPreferences,
)
from moodrecs.core.diversity import ScoredItem, diversify
from moodrecs.core.rationale import explain_recommendation
from moodrecs.core.scoring import compute_breakdown
from moodrecs.logging import get_logger

logger = get_logger(__name__)

# Content types admitted for each focus
FOCUS_ALLOWED_TYPES: dict[Focus, frozenset[ContentType]] = {
    Focus.LISTEN: frozenset({ContentType.LISTEN, ContentType.RESET}),
    Focus.WATCH: frozenset({ContentType.WATCH, ContentType.LISTEN}),
    Focus.READ: frozenset({ContentType.READ, ContentType.LISTEN}),
    Focus.MOVE: frozenset({ContentType.MOVE}),
    Focus.CREATE: frozenset({ContentType.CREATE}),
    Focus.RESET: frozenset({ContentType.RESET}),
}


def filter_candidates(candidates: Iterable[ContentItem], focus: Focus) -> list[ContentItem]:
    """Keep candidates whose content type is compatible with the focus."""
    allowed = FOCUS_ALLOWED_TYPES[Focus(focus)]
    return [item for item in candidates if item.content_type in allowed]


def score_candidates(
    candidates: Iterable[ContentItem],
    context: ScoringContext,
) -> list[ScoredItem]:
    """Score every candidate under one context."""
    scored = []
    for item in candidates:
        breakdown = compute_breakdown(item, context)
        scored.append(ScoredItem(item=item, score=breakdown.total, breakdown=breakdown))
    return scored


def _to_recommendation(scored: ScoredItem, context: ScoringContext) -> Recommendation:
    item = scored.item
    breakdown = scored.breakdown or compute_breakdown(item, context)
    return Recommendation(
        id=item.id,
        content_type=item.content_type,
        title=item.title,
        link=item.link,
        score=scored.score,
        tags=list(item.tags),
        source=item.source,
        why=explain_recommendation(item, context, breakdown),
        description=item.description,
        image_url=item.image_url,
    )


def generate_recommendations(
    request: RecommendationRequest,
    candidate_pool: Iterable[ContentItem],
    user_prefs: UserPreferences | None = None,
    top_n: int | None = None,
) -> RecommendationResult:
    """Produce ranked, diversified, explained recommendations.

    Pure computation over its inputs: no I/O and no shared state.

    Args:
        request: State, focus, time and energy for this run
        candidate_pool: Normalized items supplied by the caller
        user_prefs: Static preferences of the requester
        top_n: Result size (default from config)

    Returns:
        RecommendationResult with metadata echoing state and focus
    """
    user_prefs = user_prefs or UserPreferences(user_id=request.user_id)
    top_n = config.recs_top_n if top_n is None else top_n
    context = ScoringContext.from_request(request, user_prefs)

    pool = list(candidate_pool)
    candidates = filter_candidates(pool, context.focus)
    log_context = {
        "user_id": request.user_id,
        "state": context.state.value,
        "focus": context.focus.value,
    }
    logger.debug(f"Focus filter kept {len(candidates)}/{len(pool)} candidates", extra=log_context)

    scored = score_candidates(candidates, context)
    selected = diversify(scored, top_n)
    recommendations = [_to_recommendation(s, context) for s in selected]

    logger.info(
        f"Generated {len(recommendations)} recommendations from {len(candidates)} candidates",
        extra=log_context,
    )

    return RecommendationResult(
        recommendations=recommendations,
        total_candidates=len(candidates),
        state=context.state,
        focus=context.focus,
    )
