"""Short "why" explanations derived from score breakdowns."""

from moodrecs.core.contracts import ContentItem, ScoreBreakdown, ScoringContext, UserState
from moodrecs.core.profiles import profile_of
from moodrecs.core.scoring import energy_tolerance

MAX_WHY_LENGTH = 160

# Weighted contribution a runner-up factor needs before it is mentioned
SECOND_FACTOR_THRESHOLD = 10.0

ENERGY_ALIGNMENT_BAND = 0.2
HIGH_RATING = 0.7
FRESH_NOVELTY = 0.6

# Clauses for the runner-up factor
SECOND_FACTOR_CLAUSES: dict[str, str] = {
    "time": "fits your time",
    "quality": "quality content",
    "preference": "matches your tastes",
    "energy": "right for your energy",
    "novelty": "something fresh",
}


def _opening(item: ContentItem, state: UserState) -> str | None:
    """State-specific opening descriptor."""
    if state == UserState.CALM_SEEKING:
        return "Gentle" if item.intensity < 0.3 else "Low-stakes"
    if state == UserState.HIGH_ENERGY_RELEASE:
        return "High-energy" if item.intensity > 0.6 else "Cathartic"
    if state == UserState.GROWTH_SEEKING:
        return "Curiosity-forward" if item.novelty > FRESH_NOVELTY else "Growth-oriented"
    if state == UserState.LOW_STIMULATION:
        return "Calming" if item.intensity < 0.2 else "Simple"
    return None


def _top_factor_clause(name: str, item: ContentItem, context: ScoringContext) -> str | None:
    if name == "time" and item.duration_min:
        if item.duration_min <= context.time_available_min:
            return f"fits your {item.duration_min}-min window"
        return "within your time range"
    if name == "energy":
        tolerance = energy_tolerance(context.energy_level)
        if abs(item.intensity - tolerance) <= ENERGY_ALIGNMENT_BAND:
            return "matches your energy"
        return None
    if name == "quality" and item.rating is not None:
        return "high-rated" if item.rating > HIGH_RATING else "well-regarded"
    if name == "preference":
        return "aligns with your preferences"
    if name == "novelty" and item.novelty > FRESH_NOVELTY:
        return "something new"
    return None


def _intensity_descriptor(item: ContentItem, state: UserState) -> str | None:
    if state == UserState.LOW_STIMULATION and item.intensity < 0.25:
        return "low-stimulation"
    if state == UserState.HIGH_ENERGY_RELEASE and item.intensity > 0.7:
        return "high-intensity"
    return None


def rank_contributions(breakdown: ScoreBreakdown, state: UserState) -> list[tuple[str, float]]:
    """Weighted factor contributions, largest first.

    Args:
        breakdown: Factor subscores for one item
        state: Active user state (selects the weight vector)

    Returns:
        ``(factor, subscore * weight / 100)`` pairs sorted descending
    """
    weights = profile_of(state).weights.as_dict()
    contributions = [
        (name, subscore * weights[name] / 100)
        for name, subscore in breakdown.factors().items()
    ]
    contributions.sort(key=lambda pair: pair[1], reverse=True)
    return contributions


def explain_recommendation(
    item: ContentItem,
    context: ScoringContext,
    breakdown: ScoreBreakdown,
) -> str:
    """Generate a short human-readable reason for one recommendation.

    Args:
        item: The selected item
        context: Scoring context of the request
        breakdown: The item's score breakdown

    Returns:
        Non-empty explanation, at most ``MAX_WHY_LENGTH`` characters
    """
    state = UserState(context.state)
    ranked = rank_contributions(breakdown, state)
    top_name = ranked[0][0]

    parts: list[str] = []

    opening = _opening(item, state)
    if opening:
        parts.append(opening)

    top_clause = _top_factor_clause(top_name, item, context)
    if top_clause:
        parts.append(top_clause)

    if len(ranked) > 1:
        second_name, second_contribution = ranked[1]
        if second_contribution > SECOND_FACTOR_THRESHOLD and second_name != top_name:
            second_clause = SECOND_FACTOR_CLAUSES.get(second_name)
            if second_clause:
                parts.append(second_clause)

    descriptor = _intensity_descriptor(item, state)
    if descriptor:
        parts.append(descriptor)

    if not parts:
        return f"Good fit for {state.value}."

    why = " + ".join(parts) + "."
    if len(why) > MAX_WHY_LENGTH:
        why = why[: MAX_WHY_LENGTH - 3] + "..."
    return why
