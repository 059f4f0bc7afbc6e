"""Diversity-constrained top-N selection over scored candidates."""

from collections import Counter
from dataclasses import dataclass

from moodrecs.core.contracts import ContentItem, ScoreBreakdown

DEFAULT_TOP_N = 12

# First pass caps
MAX_PER_GENRE = 2
MAX_PER_TAG_CLUSTER = 2
# Second pass genre cap for new tag clusters
WILDCARD_MAX_PER_GENRE = 3


@dataclass(frozen=True)
class ScoredItem:
    """Candidate item with its score and breakdown."""

    item: ContentItem
    score: float
    breakdown: ScoreBreakdown | None = None


def tag_cluster(tags: tuple[str, ...] | list[str]) -> str:
    """Grouping key built from the first two tags, sorted and joined."""
    return "|".join(sorted(tags[:2]))


def diversify(scored: list[ScoredItem], top_n: int = DEFAULT_TOP_N) -> list[ScoredItem]:
    """Select up to ``top_n`` candidates balancing score and variety.

    Three greedy passes over candidates sorted by score (stable on ties):

    1. Admit while the primary genre has fewer than 2 picks and the tag
       cluster has fewer than 2 picks.
    2. Admit candidates whose tag cluster was never used, as long as their
       primary genre has fewer than 3 picks.
    3. Fill any remaining slots by score, ignoring constraints.

    Args:
        scored: Scored candidates, any order
        top_n: Number of results wanted

    Returns:
        ``min(top_n, unique candidates)`` items with unique ids
    """
    if top_n <= 0 or not scored:
        return []

    ranked = sorted(scored, key=lambda s: s.score, reverse=True)

    selected: list[ScoredItem] = []
    selected_ids: set[str] = set()
    genre_counts: Counter[str] = Counter()
    cluster_counts: Counter[str] = Counter()

    def admit(candidate: ScoredItem, cluster: str) -> None:
        selected.append(candidate)
        selected_ids.add(candidate.item.id)
        genre_counts[candidate.item.primary_genre] += 1
        cluster_counts[cluster] += 1

    for candidate in ranked:
        if len(selected) >= top_n:
            break
        if candidate.item.id in selected_ids:
            continue
        cluster = tag_cluster(candidate.item.tags)
        if genre_counts[candidate.item.primary_genre] >= MAX_PER_GENRE:
            continue
        if cluster_counts[cluster] >= MAX_PER_TAG_CLUSTER:
            continue
        admit(candidate, cluster)

    for candidate in ranked:
        if len(selected) >= top_n:
            break
        if candidate.item.id in selected_ids:
            continue
        cluster = tag_cluster(candidate.item.tags)
        if cluster in cluster_counts:
            continue
        if genre_counts[candidate.item.primary_genre] >= WILDCARD_MAX_PER_GENRE:
            continue
        admit(candidate, cluster)

    for candidate in ranked:
        if len(selected) >= top_n:
            break
        if candidate.item.id in selected_ids:
            continue
        admit(candidate, tag_cluster(candidate.item.tags))

    return selected
