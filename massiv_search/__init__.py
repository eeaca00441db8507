"""Local relevance ranking for Music Assistant search results."""

from massiv_search.scoring import (
    DEFAULT_SCORING_CONFIG,
    ScoringConfig,
    ScoringConfigError,
    ScoringSession,
    SearchScorer,
    rank_items,
    rank_unified_results,
)

__all__ = [
    "DEFAULT_SCORING_CONFIG",
    "ScoringConfig",
    "ScoringConfigError",
    "ScoringSession",
    "SearchScorer",
    "rank_items",
    "rank_unified_results",
]
