"""Search relevance scoring for media items.

Ranks the results of a server-side search locally, using tiered name matching
(exact, prefix, word boundary, reverse containment, containment, fuzzy and
bigram similarity) plus field and status bonuses with configurable weights.
"""

from massiv_search.scoring.fuzzy_matcher import FuzzyMatcher
from massiv_search.scoring.models import (
    DEFAULT_SCORING_CONFIG,
    NormalizedQuery,
    PartialScore,
    PrimaryTier,
    RankedItem,
    ScoreBreakdown,
    ScoreComponent,
    ScoringConfig,
    ScoringConfigError,
    scoring_config_with,
)
from massiv_search.scoring.ngram_matcher import NgramMatcher, extract_ngrams, ngram_similarity
from massiv_search.scoring.ranking import (
    extract_cross_referenced_artists,
    rank_items,
    rank_unified_results,
)
from massiv_search.scoring.scorer import ScoringSession, SearchScorer, rank_scored
from massiv_search.scoring.text_normalizer import (
    ENGLISH_STOPWORDS,
    TextNormalizer,
    normalize_text,
    tokenize,
)

__all__ = [
    "DEFAULT_SCORING_CONFIG",
    "ENGLISH_STOPWORDS",
    "FuzzyMatcher",
    "NgramMatcher",
    "NormalizedQuery",
    "PartialScore",
    "PrimaryTier",
    "RankedItem",
    "ScoreBreakdown",
    "ScoreComponent",
    "ScoringConfig",
    "ScoringConfigError",
    "ScoringSession",
    "SearchScorer",
    "TextNormalizer",
    "extract_cross_referenced_artists",
    "extract_ngrams",
    "ngram_similarity",
    "normalize_text",
    "rank_items",
    "rank_scored",
    "rank_unified_results",
    "scoring_config_with",
    "tokenize",
]
