"""Data models for search relevance scoring."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Tuple

import attrs

from massiv_search.logic.models import MediaItem


class ScoringConfigError(ValueError):
    """Raised when a ScoringConfig does not preserve the tier ordering or has out-of-range values."""


# ============================================================================
# ScoringConfig
# ============================================================================


@attrs.define(frozen=True, slots=True)
class ScoringConfig:
    """
    Tunable weights and thresholds for the search scorer.

    Primary tiers come in pairs: a weight for the match on the lowercased name,
    and a slightly lower one for the match on the stopword-free forms. Tier base
    weights must strictly decrease from exact match down to baseline; this is
    checked at construction time.

    Args:
        exact_match .. baseline: primary tier weights
        fuzzy_high_threshold: Jaro-Winkler similarity for the high fuzzy tier
        fuzzy_medium_threshold: Jaro-Winkler similarity for the medium fuzzy tier
        ngram_threshold: bigram Dice coefficient for the n-gram tier
        fuzzy_high_scale: multiplier for (similarity - fuzzy_high_threshold) above fuzzy_match_high
        ngram_scale: multiplier for the bigram coefficient above ngram_match
        min_reverse_match_length: shortest candidate or query token a reverse match accepts
        *_bonus: additive secondary field and status bonuses
        cross_reference_score: fixed score of artists credited on other results
    """

    # Primary tiers
    exact_match: float = 100.0
    exact_match_no_stopwords: float = 95.0
    starts_with_match: float = 90.0
    starts_with_no_stopwords: float = 85.0
    word_boundary_match: float = 80.0
    word_boundary_no_stopwords: float = 75.0
    reverse_contains_match: float = 70.0
    reverse_contains_no_stopwords: float = 65.0
    contains_match: float = 60.0
    contains_no_stopwords: float = 55.0
    fuzzy_match_high: float = 40.0
    fuzzy_match_medium: float = 35.0
    ngram_match: float = 25.0
    baseline: float = 20.0

    # Thresholds and bands
    fuzzy_high_threshold: float = 0.90
    fuzzy_medium_threshold: float = 0.80
    ngram_threshold: float = 0.50
    fuzzy_high_scale: float = 50.0
    ngram_scale: float = 10.0
    min_reverse_match_length: int = 3

    # Secondary field bonuses
    artist_field_exact_bonus: float = 15.0
    artist_field_partial_bonus: float = 8.0
    album_field_bonus: float = 5.0
    author_field_exact_bonus: float = 15.0
    author_field_partial_bonus: float = 8.0
    narrator_field_bonus: float = 5.0
    creator_field_exact_bonus: float = 15.0
    creator_field_partial_bonus: float = 8.0
    creator_prominence_bonus: float = 4.0
    description_bonus: float = 5.0

    # Status bonuses
    library_bonus: float = 10.0
    favorite_bonus: float = 5.0

    cross_reference_score: float = 25.0

    def __attrs_post_init__(self) -> None:
        _validate_scoring_config(self)

    @property
    def fuzzy_high_ceiling(self) -> float:
        """Highest score the scaled high fuzzy band can reach."""
        return self.fuzzy_match_high + (1.0 - self.fuzzy_high_threshold) * self.fuzzy_high_scale

    @property
    def ngram_ceiling(self) -> float:
        """Highest score the scaled n-gram band can reach."""
        return self.ngram_match + self.ngram_scale


TIER_ORDER: Tuple[str, ...] = (
    "exact_match",
    "starts_with_match",
    "word_boundary_match",
    "reverse_contains_match",
    "contains_match",
    "fuzzy_match_high",
    "fuzzy_match_medium",
    "ngram_match",
    "baseline",
)

# (stopword-free variant, its raw tier, the next raw tier down)
_NO_STOPWORD_VARIANTS: Tuple[Tuple[str, str, str], ...] = (
    ("exact_match_no_stopwords", "exact_match", "starts_with_match"),
    ("starts_with_no_stopwords", "starts_with_match", "word_boundary_match"),
    ("word_boundary_no_stopwords", "word_boundary_match", "reverse_contains_match"),
    ("reverse_contains_no_stopwords", "reverse_contains_match", "contains_match"),
    ("contains_no_stopwords", "contains_match", "fuzzy_match_high"),
)


def _validate_scoring_config(config: ScoringConfig) -> None:
    for field in attrs.fields(ScoringConfig):
        value = getattr(config, field.name)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ScoringConfigError(f"{field.name} must be a number, got {value!r}")
        if value < 0:
            raise ScoringConfigError(f"{field.name} must not be negative, got {value}")

    for higher, lower in zip(TIER_ORDER, TIER_ORDER[1:]):
        if not getattr(config, higher) > getattr(config, lower):
            raise ScoringConfigError(
                f"Tier ordering violated: {higher} ({getattr(config, higher)}) "
                f"must be greater than {lower} ({getattr(config, lower)})"
            )

    for variant, raw, next_tier in _NO_STOPWORD_VARIANTS:
        value = getattr(config, variant)
        if not getattr(config, raw) >= value > getattr(config, next_tier):
            raise ScoringConfigError(
                f"{variant} ({value}) must lie in ({next_tier}, {raw}] = "
                f"({getattr(config, next_tier)}, {getattr(config, raw)}]"
            )

    if not 0.0 < config.fuzzy_medium_threshold <= config.fuzzy_high_threshold <= 1.0:
        raise ScoringConfigError(
            "Fuzzy thresholds must satisfy 0 < fuzzy_medium_threshold <= fuzzy_high_threshold <= 1, "
            f"got {config.fuzzy_medium_threshold} and {config.fuzzy_high_threshold}"
        )

    if not 0.0 < config.ngram_threshold <= 1.0:
        raise ScoringConfigError(f"ngram_threshold must be in (0, 1], got {config.ngram_threshold}")

    if config.min_reverse_match_length < 1:
        raise ScoringConfigError("min_reverse_match_length must be at least 1")

    if not config.fuzzy_high_ceiling < config.contains_no_stopwords:
        raise ScoringConfigError(
            f"High fuzzy band reaches {config.fuzzy_high_ceiling}, "
            f"which must stay below contains_no_stopwords ({config.contains_no_stopwords})"
        )

    if not config.ngram_ceiling <= config.fuzzy_match_medium:
        raise ScoringConfigError(
            f"N-gram band reaches {config.ngram_ceiling}, "
            f"which must not exceed fuzzy_match_medium ({config.fuzzy_match_medium})"
        )


DEFAULT_SCORING_CONFIG = ScoringConfig()


def scoring_config_with(base: ScoringConfig | None = None, **overrides: Any) -> ScoringConfig:
    """Derive a validated config from `base` (default: DEFAULT_SCORING_CONFIG) with the given fields replaced.

    Raises:
        ScoringConfigError: If a field name is unknown or the result breaks the tier ordering.
    """
    resolved_base = base if base is not None else DEFAULT_SCORING_CONFIG
    known = {field.name for field in attrs.fields(ScoringConfig)}
    unknown = sorted(set(overrides) - known)
    if unknown:
        raise ScoringConfigError(f"Unknown scoring config field(s): {', '.join(unknown)}")

    return attrs.evolve(resolved_base, **overrides)


# ============================================================================
# NormalizedQuery
# ============================================================================


@attrs.define(frozen=True, slots=True)
class NormalizedQuery:
    """
    A search term prepared once per search.

    Args:
        raw: the query as typed
        normalized: lowercased, diacritic-folded, punctuation-stripped, whitespace-collapsed
        without_stopwords: `normalized` with stopwords removed
        tokens_no_stop: tokens of `without_stopwords`
    """

    raw: str
    normalized: str
    without_stopwords: str
    tokens_no_stop: Tuple[str, ...]

    @property
    def is_empty(self) -> bool:
        return not self.normalized

    @property
    def is_multi_word(self) -> bool:
        return " " in self.without_stopwords


# ============================================================================
# Score breakdown
# ============================================================================


class ScoreComponent(str, Enum):
    PRIMARY = "primary"
    SECONDARY = "secondary"
    STATUS = "status"


class PrimaryTier(str, Enum):
    EXACT = "exact"
    EXACT_NO_STOPWORDS = "exact_no_stopwords"
    STARTS_WITH = "starts_with"
    STARTS_WITH_NO_STOPWORDS = "starts_with_no_stopwords"
    WORD_BOUNDARY = "word_boundary"
    WORD_BOUNDARY_NO_STOPWORDS = "word_boundary_no_stopwords"
    REVERSE_CONTAINS = "reverse_contains"
    REVERSE_CONTAINS_NO_STOPWORDS = "reverse_contains_no_stopwords"
    CONTAINS = "contains"
    CONTAINS_NO_STOPWORDS = "contains_no_stopwords"
    FUZZY_HIGH = "fuzzy_high"
    FUZZY_MEDIUM = "fuzzy_medium"
    FUZZY_TOKEN = "fuzzy_token"
    NGRAM = "ngram"
    BASELINE = "baseline"
    NONE = "none"


@attrs.define(frozen=True, slots=True)
class PartialScore:
    """One additive contribution to an item's score, with a human-readable explanation."""

    component: ScoreComponent
    score: float
    details: str


@attrs.define(frozen=True, slots=True)
class ScoreBreakdown:
    """
    The full score of one item, split into its primary, secondary and status parts.
    """

    total: float
    tier: PrimaryTier
    partial_scores: Tuple[PartialScore, ...]

    def to_json_summary(self) -> Dict[str, Any]:
        return {
            "total": round(self.total, 2),
            "tier": self.tier.value,
            "score_breakdown": [
                {
                    "component": ps.component.value,
                    "score": round(ps.score, 2),
                    "details": ps.details,
                }
                for ps in self.partial_scores
            ],
        }


@attrs.define(frozen=True, slots=True)
class RankedItem:
    """
    A media item with its relevance score and 1-based rank in a result list.

    Args:
        cross_referenced: the item was not returned by the search but credited on a result,
            and carries the fixed cross-reference score instead of its own
    """

    item: MediaItem
    score: float
    rank: int
    cross_referenced: bool = False

    def to_json_summary(self) -> Dict[str, Any]:
        return {
            "rank": self.rank,
            "score": round(self.score, 2),
            "name": self.item.name,
            "media_type": self.item.media_type.value,
            "provider": self.item.provider,
            "item_id": self.item.item_id,
        }
