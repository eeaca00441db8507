"""
Search relevance scoring for media items.

Combines, in strict tier order:
- exact, starts-with and word-boundary matches on the name
- reverse matching, where the query contains the name ("the ramones" finds "Ramones")
- substring containment
- fuzzy matching for typos (whole string, then word by word)
- bigram overlap for partial matches

then adds secondary field bonuses (artist, album, author, narrator, podcast
creator) and status bonuses (library, favorite).

Usage:
    scorer = SearchScorer()
    score = scorer.score_item(item, query)
"""

from __future__ import annotations

from typing import Iterable, List, Tuple

import attrs
from aletk.utils import get_logger

from massiv_search.logic.functions import artists_string, authors_string, in_library, narrators_string
from massiv_search.logic.models import (
    Album,
    Artist,
    Audiobook,
    MediaItem,
    Playlist,
    Podcast,
    PodcastEpisode,
    PodcastMetadata,
    Radio,
    Track,
)
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
)
from massiv_search.scoring.ngram_matcher import NgramMatcher
from massiv_search.scoring.text_normalizer import TextNormalizer, normalize_text, tokenize


logger = get_logger(__name__)


# Ordered; the first exact match wins, otherwise the first partial one
PODCAST_CREATOR_FIELDS = ("author", "publisher", "owner", "creator")


class SearchScorer:
    """
    Scores media items against a search query.

    The normalized form of the last query is cached, so scoring N results of
    one search normalizes the query once. The cache is a single (query,
    normalized query) pair replaced in one assignment, so concurrent callers
    never see a query paired with another query's normalization. Scoring
    different queries concurrently on one instance only costs cache misses;
    one scorer (or one `ScoringSession`) per search request avoids them.
    """

    def __init__(
        self,
        config: ScoringConfig | None = None,
        normalizer: TextNormalizer | None = None,
        fuzzy_matcher: FuzzyMatcher | None = None,
        ngram_matcher: NgramMatcher | None = None,
    ) -> None:
        self._config = config if config is not None else DEFAULT_SCORING_CONFIG
        self._normalizer = normalizer if normalizer is not None else TextNormalizer()
        self._fuzzy_matcher = fuzzy_matcher if fuzzy_matcher is not None else FuzzyMatcher()
        self._ngram_matcher = ngram_matcher if ngram_matcher is not None else NgramMatcher()
        self._cache: Tuple[str, NormalizedQuery] | None = None

    @property
    def config(self) -> ScoringConfig:
        return self._config

    @property
    def normalizer(self) -> TextNormalizer:
        return self._normalizer

    @property
    def cached_query_string(self) -> str | None:
        cache = self._cache
        return cache[0] if cache is not None else None

    def clear_cache(self) -> None:
        """Drop the cached query. Optional: a different query string rebuilds the cache anyway."""
        self._cache = None

    def normalized_query(self, query: str) -> NormalizedQuery:
        cache = self._cache
        if cache is not None and cache[0] == query:
            return cache[1]

        nq = self._normalizer.normalize_query(query)
        self._cache = (query, nq)
        logger.debug(f"Normalized query {query!r} -> {nq.normalized!r} / {nq.without_stopwords!r}")

        return nq

    def session(self, query: str) -> ScoringSession:
        """Bind this scorer to one query for scoring a whole result set."""
        return ScoringSession(scorer=self, query=self._normalizer.normalize_query(query))

    def score_item(self, item: MediaItem, query: str) -> float:
        """Score a media item against a search query. Higher is more relevant; 0 for an empty query."""
        return self.score_normalized(item, self.normalized_query(query)).total

    def score_item_detailed(self, item: MediaItem, query: str) -> ScoreBreakdown:
        """Same as `score_item`, with the per-component breakdown."""
        return self.score_normalized(item, self.normalized_query(query))

    def score_normalized(self, item: MediaItem, nq: NormalizedQuery) -> ScoreBreakdown:
        if nq.is_empty:
            return ScoreBreakdown(total=0.0, tier=PrimaryTier.NONE, partial_scores=())

        name_normalized = normalize_text(item.name or "")
        name_no_stopwords = self._normalizer.normalize_text_no_stopwords(item.name or "")

        primary_score, tier = self._score_primary(name_normalized, name_no_stopwords, nq)
        partial_scores: List[PartialScore] = [
            PartialScore(component=ScoreComponent.PRIMARY, score=primary_score, details=f"Name: {tier.value}")
        ]
        partial_scores.extend(self._score_secondary(item, name_normalized, name_no_stopwords, nq))
        partial_scores.extend(self._score_status(item))

        return ScoreBreakdown(
            total=sum(ps.score for ps in partial_scores),
            tier=tier,
            partial_scores=tuple(partial_scores),
        )

    # ------------------------------------------------------------------------
    # Primary: name matching tiers
    # ------------------------------------------------------------------------

    def _score_primary(
        self,
        name_normalized: str,
        name_no_stopwords: str,
        nq: NormalizedQuery,
    ) -> Tuple[float, PrimaryTier]:
        config = self._config
        if not name_normalized:
            return 0.0, PrimaryTier.NONE

        query = nq.normalized
        query_no_stopwords = nq.without_stopwords
        # Stopword-free comparisons need both operands; "" would match everything
        compare_no_stopwords = bool(query_no_stopwords) and bool(name_no_stopwords)

        # Tier 1: exact
        if name_normalized == query:
            return config.exact_match, PrimaryTier.EXACT
        if compare_no_stopwords and name_no_stopwords == query_no_stopwords:
            return config.exact_match_no_stopwords, PrimaryTier.EXACT_NO_STOPWORDS

        # Tier 2: starts with
        if name_normalized.startswith(query):
            return config.starts_with_match, PrimaryTier.STARTS_WITH
        if compare_no_stopwords and name_no_stopwords.startswith(query_no_stopwords):
            return config.starts_with_no_stopwords, PrimaryTier.STARTS_WITH_NO_STOPWORDS

        # Tier 3: word boundary
        if _matches_word_boundary(name_normalized, query):
            return config.word_boundary_match, PrimaryTier.WORD_BOUNDARY
        if compare_no_stopwords and _matches_word_boundary(name_no_stopwords, query_no_stopwords):
            return config.word_boundary_no_stopwords, PrimaryTier.WORD_BOUNDARY_NO_STOPWORDS

        # Tier 4: the name is inside the query
        if self._reverse_contains(query, name_normalized):
            return config.reverse_contains_match, PrimaryTier.REVERSE_CONTAINS
        if compare_no_stopwords and self._reverse_contains(query_no_stopwords, name_no_stopwords):
            return config.reverse_contains_no_stopwords, PrimaryTier.REVERSE_CONTAINS_NO_STOPWORDS

        # Tier 5: contains anywhere
        if query in name_normalized:
            return config.contains_match, PrimaryTier.CONTAINS
        if compare_no_stopwords and query_no_stopwords in name_no_stopwords:
            return config.contains_no_stopwords, PrimaryTier.CONTAINS_NO_STOPWORDS

        # Tier 6: whole-string fuzzy
        fuzzy_score = self._fuzzy_matcher.similarity(query_no_stopwords, name_no_stopwords)
        if fuzzy_score >= config.fuzzy_high_threshold:
            return (
                config.fuzzy_match_high + (fuzzy_score - config.fuzzy_high_threshold) * config.fuzzy_high_scale,
                PrimaryTier.FUZZY_HIGH,
            )
        if fuzzy_score >= config.fuzzy_medium_threshold:
            return config.fuzzy_match_medium, PrimaryTier.FUZZY_MEDIUM

        # Tier 7: word-level fuzzy, capped at the medium weight
        token_score = self._fuzzy_matcher.best_token_match(nq.tokens_no_stop, tokenize(name_no_stopwords))
        if token_score >= config.fuzzy_high_threshold:
            return config.fuzzy_match_medium, PrimaryTier.FUZZY_TOKEN

        # Tier 8: bigram overlap
        ngram_score = self._ngram_matcher.bigram_similarity(query_no_stopwords, name_no_stopwords)
        if ngram_score >= config.ngram_threshold:
            return config.ngram_match + ngram_score * config.ngram_scale, PrimaryTier.NGRAM

        # The server returned the item for this query, so it is somewhat relevant
        return config.baseline, PrimaryTier.BASELINE

    def _reverse_contains(self, query: str, text: str) -> bool:
        """True when `text` (a name) appears inside `query`, directly or as one of its words."""
        min_length = self._config.min_reverse_match_length
        if len(text) < min_length:
            return False

        if text in query:
            return True

        return any(len(token) >= min_length and token == text for token in tokenize(query))

    # ------------------------------------------------------------------------
    # Secondary: type-specific field bonuses
    # ------------------------------------------------------------------------

    def _score_secondary(
        self,
        item: MediaItem,
        name_normalized: str,
        name_no_stopwords: str,
        nq: NormalizedQuery,
    ) -> Tuple[PartialScore, ...]:
        if not nq.without_stopwords:
            return ()

        match item:
            case Album():
                return self._score_artist_field(artists_string(item), nq)
            case Track():
                bonuses = self._score_artist_field(artists_string(item), nq)
                if item.album is not None and self._field_contains(item.album.name, nq):
                    bonuses += (
                        _secondary(self._config.album_field_bonus, f"Album contains query: {item.album.name}"),
                    )
                return bonuses
            case Audiobook():
                return self._score_audiobook_fields(item, nq)
            case Podcast() | PodcastEpisode():
                return self._score_podcast_fields(item.metadata, name_normalized, name_no_stopwords, nq)
            case Artist() | Playlist() | Radio():
                return ()
            case _:
                # Duck-typed items outside the known variants get no secondary bonus
                return ()

    def _field_forms(self, text: str | None) -> str:
        return self._normalizer.normalize_text_no_stopwords(text or "")

    def _field_contains(self, text: str | None, nq: NormalizedQuery) -> bool:
        field = self._field_forms(text)
        return bool(field) and nq.without_stopwords in field

    def _score_artist_field(self, artists: str, nq: NormalizedQuery) -> Tuple[PartialScore, ...]:
        field = self._field_forms(artists)
        if not field:
            return ()
        if field == nq.without_stopwords:
            return (_secondary(self._config.artist_field_exact_bonus, f"Artist exact match: {artists}"),)
        if nq.without_stopwords in field:
            return (_secondary(self._config.artist_field_partial_bonus, f"Artist contains query: {artists}"),)
        return ()

    def _score_audiobook_fields(self, audiobook: Audiobook, nq: NormalizedQuery) -> Tuple[PartialScore, ...]:
        config = self._config
        bonuses: Tuple[PartialScore, ...] = ()

        authors = authors_string(audiobook)
        author_field = self._field_forms(authors)
        if author_field and author_field == nq.without_stopwords:
            bonuses += (_secondary(config.author_field_exact_bonus, f"Author exact match: {authors}"),)
        elif author_field and nq.without_stopwords in author_field:
            bonuses += (_secondary(config.author_field_partial_bonus, f"Author contains query: {authors}"),)

        narrators = narrators_string(audiobook)
        if self._field_contains(narrators, nq):
            bonuses += (_secondary(config.narrator_field_bonus, f"Narrator contains query: {narrators}"),)

        return bonuses

    def _score_podcast_fields(
        self,
        metadata: PodcastMetadata | None,
        name_normalized: str,
        name_no_stopwords: str,
        nq: NormalizedQuery,
    ) -> Tuple[PartialScore, ...]:
        config = self._config
        query = nq.without_stopwords
        bonuses: Tuple[PartialScore, ...] = ()

        if metadata is not None:
            found_exact: str | None = None
            found_partial: str | None = None
            for field_name in PODCAST_CREATOR_FIELDS:
                field = self._field_forms(getattr(metadata, field_name))
                if not field:
                    continue
                if field == query:
                    found_exact = field_name
                    break
                if found_partial is None and query in field:
                    found_partial = field_name

            if found_exact is not None:
                bonuses += (_secondary(config.creator_field_exact_bonus, f"Creator exact match ({found_exact})"),)
            elif found_partial is not None:
                bonuses += (
                    _secondary(config.creator_field_partial_bonus, f"Creator contains query ({found_partial})"),
                )

            if self._field_contains(metadata.description, nq):
                bonuses += (_secondary(config.description_bonus, "Description contains query"),)

        if bonuses or not name_no_stopwords or query not in name_no_stopwords:
            return bonuses

        # Hosts are often named in the podcast title ("The Louis Theroux Podcast")
        if nq.is_multi_word:
            prominence = len(query) / len(name_normalized)
            if prominence >= 0.5:
                bonus = config.creator_field_exact_bonus
            elif prominence >= 0.3:
                bonus = config.creator_field_partial_bonus + config.creator_prominence_bonus
            else:
                bonus = config.creator_field_partial_bonus
            return (_secondary(bonus, f"Query prominent in name ({prominence:.2f})"),)

        return (_secondary(config.description_bonus, "Single-word query in name"),)

    # ------------------------------------------------------------------------
    # Status: library and favorite
    # ------------------------------------------------------------------------

    def _score_status(self, item: MediaItem) -> Tuple[PartialScore, ...]:
        bonuses: Tuple[PartialScore, ...] = ()

        if isinstance(item, Album) and in_library(item):
            bonuses += (_status(self._config.library_bonus, "In library"),)

        if getattr(item, "favorite", None) is True:
            bonuses += (_status(self._config.favorite_bonus, "Favorite"),)

        return bonuses


def _secondary(score: float, details: str) -> PartialScore:
    return PartialScore(component=ScoreComponent.SECONDARY, score=score, details=details)


def _status(score: float, details: str) -> PartialScore:
    return PartialScore(component=ScoreComponent.STATUS, score=score, details=details)


def _matches_word_boundary(text: str, query: str) -> bool:
    """Multi-word queries must start the text or follow a space; single words must start some word."""
    if not query:
        return False

    if " " in query:
        return text.startswith(query) or f" {query}" in text

    return any(word.startswith(query) for word in tokenize(text))


@attrs.define(frozen=True, slots=True)
class ScoringSession:
    """
    A scorer bound to one normalized query. Immutable, so it can be shared by
    the threads ranking one result set.
    """

    scorer: SearchScorer
    query: NormalizedQuery

    def score(self, item: MediaItem) -> float:
        return self.scorer.score_normalized(item, self.query).total

    def score_detailed(self, item: MediaItem) -> ScoreBreakdown:
        return self.scorer.score_normalized(item, self.query)

    def rank(
        self,
        items: Iterable[MediaItem],
        top_n: int | None = None,
        min_score: float = 0.0,
    ) -> Tuple[RankedItem, ...]:
        """Sort items by descending score (ties keep input order), drop those below `min_score`, keep `top_n`."""
        return rank_scored([(item, self.score(item), False) for item in items], top_n=top_n, min_score=min_score)


def rank_scored(
    scored: Iterable[Tuple[MediaItem, float, bool]],
    top_n: int | None = None,
    min_score: float = 0.0,
) -> Tuple[RankedItem, ...]:
    """Sort (item, score, cross_referenced) entries by descending score, ties in input order.

    Entries below `min_score` are dropped and at most `top_n` are kept.
    """
    ordered = sorted(scored, key=lambda entry: entry[1], reverse=True)
    kept = [entry for entry in ordered if entry[1] >= min_score]
    if top_n is not None:
        kept = kept[: max(top_n, 0)]

    return tuple(
        RankedItem(item=item, score=score, rank=rank, cross_referenced=cross_referenced)
        for rank, (item, score, cross_referenced) in enumerate(kept, start=1)
    )
