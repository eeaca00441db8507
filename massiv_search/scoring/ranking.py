"""
Ranking of a whole search response.

The scorer only scores; these functions sort, filter and merge the results of
one search into the single relevance-ordered list shown for the "all" filter.
"""

from typing import Dict, Iterable, List, Sequence, Tuple

from aletk.utils import get_logger

from massiv_search.logic.functions import artist_key
from massiv_search.logic.models import Album, Artist, MediaItem, SearchResults, Track
from massiv_search.scoring.models import RankedItem
from massiv_search.scoring.scorer import SearchScorer, rank_scored


logger = get_logger(__name__)


MIN_CROSS_REFERENCE_WORD_LENGTH = 3


def rank_items(
    items: Iterable[MediaItem],
    query: str,
    scorer: SearchScorer | None = None,
    top_n: int | None = None,
    min_score: float = 0.0,
) -> Tuple[RankedItem, ...]:
    """Score and sort items for one query.

    Args:
        items: Candidates returned by the server for `query`
        query: The search term as typed
        scorer: Scorer to use (default: a fresh SearchScorer with default config)
        top_n: Keep at most this many results (default: all)
        min_score: Drop results scoring below this

    Returns:
        RankedItems by descending score; equal scores keep their input order
    """
    resolved_scorer = scorer if scorer is not None else SearchScorer()
    return resolved_scorer.session(query).rank(items, top_n=top_n, min_score=min_score)


def extract_cross_referenced_artists(
    query: str,
    direct_artists: Sequence[Artist],
    albums: Sequence[Album],
    tracks: Sequence[Track],
) -> Tuple[Artist, ...]:
    """
    Artists credited on the returned tracks and albums that the server did not
    return directly, and whose name contains a query word. Searching
    "Yesterday Beatles" thereby lists The Beatles.
    """
    query_words = [word for word in query.lower().split() if len(word) >= MIN_CROSS_REFERENCE_WORD_LENGTH]
    if not query_words:
        return ()

    existing_keys = {artist_key(artist) for artist in direct_artists}
    candidates: Dict[str, Artist] = {}

    credited: List[Artist] = [artist for track in tracks for artist in track.artists]
    credited.extend(artist for album in albums for artist in album.artists)

    for artist in credited:
        key = artist_key(artist)
        if key not in existing_keys and key not in candidates:
            candidates[key] = artist

    return tuple(
        artist for artist in candidates.values() if any(word in artist.name.lower() for word in query_words)
    )


def rank_unified_results(
    query: str,
    results: SearchResults,
    scorer: SearchScorer | None = None,
    top_n: int | None = None,
    min_score: float = 0.0,
) -> Tuple[RankedItem, ...]:
    """Rank every result group of one search together, including cross-referenced artists at a fixed score."""
    resolved_scorer = scorer if scorer is not None else SearchScorer()
    session = resolved_scorer.session(query)

    scored: List[Tuple[MediaItem, float, bool]] = [(item, session.score(item), False) for item in results.all_items()]

    cross_referenced = extract_cross_referenced_artists(query, results.artists, results.albums, results.tracks)
    if cross_referenced:
        logger.debug(f"Adding {len(cross_referenced)} cross-referenced artist(s) for query {query!r}")
    scored.extend((artist, resolved_scorer.config.cross_reference_score, True) for artist in cross_referenced)

    return rank_scored(scored, top_n=top_n, min_score=min_score)
