"""Tests for ranking a whole search response."""

from typing import Tuple

import pytest

from massiv_search.logic.models import Album, Artist, MediaItem, Playlist, SearchResults, Track
from massiv_search.scoring.models import scoring_config_with
from massiv_search.scoring.ranking import extract_cross_referenced_artists, rank_items, rank_unified_results
from massiv_search.scoring.scorer import SearchScorer


@pytest.fixture
def beatles() -> Artist:
    return Artist(item_id="b1", provider="spotify", name="The Beatles")


@pytest.fixture
def track_yesterday(beatles: Artist) -> Track:
    return Track(item_id="t1", provider="spotify", name="Yesterday", artists=(beatles,))


# ============================================================================
# rank_items tests
# ============================================================================


class TestRankItems:
    def test_orders_by_score(self, pink_floyd_results: Tuple[MediaItem, ...]) -> None:
        ranked = rank_items(pink_floyd_results, "pink floyd")
        assert [r.item.name for r in ranked] == ["Pink Floyd", "The Wall", "Pink Flyod"]

    def test_uses_given_scorer(self, pink_floyd_results: Tuple[MediaItem, ...]) -> None:
        scorer = SearchScorer(config=scoring_config_with(library_bonus=0.0))
        ranked = rank_items(pink_floyd_results, "pink floyd", scorer=scorer)
        assert [r.item.name for r in ranked] == ["Pink Floyd", "Pink Flyod", "The Wall"]

    def test_empty_input(self) -> None:
        assert rank_items([], "pink floyd") == ()

    def test_empty_query_keeps_input_order(self, pink_floyd_results: Tuple[MediaItem, ...]) -> None:
        ranked = rank_items(pink_floyd_results, "")
        assert [r.item for r in ranked] == list(pink_floyd_results)
        assert all(r.score == 0.0 for r in ranked)

    def test_top_n_zero(self, pink_floyd_results: Tuple[MediaItem, ...]) -> None:
        assert rank_items(pink_floyd_results, "pink floyd", top_n=0) == ()


# ============================================================================
# extract_cross_referenced_artists tests
# ============================================================================


class TestExtractCrossReferencedArtists:
    def test_finds_credited_artist(self, beatles: Artist, track_yesterday: Track) -> None:
        assert extract_cross_referenced_artists("yesterday beatles", (), (), (track_yesterday,)) == (beatles,)

    def test_skips_directly_returned_artists(self, beatles: Artist, track_yesterday: Track) -> None:
        assert extract_cross_referenced_artists("yesterday beatles", (beatles,), (), (track_yesterday,)) == ()

    def test_deduplicates_by_provider_and_id(self, beatles: Artist, track_yesterday: Track) -> None:
        album = Album(item_id="a1", provider="spotify", name="Help!", artists=(beatles,))
        found = extract_cross_referenced_artists("yesterday beatles", (), (album,), (track_yesterday, track_yesterday))
        assert found == (beatles,)

    def test_same_name_other_provider_is_distinct(self, beatles: Artist, track_yesterday: Track) -> None:
        other = Artist(item_id="b1", provider="tidal", name="The Beatles")
        album = Album(item_id="a1", provider="tidal", name="Help!", artists=(other,))
        found = extract_cross_referenced_artists("beatles", (), (album,), (track_yesterday,))
        assert found == (beatles, other)

    def test_name_must_contain_a_query_word(self, track_yesterday: Track) -> None:
        assert extract_cross_referenced_artists("yesterday", (), (), (track_yesterday,)) == ()

    def test_short_query_words_are_ignored(self, track_yesterday: Track) -> None:
        # "be" is inside "the beatles" but too short to count
        assert extract_cross_referenced_artists("be", (), (), (track_yesterday,)) == ()

    def test_tracks_come_before_albums(self) -> None:
        album_artist = Artist(item_id="1", provider="p", name="Jazz Trio")
        track_artist = Artist(item_id="2", provider="p", name="Jazz Quartet")
        album = Album(item_id="a", provider="p", name="Live", artists=(album_artist,))
        track = Track(item_id="t", provider="p", name="Take Five", artists=(track_artist,))

        found = extract_cross_referenced_artists("jazz", (), (album,), (track,))
        assert found == (track_artist, album_artist)


# ============================================================================
# rank_unified_results tests
# ============================================================================


class TestRankUnifiedResults:
    def test_adds_cross_referenced_artists(self, beatles: Artist, track_yesterday: Track) -> None:
        results = SearchResults(tracks=(track_yesterday,))
        ranked = rank_unified_results("yesterday beatles", results)

        assert [(r.item, r.score, r.rank) for r in ranked] == [
            (track_yesterday, 70.0, 1),
            (beatles, 25.0, 2),
        ]
        assert [r.cross_referenced for r in ranked] == [False, True]

    def test_rank_items_never_flags(self, pink_floyd_results: Tuple[MediaItem, ...]) -> None:
        assert not any(r.cross_referenced for r in rank_items(pink_floyd_results, "pink floyd"))

    def test_cross_reference_score_follows_config(self, beatles: Artist, track_yesterday: Track) -> None:
        scorer = SearchScorer(config=scoring_config_with(cross_reference_score=5.0))
        ranked = rank_unified_results("yesterday beatles", SearchResults(tracks=(track_yesterday,)), scorer=scorer)
        assert ranked[-1].item == beatles
        assert ranked[-1].score == 5.0

    def test_merges_all_groups(
        self,
        artist_pink_floyd: Artist,
        album_the_wall: Album,
        artist_pink_flyod: Artist,
    ) -> None:
        playlist = Playlist(item_id="p1", provider="spotify", name="Pink Floyd Essentials")
        results = SearchResults(
            artists=(artist_pink_flyod, artist_pink_floyd),
            albums=(album_the_wall,),
            playlists=(playlist,),
        )
        ranked = rank_unified_results("pink floyd", results)

        assert [r.item.name for r in ranked] == ["Pink Floyd", "Pink Floyd Essentials", "The Wall", "Pink Flyod"]
        assert [r.rank for r in ranked] == [1, 2, 3, 4]

    def test_min_score_applies_to_cross_references(self, track_yesterday: Track) -> None:
        ranked = rank_unified_results("yesterday beatles", SearchResults(tracks=(track_yesterday,)), min_score=30.0)
        assert [r.item for r in ranked] == [track_yesterday]
