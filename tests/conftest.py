"""Shared fixtures for search scoring tests."""

from typing import Tuple

import pytest

from massiv_search.logic.models import Album, Artist, MediaItem, ProviderMapping, Track
from massiv_search.scoring.scorer import SearchScorer


@pytest.fixture
def scorer() -> SearchScorer:
    return SearchScorer()


@pytest.fixture
def artist_pink_floyd() -> Artist:
    """The exact match, marked favorite."""
    return Artist(item_id="1", provider="spotify", name="Pink Floyd", favorite=True)


@pytest.fixture
def artist_pink_flyod() -> Artist:
    """A misspelled duplicate."""
    return Artist(item_id="2", provider="tidal", name="Pink Flyod")


@pytest.fixture
def album_the_wall(artist_pink_floyd: Artist) -> Album:
    """Album by Pink Floyd, in the user's library through a provider mapping."""
    return Album(
        item_id="10",
        provider="spotify",
        name="The Wall",
        artists=(artist_pink_floyd,),
        year=1979,
        provider_mappings=(
            ProviderMapping(item_id="10", provider_domain="spotify", provider_instance="spotify--abc"),
            ProviderMapping(item_id="77", provider_domain="library", provider_instance="library"),
        ),
    )


@pytest.fixture
def track_money(artist_pink_floyd: Artist) -> Track:
    return Track(
        item_id="100",
        provider="spotify",
        name="Money",
        artists=(artist_pink_floyd,),
        album=Album(item_id="11", provider="spotify", name="The Dark Side of the Moon"),
        duration=382,
    )


@pytest.fixture
def pink_floyd_results(
    artist_pink_flyod: Artist,
    album_the_wall: Album,
    artist_pink_floyd: Artist,
) -> Tuple[MediaItem, ...]:
    """Results of a "pink floyd" search, in server order."""
    return (artist_pink_flyod, album_the_wall, artist_pink_floyd)
