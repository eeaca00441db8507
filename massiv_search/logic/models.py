from __future__ import annotations
from typing import Tuple
import attrs

from massiv_search.logic.enums import MediaType


############
# ProviderMapping
############


@attrs.define(frozen=True, slots=True)
class ProviderMapping:
    """
    Where a media item lives on a given provider instance.

    Args:
        item_id: str
        provider_domain: str
        provider_instance: str
        available: bool = True
    """

    item_id: str
    provider_domain: str
    provider_instance: str
    available: bool = True


############
# PodcastMetadata
############


@attrs.define(frozen=True, slots=True)
class PodcastMetadata:
    """
    Descriptive fields of podcasts and podcast episodes. All attributes are optional.

    Args:
        author: str
        publisher: str
        owner: str
        creator: str
        description: str
    """

    author: str | None = None
    publisher: str | None = None
    owner: str | None = None
    creator: str | None = None
    description: str | None = None


############
# Media items
############


@attrs.define(frozen=True, slots=True, kw_only=True)
class _MediaItemBase:
    item_id: str
    provider: str
    name: str
    favorite: bool | None = None
    uri: str | None = None
    provider_mappings: Tuple[ProviderMapping, ...] = ()


@attrs.define(frozen=True, slots=True, kw_only=True)
class Artist(_MediaItemBase):
    """An artist."""

    @property
    def media_type(self) -> MediaType:
        return MediaType.ARTIST


@attrs.define(frozen=True, slots=True, kw_only=True)
class Album(_MediaItemBase):
    """
    An album.

    Args:
        artists: Tuple[Artist, ...]
        album_type: str
        year: int
    """

    artists: Tuple[Artist, ...] = ()
    album_type: str | None = None
    year: int | None = None

    @property
    def media_type(self) -> MediaType:
        return MediaType.ALBUM


@attrs.define(frozen=True, slots=True, kw_only=True)
class Track(_MediaItemBase):
    """
    A track, optionally referencing the album it appears on.

    Args:
        artists: Tuple[Artist, ...]
        album: Album
        duration: int (seconds)
    """

    artists: Tuple[Artist, ...] = ()
    album: Album | None = None
    duration: int | None = None

    @property
    def media_type(self) -> MediaType:
        return MediaType.TRACK


@attrs.define(frozen=True, slots=True, kw_only=True)
class Playlist(_MediaItemBase):
    """A playlist."""

    owner: str | None = None

    @property
    def media_type(self) -> MediaType:
        return MediaType.PLAYLIST


@attrs.define(frozen=True, slots=True, kw_only=True)
class Audiobook(_MediaItemBase):
    """
    An audiobook.

    Args:
        authors: Tuple[str, ...]
        narrators: Tuple[str, ...]
    """

    authors: Tuple[str, ...] = ()
    narrators: Tuple[str, ...] = ()

    @property
    def media_type(self) -> MediaType:
        return MediaType.AUDIOBOOK


@attrs.define(frozen=True, slots=True, kw_only=True)
class Podcast(_MediaItemBase):
    """A podcast."""

    metadata: PodcastMetadata | None = None

    @property
    def media_type(self) -> MediaType:
        return MediaType.PODCAST


@attrs.define(frozen=True, slots=True, kw_only=True)
class PodcastEpisode(_MediaItemBase):
    """A single podcast episode."""

    metadata: PodcastMetadata | None = None

    @property
    def media_type(self) -> MediaType:
        return MediaType.PODCAST_EPISODE


@attrs.define(frozen=True, slots=True, kw_only=True)
class Radio(_MediaItemBase):
    """A radio station."""

    @property
    def media_type(self) -> MediaType:
        return MediaType.RADIO


type MediaItem = Artist | Album | Track | Playlist | Audiobook | Podcast | PodcastEpisode | Radio


############
# SearchResults
############


@attrs.define(frozen=True, slots=True)
class SearchResults:
    """
    One search response from the server, grouped by media type.
    """

    artists: Tuple[Artist, ...] = ()
    albums: Tuple[Album, ...] = ()
    tracks: Tuple[Track, ...] = ()
    playlists: Tuple[Playlist, ...] = ()
    audiobooks: Tuple[Audiobook, ...] = ()
    podcasts: Tuple[Podcast | PodcastEpisode, ...] = ()
    radio: Tuple[Radio, ...] = ()

    def all_items(self) -> Tuple[MediaItem, ...]:
        return (
            *self.artists,
            *self.albums,
            *self.tracks,
            *self.playlists,
            *self.audiobooks,
            *self.radio,
            *self.podcasts,
        )
