from typing import Iterable

from massiv_search.logic.models import Album, Artist, Audiobook, Track


LIBRARY_PROVIDER = "library"


def join_names(names: Iterable[str]) -> str:

    return ", ".join(name for name in names if name)


def artists_string(item: Album | Track) -> str:

    return join_names(artist.name for artist in item.artists)


def authors_string(audiobook: Audiobook) -> str:

    return join_names(audiobook.authors)


def narrators_string(audiobook: Audiobook) -> str:

    return join_names(audiobook.narrators)


def in_library(album: Album) -> bool:
    """
    An album is in the user's library when it comes from the library provider, or any of its provider mappings points at the library instance.
    """
    if album.provider == LIBRARY_PROVIDER:
        return True

    return any(mapping.provider_instance == LIBRARY_PROVIDER for mapping in album.provider_mappings)


def artist_key(artist: Artist) -> str:

    return f"{artist.provider}:{artist.item_id}"
