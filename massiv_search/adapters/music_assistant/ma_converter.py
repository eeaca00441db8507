from typing import Any, Dict, List, Tuple

from aletk.utils import get_logger

from massiv_search.domain.parsing_result import ParsedResult, parsing_error, parsing_success, partition_results
from massiv_search.logic.enums import MediaType
from massiv_search.logic.models import (
    Album,
    Artist,
    Audiobook,
    MediaItem,
    Playlist,
    Podcast,
    PodcastEpisode,
    PodcastMetadata,
    ProviderMapping,
    Radio,
    SearchResults,
    Track,
)
from massiv_search.adapters.music_assistant.ma_models import MAMediaItem, MAProviderMapping, MASearchResults


lgr = get_logger(__name__)


# Result group -> media type assumed when an entry carries none
SEARCH_RESULT_GROUPS: Tuple[Tuple[str, MediaType], ...] = (
    ("artists", MediaType.ARTIST),
    ("albums", MediaType.ALBUM),
    ("tracks", MediaType.TRACK),
    ("playlists", MediaType.PLAYLIST),
    ("audiobooks", MediaType.AUDIOBOOK),
    ("podcasts", MediaType.PODCAST),
    ("radio", MediaType.RADIO),
)


def _convert_provider_mapping(mapping: MAProviderMapping) -> ProviderMapping:
    return ProviderMapping(
        item_id=str(mapping.item_id),
        provider_domain=mapping.provider_domain,
        provider_instance=mapping.provider_instance,
        available=mapping.available,
    )


def _parse_year(year: int | str | None) -> int | None:
    if isinstance(year, int):
        return year
    if isinstance(year, str) and year.strip().isdigit():
        return int(year.strip())
    return None


def _metadata_str(metadata: Dict[str, Any], key: str) -> str | None:
    value = metadata.get(key)
    return value if isinstance(value, str) and value else None


def _convert_podcast_metadata(metadata: Dict[str, Any] | None) -> PodcastMetadata | None:
    if metadata is None:
        return None

    return PodcastMetadata(
        author=_metadata_str(metadata, "author"),
        publisher=_metadata_str(metadata, "publisher"),
        owner=_metadata_str(metadata, "owner"),
        creator=_metadata_str(metadata, "creator"),
        description=_metadata_str(metadata, "description"),
    )


def _convert_artist(ma_item: MAMediaItem) -> Artist:
    return Artist(**_common_fields(ma_item))


def _convert_album(ma_item: MAMediaItem) -> Album:
    return Album(
        **_common_fields(ma_item),
        artists=tuple(_convert_artist(artist) for artist in ma_item.artists),
        album_type=ma_item.album_type,
        year=_parse_year(ma_item.year),
    )


def _common_fields(ma_item: MAMediaItem) -> Dict[str, Any]:
    item_id = ma_item.item_id if ma_item.item_id is not None else ma_item.id

    return {
        "item_id": str(item_id) if item_id is not None else "",
        "provider": ma_item.provider,
        "name": ma_item.name,
        "favorite": ma_item.favorite,
        "uri": ma_item.uri,
        "provider_mappings": tuple(_convert_provider_mapping(m) for m in ma_item.provider_mappings),
    }


def convert_ma_media_item(ma_item: MAMediaItem, default_media_type: MediaType = MediaType.TRACK) -> MediaItem:
    """
    Convert a server media item into the matching media item variant.

    :param ma_item: The parsed server payload.
    :param default_media_type: Type to assume when the payload has no `media_type`.
    :return: An Artist, Album, Track, Playlist, Audiobook, Podcast, PodcastEpisode or Radio.
    """
    media_type = MediaType.parse(ma_item.media_type) if ma_item.media_type else default_media_type

    match media_type:
        case MediaType.ARTIST:
            return _convert_artist(ma_item)
        case MediaType.ALBUM:
            return _convert_album(ma_item)
        case MediaType.TRACK:
            return Track(
                **_common_fields(ma_item),
                artists=tuple(_convert_artist(artist) for artist in ma_item.artists),
                album=_convert_album(ma_item.album) if ma_item.album is not None else None,
                duration=int(ma_item.duration) if ma_item.duration is not None else None,
            )
        case MediaType.PLAYLIST:
            return Playlist(**_common_fields(ma_item), owner=ma_item.owner)
        case MediaType.AUDIOBOOK:
            return Audiobook(
                **_common_fields(ma_item),
                authors=tuple(ma_item.authors),
                narrators=tuple(ma_item.narrators),
            )
        case MediaType.PODCAST:
            return Podcast(**_common_fields(ma_item), metadata=_convert_podcast_metadata(ma_item.metadata))
        case MediaType.PODCAST_EPISODE:
            return PodcastEpisode(**_common_fields(ma_item), metadata=_convert_podcast_metadata(ma_item.metadata))
        case MediaType.RADIO:
            return Radio(**_common_fields(ma_item))


def convert_raw_media_item(
    raw_object: Dict[Any, Any],
    default_media_type: MediaType = MediaType.TRACK,
) -> ParsedResult[MediaItem]:
    """
    Convert a raw server media item into a media item, capturing failures as a ParsingError.

    :param raw_object: One media item from a server response.
    :param default_media_type: Type to assume when the payload has no `media_type`.
    :return: A ParsedResult with the media item or the error.
    """
    try:
        ma_item = MAMediaItem(**raw_object)
        return parsing_success(convert_ma_media_item(ma_item, default_media_type))

    except Exception as e:
        return parsing_error(f"Failed to parse media item: {e}", raw_object)


def convert_search_results(raw_object: Dict[Any, Any]) -> SearchResults:
    """
    Convert a raw `music/search` response into SearchResults. Entries that fail to
    parse are logged and skipped; items are grouped by their own media type.

    :param raw_object: The response payload.
    :return: The converted SearchResults.
    """
    ma_results = MASearchResults(**raw_object)

    items: List[MediaItem] = []
    for group, default_media_type in SEARCH_RESULT_GROUPS:
        converted, errors = partition_results(
            convert_raw_media_item(raw_item, default_media_type) for raw_item in getattr(ma_results, group)
        )
        items.extend(converted)
        for error in errors:
            lgr.warning(f"Skipping {group} entry: {error['message']}")

    return SearchResults(
        artists=tuple(item for item in items if isinstance(item, Artist)),
        albums=tuple(item for item in items if isinstance(item, Album)),
        tracks=tuple(item for item in items if isinstance(item, Track)),
        playlists=tuple(item for item in items if isinstance(item, Playlist)),
        audiobooks=tuple(item for item in items if isinstance(item, Audiobook)),
        podcasts=tuple(item for item in items if isinstance(item, (Podcast, PodcastEpisode))),
        radio=tuple(item for item in items if isinstance(item, Radio)),
    )
