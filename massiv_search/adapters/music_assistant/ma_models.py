from typing import Any, Dict, List
from pydantic import BaseModel


class MAProviderMapping(BaseModel):
    item_id: str | int = ""
    provider_domain: str = ""
    provider_instance: str = ""
    available: bool = True


class MAMediaItem(BaseModel):
    """
    A media item as the Music Assistant server serializes it. Only the fields
    search ranking needs are modelled; everything else is ignored.
    """

    item_id: str | int | None = None
    id: str | int | None = None
    provider: str = "unknown"
    name: str = ""
    media_type: str | None = None
    uri: str | None = None
    provider_mappings: List[MAProviderMapping] = []
    metadata: Dict[str, Any] | None = None
    favorite: bool | None = None
    # Album / Track
    artists: List["MAMediaItem"] = []
    album: "MAMediaItem | None" = None
    album_type: str | None = None
    year: int | str | None = None
    duration: float | None = None
    # Playlist
    owner: str | None = None
    # Audiobook
    authors: List[str] = []
    narrators: List[str] = []


MAMediaItem.model_rebuild()


class MASearchResults(BaseModel):
    """
    The grouped result lists of a `music/search` call. Entries stay raw so that
    one malformed entry does not fail the whole response.
    """

    artists: List[Dict[str, Any]] = []
    albums: List[Dict[str, Any]] = []
    tracks: List[Dict[str, Any]] = []
    playlists: List[Dict[str, Any]] = []
    audiobooks: List[Dict[str, Any]] = []
    podcasts: List[Dict[str, Any]] = []
    radio: List[Dict[str, Any]] = []
