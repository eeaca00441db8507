from massiv_search.adapters.music_assistant.ma_converter import (
    convert_ma_media_item,
    convert_raw_media_item,
    convert_search_results,
)
from massiv_search.adapters.music_assistant.ma_models import MAMediaItem, MAProviderMapping, MASearchResults

__all__ = [
    "MAMediaItem",
    "MAProviderMapping",
    "MASearchResults",
    "convert_ma_media_item",
    "convert_raw_media_item",
    "convert_search_results",
]
