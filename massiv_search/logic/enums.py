from enum import Enum


class MediaType(Enum):
    """
    An enumeration of the media types a Music Assistant server can return.
    """

    ARTIST = "artist"
    ALBUM = "album"
    TRACK = "track"
    PLAYLIST = "playlist"
    AUDIOBOOK = "audiobook"
    PODCAST = "podcast"
    PODCAST_EPISODE = "podcast_episode"
    RADIO = "radio"

    @classmethod
    def parse(cls, value: str | None) -> "MediaType":
        """
        Parse a server media type string. Unknown or missing values fall back to TRACK, as the server does.
        """
        if not value:
            return cls.TRACK
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.TRACK
