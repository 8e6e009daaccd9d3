import json
import logging
import os
from enum import Enum

logger = logging.getLogger(__name__)

LOCALES_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "locales")


class MessageId(str, Enum):
    SHOW_DETAILS = "ShowDetails"
    MOVIE_DETAILS = "MovieDetails"
    TRACK_DETAILS = "TrackDetails"
    YOUTUBE_SEARCH = "YoutubeSearch"
    WATCHING_PHOTOS = "WatchingPhotos"


DEFAULT_MESSAGES = {
    MessageId.SHOW_DETAILS: "Show details on Plex",
    MessageId.MOVIE_DETAILS: "Movie details on Plex",
    MessageId.TRACK_DETAILS: "Track details on Plex",
    MessageId.YOUTUBE_SEARCH: "Search on YouTube",
    MessageId.WATCHING_PHOTOS: "Watching photos",
}


class Localizer:
    def __init__(self, catalog=None):
        self.catalog = dict(catalog or {})

    def localize(self, message_id):
        message_id = MessageId(message_id)
        text = self.catalog.get(message_id.value)
        if text:
            return text
        return DEFAULT_MESSAGES[message_id]

    __call__ = localize

    @classmethod
    def load(cls, language, directory=LOCALES_DIR):
        """Load ``<language>.json``; ``fr-FR`` and ``fr_FR`` both resolve to ``fr``."""
        primary = language.replace("_", "-").split("-", 1)[0].lower() if language else "en"
        path = os.path.join(directory, f"{primary}.json")
        try:
            with open(path, encoding="utf-8") as f:
                catalog = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("No usable message catalog for %r (%s), using English", language, e)
            return cls()
        if not isinstance(catalog, dict):
            logger.warning("Message catalog %s is not an object, using English", path)
            return cls()
        return cls({str(k): str(v) for k, v in catalog.items()})
