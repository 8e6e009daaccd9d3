import logging

import requests

from . import config
from .errors import ArtworkError

logger = logging.getLogger(__name__)


def resolve_thumbnail(cache, thumb_key, fetch_and_upload):
    """Return a public URL for a Plex thumbnail key, or ``config.EMPTY_THUMB``.

    Artwork behind a given key never changes, so a successful upload is reused
    for as long as the key stays the same. Failures are remembered as the empty
    marker and retried on the next call.
    """
    if not thumb_key:
        return config.EMPTY_THUMB

    if cache.source_key == thumb_key and cache.url != config.EMPTY_THUMB:
        return cache.url

    cache.source_key = thumb_key
    try:
        url = fetch_and_upload(thumb_key)
    except (ArtworkError, requests.RequestException, OSError) as e:
        logger.warning("Couldn't resolve thumbnail %s (%s)", thumb_key, e)
        cache.url = config.EMPTY_THUMB
        return config.EMPTY_THUMB

    cache.url = url
    return url


class ArtworkFetcher:
    """Fetches a thumbnail from Plex and hands the bytes to an image host."""

    def __init__(self, plex, uploader):
        self.plex = plex
        self.uploader = uploader

    def __call__(self, thumb_key):
        data = self.plex.fetch_thumbnail(thumb_key)
        if not data:
            raise ArtworkError(f"Plex returned an empty thumbnail for {thumb_key}")
        return self.uploader.upload(data, thumb_key)
