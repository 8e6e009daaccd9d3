"""Minimal Plex Media Server client: active sessions and thumbnail bytes."""

import logging

import requests

from . import config
from .errors import ArtworkError, PlexError
from .media import Clip, Episode, Movie, OtherMedia, Photo, PlayState, SessionSnapshot, Track

logger = logging.getLogger(__name__)


class PlexServer:
    def __init__(self, url, token, timeout=config.PLEX_TIMEOUT, session=None):
        self.url = url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()

    def _metadata(self):
        try:
            resp = self.session.get(
                f"{self.url}/status/sessions",
                headers={"Accept": "application/json", "X-Plex-Token": self.token},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise PlexError(f"Couldn't reach Plex at {self.url}: {e}") from e
        if resp.status_code != 200:
            raise PlexError(f"Plex answered {resp.status_code} for /status/sessions")
        try:
            data = resp.json()
        except ValueError as e:
            raise PlexError("Plex sent a session list that isn't JSON") from e

        container = data.get("MediaContainer") or {}
        return container.get("Metadata") or []

    def current_session(self, username=None):
        for item in self._metadata():
            user = (item.get("User") or {}).get("title", "")
            if username is None or user.lower() == username.lower():
                return parse_session(item)
        return None

    def fetch_thumbnail(self, thumb_key):
        params = {
            "width": config.THUMB_WIDTH,
            "height": config.THUMB_HEIGHT,
            "minSize": 1,
            "upscale": 1,
            "X-Plex-Token": self.token,
            "url": thumb_key,
        }
        resp = self.session.get(f"{self.url}/photo/:/transcode", params=params, timeout=self.timeout)
        if resp.status_code != 200:
            raise ArtworkError(f"Couldn't get thumbnail from Plex (HTTP {resp.status_code})")
        return resp.content


def parse_session(item):
    """Build a ``SessionSnapshot`` from one ``MediaContainer.Metadata`` entry."""
    kind = item.get("type", "")
    common = {
        "guid": item.get("guid") or item.get("ratingKey") or "",
        "title": item.get("title", ""),
        "duration_ms": _int(item.get("duration")),
        "thumb": item.get("thumb", ""),
    }

    if kind == "episode":
        media = Episode(
            grandparent_title=item.get("grandparentTitle", ""),
            grandparent_guid=item.get("grandparentGuid", ""),
            grandparent_thumb=item.get("grandparentThumb", ""),
            index=_int(item.get("index")),
            parent_index=_int(item.get("parentIndex")),
            **common,
        )
    elif kind == "movie":
        media = Movie(
            year=_int(item.get("year")),
            directors=tuple(d["tag"] for d in item.get("Director") or [] if d.get("tag")),
            **common,
        )
    elif kind == "track":
        media = Track(
            original_title=item.get("originalTitle", ""),
            parent_title=item.get("parentTitle", ""),
            parent_guid=item.get("parentGuid", ""),
            parent_thumb=item.get("parentThumb", ""),
            grandparent_title=item.get("grandparentTitle", ""),
            grandparent_guid=item.get("grandparentGuid", ""),
            **common,
        )
    elif kind == "photo":
        media = Photo(**common)
    elif kind == "clip":
        media = Clip(**common)
    else:
        logger.debug("Unknown Plex media type %r", kind)
        media = OtherMedia(**common)

    player = item.get("Player") or {}
    return SessionSnapshot(
        media=media,
        state=PlayState.parse(player.get("state", "stopped")),
        view_offset_ms=_int(item.get("viewOffset")),
    )


def _int(value):
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0
