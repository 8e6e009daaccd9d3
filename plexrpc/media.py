"""Session snapshots as read from the media server.

A snapshot pairs one media item with the playback fields of the session that
is playing it. Media items form a closed set of kinds; each kind only carries
the metadata the presence display needs for it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from urllib.parse import quote, urlparse


class PlayState(str, Enum):
    PLAYING = "playing"
    PAUSED = "paused"
    BUFFERING = "buffering"
    STOPPED = "stopped"

    @classmethod
    def parse(cls, value):
        try:
            return cls(str(value).lower())
        except ValueError:
            return cls.STOPPED


@dataclass(frozen=True)
class Media:
    guid: str
    title: str = ""
    duration_ms: int = 0
    thumb: str = ""

    kind = "other"


@dataclass(frozen=True)
class Episode(Media):
    grandparent_title: str = ""
    grandparent_guid: str = ""
    grandparent_thumb: str = ""
    index: int = 0
    parent_index: int = 0

    kind = "episode"


@dataclass(frozen=True)
class Movie(Media):
    year: int = 0
    directors: tuple[str, ...] = field(default_factory=tuple)

    kind = "movie"


@dataclass(frozen=True)
class Track(Media):
    original_title: str = ""
    parent_title: str = ""
    parent_guid: str = ""
    parent_thumb: str = ""
    grandparent_title: str = ""
    grandparent_guid: str = ""

    kind = "track"


@dataclass(frozen=True)
class Photo(Media):
    kind = "photo"


@dataclass(frozen=True)
class Clip(Media):
    kind = "clip"


@dataclass(frozen=True)
class OtherMedia(Media):
    kind = "other"


@dataclass(frozen=True)
class SessionSnapshot:
    media: Media
    state: PlayState = PlayState.PLAYING
    view_offset_ms: int = 0

    @property
    def kind(self) -> str:
        return self.media.kind


def guid_id(guid: str) -> str:
    """Last path segment of a GUID such as ``plex://episode/5d9c08...``."""
    if not guid:
        return ""
    path = urlparse(guid).path or guid
    return quote(path.rstrip("/").rsplit("/", 1)[-1])
