"""Decides whether a new playback sample is worth a presence update.

Plex reports the same session over and over while it plays. ``track`` folds
each sample into a ``PresenceState`` and answers with either ``Clear`` (drop
the presence) or ``Publish`` (send it, with timestamps when the media has a
timeline). The state object belongs to the caller and must be threaded through
consecutive calls for a single session.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field

from . import config
from .media import PlayState, SessionSnapshot

logger = logging.getLogger(__name__)


@dataclass
class Alteration:
    item: bool = False
    time: bool = False


@dataclass
class ThumbnailCache:
    source_key: str | None = None
    url: str = config.EMPTY_THUMB


@dataclass
class PresenceState:
    current: SessionSnapshot | None = None
    play_state: PlayState | None = None
    last_end: float = 0.0
    alteration: Alteration = field(default_factory=Alteration)
    thumbnail: ThumbnailCache = field(default_factory=ThumbnailCache)


@dataclass(frozen=True)
class Timestamps:
    start: float
    end: float


@dataclass(frozen=True)
class Clear:
    reason: str


@dataclass(frozen=True)
class Publish:
    snapshot: SessionSnapshot
    timestamps: Timestamps | None = None
    small_image: str | None = None


def track(state: PresenceState, snapshot: SessionSnapshot, now: float | None = None):
    """Fold ``snapshot`` into ``state`` and return a ``Clear`` or ``Publish``."""
    if now is None:
        now = time.time()
    state.alteration.item = False
    state.alteration.time = False

    if state.current is None or state.current.media.guid != snapshot.media.guid:
        state.current = snapshot
        state.alteration.item = True

    if state.play_state != snapshot.state:
        state.play_state = snapshot.state
        state.alteration.time = True

    if snapshot.state == PlayState.PAUSED and state.alteration.time:
        logger.info("Paused, closing connection to Discord.")
        return _clear(state, "paused")

    if snapshot.state in (PlayState.PLAYING, PlayState.BUFFERING) and snapshot.kind != "photo":
        progress = snapshot.view_offset_ms // 1000
        start = now - progress
        end = start + snapshot.media.duration_ms / 1000

        if abs(state.last_end - end) > config.TIME_RESET_THRESHOLD:
            logger.info("A seek or a media change was detected, updating state...")
            state.alteration.time = True
            state.last_end = end
        return Publish(snapshot, Timestamps(start, end))

    if snapshot.kind == "photo":
        return Publish(snapshot, small_image=config.CAMERA_IMAGE)

    logger.info("Nothing is playing, closing connection to Discord.")
    return _clear(state, "nothing playing")


def reset(state: PresenceState, reason: str) -> Clear:
    """Forget the active session without a new sample, e.g. when Plex reports none."""
    state.alteration.item = False
    state.alteration.time = False
    return _clear(state, reason)


def _clear(state, reason):
    state.current = None
    return Clear(reason)
