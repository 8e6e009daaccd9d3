from __future__ import annotations

from dataclasses import dataclass, field
from urllib.parse import quote_plus

from pypresence.types import ActivityType, StatusDisplayType

from . import config
from .localization import DEFAULT_MESSAGES, MessageId
from .media import Clip, Episode, Movie, Photo, SessionSnapshot, Track, guid_id


@dataclass(frozen=True)
class Button:
    label: str
    url: str


@dataclass
class PresentationPayload:
    activity_type: ActivityType = ActivityType.WATCHING
    details: str | None = None
    state: str | None = None
    large_image: str = config.EMPTY_THUMB
    large_text: str | None = config.ACTIVITY_NAME
    small_image: str | None = None
    small_text: str | None = None
    start: float | None = None
    end: float | None = None
    buttons: list[Button] = field(default_factory=list)
    details_url: str | None = None
    state_url: str | None = None
    large_url: str | None = None

    def to_activity(self) -> dict:
        """Keyword arguments for ``pypresence.Presence.update``."""
        activity = {
            "name": config.ACTIVITY_NAME,
            "activity_type": self.activity_type,
            "status_display_type": StatusDisplayType.DETAILS,
            "details": _truncate(self.details),
            "state": _truncate(self.state),
            "large_image": self.large_image,
            "large_text": _truncate(self.large_text),
            "small_image": self.small_image,
            "small_text": _truncate(self.small_text),
            "start": int(self.start) if self.start is not None else None,
            "end": int(self.end) if self.end is not None else None,
            "details_url": self.details_url,
            "state_url": self.state_url,
            "large_url": self.large_url,
        }
        if self.buttons:
            activity["buttons"] = [{"label": _truncate(b.label, 32), "url": b.url} for b in self.buttons[:2]]
        return {k: v for k, v in activity.items() if v is not None}


def discover_link(guid):
    return f"https://app.plex.tv/desktop/#!/provider/tv.plex.provider.discover/details?key=/library/metadata/{guid_id(guid)}"


def artwork_key(media):
    """Thumbnail key whose artwork represents ``media``, or None when it has none."""
    if isinstance(media, Episode):
        return media.grandparent_thumb or None
    if isinstance(media, Movie):
        return media.thumb or None
    if isinstance(media, Track):
        return media.parent_thumb or None
    return None


def profile_for(media):
    # movies and shows get 3/2 artwork, everything else stays square
    if isinstance(media, (Episode, Movie)):
        return config.WIDE_ART_CLIENT_ID
    return config.PLEX_CLIENT_ID


def build_payload(snapshot: SessionSnapshot, image_url=None, localize=None, timestamps=None, small_image=None):
    if localize is None:
        localize = DEFAULT_MESSAGES.__getitem__
    media = snapshot.media
    payload = PresentationPayload(
        activity_type=ActivityType.LISTENING if isinstance(media, Track) else ActivityType.WATCHING,
        small_image=small_image,
    )
    if timestamps is not None:
        payload.start = timestamps.start
        payload.end = timestamps.end

    if isinstance(media, Episode):
        payload.details = media.title
        payload.state = media.grandparent_title
        payload.large_image = image_url or config.EMPTY_THUMB
        payload.large_text = f"Season {media.parent_index:02d}, Episode {media.index:02d}"
        payload.details_url = discover_link(media.guid)
        payload.state_url = discover_link(media.grandparent_guid)
        payload.buttons.append(Button(localize(MessageId.SHOW_DETAILS), payload.state_url))

    elif isinstance(media, Movie):
        if media.year > 0:
            payload.details = f"{media.title} ({media.year})"
        else:
            payload.details = media.title
        payload.state = ", ".join(media.directors) if media.directors else config.NO_DIRECTOR
        payload.details_url = discover_link(media.guid)
        payload.large_image = image_url or config.EMPTY_THUMB
        payload.large_url = payload.details_url
        payload.buttons.append(Button(localize(MessageId.MOVIE_DETAILS), payload.details_url))

    elif isinstance(media, Track):
        artist = media.original_title or media.grandparent_title
        payload.state = artist
        payload.state_url = f"https://listen.plex.tv/artist/{guid_id(media.grandparent_guid)}"
        payload.details = media.title
        payload.details_url = (
            f"https://listen.plex.tv/track/{guid_id(media.guid)}"
            f"?parentGuid={guid_id(media.parent_guid)}&grandparentGuid={guid_id(media.grandparent_guid)}"
        )
        payload.large_image = image_url or config.EMPTY_THUMB
        payload.large_url = payload.details_url
        payload.large_text = media.parent_title
        payload.buttons.append(Button(localize(MessageId.TRACK_DETAILS), payload.details_url))
        payload.buttons.append(Button(
            localize(MessageId.YOUTUBE_SEARCH),
            f"https://www.youtube.com/results?search_query={quote_plus(artist + ' ' + media.title)}",
        ))

    elif isinstance(media, Photo):
        text = localize(MessageId.WATCHING_PHOTOS)
        payload.state = text
        payload.small_text = text
        payload.details = media.title

    elif isinstance(media, Clip):
        # trailers and prerolls
        payload.state = media.title
        payload.small_text = config.PREROLL_TEXT

    else:
        payload.details = media.title or None

    return payload


def _truncate(text, limit=config.TEXT_LIMIT):
    if text is None:
        return None
    text = str(text)
    if not text:
        return None
    return text if len(text) <= limit else text[: limit - 1] + "…"
