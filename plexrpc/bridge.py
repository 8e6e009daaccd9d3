import logging

from . import tracker
from .localization import Localizer
from .presentation import artwork_key, build_payload, profile_for
from .publisher import PresencePublisher
from .thumbnails import resolve_thumbnail

logger = logging.getLogger(__name__)


class PresenceBridge:
    """Turns Plex session snapshots into Discord activity updates, one at a time."""

    def __init__(self, fetch_and_upload, publisher=None, localizer=None, state=None):
        self.fetch_and_upload = fetch_and_upload
        self.publisher = publisher if publisher is not None else PresencePublisher()
        self.localizer = localizer if localizer is not None else Localizer()
        self.state = state if state is not None else tracker.PresenceState()

    def apply(self, snapshot, now=None):
        decision = tracker.track(self.state, snapshot, now)
        if isinstance(decision, tracker.Clear):
            self.publisher.teardown()
            return decision

        media = decision.snapshot.media
        image_url = None
        thumb_key = artwork_key(media)
        if thumb_key:
            image_url = resolve_thumbnail(self.state.thumbnail, thumb_key, self.fetch_and_upload)

        payload = build_payload(
            decision.snapshot,
            image_url,
            self.localizer.localize,
            timestamps=decision.timestamps,
            small_image=decision.small_image,
        )
        self.publisher.ensure_profile(profile_for(media))
        self.publisher.publish(payload)
        return decision

    def clear(self, reason="no active session"):
        if self.state.current is not None:
            logger.info("Nothing is playing, closing connection to Discord.")
        decision = tracker.reset(self.state, reason)
        self.publisher.teardown()
        return decision
