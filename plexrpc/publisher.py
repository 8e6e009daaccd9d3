import logging

from pypresence import Presence

logger = logging.getLogger(__name__)


def connect_presence(client_id):
    rpc = Presence(client_id)
    rpc.connect()
    return rpc


class PresencePublisher:
    """Owns the Discord RPC connection.

    Discord ties the way artwork is rendered to the application id, so the
    connection is made per profile and swapped when the profile changes.
    """

    def __init__(self, connect=connect_presence):
        self._connect = connect
        self._rpc = None
        self._profile = None

    @property
    def is_connected(self):
        return self._rpc is not None

    @property
    def profile(self):
        return self._profile if self._rpc is not None else None

    def ensure_profile(self, profile):
        if self._rpc is not None and self._profile == profile:
            # pypresence has no separate login call, a live connection is the login
            logger.debug("Already connected to Discord with client id %s", profile)
            return
        self.teardown()
        try:
            self._rpc = self._connect(profile)
        except Exception as e:
            # Discord not running, pipe refused, handshake timed out...
            logger.error("Couldn't connect to Discord with client id %s: %s", profile, e)
            self._rpc = None
            self._profile = None
            return
        self._profile = profile
        logger.debug("Connected to Discord with client id %s", profile)

    def publish(self, payload):
        if self._rpc is None:
            logger.warning("No Discord connection, skipping activity update")
            return False
        try:
            self._rpc.update(**payload.to_activity())
        except Exception as e:
            logger.error("An error occurred when setting the activity in Discord: %s", e)
            self._close(self._drop(), clear=False)
            return False
        logger.info("Discord activity set")
        return True

    def teardown(self):
        if self._rpc is None:
            return
        self._close(self._drop(), clear=True)

    def _drop(self):
        rpc = self._rpc
        self._rpc = None
        self._profile = None
        return rpc

    @staticmethod
    def _close(rpc, clear):
        steps = (rpc.clear, rpc.close) if clear else (rpc.close,)
        for step in steps:
            try:
                step()
            except Exception:
                logger.debug("Error while closing the Discord connection", exc_info=True)
