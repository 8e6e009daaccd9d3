"""Image hosts that turn raw thumbnail bytes into a URL Discord can fetch."""

import logging
import re
import time

import requests

from . import config
from .errors import ArtworkError

logger = logging.getLogger(__name__)


def artwork_filename(key):
    # Plex keys look like /library/metadata/123/thumb/1700000000
    name = re.sub(r"[^A-Za-z0-9]+", "_", key).strip("_")
    return f"{name or 'artwork'}.jpg"


class LitterboxUploader:
    """Temporary public hosting on litterbox.catbox.moe."""

    def __init__(self, expiry=config.LITTERBOX_EXPIRY, timeout=config.LITTERBOX_TIMEOUT, session=None):
        self.expiry = expiry
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()

    def upload(self, data, key):
        resp = self.session.post(
            config.LITTERBOX_URL,
            data={"reqtype": "fileupload", "time": self.expiry},
            files={"fileToUpload": (artwork_filename(key), data, "image/jpeg")},
            timeout=self.timeout,
        )
        if resp.status_code != 200:
            raise ArtworkError(f"Litterbox answered HTTP {resp.status_code}")
        url = resp.text.strip()
        if not url.startswith("https://"):
            raise ArtworkError(f"Litterbox didn't return a link: {url[:80]!r}")
        logger.debug("Uploaded %s to %s", key, url)
        return url


class SelfHostedUploader:
    """Pushes artwork to our own art server (see ``plexrpc.artserver``)."""

    def __init__(self, endpoint, public_url, token, timeout=config.SELFHOSTED_TIMEOUT, session=None):
        self.endpoint = endpoint
        self.public_url = public_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()

    def upload(self, data, key):
        name = artwork_filename(key)
        resp = self.session.post(
            self.endpoint,
            files={"file": (name, data, "image/jpeg")},
            data={"token": self.token, "name": name},
            timeout=self.timeout,
        )
        if resp.status_code != 200:
            raise ArtworkError(f"Art server answered HTTP {resp.status_code}")
        # Cache buster, Discord's media proxy holds on to old images otherwise
        return f"{self.public_url}/art/{name}?t={int(time.time())}"
