"""Tests for the Plex session source."""

from __future__ import annotations

import pytest
import requests

from plexrpc.errors import ArtworkError, PlexError
from plexrpc.media import Episode, Movie, OtherMedia, PlayState, Track
from plexrpc.plex import PlexServer, parse_session


class FakeResponse:
    def __init__(self, status_code=200, payload=None, content=b"") -> None:
        self.status_code = status_code
        self._payload = payload
        self.content = content

    def json(self):
        if self._payload is None:
            raise ValueError("not json")
        return self._payload


class FakeSession:
    def __init__(self, response=None, error=None) -> None:
        self.response = response
        self.error = error
        self.requests: list[tuple[str, dict]] = []

    def get(self, url, **kwargs):
        self.requests.append((url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response


EPISODE = {
    "type": "episode",
    "guid": "plex://episode/ep1",
    "title": "Pilot",
    "grandparentTitle": "Show X",
    "grandparentGuid": "plex://show/show1",
    "grandparentThumb": "/library/metadata/10/thumb/1",
    "index": 1,
    "parentIndex": 1,
    "duration": 1800000,
    "viewOffset": 12000,
    "Player": {"state": "playing"},
    "User": {"title": "alice"},
}

TRACK = {
    "type": "track",
    "guid": "plex://track/t1",
    "title": "Song",
    "originalTitle": "",
    "parentTitle": "Album",
    "parentGuid": "plex://album/a1",
    "parentThumb": "/library/metadata/31/thumb/1",
    "grandparentTitle": "Band",
    "grandparentGuid": "plex://artist/b1",
    "duration": 240000,
    "Player": {"state": "paused"},
    "User": {"title": "Bob"},
}


def sessions_response(*items):
    return FakeResponse(payload={"MediaContainer": {"size": len(items), "Metadata": list(items)}})


def test_parse_episode() -> None:
    snapshot = parse_session(EPISODE)

    assert isinstance(snapshot.media, Episode)
    assert snapshot.media.grandparent_title == "Show X"
    assert snapshot.media.parent_index == 1
    assert snapshot.state == PlayState.PLAYING
    assert snapshot.view_offset_ms == 12000
    assert snapshot.kind == "episode"


def test_parse_movie_directors() -> None:
    snapshot = parse_session(
        {
            "type": "movie",
            "guid": "plex://movie/m1",
            "title": "Dune",
            "year": 2021,
            "Director": [{"tag": "Denis Villeneuve"}, {"id": 3}],
            "Player": {"state": "buffering"},
        }
    )

    assert isinstance(snapshot.media, Movie)
    assert snapshot.media.directors == ("Denis Villeneuve",)
    assert snapshot.state == PlayState.BUFFERING


def test_parse_unknown_type_and_state() -> None:
    snapshot = parse_session({"type": "livetv", "guid": "x", "title": "News", "Player": {"state": "weird"}})

    assert isinstance(snapshot.media, OtherMedia)
    assert snapshot.state == PlayState.STOPPED
    assert snapshot.media.duration_ms == 0


def test_session_request_shape() -> None:
    session = FakeSession(sessions_response(EPISODE, TRACK))
    plex = PlexServer("http://plex:32400/", "tok", session=session)

    snapshot = plex.current_session()

    assert isinstance(snapshot.media, Episode)
    url, kwargs = session.requests[0]
    assert url == "http://plex:32400/status/sessions"
    assert kwargs["headers"]["X-Plex-Token"] == "tok"
    assert kwargs["headers"]["Accept"] == "application/json"
    assert kwargs["timeout"] == 5.0


def test_current_session_filters_by_user() -> None:
    plex = PlexServer("http://plex", "tok", session=FakeSession(sessions_response(EPISODE, TRACK)))

    assert isinstance(plex.current_session("bob").media, Track)
    assert isinstance(plex.current_session().media, Episode)
    assert plex.current_session("carol") is None


def test_no_sessions() -> None:
    plex = PlexServer("http://plex", "tok", session=FakeSession(FakeResponse(payload={"MediaContainer": {"size": 0}})))
    assert plex.current_session() is None
    assert plex.current_session("alice") is None


@pytest.mark.parametrize(
    "session",
    [
        FakeSession(FakeResponse(status_code=401, payload={})),
        FakeSession(FakeResponse(payload=None)),
        FakeSession(error=requests.ConnectionError("refused")),
    ],
)
def test_session_errors_raise_plex_error(session) -> None:
    with pytest.raises(PlexError):
        PlexServer("http://plex", "tok", session=session).current_session()


def test_fetch_thumbnail() -> None:
    session = FakeSession(FakeResponse(content=b"\xff\xd8jpeg"))
    plex = PlexServer("http://plex", "tok", session=session)

    assert plex.fetch_thumbnail("/library/metadata/10/thumb/1") == b"\xff\xd8jpeg"
    url, kwargs = session.requests[0]
    assert url == "http://plex/photo/:/transcode"
    assert kwargs["params"]["url"] == "/library/metadata/10/thumb/1"
    assert kwargs["params"]["width"] == 450
    assert kwargs["params"]["height"] == 253
    assert kwargs["timeout"] == 5.0


def test_fetch_thumbnail_http_error() -> None:
    plex = PlexServer("http://plex", "tok", session=FakeSession(FakeResponse(status_code=404)))
    with pytest.raises(ArtworkError):
        plex.fetch_thumbnail("/missing")
