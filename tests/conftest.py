"""Test configuration: fake Discord handles and snapshot builders."""

from __future__ import annotations

import pytest

from plexrpc.media import Episode, Movie, Photo, PlayState, SessionSnapshot, Track


class FakeRpc:
    def __init__(self, client_id: str, fail_update: bool = False) -> None:
        self.client_id = client_id
        self.fail_update = fail_update
        self.updates: list[dict] = []
        self.cleared = 0
        self.closed = 0

    def update(self, **kwargs) -> None:
        if self.fail_update:
            raise ConnectionResetError("pipe closed")
        self.updates.append(kwargs)

    def clear(self) -> None:
        self.cleared += 1

    def close(self) -> None:
        self.closed += 1


class FakeConnector:
    """Stands in for ``connect_presence`` and remembers every handle it made."""

    def __init__(self, fail: bool = False, fail_update: bool = False) -> None:
        self.fail = fail
        self.fail_update = fail_update
        self.handles: list[FakeRpc] = []

    def __call__(self, client_id: str) -> FakeRpc:
        if self.fail:
            raise ConnectionRefusedError("Discord is not running")
        rpc = FakeRpc(client_id, fail_update=self.fail_update)
        self.handles.append(rpc)
        return rpc

    @property
    def updates(self) -> list[dict]:
        return [u for rpc in self.handles for u in rpc.updates]

    @property
    def closes(self) -> int:
        return sum(rpc.closed for rpc in self.handles)


@pytest.fixture
def connector() -> FakeConnector:
    return FakeConnector()


def episode_snapshot(state=PlayState.PLAYING, view_offset_ms=0, guid="plex://episode/ep1", **overrides):
    fields = dict(
        guid=guid,
        title="Pilot",
        duration_ms=1_800_000,
        grandparent_title="Show X",
        grandparent_guid="plex://show/show1",
        grandparent_thumb="/library/metadata/10/thumb/1700000000",
        index=1,
        parent_index=1,
    )
    fields.update(overrides)
    return SessionSnapshot(Episode(**fields), state=state, view_offset_ms=view_offset_ms)


def movie_snapshot(state=PlayState.PLAYING, **overrides):
    fields = dict(
        guid="plex://movie/dune",
        title="Dune",
        year=2021,
        duration_ms=9_300_000,
        thumb="/library/metadata/20/thumb/1700000000",
    )
    fields.update(overrides)
    return SessionSnapshot(Movie(**fields), state=state)


def track_snapshot(state=PlayState.PLAYING, view_offset_ms=0, **overrides):
    fields = dict(
        guid="plex://track/t1",
        title="Song & Dance",
        duration_ms=240_000,
        parent_title="The Album",
        parent_guid="plex://album/a1",
        parent_thumb="/library/metadata/31/thumb/1700000000",
        grandparent_title="The Band",
        grandparent_guid="plex://artist/b1",
    )
    fields.update(overrides)
    return SessionSnapshot(Track(**fields), state=state, view_offset_ms=view_offset_ms)


def photo_snapshot(state=PlayState.PLAYING, title="Beach.jpg"):
    return SessionSnapshot(Photo(guid="plex://photo/p1", title=title), state=state)
