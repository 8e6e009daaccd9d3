class PlexRpcError(Exception):
    """Base class for plexrpc failures."""


class PlexError(PlexRpcError):
    """The Plex server could not be queried or answered with garbage."""


class ArtworkError(PlexRpcError):
    """A thumbnail could not be fetched from Plex or uploaded to an image host."""
