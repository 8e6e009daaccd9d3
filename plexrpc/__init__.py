"""Plex -> Discord rich presence bridge."""

__version__ = "0.1.0"
