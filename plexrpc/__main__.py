import argparse
import logging
import sys
import time

import requests
from pydantic import ValidationError

from . import __version__
from .artserver import create_app, start_art_server
from .bridge import PresenceBridge
from .config import Settings
from .errors import PlexError
from .localization import Localizer
from .logging_utils import configure_logging, resolve_log_level
from .plex import PlexServer
from .thumbnails import ArtworkFetcher
from .uploads import LitterboxUploader, SelfHostedUploader

logger = logging.getLogger("plexrpc")


def build_parser():
    parser = argparse.ArgumentParser(prog="plexrpc", description="Show what Plex is playing on your Discord profile.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--verbose", action="store_true", help="Enable debug output")
    parser.add_argument("--quiet", action="store_true", help="Only show warnings and errors")
    parser.add_argument("--once", action="store_true", help="Run a single update cycle and exit")
    return parser


def build_uploader(settings):
    if settings.uploader == "selfhosted":
        start_art_server(create_app(settings.art_folder, settings.art_token), port=settings.art_port)
        return SelfHostedUploader(
            f"http://127.0.0.1:{settings.art_port}/upload",
            settings.art_public_url,
            settings.art_token,
        )
    return LitterboxUploader()


def poll_once(plex, bridge, username=None):
    try:
        snapshot = plex.current_session(username)
    except (PlexError, requests.RequestException) as e:
        logger.error("Couldn't read sessions from Plex: %s", e)
        bridge.clear("plex unreachable")
        return None
    if snapshot is None:
        return bridge.clear()
    return bridge.apply(snapshot)


def run_presence(settings, once=False):
    plex = PlexServer(settings.plex_url, settings.plex_token)
    bridge = PresenceBridge(
        ArtworkFetcher(plex, build_uploader(settings)),
        localizer=Localizer.load(settings.language),
    )
    logger.info("Watching %s for sessions every %ss", settings.plex_url, settings.poll_interval)
    try:
        while True:
            poll_once(plex, bridge, settings.plex_username)
            if once:
                break
            time.sleep(settings.poll_interval)
    except KeyboardInterrupt:
        logger.info("Stopping...")
    finally:
        bridge.clear("shutting down")


def main(argv=None):
    args = build_parser().parse_args(argv)
    configure_logging(resolve_log_level(verbose=args.verbose, quiet=args.quiet))
    try:
        settings = Settings.from_env()
    except ValidationError as e:
        logger.error("Invalid configuration: %s", e)
        return 2
    if not settings.plex_token:
        logger.warning("PLEX_TOKEN is not set, Plex will probably refuse the requests")
    run_presence(settings, once=args.once)
    return 0


if __name__ == "__main__":
    sys.exit(main())
