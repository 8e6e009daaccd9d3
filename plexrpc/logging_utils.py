"""Logging helpers."""

import logging


def resolve_log_level(verbose=False, quiet=False):
    """--quiet wins over --verbose."""
    if quiet:
        return "WARNING"
    if verbose:
        return "DEBUG"
    return "INFO"


def configure_logging(level="INFO"):
    numeric = logging.getLevelName(level.upper()) if isinstance(level, str) else level
    if not isinstance(numeric, int):
        numeric = logging.INFO
    logging.basicConfig(
        level=numeric,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        force=True,
    )
    # chatty third parties
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("werkzeug").setLevel(logging.ERROR)
