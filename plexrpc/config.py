import os
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# =======================
# CONFIG
# =======================
PLEX_CLIENT_ID = "803556010307616788"
# Crunchyroll's application id makes Discord render 3/2 artwork instead of cropping it square
WIDE_ART_CLIENT_ID = "981509069309354054"

ACTIVITY_NAME = "Plex"
EMPTY_THUMB = "plex"  # Discord asset key, also the "artwork unavailable" marker
CAMERA_IMAGE = "camera"
PREROLL_TEXT = "Preroll"
NO_DIRECTOR = "(⌐■_■)"

TIME_RESET_THRESHOLD = 4  # seconds: end time drift that counts as a seek / media change
TEXT_LIMIT = 128  # Discord rejects longer strings

PLEX_TIMEOUT = 5.0  # seconds
THUMB_WIDTH = 450
THUMB_HEIGHT = 253

LITTERBOX_URL = "https://litterbox.catbox.moe/resources/internals/api.php"
LITTERBOX_EXPIRY = "1h"
LITTERBOX_TIMEOUT = 10.0
SELFHOSTED_TIMEOUT = 1.0

POLL_INTERVAL = 5.0  # seconds

class Settings(BaseSettings):
    """Runtime settings read from the environment (or a ``.env`` file).

    Bad values are rejected at startup so the polling loop never sees them.
    """

    plex_url: str = Field("http://127.0.0.1:32400", validation_alias="PLEX_URL")
    plex_token: str = Field("", validation_alias="PLEX_TOKEN")
    plex_username: str | None = Field(None, validation_alias="PLEX_USERNAME")
    language: str = Field("en", validation_alias="PLEXRPC_LANGUAGE")
    poll_interval: float = Field(
        POLL_INTERVAL, gt=0, allow_inf_nan=False, validation_alias="PLEXRPC_POLL_INTERVAL"
    )
    uploader: Literal["litterbox", "selfhosted"] = Field("litterbox", validation_alias="PLEXRPC_UPLOADER")
    art_folder: str = Field(
        os.path.join(os.path.expanduser("~"), ".plexrpc", "art"), validation_alias="PLEXRPC_ART_FOLDER"
    )
    art_public_url: str = Field("http://127.0.0.1:7000", validation_alias="PLEXRPC_ART_PUBLIC_URL")
    art_token: str = Field("", validation_alias="PLEXRPC_ART_TOKEN")
    art_port: int = Field(7000, ge=1, le=65535, validation_alias="PLEXRPC_ART_PORT")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("plex_url", "art_public_url")
    @classmethod
    def strip_trailing_slash(cls, value):
        return value.rstrip("/")

    @field_validator("plex_username", mode="before")
    @classmethod
    def blank_username_means_anyone(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("uploader", mode="before")
    @classmethod
    def normalize_uploader(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @classmethod
    def from_env(cls, environ=None):
        """Load from the process environment, or from ``environ`` when given."""
        if environ is None:
            return cls()
        return cls.model_validate({k: v for k, v in environ.items() if v != ""})
