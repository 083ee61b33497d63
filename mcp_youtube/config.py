"""Configuration constants and .env loading.

WHY: Binary locations, the default subtitle language, and search and
screenshot limits differ between machines. Keeping them as plain
module-level values in one place makes them easy to find and override.

HOW: python-dotenv loads the .env file on import. Each constant is read
from the environment with a default. Integer values go through
_env_int() so a typo in .env fails loudly at startup.

RULES:
- All defaults can be overridden via environment variables
- Integer settings raise ValueError naming the variable when unparsable
- Binary names are looked up on PATH unless given as absolute paths
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

# Load .env from the working directory the server is launched from
load_dotenv()


def _env_int(name: str, default: int) -> int:
    """Read an integer environment variable, falling back to ``default``."""
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(
            "Environment variable {} must be an integer, got {!r}".format(name, raw)
        ) from None


# ---------------------------------------------------------------------------
# External binaries
# ---------------------------------------------------------------------------

YTDLP_BINARY = os.getenv("YTDLP_BINARY", "yt-dlp")
FFMPEG_BINARY = os.getenv("FFMPEG_BINARY", "ffmpeg")

COMMAND_TIMEOUT_S = _env_int("COMMAND_TIMEOUT_S", 600)
"""Seconds before a spawned binary is killed. 0 disables the limit."""

# ---------------------------------------------------------------------------
# Tool defaults
# ---------------------------------------------------------------------------

DEFAULT_SUBTITLE_LANGUAGE = os.getenv("DEFAULT_SUBTITLE_LANGUAGE", "en")
DEFAULT_MAX_RESULTS = _env_int("DEFAULT_MAX_RESULTS", 10)
MAX_SEARCH_RESULTS = _env_int("MAX_SEARCH_RESULTS", 50)
SCREENSHOT_MAX_HEIGHT = _env_int("SCREENSHOT_MAX_HEIGHT", 720)

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
