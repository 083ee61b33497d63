"""The three YouTube operations behind the MCP tools.

WHY: The server layer should only translate between MCP and Python.
The actual work (spawning yt-dlp/ffmpeg in a scratch directory, reading
what they wrote, cleaning subtitles, encoding the frame) lives here so it
can be tested with a fake runner and reused outside the server.

HOW: Each operation opens a tempfile.TemporaryDirectory, runs the
binaries with that directory as cwd (or output target), collects the
result, and lets the context manager delete the directory.

RULES:
- Scratch directories are removed on success and on failure
- Subtitle files are read as UTF-8 with undecodable bytes replaced
- Each subtitle block is "{filename}\\n====================\\n{text}";
  blocks are joined with "\\n" in filename order
- Argument validation raises ValueError before any process is spawned
- Process failures propagate as runner.CommandError subclasses
"""

from __future__ import annotations

import base64
import logging
import re
import tempfile
from pathlib import Path
from typing import List, Optional

from mcp_youtube.config import (
    DEFAULT_MAX_RESULTS,
    DEFAULT_SUBTITLE_LANGUAGE,
    FFMPEG_BINARY,
    MAX_SEARCH_RESULTS,
    SCREENSHOT_MAX_HEIGHT,
    YTDLP_BINARY,
)
from mcp_youtube.core.vtt import clean_captions
from mcp_youtube.runner import run_command

logger = logging.getLogger(__name__)

FILE_SEPARATOR = "===================="

SEARCH_PRINT_FIELDS = "title,url,description,duration,view_count,uploader"

# [[HH:]MM:]SS[.fff], the subset of ffmpeg durations we accept
_TIMESTAMP_RE = re.compile(
    r"^(?:(?:\d{1,2}:)?[0-5]?\d:)?[0-5]?\d(?:\.\d{1,3})?$", re.ASCII
)

# Leftovers in the scratch dir that are not the downloaded video
_NON_VIDEO_SUFFIXES = (".jpg", ".json", ".part")


class VideoNotFoundError(RuntimeError):
    """Raised when yt-dlp or ffmpeg finished but left no usable file.

    WHY: A zero exit code does not guarantee output (e.g. a format filter
    that matched nothing). The screenshot tool needs a clear message
    instead of a FileNotFoundError on a scratch path.
    """


def format_subtitle_block(filename: str, text: str) -> str:
    """Render one cleaned subtitle file with its filename header."""
    return "{}\n{}\n{}".format(filename, FILE_SEPARATOR, text)


def collect_subtitles(directory: Path) -> str:
    """Clean every subtitle file in ``directory`` and join the blocks.

    Returns "" when the directory holds no files.
    """
    blocks: List[str] = []
    for path in sorted(p for p in Path(directory).iterdir() if p.is_file()):
        raw = path.read_text(encoding="utf-8", errors="replace")
        result = clean_captions(raw)
        if not result.recognized:
            logger.warning("%s is not a WebVTT document, no text extracted", path.name)
        elif result.is_empty:
            logger.info("%s contains no caption text", path.name)
        blocks.append(format_subtitle_block(path.name, result.text))
    return "\n".join(blocks)


async def download_subtitles(url: str, language: str = DEFAULT_SUBTITLE_LANGUAGE) -> str:
    """Download a video's subtitles and return them as cleaned text.

    Both uploaded and auto-generated subtitles are requested; yt-dlp
    writes one .vtt file per track it finds.

    Args:
        url: YouTube video URL (anything yt-dlp accepts).
        language: Subtitle language code passed to --sub-lang.

    Returns:
        One block per subtitle file, or "" if the video has none.
    """
    with tempfile.TemporaryDirectory(prefix="youtube-") as tmp:
        await run_command(
            YTDLP_BINARY,
            [
                "--write-sub",
                "--write-auto-sub",
                "--sub-lang",
                language,
                "--skip-download",
                "--sub-format",
                "vtt",
                url,
            ],
            cwd=tmp,
        )
        content = collect_subtitles(Path(tmp))

    logger.info("Downloaded subtitles for %s (%d chars)", url, len(content))
    return content


def _validate_search(query: str, max_results: int) -> None:
    if not query or not query.strip():
        raise ValueError("Search query must not be empty")
    if isinstance(max_results, bool) or not isinstance(max_results, int):
        raise ValueError("max_results must be an integer, got {!r}".format(max_results))
    if not 1 <= max_results <= MAX_SEARCH_RESULTS:
        raise ValueError(
            "max_results must be between 1 and {}, got {}".format(
                MAX_SEARCH_RESULTS, max_results
            )
        )


async def search_videos(query: str, max_results: int = DEFAULT_MAX_RESULTS) -> str:
    """Search YouTube and return yt-dlp's printed listing verbatim.

    yt-dlp prints the fields in SEARCH_PRINT_FIELDS, one per line, for
    each result.
    """
    _validate_search(query, max_results)

    with tempfile.TemporaryDirectory(prefix="youtube-search-") as tmp:
        result = await run_command(
            YTDLP_BINARY,
            [
                "ytsearch{}:{}".format(max_results, query),
                "--print",
                SEARCH_PRINT_FIELDS,
                "--no-playlist",
            ],
            cwd=tmp,
        )

    logger.info("Search %r returned %d bytes", query, len(result.stdout))
    return result.stdout


def validate_timestamp(timestamp: str) -> str:
    """Return the stripped timestamp, or raise ValueError if ffmpeg can't seek to it."""
    value = (timestamp or "").strip()
    if not _TIMESTAMP_RE.match(value):
        raise ValueError(
            "Invalid timestamp {!r}, expected HH:MM:SS (e.g. '01:30:45')".format(timestamp)
        )
    return value


def find_video_file(directory: Path) -> Optional[Path]:
    """Return the downloaded video in ``directory``, skipping thumbnails and metadata."""
    for path in sorted(Path(directory).iterdir()):
        if path.is_file() and not path.name.endswith(_NON_VIDEO_SUFFIXES):
            return path
    return None


async def get_screenshot(url: str, timestamp: str) -> str:
    """Grab one frame of a video at ``timestamp`` as a JPEG data URI.

    The video is downloaded at no more than SCREENSHOT_MAX_HEIGHT lines
    to keep the download small, then ffmpeg extracts a single frame.

    Returns:
        "data:image/jpeg;base64,<payload>"
    """
    timestamp = validate_timestamp(timestamp)

    with tempfile.TemporaryDirectory(prefix="youtube-screenshot-") as tmp:
        tmp_dir = Path(tmp)
        await run_command(
            YTDLP_BINARY,
            [
                url,
                "--output",
                str(tmp_dir / "video.%(ext)s"),
                "--format",
                "best[height<={}]".format(SCREENSHOT_MAX_HEIGHT),
                "--no-playlist",
            ],
            cwd=tmp_dir,
        )

        video_path = find_video_file(tmp_dir)
        if video_path is None:
            raise VideoNotFoundError("No video was downloaded")

        screenshot_path = tmp_dir / "screenshot.jpg"
        await run_command(
            FFMPEG_BINARY,
            [
                "-ss", timestamp,
                "-i", str(video_path),
                "-vframes", "1",
                "-q:v", "2",
                str(screenshot_path),
            ],
            cwd=tmp_dir,
        )

        if not screenshot_path.is_file():
            raise VideoNotFoundError(
                "ffmpeg produced no frame at {} (past the end of the video?)".format(timestamp)
            )
        payload = base64.b64encode(screenshot_path.read_bytes()).decode("ascii")

    logger.info("Captured frame at %s from %s", timestamp, url)
    return "data:image/jpeg;base64,{}".format(payload)
