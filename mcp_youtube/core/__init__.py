"""Core caption processing — pure text transforms with no I/O.

WHY: The caption cleaner is the only algorithmic piece of the package.
Keeping it apart from the subprocess and MCP layers means it can be
tested and reused without yt-dlp or a server.

RULES:
- Nothing in core/ spawns processes, touches the filesystem, or logs
"""

from mcp_youtube.core.vtt import (
    CaptionCleanResult,
    clean_captions,
    is_webvtt,
    strip_vtt_non_content,
)

__all__ = [
    "CaptionCleanResult",
    "clean_captions",
    "is_webvtt",
    "strip_vtt_non_content",
]
