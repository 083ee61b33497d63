"""mcp-youtube — YouTube subtitles, search, and screenshots over MCP.

WHY: Assistants talking the Model Context Protocol cannot fetch YouTube
content on their own. This package exposes three tools (download
subtitles, search videos, grab a frame) that an MCP client can call.

HOW: Each tool shells out to yt-dlp (and ffmpeg for frames) inside a
throwaway scratch directory. Downloaded WebVTT subtitles pass through the
caption cleaner, which turns timed captions into plain deduplicated text.

RULES:
- The caption cleaner is pure: no I/O, no shared state, never raises
- Scratch directories are always removed, success or failure
- External binaries are never invoked through a shell
"""

__version__ = "0.8.0"
