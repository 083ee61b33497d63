"""Shared test fixtures for the mcp_youtube test suite.

WHY: The cleaner, tool, and CLI tests all need realistic WebVTT input,
and the tool tests need a stand-in for yt-dlp/ffmpeg that writes files
into the scratch directory the way the real binaries do.

HOW: Module-level VTT constants exposed as fixtures, plus a
``fake_runner`` fixture that builds an AsyncMock whose side effect
dispatches on the program name to a per-test handler.

RULES:
- Real yt-dlp and ffmpeg are never spawned
- AUTO_CAPTIONS mirrors YouTube's auto-generated caption layout
"""

from pathlib import Path
from typing import Callable, Dict, List
from unittest.mock import AsyncMock

import pytest

from mcp_youtube.runner import CommandResult


# ---------------------------------------------------------------------------
# Sample WebVTT documents
# ---------------------------------------------------------------------------

SIMPLE_CAPTIONS = (
    "WEBVTT\n"
    "Kind: captions\n"
    "Language: en\n"
    "\n"
    "00:00:00.000 --> 00:00:02.000\n"
    "Hello world\n"
    "00:00:02.000 --> 00:00:04.000\n"
    "Hello world\n"
    "00:00:04.000 --> 00:00:06.000\n"
    "Goodbye"
)

# YouTube auto-captions: each cue repeats the previous line, words carry
# inline timestamps, and cue settings sit on the timing line.
AUTO_CAPTIONS = (
    "WEBVTT\n"
    "Kind: captions\n"
    "Language: en\n"
    "\n"
    "00:00:00.000 --> 00:00:02.310 align:start position:0%\n"
    " \n"
    "hello<00:00:00.480><c> everyone</c><00:00:00.960><c> welcome</c>\n"
    "\n"
    "00:00:02.310 --> 00:00:02.320 align:start position:0%\n"
    "hello everyone welcome\n"
    " \n"
    "\n"
    "00:00:02.320 --> 00:00:05.000 align:start position:0%\n"
    "hello everyone welcome\n"
    "to<00:00:02.800><c> the</c><00:00:03.100><c> show</c>\n"
)


@pytest.fixture
def simple_captions() -> str:
    return SIMPLE_CAPTIONS


@pytest.fixture
def auto_captions() -> str:
    return AUTO_CAPTIONS


# ---------------------------------------------------------------------------
# Fake external binaries
# ---------------------------------------------------------------------------

Handler = Callable[[List[str], Path], str]


@pytest.fixture
def fake_runner():
    """Build an AsyncMock replacing runner.run_command.

    Usage::

        mock = fake_runner({"yt-dlp": handler})

    Each handler receives (args, cwd) and returns stdout. Handlers may
    write files into cwd or raise to simulate a failing binary. The mock
    records every call and exposes the scratch dirs it saw as
    ``mock.seen_dirs``.
    """

    def _build(handlers: Dict[str, Handler]) -> AsyncMock:
        seen_dirs: List[Path] = []

        async def _run(program, args, cwd=None, timeout_s=None):
            cwd_path = Path(cwd)
            seen_dirs.append(cwd_path)
            stdout = handlers[program](list(args), cwd_path)
            return CommandResult(
                args=[program, *args],
                returncode=0,
                stdout=stdout,
                stderr="",
            )

        mock = AsyncMock(side_effect=_run)
        mock.seen_dirs = seen_dirs
        return mock

    return _build
