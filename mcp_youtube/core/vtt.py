"""WebVTT caption cleaner: timed captions in, plain transcript out.

WHY: yt-dlp saves subtitles as WebVTT. Auto-generated YouTube captions
are noisy: every cue repeats the previous line, words carry inline
timestamp tags, and positioning directives are mixed in with the text.
Callers want just the words, in order, once.

HOW: A single pass over the lines that follow the 4-line header. Timing
lines, positioning lines and blank lines are dropped. Surviving lines
have their inline timestamp and styling tags stripped, get trimmed, and
are appended unless empty. A final pass collapses adjacent duplicates.

RULES:
- Input that is blank, shorter than 4 lines, or lacks "WEBVTT" on line 1
  is unrecognized and cleans to "" (never an exception)
- The first 4 lines are header and are always skipped
- Only the exact tag shapes in _INLINE_TAG_PATTERNS are stripped; any
  other bracketed content is kept verbatim
- Adjacent duplicates collapse to one; non-adjacent duplicates are kept
- Output lines keep their input order, joined by "\\n" with no trailing
  newline
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Tuple

FORMAT_SIGNATURE = "WEBVTT"
HEADER_LINE_COUNT = 4

_TIMING_SEPARATOR = "-->"
_POSITIONING_TOKENS = ("align:", "position:")

# Recognized inline tags. Extend by adding an exact pattern here.
_INLINE_TAG_PATTERNS: Tuple[str, ...] = (
    r"<\d{2}:\d{2}:\d{2}\.\d{3}>",  # <00:00:07.759>
    r"<c>",
    r"</c>",
)
_INLINE_TAG_RE = re.compile("|".join(_INLINE_TAG_PATTERNS), re.ASCII)

# Whitespace trimmed from line ends. Matches ECMAScript trim(): includes
# U+FEFF, excludes the \x1c-\x1f separators that str.strip() also removes.
_TRIM_CHARS = (
    "\t\n\x0b\x0c\r \xa0\u1680\u2000\u2001\u2002\u2003\u2004\u2005"
    "\u2006\u2007\u2008\u2009\u200a\u2028\u2029\u202f\u205f\u3000\ufeff"
)


@dataclass(frozen=True)
class CaptionCleanResult:
    """Outcome of cleaning one captions document.

    Attributes:
        recognized: False when the input failed the format check (blank,
                    too short, or missing the WEBVTT signature).
        lines: The transcript lines, in order, adjacent duplicates removed.
    """

    recognized: bool
    lines: Tuple[str, ...] = ()

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    @property
    def is_empty(self) -> bool:
        return not self.lines


def is_webvtt(raw: str) -> bool:
    """True when ``raw`` passes the minimal WebVTT structure check."""
    if not raw or not raw.strip(_TRIM_CHARS):
        return False
    lines = raw.split("\n")
    return len(lines) >= HEADER_LINE_COUNT and FORMAT_SIGNATURE in lines[0]


def _is_metadata_line(line: str) -> bool:
    if _TIMING_SEPARATOR in line:
        return True
    return any(token in line for token in _POSITIONING_TOKENS)


def _collapse_adjacent(lines: List[str]) -> Tuple[str, ...]:
    kept: List[str] = []
    for line in lines:
        if not kept or line != kept[-1]:
            kept.append(line)
    return tuple(kept)


def clean_captions(raw: str) -> CaptionCleanResult:
    """Clean a WebVTT document, telling unrecognized input apart from empty.

    Args:
        raw: Full text of one captions file, "\\n"-separated.

    Returns:
        CaptionCleanResult with ``recognized=False`` for input that is not
        a WebVTT document, otherwise the cleaned transcript lines.
    """
    if not is_webvtt(raw):
        return CaptionCleanResult(recognized=False)

    text_lines: List[str] = []
    for line in raw.split("\n")[HEADER_LINE_COUNT:]:
        if _is_metadata_line(line) or not line.strip(_TRIM_CHARS):
            continue
        stripped = _INLINE_TAG_RE.sub("", line).strip(_TRIM_CHARS)
        if stripped:
            text_lines.append(stripped)

    return CaptionCleanResult(recognized=True, lines=_collapse_adjacent(text_lines))


def strip_vtt_non_content(raw: str) -> str:
    """Return the plain transcript text of a WebVTT document.

    Unrecognized and empty documents both return "". Use clean_captions()
    when the difference matters.
    """
    return clean_captions(raw).text
