"""Async subprocess runner for the external binaries (yt-dlp, ffmpeg).

WHY: Every tool in this package is a thin wrapper around a command-line
program. The tools need one place that spawns a process without a
shell, waits for it with a timeout, and turns a missing binary, a
non-zero exit, or a hang into a typed exception with a readable message.

HOW: asyncio.create_subprocess_exec() with stdout/stderr piped. The
output is decoded as UTF-8 (undecodable bytes replaced) and returned in
a CommandResult. Failures raise a CommandError subclass.

RULES:
- Never spawns through a shell; args are passed as a list
- A missing binary raises CommandNotFoundError naming the env variable
  that configures it
- A non-zero exit raises CommandError carrying the exit code and stderr
- On timeout the process is killed and CommandTimeoutError is raised
- If the awaiting task is cancelled the process is killed before the
  CancelledError propagates
- timeout_s of None uses COMMAND_TIMEOUT_S; 0 means no limit
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Union

from mcp_youtube.config import COMMAND_TIMEOUT_S

logger = logging.getLogger(__name__)

# Env variable that configures each known binary, for error messages
_BINARY_ENV_VARS = {
    "yt-dlp": "YTDLP_BINARY",
    "ffmpeg": "FFMPEG_BINARY",
}


class CommandError(Exception):
    """Raised when an external command exits with a non-zero status.

    WHY: Tool handlers need to report why yt-dlp or ffmpeg failed. The
    last stderr line is usually the actual reason ("ERROR: Video
    unavailable"), so it goes into the message.

    RULES:
    - Always carries program, returncode and stderr
    - returncode is None when the process never ran or was killed
    """

    def __init__(
        self,
        program: str,
        returncode: Optional[int],
        stderr: str = "",
        message: Optional[str] = None,
    ) -> None:
        self.program = program
        self.returncode = returncode
        self.stderr = stderr
        if message is None:
            message = "{} exited with code {}".format(program, returncode)
            detail = _last_line(stderr)
            if detail:
                message = "{}: {}".format(message, detail)
        super().__init__(message)


class CommandNotFoundError(CommandError):
    """Raised when the binary is not installed or not on PATH."""

    def __init__(self, program: str) -> None:
        name = Path(program).name
        env_var = _BINARY_ENV_VARS.get(name)
        message = "{} not found. Install it or put it on PATH".format(program)
        if env_var:
            message += " (or set {} in .env)".format(env_var)
        super().__init__(program, None, message=message)


class CommandTimeoutError(CommandError):
    """Raised when a command runs longer than its timeout and is killed."""

    def __init__(self, program: str, timeout_s: float) -> None:
        self.timeout_s = timeout_s
        super().__init__(
            program,
            None,
            message="{} timed out after {:g}s".format(program, timeout_s),
        )


@dataclass
class CommandResult:
    """Captured outcome of a finished command."""

    args: List[str]
    returncode: int
    stdout: str
    stderr: str


def _last_line(text: str) -> str:
    for line in reversed(text.splitlines()):
        if line.strip():
            return line.strip()
    return ""


async def _kill(proc: asyncio.subprocess.Process) -> None:
    if proc.returncode is None:
        try:
            proc.kill()
        except ProcessLookupError:
            pass
    await proc.wait()


async def run_command(
    program: str,
    args: Sequence[str],
    cwd: Optional[Union[str, Path]] = None,
    timeout_s: Optional[float] = None,
) -> CommandResult:
    """Run ``program`` with ``args`` and return its captured output.

    Args:
        program: Binary name or path, e.g. "yt-dlp".
        args: Arguments, passed through without shell interpretation.
        cwd: Working directory for the child process.
        timeout_s: Seconds before the process is killed. None uses
                   COMMAND_TIMEOUT_S; 0 disables the limit.

    Returns:
        CommandResult with decoded stdout and stderr.

    Raises:
        CommandNotFoundError: the binary could not be started.
        CommandTimeoutError: the process exceeded the timeout.
        CommandError: the process exited non-zero.
    """
    argv = [program, *args]
    if timeout_s is None:
        timeout_s = COMMAND_TIMEOUT_S
    logger.debug("Running %s (cwd=%s)", argv, cwd)

    try:
        proc = await asyncio.create_subprocess_exec(
            *argv,
            cwd=str(cwd) if cwd is not None else None,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except FileNotFoundError:
        logger.warning("Binary not found: %s", program)
        raise CommandNotFoundError(program) from None

    try:
        if timeout_s:
            stdout_b, stderr_b = await asyncio.wait_for(proc.communicate(), timeout_s)
        else:
            stdout_b, stderr_b = await proc.communicate()
    except asyncio.TimeoutError:
        await _kill(proc)
        logger.warning("%s timed out after %ss, killed", program, timeout_s)
        raise CommandTimeoutError(program, timeout_s) from None
    except BaseException:
        # Cancelled by the caller; the child must not outlive its scratch dir
        await _kill(proc)
        logger.warning("%s cancelled, killed", program)
        raise

    stdout = stdout_b.decode("utf-8", errors="replace")
    stderr = stderr_b.decode("utf-8", errors="replace")

    if proc.returncode != 0:
        logger.warning("%s exited with code %s", program, proc.returncode)
        raise CommandError(program, proc.returncode, stderr)

    return CommandResult(
        args=argv,
        returncode=proc.returncode,
        stdout=stdout,
        stderr=stderr,
    )
