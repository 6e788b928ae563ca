"""Shared ks execution helpers."""

import logging
import subprocess
from collections.abc import Sequence
from pathlib import Path

from ksenv.errors import LaunchError, ParseError, ToolError

logger = logging.getLogger(__name__)

OUTPUT_ENCODING = "utf-8"


def _run_ks(
    args: Sequence[str], *, cwd: Path, binary: str
) -> subprocess.CompletedProcess[bytes]:
    command = (binary, *args)
    command_str = " ".join(command)
    logger.debug(command_str)
    try:
        return subprocess.run(
            command,
            cwd=cwd,
            capture_output=True,
            check=True,
        )
    except subprocess.CalledProcessError as exc:
        stderr = (exc.stderr or b"").decode(OUTPUT_ENCODING, errors="replace")
        logger.error("`%s` failed: %s", command_str, stderr)
        raise ToolError(
            stderr.strip(), command=command, returncode=exc.returncode
        ) from exc
    except OSError as exc:
        raise LaunchError(f"cannot start `{binary}`: {exc}") from exc



def ks_text(args: Sequence[str], *, cwd: Path, binary: str = "ks") -> str:
    """Execute ks inside `cwd` and return its standard output.

    Parameters
    ----------
    args : Sequence[str]
        Arguments passed to the binary, e.g. ``("show", "default")``.
    cwd : Path
        Working directory, normally the application root.
    binary : str
        Name or path of the ks executable.

    Returns
    -------
    str
        Captured stdout.

    Raises
    ------
    LaunchError
        The binary could not be started.
    ToolError
        The binary exited non-zero; the message is its trimmed stderr.
    ParseError
        The binary succeeded but stdout is not valid UTF-8.
    """
    result = _run_ks(args, cwd=cwd, binary=binary)
    try:
        return (result.stdout or b"").decode(OUTPUT_ENCODING)
    except UnicodeDecodeError as exc:
        raise ParseError(f"`{binary}` printed undecodable output: {exc}") from exc
