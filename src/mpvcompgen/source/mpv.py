"""Run mpv queries through :mod:`subprocess` and hand back their output lines.

mpv prints its help texts to stdout and usually exits with a non-zero status
afterwards (no file was given to play), so the exit status is ignored and
only the captured stdout matters. stderr is forwarded to the debug trace.

All queries are issued with ``--no-config`` so that a user's ``mpv.conf``
cannot change the reported defaults. Results are cached per argument tuple:
within one run every distinct query reaches mpv at most once.
"""

from __future__ import annotations

import re
import subprocess
from collections.abc import Callable
from typing import Any, Optional

from mpvcompgen.exceptions import SourceReadError
from mpvcompgen.output import debug

Runner = Callable[..., "subprocess.CompletedProcess[str]"]

_WORD_RE = re.compile(r"[A-Za-z0-9]+")


class MpvSource:
    """Blocking query interface to one mpv binary.

    Args:
        command: The mpv binary (name on ``$PATH`` or absolute path).
        runner: Replacement for :func:`subprocess.run`, used by tests to
            serve canned output.
    """

    def __init__(self, command: str = "mpv", runner: Optional[Runner] = None) -> None:
        self.command = command
        self._runner: Runner = runner or subprocess.run
        self._cache: dict[tuple[str, ...], list[str]] = {}

    def query(self, *args: str, required: bool = True) -> list[str]:
        """Run ``mpv --no-config <args>`` and return its stdout lines.

        Args:
            *args: Arguments appended after ``--no-config``.
            required: When ``True`` an empty stdout is an error.

        Returns:
            The output split into lines, without line terminators.

        Raises:
            SourceReadError: If mpv cannot be executed, or *required* is set
                and it printed nothing.
        """
        if args in self._cache:
            return self._cache[args]

        argv = [self.command, "--no-config", *args]
        debug(" ".join(argv))
        try:
            result: Any = self._runner(argv, capture_output=True, text=True)
        except (FileNotFoundError, PermissionError) as exc:
            raise SourceReadError(f"Cannot run {self.command}: {exc}") from exc
        except OSError as exc:
            raise SourceReadError(f"Failed to run {' '.join(argv)}: {exc}") from exc

        stdout = result.stdout or ""
        if result.stderr:
            debug(f"{self.command} stderr: {result.stderr.strip()}")
        if required and not stdout.strip():
            raise SourceReadError(
                f"Can't read from {' '.join(argv)}: no data"
            )

        lines = stdout.splitlines()
        self._cache[args] = lines
        return lines

    # ------------------------------------------------------------------ #
    # Specific queries
    # ------------------------------------------------------------------ #

    def version(self) -> str:
        """Return the version word of ``mpv --version`` (``"0.38.0"``)."""
        first = next(line for line in self.query("--version") if line.strip())
        parts = first.split()
        return parts[1] if len(parts) > 1 else "unknown"

    def list_options(self) -> list[str]:
        """Return the full option roster printed by ``--list-options``."""
        return self.query("--list-options")

    def option_help(self, option: str) -> list[str]:
        """Return the enumeration printed by ``--<option>=help``."""
        return self.query(f"--{option}=help")

    def raw_video_formats(self) -> list[str]:
        """Return the pixel formats accepted by ``--demuxer-rawvideo-mp-format``.

        mpv prints them as one line, ``"Available formats: yuv420p nv12 ..."``;
        only the words after the first ``": "`` are kept.
        """
        text = "\n".join(self.query("--demuxer-rawvideo-mp-format=help"))
        _, sep, rest = text.partition(": ")
        if not sep:
            return []
        return _WORD_RE.findall(rest)

    def object_parameters(self, stem: str, instance: str) -> list[str]:
        """Return the parameter roster of one chain object, e.g. ``--vf scale=help``.

        Objects without parameters print nothing useful, so an empty answer
        is not an error here.
        """
        return self.query(f"--{stem}", f"{instance}=help", required=False)
