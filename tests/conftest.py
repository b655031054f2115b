"""Shared test fixtures for mpvcompgen.

Provides a stand-in for :func:`subprocess.run` that serves canned mpv output
from ``tests/fixtures/``, sources and option tables built on top of it,
isolated environments, and output state management. These fixtures are
automatically discovered by pytest and available to all test modules
without explicit imports.
"""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Any, Callable, Optional

import pytest

from mpvcompgen.config import ENV_MPV_CMD, ENV_VERBOSE, GeneratorConfig
from mpvcompgen.models import OptionTable
from mpvcompgen.output import OutputFormat, OutputManager, reset_output, set_output
from mpvcompgen.source import MpvSource


FIXTURES_DIR = Path(__file__).parent / "fixtures"

MPV_QUERIES: dict[tuple[str, ...], str] = {
    ("--version",): "version.txt",
    ("--list-options",): "list_options.txt",
    ("--demuxer-rawvideo-mp-format=help",): "rawvideo_formats.txt",
    ("--ad=help",): "ad_help.txt",
    ("--audio-spdif=help",): "audio_spdif_help.txt",
    ("--af=help",): "af_help.txt",
    ("--vf=help",): "vf_help.txt",
    ("--vf-add=help",): "vf_help.txt",
    ("--vf-append=help",): "vf_help.txt",
    ("--vf", "scale=help"): "vf_scale_help.txt",
    ("--vf", "format=help"): "vf_format_help.txt",
    ("--af", "volume=help"): "af_volume_help.txt",
}
"""Canned mpv answers, keyed by the arguments after ``--no-config``."""


class FakeMpv:
    """Callable replacing :func:`subprocess.run` for mpv queries.

    Unknown queries answer with empty stdout, which is what mpv prints for
    objects without parameters. Every call is recorded in :attr:`calls`.
    """

    def __init__(self, responses: dict[tuple[str, ...], str]) -> None:
        self.responses = responses
        self.calls: list[tuple[str, ...]] = []

    def __call__(self, argv: list[str], **kwargs: Any) -> subprocess.CompletedProcess:
        args = tuple(argv[2:])
        self.calls.append(args)
        stdout = self.responses.get(args, "")
        return subprocess.CompletedProcess(argv, 1, stdout=stdout, stderr="")

    def count(self, *args: str) -> int:
        return self.calls.count(args)


def load_responses(overrides: Optional[dict[tuple[str, ...], str]] = None) -> dict[tuple[str, ...], str]:
    """Read every fixture in :data:`MPV_QUERIES`, then apply *overrides*."""
    responses = {
        args: (FIXTURES_DIR / name).read_text(encoding="utf-8")
        for args, name in MPV_QUERIES.items()
    }
    responses.update(overrides or {})
    return responses


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time.  When Typer's CliRunner redirects those streams during
    a test and the test finishes, the cached references become stale
    ("I/O operation on closed file").  Resetting forces a fresh manager
    to be created on next use.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# mpv fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def fake_mpv() -> FakeMpv:
    """A fake mpv serving the canned fixture output."""
    return FakeMpv(load_responses())


@pytest.fixture
def mpv_source(fake_mpv: FakeMpv) -> MpvSource:
    """An MpvSource wired to :func:`fake_mpv`."""
    return MpvSource("mpv", runner=fake_mpv)


@pytest.fixture
def make_source() -> Callable[..., tuple[MpvSource, FakeMpv]]:
    """Factory for an MpvSource serving only the given ``{args: stdout}`` answers."""

    def _make(responses: dict[tuple[str, ...], str]) -> tuple[MpvSource, FakeMpv]:
        fake = FakeMpv(responses)
        return MpvSource("mpv", runner=fake), fake

    return _make


@pytest.fixture
def option_table(mpv_source: MpvSource) -> OptionTable:
    """The option table built from the canned fixture output."""
    from mpvcompgen.parser import build_option_table

    return build_option_table(mpv_source, GeneratorConfig())


@pytest.fixture
def patched_mpv(fake_mpv: FakeMpv, monkeypatch: pytest.MonkeyPatch) -> FakeMpv:
    """Route every MpvSource created during the test to :func:`fake_mpv`."""
    monkeypatch.setattr(subprocess, "run", fake_mpv)
    return fake_mpv


# ---------------------------------------------------------------------------
# Environment isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate the environment from the user's setup.

    Points XDG_DATA_HOME at tmp_path, clears all MPV_BASHCOMPGEN_*
    variables and changes the working directory to tmp_path.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.delenv(ENV_VERBOSE, raising=False)
    monkeypatch.delenv(ENV_MPV_CMD, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    """Set up a quiet output manager for tests that don't care about output.

    Installs a PLAIN-format, quiet OutputManager as the global output
    and resets it after the test completes.
    """
    output = OutputManager(format=OutputFormat.PLAIN, quiet=True)
    set_output(output)
    yield output
    reset_output()


@pytest.fixture
def verbose_output() -> OutputManager:
    """Set up a verbose, uncoloured output manager for debug trace tests."""
    output = OutputManager(format=OutputFormat.PLAIN, no_color=True, verbose=True)
    set_output(output)
    yield output
    reset_output()
