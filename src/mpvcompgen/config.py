"""Generator configuration with environment precedence resolution.

The generator has no configuration file. Its behaviour is controlled by two
process-environment variables, which CLI flags may override:

* ``MPV_BASHCOMPGEN_VERBOSE`` -- any value (even empty) enables the debug
  trace on stderr.
* ``MPV_BASHCOMPGEN_MPV_CMD`` -- the mpv binary to query. Defaults to
  ``mpv``, looked up through ``$PATH``.

:func:`resolve_config` merges CLI flags, environment variables, and defaults
into a :class:`GeneratorConfig`. :func:`get_data_dir` locates the XDG data
directory that :func:`~mpvcompgen.app.main` writes crash logs to.
"""

from __future__ import annotations

import os
import platform
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

_APP_NAME = "mpv-bashcompgen"

ENV_VERBOSE = "MPV_BASHCOMPGEN_VERBOSE"
ENV_MPV_CMD = "MPV_BASHCOMPGEN_MPV_CMD"

DEFAULT_NAMESPACES = ("vf", "af", "vo", "ao")
"""Chain stems whose object instances get their parameters expanded."""


class GeneratorConfig(BaseModel):
    """Effective settings for one generator run."""

    mpv_cmd: str = Field(default="mpv", description="mpv binary to query")
    verbose: bool = Field(default=False, description="Trace classification on stderr")
    media_glob: bool = Field(
        default=False,
        description="Restrict fallback file completion to known media extensions",
    )
    namespaces: list[str] = Field(
        default_factory=lambda: list(DEFAULT_NAMESPACES),
        description="Chain stems whose objects are expanded into parameter schemas",
    )


def resolve_config(
    cli_mpv_cmd: Optional[str] = None,
    cli_verbose: Optional[bool] = None,
    cli_media_glob: Optional[bool] = None,
    cli_namespaces: Optional[list[str]] = None,
) -> GeneratorConfig:
    """Resolve config with full precedence chain.

    Precedence (high to low):
        1. CLI flags
        2. Environment variables (``MPV_BASHCOMPGEN_*``)
        3. Defaults

    Returns:
        The effective :class:`GeneratorConfig`.
    """
    config = GeneratorConfig()

    env_cmd = os.environ.get(ENV_MPV_CMD)
    if env_cmd:
        config.mpv_cmd = env_cmd
    if os.environ.get(ENV_VERBOSE) is not None:
        config.verbose = True

    if cli_mpv_cmd:
        config.mpv_cmd = cli_mpv_cmd
    if cli_verbose:
        config.verbose = True
    if cli_media_glob is not None:
        config.media_glob = cli_media_glob
    if cli_namespaces:
        config.namespaces = list(cli_namespaces)

    return config


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/mpv-bashcompgen/`` (default
    ``~/.local/share/mpv-bashcompgen/``). Elsewhere: ``~/.mpv-bashcompgen/``.
    """
    if _is_xdg_platform():
        env_value = os.environ.get("XDG_DATA_HOME", "")
        base = Path(env_value) if env_value else Path.home() / ".local" / "share"
        path = base / _APP_NAME
    else:
        path = Path.home() / f".{_APP_NAME}"
    path.mkdir(parents=True, exist_ok=True)
    return path
