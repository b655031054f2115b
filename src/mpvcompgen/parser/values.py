"""Pull defaults, ranges and choice lists out of descriptor tails.

A tail is the free text mpv prints after an option name, for example::

    Double (0.01 to 100) (default: 1.000000)
    Choices: no auto yes (default: auto)
    String (default: ) [file]
    Flag (default: no) [nocfg]
    alias for --fullscreen
"""

from __future__ import annotations

import re
from typing import Optional

_DEFAULT_RE = re.compile(r"default: ([^)]+)")
_RANGE_RE = re.compile(r"\(([\d.-]+) to ([\d.-]+)\)")
_CHOICES_RE = re.compile(r"Choices: ([^()]+)")
_ALIAS_RE = re.compile(r"^alias for (\S+)")
_FILE_NAME_RES = (
    re.compile(r"-files?-"),
    re.compile(r"^scripts?"),
)


def extract_default(tail: str) -> Optional[str]:
    """Return the declared default, or ``None`` when there is none."""
    match = _DEFAULT_RE.search(tail)
    return match.group(1) if match else None


def extract_range(tail: str) -> Optional[str]:
    """Return the declared range as ``"min-max"`` (``"0.01-100"``)."""
    match = _RANGE_RE.search(tail)
    if match:
        return f"{match.group(1)}-{match.group(2)}"
    return None


def extract_choices(tail: str) -> list[str]:
    """Return the inline choices of a ``Choices:`` tail in source order."""
    match = _CHOICES_RE.search(tail)
    if not match:
        return []
    return [choice for choice in re.split(r"[\s,]+", match.group(1)) if choice]


def extract_alias_target(tail: str) -> Optional[str]:
    """Return the option an ``alias for --target`` tail points to, without dashes."""
    match = _ALIAS_RE.match(tail)
    if not match:
        return None
    return match.group(1).lstrip("-") or None


def has_no_cfg(tail: str) -> bool:
    """Whether the option is marked ``[nocfg]`` (command-line only)."""
    return "[nocfg]" in tail


def wants_file(name: str, tail: str) -> bool:
    """Whether a String option takes a filesystem path."""
    if "[file]" in tail:
        return True
    return any(regex.search(name) for regex in _FILE_NAME_RES)


def wants_directory(name: str) -> bool:
    return "dir" in name
