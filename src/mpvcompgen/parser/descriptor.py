"""Split mpv roster lines into :class:`~mpvcompgen.models.OptionDescriptor` objects.

``mpv --list-options`` prints one option per line::

      --speed                          Double (0.01 to 100) (default: 1.000000)
      --vf                             Object settings list (default: )
      --vf-add
      --vf-append

Top-level lines carry a name and a free-text tail whose first word is the
declared type token. Continuation lines (``--vf-add``) have no tail of their
own and inherit the most recent top-level tail.

Per-object parameter rosters (``mpv --vf scale=help``) use the same tail
grammar but list bare names indented by exactly one whitespace character::

     w                Integer (-11 to 16384) (default: -2)

Lines matching neither shape (headers, blank lines, totals) are skipped
without error.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from typing import Optional

from mpvcompgen.models import OptionDescriptor

_TOP_LEVEL_RE = re.compile(r"^\s+--(\S+)\s+(\S.*)$")
_CONTINUATION_RE = re.compile(r"^\s+--(\S+)\s*$")
_PARAMETER_RE = re.compile(r"^\s([A-Za-z0-9-]+)\s+(\S.*)$")


def _descriptor(name: str, tail: str) -> OptionDescriptor:
    return OptionDescriptor(name=name, type_token=tail.split(None, 1)[0], tail=tail)


def parse_descriptor(
    line: str, previous_tail: Optional[str] = None
) -> Optional[OptionDescriptor]:
    """Parse a single ``--list-options`` line.

    Args:
        line: One roster line, without its line terminator.
        previous_tail: Tail of the last top-level line, inherited by a
            continuation line.

    Returns:
        The descriptor, or ``None`` when the line has no recognised shape
        (or is a continuation line with nothing to inherit).
    """
    match = _TOP_LEVEL_RE.match(line)
    if match:
        return _descriptor(match.group(1), match.group(2))

    match = _CONTINUATION_RE.match(line)
    if match and previous_tail is not None:
        return _descriptor(match.group(1), previous_tail)

    return None


def iter_descriptors(lines: Iterable[str]) -> Iterator[OptionDescriptor]:
    """Yield a descriptor for every recognised line of an option roster."""
    previous_tail: Optional[str] = None
    for line in lines:
        descriptor = parse_descriptor(line, previous_tail)
        if descriptor is None:
            continue
        if _TOP_LEVEL_RE.match(line):
            previous_tail = descriptor.tail
        yield descriptor


def iter_parameter_descriptors(lines: Iterable[str]) -> Iterator[OptionDescriptor]:
    """Yield a descriptor for every parameter line of an object's roster."""
    for line in lines:
        match = _PARAMETER_RE.match(line)
        if match:
            yield _descriptor(match.group(1), match.group(2))
