"""Access to the mpv binary as a blocking, line-oriented text source.

Every piece of option metadata the generator knows comes from running
``mpv --no-config ...`` and reading its stdout. :class:`MpvSource` wraps
those invocations, memoises them, and turns "mpv could not be run" or "mpv
printed nothing" into :class:`~mpvcompgen.exceptions.SourceReadError`.
"""

from mpvcompgen.source.mpv import MpvSource

__all__ = ["MpvSource"]
