"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~mpvcompgen.exceptions.CompgenError` subclass.
Wrapper scripts (packaging hooks, Makefiles) can inspect the exit code to
tell a missing mpv binary apart from a broken template without parsing
stderr.

Example::

    $ MPV_BASHCOMPGEN_MPV_CMD=/nonexistent mpv-bashcompgen > mpv.bash
    $ echo $?
    3   # EXIT_SOURCE_ERROR -- mpv could not be queried
"""

EXIT_SUCCESS = 0
"""The completion script was generated and written."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments."""

EXIT_SOURCE_ERROR = 3
"""A required mpv query could not be run or returned no data."""

EXIT_TEMPLATE_ERROR = 4
"""The completion script template could not be rendered."""
