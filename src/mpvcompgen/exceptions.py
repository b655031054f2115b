"""Exception hierarchy for mpvcompgen.

All exceptions inherit from :class:`CompgenError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`mpvcompgen.exit_codes`.
The top-level error handler in :func:`mpvcompgen.app.main` catches
``CompgenError`` and exits with the appropriate code, while unexpected
exceptions produce a crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

Recoverable conditions met while reading mpv's option roster (a line that
does not look like a descriptor, an alias whose target does not exist, an
unknown type token) never raise; they are skipped or downgraded and only
reported through :func:`~mpvcompgen.output.debug`.

Subclass hierarchy::

    CompgenError (exit 1)
    +-- InvalidUsageError   (exit 2)
    +-- SourceReadError     (exit 3)
    +-- TemplateError       (exit 4)
"""

from mpvcompgen.exit_codes import (
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_SOURCE_ERROR,
    EXIT_TEMPLATE_ERROR,
)


class CompgenError(Exception):
    """Base exception for all mpvcompgen errors.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(CompgenError):
    """Raised for invalid CLI arguments (e.g. an unknown option kind)."""

    exit_code = EXIT_INVALID_USAGE


class SourceReadError(CompgenError):
    """Raised when a required mpv query cannot run or yields no output.

    This is always fatal: generation stops before anything is written, so a
    half-built completion script never reaches stdout.
    """

    exit_code = EXIT_SOURCE_ERROR


class TemplateError(CompgenError):
    """Raised when the bash completion template fails to load or render."""

    exit_code = EXIT_TEMPLATE_ERROR
