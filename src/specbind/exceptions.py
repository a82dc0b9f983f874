"""Exception hierarchy for specbind.

All exceptions inherit from :class:`SpecbindError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`specbind.exit_codes`.
The top-level error handler in :func:`specbind.app.main` catches
``SpecbindError`` and exits with the appropriate code, while unexpected
exceptions produce a crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

Generation is fail-fast: every error below aborts the run before anything
is written to the destination.

Subclass hierarchy::

    SpecbindError (exit 1)
    +-- SpecLoadError              (exit 7)
    +-- MalformedSpecError         (exit 8)
    |   +-- MalformedOptionError
    |   +-- UnsupportedNestingError
    |   +-- DuplicateIdentifierError
    +-- DestinationWriteError      (exit 9)
    +-- ConfigError                (exit 1)
"""

from specbind.exit_codes import (
    EXIT_DESTINATION_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_MALFORMED_SPEC,
    EXIT_SPEC_LOAD_ERROR,
)


class SpecbindError(Exception):
    """Base exception for all specbind errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`specbind.exit_codes`. The entry point catches
    this exception type and calls ``sys.exit(exc.exit_code)``.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class SpecLoadError(SpecbindError):
    """Raised when the spec document cannot be read or decoded (bad JSON/YAML, missing file)."""

    exit_code = EXIT_SPEC_LOAD_ERROR


class MalformedSpecError(SpecbindError):
    """Raised when a decoded spec does not describe a valid command tree."""

    exit_code = EXIT_MALFORMED_SPEC


class MalformedOptionError(MalformedSpecError):
    """Raised when an option entry has no usable ``name``.

    The message identifies the owning command and the option's position so
    the offending entry can be found in the spec document.
    """


class UnsupportedNestingError(MalformedSpecError):
    """Raised when subcommands are nested more than one level deep."""


class DuplicateIdentifierError(MalformedSpecError):
    """Raised when two flags or commands sanitise to the same Python identifier."""


class DestinationWriteError(SpecbindError):
    """Raised when the generated module cannot be written (permissions, full disk, closed sink)."""

    exit_code = EXIT_DESTINATION_ERROR


class ConfigError(SpecbindError):
    """Raised for configuration problems (unreadable ``specbind.json``, missing include file, bad option values)."""

    exit_code = EXIT_GENERIC_FAILURE
