"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~specbind.exceptions.SpecbindError` subclass.
Build scripts and Makefiles can inspect the exit code to tell a broken
spec document apart from an unwritable destination without parsing stderr.

Example::

    $ specbind generate opa.json -o opa_cli.py
    $ echo $?
    7   # EXIT_SPEC_LOAD_ERROR -- opa.json is not valid JSON/YAML
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or missing required parameters."""

EXIT_SPEC_LOAD_ERROR = 7
"""The specification document could not be read or decoded."""

EXIT_MALFORMED_SPEC = 8
"""The specification decoded but does not describe a valid command tree."""

EXIT_DESTINATION_ERROR = 9
"""The generated module could not be written to its destination."""
