"""Turn CLI flags and command names into safe Python identifiers.

The sanitizer is deliberately small and predictable:

1. All leading dashes are stripped (``---x``, ``--x`` and ``-x`` all give
   ``x``).
2. Every remaining dash becomes an underscore (``dry-run`` gives
   ``dry_run``).
3. A result found in the reserved-word table is prefixed with a single
   underscore (``--if`` gives ``_if``).

Nothing else changes: case is preserved and other punctuation is passed
through untouched.

The reserved-word table is plain configuration. :data:`PYTHON_RESERVED_WORDS`
targets modules rendered by :mod:`specbind.generator.module`; callers can
pass any other ``frozenset`` (see :func:`reserved_words`).
"""

from __future__ import annotations

import keyword
from collections.abc import Iterable


BUILTIN_TYPE_NAMES: frozenset[str] = frozenset({
    "bool",
    "bytes",
    "dict",
    "float",
    "int",
    "list",
    "object",
    "set",
    "str",
    "tuple",
    "type",
})
"""Builtin type names; ``str`` in particular is called by every binding body."""

GENERATED_MODULE_NAMES: frozenset[str] = frozenset({
    # Module-level names bound by the rendered module.
    "annotations",
    "Any",
    "Callable",
    "CommandLine",
    "dataclass",
    "Dict",
    "field",
    "Optional",
    "OptsType",
    "subprocess",
    # Locals of every rendered binding.
    "_args",
    "_invoke",
    "cmd",
    "cmdstr",
    "ctx",
})
"""Names the rendered module relies on and that a parameter must not shadow."""

PYTHON_RESERVED_WORDS: frozenset[str] = (
    frozenset(keyword.kwlist)
    | frozenset(keyword.softkwlist)
    | BUILTIN_TYPE_NAMES
    | GENERATED_MODULE_NAMES
)
"""Default reserved-word table for Python output."""


def reserved_words(extra: Iterable[str] = ()) -> frozenset[str]:
    """Return :data:`PYTHON_RESERVED_WORDS` extended with *extra* names.

    Args:
        extra: Additional names to escape, typically from the
            ``extra_reserved_words`` setting.

    Returns:
        A new ``frozenset``; the default table is never modified.
    """
    return PYTHON_RESERVED_WORDS | frozenset(extra)


def strip_leading_dashes(flag: str) -> str:
    """Remove every leading ``-`` from *flag*."""
    return flag.lstrip("-")


def dashes_to_underscores(text: str) -> str:
    """Replace every ``-`` in *text* with ``_``."""
    return text.replace("-", "_")


def escape_reserved(name: str, reserved: frozenset[str] = PYTHON_RESERVED_WORDS) -> str:
    """Prefix *name* with ``_`` if it appears in *reserved*."""
    if name in reserved:
        return f"_{name}"
    return name


def sanitize(raw_flag: str, reserved: frozenset[str] = PYTHON_RESERVED_WORDS) -> str:
    """Convert a raw flag or command name into a Python identifier.

    Args:
        raw_flag: The flag as written in the spec (``"--dry-run"``,
            ``"-v"``, ``"eval"``).
        reserved: Reserved-word table to escape against.

    Returns:
        The sanitised identifier.

    Example::

        >>> sanitize("--dry-run")
        'dry_run'
        >>> sanitize("--import")
        '_import'
        >>> sanitize("---Weird-Name")
        'Weird_Name'
    """
    return escape_reserved(dashes_to_underscores(strip_leading_dashes(raw_flag)), reserved)
