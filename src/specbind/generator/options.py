"""Extract option descriptors from spec ``options`` entries.

This module bridges the spec document and the binding generator. It
converts each :class:`~specbind.models.Option` into an
:class:`~specbind.models.OptionDescriptor` that carries the canonical flag,
the Python parameter name, the option kind and its default.

**Extraction rules:**

* **Canonical flag** -- a single ``name`` string is used as is. For an
  alias list, the first alias starting with ``--`` wins; when no alias is a
  long flag, the first alias is used.
* **Kind** -- an option without ``args`` (or with empty ``args``) is a
  boolean presence flag; anything else takes a value.
* **Default** -- ``False`` for booleans. For value-taking options the
  declared ``args.default``, or ``None`` (the "absent" marker) when none is
  declared. An empty-string default is kept as ``""``.
* **Identifier** -- :func:`~specbind.generator.naming.sanitize` applied to
  the canonical flag.

Entries without a usable name are rejected with
:class:`~specbind.exceptions.MalformedOptionError`.
"""

from __future__ import annotations

from typing import Any, Optional

from specbind.exceptions import DuplicateIdentifierError, MalformedOptionError
from specbind.generator.naming import PYTHON_RESERVED_WORDS, sanitize
from specbind.models import Option, OptionDescriptor, Specification

LONG_FLAG_PREFIX = "--"


def canonical_flag(name: str | list[str]) -> str:
    """Pick the canonical flag from a single name or an alias list.

    Args:
        name: ``"--format"`` or ``["-f", "--format"]``.

    Returns:
        The first ``--`` alias, falling back to the first alias.

    Raises:
        ValueError: If *name* is an empty list.
    """
    if isinstance(name, str):
        return name
    if not name:
        raise ValueError("alias list is empty")
    for alias in name:
        if alias.startswith(LONG_FLAG_PREFIX):
            return alias
    return name[0]


def _default_of(option: Option) -> Any:
    if option.args is None:
        return False
    return option.args.default


def extract_option(
    option: Option,
    reserved: frozenset[str] = PYTHON_RESERVED_WORDS,
    command: Optional[str] = None,
    index: Optional[int] = None,
) -> OptionDescriptor:
    """Build an :class:`~specbind.models.OptionDescriptor` for one option.

    Args:
        option: The validated option entry.
        reserved: Reserved-word table passed through to the sanitizer.
        command: Name of the owning command, used in error messages.
        index: Position of the option within its command, used in error
            messages.

    Returns:
        The descriptor for *option*.

    Raises:
        MalformedOptionError: If ``name`` is missing, an empty alias list,
            or a flag that does not sanitise to a valid Python identifier
            (``"--"``, ``"--log.level"``, ``"--2fa"``).

    Example::

        >>> d = extract_option(Option(name=["-f", "--format"], args={"default": "json"}))
        >>> (d.identifier, d.flag, d.is_boolean, d.default)
        ('format', '--format', False, 'json')
    """
    where = _describe(command, index)
    if option.name is None:
        raise MalformedOptionError(f"Option {where} has no 'name'")
    try:
        flag = canonical_flag(option.name)
    except ValueError as exc:
        raise MalformedOptionError(f"Option {where} has an empty alias list") from exc

    identifier = sanitize(flag, reserved)
    if not identifier.isidentifier():
        raise MalformedOptionError(
            f"Option {where} name {flag!r} does not yield a Python identifier "
            f"(got {identifier!r})"
        )

    return OptionDescriptor(
        identifier=identifier,
        flag=flag,
        is_boolean=option.args is None,
        default=_default_of(option),
        description=option.description or "",
    )


def extract_options(
    spec: Specification,
    reserved: frozenset[str] = PYTHON_RESERVED_WORDS,
) -> list[OptionDescriptor]:
    """Extract descriptors for every option of *spec*, in declared order.

    Raises:
        MalformedOptionError: See :func:`extract_option`.
        DuplicateIdentifierError: If two options sanitise to the same
            identifier (e.g. ``--dry-run`` and ``--dry_run``).
    """
    descriptors: list[OptionDescriptor] = []
    seen: dict[str, str] = {}
    for index, option in enumerate(spec.options):
        descriptor = extract_option(option, reserved, command=spec.name, index=index)
        if descriptor.identifier in seen:
            raise DuplicateIdentifierError(
                f"Options {seen[descriptor.identifier]!r} and {descriptor.flag!r} "
                f"of command {spec.name!r} both map to parameter "
                f"{descriptor.identifier!r}"
            )
        seen[descriptor.identifier] = descriptor.flag
        descriptors.append(descriptor)
    return descriptors


def _describe(command: Optional[str], index: Optional[int]) -> str:
    parts = []
    if index is not None:
        parts.append(f"#{index}")
    if command is not None:
        parts.append(f"of command {command!r}")
    return " ".join(parts) if parts else "entry"
