"""Top-level entry point: specification in, bindings module out.

:func:`generate` accepts a spec in any of its forms (path, URL, ``-``, raw
dict, or :class:`~specbind.models.Specification`) and a destination (path or
open text sink), assembles the module and writes it.

The full text is produced before the destination is touched. Path
destinations are replaced atomically; sinks receive a single ``write``
call. Either way a failed run leaves no partial module behind.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional, TextIO, Union

from pydantic import ValidationError

from specbind.config import _atomic_write
from specbind.exceptions import ConfigError, DestinationWriteError
from specbind.generator.module import assemble
from specbind.models import GenerateOptions, Specification
from specbind.output import debug
from specbind.parser import load_spec, validate_spec
from specbind.parser.validate import format_validation_error

SpecSource = Union[str, Path, dict[str, Any], Specification]
Destination = Union[str, Path, TextIO]


def resolve_spec(source: SpecSource) -> Specification:
    """Load and validate *source* unless it already is a :class:`Specification`.

    Raises:
        SpecLoadError: If a path/URL/stdin source cannot be decoded.
        MalformedSpecError: If the decoded document is not a valid spec.
    """
    if isinstance(source, Specification):
        return source
    if isinstance(source, dict):
        return validate_spec(source)
    debug(f"Loading spec from: {source}")
    return validate_spec(load_spec(source))


def write_output(text: str, destination: Destination) -> None:
    """Write the finished module *text* to *destination*.

    Raises:
        DestinationWriteError: If the file or sink cannot be written.
    """
    if isinstance(destination, (str, Path)):
        path = Path(destination)
        try:
            _atomic_write(path, text)
        except OSError as exc:
            raise DestinationWriteError(f"Cannot write {path}: {exc}") from exc
        debug(f"Wrote {len(text)} characters to {path}")
        return

    try:
        destination.write(text)
    except (OSError, ValueError) as exc:
        # ValueError: "I/O operation on closed file".
        raise DestinationWriteError(f"Cannot write to output stream: {exc}") from exc


def apply_overrides(options: GenerateOptions, overrides: dict[str, Any]) -> GenerateOptions:
    """Return *options* with *overrides* applied and validated.

    Raises:
        ConfigError: For an unknown option name or a value of the wrong type.
    """
    if not overrides:
        return options
    try:
        return GenerateOptions.model_validate({**options.model_dump(), **overrides})
    except ValidationError as exc:
        raise ConfigError("Invalid generate options:\n" + format_validation_error(exc)) from exc


def generate(
    spec: SpecSource,
    destination: Destination,
    options: Optional[GenerateOptions] = None,
    **overrides: Any,
) -> str:
    """Generate the bindings module for *spec* and write it to *destination*.

    Args:
        spec: Path, URL, ``"-"`` (stdin), raw dict, or
            :class:`~specbind.models.Specification`.
        destination: Output path or an open, writable text stream.
        options: Run options. Defaults to
            :class:`~specbind.models.GenerateOptions`.
        **overrides: Individual option fields (``custom_include``,
            ``suppress_default_context``, ``extra_reserved_words``) applied on
            top of *options*.

    Returns:
        The generated source text.

    Raises:
        ConfigError: If *overrides* name an unknown option or carry a bad value.
        SpecLoadError: If the spec document cannot be decoded.
        MalformedSpecError: If the spec is invalid for generation.
        DestinationWriteError: If the output cannot be written.

    Example::

        from specbind import generate

        generate("opa.json", "opa_cli.py")
        generate({"name": "git", "subcommands": [{"name": "push"}]}, sys.stdout)
    """
    options = apply_overrides(options or GenerateOptions(), overrides)

    specification = resolve_spec(spec)
    debug(
        f"Generating bindings for {specification.name!r} "
        f"({len(specification.subcommands)} subcommand(s))"
    )
    text = assemble(specification, options)
    write_output(text, destination)
    return text
