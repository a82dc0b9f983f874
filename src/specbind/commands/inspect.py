"""Inspect command -- preview the bindings a spec would produce.

Provides the ``specbind inspect`` command: a read-only view of every
command and option in a spec document alongside the function name,
parameter name, kind and default that generation would use. Useful for
spotting reserved-word escapes and identifier collisions before writing a
module.

Extra reserved words come from ``--reserved`` and ``specbind.json`` exactly
as they do for ``specbind generate``, so the preview matches the module.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from specbind.output import error, get_output


def inspect_command(
    spec: str = typer.Argument(
        ..., help="Spec file path, http(s) URL, or '-' for stdin."
    ),
    reserved: Optional[list[str]] = typer.Option(
        None,
        "--reserved",
        "-r",
        help="Extra name to escape like a keyword (repeatable).",
    ),
    config: Optional[str] = typer.Option(
        None, "--config", "-c", help="Project config file (default ./specbind.json)."
    ),
) -> None:
    """Show the commands and options of SPEC as generation sees them.

    One row is printed per option; commands without options get a single
    row with empty option columns.

    Example::

        specbind inspect opa.json
        specbind --json inspect opa.json -r format
    """
    from specbind.config import resolve_options
    from specbind.exceptions import SpecbindError
    from specbind.generator.driver import resolve_spec
    from specbind.generator.module import build_bindings
    from specbind.generator.naming import reserved_words
    from specbind.generator.render import default_literal

    try:
        options = resolve_options(
            cli_reserved_words=reserved or (),
            config_path=Path(config) if config else None,
        )
        specification = resolve_spec(spec)
        bindings = build_bindings(specification, reserved_words(options.extra_reserved_words))
    except SpecbindError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    headers = ["Command", "Function", "Flag", "Parameter", "Kind", "Default"]
    rows: list[list[str]] = []
    for binding in bindings:
        command = binding.name if binding.parent is None else f"{binding.parent} {binding.name}"
        if not binding.options:
            rows.append([command, binding.identifier, "", "", "", ""])
            continue
        for opt in binding.options:
            rows.append([
                command,
                binding.identifier,
                opt.flag,
                opt.identifier,
                opt.type_name,
                default_literal(opt),
            ])

    get_output().print_table(
        headers, rows, title=f"{specification.name} -- Bindings ({len(bindings)})"
    )
