"""Generate command -- render a bindings module from a spec document.

Implements the ``specbind generate`` top-level command. Options are
resolved through :func:`~specbind.config.resolve_options` (CLI flags, then
environment, then ``specbind.json``), the module is assembled in memory, and
the result is either written atomically to ``--output`` or printed to stdout.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from specbind.output import debug, error, get_output, info, success, suggest


def generate_command(
    spec: str = typer.Argument(
        ..., help="Spec file path, http(s) URL, or '-' for stdin."
    ),
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the module to this file instead of stdout.",
    ),
    include: Optional[str] = typer.Option(
        None,
        "--include",
        "-i",
        help="File whose text is injected verbatim before the bindings.",
    ),
    no_default_context: Optional[bool] = typer.Option(
        None,
        "--no-default-context/--default-context",
        help="Omit the default CommandLine class (supply one via --include).",
        show_default=False,
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
    """Generate Python bindings for the CLI described by SPEC.

    Args:
        spec: Spec source passed to :func:`~specbind.parser.load_spec`.
        output: Destination path. When omitted the module goes to stdout.
        include: Path of a custom include file.
        no_default_context: ``True`` to suppress, ``False`` to force the
            default execution context; ``None`` defers to config.
        reserved: Extra reserved words.
        config: Alternate project config path.

    Raises:
        typer.Exit: With the failing error's exit code.

    Example::

        specbind generate opa.json -o opa_cli.py
        specbind generate git.yaml --include context.py --no-default-context
        cat opa.json | specbind generate - > opa_cli.py
    """
    from specbind.config import resolve_options
    from specbind.exceptions import SpecbindError
    from specbind.generator import assemble, generate
    from specbind.generator.driver import resolve_spec

    try:
        options = resolve_options(
            cli_include=include,
            cli_suppress_default_context=no_default_context,
            cli_reserved_words=reserved or (),
            config_path=Path(config) if config else None,
        )
        debug(f"Options: {options.model_dump()}")

        if output is None:
            source = assemble(resolve_spec(spec), options)
            get_output().print_source(source)
            return

        info(f"Generating bindings from: {spec}")
        generate(spec, output, options)
    except SpecbindError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    success(f"Bindings written to: {output}")
    if options.suppress_default_context and not options.custom_include:
        suggest("Define a CommandLine class before importing the generated module.")
