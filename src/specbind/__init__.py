"""specbind -- Generate Python bindings for command-line tools from declarative specs.

This package reads a JSON or YAML description of a CLI (its name,
description, options and subcommands) and emits a Python module with one
function per command. Calling a function assembles the argument vector and
runs the tool through ``subprocess.run``, configured by a ``CommandLine``
execution context.

Typical workflow::

    specbind generate opa.json -o opa_cli.py

    from opa_cli import CommandLine, eval
    eval(CommandLine(), "data.policy", dry_run=True)

Modules:
    app: Typer application and CLI entry point.
    models: Pydantic models shared across the entire package.
    config: Project configuration and option precedence.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.1.0"

from specbind.generator import assemble, generate  # noqa: E402

__all__ = ["__version__", "assemble", "generate"]
