"""Jinja2 environment and filters shared by the binding and module renderers.

Templates live in ``generator/templates/`` and produce Python source, so
autoescaping is disabled for ``.py.j2`` files. Every value that ends up
inside a Python string literal goes through :func:`pyrepr`; every value that
ends up inside a docstring goes through :func:`docstring_text`.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from specbind.models import OptionDescriptor


TEMPLATE_DIR = Path(__file__).parent / "templates"
"""Path to the Jinja2 template directory (``generator/templates/``)."""


def pyrepr(value: Any) -> str:
    """Render *value* as a Python literal."""
    return repr(value)


def docstring_text(value: Any) -> str:
    """Make *value* safe to embed in a triple-quoted docstring.

    Backslashes and double quotes are escaped, and surrounding whitespace is
    stripped.
    """
    if value is None:
        return ""
    return str(value).strip().replace("\\", "\\\\").replace('"', '\\"')


def default_as_text(value: Any) -> str:
    """Convert a declared default into the text passed on the command line.

    JSON booleans become ``true``/``false``, numbers use ``str`` and
    compound values are re-serialised as JSON.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return json.dumps(value, sort_keys=True)


def default_literal(descriptor: OptionDescriptor) -> str:
    """Python source for the keyword default of *descriptor*'s parameter."""
    if descriptor.is_boolean:
        return "False"
    if descriptor.default is None:
        return "None"
    return pyrepr(default_as_text(descriptor.default))


def create_jinja_env() -> Environment:
    """Create and configure the Jinja2 environment for module templates.

    Block trimming and lstrip are enabled so that ``{% ... %}`` lines leave
    no trace in the rendered Python. Undefined variables raise instead of
    rendering as empty strings.

    Returns:
        A configured :class:`~jinja2.Environment` instance.
    """
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=select_autoescape(disabled_extensions=("py.j2",)),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        undefined=StrictUndefined,
    )
    env.filters["pyrepr"] = pyrepr
    env.filters["docstring"] = docstring_text
    env.filters["default_literal"] = default_literal
    return env
