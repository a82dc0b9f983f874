"""Bindings generator -- turn a Specification into a Python module.

This sub-package is the second half of the specbind pipeline: taking a
:class:`~specbind.models.Specification` (produced by the parser) and
rendering a module of functions that run the described CLI.

Typical usage::

    from specbind.generator import generate

    generate("opa.json", "opa_cli.py")

Sub-modules:

* :mod:`~specbind.generator.naming` -- Flag to identifier sanitisation and
  the reserved-word table.
* :mod:`~specbind.generator.options` -- Canonical flag, kind and default
  for each option.
* :mod:`~specbind.generator.binding` -- One binding per command node.
* :mod:`~specbind.generator.module` -- Assembles bindings, execution
  context and module docstring.
* :mod:`~specbind.generator.driver` -- Loads specs and writes the result.
"""

from specbind.generator.binding import build_binding, generate_binding
from specbind.generator.driver import generate
from specbind.generator.module import assemble
from specbind.generator.naming import PYTHON_RESERVED_WORDS, sanitize
from specbind.generator.options import extract_option

__all__ = [
    "PYTHON_RESERVED_WORDS",
    "assemble",
    "build_binding",
    "extract_option",
    "generate",
    "generate_binding",
    "sanitize",
]
