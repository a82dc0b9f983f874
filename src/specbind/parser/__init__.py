"""Spec parser -- load a spec document and validate it into models.

This sub-package is the first half of the specbind pipeline: turning a raw
JSON or YAML document (local file, remote URL, or stdin) into a
:class:`~specbind.models.Specification` that the generator can consume.

Typical usage::

    from specbind.parser import load_spec, validate_spec

    spec = validate_spec(load_spec("opa.json"))

Sub-modules:

* :mod:`~specbind.parser.loader` -- I/O layer (URL, file, stdin) plus format
  detection.
* :mod:`~specbind.parser.validate` -- Pydantic validation with readable
  error locations.
"""

from specbind.parser.loader import load_spec
from specbind.parser.validate import validate_spec

__all__ = ["load_spec", "validate_spec"]
