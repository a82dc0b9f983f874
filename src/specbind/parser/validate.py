"""Validate a decoded spec document into a :class:`~specbind.models.Specification`.

Pydantic does the structural checking. Validation errors are re-raised as
:class:`~specbind.exceptions.MalformedSpecError` with a dotted location for
every problem (``subcommands.0.options.2.name``) so users can find the
offending entry in their document.
"""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from specbind.exceptions import MalformedSpecError
from specbind.models import Specification


def validate_spec(raw: dict[str, Any]) -> Specification:
    """Validate *raw* against the spec schema.

    Args:
        raw: The decoded document, as returned by
            :func:`~specbind.parser.loader.load_spec`.

    Returns:
        The frozen :class:`~specbind.models.Specification`.

    Raises:
        MalformedSpecError: If the document does not match the schema.
    """
    try:
        return Specification.model_validate(raw)
    except ValidationError as exc:
        raise MalformedSpecError(
            "Invalid specification:\n" + format_validation_error(exc)
        ) from exc


def format_validation_error(exc: ValidationError) -> str:
    """Render each pydantic error as ``  <location>: <message>``."""
    lines = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err["loc"]) or "<root>"
        lines.append(f"  {location}: {err['msg']}")
    return "\n".join(lines)
