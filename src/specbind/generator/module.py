"""Assemble a complete bindings module from a specification.

The assembled module contains, in order:

1. A module docstring naming the CLI, its description and a provenance
   notice.
2. Imports and the ``OptsType`` alias.
3. The caller's ``custom_include`` block, verbatim.
4. The default ``CommandLine`` execution context, unless
   ``suppress_default_context`` is set.
5. One binding for the root command, then one per subcommand, flattened
   into the module namespace.
6. An ``__all__`` listing the context (when emitted) and every binding.

Only one level of subcommands is supported. A subcommand that declares
its own ``subcommands`` is rejected with
:class:`~specbind.exceptions.UnsupportedNestingError`.
"""

from __future__ import annotations

from typing import Optional

from specbind import __version__
from specbind.exceptions import DuplicateIdentifierError, UnsupportedNestingError
from specbind.generator.binding import build_binding, render_binding
from specbind.generator.naming import reserved_words
from specbind.generator.render import create_jinja_env
from specbind.models import Binding, GenerateOptions, Specification


GENERATOR_NAME = f"specbind {__version__}"
"""Provenance string embedded in every generated module."""

CONTEXT_CLASS_NAME = "CommandLine"


def build_bindings(
    spec: Specification,
    reserved: frozenset[str],
) -> list[Binding]:
    """Build the root binding followed by one binding per subcommand.

    Raises:
        UnsupportedNestingError: If a subcommand has subcommands of its own.
        DuplicateIdentifierError: If two commands share a function name.
    """
    bindings = [build_binding(spec, None, reserved)]
    for sub in spec.subcommands:
        if sub.subcommands:
            raise UnsupportedNestingError(
                f"Subcommand {sub.name!r} of {spec.name!r} declares its own "
                "subcommands; only one level of nesting is supported"
            )
        bindings.append(build_binding(sub, spec.name, reserved))

    seen: dict[str, str] = {}
    for binding in bindings:
        if binding.identifier in seen:
            raise DuplicateIdentifierError(
                f"Commands {seen[binding.identifier]!r} and {binding.name!r} "
                f"both map to function {binding.identifier!r}"
            )
        seen[binding.identifier] = binding.name
    return bindings


def assemble(spec: Specification, options: Optional[GenerateOptions] = None) -> str:
    """Generate the full bindings module for *spec*.

    Every binding is built before anything is rendered, so a malformed spec
    fails before any text exists.

    Args:
        spec: The root specification.
        options: Run options; defaults to :class:`~specbind.models.GenerateOptions`.

    Returns:
        The module source text.

    Raises:
        MalformedSpecError: Or one of its subclasses, for unusable specs.
    """
    options = options or GenerateOptions()
    reserved = reserved_words(options.extra_reserved_words)
    bindings = build_bindings(spec, reserved)

    env = create_jinja_env()
    default_context = not options.suppress_default_context
    exports = [CONTEXT_CLASS_NAME] if default_context else []
    exports.extend(b.identifier for b in bindings)

    return env.get_template("module.py.j2").render(
        spec_name=spec.name,
        description=spec.description or "",
        generator=GENERATOR_NAME,
        custom_include=options.custom_include or "",
        default_context=default_context,
        bindings=[render_binding(b, env) for b in bindings],
        exports=exports,
    )
