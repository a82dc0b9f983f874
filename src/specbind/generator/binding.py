"""Generate the Python binding for one command or subcommand.

Generation happens in two steps so that each can be tested on its own:

1. :func:`build_binding` turns a :class:`~specbind.models.Specification`
   node into a :class:`~specbind.models.Binding` -- function name, parent,
   description and ordered option descriptors.
2. :func:`render_binding` renders that model through
   ``templates/binding.py.j2``.

:func:`generate_binding` chains both.

**Rendered function shape** (for ``eval`` under ``opa``)::

    def eval(ctx: CommandLine, *_args: Any, dry_run: Optional[bool] = False) -> Any:
        def _invoke(cmdstr: str) -> Any:
            cmd = [cmdstr, 'eval']
            if dry_run:
                cmd.append('--dry-run')
            cmd.extend(str(arg) for arg in _args)
            return subprocess.run(cmd, **ctx.cmdopts, **ctx.pipelineopts, **ctx.runopts)

        return ctx.exec(_invoke)

The argument vector is always assembled in the same order: base token from
the context, the subcommand token (subcommands only), options in declared
order, then trailing positionals. Booleans emit their flag only when true;
value-taking options emit ``<flag>=<value>`` only when the value is not
``None``. Declared defaults are the keyword defaults of the signature, so
they apply whenever the caller omits the option.
"""

from __future__ import annotations

from typing import Optional

from jinja2 import Environment

from specbind.exceptions import MalformedSpecError
from specbind.generator.naming import PYTHON_RESERVED_WORDS, sanitize
from specbind.generator.options import extract_options
from specbind.generator.render import create_jinja_env
from specbind.models import Binding, Specification


def binding_identifier(
    name: str,
    reserved: frozenset[str] = PYTHON_RESERVED_WORDS,
) -> str:
    """Return the Python function name for the command *name*.

    Raises:
        MalformedSpecError: If the sanitised name is not a valid identifier.
    """
    identifier = sanitize(name, reserved)
    if not identifier.isidentifier():
        raise MalformedSpecError(
            f"Command name {name!r} does not yield a Python identifier "
            f"(got {identifier!r})"
        )
    return identifier


def build_binding(
    spec: Specification,
    parent: Optional[str] = None,
    reserved: frozenset[str] = PYTHON_RESERVED_WORDS,
) -> Binding:
    """Build the structured :class:`~specbind.models.Binding` for *spec*.

    Args:
        spec: The command node. Its ``subcommands`` are ignored here; the
            module assembler walks them.
        parent: Name of the root command when *spec* is a subcommand,
            ``None`` for the root itself.
        reserved: Reserved-word table for the function and parameter names.

    Returns:
        The binding model, options in declared order.

    Raises:
        MalformedSpecError: If the command name is unusable.
        MalformedOptionError: If an option has no usable name.
        DuplicateIdentifierError: If two options share an identifier.
    """
    return Binding(
        name=spec.name,
        identifier=binding_identifier(spec.name, reserved),
        parent=parent,
        description=spec.description or "",
        options=extract_options(spec, reserved),
    )


def render_binding(binding: Binding, env: Optional[Environment] = None) -> str:
    """Render *binding* as Python source text.

    Args:
        binding: The structured binding.
        env: Jinja2 environment to reuse. A fresh one is created when
            omitted.

    Returns:
        The function definition, ending with a newline.
    """
    env = env or create_jinja_env()
    return env.get_template("binding.py.j2").render(b=binding)


def generate_binding(
    spec: Specification,
    parent: Optional[str] = None,
    reserved: frozenset[str] = PYTHON_RESERVED_WORDS,
    env: Optional[Environment] = None,
) -> str:
    """Build and render the binding for *spec* in one step."""
    return render_binding(build_binding(spec, parent, reserved), env)
