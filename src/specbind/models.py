"""Canonical Pydantic models shared across all specbind modules.

This is the single source of truth for data shapes in the project. The
models fall into three groups:

**Spec models** -- the validated form of the input document:
    :class:`OptionArgs`, :class:`Option` and :class:`Specification`.

**Generator models** -- structured intermediate data produced before any
text is rendered:
    :class:`OptionDescriptor` and :class:`Binding`.

**Configuration models** -- knobs for a generation run:
    :class:`GenerateOptions` and :class:`ProjectConfig`.

Spec models are frozen; the generator only ever reads them.
"""

from __future__ import annotations

from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


# --- Spec Models ---


class OptionArgs(BaseModel):
    """Value specification of a value-taking option.

    Only ``default`` is interpreted. Any other keys from the spec document
    (``name``, ``type``, ...) are preserved in ``model_extra``.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    default: Any = None


class Option(BaseModel):
    """One flag accepted by a command.

    ``name`` is either a single flag (``"--format"``) or a list of aliases
    (``["-f", "--format"]``). ``args`` is ``None`` for boolean presence
    flags; an empty ``args`` value in the document is normalised to ``None``.

    ``name`` is optional at the model level so that a missing name is
    reported by the extractor as a
    :class:`~specbind.exceptions.MalformedOptionError` with the command
    and option position, rather than as a generic validation error.
    """

    model_config = ConfigDict(frozen=True)

    name: Optional[Union[str, list[str]]] = None
    description: Optional[str] = None
    args: Optional[OptionArgs] = None

    @field_validator("args", mode="before")
    @classmethod
    def _normalise_args(cls, value: Any) -> Any:
        """Normalise the many shapes ``args`` takes in spec documents.

        Empty or absent values mean a boolean flag (``None``). A mapping is
        kept. A list contributes its first element when that is a mapping
        (``[{"default": "x"}]``). Any other non-empty value (``"FILE"``,
        ``["FILE"]``) is a value-taking option without a default.
        """
        if not value:
            return None
        if isinstance(value, (list, tuple)):
            value = value[0]
        if isinstance(value, (dict, OptionArgs)):
            return value
        return OptionArgs()


class Specification(BaseModel):
    """A command (root or subcommand) and everything it accepts.

    Subcommands are themselves :class:`Specification` instances. Only one
    level of nesting is supported by the generator; see
    :class:`~specbind.exceptions.UnsupportedNestingError`.

    Example::

        Specification(
            name="opa",
            options=[Option(name="--format", args={"default": "json"})],
            subcommands=[Specification(name="eval")],
        )
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Executable name, or subcommand token")
    description: Optional[str] = None
    options: list[Option] = Field(default_factory=list)
    subcommands: list[Specification] = Field(default_factory=list)

    @field_validator("options", "subcommands", mode="before")
    @classmethod
    def _none_is_empty(cls, value: Any) -> Any:
        return [] if value is None else value


# --- Generator Models ---


class OptionDescriptor(BaseModel):
    """Everything the binding generator needs to know about one option.

    Produced by :func:`~specbind.generator.options.extract_option`.
    ``default`` is ``False`` for boolean options; for value-taking options it
    is the declared default, or ``None`` when no default was declared.
    """

    identifier: str
    flag: str
    is_boolean: bool
    default: Any = None
    description: str = ""

    @property
    def type_name(self) -> str:
        """Python type of the generated keyword parameter."""
        return "bool" if self.is_boolean else "str"


class Binding(BaseModel):
    """Structured form of one generated binding, prior to rendering.

    ``name`` is the raw command token; ``identifier`` the Python function
    name. ``parent`` is set for subcommands and names the root command.
    """

    name: str
    identifier: str
    parent: Optional[str] = None
    description: str = ""
    options: list[OptionDescriptor] = Field(default_factory=list)

    @property
    def is_subcommand(self) -> bool:
        return self.parent is not None


# --- Configuration Models ---


class GenerateOptions(BaseModel):
    """Options recognised by a single generation run.

    See Also:
        :func:`~specbind.config.resolve_options`: Build an instance from
        CLI flags, environment variables and ``specbind.json``.
    """

    model_config = ConfigDict(extra="forbid")

    custom_include: Optional[str] = Field(
        default=None,
        description="Raw text injected verbatim before the generated bindings",
    )
    suppress_default_context: bool = Field(
        default=False,
        description="Skip the default CommandLine; the caller must provide one",
    )
    extra_reserved_words: list[str] = Field(
        default_factory=list,
        description="Additional names escaped like keywords",
    )


class ProjectConfig(BaseModel):
    """Project-local configuration read from ``./specbind.json``.

    ``custom_include`` here is a *path* to a file whose contents become
    :attr:`GenerateOptions.custom_include`; relative paths are resolved
    against the config file's directory.
    """

    model_config = ConfigDict(extra="forbid")

    custom_include: Optional[str] = None
    suppress_default_context: Optional[bool] = None
    extra_reserved_words: list[str] = Field(default_factory=list)
