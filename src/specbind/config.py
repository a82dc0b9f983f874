"""Configuration management with XDG paths, atomic writes, and precedence resolution.

This module handles all persistent configuration for specbind:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.specbind/`` on macOS and Windows. Only the data directory is used
  (crash logs). See :func:`get_data_dir`.
* **Project config** -- An optional ``./specbind.json`` deserialised into a
  :class:`~specbind.models.ProjectConfig`. ``SPECBIND_CONFIG`` points at an
  alternate file.
* **Precedence resolution** -- :func:`resolve_options` merges CLI flags,
  environment variables and project config into the
  :class:`~specbind.models.GenerateOptions` for one run.

Generated modules are written with :func:`_atomic_write` (temp file then
rename) so a failed run never leaves a truncated file behind.
"""

from __future__ import annotations

import json
import os
import platform
import tempfile
from collections.abc import Iterable
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from specbind.exceptions import ConfigError
from specbind.models import GenerateOptions, ProjectConfig

_APP_NAME = "specbind"
_PROJECT_CONFIG_FILENAME = "specbind.json"

ENV_CONFIG = "SPECBIND_CONFIG"
ENV_SUPPRESS_DEFAULT_CONTEXT = "SPECBIND_SUPPRESS_DEFAULT_CONTEXT"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _fallback_base_dir() -> Path:
    """Fallback base directory for non-XDG platforms (macOS, Windows)."""
    return Path.home() / f".{_APP_NAME}"


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Path:
    """Resolve an XDG base directory from an env var with fallback segments under $HOME."""
    env_value = os.environ.get(env_var, "")
    if env_value:
        return Path(env_value)
    base = Path.home()
    for seg in default_segments:
        base = base / seg
    return base


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/specbind/`` (default ``~/.local/share/specbind/``).
    On macOS/Windows: ``~/.specbind/``.

    Crash logs go to a ``logs/`` subdirectory of the returned path.

    Returns:
        Absolute path to the data directory (guaranteed to exist).
    """
    if _is_xdg_platform():
        base = _xdg_base("XDG_DATA_HOME", (".local", "share"))
        path = base / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Atomic file writes ---


def _atomic_write(path: Path, data: str) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file is created in the same directory as *path* so that
    ``os.replace`` is guaranteed to be an atomic rename on POSIX systems.
    On success the temp file is renamed over *path*; on any failure the temp
    file is cleaned up.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None  # prevent double-close in finally
        os.replace(tmp_path, path)
    except BaseException:
        # Clean up the temp file on any error (including KeyboardInterrupt).
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise


# --- Project-local config ---


def project_config_path() -> Path:
    """Location of the project config: ``$SPECBIND_CONFIG`` or ``./specbind.json``."""
    override = os.environ.get(ENV_CONFIG)
    if override:
        return Path(override).expanduser()
    return Path.cwd() / _PROJECT_CONFIG_FILENAME


def load_project_config(path: Optional[Path] = None) -> Optional[ProjectConfig]:
    """Load project-local configuration.

    Args:
        path: Explicit config path. Defaults to :func:`project_config_path`.

    Returns:
        The validated config, or ``None`` if the default file does not
        exist.

    Raises:
        ConfigError: If the file contains invalid JSON or unknown keys, or
            if an explicitly requested file (argument or ``SPECBIND_CONFIG``)
            does not exist.
    """
    explicit = path is not None or bool(os.environ.get(ENV_CONFIG))
    path = path or project_config_path()
    if not path.is_file():
        if explicit:
            raise ConfigError(f"Config file not found: {path}")
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return ProjectConfig.model_validate(data)
    except (json.JSONDecodeError, ValidationError) as exc:
        raise ConfigError(f"Invalid project config at {path}: {exc}") from exc


def read_include(path: str | Path, base_dir: Optional[Path] = None) -> str:
    """Read a ``custom_include`` file.

    Args:
        path: File to read. Relative paths are resolved against *base_dir*
            when given, otherwise against the working directory.
        base_dir: Directory of the config file that named *path*.

    Raises:
        ConfigError: If the file cannot be read.
    """
    include = Path(path).expanduser()
    if base_dir is not None and not include.is_absolute():
        include = base_dir / include
    try:
        return include.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read include file {include}: {exc}") from exc


def _env_flag(name: str) -> Optional[bool]:
    """Parse a boolean environment variable; ``None`` when unset."""
    raw = os.environ.get(name)
    if raw is None:
        return None
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ConfigError(f"Invalid boolean for {name}: {raw!r}")


# --- Precedence resolution ---


def resolve_options(
    cli_include: Optional[str | Path] = None,
    cli_suppress_default_context: Optional[bool] = None,
    cli_reserved_words: Iterable[str] = (),
    config_path: Optional[Path] = None,
) -> GenerateOptions:
    """Resolve generation options with full precedence chain.

    Precedence (high to low):
        1. CLI flags (``cli_include``, ``cli_suppress_default_context``)
        2. Environment variables (``SPECBIND_SUPPRESS_DEFAULT_CONTEXT``)
        3. Project config (``./specbind.json`` or ``$SPECBIND_CONFIG``)
        4. Defaults

    Extra reserved words are additive: the config's list and the CLI's list
    are combined.

    Returns:
        The :class:`~specbind.models.GenerateOptions` for this run.
    """
    project = load_project_config(config_path)
    options = GenerateOptions()

    # 3. Project config
    if project is not None:
        base_dir = (config_path or project_config_path()).parent
        if project.custom_include:
            options.custom_include = read_include(project.custom_include, base_dir)
        if project.suppress_default_context is not None:
            options.suppress_default_context = project.suppress_default_context
        options.extra_reserved_words.extend(project.extra_reserved_words)

    # 2. Environment variable
    env_suppress = _env_flag(ENV_SUPPRESS_DEFAULT_CONTEXT)
    if env_suppress is not None:
        options.suppress_default_context = env_suppress

    # 1. CLI flags (highest precedence)
    if cli_include is not None:
        options.custom_include = read_include(cli_include)
    if cli_suppress_default_context is not None:
        options.suppress_default_context = cli_suppress_default_context
    for word in cli_reserved_words:
        if word not in options.extra_reserved_words:
            options.extra_reserved_words.append(word)

    return options
