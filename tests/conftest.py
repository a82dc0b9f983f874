"""Shared test fixtures for specbind.

Provides reusable fixtures for loading spec fixtures, importing generated
source as a live module, recording the argument vectors handed to
``subprocess.run``, and running CLI commands. These fixtures are
automatically discovered by pytest and available to all test modules
without explicit imports.
"""

from __future__ import annotations

import itertools
import json
import subprocess
import sys
import types
from pathlib import Path
from typing import Any, Callable

import pytest

from specbind.models import Specification
from specbind.output import OutputFormat, OutputManager, reset_output, set_output


FIXTURES_DIR = Path(__file__).parent / "fixtures"

_module_counter = itertools.count()


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time.  When Typer's CliRunner redirects those streams during
    a test and the test finishes, the cached references become stale.
    Resetting forces a fresh manager to be created on next use.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Spec fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def opa_raw() -> dict[str, Any]:
    """The minimal opa spec: one valued root option, one boolean subcommand option."""
    return {
        "name": "opa",
        "description": "Open Policy Agent",
        "options": [{"name": "--format", "args": {"default": "json"}}],
        "subcommands": [{"name": "eval", "options": [{"name": "--dry-run"}]}],
    }


@pytest.fixture
def opa_spec(opa_raw: dict[str, Any]) -> Specification:
    return Specification.model_validate(opa_raw)


@pytest.fixture
def git_raw() -> dict[str, Any]:
    """Load the richer git fixture (aliases, reserved words, positionals)."""
    with open(FIXTURES_DIR / "git.json") as f:
        return json.load(f)


@pytest.fixture
def git_spec(git_raw: dict[str, Any]) -> Specification:
    return Specification.model_validate(git_raw)


# ---------------------------------------------------------------------------
# Generated-module helpers
# ---------------------------------------------------------------------------


@pytest.fixture
def load_module(monkeypatch: pytest.MonkeyPatch) -> Callable[[str], types.ModuleType]:
    """Return a loader that executes generated source as a registered module.

    The module is placed in ``sys.modules`` for the duration of the test;
    ``dataclasses`` resolves string annotations through it.
    """

    def _load(source: str) -> types.ModuleType:
        name = f"_specbind_generated_{next(_module_counter)}"
        module = types.ModuleType(name)
        monkeypatch.setitem(sys.modules, name, module)
        exec(compile(source, f"<{name}>", "exec"), module.__dict__)
        return module

    return _load


@pytest.fixture
def recorded_runs(monkeypatch: pytest.MonkeyPatch) -> list[tuple[list[str], dict[str, Any]]]:
    """Replace ``subprocess.run`` with a recorder.

    Each call appends ``(argv, kwargs)`` and returns a successful
    :class:`subprocess.CompletedProcess`.
    """
    calls: list[tuple[list[str], dict[str, Any]]] = []

    def _fake_run(cmd: list[str], **kwargs: Any) -> subprocess.CompletedProcess:
        calls.append((list(cmd), kwargs))
        return subprocess.CompletedProcess(cmd, 0)

    monkeypatch.setattr(subprocess, "run", _fake_run)
    return calls


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Points XDG_DATA_HOME into tmp_path, clears all SPECBIND_* environment
    variables and changes the working directory to tmp_path.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    for var in ["SPECBIND_CONFIG", "SPECBIND_SUPPRESS_DEFAULT_CONTEXT"]:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a PLAIN-format, quiet OutputManager as the global output."""
    output = OutputManager(format=OutputFormat.PLAIN, quiet=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
