"""Tests for specbind.generator.binding.

Covers:
- build_binding: identifiers, parent, options in declared order
- render_binding: signature, docstring, assembly statements
- Docstring escaping of quotes and backslashes
- Rendering of non-string defaults
"""

from __future__ import annotations

import ast

import pytest

from specbind.exceptions import MalformedSpecError
from specbind.generator.binding import (
    binding_identifier,
    build_binding,
    generate_binding,
    render_binding,
)
from specbind.models import Specification


def _function(source: str) -> ast.FunctionDef:
    tree = ast.parse(source)
    assert len(tree.body) == 1
    node = tree.body[0]
    assert isinstance(node, ast.FunctionDef)
    return node


# ------------------------------------------------------------------ #
# build_binding
# ------------------------------------------------------------------ #


class TestBuildBinding:
    def test_root_binding(self, opa_spec: Specification) -> None:
        binding = build_binding(opa_spec)
        assert binding.name == "opa"
        assert binding.identifier == "opa"
        assert binding.parent is None
        assert binding.is_subcommand is False
        assert [o.flag for o in binding.options] == ["--format"]

    def test_subcommand_binding(self, opa_spec: Specification) -> None:
        binding = build_binding(opa_spec.subcommands[0], parent="opa")
        assert binding.name == "eval"
        assert binding.parent == "opa"
        assert binding.is_subcommand is True
        assert binding.options[0].identifier == "dry_run"

    def test_subcommands_of_node_ignored(self, git_spec: Specification) -> None:
        binding = build_binding(git_spec)
        assert [o.identifier for o in binding.options] == ["C", "paginate", "no_pager"]

    def test_dashed_command_name(self) -> None:
        assert binding_identifier("cherry-pick") == "cherry_pick"

    def test_reserved_command_name(self) -> None:
        assert binding_identifier("import") == "_import"
        assert binding_identifier("CommandLine") == "_CommandLine"

    def test_invalid_command_name(self) -> None:
        with pytest.raises(MalformedSpecError, match="my tool"):
            build_binding(Specification(name="my tool"))


# ------------------------------------------------------------------ #
# render_binding
# ------------------------------------------------------------------ #


class TestRenderBinding:
    def test_source_parses_as_single_function(self, opa_spec: Specification) -> None:
        node = _function(generate_binding(opa_spec))
        assert node.name == "opa"

    def test_signature(self, opa_spec: Specification) -> None:
        node = _function(generate_binding(opa_spec))
        assert [a.arg for a in node.args.args] == ["ctx"]
        assert node.args.vararg is not None
        assert node.args.vararg.arg == "_args"
        assert [a.arg for a in node.args.kwonlyargs] == ["format"]
        assert ast.literal_eval(node.args.kw_defaults[0]) == "json"

    def test_boolean_parameter_defaults_false(self, opa_spec: Specification) -> None:
        source = generate_binding(opa_spec.subcommands[0], parent="opa")
        assert "dry_run: Optional[bool] = False," in source

    def test_valued_parameter_without_default_is_none(self, git_spec: Specification) -> None:
        source = generate_binding(git_spec)
        assert "C: Optional[str] = None," in source

    def test_root_docstring(self, opa_spec: Specification) -> None:
        doc = ast.get_docstring(_function(generate_binding(opa_spec)))
        assert doc is not None
        assert doc.startswith("opa\n")
        assert "Run the opa command." in doc
        assert "Open Policy Agent" in doc
        assert "format (str):" in doc

    def test_subcommand_docstring(self, opa_spec: Specification) -> None:
        source = generate_binding(opa_spec.subcommands[0], parent="opa")
        doc = ast.get_docstring(_function(source))
        assert "Run the eval subcommand of the opa command." in doc
        assert "dry_run (bool):" in doc

    def test_option_docs_in_declared_order(self, git_spec: Specification) -> None:
        source = generate_binding(git_spec.subcommands[0], parent="git")
        doc = ast.get_docstring(_function(source))
        assert doc.index("force (bool)") < doc.index("repo (str)") < doc.index("dry_run (bool)")

    def test_subcommand_token_follows_base(self, opa_spec: Specification) -> None:
        source = generate_binding(opa_spec.subcommands[0], parent="opa")
        assert "cmd = [cmdstr, 'eval']" in source

    def test_root_starts_with_base_only(self, opa_spec: Specification) -> None:
        assert "cmd = [cmdstr]" in generate_binding(opa_spec)

    def test_assembly_statements(self, opa_spec: Specification) -> None:
        root = generate_binding(opa_spec)
        sub = generate_binding(opa_spec.subcommands[0], parent="opa")
        assert "if format is not None:" in root
        assert "cmd.append('--format=' + str(format))" in root
        assert "if dry_run:" in sub
        assert "cmd.append('--dry-run')" in sub

    def test_execution_through_context(self, opa_spec: Specification) -> None:
        source = generate_binding(opa_spec)
        assert "subprocess.run(cmd, **ctx.cmdopts, **ctx.pipelineopts, **ctx.runopts)" in source
        assert "return ctx.exec(_invoke)" in source

    def test_render_accepts_prebuilt_model(self, opa_spec: Specification) -> None:
        binding = build_binding(opa_spec)
        assert render_binding(binding) == generate_binding(opa_spec)


# ------------------------------------------------------------------ #
# Escaping and defaults
# ------------------------------------------------------------------ #


class TestEscaping:
    def test_quotes_and_backslashes_in_descriptions(self) -> None:
        spec = Specification.model_validate({
            "name": "tool",
            "description": 'Say """hi""" to C:\\temp',
            "options": [{"name": "--x", "description": 'a "quoted" flag'}],
        })
        doc = ast.get_docstring(_function(generate_binding(spec)))
        assert 'Say """hi""" to C:\\temp' in doc
        assert 'a "quoted" flag' in doc

    def test_multiline_description_stays_in_docstring(self) -> None:
        spec = Specification(name="tool", description="line one\nline two")
        doc = ast.get_docstring(_function(generate_binding(spec)))
        assert "line one\nline two" in doc

    def test_quote_in_flag_is_rejected(self) -> None:
        spec = Specification.model_validate({
            "name": "tool", "options": [{"name": ["--it's"], "args": {}}],
        })
        with pytest.raises(MalformedSpecError):
            generate_binding(spec)


class TestDefaults:
    @pytest.mark.parametrize(
        ("declared", "rendered"),
        [
            ("json", "'json'"),
            ("", "''"),
            (10, "'10'"),
            (1.5, "'1.5'"),
            (True, "'true'"),
            (["a", "b"], "'[\"a\", \"b\"]'"),
        ],
    )
    def test_default_rendering(self, declared: object, rendered: str) -> None:
        spec = Specification.model_validate({
            "name": "tool", "options": [{"name": "--opt", "args": {"default": declared}}],
        })
        assert f"opt: Optional[str] = {rendered}," in generate_binding(spec)
