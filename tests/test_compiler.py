"""
Unit tests for compiler.py - the compile_source pipeline.
"""

import pytest

from compiler import CompileOptions, CompileResult, analyze_source, compile_many, compile_source
from gaia_core.errors import ParseError

HELLO = "導⟨useState⟩ 文⟨Hello⟩ ⊗δχβ"


class TestCompileSource:
    """Tests for successful compiles."""

    def test_hello_scenario(self):
        result = compile_source(HELLO)
        assert result.success
        assert '"Hello"' in result.typescript
        assert "42" in result.typescript
        assert "@gaia/runtime" in result.typescript
        assert result.go is None
        assert result.javascript is None

    def test_default_options(self):
        options = CompileOptions()
        assert options.target == "typescript"
        assert not options.debug and not options.source_map and not options.strict

    def test_go_target(self):
        result = compile_source(HELLO, CompileOptions(target="go"))
        assert result.success
        assert result.typescript is None
        assert result.go.startswith("package main")
        assert "\n_ = " not in result.go

    def test_options_as_dict(self):
        result = compile_source(HELLO, {"target": "javascript"})
        assert result.javascript is not None
        assert result.output == result.javascript

    def test_single_unknown_character(self):
        result = compile_source("@")
        assert result.success
        assert result.typescript == ""

    def test_skipped_token_in_debug_diagnostics(self):
        result = compile_source("@", CompileOptions(debug=True))
        assert result.success
        assert any(d.startswith("Unsupported construct at line 1: skipped") for d in result.diagnostics)

    def test_empty_source(self):
        result = compile_source("")
        assert result.success
        assert result.errors == []

    def test_no_diagnostics_without_debug(self):
        """Recovered problems only show up in debug mode."""
        result = compile_source("⊗αβχγ")
        assert result.success
        assert result.diagnostics == []

    def test_debug_diagnostics(self):
        result = compile_source("⊗αβχγ", CompileOptions(debug=True))
        assert result.diagnostics[0] == "Phase 1: Lexical Analysis"
        assert result.diagnostics[1] == "Tokenized 2 tokens"
        assert "Phase 2: Syntax Analysis" in result.diagnostics
        assert "Phase 3: Transformation" in result.diagnostics
        assert "Phase 4: Code Generation (typescript)" in result.diagnostics
        assert any(d.startswith("Cannot decode") for d in result.diagnostics)

    def test_source_map(self):
        result = compile_source("導⟨a⟩\n文⟨x⟩\n  函⟨f⟩ ⟨/函⟩", CompileOptions(source_map=True))
        assert result.source_map == [
            {"kind": "ImportDeclaration", "line": 1, "column": 1},
            {"kind": "FunctionDeclaration", "line": 3, "column": 3},
        ]

    def test_no_source_map_by_default(self):
        assert compile_source(HELLO).source_map is None


class TestCompileFailures:
    """Tests for failed compiles."""

    def test_parse_error(self):
        result = compile_source("函⟨greet⟩ 文⟨Hello⟩")
        assert not result.success
        assert result.typescript is None
        assert len(result.errors) == 1
        assert result.diagnostics == [f"Compilation error: {result.errors[0]}"]

    def test_parse_error_in_debug_keeps_trace(self):
        result = compile_source("函⟨greet⟩", CompileOptions(debug=True))
        assert not result.success
        assert result.diagnostics[0] == "Phase 1: Lexical Analysis"
        assert result.diagnostics[-1].startswith("Compilation error:")

    def test_go_degradation_is_a_diagnostic(self):
        result = compile_source("組⟨Card⟩ 文⟨a⟩ 文⟨b⟩ ⟨/組⟩", CompileOptions(target="go", debug=True))
        assert result.success
        assert "// unsupported: Fragment" in result.go
        assert "No go rendering rule for Fragment" in result.diagnostics

    def test_strict_go_degradation_fails(self):
        result = compile_source("組⟨Card⟩ 文⟨a⟩ 文⟨b⟩ ⟨/組⟩", CompileOptions(target="go", strict=True))
        assert not result.success
        assert result.go is None
        assert result.errors == ["No go rendering rule for Fragment"]
        assert result.diagnostics == ["Compilation error: No go rendering rule for Fragment"]

    def test_invalid_target_rejected_by_options(self):
        with pytest.raises(ValueError):
            CompileOptions(target="cobol")


class TestCompileMany:
    """Tests for compile_many."""

    def test_independent_results(self):
        results = compile_many({"good": HELLO, "bad": "函⟨f⟩"})
        assert isinstance(results["good"], CompileResult)
        assert results["good"].success
        assert not results["bad"].success


class TestAnalyzeSource:
    """Tests for analyze_source."""

    def test_outline(self):
        outline = analyze_source("函⟨greet, name⟩ ⟨/函⟩\n界⟨✱⟩ 文⟨Hi⟩ ⟨/界⟩")
        assert outline == [
            {"type": "function", "name": "greet", "params": ["name"], "line": 1},
            {"type": "ui-interface", "name": "App", "line": 2},
        ]

    def test_parse_error_propagates(self):
        with pytest.raises(ParseError):
            analyze_source("組⟨Card⟩")
