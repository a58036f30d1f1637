"""
Unit tests for gaia.py - the command line interface.
"""

import io
import json

import pytest

import compiler
import gaia

HELLO = "導⟨useState⟩ 文⟨Hello⟩ ⊗δχβ"


@pytest.fixture(autouse=True)
def quiet():
    yield
    compiler.set_verbose(False)


@pytest.fixture
def source_file(tmp_path):
    path = tmp_path / "app.gaia"
    path.write_text(HELLO, encoding="utf-8")
    return path


class TestBuild:
    """Tests for `gaia build`."""

    def test_build_to_stdout(self, source_file, capsys):
        gaia.main(["build", str(source_file)])
        out = capsys.readouterr().out
        assert '"Hello";' in out
        assert "@gaia/runtime" in out

    def test_build_to_file(self, source_file, tmp_path, capsys):
        out_path = tmp_path / "main.go"
        gaia.main(["build", str(source_file), "--target", "go", "--out", str(out_path)])
        assert out_path.read_text(encoding="utf-8").startswith("package main")
        assert "INFO:" in capsys.readouterr().err

    def test_build_from_stdin(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO(HELLO))
        gaia.main(["build", "-", "-t", "javascript"])
        assert 'import { useState } from "@gaia/runtime";' in capsys.readouterr().out

    def test_debug_logs_phases(self, source_file, capsys):
        gaia.main(["build", str(source_file), "--debug"])
        assert "Phase 1: Lexical Analysis" in capsys.readouterr().err

    def test_verbose_enables_debug_log(self, source_file, capsys):
        gaia.main(["build", str(source_file), "-v"])
        assert "DEBUG:" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc:
            gaia.main(["build", str(tmp_path / "nope.gaia")])
        assert exc.value.code == 1
        assert "not found" in capsys.readouterr().err

    def test_compile_error_exits(self, tmp_path, capsys):
        path = tmp_path / "bad.gaia"
        path.write_text("函⟨f⟩", encoding="utf-8")
        with pytest.raises(SystemExit) as exc:
            gaia.main(["build", str(path)])
        assert exc.value.code == 1
        assert "Compilation Failed" in capsys.readouterr().err

    def test_strict_go_exits(self, tmp_path):
        path = tmp_path / "card.gaia"
        path.write_text("組⟨Card⟩ 文⟨a⟩ 文⟨b⟩ ⟨/組⟩", encoding="utf-8")
        with pytest.raises(SystemExit):
            gaia.main(["build", str(path), "--target", "go", "--strict"])


class TestOutline:
    """Tests for `gaia outline`."""

    def test_outline_json(self, tmp_path, capsys):
        path = tmp_path / "app.gaia"
        path.write_text("函⟨greet, name⟩ ⟨/函⟩", encoding="utf-8")
        gaia.main(["outline", str(path)])
        assert json.loads(capsys.readouterr().out) == [
            {"type": "function", "name": "greet", "params": ["name"], "line": 1},
        ]

    def test_outline_parse_error(self, tmp_path):
        path = tmp_path / "bad.gaia"
        path.write_text("組⟨Card⟩", encoding="utf-8")
        with pytest.raises(SystemExit):
            gaia.main(["outline", str(path)])


def test_no_command_prints_help(capsys):
    gaia.main([])
    assert "GaiaScript CLI" in capsys.readouterr().out
