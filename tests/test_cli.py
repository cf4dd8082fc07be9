"""
CLI Test Suite
==============

Tests for the ``ranni`` command, driven through click's CliRunner.
"""

import pytest
from click.testing import CliRunner

from ranni import __version__
from ranni.cli.errors import ExitCode
from ranni.cli.main import main
from ranni.compiler import Compiler


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def source_file(tmp_path):
    path = tmp_path / "main.rni"
    path.write_text("let x = 5 x", encoding="utf-8")
    return path


class TestGroup:

    def test_help(self, runner):
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "compile" in result.output
        assert "lsp" in result.output

    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_lsp_help(self, runner):
        result = runner.invoke(main, ["lsp", "--help"])
        assert result.exit_code == 0
        assert "stdin/stdout" in result.output


class TestCompileCommand:

    def test_tree_output(self, runner, source_file):
        result = runner.invoke(main, ["compile", str(source_file)])
        assert result.exit_code == ExitCode.SUCCESS
        assert result.output.splitlines() == [
            "Let",
            "  Assign x",
            "    Value",
            "      Int 5",
            "  Rest",
            "    Lookup x",
        ]

    def test_repr_output(self, runner, source_file):
        result = runner.invoke(main, ["compile", str(source_file), "--format", "repr"])
        assert result.exit_code == ExitCode.SUCCESS
        assert result.output.strip() == (
            "Let(assign=Assign(name=Identifier(name='x'), hint=None, "
            "value=IntLiteral(value=5)), "
            "rest=Lookup(ident=Identifier(name='x')), qualifier=None)"
        )

    def test_stdin(self, runner):
        result = runner.invoke(main, ["compile", "-"], input="1 + 2 * 3")
        assert result.exit_code == ExitCode.SUCCESS
        assert result.output.splitlines()[0] == "Add"

    def test_verbose(self, runner):
        result = runner.invoke(main, ["-v", "compile", "-"], input="x")
        assert result.exit_code == ExitCode.SUCCESS
        assert "Lookup x" in result.output

    def test_parse_error(self, runner, tmp_path):
        path = tmp_path / "bad.rni"
        path.write_text("(1", encoding="utf-8")
        result = runner.invoke(main, ["compile", str(path)])
        assert result.exit_code == ExitCode.PARSE_ERROR
        assert "error: expected ')', found end of input" in result.output
        assert "hint: to close the record opened at" in result.output
        assert result.output.rstrip().endswith("1 error")

    def test_multiple_errors(self, runner):
        result = runner.invoke(main, ["compile", "-"], input="a @ b # c")
        assert result.exit_code == ExitCode.PARSE_ERROR
        assert "<stdin>:1:3: error: invalid character '@'" in result.output
        assert "<stdin>:1:7: error: invalid character '#'" in result.output
        assert "2 errors" in result.output

    def test_max_errors(self, runner):
        result = runner.invoke(
            main, ["compile", "-", "--max-errors", "1"], input="a @ b # c"
        )
        assert result.exit_code == ExitCode.PARSE_ERROR
        assert "1 error" in result.output
        assert "'#'" not in result.output

    def test_max_errors_applies_to_parse_errors(self, runner):
        result = runner.invoke(
            main, ["compile", "-", "--max-errors", "2"], input="{ () () () }"
        )
        assert result.exit_code == ExitCode.PARSE_ERROR
        assert result.output.rstrip().endswith("2 errors")

    def test_max_errors_must_be_positive(self, runner):
        result = runner.invoke(main, ["compile", "-", "--max-errors", "0"], input="1")
        assert result.exit_code == ExitCode.INVALID_ARGS

    def test_missing_file(self, runner, tmp_path):
        result = runner.invoke(main, ["compile", str(tmp_path / "nope.rni")])
        assert result.exit_code == ExitCode.INVALID_ARGS

    def test_invalid_utf8(self, runner, tmp_path):
        path = tmp_path / "binary.rni"
        path.write_bytes(b"\xff\xfe\x00")
        result = runner.invoke(main, ["compile", str(path)])
        assert result.exit_code == ExitCode.INVALID_ARGS
        assert "not valid UTF-8" in result.output

    def test_bad_format(self, runner, source_file):
        result = runner.invoke(main, ["compile", str(source_file), "--format", "json"])
        assert result.exit_code == ExitCode.INVALID_ARGS

    def test_internal_error(self, runner, monkeypatch):
        def explode(self, source, filename=None):
            raise RuntimeError("kaboom")

        monkeypatch.setattr(Compiler, "compile_source", explode)
        result = runner.invoke(main, ["compile", "-"], input="1")
        assert result.exit_code == ExitCode.INTERNAL_ERROR
        assert "Internal error: kaboom" in result.output
