"""
Compiler Driver Test Suite
==========================

Tests for Compiler, CompilerOptions and the convenience functions.
"""

import dataclasses

import pytest
from ranni import compile_source, compile_file
from ranni.compiler import Compiler, CompilerOptions, CompilerResult
from ranni.syntax.ast import BinaryExpression, Let
from ranni.syntax.parser import parse_source
from ranni.syntax.errors import (
    RanniCompilationError,
    InvalidCharacterError,
    TrailingInputError,
)


class TestCompilerOptions:

    def test_defaults(self):
        options = CompilerOptions()
        assert options.max_errors == 100
        assert options.default_filename == "<input>"

    def test_rejects_zero_max_errors(self):
        with pytest.raises(ValueError):
            CompilerOptions(max_errors=0)


class TestCompileSource:
    """Compiling in-memory source."""

    def test_success(self):
        result = Compiler().compile_source("1 + 2")
        assert isinstance(result, CompilerResult)
        assert isinstance(result.ast, BinaryExpression)

    def test_token_count_includes_eof(self):
        result = Compiler().compile_source("1 + 2")
        assert result.token_count == 4

    def test_filename_recorded(self):
        result = Compiler().compile_source("x", "main.rni")
        assert result.filename == "main.rni"
        assert result.ast.location.filename == "main.rni"

    def test_default_filename(self):
        compiler = Compiler(CompilerOptions(default_filename="repl"))
        with pytest.raises(RanniCompilationError) as exc_info:
            compiler.compile_source("1 2")
        assert exc_info.value.errors[0].location.filename == "repl"

    def test_max_errors(self):
        compiler = Compiler(CompilerOptions(max_errors=3))
        with pytest.raises(RanniCompilationError) as exc_info:
            compiler.compile_source("@ a # b $ c ? d ! e")
        assert len(exc_info.value.errors) == 3

    def test_lexical_errors_skip_parse(self):
        with pytest.raises(RanniCompilationError) as exc_info:
            Compiler().compile_source("1 2 @")
        errors = exc_info.value.errors
        assert len(errors) == 1
        assert isinstance(errors[0], InvalidCharacterError)

    def test_compiler_reusable_after_failure(self):
        compiler = Compiler()
        with pytest.raises(RanniCompilationError):
            compiler.compile_source("1 2")
        result = compiler.compile_source("let x = 1 x")
        assert isinstance(result.ast, Let)

    def test_errors_not_carried_between_runs(self):
        compiler = Compiler()
        with pytest.raises(RanniCompilationError):
            compiler.compile_source("@")
        with pytest.raises(RanniCompilationError) as exc_info:
            compiler.compile_source("1 2")
        assert [type(e) for e in exc_info.value.errors] == [TrailingInputError]


class TestCompileFile:
    """Compiling files from disk."""

    def test_compile_file(self, tmp_path):
        path = tmp_path / "main.rni"
        path.write_text("let x = 5\nx", encoding="utf-8")
        result = Compiler().compile_file(str(path))
        assert isinstance(result.ast, Let)
        assert result.filename == str(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            Compiler().compile_file(str(tmp_path / "nope.rni"))

    def test_error_names_file(self, tmp_path):
        path = tmp_path / "bad.rni"
        path.write_text("(1", encoding="utf-8")
        with pytest.raises(RanniCompilationError) as exc_info:
            compile_file(str(path))
        assert str(exc_info.value).startswith(f"{path}:1:3: error:")


class TestConvenienceFunctions:

    def test_compile_source(self):
        assert compile_source("42").ast.value == 42

    def test_result_fields(self):
        assert [f.name for f in dataclasses.fields(CompilerResult)] == [
            "filename",
            "ast",
            "token_count",
        ]

    def test_parse_source_matches_compiler(self):
        source = "let f = fn (a) a * 2 f(3)"
        assert parse_source(source, "a.rni") == compile_source(source, "a.rni").ast

    def test_parse_source_uses_compiler_options(self):
        with pytest.raises(ValueError):
            parse_source("1", max_errors=0)
