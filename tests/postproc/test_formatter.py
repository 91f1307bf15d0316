"""Tests for code formatters."""

from __future__ import annotations

import subprocess

import pytest

from sectiongen.errors import FormatterError
from sectiongen.postproc.formatter import PrettierFormatter, TidyFormatter, build_formatter


def test_tidy_formatter_normalises_whitespace() -> None:
    code = "\n\n    const a = 1;   \r\n\r\n\r\n    const b = 2;\r\n\n\n"
    assert TidyFormatter().format(code, "typescript") == "const a = 1;\n\nconst b = 2;\n"


def test_tidy_formatter_keeps_relative_indentation() -> None:
    code = "  <template>\n    <div />\n  </template>\n"
    assert TidyFormatter().format(code, "vue") == "<template>\n  <div />\n</template>\n"


def test_prettier_formatter_pipes_code_through_cli(monkeypatch) -> None:
    recorded: dict = {}

    def fake_run(args, input, check, capture_output, text, timeout):  # type: ignore[no-untyped-def]
        recorded["args"] = list(args)
        recorded["input"] = input

        class _Completed:
            stdout = "formatted\n"

        return _Completed()

    monkeypatch.setattr("sectiongen.postproc.formatter.subprocess.run", fake_run)

    formatter = PrettierFormatter("npx prettier")
    assert formatter.format("const a=1", "typescript") == "formatted\n"
    args = recorded["args"]
    assert args[:2] == ["npx", "prettier"]
    assert "--parser=typescript" in args
    assert "--arrow-parens=avoid" in args
    assert "--vue-indent-script-and-style" in args
    assert "--bracket-same-line" in args
    assert recorded["input"] == "const a=1"


def test_prettier_formatter_reports_missing_executable(monkeypatch) -> None:
    def fake_run(*args, **kwargs):
        raise FileNotFoundError("prettier")

    monkeypatch.setattr("sectiongen.postproc.formatter.subprocess.run", fake_run)

    with pytest.raises(FormatterError, match="Unable to locate Prettier"):
        PrettierFormatter().format("x", "vue")


def test_prettier_formatter_reports_syntax_errors(monkeypatch) -> None:
    def fake_run(args, **kwargs):
        raise subprocess.CalledProcessError(2, args, output="", stderr="SyntaxError: Unexpected token")

    monkeypatch.setattr("sectiongen.postproc.formatter.subprocess.run", fake_run)

    with pytest.raises(FormatterError, match="Unexpected token"):
        PrettierFormatter().format("const =", "typescript")


def test_build_formatter_selects_by_name() -> None:
    assert isinstance(build_formatter("tidy"), TidyFormatter)
    prettier = build_formatter("Prettier", prettier_command="npx --no-install prettier")
    assert isinstance(prettier, PrettierFormatter)
    assert prettier.command == ["npx", "--no-install", "prettier"]
    with pytest.raises(ValueError):
        build_formatter("black")
