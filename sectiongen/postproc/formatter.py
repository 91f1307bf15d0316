"""Dialect-aware formatting of generated code."""

from __future__ import annotations

import shlex
import subprocess
import textwrap
from typing import List, Protocol, Sequence

from ..errors import FormatterError

TYPESCRIPT = "typescript"
VUE = "vue"

FORMATTER_NAMES = ("tidy", "prettier")


class Formatter(Protocol):
    """Formats source code for a Prettier-style parser name."""

    def format(self, code: str, dialect: str) -> str:
        ...


class TidyFormatter:
    """Normalises whitespace without parsing the code."""

    def format(self, code: str, dialect: str) -> str:
        normalized = code.replace("\r\n", "\n").replace("\r", "\n")
        normalized = textwrap.dedent(normalized)
        cleaned: List[str] = []
        previous_blank = True

        for line in normalized.split("\n"):
            stripped = line.rstrip()
            if not stripped:
                if previous_blank:
                    continue
                previous_blank = True
                cleaned.append("")
                continue
            cleaned.append(stripped)
            previous_blank = False

        while cleaned and cleaned[-1] == "":
            cleaned.pop()

        return "\n".join(cleaned) + "\n"


class PrettierFormatter:
    """Pipes code through the Prettier CLI."""

    OPTIONS = (
        "--arrow-parens=avoid",
        "--vue-indent-script-and-style",
        "--bracket-same-line",
    )

    def __init__(self, command: str | Sequence[str] = "prettier", *, timeout: float = 60.0) -> None:
        self.command = shlex.split(command) if isinstance(command, str) else list(command)
        if not self.command:
            raise FormatterError("Prettier command must not be empty")
        self.timeout = timeout

    def build_args(self, dialect: str) -> List[str]:
        # Only options that differ from Prettier defaults.
        return [*self.command, f"--parser={dialect}", *self.OPTIONS]

    def format(self, code: str, dialect: str) -> str:
        args = self.build_args(dialect)
        try:
            completed = subprocess.run(
                args,
                input=code,
                check=True,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except FileNotFoundError as exc:
            raise FormatterError(
                f"Unable to locate Prettier executable '{self.command[0]}'."
            ) from exc
        except subprocess.CalledProcessError as exc:
            message = exc.stderr.strip() or exc.stdout.strip() or str(exc.returncode)
            raise FormatterError(f"Prettier failed for {dialect}: {message}") from exc
        except subprocess.TimeoutExpired as exc:
            raise FormatterError(f"Prettier timed out after {self.timeout}s") from exc
        return completed.stdout


def build_formatter(name: str, *, prettier_command: str | None = None) -> Formatter:
    """Return the formatter registered under ``name``."""
    lowered = name.strip().lower()
    if lowered == "tidy":
        return TidyFormatter()
    if lowered == "prettier":
        return PrettierFormatter(prettier_command or "prettier")
    raise ValueError(f"Unknown formatter '{name}'. Expected one of: {', '.join(FORMATTER_NAMES)}")


__all__ = [
    "FORMATTER_NAMES",
    "Formatter",
    "PrettierFormatter",
    "TYPESCRIPT",
    "TidyFormatter",
    "VUE",
    "build_formatter",
]
