"""Post-processing for generated source files."""

from .formatter import Formatter, PrettierFormatter, TidyFormatter, build_formatter

__all__ = ["Formatter", "PrettierFormatter", "TidyFormatter", "build_formatter"]
