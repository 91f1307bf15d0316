"""Exception hierarchy for generation runs."""

from __future__ import annotations


class GeneratorError(RuntimeError):
    """Base class for errors that abort a generation run."""


class InvalidIdentifier(GeneratorError):
    """Raised when a component identifier is not ``<namespace>.<kebab-name>``."""

    def __init__(self, component_id: str, reason: str) -> None:
        super().__init__(f"Invalid component identifier '{component_id}': {reason}")
        self.component_id = component_id
        self.reason = reason


class FetchError(GeneratorError):
    """Raised when a component schema cannot be fetched or decoded."""

    def __init__(self, component_id: str, reason: str) -> None:
        super().__init__(f"Failed to fetch component '{component_id}': {reason}")
        self.component_id = component_id
        self.reason = reason


class SchemaDepthError(GeneratorError):
    """Raised when nested components exceed the configured depth."""


class SchemaCycleError(GeneratorError):
    """Raised when a component is nested inside itself."""


class FormatterError(GeneratorError):
    """Raised when generated code cannot be formatted."""


class TemplateRenderError(GeneratorError):
    """Raised when an artifact template cannot be loaded or rendered."""


__all__ = [
    "FetchError",
    "FormatterError",
    "GeneratorError",
    "InvalidIdentifier",
    "SchemaCycleError",
    "SchemaDepthError",
    "TemplateRenderError",
]
