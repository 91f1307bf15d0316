"""Schema resolution for CMS components."""

from .resolver import DEFAULT_MAX_DEPTH, SchemaResolver

__all__ = ["DEFAULT_MAX_DEPTH", "SchemaResolver"]
