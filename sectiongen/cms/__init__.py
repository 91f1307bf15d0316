"""Headless CMS adapters."""

from .client import CMSClient, SchemaSource

__all__ = ["CMSClient", "SchemaSource"]
