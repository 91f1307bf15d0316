"""Scaffold Vue sections and GraphQL fragments from CMS component schemas."""

__version__ = "0.1.0"
