"""Template rendering for generated artifacts."""

from .renderer import ArtifactRenderer

__all__ = ["ArtifactRenderer"]
