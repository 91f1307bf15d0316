"""Pipeline orchestration: resolve schema, derive names, emit artifacts."""

from __future__ import annotations

from .cms.client import CMSClient, SchemaSource
from .config import GeneratorConfig
from .emitter import ArtifactEmitter
from .errors import FetchError
from .logging import get_logger
from .models import GenerationReport
from .naming import derive, validate_identifier
from .postproc.formatter import Formatter, build_formatter
from .rendering.renderer import ArtifactRenderer
from .schema.resolver import SchemaResolver


class Orchestrator:
    """Runs one generation for a single component.

    Collaborators default to the real CMS client and the configured formatter;
    tests inject fakes.
    """

    def __init__(
        self,
        config: GeneratorConfig,
        *,
        source: SchemaSource | None = None,
        formatter: Formatter | None = None,
    ) -> None:
        self.config = config
        self.source = source or CMSClient(config.url, timeout=config.timeout)
        self.formatter = formatter or build_formatter(
            config.formatter, prettier_command=config.prettier_command
        )
        self.logger = get_logger("orchestrator")

    def run(self) -> GenerationReport:
        component_id = validate_identifier(self.config.component_id)
        self.logger.info("Generating section for %s", component_id)

        names = derive(component_id)
        resolver = SchemaResolver(self.source, max_depth=self.config.max_depth)
        fields = resolver.resolve(component_id)
        if fields is None:
            raise FetchError(component_id, f"schema unavailable from {self.config.url}")
        if not fields:
            raise FetchError(component_id, "component has no fields to select")
        self.logger.debug("Resolved fields: %s", ", ".join(str(field) for field in fields))

        renderer = ArtifactRenderer(self.formatter, templates_dir=self.config.templates_dir)
        artifacts = renderer.render(names, fields)

        emitter = ArtifactEmitter(self.config.layout, dry_run=self.config.dry_run)
        outcomes = emitter.emit(artifacts)
        return GenerationReport(
            component_id=component_id,
            names=names,
            fields=fields,
            outcomes=outcomes,
            dry_run=self.config.dry_run,
        )


__all__ = ["Orchestrator"]
