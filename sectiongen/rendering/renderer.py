"""Renders fragment, component, type and barrel templates."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Sequence

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError

from ..errors import TemplateRenderError
from ..models import DerivedNames, FieldSelection, GeneratedArtifactSet
from ..postproc.formatter import TYPESCRIPT, VUE, Formatter, TidyFormatter

DEFAULT_TEMPLATES_DIR = Path(__file__).with_name("templates")

FRAGMENT_TEMPLATE = "fragment.ts.j2"
COMPONENT_TEMPLATE = "component.vue.j2"
TYPES_TEMPLATE = "types.ts.j2"
BARREL_TEMPLATE = "barrel.ts.j2"


class ArtifactRenderer:
    """Fills the artifact templates and hands each body to a formatter."""

    def __init__(
        self,
        formatter: Formatter | None = None,
        *,
        templates_dir: Path | None = None,
    ) -> None:
        self.formatter = formatter or TidyFormatter()
        self.templates_dir = templates_dir
        self._env = self._create_env(templates_dir)

    def render(self, names: DerivedNames, fields: Sequence[FieldSelection]) -> GeneratedArtifactSet:
        context: Dict[str, object] = {"names": names, "fields": list(fields)}
        fragment = self._render(FRAGMENT_TEMPLATE, context)
        component = self._render(COMPONENT_TEMPLATE, context)
        types = self._render(TYPES_TEMPLATE, context)
        barrel = self._render(BARREL_TEMPLATE, context).strip()

        return GeneratedArtifactSet(
            names=names,
            fragment=self.formatter.format(fragment, TYPESCRIPT),
            component=self.formatter.format(component, VUE),
            types=self.formatter.format(types, TYPESCRIPT),
            barrel_line=f"{barrel}\n",
        )

    def _render(self, template_name: str, context: Dict[str, object]) -> str:
        try:
            template = self._env.get_template(template_name)
            return template.render(**context)
        except TemplateError as exc:
            raise TemplateRenderError(f"Template {template_name} failed: {exc}") from exc

    @staticmethod
    def _create_env(templates_dir: Path | None) -> Environment:
        directories: List[str] = []
        if templates_dir:
            directories.append(str(templates_dir))
        directories.append(str(DEFAULT_TEMPLATES_DIR))
        loader = FileSystemLoader(directories)
        return Environment(
            loader=loader,
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )


__all__ = [
    "ArtifactRenderer",
    "BARREL_TEMPLATE",
    "COMPONENT_TEMPLATE",
    "DEFAULT_TEMPLATES_DIR",
    "FRAGMENT_TEMPLATE",
    "TYPES_TEMPLATE",
]
