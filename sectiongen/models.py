"""Core data models shared across sectiongen components."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

MEDIA_TYPE = "media"
COMPONENT_TYPE = "component"


@dataclass(frozen=True)
class AttributeDescriptor:
    """One field of a component's attribute schema."""

    name: str
    type: str
    component: Optional[str] = None


@dataclass(frozen=True)
class FieldSelection:
    """Resolved GraphQL selection for a single field.

    ``children`` is ``None`` for a bare scalar field. Otherwise the field is
    rendered as a sub-selection block over its children.
    """

    name: str
    children: Optional[Tuple["FieldSelection", ...]] = None

    @classmethod
    def media(cls, name: str) -> "FieldSelection":
        """Return the fixed ``data { attributes { url } }`` media selection."""
        url = cls("url")
        attributes = cls("attributes", (url,))
        return cls(name, (cls("data", (attributes,)),))

    @property
    def is_block(self) -> bool:
        return self.children is not None

    def to_graphql(self, indent: int = 0, step: int = 2) -> str:
        """Render the selection across multiple lines, indented by ``indent`` spaces."""
        pad = " " * indent
        if self.children is None:
            return f"{pad}{self.name}"
        inner = "\n".join(child.to_graphql(indent + step, step) for child in self.children)
        return f"{pad}{self.name} {{\n{inner}\n{pad}}}"

    def __str__(self) -> str:
        if self.children is None:
            return self.name
        inner = " ".join(str(child) for child in self.children)
        return f"{self.name} {{ {inner} }}"


@dataclass(frozen=True)
class DerivedNames:
    """Names derived from a component identifier."""

    display_name: str
    type_name: str

    @property
    def file_stem(self) -> str:
        """Display name with a lower-cased first character, used for file names."""
        return self.display_name[:1].lower() + self.display_name[1:]


@dataclass
class GeneratedArtifactSet:
    """Rendered, formatted bodies for one component."""

    names: DerivedNames
    fragment: str
    component: str
    types: str
    barrel_line: str


@dataclass
class WriteOutcome:
    """What happened to one output path during emission."""

    path: Path
    status: str


@dataclass
class GenerationReport:
    """Result of a complete generation run."""

    component_id: str
    names: DerivedNames
    fields: List[FieldSelection]
    outcomes: List[WriteOutcome] = field(default_factory=list)
    dry_run: bool = False
