"""Writes generated artifacts without overwriting existing files."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List

from .logging import get_logger
from .models import DerivedNames, GeneratedArtifactSet, WriteOutcome

CREATED = "created"
SKIPPED = "skipped"
APPENDED = "appended"
UNCHANGED = "unchanged"
PLANNED = "planned"


@dataclass(frozen=True)
class OutputLayout:
    """Directory layout rooted at the project directory."""

    root: Path

    @property
    def sections_dir(self) -> Path:
        return self.root / "components" / "sections"

    @property
    def fragments_dir(self) -> Path:
        return self.root / "graphql" / "fragments"

    @property
    def fragments_sections_dir(self) -> Path:
        return self.fragments_dir / "sections"

    @property
    def barrel_path(self) -> Path:
        return self.fragments_dir / "index.ts"

    def component_path(self, names: DerivedNames) -> Path:
        return self.sections_dir / f"{names.display_name}.vue"

    def types_path(self, names: DerivedNames) -> Path:
        return self.sections_dir / f"{names.file_stem}.types.ts"

    def fragment_path(self, names: DerivedNames) -> Path:
        return self.fragments_sections_dir / f"{names.file_stem}.ts"


class ArtifactEmitter:
    """Persists an artifact set: create-once files plus an append-only barrel."""

    def __init__(self, layout: OutputLayout, *, dry_run: bool = False) -> None:
        self.layout = layout
        self.dry_run = dry_run
        self.logger = get_logger("emitter")

    def emit(self, artifacts: GeneratedArtifactSet) -> List[WriteOutcome]:
        """Write the artifact files and barrel line, returning one outcome per path."""
        names = artifacts.names
        if not self.dry_run:
            self.layout.sections_dir.mkdir(parents=True, exist_ok=True)
            self.layout.fragments_sections_dir.mkdir(parents=True, exist_ok=True)

        outcomes = [
            self.write_if_absent(self.layout.fragment_path(names), artifacts.fragment),
            self.write_if_absent(self.layout.component_path(names), artifacts.component),
            self.write_if_absent(self.layout.types_path(names), artifacts.types),
            self.append_line(self.layout.barrel_path, artifacts.barrel_line),
        ]
        return outcomes

    def write_if_absent(self, path: Path, content: str) -> WriteOutcome:
        if path.exists():
            self.logger.info("Skipping %s: file already exists", path)
            return WriteOutcome(path=path, status=SKIPPED)
        if self.dry_run:
            return WriteOutcome(path=path, status=PLANNED)
        path.write_text(content, encoding="utf-8")
        self.logger.debug("Wrote %s", path)
        return WriteOutcome(path=path, status=CREATED)

    def append_line(self, path: Path, line: str) -> WriteOutcome:
        """Append ``line`` unless that exact text already occurs in the file."""
        if path.exists():
            current = path.read_text(encoding="utf-8")
            if line in current:
                self.logger.debug("%s already exports this fragment", path)
                return WriteOutcome(path=path, status=UNCHANGED)
        if self.dry_run:
            return WriteOutcome(path=path, status=PLANNED)
        with path.open("a", encoding="utf-8") as handle:
            handle.write(line)
        self.logger.debug("Appended export to %s", path)
        return WriteOutcome(path=path, status=APPENDED)


__all__ = [
    "APPENDED",
    "ArtifactEmitter",
    "CREATED",
    "OutputLayout",
    "PLANNED",
    "SKIPPED",
    "UNCHANGED",
]
