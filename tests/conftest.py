from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Mapping, Sequence, Set, Tuple

import pytest

from sectiongen.errors import FetchError
from sectiongen.models import AttributeDescriptor

SchemaRows = Sequence[Tuple[str, ...]]


class FakeSchemaSource:
    """In-memory schema source that records fetched component ids."""

    def __init__(self, schemas: Mapping[str, SchemaRows], failing: Set[str] | None = None) -> None:
        self.schemas: Dict[str, List[AttributeDescriptor]] = {
            component_id: [AttributeDescriptor(*row) for row in rows]
            for component_id, rows in schemas.items()
        }
        self.failing = set(failing or ())
        self.calls: List[str] = []

    def fetch_attributes(self, component_id: str) -> List[AttributeDescriptor]:
        self.calls.append(component_id)
        if component_id in self.failing or component_id not in self.schemas:
            raise FetchError(component_id, "HTTP 404")
        return list(self.schemas[component_id])


class RecordingFormatter:
    """Formatter double that records dialects and marks formatted output."""

    def __init__(self) -> None:
        self.dialects: List[str] = []

    def format(self, code: str, dialect: str) -> str:
        self.dialects.append(dialect)
        return f"// {dialect}\n{code}"


@pytest.fixture
def make_source():
    """Return the FakeSchemaSource factory."""
    return FakeSchemaSource


@pytest.fixture
def hero_source() -> FakeSchemaSource:
    """Schema with a scalar, a media field and one nested component."""
    return FakeSchemaSource(
        {
            "sections.hero-banner": [
                ("title", "string"),
                ("image", "media"),
                ("hero", "component", "shared.card"),
            ],
            "shared.card": [("text", "text")],
        }
    )


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    root = tmp_path / "site"
    root.mkdir()
    return root


@pytest.fixture
def recording_formatter() -> RecordingFormatter:
    return RecordingFormatter()


@pytest.fixture(autouse=True)
def _reset_sectiongen_logger():
    """Undo configure_logging so caplog sees records from every test."""
    yield
    logger = logging.getLogger("sectiongen")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
