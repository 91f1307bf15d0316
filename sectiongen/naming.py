"""Derive display and GraphQL type names from component identifiers."""

from __future__ import annotations

import re
from typing import Iterable

from .errors import InvalidIdentifier
from .models import DerivedNames

_SEGMENT = r"[A-Za-z0-9_]+"
_KEBAB = rf"{_SEGMENT}(?:-{_SEGMENT})*"
_IDENTIFIER_RE = re.compile(rf"^{_KEBAB}\.{_KEBAB}$")
_SEPARATORS_RE = re.compile(r"[-.]")

TYPE_PREFIX = "Component"


def validate_identifier(component_id: str) -> str:
    """Return ``component_id`` unchanged or raise :class:`InvalidIdentifier`."""
    if not component_id:
        raise InvalidIdentifier(component_id, "identifier is empty")
    if component_id.count(".") != 1:
        raise InvalidIdentifier(
            component_id, "expected exactly one '.' between namespace and name"
        )
    if not _IDENTIFIER_RE.match(component_id):
        raise InvalidIdentifier(
            component_id,
            "segments must be non-empty and contain only letters, digits or underscores",
        )
    return component_id


def derive(component_id: str) -> DerivedNames:
    """Return the display and GraphQL type names for ``component_id``.

    ``sections.hero-banner`` becomes ``HeroBanner`` and
    ``ComponentSectionsHeroBanner``.
    """
    validate_identifier(component_id)
    all_segments = _SEPARATORS_RE.split(component_id)
    name_segments = component_id.split(".")[1].split("-")
    return DerivedNames(
        display_name=_pascal_join(name_segments),
        type_name=f"{TYPE_PREFIX}{_pascal_join(all_segments)}",
    )


def _capitalize_first(segment: str) -> str:
    # Only the first character changes; "heroCTA" stays "HeroCTA".
    return segment[:1].upper() + segment[1:]


def _pascal_join(segments: Iterable[str]) -> str:
    return "".join(_capitalize_first(segment) for segment in segments)


__all__ = ["TYPE_PREFIX", "derive", "validate_identifier"]
