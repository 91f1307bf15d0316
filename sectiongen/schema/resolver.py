"""Recursive expansion of component schemas into GraphQL selections."""

from __future__ import annotations

from typing import List, Optional, Tuple

from ..cms.client import SchemaSource
from ..errors import FetchError, SchemaCycleError, SchemaDepthError
from ..logging import get_logger
from ..models import COMPONENT_TYPE, MEDIA_TYPE, AttributeDescriptor, FieldSelection

DEFAULT_MAX_DEPTH = 10


class SchemaResolver:
    """Turns a component's attribute schema into an ordered selection list.

    ``media`` fields expand to a fixed url selection and ``component`` fields
    are resolved recursively against the same source. A nested component that
    cannot be fetched, or that has no fields, drops only its own field; its
    siblings are still returned.
    """

    def __init__(self, source: SchemaSource, *, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        if max_depth < 1:
            raise ValueError("max_depth must be at least 1")
        self.source = source
        self.max_depth = max_depth
        self.logger = get_logger("schema")

    def resolve(self, component_id: str) -> Optional[List[FieldSelection]]:
        """Return the selections for ``component_id`` or ``None`` when its fetch failed."""
        return self._resolve(component_id, ())

    def _resolve(
        self, component_id: str, ancestors: Tuple[str, ...]
    ) -> Optional[List[FieldSelection]]:
        if component_id in ancestors:
            chain = " -> ".join((*ancestors, component_id))
            raise SchemaCycleError(f"Component cycle detected: {chain}")
        if len(ancestors) >= self.max_depth:
            raise SchemaDepthError(
                f"Component '{component_id}' is nested deeper than {self.max_depth} levels"
            )

        try:
            attributes = self.source.fetch_attributes(component_id)
        except FetchError as exc:
            self.logger.error("Error fetching component %s: %s", component_id, exc.reason)
            return None

        path = (*ancestors, component_id)
        selections: List[FieldSelection] = []
        for attribute in attributes:
            selection = self._resolve_field(attribute, path)
            if selection is not None:
                selections.append(selection)
        self.logger.debug("Resolved %d fields for %s", len(selections), component_id)
        return selections

    def _resolve_field(
        self, attribute: AttributeDescriptor, path: Tuple[str, ...]
    ) -> Optional[FieldSelection]:
        if attribute.type == MEDIA_TYPE:
            return FieldSelection.media(attribute.name)
        if attribute.type != COMPONENT_TYPE:
            return FieldSelection(attribute.name)

        owner = path[-1]
        if not attribute.component:
            self.logger.warning(
                "Skipping field %s.%s: component reference is missing", owner, attribute.name
            )
            return None

        nested = self._resolve(attribute.component, path)
        if nested is None:
            self.logger.warning(
                "Skipping field %s.%s: component %s could not be resolved",
                owner,
                attribute.name,
                attribute.component,
            )
            return None
        if not nested:
            self.logger.warning(
                "Skipping field %s.%s: component %s has no fields",
                owner,
                attribute.name,
                attribute.component,
            )
            return None
        return FieldSelection(attribute.name, tuple(nested))


__all__ = ["DEFAULT_MAX_DEPTH", "SchemaResolver"]
