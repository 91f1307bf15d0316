"""HTTP client for the CMS content-type-builder API."""

from __future__ import annotations

import json
from http.client import HTTPException
from typing import Any, Dict, List, Protocol
from urllib.error import HTTPError, URLError
from urllib.parse import quote
from urllib.request import Request, urlopen

from ..errors import FetchError
from ..logging import get_logger
from ..models import AttributeDescriptor

COMPONENTS_PATH = "/api/content-type-builder/components"


class SchemaSource(Protocol):
    """Anything able to return the ordered attribute schema of a component."""

    def fetch_attributes(self, component_id: str) -> List[AttributeDescriptor]:
        ...


class CMSClient:
    """Fetches component schemas from a Strapi-style content-type-builder."""

    DEFAULT_BASE_URL = "http://localhost:1337"

    def __init__(self, base_url: str | None = None, *, timeout: float = 30.0) -> None:
        self.base_url = (base_url or self.DEFAULT_BASE_URL).rstrip("/")
        self.timeout = timeout
        self.logger = get_logger("cms")

    def component_url(self, component_id: str) -> str:
        return f"{self.base_url}{COMPONENTS_PATH}/{quote(component_id, safe='.-_')}"

    def fetch_attributes(self, component_id: str) -> List[AttributeDescriptor]:
        """Return the attribute descriptors of ``component_id`` in schema order."""
        url = self.component_url(component_id)
        self.logger.debug("Fetching schema for %s from %s", component_id, url)
        try:
            payload = self.get_json(url)
        except RuntimeError as exc:
            raise FetchError(component_id, str(exc)) from exc
        attributes = _extract_attributes(payload)
        if attributes is None:
            raise FetchError(component_id, "response has no data.schema.attributes mapping")
        return _to_descriptors(component_id, attributes)

    def get_json(self, url: str) -> Any:
        """Issue a GET request and decode the JSON body."""
        try:
            request = Request(url, headers={"Accept": "application/json"}, method="GET")
            with urlopen(request, timeout=self.timeout) as response:  # type: ignore[arg-type]
                raw = response.read()
        except HTTPError as exc:
            raise RuntimeError(f"HTTP {exc.code} from {url}") from exc
        except URLError as exc:
            raise RuntimeError(f"request to {url} failed: {exc.reason}") from exc
        except TimeoutError as exc:
            raise RuntimeError(f"request to {url} timed out after {self.timeout}s") from exc
        except ValueError as exc:
            raise RuntimeError(f"invalid request URL {url}: {exc}") from exc
        except HTTPException as exc:
            raise RuntimeError(f"malformed HTTP response from {url}: {exc}") from exc

        try:
            return json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise RuntimeError(f"invalid JSON returned by {url}") from exc


def _extract_attributes(payload: Any) -> Dict[str, Any] | None:
    node = payload
    for key in ("data", "schema", "attributes"):
        if not isinstance(node, dict):
            return None
        node = node.get(key)
    return node if isinstance(node, dict) else None


def _to_descriptors(component_id: str, attributes: Dict[str, Any]) -> List[AttributeDescriptor]:
    descriptors: List[AttributeDescriptor] = []
    # json.loads keeps object key order, which is the field order we must preserve.
    for name, definition in attributes.items():
        if not isinstance(definition, dict) or not isinstance(definition.get("type"), str):
            raise FetchError(component_id, f"attribute '{name}' has no type")
        component = definition.get("component")
        descriptors.append(
            AttributeDescriptor(
                name=str(name),
                type=definition["type"],
                component=component if isinstance(component, str) else None,
            )
        )
    return descriptors


__all__ = ["COMPONENTS_PATH", "CMSClient", "SchemaSource"]
