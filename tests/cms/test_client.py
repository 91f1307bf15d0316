"""Tests for the CMS content-type-builder client."""

from __future__ import annotations

import json
from urllib.error import HTTPError, URLError

import pytest

from sectiongen.cms.client import CMSClient
from sectiongen.errors import FetchError
from sectiongen.models import AttributeDescriptor


class FakeResponse:
    def __init__(self, body: bytes) -> None:
        self._body = body

    def read(self) -> bytes:
        return self._body

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        return False


def _install_urlopen(monkeypatch, body, captured: dict | None = None) -> None:
    raw = body if isinstance(body, bytes) else json.dumps(body).encode("utf-8")

    def fake_urlopen(request, timeout=None):
        if captured is not None:
            captured["url"] = request.full_url
            captured["method"] = request.get_method()
            captured["headers"] = {k.lower(): v for k, v in request.header_items()}
            captured["timeout"] = timeout
        return FakeResponse(raw)

    monkeypatch.setattr("sectiongen.cms.client.urlopen", fake_urlopen)


def test_fetch_attributes_requests_component_endpoint(monkeypatch) -> None:
    captured: dict = {}
    _install_urlopen(
        monkeypatch,
        {
            "data": {
                "uid": "sections.hero-banner",
                "schema": {
                    "attributes": {
                        "title": {"type": "string"},
                        "image": {"type": "media", "multiple": False},
                        "cta": {"type": "component", "component": "shared.button", "repeatable": False},
                    }
                },
            }
        },
        captured,
    )

    client = CMSClient("http://cms.test:1337/", timeout=12.5)
    attributes = client.fetch_attributes("sections.hero-banner")

    assert captured["url"] == (
        "http://cms.test:1337/api/content-type-builder/components/sections.hero-banner"
    )
    assert captured["method"] == "GET"
    assert captured["headers"]["accept"] == "application/json"
    assert captured["timeout"] == 12.5
    assert attributes == [
        AttributeDescriptor("title", "string"),
        AttributeDescriptor("image", "media"),
        AttributeDescriptor("cta", "component", "shared.button"),
    ]


def test_client_defaults_to_local_strapi() -> None:
    assert CMSClient().component_url("a.b") == (
        "http://localhost:1337/api/content-type-builder/components/a.b"
    )


def test_fetch_attributes_wraps_http_errors(monkeypatch) -> None:
    def fake_urlopen(request, timeout=None):
        raise HTTPError(request.full_url, 404, "Not Found", {}, None)

    monkeypatch.setattr("sectiongen.cms.client.urlopen", fake_urlopen)

    with pytest.raises(FetchError) as excinfo:
        CMSClient().fetch_attributes("sections.missing")
    assert excinfo.value.component_id == "sections.missing"
    assert "404" in excinfo.value.reason


def test_fetch_attributes_wraps_transport_errors(monkeypatch) -> None:
    def fake_urlopen(request, timeout=None):
        raise URLError("connection refused")

    monkeypatch.setattr("sectiongen.cms.client.urlopen", fake_urlopen)

    with pytest.raises(FetchError) as excinfo:
        CMSClient().fetch_attributes("sections.hero")
    assert "connection refused" in str(excinfo.value)


def test_fetch_attributes_rejects_invalid_json(monkeypatch) -> None:
    _install_urlopen(monkeypatch, b"<html>oops</html>")
    with pytest.raises(FetchError):
        CMSClient().fetch_attributes("sections.hero")


@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"data": None},
        {"data": {"schema": {}}},
        {"data": {"schema": {"attributes": ["title"]}}},
        {"error": {"status": 404, "message": "component.notFound"}},
    ],
)
def test_fetch_attributes_rejects_malformed_bodies(monkeypatch, payload) -> None:
    _install_urlopen(monkeypatch, payload)
    with pytest.raises(FetchError):
        CMSClient().fetch_attributes("sections.hero")


def test_fetch_attributes_rejects_attribute_without_type(monkeypatch) -> None:
    _install_urlopen(monkeypatch, {"data": {"schema": {"attributes": {"title": {}}}}})
    with pytest.raises(FetchError) as excinfo:
        CMSClient().fetch_attributes("sections.hero")
    assert "title" in excinfo.value.reason


def test_fetch_attributes_rejects_url_without_scheme() -> None:
    with pytest.raises(FetchError) as excinfo:
        CMSClient("cms.test").fetch_attributes("sections.hero")
    assert "invalid request URL" in excinfo.value.reason


def test_fetch_attributes_wraps_malformed_http_responses(monkeypatch) -> None:
    from http.client import IncompleteRead

    def fake_urlopen(request, timeout=None):
        raise IncompleteRead(b"{\"data\":")

    monkeypatch.setattr("sectiongen.cms.client.urlopen", fake_urlopen)

    with pytest.raises(FetchError) as excinfo:
        CMSClient().fetch_attributes("sections.hero")
    assert "malformed HTTP response" in excinfo.value.reason
