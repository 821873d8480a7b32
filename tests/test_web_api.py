"""Tests for the FastAPI endpoints."""

from __future__ import annotations

import pytest

pytest.importorskip("fastapi")
pytest.importorskip("httpx")

from fastapi.testclient import TestClient  # noqa: E402

from sanitext.core.highlight import MARKER_CLASS  # noqa: E402
from sanitext.web.app import app  # noqa: E402

client = TestClient(app)


class TestHealthAndProfiles:
    def test_health(self):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "ok"

    def test_list_profiles(self):
        resp = client.get("/api/profiles")
        assert resp.status_code == 200
        ids = {p["id"] for p in resp.json()["profiles"]}
        assert {"default", "strict", "preview"} <= ids

    def test_get_profile(self):
        resp = client.get("/api/profiles/strict")
        assert resp.status_code == 200
        assert resp.json()["options"]["expandLatinAbbrev"] is False

    def test_unknown_profile_404(self):
        assert client.get("/api/profiles/nope").status_code == 404


class TestNormalizeEndpoint:
    def test_normalize(self):
        resp = client.post("/api/normalize", json={"text": "A \u2014 B"})
        assert resp.status_code == 200
        assert resp.json() == {"text": "A; B"}

    def test_option_override(self):
        resp = client.post(
            "/api/normalize",
            json={"text": "e.g. x", "options": {"expandLatinAbbrev": False}},
        )
        assert resp.json()["text"] == "e.g. x"

    def test_missing_text_422(self):
        assert client.post("/api/normalize", json={}).status_code == 422

    def test_unknown_option_422(self):
        resp = client.post("/api/normalize", json={"text": "x", "options": {"shout": True}})
        assert resp.status_code == 422


class TestSanitizeEndpoint:
    def test_sanitize(self):
        resp = client.post(
            "/api/sanitize",
            json={"markup": "<p>hi</p><p><br></p><p></p><script>x</script>"},
        )
        assert resp.status_code == 200
        assert resp.json()["markup"] == "<p>hi</p><p></p>"

    def test_profile_then_override(self):
        resp = client.post(
            "/api/sanitize",
            json={
                "markup": "<p>e.g. a\u200bb</p>",
                "profile": "preview",
                "options": {"removeZeroWidth": True},
            },
        )
        body = resp.json()
        assert body["markup"] == "<p>e.g. ab</p>"
        assert body["options"]["removeZeroWidth"] is True
        assert body["options"]["expandLatinAbbrev"] is False

    def test_highlight_markers_stripped_first(self):
        markup = f'<p>a<span class="{MARKER_CLASS}" title="x">\u200b</span>b</p>'
        resp = client.post(
            "/api/sanitize", json={"markup": markup, "options": {"removeZeroWidth": False}}
        )
        assert resp.json()["markup"] == "<p>a\u200bb</p>"

    def test_unknown_profile_404(self):
        resp = client.post("/api/sanitize", json={"markup": "<p>x</p>", "profile": "nope"})
        assert resp.status_code == 404


class TestHighlightEndpoint:
    def test_highlight(self):
        resp = client.post("/api/highlight", json={"markup": "<p>a\u200bb</p>"})
        assert resp.status_code == 200
        body = resp.json()
        assert body["count"] == 1
        assert MARKER_CLASS in body["markup"]
        assert body["findings"][0]["codepoint"] == "U+200B"
        assert body["findings"][0]["label"] == "Zero-width character"

    def test_rehighlight_does_not_accumulate(self):
        first = client.post("/api/highlight", json={"markup": "<p>\u00e9</p>"}).json()
        second = client.post("/api/highlight", json={"markup": first["markup"]}).json()
        assert second["markup"] == first["markup"]
        assert second["count"] == 1


class TestUnencodableInput:
    # "\ud800" is a valid JSON escape but not encodable as UTF-8
    def test_sanitize_lone_surrogate(self):
        resp = client.post(
            "/api/sanitize",
            content='{"markup": "<p>a\\ud800b</p>"}',
            headers={"Content-Type": "application/json"},
        )
        assert resp.status_code == 200
        assert resp.json()["markup"] == "<p>a?b</p>"

    def test_normalize_lone_surrogate(self):
        resp = client.post(
            "/api/normalize",
            content='{"text": "a\\udfffb"}',
            headers={"Content-Type": "application/json"},
        )
        assert resp.status_code == 200
        assert resp.json()["text"] == "a?b"
