"""
End-to-end tests for the MoodMint API endpoints.

These tests drive the FastAPI application through TestClient with a generator
pinned to the first time window.
"""

import json
import xml.etree.ElementTree as ET
from urllib.parse import unquote

import pytest
from fastapi.testclient import TestClient

from moodmint.catalog import MOOD_CATALOG
from moodmint.config import Settings
from moodmint.generator import MetadataGenerator
from moodmint.models import TokenMetadata
from moodmint.server import create_app
from moodmint.svg import DATA_URI_PREFIX

ERROR_ENVELOPE = {"error": "Failed to generate metadata"}


class TestAPI:
    """Integration tests covering the HTTP request/response flow."""

    def setup_method(self):
        """Set up a fresh app with a generator pinned to window 0."""
        self.generator = MetadataGenerator(clock=lambda: 0)
        self.app = create_app(self.generator, Settings())

    def test_health(self):
        """Test the health check endpoint."""
        with TestClient(self.app) as client:
            response = client.get("/")
            assert response.status_code == 200
            assert response.json() == {"status": "ok", "service": "moodmint"}

    def test_metadata(self):
        """Test fetching metadata for a numeric token."""
        with TestClient(self.app) as client:
            response = client.get("/metadata/1")
            assert response.status_code == 200

            body = response.json()
            assert set(body) == {"name", "description", "image", "attributes"}
            assert body["name"] == "Bear Market Mood #1"
            assert len(body["attributes"]) == 9
            assert body["attributes"][0] == {"trait_type": "Mood", "value": "Bear Market"}

            svg = unquote(body["image"][len(DATA_URI_PREFIX) :])
            assert body["image"].startswith(DATA_URI_PREFIX)
            ET.fromstring(svg)

    def test_metadata_is_stable_within_window(self):
        """Test repeated requests in one window return the same body."""
        with TestClient(self.app) as client:
            first = client.get("/metadata/77").json()
            second = client.get("/metadata/77").json()
            assert first == second

    def test_non_numeric_token_returns_error_envelope(self):
        """Test a token id without a numeric prefix maps to a 500."""
        with TestClient(self.app) as client:
            response = client.get("/metadata/not-a-number")
            assert response.status_code == 500
            assert response.json() == ERROR_ENVELOPE

    @pytest.mark.parametrize("token_id", ["0x", "0xg", "0XZZ"])
    def test_hex_prefix_without_digits_returns_error_envelope(self, token_id):
        """Test a bare 0x prefix is not read as token 0."""
        with TestClient(self.app) as client:
            response = client.get(f"/metadata/{token_id}")
            assert response.status_code == 500
            assert response.json() == ERROR_ENVELOPE

    def test_internal_failure_returns_error_envelope(self, monkeypatch):
        """Test an internal fault maps to the exact 500 envelope."""

        def broken_compose(*args, **kwargs):
            raise RuntimeError("composer exploded")

        monkeypatch.setattr("moodmint.generator.compose_svg", broken_compose)

        with TestClient(self.app) as client:
            response = client.get("/metadata/1")
            assert response.status_code == 500
            assert response.json() == ERROR_ENVELOPE

    def test_image_endpoint(self):
        """Test the standalone SVG image endpoint."""
        with TestClient(self.app) as client:
            response = client.get("/metadata/1/image.svg")
            assert response.status_code == 200
            assert response.headers["content-type"].startswith("image/svg+xml")
            assert response.text == self.generator.render_svg("1")

            failed = client.get("/metadata/abc/image.svg")
            assert failed.status_code == 500
            assert failed.json() == ERROR_ENVELOPE

    def test_moods(self):
        """Test the catalog listing preserves selection order."""
        with TestClient(self.app) as client:
            response = client.get("/moods")
            assert response.status_code == 200

            moods = response.json()
            assert [m["name"] for m in moods] == [m.name for m in MOOD_CATALOG]
            assert moods[0]["pattern"] == "diamonds"
            assert moods[0]["rarity"] == "Legendary"

    def test_stream_reports_generation_errors(self):
        """Test the SSE stream emits an error event and ends on failure."""
        with TestClient(self.app) as client:
            response = client.get("/metadata/abc/stream")
            assert response.status_code == 200
            assert response.headers["content-type"].startswith("text/event-stream")

            lines = response.text.strip().split("\n")
            assert lines[0] == "event: error"
            assert json.loads(lines[1].removeprefix("data: ")) == ERROR_ENVELOPE

    def test_cors_headers(self):
        """Test the dashboard origin is allowed to call the API."""
        with TestClient(self.app) as client:
            response = client.get(
                "/metadata/1", headers={"Origin": "http://localhost:3000"}
            )
            assert response.headers["access-control-allow-origin"] == (
                "http://localhost:3000"
            )


class TestAPIStream:
    """Integration tests for the Server-Sent Events endpoint."""

    def test_stream_emits_one_render_per_window(self, two_window_app):
        """Test the stream sends valid metadata for each window, then closes."""
        with TestClient(two_window_app) as client:
            response = client.get("/metadata/1/stream")
            assert response.status_code == 200
            assert response.headers["content-type"].startswith("text/event-stream")

            events = response.text.strip().split("\n\n")
            assert len(events) == 2
            assert all(event.startswith("data: ") for event in events)

            renders = [
                TokenMetadata.model_validate_json(event.removeprefix("data: "))
                for event in events
            ]

        assert renders[0] == MetadataGenerator(clock=lambda: 0).generate("1")

        # Window 1 for token 1 shares its seed with window 0 for token 2
        second_window = MetadataGenerator(clock=lambda: 0).generate("2")
        assert renders[1].name == "Crab Sideways Mood #1"
        assert renders[1].attributes == second_window.attributes


class TestDefaultApp:
    """Tests for the environment-configured application factory."""

    @pytest.fixture(autouse=True)
    def clean_environment(self, monkeypatch, tmp_path):
        """Run from an empty directory so no .env file is picked up."""
        monkeypatch.chdir(tmp_path)

    def test_import_does_not_read_environment(self, monkeypatch):
        """Test a malformed variable only fails once the app is built."""
        import importlib

        import moodmint.server

        monkeypatch.setenv("MOODMINT_PORT", "eighty")
        server = importlib.reload(moodmint.server)

        with pytest.raises(ValueError):
            server.create_default_app()

    def test_serves_metadata(self, monkeypatch):
        """Test the factory applies the configured window length."""
        from moodmint.server import create_default_app

        monkeypatch.setenv("MOODMINT_WINDOW_MS", "1000")
        app = create_default_app()

        with TestClient(app) as client:
            response = client.get("/metadata/1")
            assert response.status_code == 200
            assert response.json()["name"].endswith("Mood #1")
