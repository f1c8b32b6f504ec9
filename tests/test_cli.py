"""
Tests for the MoodMint CLI tools.
"""

import json

import httpx
import pytest
from typer.testing import CliRunner

from moodmint.cli import app, decode_image
from moodmint.generator import MetadataGenerator
from moodmint.svg import encode_data_uri

runner = CliRunner()


class TestCLI:
    """Test suite for the local CLI commands."""

    def test_render_json(self):
        """Test rendering metadata locally prints valid JSON."""
        result = runner.invoke(app, ["render", "1"])
        assert result.exit_code == 0

        metadata = json.loads(result.stdout)
        assert metadata["name"].endswith("Mood #1")
        assert len(metadata["attributes"]) == 9

    def test_render_svg(self):
        """Test rendering the raw SVG image."""
        result = runner.invoke(app, ["render", "1", "--svg"])
        assert result.exit_code == 0
        assert result.stdout.startswith("<svg")

    def test_render_failure(self):
        """Test a failing render exits with status 1."""
        result = runner.invoke(app, ["render", "abc"])
        assert result.exit_code == 1
        assert result.stdout.startswith("Error:")

    def test_fetch_connection_error(self):
        """Test fetching from an unreachable server exits with status 1."""
        result = runner.invoke(app, ["fetch", "1", "--url", "http://127.0.0.1:9"])
        assert result.exit_code == 1
        assert "Error:" in result.stdout


class TestRemoteCommands:
    """Test suite for commands that talk to a running service."""

    base_url = "http://testserver"

    @pytest.fixture(autouse=True)
    def serve_app(self, monkeypatch, two_window_app):
        """Route the CLI's HTTP client to the in-process app."""

        def client(**kwargs):
            transport = httpx.ASGITransport(app=two_window_app)
            return httpx.AsyncClient(transport=transport, **kwargs)

        monkeypatch.setattr("moodmint.cli._client", client)

    def test_fetch(self):
        """Test fetching prints the name and every trait."""
        result = runner.invoke(app, ["fetch", "1", "--url", self.base_url])
        assert result.exit_code == 0

        lines = result.stdout.splitlines()
        assert lines[0] == "Bear Market Mood #1"
        assert "  Mood: Bear Market" in lines
        assert len(lines) == 10

    def test_fetch_json(self):
        """Test --json prints the metadata document."""
        result = runner.invoke(app, ["fetch", "1", "--json", "--url", self.base_url])
        assert result.exit_code == 0
        assert json.loads(result.stdout)["name"] == "Bear Market Mood #1"

    def test_fetch_encodes_token_id(self):
        """Test reserved URL characters stay inside the token id."""
        result = runner.invoke(app, ["fetch", "7#x", "--url", self.base_url])
        assert result.exit_code == 0
        assert result.stdout.splitlines()[0].endswith("Mood #7#x")

    def test_fetch_http_error(self):
        """Test a server error exits with status 1."""
        result = runner.invoke(app, ["fetch", "abc", "--url", self.base_url])
        assert result.exit_code == 1
        assert "Error: HTTP 500" in result.stdout

    def test_preview_writes_decoded_svg(self, tmp_path):
        """Test preview saves the image the service rendered."""
        out = tmp_path / "token.svg"
        result = runner.invoke(
            app, ["preview", "1", "--out", str(out), "--url", self.base_url]
        )
        assert result.exit_code == 0
        assert out.read_text(encoding="utf-8") == (
            MetadataGenerator(clock=lambda: 0).render_svg("1")
        )

    def test_watch_prints_each_window(self):
        """Test watch prints one summary per streamed render."""
        result = runner.invoke(app, ["watch", "1", "--url", self.base_url])
        assert result.exit_code == 0

        lines = result.stdout.splitlines()
        assert lines[1:] == [
            "Bear Market Mood #1 (Common, Crushing)",
            "Crab Sideways Mood #1 (Uncommon, Neutral)",
        ]


class TestDecodeImage:
    """Test suite for data URI decoding."""

    def test_decodes_svg(self):
        """Test decoding recovers the original document."""
        svg = '<svg xmlns="http://www.w3.org/2000/svg"><text>#1 💎</text></svg>'
        assert decode_image(encode_data_uri(svg)) == svg

    def test_rejects_other_uris(self):
        """Test non-SVG data URIs are rejected."""
        with pytest.raises(ValueError):
            decode_image("data:image/png;base64,AAAA")
