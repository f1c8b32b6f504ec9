"""
Command-line interface tools for the MoodMint service.
"""

import asyncio
import json
from collections.abc import Coroutine
from pathlib import Path
from typing import Any
from urllib.parse import quote, unquote

import httpx
import typer
from httpx_sse import ServerSentEvent, aconnect_sse

from .generator import GenerationError, MetadataGenerator
from .models import TokenMetadata
from .seed import DEFAULT_WINDOW_MS
from .svg import DATA_URI_PREFIX

DEFAULT_BASE_URL = "http://localhost:8000"

app = typer.Typer(help="MoodMint CLI tools")


# MARK: - CLI Entry Points


def cli_render() -> None:
    """Entry point for moodmint-render CLI command."""
    typer.run(render)


def cli_fetch() -> None:
    """Entry point for moodmint-fetch CLI command."""
    typer.run(fetch)


def cli_preview() -> None:
    """Entry point for moodmint-preview CLI command."""
    typer.run(preview)


def cli_watch() -> None:
    """Entry point for moodmint-watch CLI command."""
    typer.run(watch)


# MARK: - Commands


@app.command()
def render(
    token_id: str = typer.Argument(..., help="The token to render"),
    svg: bool = typer.Option(False, "--svg", "-s", help="Print the raw SVG image"),
    window_ms: int = typer.Option(
        DEFAULT_WINDOW_MS, "--window-ms", "-w", help="Time window length in ms"
    ),
) -> None:
    """Render a token's metadata locally, without a server."""
    generator = MetadataGenerator(window_ms=window_ms)
    try:
        if svg:
            print(generator.render_svg(token_id))
        else:
            metadata = generator.generate(token_id)
            print(json.dumps(metadata.model_dump(), indent=2, ensure_ascii=False))
    except GenerationError as e:
        print(f"Error: {e}")
        raise typer.Exit(1)


@app.command()
def fetch(
    token_id: str = typer.Argument(..., help="The token to fetch"),
    base_url: str = typer.Option(
        DEFAULT_BASE_URL, "--url", "-u", help="Base URL of the MoodMint service"
    ),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output raw JSON"),
) -> None:
    """Fetch a token's metadata from the MoodMint service."""

    async def _fetch() -> None:
        metadata = await _get_metadata(base_url, token_id)

        if json_output:
            print(json.dumps(metadata.model_dump(), indent=2, ensure_ascii=False))
            return

        print(metadata.name)
        for attribute in metadata.attributes:
            print(f"  {attribute.trait_type}: {attribute.value}")

    _run_with_error_handling(_fetch(), base_url)


@app.command()
def preview(
    token_id: str = typer.Argument(..., help="The token to preview"),
    out: Path = typer.Option(..., "--out", "-o", help="File to write the SVG to"),
    base_url: str = typer.Option(
        DEFAULT_BASE_URL, "--url", "-u", help="Base URL of the MoodMint service"
    ),
) -> None:
    """Fetch a token's metadata and save its image as an SVG file."""

    async def _preview() -> None:
        metadata = await _get_metadata(base_url, token_id)
        out.write_text(decode_image(metadata.image), encoding="utf-8")
        print(f"Saved {metadata.name} to {out}")

    _run_with_error_handling(_preview(), base_url)


@app.command()
def watch(
    token_id: str = typer.Argument(..., help="The token to watch"),
    base_url: str = typer.Option(
        DEFAULT_BASE_URL, "--url", "-u", help="Base URL of the MoodMint service"
    ),
) -> None:
    """Follow a token's mood as it changes between time windows."""

    async def _watch() -> None:
        url = f"{_metadata_url(base_url, token_id)}/stream"
        print(f"Watching {url}... (Ctrl+C to stop)")

        async with _client(timeout=None) as client:
            async with aconnect_sse(client, "GET", url) as event_source:
                async for sse in event_source.aiter_sse():
                    _handle_sse_event(sse)

    _run_with_error_handling(_watch(), base_url)


# MARK: - Helpers


def decode_image(image: str) -> str:
    """Extract the SVG document from a metadata image data URI."""
    if not image.startswith(DATA_URI_PREFIX):
        raise ValueError("Image is not an SVG data URI")
    return unquote(image[len(DATA_URI_PREFIX) :])


def _client(**kwargs: Any) -> httpx.AsyncClient:
    return httpx.AsyncClient(**kwargs)


def _metadata_url(base_url: str, token_id: str) -> str:
    """Build a token's metadata URL; the id is a single path segment."""
    return f"{base_url}/metadata/{quote(token_id, safe='')}"


async def _get_metadata(base_url: str, token_id: str) -> TokenMetadata:
    async with _client() as client:
        response = await client.get(_metadata_url(base_url, token_id))
        response.raise_for_status()
        return TokenMetadata.model_validate(response.json())


def _format_metadata(metadata: TokenMetadata) -> str:
    """Format a metadata render as a one-line summary."""
    traits = {attr.trait_type: attr.value for attr in metadata.attributes}
    rarity = traits.get("Rarity", "?")
    energy = traits.get("Energy Level", "?")
    return f"{metadata.name} ({rarity}, {energy})"


def _handle_sse_event(sse: ServerSentEvent) -> None:
    """Handle a single SSE event."""
    try:
        if sse.event == "error":
            error_data = json.loads(sse.data)
            print(f"Server error: {error_data.get('error', 'Unknown error')}")
            return

        metadata = TokenMetadata.model_validate(json.loads(sse.data))
        print(_format_metadata(metadata))

    except json.JSONDecodeError as e:
        print(f"Warning: Could not parse SSE data: {sse.data} - {e}")
    except Exception as e:
        print(f"Warning: Error processing metadata: {e}")


def _run_with_error_handling(coro: Coroutine[Any, Any, Any], base_url: str) -> None:
    """Run an async coroutine with standardized error handling."""
    try:
        asyncio.run(coro)
    except KeyboardInterrupt:
        print("\nStopped")
        raise typer.Exit(0)
    except httpx.ConnectError:
        print(f"Error: Could not connect to {base_url}")
        raise typer.Exit(1)
    except httpx.HTTPStatusError as e:
        print(f"Error: HTTP {e.response.status_code}")
        raise typer.Exit(1)
    except Exception as e:
        error_msg = str(e) if str(e) else f"Unknown error of type {type(e).__name__}"
        print(f"Error: {error_msg}")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
