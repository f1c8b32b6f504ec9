"""
FastAPI server for the MoodMint service.

This module implements the HTTP API serving token metadata: the JSON document
a contract's ``tokenURI`` points at, the raw SVG image, and a Server-Sent
Events stream that pushes a fresh render whenever the token's time window
rolls over.
"""

import asyncio
import json
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response, StreamingResponse

from .config import Settings, load_settings
from .feed import MetadataFeed
from .generator import GenerationError, MetadataGenerator
from .models import ErrorResponse, Mood, TokenMetadata

logger = logging.getLogger(__name__)

GENERATION_FAILED = "Failed to generate metadata"


def create_app(
    generator: MetadataGenerator,
    settings: Settings | None = None,
    feed: MetadataFeed | None = None,
) -> FastAPI:
    """
    Create a FastAPI application with the given metadata generator.

    Args:
        generator: The MetadataGenerator instance to render tokens with
        settings: Service settings (defaults to ``Settings()``)
        feed: Feed backing the SSE endpoint (defaults to one over ``generator``)

    Returns:
        Configured FastAPI application
    """
    settings = settings or Settings()
    feed = feed or MetadataFeed(generator)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Lifespan context manager for FastAPI application."""
        logger.info(
            "Serving %d moods with %d ms windows",
            len(generator.catalog),
            generator.window_ms,
        )
        yield

    app = FastAPI(
        title="MoodMint",
        description="Dynamic mood NFT metadata service",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    @app.exception_handler(GenerationError)
    async def generation_error_handler(
        request: Request, exc: GenerationError
    ) -> JSONResponse:
        """Map generation failures to the fixed 500 envelope."""
        logger.error(
            "Error generating metadata for %s", request.url.path, exc_info=exc
        )
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(error=GENERATION_FAILED).model_dump(),
        )

    @app.get("/")
    async def root() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "ok", "service": "moodmint"}

    @app.get("/moods")
    async def list_moods() -> list[Mood]:
        """Return the mood catalog in selection order."""
        return list(generator.catalog)

    @app.get("/metadata/{token_id}")
    def get_metadata(token_id: str) -> TokenMetadata:
        """
        Render the metadata for a token.

        Args:
            token_id: Token identifier, accepted as an opaque string

        Returns:
            The token's metadata for the current time window
        """
        return generator.generate(token_id)

    @app.get("/metadata/{token_id}/image.svg")
    def get_image(token_id: str) -> Response:
        """Render the token's image as a standalone SVG document."""
        svg = generator.render_svg(token_id)
        return Response(content=svg, media_type="image/svg+xml")

    @app.get("/metadata/{token_id}/stream")
    async def stream_metadata(token_id: str) -> StreamingResponse:
        """
        Stream metadata renders via Server-Sent Events.

        The current metadata is sent immediately upon connection, then once
        per time window.

        Returns:
            StreamingResponse with text/event-stream content type
        """

        async def event_generator() -> AsyncGenerator[str, None]:
            """Generate SSE events for metadata renders."""
            try:
                async with feed.stream(token_id) as metadata_stream:
                    async for metadata in metadata_stream:
                        data = json.dumps(metadata.model_dump())
                        yield f"data: {data}\n\n"
            except asyncio.CancelledError:
                # Client disconnected
                pass
            except GenerationError as e:
                logger.error("Error streaming metadata for %s: %s", token_id, e)
                error_data = json.dumps({"error": GENERATION_FAILED})
                yield f"event: error\ndata: {error_data}\n\n"

        return StreamingResponse(
            event_generator(),
            media_type="text/event-stream",
            headers={
                "Cache-Control": "no-cache",
                "Connection": "keep-alive",
            },
        )

    return app


def create_default_app() -> FastAPI:
    """Build the app from environment settings; used as uvicorn's factory."""
    settings = load_settings()
    return create_app(MetadataGenerator(window_ms=settings.window_ms), settings)


def main() -> None:
    """Main entry point for the server."""
    import uvicorn

    settings = load_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(
        "moodmint.server:create_default_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        log_level=settings.log_level,
    )


if __name__ == "__main__":
    main()
