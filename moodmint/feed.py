"""
Live metadata feed for the MoodMint service.

A token only changes when the clock crosses into a new time window. This
module turns that into a stream: subscribers get the current metadata right
away and a fresh render at every window boundary, without polling.
"""

import asyncio
from collections.abc import AsyncGenerator, Awaitable, Callable
from contextlib import asynccontextmanager

from .generator import MetadataGenerator
from .models import TokenMetadata


class MetadataFeed:
    """
    Streams a token's metadata once per time window.

    The feed holds no per-subscriber state beyond the generator it renders
    with, so any number of subscribers can stream concurrently.
    """

    def __init__(
        self,
        generator: MetadataGenerator,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._generator = generator
        self._sleep = sleep

    def seconds_until_next_window(self) -> float:
        """Time left in the current window, in seconds."""
        window_ms = self._generator.window_ms
        now_ms = self._generator.clock()
        return (window_ms - now_ms % window_ms) / 1000

    @asynccontextmanager
    async def stream(
        self, token_id: str
    ) -> AsyncGenerator[AsyncGenerator[TokenMetadata, None], None]:
        """
        Stream metadata renders for a token.

        Yields:
            An async generator of TokenMetadata, one per time window

        Raises:
            GenerationError: From the generator, if a render fails
        """

        async def metadata_generator() -> AsyncGenerator[TokenMetadata, None]:
            last_window = self._generator.window()
            yield self._generator.generate(token_id)

            try:
                while True:
                    await self._sleep(self.seconds_until_next_window())

                    # Sleeps may wake early; only render on a new window
                    window = self._generator.window()
                    if window == last_window:
                        continue

                    last_window = window
                    yield self._generator.generate(token_id)

            except (asyncio.CancelledError, GeneratorExit):
                # Subscriber went away
                return

        yield metadata_generator()
