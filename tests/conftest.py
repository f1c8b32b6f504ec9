"""
Shared fixtures for the test suite.
"""

import asyncio

import pytest
from fastapi import FastAPI

from moodmint.config import Settings
from moodmint.feed import MetadataFeed
from moodmint.generator import MetadataGenerator
from moodmint.server import create_app


class TwoWindowClock:
    """
    Clock pinned to window 0 whose sleep jumps to window 1 once.

    The second sleep cancels, which ends the feed, so SSE responses
    carry exactly two renders and then close.
    """

    def __init__(self) -> None:
        self.now_ms = 0

    def __call__(self) -> int:
        return self.now_ms

    async def sleep(self, seconds: float) -> None:
        if self.now_ms >= 30_000:
            raise asyncio.CancelledError
        self.now_ms += round(seconds * 1000)


@pytest.fixture
def two_window_app() -> FastAPI:
    """App whose metadata stream emits windows 0 and 1, then closes."""
    clock = TwoWindowClock()
    generator = MetadataGenerator(clock=clock)
    feed = MetadataFeed(generator, sleep=clock.sleep)
    return create_app(generator, Settings(), feed)
