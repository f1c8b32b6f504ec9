"""
Metadata generation for mood tokens.

A token's mood and visual traits are a pure function of its id and the time
window the request falls in, so repeated requests inside one window render
the same token while consecutive windows let the token "evolve".
"""

import math
import time
from collections.abc import Callable, Sequence
from datetime import datetime, timezone

from .catalog import MOOD_CATALOG
from .models import Attribute, Mood, TokenMetadata, VisualFlags
from .seed import DEFAULT_WINDOW_MS, derive_flags, generation_seed, parse_token_number, prf
from .svg import compose_svg, encode_data_uri


class GenerationError(Exception):
    """Raised when metadata for a token cannot be produced."""


def wall_clock_ms() -> int:
    """Current Unix time in whole milliseconds."""
    return time.time_ns() // 1_000_000


class MetadataGenerator:
    """
    Deterministic metadata and SVG generator.

    The catalog is shared read-only; the only non-pure input is the clock,
    which is read once per call.
    """

    def __init__(
        self,
        catalog: Sequence[Mood] = MOOD_CATALOG,
        window_ms: int = DEFAULT_WINDOW_MS,
        clock: Callable[[], int] = wall_clock_ms,
    ) -> None:
        if not catalog:
            raise ValueError("catalog must contain at least one mood")
        if window_ms <= 0:
            raise ValueError(f"window_ms must be positive, got {window_ms}")

        self.catalog = catalog
        self.window_ms = window_ms
        self.clock = clock

    def generate(self, token_id: str) -> TokenMetadata:
        """
        Render the metadata for a token in the current time window.

        Args:
            token_id: Opaque token identifier; its numeric prefix seeds
                the selection

        Returns:
            The rendered metadata with the SVG embedded as a data URI

        Raises:
            GenerationError: If any step of the rendering fails
        """
        now_ms = self.clock()
        try:
            mood, flags = self._select(token_id, now_ms)
            svg = compose_svg(mood, token_id, flags)
            generated_on = datetime.fromtimestamp(now_ms / 1000, tz=timezone.utc)

            return TokenMetadata(
                name=f"{mood.name} Mood #{token_id}",
                description=(
                    f"A dynamic NFT capturing the essence of {mood.name.lower()}. "
                    "This NFT's appearance reflects real-time market sentiment and "
                    f"evolves with blockchain conditions. Rarity: {mood.rarity.value}"
                ),
                image=encode_data_uri(svg),
                attributes=_attributes(mood, flags, generated_on.date().isoformat()),
            )
        except Exception as e:
            raise GenerationError(f"Failed to generate metadata for {token_id!r}") from e

    def render_svg(self, token_id: str) -> str:
        """Render only the SVG document for a token in the current window."""
        now_ms = self.clock()
        try:
            mood, flags = self._select(token_id, now_ms)
            return compose_svg(mood, token_id, flags)
        except Exception as e:
            raise GenerationError(f"Failed to render image for {token_id!r}") from e

    def window(self, now_ms: int | None = None) -> int:
        """Index of the time window containing ``now_ms`` (default: now)."""
        if now_ms is None:
            now_ms = self.clock()
        return now_ms // self.window_ms

    def _select(self, token_id: str, now_ms: int) -> tuple[Mood, VisualFlags]:
        seed = generation_seed(parse_token_number(token_id), now_ms, self.window_ms)
        # floor() rejects NaN, so ids without a numeric prefix fail here
        mood_index = math.floor(prf(seed) * len(self.catalog))
        return self.catalog[mood_index], derive_flags(seed)


def _attributes(mood: Mood, flags: VisualFlags, generated_on: str) -> list[Attribute]:
    traits = [
        ("Mood", mood.name),
        ("Rarity", mood.rarity.value),
        ("Energy Level", mood.energy_level),
        ("Primary Color", mood.primary_color),
        ("Has Glow Effect", "Yes" if flags.has_glow else "No"),
        ("Particle System", "Active" if flags.has_particles else "None"),
        ("Background Pattern", mood.pattern.value if flags.has_pattern else "Solid"),
        ("Frame Style", f"Style {flags.frame_style + 1}"),
        ("Generation", generated_on),
    ]
    return [Attribute(trait_type=trait, value=value) for trait, value in traits]
