"""
Seed derivation for token rendering.

Everything here is a pure function of its arguments. ``prf`` is a classic
non-cryptographic hash-to-float; it must stay on IEEE-754 doubles and the
platform ``sin`` so that a given seed always renders the same token.
"""

import math
import re

from .models import VisualFlags

DEFAULT_WINDOW_MS = 30_000
FRAME_STYLE_COUNT = 4

_TOKEN_NUMBER_RE = re.compile(r"([+-]?)(?:0[xX]([0-9a-fA-F]+)|(?!0[xX])([0-9]+))")


def prf(seed: float) -> float:
    """Map a seed to a float in [0, 1). NaN seeds map to NaN."""
    return math.fmod(abs(math.sin(seed * 12.9898 + 78.233) * 43758.5453), 1.0)


def parse_token_number(token_id: str) -> float:
    """
    Read the numeric prefix of a token identifier.

    Token ids are opaque strings. Leading whitespace, an optional sign and
    either a ``0x`` hex literal or decimal digits are read; anything after
    them is ignored. Ids without a numeric prefix yield NaN.

    Args:
        token_id: The token identifier from the request path

    Returns:
        The token number, or ``math.nan``
    """
    match = _TOKEN_NUMBER_RE.match(token_id.lstrip())
    if match is None:
        return math.nan

    sign, hex_digits, decimal_digits = match.groups()
    number = int(hex_digits, 16) if hex_digits else int(decimal_digits)
    return float(-number if sign == "-" else number)


def generation_seed(
    token_number: float, now_ms: int, window_ms: int = DEFAULT_WINDOW_MS
) -> float:
    """Combine a token number with the time window containing ``now_ms``."""
    return token_number + math.floor(now_ms / window_ms)


def derive_flags(seed: float) -> VisualFlags:
    """Derive the secondary visual traits for a seed."""
    return VisualFlags(
        seed=seed,
        has_glow=prf(seed + 1) > 0.3,
        has_particles=prf(seed + 2) > 0.5,
        has_pattern=prf(seed + 3) > 0.4,
        frame_style=math.floor(prf(seed + 4) * FRAME_STYLE_COUNT),
    )
