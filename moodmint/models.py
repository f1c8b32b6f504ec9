"""
Shared data models for the MoodMint service.

This module defines the core domain models used across multiple layers
of the application (generation, CLI, API).
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class PatternKind(str, Enum):
    """Background pattern drawn behind a mood."""

    DIAMONDS = "diamonds"
    ROCKETS = "rockets"
    STORM = "storm"
    WAVES = "waves"
    STARS = "stars"
    CHAOS = "chaos"
    ZEN = "zen"
    TRIBAL = "tribal"


class RarityTier(str, Enum):
    """Display-only rarity label attached to a mood."""

    COMMON = "Common"
    UNCOMMON = "Uncommon"
    RARE = "Rare"
    EPIC = "Epic"
    LEGENDARY = "Legendary"


class Mood(BaseModel):
    """A catalog entry bundling a token's thematic and visual traits."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Display name of the mood")
    primary_color: str = Field(..., description="Accent color as a hex string")
    background_color: str = Field(..., description="Background tint as a hex string")
    energy_level: str = Field(..., description="Energy label shown on the token")
    emoji: str = Field(..., description="Glyph drawn in the center of the image")
    pattern: PatternKind = Field(..., description="Background pattern kind")
    rarity: RarityTier = Field(..., description="Rarity tier label")


class VisualFlags(BaseModel):
    """Secondary visual traits derived from a generation seed."""

    model_config = ConfigDict(frozen=True)

    seed: float = Field(..., description="Seed the flags were derived from")
    has_glow: bool = Field(..., description="Whether glow filters are applied")
    has_particles: bool = Field(..., description="Whether particles are drawn")
    has_pattern: bool = Field(..., description="Whether the mood pattern is drawn")
    frame_style: int = Field(..., description="Frame template index (0-3)")


class Attribute(BaseModel):
    """A single NFT trait."""

    trait_type: str
    value: str


class TokenMetadata(BaseModel):
    """Rendered ERC-721 metadata for a token."""

    name: str = Field(..., description="Token display name")
    description: str = Field(..., description="Token description")
    image: str = Field(..., description="SVG image as a data URI")
    attributes: list[Attribute] = Field(..., description="Traits in display order")


class ErrorResponse(BaseModel):
    """Error envelope returned when metadata cannot be produced."""

    error: str
