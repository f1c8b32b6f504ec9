"""
The mood catalog.

The order of entries is significant: mood selection indexes into this tuple,
so reordering it changes which mood every token resolves to.
"""

from .models import Mood, PatternKind, RarityTier

MOOD_CATALOG: tuple[Mood, ...] = (
    Mood(
        name="Diamond Hands",
        primary_color="#00ffff",
        background_color="#001a1a",
        energy_level="Legendary",
        emoji="💎",
        pattern=PatternKind.DIAMONDS,
        rarity=RarityTier.LEGENDARY,
    ),
    Mood(
        name="Bull Run",
        primary_color="#39ff14",
        background_color="#0a2e0a",
        energy_level="Extreme",
        emoji="🚀",
        pattern=PatternKind.ROCKETS,
        rarity=RarityTier.EPIC,
    ),
    Mood(
        name="Bear Market",
        primary_color="#ff4444",
        background_color="#2e0a0a",
        energy_level="Crushing",
        emoji="🐻",
        pattern=PatternKind.STORM,
        rarity=RarityTier.COMMON,
    ),
    Mood(
        name="Crab Sideways",
        primary_color="#ffaa00",
        background_color="#2e1a00",
        energy_level="Neutral",
        emoji="🦀",
        pattern=PatternKind.WAVES,
        rarity=RarityTier.UNCOMMON,
    ),
    Mood(
        name="Moon Mission",
        primary_color="#ff10f0",
        background_color="#1a001a",
        energy_level="Cosmic",
        emoji="🌙",
        pattern=PatternKind.STARS,
        rarity=RarityTier.RARE,
    ),
    Mood(
        name="Degen Mode",
        primary_color="#ff6600",
        background_color="#2e1100",
        energy_level="Chaos",
        emoji="🎲",
        pattern=PatternKind.CHAOS,
        rarity=RarityTier.EPIC,
    ),
    Mood(
        name="HODL Strong",
        primary_color="#6600ff",
        background_color="#110025",
        energy_level="Zen",
        emoji="🧘",
        pattern=PatternKind.ZEN,
        rarity=RarityTier.RARE,
    ),
    Mood(
        name="Ape Together",
        primary_color="#ff9900",
        background_color="#2e1700",
        energy_level="Unity",
        emoji="🦍",
        pattern=PatternKind.TRIBAL,
        rarity=RarityTier.UNCOMMON,
    ),
)
