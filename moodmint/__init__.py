"""
MoodMint - A dynamic NFT metadata service.

This package serves procedurally generated, mood-themed NFT metadata. Each
token is rendered as an animated SVG whose mood and visual traits change with
every time window.
"""

__version__ = "0.1.0"
