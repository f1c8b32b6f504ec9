"""
SVG composition for mood tokens.

Patterns and frames are small fixed templates parameterized only by the mood
color. They are dispatched through lookup tables keyed by ``PatternKind`` and
frame index.
"""

from collections.abc import Callable
from html import escape
from urllib.parse import quote

from .models import Mood, PatternKind, VisualFlags
from .seed import prf

PARTICLE_COUNT = 12

DATA_URI_PREFIX = "data:image/svg+xml;utf8,"

# Characters encodeURIComponent leaves alone
_URI_SAFE = "-_.!~*'()"


def format_number(value: float) -> str:
    """Render a number the way a JavaScript template literal does."""
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return repr(value)


# MARK: - Patterns


def diamond_pattern(color: str) -> str:
    return f"""
    <g opacity="0.1">
      <polygon points="50,50 75,75 50,100 25,75" fill="{color}"/>
      <polygon points="150,30 175,55 150,80 125,55" fill="{color}"/>
      <polygon points="250,70 275,95 250,120 225,95" fill="{color}"/>
      <polygon points="350,40 375,65 350,90 325,65" fill="{color}"/>
    </g>
  """


def rocket_pattern(color: str) -> str:
    return f"""
    <g opacity="0.15">
      <path d="M30,80 L50,60 L45,40 L35,45 L25,45 Z" fill="{color}"/>
      <path d="M370,120 L350,100 L355,80 L365,85 L375,85 Z" fill="{color}"/>
      <circle cx="100" cy="300" r="3" fill="{color}">
        <animate attributeName="r" values="3;6;3" dur="2s" repeatCount="indefinite"/>
      </circle>
    </g>
  """


def storm_pattern(color: str) -> str:
    return f"""
    <g opacity="0.2">
      <path d="M20,60 Q50,40 80,60 Q110,80 140,60" stroke="{color}" stroke-width="2" fill="none"/>
      <path d="M260,100 Q290,80 320,100 Q350,120 380,100" stroke="{color}" stroke-width="2" fill="none"/>
      <circle cx="150" cy="300" r="2" fill="{color}">
        <animate attributeName="cy" values="300;280;300" dur="3s" repeatCount="indefinite"/>
      </circle>
    </g>
  """


def wave_pattern(color: str) -> str:
    return f"""
    <g opacity="0.15">
      <path d="M0,200 Q100,180 200,200 Q300,220 400,200" stroke="{color}" stroke-width="1" fill="none" opacity="0.5"/>
      <path d="M0,220 Q100,200 200,220 Q300,240 400,220" stroke="{color}" stroke-width="1" fill="none" opacity="0.3"/>
    </g>
  """


def star_pattern(color: str) -> str:
    return f"""
    <g opacity="0.2">
      <circle cx="80" cy="80" r="2" fill="{color}">
        <animate attributeName="opacity" values="0.2;1;0.2" dur="3s" repeatCount="indefinite"/>
      </circle>
      <circle cx="320" cy="120" r="1.5" fill="{color}">
        <animate attributeName="opacity" values="0.2;1;0.2" dur="4s" repeatCount="indefinite"/>
      </circle>
      <circle cx="100" cy="300" r="2.5" fill="{color}">
        <animate attributeName="opacity" values="0.2;1;0.2" dur="2s" repeatCount="indefinite"/>
      </circle>
    </g>
  """


def chaos_pattern(color: str) -> str:
    return f"""
    <g opacity="0.15">
      <line x1="50" y1="50" x2="150" y2="80" stroke="{color}" stroke-width="1"/>
      <line x1="250" y1="40" x2="350" y2="120" stroke="{color}" stroke-width="1"/>
      <line x1="80" y1="300" x2="320" y2="280" stroke="{color}" stroke-width="1"/>
    </g>
  """


def zen_pattern(color: str) -> str:
    return f"""
    <g opacity="0.1">
      <circle cx="200" cy="200" r="150" fill="none" stroke="{color}" stroke-width="1"/>
      <circle cx="200" cy="200" r="100" fill="none" stroke="{color}" stroke-width="1"/>
      <circle cx="200" cy="200" r="50" fill="none" stroke="{color}" stroke-width="1"/>
    </g>
  """


def tribal_pattern(color: str) -> str:
    return f"""
    <g opacity="0.2">
      <path d="M50,50 L70,30 L90,50 L70,70 Z" fill="{color}"/>
      <path d="M350,350 L330,330 L350,310 L370,330 Z" fill="{color}"/>
    </g>
  """


PATTERN_RENDERERS: dict[PatternKind, Callable[[str], str]] = {
    PatternKind.DIAMONDS: diamond_pattern,
    PatternKind.ROCKETS: rocket_pattern,
    PatternKind.STORM: storm_pattern,
    PatternKind.WAVES: wave_pattern,
    PatternKind.STARS: star_pattern,
    PatternKind.CHAOS: chaos_pattern,
    PatternKind.ZEN: zen_pattern,
    PatternKind.TRIBAL: tribal_pattern,
}


# MARK: - Particles


def particles(color: str, seed: float) -> str:
    """Render the particle system: 12 drifting circles placed from ``seed``."""
    circles = ""
    for i in range(PARTICLE_COUNT):
        x = 50 + prf(seed + i) * 300
        y = 50 + prf(seed + i + 100) * 300
        size = 1 + prf(seed + i + 200) * 3
        duration = 2 + prf(seed + i + 300) * 4

        cx, cy, r = format_number(x), format_number(y), format_number(size)
        top, dur = format_number(y - 50), format_number(duration)
        circles += f"""
      <circle cx="{cx}" cy="{cy}" r="{r}" fill="{color}" opacity="0.4">
        <animate attributeName="cy" values="{cy};{top};{cy}" dur="{dur}s" repeatCount="indefinite"/>
        <animate attributeName="opacity" values="0.4;0.8;0.4" dur="{dur}s" repeatCount="indefinite"/>
      </circle>
    """
    return f"<g>{circles}</g>"


# MARK: - Frames


def classic_frame(color: str) -> str:
    return f'<rect x="5" y="5" width="390" height="390" fill="none" stroke="{color}" stroke-width="2" opacity="0.6"/>'


def double_frame(color: str) -> str:
    return f"""
        <rect x="5" y="5" width="390" height="390" fill="none" stroke="{color}" stroke-width="1" opacity="0.4"/>
        <rect x="15" y="15" width="370" height="370" fill="none" stroke="{color}" stroke-width="1" opacity="0.6"/>
      """


def dashed_frame(color: str) -> str:
    return f'<rect x="5" y="5" width="390" height="390" fill="none" stroke="{color}" stroke-width="2" stroke-dasharray="10,5" opacity="0.6"/>'


def corner_frame(color: str) -> str:
    return f"""
        <g stroke="{color}" stroke-width="3" fill="none" opacity="0.8">
          <path d="M5,25 L5,5 L25,5"/>
          <path d="M375,5 L395,5 L395,25"/>
          <path d="M395,375 L395,395 L375,395"/>
          <path d="M25,395 L5,395 L5,375"/>
        </g>
      """


FRAME_RENDERERS: dict[int, Callable[[str], str]] = {
    0: classic_frame,
    1: double_frame,
    2: dashed_frame,
    3: corner_frame,
}


def frame(style: int, color: str) -> str:
    """Render frame ``style``; unknown styles render nothing."""
    renderer = FRAME_RENDERERS.get(style)
    return renderer(color) if renderer else ""


# MARK: - Document

_GLOW_FILTERS = """
      <filter id="glow" x="-50%" y="-50%" width="200%" height="200%">
        <feGaussianBlur stdDeviation="4" result="coloredBlur"/>
        <feMerge> 
          <feMergeNode in="coloredBlur"/>
          <feMergeNode in="SourceGraphic"/>
        </feMerge>
      </filter>
      <filter id="strongGlow" x="-100%" y="-100%" width="300%" height="300%">
        <feGaussianBlur stdDeviation="8" result="coloredBlur"/>
        <feMerge> 
          <feMergeNode in="coloredBlur"/>
          <feMergeNode in="SourceGraphic"/>
        </feMerge>
      </filter>
      """


def compose_svg(mood: Mood, token_id: str, flags: VisualFlags) -> str:
    """
    Assemble the full SVG document for a token.

    Args:
        mood: The selected mood
        token_id: The token identifier, drawn as ``#<token_id>``
        flags: Visual flags derived from the generation seed

    Returns:
        The SVG document as a string
    """
    color = mood.primary_color

    background_pattern = ""
    if flags.has_pattern:
        background_pattern = PATTERN_RENDERERS[mood.pattern](color)

    particle_system = particles(color, flags.seed) if flags.has_particles else ""
    border = frame(flags.frame_style, color)

    glow_defs = _GLOW_FILTERS if flags.has_glow else ""
    glow = 'filter="url(#glow)"' if flags.has_glow else ""
    strong_glow = 'filter="url(#strongGlow)"' if flags.has_glow else ""

    return f"""<svg width="400" height="400" viewBox="0 0 400 400" xmlns="http://www.w3.org/2000/svg">
    <defs>
      <linearGradient id="bg" x1="0%" y1="0%" x2="100%" y2="100%">
        <stop offset="0%" style="stop-color:{color};stop-opacity:0.3" />
        <stop offset="50%" style="stop-color:{mood.background_color};stop-opacity:0.8" />
        <stop offset="100%" style="stop-color:#000000;stop-opacity:1" />
      </linearGradient>
      <radialGradient id="centerGlow" cx="50%" cy="40%" r="60%">
        <stop offset="0%" style="stop-color:{color};stop-opacity:0.8" />
        <stop offset="100%" style="stop-color:transparent;stop-opacity:0" />
      </radialGradient>
      {glow_defs}
    </defs>
    
    <!-- Background -->
    <rect width="400" height="400" fill="url(#bg)" />
    <rect width="400" height="400" fill="url(#centerGlow)" />
    
    <!-- Background Pattern -->
    {background_pattern}
    
    <!-- Main Circle -->
    <circle cx="200" cy="160" r="90" fill="none" stroke="{color}" stroke-width="3" opacity="0.6">
      <animate attributeName="r" values="85;95;85" dur="4s" repeatCount="indefinite"/>
    </circle>
    
    <!-- Inner Power Circle -->
    <circle cx="200" cy="160" r="60" fill="none" stroke="{color}" stroke-width="2" opacity="0.8" {glow}>
      <animate attributeName="r" values="55;65;55" dur="3s" repeatCount="indefinite"/>
      <animate attributeName="opacity" values="0.8;0.4;0.8" dur="2s" repeatCount="indefinite"/>
    </circle>
    
    <!-- Main Emoji -->
    <text x="200" y="175" font-family="Arial, sans-serif" font-size="70" text-anchor="middle" {strong_glow}>
      {escape(mood.emoji)}
    </text>
    
    <!-- Token ID -->
    <text x="200" y="290" font-family="Arial, sans-serif" font-size="28" font-weight="bold" text-anchor="middle" fill="white">
      #{escape(token_id)}
    </text>
    
    <!-- Mood Name -->
    <text x="200" y="320" font-family="Arial, sans-serif" font-size="24" font-weight="bold" text-anchor="middle" fill="{color}" {glow}>
      {escape(mood.name.upper())}
    </text>
    
    <!-- Rarity Badge -->
    <rect x="20" y="20" width="80" height="25" rx="12" fill="{color}" opacity="0.8"/>
    <text x="60" y="37" font-family="Arial, sans-serif" font-size="12" font-weight="bold" text-anchor="middle" fill="black">
      {mood.rarity.value.upper()}
    </text>
    
    <!-- Energy Level -->
    <text x="200" y="350" font-family="Arial, sans-serif" font-size="14" text-anchor="middle" fill="#cccccc">
      Energy: {escape(mood.energy_level)}
    </text>
    
    <!-- Particles -->
    {particle_system}
    
    <!-- Frame -->
    {border}
  </svg>"""


def encode_data_uri(svg: str) -> str:
    """Embed an SVG document in a percent-encoded data URI."""
    return DATA_URI_PREFIX + quote(svg, safe=_URI_SAFE)
