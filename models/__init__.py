"""
Models library for KI games.

Pydantic data models shared across the project:
- Primitives: Color, Rectangle
- Invaders: InvadersConfig (validated gameplay tuning)

Usage:
    >>> from models import Color, Rectangle, InvadersConfig
"""

from .primitives import Color, Rectangle
from .invaders import InvadersConfig

__all__ = [
    "Color",
    "Rectangle",
    "InvadersConfig",
]
