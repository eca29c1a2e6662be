"""
Invaders entities.

Plain mutable dataclasses for the player, invaders and bullets, plus the
single aggregate that holds one game's state. Only the game engine touches
these; nothing outside it keeps a reference.
"""
from dataclasses import dataclass, field
from typing import Dict, List

from models import Color, Rectangle
from games.Invaders.config import (
    INVADER_BULLET_COLOR,
    INVADER_BULLET_SIZE,
    INVADER_SIZE,
    PLAYER_BULLET_COLOR,
    PLAYER_BULLET_SIZE,
    PLAYER_HEIGHT,
    PLAYER_WIDTH,
)


@dataclass
class Player:
    """Laser cannon at the bottom of the field."""
    x: float
    y: float
    lives: int
    width: float = PLAYER_WIDTH
    height: float = PLAYER_HEIGHT

    @property
    def rect(self) -> Rectangle:
        return Rectangle(x=self.x, y=self.y, width=self.width, height=self.height)


@dataclass
class Invader:
    """One member of the invader block. 'A' on even rows, 'B' on odd rows."""
    x: float
    y: float
    type: str
    width: float = INVADER_SIZE
    height: float = INVADER_SIZE

    @property
    def rect(self) -> Rectangle:
        return Rectangle(x=self.x, y=self.y, width=self.width, height=self.height)


@dataclass
class Bullet:
    x: float
    y: float
    width: float
    height: float
    color: Color

    @classmethod
    def from_player(cls, x: float, y: float) -> 'Bullet':
        width, height = PLAYER_BULLET_SIZE
        return cls(x=x, y=y, width=width, height=height, color=PLAYER_BULLET_COLOR)

    @classmethod
    def from_invader(cls, x: float, y: float) -> 'Bullet':
        width, height = INVADER_BULLET_SIZE
        return cls(x=x, y=y, width=width, height=height, color=INVADER_BULLET_COLOR)

    @property
    def rect(self) -> Rectangle:
        return Rectangle(x=self.x, y=self.y, width=self.width, height=self.height)


@dataclass
class InvadersState:
    """Everything one game owns. Rebuilt from scratch on restart."""
    player: Player
    invaders: List[Invader] = field(default_factory=list)
    bullets: List[Bullet] = field(default_factory=list)
    invader_bullets: List[Bullet] = field(default_factory=list)
    keys: Dict[str, bool] = field(default_factory=dict)
    direction: int = 1
    is_paused: bool = False
    is_game_over: bool = False
    win: bool = False
    score: int = 0
    update_counter: int = 0


def is_colliding(a, b) -> bool:
    """Open-interval AABB test on anything with a ``rect``."""
    return a.rect.overlaps(b.rect)
