"""
Pydantic v2 model for Invaders gameplay configuration.

Defaults are the classic arcade-widget values. games/Invaders/config.py
builds one of these from environment overrides; tests construct their own.
"""

from pydantic import BaseModel, Field


class InvadersConfig(BaseModel):
    """
    Gameplay tuning for one Invaders game.

    Speeds are in pixels per tick. The invader block moves once every
    ``invader_move_interval`` ticks; invader bullets move at half the
    player bullet speed.
    """
    model_config = {"frozen": True}

    player_speed: float = Field(default=5.0, gt=0.0)
    bullet_speed: float = Field(default=7.0, gt=0.0)
    invader_speed_x: float = Field(default=1.0, gt=0.0)
    invader_speed_y: float = Field(
        default=15.0,
        gt=0.0,
        description="Row drop when the block reaches an edge",
    )
    invader_cols: int = Field(default=10, ge=1)
    invader_rows: int = Field(default=4, ge=1)
    invader_fire_rate: float = Field(
        default=0.99,
        ge=0.0,
        le=1.0,
        description="Chance of no invader firing on a tick (1.0 = never fire)",
    )
    invader_move_interval: int = Field(default=25, ge=1)
    max_player_bullets: int = Field(default=2, ge=1)
    starting_lives: int = Field(default=3, ge=1)
    points_per_hit: int = Field(default=10, ge=0)

    @property
    def invader_bullet_speed(self) -> float:
        return self.bullet_speed / 2
