"""
Model and Configuration Tests

Pydantic primitives, the validated gameplay config and the .env-backed
Invaders settings.

Run with: pytest tests/test_models.py -v
"""

import pytest
from pydantic import ValidationError

from games.Invaders import config as invaders_config
from models import Color, InvadersConfig, Rectangle


class TestColor:

    def test_from_hex(self):
        assert Color.from_hex('#ff00ff').as_rgb_tuple == (255, 0, 255)
        assert Color.from_hex('00ffff').as_tuple == (0, 255, 255, 255)

    def test_bad_hex(self):
        with pytest.raises(ValueError):
            Color.from_hex('#fff')

    def test_range_validated(self):
        with pytest.raises(ValidationError):
            Color(r=256, g=0, b=0)

    def test_frozen(self):
        color = Color(r=1, g=2, b=3)
        with pytest.raises(ValidationError):
            color.r = 5


class TestRectangle:
    """Open-interval overlap."""

    def setup_method(self):
        self.box = Rectangle(x=0, y=0, width=10, height=10)

    def test_overlap(self):
        assert self.box.overlaps(Rectangle(x=5, y=5, width=10, height=10))

    def test_contained(self):
        assert self.box.overlaps(Rectangle(x=2, y=2, width=2, height=2))

    @pytest.mark.parametrize('x,y', [(10, 0), (-10, 0), (0, 10), (0, -10)])
    def test_shared_edge_is_not_overlap(self, x, y):
        assert not self.box.overlaps(Rectangle(x=x, y=y, width=10, height=10))

    def test_separate(self):
        assert not self.box.overlaps(Rectangle(x=50, y=50, width=1, height=1))

    def test_symmetric(self):
        other = Rectangle(x=9.5, y=-3, width=4, height=4)
        assert self.box.overlaps(other) == other.overlaps(self.box)

    def test_edges(self):
        rect = Rectangle(x=1.5, y=2, width=3, height=4)
        assert rect.right == 4.5
        assert rect.bottom == 6

    @pytest.mark.parametrize('width,height', [(0, 1), (1, -1)])
    def test_positive_dimensions(self, width, height):
        with pytest.raises(ValidationError):
            Rectangle(x=0, y=0, width=width, height=height)


class TestInvadersConfig:

    def test_defaults(self):
        config = InvadersConfig()
        assert config.player_speed == 5
        assert config.bullet_speed == 7
        assert config.invader_bullet_speed == 3.5
        assert (config.invader_cols, config.invader_rows) == (10, 4)
        assert config.invader_fire_rate == 0.99
        assert config.invader_move_interval == 25
        assert config.max_player_bullets == 2
        assert config.starting_lives == 3
        assert config.points_per_hit == 10

    @pytest.mark.parametrize('field,value', [
        ('invader_fire_rate', 1.5),
        ('invader_fire_rate', -0.1),
        ('invader_move_interval', 0),
        ('starting_lives', 0),
        ('player_speed', 0),
        ('invader_cols', 0),
    ])
    def test_rejects_bad_values(self, field, value):
        with pytest.raises(ValidationError):
            InvadersConfig(**{field: value})

    def test_frozen(self):
        config = InvadersConfig()
        with pytest.raises(ValidationError):
            config.starting_lives = 9


class TestEnvironmentSettings:
    """games/Invaders/config.py reads typed values from the environment."""

    def test_get_int(self, monkeypatch):
        monkeypatch.setenv('INVADERS_TEST_INT', '7')
        assert invaders_config._get_int('INVADERS_TEST_INT', 1) == 7

    def test_get_float_default(self, monkeypatch):
        monkeypatch.delenv('INVADERS_TEST_FLOAT', raising=False)
        assert invaders_config._get_float('INVADERS_TEST_FLOAT', 0.5) == 0.5

    def test_get_int_rejects_garbage(self, monkeypatch):
        monkeypatch.setenv('INVADERS_TEST_INT', 'many')
        with pytest.raises(ValueError):
            invaders_config._get_int('INVADERS_TEST_INT', 1)

    def test_load_config_snapshot(self):
        config = invaders_config.load_config()
        assert isinstance(config, InvadersConfig)
        assert config.starting_lives == invaders_config.STARTING_LIVES
        assert config.invader_fire_rate == invaders_config.INVADER_FIRE_RATE

    def test_fixed_presentation(self):
        assert (invaders_config.GAME_WIDTH, invaders_config.GAME_HEIGHT) == (600, 400)
        assert invaders_config.INVADER_COLORS['A'].as_rgb_tuple == (255, 0, 255)
        assert invaders_config.INVADER_COLORS['B'].as_rgb_tuple == (0, 255, 255)

    def test_key_bindings(self):
        assert invaders_config.LEFT_KEYS == ('ArrowLeft', 'KeyA')
        assert invaders_config.RIGHT_KEYS == ('ArrowRight', 'KeyD')
        assert invaders_config.FIRE_KEY == 'Space'
        assert invaders_config.PAUSE_KEY == 'KeyP'
        assert invaders_config.RESTART_KEY == 'Enter'
