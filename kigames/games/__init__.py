"""
KI Game Framework.

Provides:
- base_game: BaseGame element class that all games inherit from
- game_state: Standard GameState enum
- overlay: Pause/result message layer
- input: Keyboard events shared by browser and desktop
"""

from kigames.games.game_state import GameState
from kigames.games.base_game import BaseGame
from kigames.games.overlay import Overlay

__all__ = [
    'GameState',
    'BaseGame',
    'Overlay',
]
