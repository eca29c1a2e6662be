"""Common GameState enum for all KI games.

Games can have additional internal flags, but must map them to these
standard states via the `state` property.
"""
from enum import Enum


class GameState(Enum):
    """Standard game states used by the host.

    Exactly one state holds at a time.

    States:
        PLAYING: Active gameplay in progress
        PAUSED: Game temporarily paused (manual pause)
        GAME_OVER: Game ended in loss/failure
        WON: Game ended in success/victory

    For games with internal flags:
        @property
        def state(self) -> GameState:
            if self._is_game_over:
                return GameState.WON if self._win else GameState.GAME_OVER
            if self._is_paused:
                return GameState.PAUSED
            return GameState.PLAYING
    """
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "game_over"
    WON = "won"

    @property
    def is_over(self) -> bool:
        return self in (GameState.GAME_OVER, GameState.WON)
