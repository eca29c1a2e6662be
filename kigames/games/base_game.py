"""Base class for all KI games.

A game is a self-registering element: its definition file calls
``define('<tag-name>', GameClass)`` and pages place the tag in markup.

BaseGame owns the element lifecycle shared by every game:
- attach: allocate the drawing surface, reset game state, subscribe to
  document key events, start the per-frame callback chain
- per frame: simulate + render while playing; render + overlay while
  paused or over; always reschedule
- detach: cancel the pending frame, unsubscribe (exactly once)

Game metadata (NAME, DESCRIPTION, etc.) is declared as class attributes.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence, Tuple

import pygame

from kigames.elements import CustomElement
from kigames.games.game_state import GameState
from kigames.games.input import KEYDOWN, KEYUP, KeyEvent
from kigames.games.overlay import Overlay
from kigames.logging import get_logger

log = get_logger('base_game')


class BaseGame(CustomElement, ABC):
    """Abstract base class for all KI games.

    Class Attributes (metadata):
        NAME: Display name for the game
        DESCRIPTION: Short description of gameplay
        VERSION: Semantic version string
        AUTHOR: Author/team name

    Class Attributes (presentation, fixed by the component):
        WIDTH, HEIGHT: Drawing surface size
        BORDER_WIDTH, BORDER_COLOR: Frame drawn around the surface

    Subclasses must implement:
        - _get_internal_state() -> GameState
        - get_score() -> int
        - handle_input(events): Process key events
        - update(): Advance the simulation by one tick
        - render(surface): Draw the game (pure read of state)
        - reset(): Put the game in its initial state

    Optional overrides:
        - _pause_message() / _game_over_message(): overlay text
    """

    # =========================================================================
    # Game Metadata (override in subclasses)
    # =========================================================================

    NAME: str = "Unnamed Game"
    DESCRIPTION: str = "No description"
    VERSION: str = "1.0.0"
    AUTHOR: str = "Unknown"

    WIDTH: int = 600
    HEIGHT: int = 400
    BORDER_WIDTH: int = 2
    BORDER_COLOR: Tuple[int, int, int] = (0, 255, 0)

    @classmethod
    def get_info(cls) -> Dict[str, Any]:
        """Get game metadata as a dictionary."""
        return {
            'name': cls.NAME,
            'description': cls.DESCRIPTION,
            'version': cls.VERSION,
            'author': cls.AUTHOR,
            'tag_name': cls.tag_name,
        }

    # =========================================================================
    # Instance Initialization
    # =========================================================================

    def __init__(self):
        super().__init__()
        self._surface: Optional[pygame.Surface] = None
        self._overlay = Overlay((self.WIDTH, self.HEIGHT))
        self._frame_handle: Optional[int] = None
        self._listening = False

    @property
    def state(self) -> GameState:
        """Current game state (standard interface).

        Games should not override this - override _get_internal_state instead.
        """
        return self._get_internal_state()

    @property
    def surface(self) -> Optional[pygame.Surface]:
        return self._surface

    @property
    def overlay(self) -> Overlay:
        return self._overlay

    @property
    def outer_size(self) -> Tuple[int, int]:
        """Size on the page including the border."""
        return (self.WIDTH + 2 * self.BORDER_WIDTH, self.HEIGHT + 2 * self.BORDER_WIDTH)

    @abstractmethod
    def _get_internal_state(self) -> GameState:
        """Map internal game flags to standard GameState."""

    @abstractmethod
    def get_score(self) -> int:
        """Get current score."""

    @abstractmethod
    def handle_input(self, events: List[KeyEvent]) -> None:
        """Process key events."""

    @abstractmethod
    def update(self) -> None:
        """Advance the simulation by one tick."""

    @abstractmethod
    def render(self, surface: pygame.Surface) -> None:
        """Draw the game. Must not change game state."""

    @abstractmethod
    def reset(self) -> None:
        """Reset game to initial state."""

    # =========================================================================
    # Element Lifecycle
    # =========================================================================

    def connected_callback(self) -> None:
        self._surface = self.host.create_surface((self.WIDTH, self.HEIGHT))
        self.reset()

        # Key listeners live on the document, not the element
        self.host.document.add_event_listener(KEYDOWN, self._on_key_event)
        self.host.document.add_event_listener(KEYUP, self._on_key_event)
        self._listening = True

        self._frame_handle = self.host.request_animation_frame(self._game_loop)
        log.debug(f"{self.NAME} attached")

    def disconnected_callback(self) -> None:
        if not self._listening:
            return
        self.host.cancel_animation_frame(self._frame_handle)
        self._frame_handle = None
        self.host.document.remove_event_listener(KEYDOWN, self._on_key_event)
        self.host.document.remove_event_listener(KEYUP, self._on_key_event)
        self._listening = False
        log.debug(f"{self.NAME} detached")

    def _on_key_event(self, event: KeyEvent) -> None:
        self.handle_input([event])

    def _game_loop(self, timestamp: float) -> None:
        """One tick. Never ends the chain by itself; only detach does."""
        state = self.state
        if state == GameState.PLAYING:
            self._overlay.hide()
            self.update()
            self.render(self._surface)
        elif state.is_over:
            self.render(self._surface)
            self._overlay.show(*self._game_over_message())
        else:
            self.render(self._surface)
            self._overlay.show(*self._pause_message())

        self._frame_handle = self.host.request_animation_frame(self._game_loop)

    def _pause_message(self) -> Tuple[str, Sequence[str]]:
        return "PAUSED", []

    def _game_over_message(self) -> Tuple[str, Sequence[str]]:
        title = "YOU WIN!" if self.state == GameState.WON else "GAME OVER"
        return title, [f"Final Score: {self.get_score()}"]

    # =========================================================================
    # Presentation
    # =========================================================================

    def compose(self, target: pygame.Surface, position: Tuple[int, int]) -> None:
        """Draw border, game surface and overlay onto a page surface."""
        if self._surface is None:
            return
        x, y = position
        border = self.BORDER_WIDTH
        outer_w, outer_h = self.outer_size
        pygame.draw.rect(target, self.BORDER_COLOR, pygame.Rect(x, y, outer_w, outer_h), border)
        target.blit(self._surface, (x + border, y + border))
        self._overlay.render(target, (x + border, y + border))
