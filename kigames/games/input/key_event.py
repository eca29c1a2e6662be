"""
Key Event - Represents a single keyboard action.

This is a shared module used by all games.
Uses dataclass for immutability (Pydantic not available in WASM).

Key codes use the DOM ``KeyboardEvent.code`` names ('ArrowLeft', 'KeyA',
'Space', 'Enter', ...) so that browser and desktop input look identical
to games.
"""
import time
from dataclasses import dataclass
from typing import Optional

import pygame

KEYDOWN = 'keydown'
KEYUP = 'keyup'

UNIDENTIFIED = 'Unidentified'

_SPECIAL_CODES = {
    pygame.K_LEFT: 'ArrowLeft',
    pygame.K_RIGHT: 'ArrowRight',
    pygame.K_UP: 'ArrowUp',
    pygame.K_DOWN: 'ArrowDown',
    pygame.K_SPACE: 'Space',
    pygame.K_RETURN: 'Enter',
    pygame.K_KP_ENTER: 'NumpadEnter',
    pygame.K_ESCAPE: 'Escape',
    pygame.K_TAB: 'Tab',
    pygame.K_BACKSPACE: 'Backspace',
    pygame.K_LSHIFT: 'ShiftLeft',
    pygame.K_RSHIFT: 'ShiftRight',
    pygame.K_LCTRL: 'ControlLeft',
    pygame.K_RCTRL: 'ControlRight',
}


def key_code_from_pygame(key: int) -> str:
    """Translate a pygame key constant to a DOM-style key code."""
    if key in _SPECIAL_CODES:
        return _SPECIAL_CODES[key]
    if pygame.K_a <= key <= pygame.K_z:
        return f"Key{chr(key).upper()}"
    if pygame.K_0 <= key <= pygame.K_9:
        return f"Digit{chr(key)}"
    return UNIDENTIFIED


@dataclass(frozen=True)
class KeyEvent:
    """Immutable keyboard event.

    Attributes:
        type: KEYDOWN or KEYUP
        code: Physical key code ('ArrowLeft', 'KeyP', ...)
        timestamp: Time when the event occurred (seconds, monotonic clock)
    """
    type: str
    code: str
    timestamp: float = 0.0

    def __post_init__(self):
        if self.type not in (KEYDOWN, KEYUP):
            raise ValueError(f"Key event type must be '{KEYDOWN}' or '{KEYUP}', got {self.type!r}")
        if self.timestamp < 0:
            raise ValueError(f'Timestamp must be non-negative, got {self.timestamp}')

    @classmethod
    def from_pygame(cls, event: pygame.event.Event) -> Optional['KeyEvent']:
        """Build a KeyEvent from a pygame KEYDOWN/KEYUP event.

        Returns None for any other pygame event type.
        """
        if event.type == pygame.KEYDOWN:
            event_type = KEYDOWN
        elif event.type == pygame.KEYUP:
            event_type = KEYUP
        else:
            return None
        return cls(type=event_type, code=key_code_from_pygame(event.key), timestamp=time.monotonic())

    def __str__(self) -> str:
        return f"KeyEvent({self.type} {self.code}, t={self.timestamp:.3f})"
