"""
Keyboard input for KI games.

Browser and desktop key presses arrive as the same KeyEvent objects.
"""

from kigames.games.input.key_event import KEYDOWN, KEYUP, KeyEvent, key_code_from_pygame

__all__ = ['KEYDOWN', 'KEYUP', 'KeyEvent', 'key_code_from_pygame']
