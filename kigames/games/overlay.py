"""
Overlay - message layer shown above a game's drawing surface.

The overlay is presentation only: games show it for pause and result
screens and hide it again; the host composites it after the game surface.
"""
from typing import List, Optional, Sequence, Tuple

import pygame

Color = Tuple[int, ...]


class Overlay:
    """Translucent panel with a title and message lines.

    Args:
        size: Panel size in pixels (usually the game surface size)
        background: RGBA fill
        text_color: RGB text color
    """

    def __init__(
        self,
        size: Tuple[int, int],
        background: Color = (0, 0, 0, 178),
        text_color: Color = (0, 255, 0),
        title_size: int = 48,
        line_size: int = 28,
    ):
        self.size = size
        self.background = background
        self.text_color = text_color
        self._title_size = title_size
        self._line_size = line_size

        self.visible = False
        self.title = ""
        self.lines: List[str] = []

        # Fonts (initialized lazily)
        self._font_title: Optional[pygame.font.Font] = None
        self._font_line: Optional[pygame.font.Font] = None

    def show(self, title: str, lines: Sequence[str] = ()) -> None:
        self.visible = True
        self.title = title
        self.lines = list(lines)

    def hide(self) -> None:
        self.visible = False

    def _get_fonts(self) -> Tuple[pygame.font.Font, pygame.font.Font]:
        if self._font_title is None:
            if not pygame.font.get_init():
                pygame.font.init()
            self._font_title = pygame.font.Font(None, self._title_size)
            self._font_line = pygame.font.Font(None, self._line_size)
        return self._font_title, self._font_line

    def render(self, target: pygame.Surface, offset: Tuple[int, int] = (0, 0)) -> None:
        """Draw the panel onto ``target`` when visible, centered in its area."""
        if not self.visible:
            return

        width, height = self.size
        panel = pygame.Surface((width, height), pygame.SRCALPHA)
        panel.fill(self.background)

        font_title, font_line = self._get_fonts()
        rendered = [font_title.render(self.title, True, self.text_color)]
        rendered += [font_line.render(line, True, self.text_color) for line in self.lines]

        spacing = 12
        total = sum(text.get_height() for text in rendered) + spacing * (len(rendered) - 1)
        y = (height - total) // 2
        for text in rendered:
            panel.blit(text, text.get_rect(midtop=(width // 2, y)))
            y += text.get_height() + spacing

        target.blit(panel, offset)
