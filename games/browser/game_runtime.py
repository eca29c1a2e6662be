"""
Browser Game Runtime

Runs the KI games found on a page:
- builds the document (live browser page under pygbag, bundled page.html
  otherwise)
- runs the game loader so each game tag gets its definition file
- hands the document to a Host, which upgrades defined tags and drives the
  async frame loop
"""
import sys
from pathlib import Path
from typing import Optional

import pygame

from kigames.document import Document
from kigames.host import Host
from kigames.logging import get_logger
from games.loader import discover_and_load_games, fetch_script

if sys.platform == "emscripten":
    import platform as browser_platform

log = get_logger('runtime')

DEFAULT_PAGE = Path(__file__).parent / 'page.html'


def read_page_markup(page: Optional[Path] = None) -> str:
    """Markup of the page to run.

    In the browser this is the live document body; natively it is a file.
    """
    if page is None and sys.platform == "emscripten":
        return str(browser_platform.window.document.body.innerHTML)
    return Path(page or DEFAULT_PAGE).read_text(encoding='utf-8')


class BrowserGameRuntime:
    """
    Manages the page lifecycle.

    Args:
        markup: Page markup to run
        title: Window caption
    """

    def __init__(self, markup: str, title: str = "KI Games"):
        self.title = title
        self.document = Document.from_markup(markup, fetch=fetch_script)
        self.host = Host(self.document)

    def load_games(self) -> int:
        """Request definitions for the page's game tags and upgrade them.

        Returns:
            Number of live elements on the page
        """
        requests = discover_and_load_games(self.document)
        missing = [r.src for r in requests if not r.loaded]
        if missing:
            log.warning(f"Not loaded: {', '.join(missing)}")

        self.host.upgrade()
        count = len(self.host.elements)
        log.info(f"{count} element(s) running")
        return count

    def open_display(self) -> pygame.Surface:
        """Create a window sized to the page layout."""
        width, height = self.host.layout_size()
        screen = pygame.display.set_mode((max(width, 1), max(height, 1)))
        pygame.display.set_caption(self.title)
        self.host.screen = screen
        return screen

    async def run(self, fps: int = 60) -> None:
        """Load games, then drive the host loop until quit."""
        self.load_games()
        self.open_display()
        await self.host.run(fps=fps)
