"""
KI Games Browser Entry Point

This is the main entry point for running KI games in the browser via pygbag.
Pygbag compiles this to WebAssembly, allowing pygame games to run in browsers.

Usage (development):
    python -m pygbag games/browser/main.py

Usage (build):
    python -m pygbag --build games/browser/main.py
"""
# pygbag: requirements
# pydantic
# python-dotenv

import asyncio
import sys

# Pygame must be imported before other game modules
import pygame

# Add project root to path for imports
if sys.platform != "emscripten":
    from pathlib import Path
    project_root = Path(__file__).parent.parent.parent
    if str(project_root) not in sys.path:
        sys.path.insert(0, str(project_root))

from kigames.logging import get_logger  # noqa: E402

log = get_logger('main')


async def main():
    """Main async entry point for browser games."""
    log.info("Starting KI Games...")
    pygame.init()

    from games.browser.game_runtime import BrowserGameRuntime, read_page_markup

    runtime = BrowserGameRuntime(read_page_markup())
    await runtime.run()

    pygame.quit()


# Pygbag requires asyncio.run(main()) at module level
asyncio.run(main())
