#!/usr/bin/env python3
"""
Development Mode Game Launcher

Runs a KI games page in a desktop window: the page is parsed, the loader
requests a definition file for every ki-games-* tag, and each defined
tag becomes a running game.

Usage:
    # List available game tags
    python dev_game.py --list

    # Run the bundled page (one <ki-games-invaders>)
    python dev_game.py

    # Run your own page
    python dev_game.py --page my_page.html

    # More logging
    python dev_game.py --log-level DEBUG
"""

import argparse
import asyncio
import os
import sys
from pathlib import Path

import pygame

# Ensure project root is on path
_project_root = os.path.dirname(os.path.abspath(__file__))
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from games.browser.game_runtime import DEFAULT_PAGE, BrowserGameRuntime, read_page_markup
from games.loader import GAME_TAG_PREFIX, GAMES_DIRECTORY, PROJECT_ROOT
from kigames.logging import configure_logging


def available_tags():
    """Tag names that have a definition file under games/."""
    prefix = GAME_TAG_PREFIX.replace('-', '_')
    games_dir = PROJECT_ROOT / GAMES_DIRECTORY
    return sorted(
        path.stem.replace('_', '-')
        for path in games_dir.glob(f'{prefix}*.py')
    )


def main():
    """Main entry point for development game launcher."""
    parser = argparse.ArgumentParser(
        description='Development Mode Game Launcher - run a KI games page',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python dev_game.py --list              # List available game tags
  python dev_game.py                     # Run the bundled page
  python dev_game.py --page page.html    # Run your own page
        """
    )

    parser.add_argument(
        '--list', '-l',
        action='store_true',
        help='List all available game tags and exit'
    )

    parser.add_argument(
        '--page', '-p',
        type=Path,
        default=DEFAULT_PAGE,
        help=f'Page markup to run (default: {DEFAULT_PAGE.name})'
    )

    parser.add_argument(
        '--fps',
        type=int,
        default=60,
        help='Frame rate (default: 60)'
    )

    parser.add_argument(
        '--log-level',
        type=str,
        default=None,
        choices=['TRACE', 'DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Log level for all modules'
    )

    args = parser.parse_args()

    if args.list:
        print("\nAvailable Game Tags (Development Mode)")
        print("=" * 50)
        for tag in available_tags():
            print(f"  <{tag}>")
        print()
        return 0

    if not args.page.exists():
        print(f"Page not found: {args.page}")
        return 1

    if args.log_level:
        configure_logging(level=args.log_level)

    pygame.init()

    print("=" * 60)
    print(f"Development Mode: {args.page}")
    print("=" * 60)
    print("Controls: Arrows/A/D move, Space fire, P pause, Enter restart")
    print()

    runtime = BrowserGameRuntime(read_page_markup(args.page), title="KI Games - Development Mode")
    try:
        asyncio.run(runtime.run(fps=args.fps))
    finally:
        pygame.quit()

    return 0


if __name__ == '__main__':
    sys.exit(main())
