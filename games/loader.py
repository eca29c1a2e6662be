"""
Game Loader - load game definitions for the tags a page uses.

Scans a document for tags starting with ``ki-games-`` and, for each distinct
tag, requests its definition file from ``games/`` unless the page already
requests it. The file name is the tag with hyphens turned into underscores,
so ``<ki-games-invaders>`` loads ``games/ki_games_invaders.py``.

Executing a definition file runs its ``define(...)`` call; the host then
upgrades the matching nodes. Nothing is reported back to the page: a tag
whose file is missing simply stays inert (and a warning is logged).

Usage:
    from games.loader import discover_and_load_games, fetch_script

    document = Document.from_markup(html, fetch=fetch_script)
    discover_and_load_games(document)
"""
import importlib.util
import sys
from pathlib import Path
from typing import List, Optional

from kigames.document import Document, ScriptRequest
from kigames.logging import get_logger

log = get_logger('loader')

GAME_TAG_PREFIX = 'ki-games-'
GAMES_DIRECTORY = 'games/'

# Definition file paths are resolved against the project root
PROJECT_ROOT = Path(__file__).resolve().parent.parent


def script_file_name(tag_name: str) -> str:
    """'ki-games-invaders' -> 'ki_games_invaders.py'"""
    return f"{tag_name.lower().replace('-', '_')}.py"


def load_game_script(document: Document, tag_name: str) -> Optional[ScriptRequest]:
    """
    Request the definition file for one tag.

    Returns:
        The appended request, or None if the page already requests the file
    """
    file_name = script_file_name(tag_name)
    script_path = GAMES_DIRECTORY + file_name

    if document.query_script(file_name) is not None:
        return None

    log.info(f"Found <{tag_name}>. Dynamically loading {script_path}")
    request = ScriptRequest(src=script_path, type='text/python', is_async=True)
    document.append_script(request)
    return request


def discover_game_tags(document: Document) -> List[str]:
    """Distinct game tag names in document order."""
    tags = []
    for node in document.get_elements_by_tag_name('*'):
        tag_name = node.tag_name.lower()
        if tag_name.startswith(GAME_TAG_PREFIX) and tag_name not in tags:
            tags.append(tag_name)
    return tags


def discover_and_load_games(document: Document) -> List[ScriptRequest]:
    """
    Request definition files for every game tag on the page.

    Returns:
        Requests appended by this call
    """
    requests = []
    for tag_name in discover_game_tags(document):
        request = load_game_script(document, tag_name)
        if request is not None:
            requests.append(request)
    return requests


def fetch_script(request: ScriptRequest, root: Path = PROJECT_ROOT) -> None:
    """
    Document fetch hook: execute a Python definition file once per process.

    The module is registered as ``games.<stem>`` so a second request (or a
    regular import) never runs the ``define(...)`` call twice.
    """
    path = root / request.src
    module_name = f"games.{path.stem}"

    if module_name in sys.modules:
        request.loaded = True
        return

    if not path.exists():
        log.warning(f"Game script not found: {request.src}")
        return

    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        log.warning(f"Cannot load game script: {request.src}")
        return

    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception:
        sys.modules.pop(module_name, None)
        log.exception(f"Game script failed: {request.src}")
        return

    request.loaded = True
    log.debug(f"Loaded {request.src}")
