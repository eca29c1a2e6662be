"""
Definition file for <ki-games-invaders>.

Loaded on demand by the game loader when a page contains the tag.
Executing it registers the element; the host then upgrades every
<ki-games-invaders> node on the page into a running game.
"""
from kigames.elements import define
from games.Invaders.game_mode import InvadersGame

define('ki-games-invaders', InvadersGame)
