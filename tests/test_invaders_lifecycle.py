"""
Invaders Element Lifecycle Tests

Attach/detach, the per-frame callback chain, document key listeners and
the pause/result overlays.

Run with: pytest tests/test_invaders_lifecycle.py -v
"""

import pytest

from games.Invaders.game_mode import InvadersGame
from kigames.games import GameState
from kigames.games.input import KEYDOWN, KEYUP, KeyEvent


class TestAttach:
    """connected_callback() prepares a running game."""

    def test_surface_allocated(self, game):
        assert game.surface is not None
        assert game.surface.get_size() == (600, 400)

    def test_starts_playing(self, game):
        assert game.state == GameState.PLAYING
        assert not game.overlay.visible

    def test_listens_on_document(self, game, document):
        assert document.listener_count(KEYDOWN) == 1
        assert document.listener_count(KEYUP) == 1

    def test_first_frame_requested(self, game, host):
        assert host.frames.pending_count == 1

    def test_metadata(self):
        info = InvadersGame.get_info()
        assert info['name'] == "Invaders"
        assert info['version'] == "1.0.0"

    def test_outer_size_includes_border(self, game):
        assert game.outer_size == (604, 404)


class TestFrameChain:
    """One tick per frame, always rescheduled."""

    def test_tick_per_frame(self, game, host):
        host.step()
        host.step()
        host.step()
        assert game.world.update_counter == 3

    def test_rescheduled_every_frame(self, game, host):
        for _ in range(5):
            assert host.step() == 1
            assert host.frames.pending_count == 1

    def test_chain_survives_pause(self, game, host, document):
        document.dispatch_event(KeyEvent(KEYDOWN, 'KeyP'))
        host.step()
        host.step()
        assert host.frames.pending_count == 1
        assert game.world.update_counter == 0

    def test_chain_survives_game_over(self, game, host):
        game.world.is_game_over = True
        host.step()
        assert host.frames.pending_count == 1

    def test_block_moves_after_25_frames(self, game, host):
        for _ in range(25):
            host.step()
        assert game.world.invaders[0].x == 31


class TestDocumentKeys:
    """Key events reach the game through the document."""

    def test_keydown_held_until_keyup(self, game, host, document):
        document.dispatch_event(KeyEvent(KEYDOWN, 'ArrowRight'))
        host.step()
        host.step()
        document.dispatch_event(KeyEvent(KEYUP, 'ArrowRight'))
        host.step()
        assert game.world.player.x == 310

    def test_fire_through_document(self, game, document):
        document.dispatch_event(KeyEvent(KEYDOWN, 'Space'))
        assert len(game.world.bullets) == 1

    def test_unknown_key_ignored(self, game, host, document):
        document.dispatch_event(KeyEvent(KEYDOWN, 'KeyQ'))
        host.step()
        assert game.world.player.x == 300
        assert game.state == GameState.PLAYING


class TestDetach:
    """disconnected_callback() stops everything exactly once."""

    def test_listeners_removed(self, game, host, document):
        host.disconnect(game)
        assert document.listener_count(KEYDOWN) == 0
        assert document.listener_count(KEYUP) == 0

    def test_frame_cancelled(self, game, host):
        host.disconnect(game)
        assert host.frames.pending_count == 0
        assert host.step() == 0

    def test_no_ticks_after_detach(self, game, host):
        host.step()
        host.disconnect(game)
        host.step()
        assert game.world.update_counter == 1

    def test_detach_twice_is_safe(self, game, host):
        host.disconnect(game)
        game.disconnected_callback()
        assert not game.is_connected

    def test_keys_ignored_after_detach(self, game, host, document):
        host.disconnect(game)
        document.dispatch_event(KeyEvent(KEYDOWN, 'Space'))
        assert game.world.bullets == []

    def test_detach_inside_frame(self, game, host, document):
        # Another frame callback removes the game before its tick runs
        host.cancel_animation_frame(game._frame_handle)
        host.request_animation_frame(lambda ts: host.disconnect(game))
        host.step()
        assert host.frames.pending_count == 0
        assert document.listener_count(KEYDOWN) == 0

    def test_reattach_starts_fresh(self, game, host):
        game.world.score = 90
        host.disconnect(game)
        host.connect(game)
        assert game.world.score == 0
        assert host.frames.pending_count == 1


class TestOverlay:
    """Pause and result overlays shown by the frame loop."""

    def test_pause_overlay(self, game, host, document):
        document.dispatch_event(KeyEvent(KEYDOWN, 'KeyP'))
        host.step()

        assert game.overlay.visible
        assert game.overlay.title == "PAUSED"
        assert game.overlay.lines == [
            "Press 'P' to resume.",
            "Controls: Arrows/A/D to Move, Space to Fire",
        ]

    def test_resume_hides_overlay(self, game, host, document):
        document.dispatch_event(KeyEvent(KEYDOWN, 'KeyP'))
        host.step()
        document.dispatch_event(KeyEvent(KEYDOWN, 'KeyP'))
        assert not game.overlay.visible
        host.step()
        assert not game.overlay.visible

    def test_game_over_overlay(self, game, host):
        game.world.score = 70
        game.world.is_game_over = True
        host.step()

        assert game.overlay.visible
        assert game.overlay.title == "GAME OVER"
        assert game.overlay.lines == ["Final Score: 70", "Press 'Enter' to play again!"]

    def test_win_overlay(self, game, host):
        game.world.invaders = []
        host.step()
        host.step()

        assert game.overlay.title == "YOU WIN!"

    def test_restart_hides_overlay(self, game, host, document):
        game.world.is_game_over = True
        host.step()
        document.dispatch_event(KeyEvent(KEYDOWN, 'Enter'))
        assert not game.overlay.visible


@pytest.mark.parametrize('code', ['ArrowLeft', 'KeyA'])
def test_held_key_survives_restart(game, document, code):
    document.dispatch_event(KeyEvent(KEYDOWN, code))
    game.world.is_game_over = True
    document.dispatch_event(KeyEvent(KEYDOWN, 'Enter'))
    game.update()
    assert game.world.player.x == 295
