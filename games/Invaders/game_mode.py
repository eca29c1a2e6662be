"""
Invaders game mode.

Classic fixed-shooter: a block of invaders marches side to side, dropping
a row at each edge, while the player's cannon shoots upward. Invaders fire
back at random. Clearing the block wins; losing every life, or letting the
block reach the cannon, ends the game.

Each tick runs in a fixed order:
    player motion -> bullet advance -> invader advance (+ fire)
    -> collisions -> win check
"""
import random
from typing import List, Optional, Sequence, Tuple

import pygame

from kigames.games import BaseGame, GameState
from kigames.games.input import KEYDOWN, KEYUP, KeyEvent
from kigames.logging import (
    create_sink_for_environment,
    emit_record,
    get_logger,
    get_sink,
    register_sink,
)
from models import InvadersConfig
from games.Invaders.config import (
    BACKGROUND_COLOR,
    FIRE_KEY,
    GAME_HEIGHT,
    GAME_WIDTH,
    INVADER_COLORS,
    INVADER_INSET_COLOR,
    INVADER_OFFSET_LEFT,
    INVADER_OFFSET_TOP,
    INVADER_PADDING,
    INVADER_SIZE,
    LEFT_KEYS,
    PAUSE_KEY,
    PLAYER_COLOR,
    PLAYER_OFFSET_BOTTOM,
    RESTART_KEY,
    RIGHT_KEYS,
    TEXT_COLOR,
    load_config,
)
from games.Invaders.entities import Bullet, Invader, InvadersState, Player, is_colliding

log = get_logger('invaders')


class InvadersGame(BaseGame):
    """
    Space Invaders element.

    Args:
        config: Gameplay tuning; defaults to the environment-backed settings
        rng: Random source for invader fire (anything with ``random()`` and
            ``randrange()``); defaults to the ``random`` module
    """

    NAME = "Invaders"
    DESCRIPTION = "Shoot the marching invader block before it reaches you."
    VERSION = "1.0.0"
    AUTHOR = "KI Games"

    WIDTH = GAME_WIDTH
    HEIGHT = GAME_HEIGHT

    def __init__(self, config: Optional[InvadersConfig] = None, rng=None):
        super().__init__()
        self.config = config if config is not None else load_config()
        self._rng = rng if rng is not None else random
        self._state: Optional[InvadersState] = None
        self._font: Optional[pygame.font.Font] = None

        # Round results go to disk only when KI_LOGGING_INVADERS_ENABLED is set
        if get_sink('invaders') is None:
            register_sink('invaders', create_sink_for_environment('invaders'))

    # =========================================================================
    # State
    # =========================================================================

    @property
    def world(self) -> InvadersState:
        """The live game aggregate (created on attach)."""
        if self._state is None:
            self.reset()
        return self._state

    def _get_internal_state(self) -> GameState:
        world = self.world
        if world.is_game_over:
            return GameState.WON if world.win else GameState.GAME_OVER
        if world.is_paused:
            return GameState.PAUSED
        return GameState.PLAYING

    def get_score(self) -> int:
        return self.world.score

    def reset(self) -> None:
        """Start a fresh round. Held keys survive a restart."""
        keys = self._state.keys if self._state is not None else {}
        player = Player(
            x=GAME_WIDTH / 2,
            y=GAME_HEIGHT - PLAYER_OFFSET_BOTTOM,
            lives=self.config.starting_lives,
        )
        self._state = InvadersState(player=player, keys=keys)
        self._state.invaders = self.create_invaders()
        self._overlay.hide()
        log.debug("New round")

    def create_invaders(self) -> List[Invader]:
        """Build the grid column by column; 'A' on even rows, 'B' on odd."""
        invaders = []
        step = INVADER_SIZE + INVADER_PADDING
        for col in range(self.config.invader_cols):
            for row in range(self.config.invader_rows):
                invaders.append(Invader(
                    x=col * step + INVADER_OFFSET_LEFT,
                    y=row * step + INVADER_OFFSET_TOP,
                    type='A' if row % 2 == 0 else 'B',
                ))
        return invaders

    # =========================================================================
    # Input
    # =========================================================================

    def handle_input(self, events: List[KeyEvent]) -> None:
        for event in events:
            if event.type == KEYDOWN:
                self._on_key_down(event.code)
            elif event.type == KEYUP:
                self.world.keys[event.code] = False

    def _on_key_down(self, code: str) -> None:
        world = self.world
        world.keys[code] = True

        if code == FIRE_KEY and self.state == GameState.PLAYING:
            self.fire_bullet()
        elif code == PAUSE_KEY:
            self.toggle_pause()
        elif code == RESTART_KEY and world.is_game_over:
            self.reset()

    def fire_bullet(self) -> bool:
        """Spawn a bullet at the cannon tip unless the live limit is reached."""
        world = self.world
        if len(world.bullets) >= self.config.max_player_bullets:
            return False
        player = world.player
        world.bullets.append(Bullet.from_player(player.x + player.width / 2 - 1, player.y))
        return True

    def toggle_pause(self) -> None:
        """Flip pause. Has no effect once the round is over."""
        world = self.world
        if world.is_game_over:
            return
        world.is_paused = not world.is_paused
        if world.is_paused:
            self._overlay.show(*self._pause_message())
        else:
            self._overlay.hide()

    # =========================================================================
    # Simulation
    # =========================================================================

    def update(self) -> None:
        """Advance one tick. Does nothing unless playing."""
        if self.state != GameState.PLAYING:
            return
        self._update_player()
        self._update_bullets()
        self._update_invaders()
        self._check_collisions()
        self._check_win_condition()

        if self.world.is_game_over:
            self._record_game_over()

    def _update_player(self) -> None:
        world = self.world
        player = world.player
        speed = self.config.player_speed

        if any(world.keys.get(code) for code in LEFT_KEYS):
            player.x -= speed
        if any(world.keys.get(code) for code in RIGHT_KEYS):
            player.x += speed

        player.x = max(0.0, min(player.x, GAME_WIDTH - player.width))

    def _update_bullets(self) -> None:
        world = self.world
        for bullet in world.bullets:
            bullet.y -= self.config.bullet_speed
        world.bullets = [b for b in world.bullets if b.y > 0]

        for bullet in world.invader_bullets:
            bullet.y += self.config.invader_bullet_speed
        world.invader_bullets = [b for b in world.invader_bullets if b.y < GAME_HEIGHT]

    def _update_invaders(self) -> None:
        world = self.world
        world.update_counter += 1
        if world.update_counter % self.config.invader_move_interval == 0:
            world.update_counter = 0
            self._step_invaders()
        self._invader_fire()

    def _step_invaders(self) -> None:
        world = self.world
        dx = self.config.invader_speed_x * world.direction

        at_edge = any(
            invader.x + invader.width + dx > GAME_WIDTH or invader.x + dx < 0
            for invader in world.invaders
        )

        if at_edge:
            world.direction = -world.direction
            for invader in world.invaders:
                invader.y += self.config.invader_speed_y
                if invader.y + invader.height >= world.player.y:
                    world.is_game_over = True
        else:
            for invader in world.invaders:
                invader.x += dx

    def _invader_fire(self) -> None:
        """Single Bernoulli trial per tick; at most one new bullet."""
        world = self.world
        if self._rng.random() > self.config.invader_fire_rate and world.invaders:
            shooter = world.invaders[self._rng.randrange(len(world.invaders))]
            world.invader_bullets.append(Bullet.from_invader(
                shooter.x + shooter.width / 2 - 1,
                shooter.y + shooter.height,
            ))

    def _check_collisions(self) -> None:
        world = self.world

        spent, destroyed = set(), set()
        for b, bullet in enumerate(world.bullets):
            for i, invader in enumerate(world.invaders):
                if is_colliding(bullet, invader):
                    spent.add(b)
                    destroyed.add(i)
                    world.score += self.config.points_per_hit

        world.bullets = [x for n, x in enumerate(world.bullets) if n not in spent]
        world.invaders = [x for n, x in enumerate(world.invaders) if n not in destroyed]

        hits = set()
        for b, bullet in enumerate(world.invader_bullets):
            if is_colliding(bullet, world.player):
                hits.add(b)
                world.player.lives = max(0, world.player.lives - 1)
                if world.player.lives == 0:
                    world.is_game_over = True

        world.invader_bullets = [x for n, x in enumerate(world.invader_bullets) if n not in hits]

    def _check_win_condition(self) -> None:
        world = self.world
        if not world.invaders:
            world.is_game_over = True
            world.win = True

    def _record_game_over(self) -> None:
        world = self.world
        log.info(f"Round over: {'win' if world.win else 'loss'}, score {world.score}")
        emit_record('invaders', {
            'event': 'game_over',
            'score': world.score,
            'win': world.win,
            'lives': world.player.lives,
        })

    # =========================================================================
    # Rendering
    # =========================================================================

    def _get_font(self) -> pygame.font.Font:
        if self._font is None:
            if not pygame.font.get_init():
                pygame.font.init()
            self._font = pygame.font.Font(None, 20)
        return self._font

    def render(self, surface: pygame.Surface) -> None:
        surface.fill(BACKGROUND_COLOR.as_rgb_tuple)
        self._draw_player(surface)
        self._draw_invaders(surface)
        self._draw_bullets(surface)
        self._draw_hud(surface)

    def _draw_player(self, surface: pygame.Surface) -> None:
        p = self.world.player
        color = PLAYER_COLOR.as_rgb_tuple
        pygame.draw.rect(surface, color, pygame.Rect(p.x, p.y, p.width, p.height))

        # Cannon marker
        tip_x = p.x + p.width / 2
        pygame.draw.polygon(surface, color, [
            (tip_x, p.y),
            (tip_x + 3, p.y - 5),
            (tip_x - 3, p.y - 5),
        ])

    def _draw_invaders(self, surface: pygame.Surface) -> None:
        inset = INVADER_INSET_COLOR.as_rgb_tuple
        for invader in self.world.invaders:
            color = INVADER_COLORS[invader.type].as_rgb_tuple
            pygame.draw.rect(surface, color,
                             pygame.Rect(invader.x, invader.y, invader.width, invader.height))
            pygame.draw.rect(surface, inset, pygame.Rect(invader.x + 5, invader.y + 5, 10, 10))

    def _draw_bullets(self, surface: pygame.Surface) -> None:
        world = self.world
        for bullet in world.bullets + world.invader_bullets:
            pygame.draw.rect(surface, bullet.color.as_rgb_tuple,
                             pygame.Rect(bullet.x, bullet.y, bullet.width, bullet.height))

    def _draw_hud(self, surface: pygame.Surface) -> None:
        world = self.world
        font = self._get_font()
        color = TEXT_COLOR.as_rgb_tuple
        score = font.render(f"SCORE: {world.score}", True, color)
        lives = font.render(f"LIVES: {world.player.lives}", True, color)
        surface.blit(score, (10, 8))
        surface.blit(lives, (GAME_WIDTH - 80, 8))

    # =========================================================================
    # Overlay text
    # =========================================================================

    def _pause_message(self) -> Tuple[str, Sequence[str]]:
        return "PAUSED", [
            "Press 'P' to resume.",
            "Controls: Arrows/A/D to Move, Space to Fire",
        ]

    def _game_over_message(self) -> Tuple[str, Sequence[str]]:
        title, lines = super()._game_over_message()
        return title, [*lines, f"Press '{RESTART_KEY}' to play again!"]
