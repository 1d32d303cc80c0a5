"""
game_session.py: The per-game state machine driving obstacles, physics and score.
"""

import logging
import random
from collections import deque
from typing import Deque, List, Optional

from .data_models import (
    Actor, ActorPose, Effect, EffectKind, EpisodeState, GameConfig, InputKind,
    ObstacleView, RenderSnapshot
)
from .obstacle_field import ObstacleField
from .physics_core import PhysicsCore, check_collision

logger = logging.getLogger(__name__)

# Float slack when splitting elapsed time into fixed steps
STEP_EPSILON_MS = 1e-6


class GameSession:
    """
    Owns all state for one running game: the actor, the obstacle field, the
    score and the episode state (Idle -> Playing -> GameOver -> Idle).

    The host calls on_activate()/on_start() whenever input arrives and
    on_tick(elapsed_ms) once per frame. Inputs are queued and applied at the
    start of the next tick; elapsed time is consumed in fixed steps of
    config.step_ms so the simulation is independent of the host frame rate.
    """

    def __init__(self, config: Optional[GameConfig] = None, rng: Optional[random.Random] = None):
        self.config = config or GameConfig()
        self.physics = PhysicsCore(gravity=self.config.gravity,
                                   jump_impulse=self.config.jump_impulse)
        self.field = ObstacleField(spawn_x=self.config.spawn_x,
                                   obstacle_width=self.config.obstacle_width,
                                   rng=rng or random.Random())
        self.actor = Actor(x=self.config.actor_x, y=self.config.reset_y,
                           width=self.config.actor_width, height=self.config.actor_height)

        self.state = EpisodeState.IDLE
        self.score = 0
        self.restart_allowed = False
        self.step_count = 0

        # Time Management
        self._accumulator_ms = 0.0
        self._spawn_steps = 0
        self._restart_steps_left: Optional[int] = None

        self._pending_inputs: Deque[InputKind] = deque()
        self._effects: List[Effect] = []

        self.reset()

    # ----------------- Input -----------------

    def on_activate(self):
        self._pending_inputs.append(InputKind.ACTIVATE)

    def on_start(self):
        self._pending_inputs.append(InputKind.START)

    def on_tick(self, elapsed_ms: float):
        """Applies queued input, then runs as many fixed steps as elapsed_ms covers."""
        if elapsed_ms < 0:
            raise ValueError(f"elapsed_ms must be non-negative, got {elapsed_ms}")

        while self._pending_inputs:
            self._apply_input(self._pending_inputs.popleft())

        self._accumulator_ms += elapsed_ms
        while self._accumulator_ms >= self.config.step_ms - STEP_EPSILON_MS:
            self._accumulator_ms -= self.config.step_ms
            self._step()

    def _apply_input(self, kind: InputKind):
        if kind is InputKind.START:
            if self.state is EpisodeState.IDLE:
                self._begin_episode()
            return

        # InputKind.ACTIVATE
        if self.state is EpisodeState.PLAYING:
            self.physics.activate(self.actor)
            self._emit(EffectKind.PLAY_FLAP)
        elif self.state is EpisodeState.GAME_OVER and self.restart_allowed:
            self.reset()
        # Idle, or GameOver still inside the restart delay: ignored.

    # ----------------- Transitions -----------------

    def reset(self):
        """Returns to Idle with a fresh actor, no obstacles and a zero score."""
        self.state = EpisodeState.IDLE
        self.restart_allowed = False
        self._restart_steps_left = None
        self._reset_episode_data()
        self._emit(EffectKind.RESET)
        self._emit(EffectKind.SCORE_CHANGED, score=0)
        logger.info("Session reset to idle")

    def _begin_episode(self):
        self._reset_episode_data()
        self.state = EpisodeState.PLAYING
        self._emit(EffectKind.START_MUSIC)
        logger.info("Episode started")

    def _reset_episode_data(self):
        self.physics.reset(self.actor, self.config.reset_y)
        self.field.clear()
        self.score = 0
        self._spawn_steps = 0

    def _enter_game_over(self):
        self.state = EpisodeState.GAME_OVER
        self.restart_allowed = False
        self._restart_steps_left = self.config.steps_for(self.config.restart_delay_ms)
        self._emit(EffectKind.STOP_MUSIC)
        self._emit(EffectKind.PLAY_CRASH)
        self._emit(EffectKind.ENTER_GAME_OVER)
        self._emit(EffectKind.HIDE_RESTART_PROMPT)
        logger.info("Game over at step %d. Final score: %d", self.step_count, self.score)
        logger.debug("Final state: %s", self.snapshot().to_client_state())

    # ----------------- Simulation -----------------

    def _step(self):
        self.step_count += 1
        if self.state is EpisodeState.PLAYING:
            self._step_playing()
        elif self.state is EpisodeState.GAME_OVER:
            self._step_restart_countdown()

    def _step_playing(self):
        cfg = self.config

        # 1. Spawn, move and prune obstacles
        # Strictly more than one interval since the last spawn
        interval_steps = cfg.steps_for(cfg.spawn_interval_ms)
        self._spawn_steps += 1
        if self._spawn_steps > interval_steps:
            self._spawn_steps -= interval_steps
            self.field.spawn(cfg.field_height, cfg.gap_height, cfg.margin_top, cfg.margin_bottom)

        self.field.advance(cfg.obstacle_speed)
        self.field.prune(-cfg.prune_margin)

        # 2. Score
        passed = self.field.mark_passed(self.actor.x)
        if passed:
            self.score += len(passed)
            self._emit(EffectKind.SCORE_CHANGED, score=self.score)

        # 3. Actor
        self.physics.integrate(self.actor)

        # 4. Collision
        if check_collision(self.actor, self.field.obstacles, cfg.field_height):
            self._enter_game_over()

    def _step_restart_countdown(self):
        if self._restart_steps_left is None:
            return
        self._restart_steps_left -= 1
        if self._restart_steps_left <= 0:
            self._restart_steps_left = None
            self.restart_allowed = True
            self._emit(EffectKind.RESTART_ALLOWED)
            logger.info("Restart allowed")

    # ----------------- Output -----------------

    def _emit(self, kind: EffectKind, score: Optional[int] = None):
        self._effects.append(Effect(kind=kind, score=score))

    def drain_effects(self) -> List[Effect]:
        """Returns and clears the side effects produced since the last call."""
        effects, self._effects = self._effects, []
        return effects

    def get_actor_pose(self) -> ActorPose:
        a = self.actor
        return ActorPose(x=a.x, y=a.y, w=a.width, h=a.height)

    def get_obstacles(self) -> List[ObstacleView]:
        return [ObstacleView(x=o.x, top=o.top, bottom=o.bottom, width=o.width)
                for o in self.field.obstacles]

    def get_score(self) -> int:
        return self.score

    def get_episode_state(self) -> EpisodeState:
        return self.state

    def is_restart_allowed(self) -> bool:
        return self.restart_allowed

    def snapshot(self) -> RenderSnapshot:
        return RenderSnapshot(
            actor=self.get_actor_pose(),
            obstacles=self.get_obstacles(),
            score=self.score,
            state=self.state,
            restart_allowed=self.restart_allowed,
        )
