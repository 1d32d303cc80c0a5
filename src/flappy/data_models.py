"""
data_models.py: Data structures for the game state.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union

from .constants import (
    FIELD_WIDTH, FIELD_HEIGHT, ACTOR_X, ACTOR_WIDTH, ACTOR_HEIGHT,
    RESET_Y_FRACTION, GRAVITY, JUMP_IMPULSE, OBSTACLE_WIDTH, OBSTACLE_GAP,
    OBSTACLE_SPEED, SPAWN_INTERVAL_MS, SPAWN_OFFSET_X, GAP_MARGIN_TOP,
    GAP_MARGIN_BOTTOM, PRUNE_MARGIN, RESTART_DELAY_MS, STEP_MS
)


class EpisodeState(Enum):
    IDLE = "idle"
    PLAYING = "playing"
    GAME_OVER = "game_over"


class InputKind(Enum):
    ACTIVATE = "activate"
    START = "start"


class EffectKind(Enum):
    """Side effects the shell has to realize (audio, overlays, HUD)."""
    RESET = "reset"
    START_MUSIC = "start_music"
    STOP_MUSIC = "stop_music"
    PLAY_FLAP = "play_flap"
    PLAY_CRASH = "play_crash"
    SCORE_CHANGED = "score_changed"
    ENTER_GAME_OVER = "enter_game_over"
    HIDE_RESTART_PROMPT = "hide_restart_prompt"
    RESTART_ALLOWED = "restart_allowed"


@dataclass(frozen=True)
class Effect:
    kind: EffectKind
    score: Optional[int] = None     # Only set for SCORE_CHANGED


# -------- Actor motion: gravity is off until the first activation --------

@dataclass(frozen=True)
class Unarmed:
    """Gravity inactive; the actor hovers at its reset position."""


@dataclass(frozen=True)
class Armed:
    velocity: float


Motion = Union[Unarmed, Armed]
UNARMED = Unarmed()


@dataclass
class GameConfig:
    """Every number the simulation needs. The shell picks the field size."""
    field_width: float = FIELD_WIDTH
    field_height: float = FIELD_HEIGHT
    actor_x: float = ACTOR_X
    actor_width: float = ACTOR_WIDTH
    actor_height: float = ACTOR_HEIGHT
    reset_y_fraction: float = RESET_Y_FRACTION
    gravity: float = GRAVITY
    jump_impulse: float = JUMP_IMPULSE
    obstacle_width: float = OBSTACLE_WIDTH
    gap_height: float = OBSTACLE_GAP
    obstacle_speed: float = OBSTACLE_SPEED
    spawn_interval_ms: float = SPAWN_INTERVAL_MS
    spawn_offset_x: float = SPAWN_OFFSET_X
    margin_top: float = GAP_MARGIN_TOP
    margin_bottom: float = GAP_MARGIN_BOTTOM
    prune_margin: float = PRUNE_MARGIN
    restart_delay_ms: float = RESTART_DELAY_MS
    step_ms: float = STEP_MS

    @classmethod
    def from_field(cls, width: float, height: float, **overrides) -> "GameConfig":
        return cls(field_width=width, field_height=height, **overrides)

    @property
    def reset_y(self) -> float:
        return self.field_height * self.reset_y_fraction

    @property
    def spawn_x(self) -> float:
        return self.field_width + self.spawn_offset_x

    def steps_for(self, ms: float) -> int:
        """Whole simulation steps covering ms. Timers count steps, not float ms."""
        return max(1, round(ms / self.step_ms))


@dataclass
class Actor:
    """The controlled entity. Only y and motion change during an episode."""
    x: float
    y: float
    width: float
    height: float
    motion: Motion = UNARMED

    @property
    def armed(self) -> bool:
        return isinstance(self.motion, Armed)

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height


@dataclass
class Obstacle:
    """A pipe pair; the actor must fit between top and bottom."""
    x: float
    top: float
    bottom: float
    width: float
    passed: bool = False

    @property
    def right(self) -> float:
        return self.x + self.width


# -------- Read-only views handed to the shell --------

@dataclass(frozen=True)
class ActorPose:
    x: float
    y: float
    w: float
    h: float


@dataclass(frozen=True)
class ObstacleView:
    x: float
    top: float
    bottom: float
    width: float


@dataclass(frozen=True)
class RenderSnapshot:
    actor: ActorPose
    obstacles: List[ObstacleView] = field(default_factory=list)
    score: int = 0
    state: EpisodeState = EpisodeState.IDLE
    restart_allowed: bool = False

    def to_client_state(self):
        """Prepares a minimal state dictionary for logging or serialization."""
        return {
            "y": round(self.actor.y, 2),
            "state": self.state.value,
            "score": self.score,
            "restart_allowed": self.restart_allowed,
            "obstacles": [
                {"x": round(o.x, 2), "top": round(o.top, 2), "bottom": round(o.bottom, 2)}
                for o in self.obstacles
            ],
        }
