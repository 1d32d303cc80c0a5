import random

import pytest

from flappy.data_models import EpisodeState, GameConfig
from flappy.game_session import GameSession


class FixedGapRandom(random.Random):
    """Always places the gap top at the same y."""

    def __init__(self, top: float):
        super().__init__(0)
        self.top = top

    def uniform(self, a, b):
        return self.top


def run_ms(session: GameSession, total_ms: float, tick_ms: float = 10.0):
    """Feeds total_ms to the session in frame-sized ticks."""
    elapsed = 0.0
    while elapsed < total_ms:
        dt = min(tick_ms, total_ms - elapsed)
        session.on_tick(dt)
        elapsed += dt


def crash(session: GameSession):
    """Starts an episode, flaps once and lets the actor fall out of the field."""
    session.on_start()
    session.on_activate()
    for _ in range(1000):
        session.on_tick(16.0)
        if session.get_episode_state() is EpisodeState.GAME_OVER:
            return
    raise AssertionError("actor never crashed")


@pytest.fixture
def config() -> GameConfig:
    return GameConfig()


@pytest.fixture
def session(config) -> GameSession:
    return GameSession(config, rng=random.Random(1234))
