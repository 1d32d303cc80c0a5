"""
Single-screen flap-through-the-gaps arcade game: a deterministic simulation
core (GameSession) and a thin pygame shell around it.
"""

from .data_models import EffectKind, EpisodeState, GameConfig
from .game_session import GameSession

__all__ = ["EffectKind", "EpisodeState", "GameConfig", "GameSession"]
