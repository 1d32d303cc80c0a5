"""
physics_core.py: The shared, deterministic actor kinematics and collision logic.
"""

from typing import Iterable

from .constants import GRAVITY, JUMP_IMPULSE
from .data_models import Actor, Armed, Obstacle, UNARMED


class PhysicsCore:
    """
    Flap dynamics for the actor: constant downward acceleration once armed,
    and an instantaneous upward velocity on each activation.
    """

    def __init__(self, gravity: float = GRAVITY, jump_impulse: float = JUMP_IMPULSE):
        self.gravity = gravity
        self.jump_impulse = jump_impulse

    def activate(self, actor: Actor):
        """Arms gravity if needed and applies the jump impulse in the same call."""
        actor.motion = Armed(velocity=self.jump_impulse)

    def integrate(self, actor: Actor):
        """Advances the actor one step. Unarmed actors do not move."""
        if not isinstance(actor.motion, Armed):
            return
        velocity = actor.motion.velocity + self.gravity
        actor.motion = Armed(velocity=velocity)
        actor.y += velocity

    def reset(self, actor: Actor, initial_y: float):
        actor.y = initial_y
        actor.motion = UNARMED


def check_collision(actor: Actor, obstacles: Iterable[Obstacle], field_height: float) -> bool:
    """
    Axis-aligned box test against the field bounds and every obstacle.
    Touching an edge exactly is not a collision.
    """
    # 1. Floor/Ceiling
    if actor.y < 0 or actor.bottom > field_height:
        return True

    # 2. Obstacles
    for obstacle in obstacles:
        overlaps_x = actor.x < obstacle.right and actor.right > obstacle.x
        if overlaps_x and (actor.y < obstacle.top or actor.bottom > obstacle.bottom):
            return True

    return False
