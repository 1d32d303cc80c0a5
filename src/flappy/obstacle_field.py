"""
obstacle_field.py: Spawning, scrolling, pruning and pass-tracking of obstacles.
"""

import logging
import random
from dataclasses import dataclass, field
from typing import List

from .data_models import Obstacle

logger = logging.getLogger(__name__)


@dataclass
class ObstacleField:
    """
    Owns every obstacle in play. Obstacles enter at spawn_x and only ever
    move left at a uniform speed, so list order is spawn order.
    """
    spawn_x: float
    obstacle_width: float
    rng: random.Random = field(default_factory=random.Random)
    obstacles: List[Obstacle] = field(default_factory=list)
    _warned_degenerate: bool = field(default=False, init=False, repr=False)

    def spawn(self, field_height: float, gap_height: float,
              margin_top: float, margin_bottom: float) -> Obstacle:
        """Adds one obstacle at the right edge with a randomized gap."""
        lowest_top = field_height - gap_height - margin_bottom
        if lowest_top > margin_top:
            top = self.rng.uniform(margin_top, lowest_top)
        else:
            # No room for the margins: centre the gap instead.
            if not self._warned_degenerate:
                logger.warning(
                    "Gap %.1f does not fit field height %.1f with margins %.1f/%.1f; centring it",
                    gap_height, field_height, margin_top, margin_bottom)
                self._warned_degenerate = True
            top = (field_height - gap_height) / 2

        obstacle = Obstacle(x=self.spawn_x, top=top, bottom=top + gap_height,
                            width=self.obstacle_width)
        self.obstacles.append(obstacle)
        logger.debug("Spawned obstacle gap %.1f-%.1f", obstacle.top, obstacle.bottom)
        return obstacle

    def advance(self, speed: float):
        for obstacle in self.obstacles:
            obstacle.x -= speed

    def prune(self, left_bound: float) -> int:
        """Drops obstacles whose right edge is left of left_bound. Returns how many."""
        before = len(self.obstacles)
        self.obstacles[:] = [o for o in self.obstacles if not o.right < left_bound]
        removed = before - len(self.obstacles)
        if removed:
            logger.debug("Pruned %d obstacle(s)", removed)
        return removed

    def mark_passed(self, actor_x: float) -> List[Obstacle]:
        """
        Flags obstacles whose right edge is now left of actor_x.
        Each obstacle is reported exactly once in its lifetime.
        """
        newly_passed = []
        for obstacle in self.obstacles:
            if not obstacle.passed and obstacle.right < actor_x:
                obstacle.passed = True
                newly_passed.append(obstacle)
        return newly_passed

    def clear(self):
        self.obstacles.clear()

    def __len__(self):
        return len(self.obstacles)
