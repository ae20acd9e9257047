"""Periodic ball spawning."""

import math
import random
from typing import Optional

from galton.physics.entity import Entity
from galton.physics.simulation import PhysicsScene

from .constants import DELTA_X, DROP_INTERVAL, DROP_Y, MAX_X, START_VELOCITY
from .interactions import add_ball


class SpawnScheduler:
    """
    Drops one ball every `interval` seconds of simulated time.

    The counter starts at infinity so the first update always spawns.
    """

    def __init__(self, interval: float = DROP_INTERVAL, rng: Optional[random.Random] = None):
        if interval <= 0:
            raise ValueError(f"Drop interval must be positive, got {interval}")
        self.interval = interval
        self.rng = rng if rng is not None else random.Random()
        self.time_since_drop = math.inf
        self.spawned = 0

    def drop_position(self):
        """Board center with a small horizontal jitter, just below the top."""
        return (MAX_X / 2 + (self.rng.random() - 0.5) * DELTA_X, DROP_Y)

    def update(self, scene: PhysicsScene, dt: float) -> Optional[Entity]:
        """
        Advance the drop timer by dt and spawn a ball when the interval is exceeded.

        Returns:
            The new ball, or None if nothing was spawned this tick
        """
        self.time_since_drop += dt
        if self.time_since_drop <= self.interval:
            return None
        ball = add_ball(scene, self.drop_position(), START_VELOCITY)
        self.time_since_drop = 0.0
        self.spawned += 1
        return ball
