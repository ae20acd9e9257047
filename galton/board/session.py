"""
Session lifecycle: initialize the board, advance one frame at a time, tear down.

The host decides how often tick() is called; the session never stops on
its own. Each tick runs to completion:

    dt      <- clock
    spawn   (maybe one ball, wired eagerly)
    advance (forces, collisions, freezes)
    draw    (optional renderer)
"""

import logging
import random
import time
from typing import Optional

from tqdm import tqdm

from galton.physics.simulation import PhysicsScene

from .constants import DROP_INTERVAL, MAX_X, MAX_Y
from .geometry import build_board
from .spawner import SpawnScheduler
from .tags import EntityTag, get_tag

logger = logging.getLogger(__name__)


class WallClock:
    """Seconds of wall-clock time since the previous call."""

    def __init__(self):
        self._last = time.perf_counter()

    def time_since_last_tick(self) -> float:
        now = time.perf_counter()
        dt = now - self._last
        self._last = now
        return dt


class FixedClock:
    """Constant step, for reproducible runs."""

    def __init__(self, dt: float = 1 / 60.0):
        if dt <= 0:
            raise ValueError(f"Clock step must be positive, got {dt}")
        self.dt = dt

    def time_since_last_tick(self) -> float:
        return self.dt


class BoardSession:
    """
    One running Galton board.

    Args:
        clock: Object with time_since_last_tick() (default: WallClock)
        renderer: Object with init(lower, upper) and draw(scene), or None
        seed: Seed for the drop-position jitter (None = nondeterministic)
        drop_interval: Seconds between spawned balls
    """

    def __init__(self, clock=None, renderer=None, seed: Optional[int] = None,
                 drop_interval: float = DROP_INTERVAL):
        self.clock = clock if clock is not None else WallClock()
        self.renderer = renderer
        self.seed = seed
        self.scene = PhysicsScene()
        build_board(self.scene)
        # The floor is the only FROZEN entity the board starts with
        self.floor = next(e for e in self.scene.entities if get_tag(e) == EntityTag.FROZEN)
        self.spawner = SpawnScheduler(drop_interval, rng=random.Random(seed))
        if self.renderer is not None:
            self.renderer.init((0.0, 0.0), (MAX_X, MAX_Y))
        self._closed = False
        logger.info("Board initialized with %d entities (seed=%s)",
                    self.scene.entity_count, seed)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    @property
    def closed(self) -> bool:
        return self._closed

    def tick(self) -> float:
        """Advance one frame. Returns the elapsed time used for the frame."""
        if self._closed:
            raise RuntimeError("Session is closed")
        dt = self.clock.time_since_last_tick()
        self.spawner.update(self.scene, dt)
        self.scene.advance(dt)
        if self.renderer is not None:
            self.renderer.draw(self.scene)
        return dt

    def run(self, num_frames: int, progress: bool = False) -> None:
        """Call tick() num_frames times."""
        frames = range(num_frames)
        if progress:
            frames = tqdm(frames, desc="Simulating", unit="frame")
        for _ in frames:
            self.tick()

    def settled_balls(self):
        """Frozen entities that used to be balls (the floor excluded)."""
        return [e for e in self.scene.entities
                if get_tag(e) == EntityTag.FROZEN and e is not self.floor]

    def falling_balls(self):
        return [e for e in self.scene.entities if get_tag(e) == EntityTag.BALL]

    def close(self) -> None:
        """Release every entity. The session cannot be ticked afterwards."""
        if self._closed:
            return
        logger.info("Closing board after %d frames, %d balls spawned",
                    self.scene.frame, self.spawner.spawned)
        self.scene.free()
        self._closed = True
