"""
Metrics over a board's settled pile.

All computations use numpy arrays.
"""

from typing import Optional, Tuple

import numpy as np

from galton.board.constants import G, M, MAX_X, MAX_Y
from galton.board.geometry import gravity_depth
from galton.board.tags import EntityTag, get_tag


def settled_positions(scene, floor=None) -> np.ndarray:
    """
    Centroids of every FROZEN entity except the floor.

    Args:
        scene: The physics scene
        floor: The floor entity to exclude (None = exclude nothing)

    Returns:
        Array of shape (num_settled, 2)
    """
    points = [
        (e.centroid.x, e.centroid.y) for e in scene.entities
        if get_tag(e) == EntityTag.FROZEN and e is not floor
    ]
    return np.array(points, dtype=np.float64).reshape(-1, 2)


def pile_histogram(scene, floor=None, bins: int = 16,
                   x_range: Tuple[float, float] = (0.0, MAX_X)) -> Tuple[np.ndarray, np.ndarray]:
    """
    Count settled balls per horizontal bin.

    Returns:
        (counts, edges) as returned by np.histogram
    """
    positions = settled_positions(scene, floor)
    return np.histogram(positions[:, 0], bins=bins, range=x_range)


def pile_height(scene, floor=None) -> float:
    """Highest settled-ball centroid, or 0.0 for an empty pile."""
    positions = settled_positions(scene, floor)
    if len(positions) == 0:
        return 0.0
    return float(positions[:, 1].max())


def pile_spread(scene, floor=None) -> Optional[float]:
    """Standard deviation of settled x positions (None with fewer than two balls)."""
    positions = settled_positions(scene, floor)
    if len(positions) < 2:
        return None
    return float(np.std(positions[:, 0]))


def gravity_acceleration(height: float, depth: Optional[float] = None,
                         g_const: float = G, mass: float = M) -> float:
    """Pull of the gravity source at a given height above the floor, in m/s^2."""
    if depth is None:
        depth = gravity_depth(g_const, mass)
    return g_const * mass / (depth + height) ** 2


def gravity_variation(top: float = MAX_Y, bottom: float = 0.0) -> float:
    """Relative difference between the pull at `bottom` and at `top`."""
    low = gravity_acceleration(bottom)
    high = gravity_acceleration(top)
    return abs(low - high) / low
