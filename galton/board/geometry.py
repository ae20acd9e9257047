"""
Static board layout: peg lattice, funnel walls, floor and gravity source.

Gravity is not a uniform field. A single Earth-like mass M sits a distance
R = sqrt(G * M / g) below the board, so the inverse-square pull it exerts
at the floor is exactly g. Across the 80-unit board height the pull drifts
by roughly 2 * 80 / R (a few parts in a hundred thousand), which is why no
dedicated uniform-gravity force exists.
"""

import math
from typing import Iterator, List, Tuple

from galton.physics.entity import Entity
from galton.physics.objects import create_box_entity, create_circle_entity
from galton.physics.simulation import PhysicsScene

from .constants import (
    COL_SPACING,
    G,
    M,
    MAX_X,
    MAX_Y,
    N_ROWS,
    PEG_COLOR,
    PEG_RADIUS,
    ROW_SPACING,
    SURFACE_GRAVITY,
    WALL_ANGLE,
    WALL_COLOR,
    WALL_LENGTH,
    WALL_WIDTH,
)
from .tags import EntityTag

Point = Tuple[float, float]


def peg_center(row: int, col: int) -> Point:
    """Center of the peg in the given row (1-based) and column (0-based)."""
    return (MAX_X / 2 + (col - row * 0.5) * COL_SPACING,
            MAX_Y - (row + 1) * ROW_SPACING)


def peg_centers(n_rows: int = N_ROWS) -> Iterator[Tuple[int, int, Point]]:
    """Yield (row, col, center) for rows 1..n_rows; row i holds i + 1 pegs."""
    for row in range(1, n_rows + 1):
        for col in range(row + 1):
            yield row, col, peg_center(row, col)


def wall_placements() -> List[Tuple[Point, float, Point]]:
    """
    Placement of the two funnel walls.

    Returns:
        [(centroid, angle, pivot), ...] for the left and right wall. Each wall
        starts horizontal at the given centroid and is rotated by angle
        about pivot (the bottom corner it is anchored to).
    """
    return [
        ((WALL_LENGTH / 2, 0.0), WALL_ANGLE, (0.0, 0.0)),
        ((MAX_X - WALL_LENGTH / 2, 0.0), -WALL_ANGLE, (MAX_X, 0.0)),
    ]


def gravity_depth(g_const: float = G, mass: float = M, surface_gravity: float = SURFACE_GRAVITY) -> float:
    """Distance below the board at which a point mass pulls with exactly surface_gravity."""
    return math.sqrt(g_const * mass / surface_gravity)


def gravity_source_center() -> Point:
    return (MAX_X / 2, -gravity_depth())


def add_gravity_source(scene: PhysicsScene) -> Entity:
    """Create the Earth-like mass that accelerates the balls."""
    # Off-screen, so the shape is irrelevant
    source = create_box_entity(1, 1, M, WALL_COLOR, EntityTag.GRAVITY_SOURCE,
                               center=gravity_source_center(), immobile=True)
    return scene.add_entity(source)


def add_pegs(scene: PhysicsScene, n_rows: int = N_ROWS) -> List[Entity]:
    """Add the triangular peg lattice."""
    pegs = []
    for _, _, center in peg_centers(n_rows):
        peg = create_circle_entity(PEG_RADIUS, math.inf, PEG_COLOR, EntityTag.OBSTACLE,
                                   center=center)
        pegs.append(scene.add_entity(peg))
    return pegs


def add_walls(scene: PhysicsScene) -> List[Entity]:
    """Add the two funnel walls and the floor (floor last)."""
    walls = []
    for centroid, angle, pivot in wall_placements():
        wall = create_box_entity(WALL_LENGTH, WALL_WIDTH, math.inf, WALL_COLOR,
                                 EntityTag.OBSTACLE, center=centroid)
        wall.rotate_about(angle, pivot)
        walls.append(scene.add_entity(wall))

    walls.append(add_floor(scene))
    return walls


def add_floor(scene: PhysicsScene) -> Entity:
    """Full-width floor. Tagged FROZEN so landing on it freezes a ball like landing on the pile."""
    floor = create_box_entity(MAX_X, WALL_WIDTH, math.inf, WALL_COLOR, EntityTag.FROZEN,
                              center=(MAX_X / 2, WALL_WIDTH / 2))
    return scene.add_entity(floor)


def build_board(scene: PhysicsScene) -> None:
    """Populate an empty scene with the gravity source, pegs, walls and floor."""
    add_gravity_source(scene)
    add_pegs(scene)
    add_walls(scene)
