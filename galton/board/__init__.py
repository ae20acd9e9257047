"""
Galton board orchestration.

Entity tags, board geometry, the interaction policy, the freeze cascade,
ball spawning and the per-frame session loop.
"""

from .tags import EntityTag, get_tag
from .geometry import (
    add_floor,
    add_gravity_source,
    add_pegs,
    add_walls,
    build_board,
    gravity_depth,
    peg_center,
    peg_centers,
)
from .freeze import freeze, make_frozen
from .interactions import add_ball, make_ball, register_interactions
from .spawner import SpawnScheduler
from .session import BoardSession, FixedClock, WallClock

__all__ = [
    'EntityTag',
    'get_tag',
    'add_floor',
    'add_gravity_source',
    'add_pegs',
    'add_walls',
    'build_board',
    'gravity_depth',
    'peg_center',
    'peg_centers',
    'freeze',
    'make_frozen',
    'add_ball',
    'make_ball',
    'register_interactions',
    'SpawnScheduler',
    'BoardSession',
    'FixedClock',
    'WallClock',
]
