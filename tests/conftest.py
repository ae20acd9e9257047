"""Shared fixtures for board tests."""

import pytest

from galton.board.geometry import add_floor, add_gravity_source, build_board
from galton.physics.simulation import PhysicsScene


@pytest.fixture
def scene():
    """Empty scene."""
    s = PhysicsScene()
    yield s
    s.free()


@pytest.fixture
def drop_scene(scene):
    """Gravity source plus floor, nothing else: (scene, floor)."""
    add_gravity_source(scene)
    floor = add_floor(scene)
    return scene, floor


@pytest.fixture
def board_scene(scene):
    """Full board: gravity source, pegs, walls, floor."""
    build_board(scene)
    return scene
