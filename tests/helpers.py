"""Helpers shared by the test modules."""

from galton.board.tags import get_tag


def run_for(scene, seconds, dt=1 / 60.0):
    """Advance a scene in fixed frames for the given simulated time."""
    for _ in range(int(round(seconds / dt))):
        scene.advance(dt)


def with_tag(scene, tag):
    return [e for e in scene.entities if get_tag(e) == tag]
