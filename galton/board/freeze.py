"""
Freeze cascade: turn a falling ball that touched the pile into part of the pile.

The handler is only ever registered in (ball, frozen) order. It replaces the
ball with a new immobile FROZEN entity at the same centroid, then wires that
entity up as a freeze trigger for every ball still falling, so balls that
were spawned before it existed still stop on top of it.
"""

import logging
import math
from typing import Tuple

import pymunk

from galton.physics.entity import Entity
from galton.physics.objects import create_circle_entity
from galton.physics.simulation import PhysicsScene

from .constants import BALL_COLOR, BALL_RADIUS
from .tags import EntityTag, get_tag, is_falling_ball

logger = logging.getLogger(__name__)


def make_frozen(center: Tuple[float, float]) -> Entity:
    """A settled ball: ball-sized, immobile, zero velocity."""
    return create_circle_entity(BALL_RADIUS, math.inf, BALL_COLOR, EntityTag.FROZEN,
                                center=center)


def freeze(ball: Entity, target: Entity, axis: pymunk.Vec2d, aux: PhysicsScene) -> None:
    """Collision handler that freezes `ball` when it touches a frozen entity."""
    # Skip ball if it was already frozen
    if ball.is_removed:
        return
    scene = aux

    # Replace the ball with a frozen version
    center = ball.centroid
    scene.remove_entity(ball)
    frozen = scene.add_entity(make_frozen(center))

    # Make other falling balls freeze when they collide with this one
    rewired = 0
    for other in scene.entities:
        if other is not ball and is_falling_ball(other):
            scene.create_collision(other, frozen, freeze, aux=scene)
            rewired += 1

    logger.debug("Ball %d froze on %s %d at (%.3f, %.3f); %d falling balls rewired",
                 ball.entity_id, get_tag(target).value, target.entity_id,
                 center.x, center.y, rewired)
