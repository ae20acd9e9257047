"""
Interaction policy: what a newly created ball does with everything already in the scene.

Each pair is wired exactly once, when the ball is created:

    existing tag     registered interaction
    BALL             elastic collision, BALL_ELASTICITY
    OBSTACLE         elastic collision, PEG_ELASTICITY
    FROZEN           freeze trigger (no bounce)
    GRAVITY_SOURCE   Newtonian attraction with constant G

There is no periodic re-scan. The only later registrations are the ones the
freeze cascade adds for newly settled balls.
"""

import logging
from typing import Iterable, Tuple

from galton.physics.entity import Entity
from galton.physics.objects import create_circle_entity
from galton.physics.simulation import PhysicsScene

from .constants import BALL_COLOR, BALL_ELASTICITY, BALL_MASS, BALL_RADIUS, G, PEG_ELASTICITY
from .freeze import freeze
from .tags import EntityTag, get_tag

logger = logging.getLogger(__name__)


def make_ball(center: Tuple[float, float], velocity: Tuple[float, float]) -> Entity:
    """Create a ball with the given starting position and velocity."""
    ball = create_circle_entity(BALL_RADIUS, BALL_MASS, BALL_COLOR, EntityTag.BALL,
                                center=center)
    ball.velocity = velocity
    return ball


def register_interactions(scene: PhysicsScene, ball: Entity, existing: Iterable[Entity]) -> int:
    """
    Register one interaction between `ball` and every live entity in `existing`.

    Args:
        scene: Scene both the ball and the existing entities belong to
        ball: The newly created ball
        existing: Entities that were in the scene before the ball

    Returns:
        Number of interactions registered

    Raises:
        ValueError: If an entity carries a tag outside the taxonomy
    """
    count = 0
    for body in existing:
        if body is ball or body.is_removed:
            continue
        tag = get_tag(body)
        if tag == EntityTag.BALL:
            # Bounce off other balls
            scene.create_physics_collision(BALL_ELASTICITY, ball, body)
        elif tag == EntityTag.OBSTACLE:
            # Bounce off walls and pegs
            scene.create_physics_collision(PEG_ELASTICITY, ball, body)
        elif tag == EntityTag.FROZEN:
            # Freeze when hitting the ground or frozen balls
            scene.create_collision(ball, body, freeze, aux=scene)
        elif tag == EntityTag.GRAVITY_SOURCE:
            # Simulate earth's gravity acting on the ball
            scene.create_newtonian_gravity(G, body, ball)
        else:
            raise ValueError(f"Unknown entity tag: {tag}")
        count += 1
    return count


def add_ball(scene: PhysicsScene, center: Tuple[float, float],
             velocity: Tuple[float, float]) -> Entity:
    """Add a ball to the scene and wire it against every entity already there."""
    existing = scene.entities
    ball = scene.add_entity(make_ball(center, velocity))
    count = register_interactions(scene, ball, existing)
    logger.debug("Spawned ball %d at (%.3f, %.3f) with %d interactions",
                 ball.entity_id, center[0], center[1], count)
    return ball
