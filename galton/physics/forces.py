"""Interaction records registered on a scene, and the Newtonian attraction force."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

import pymunk

from .entity import Entity

# (entity_a, entity_b, axis, aux) -> None
CollisionHandler = Callable[[Entity, Entity, pymunk.Vec2d, Any], None]

# Below this separation the attraction is skipped instead of blowing up
MIN_ATTRACTION_DISTANCE = 1e-3


class InteractionKind(Enum):
    PHYSICS_COLLISION = "physics_collision"
    COLLISION = "collision"
    NEWTONIAN_GRAVITY = "newtonian_gravity"


@dataclass(eq=False)
class Interaction:
    """
    One registered pairwise interaction.

    Attributes:
        kind: Which of the three interaction types this is
        entity_a: First member, in registration order
        entity_b: Second member, in registration order
        elasticity: Restitution for PHYSICS_COLLISION
        constant: Coupling constant for NEWTONIAN_GRAVITY
        handler: Callback for COLLISION
        aux: Auxiliary context passed to the handler
    """

    kind: InteractionKind
    entity_a: Entity
    entity_b: Entity
    elasticity: float = 0.0
    constant: float = 0.0
    handler: Optional[CollisionHandler] = None
    aux: Any = None

    @property
    def is_active(self) -> bool:
        return not (self.entity_a.is_removed or self.entity_b.is_removed)

    @property
    def is_collision(self) -> bool:
        return self.kind in (InteractionKind.PHYSICS_COLLISION, InteractionKind.COLLISION)

    def pairs(self, a: Entity, b: Entity) -> bool:
        """True when this interaction's members are exactly a and b, in either order."""
        return ((self.entity_a is a and self.entity_b is b)
                or (self.entity_a is b and self.entity_b is a))


def newtonian_force(constant: float, source: Entity, target: Entity) -> pymunk.Vec2d:
    """
    Force exerted on `target` by `source` under an inverse-square law.

    F = G * m_source * m_target / r^2, directed from target toward source.
    Returns a zero vector when the centroids (nearly) coincide.
    """
    offset = source.centroid - target.centroid
    distance = offset.length
    if distance < MIN_ATTRACTION_DISTANCE:
        return pymunk.Vec2d(0, 0)
    magnitude = constant * source.mass * target.mass / distance ** 2
    return offset / distance * magnitude


def apply_newtonian_gravity(interaction: Interaction) -> None:
    """Apply equal and opposite attraction to both members of the pair."""
    a, b = interaction.entity_a, interaction.entity_b
    force = newtonian_force(interaction.constant, a, b)
    b.accelerate(force)
    a.accelerate(-force)
