"""
Factory functions for creating entities with validated properties.

Material property constraints:
- mass: positive float, or math.inf for immovable entities
- radius / box size: positive
- friction is always zero; restitution is chosen per pair at registration time
"""

import math
from typing import Any, Optional, Tuple

import pymunk

from .entity import Color, Entity, is_infinite_mass


def validate_mass(mass: float) -> None:
    """
    Validate an entity mass.

    Args:
        mass: Mass of the entity (positive, or math.inf)

    Raises:
        ValueError: If the mass is not positive or is NaN
    """
    if math.isnan(mass) or mass <= 0:
        raise ValueError(f"Mass must be positive, got {mass}")


def validate_elasticity(elasticity: float) -> None:
    """Restitution must stay in [0, 1] so collisions never add energy."""
    if elasticity < 0 or elasticity > 1.0:
        raise ValueError(f"Elasticity must be in [0, 1.0], got {elasticity}")


def _make_body(mass: float, moment: float, immobile: Optional[bool]) -> pymunk.Body:
    if immobile is None:
        immobile = is_infinite_mass(mass)
    if immobile:
        return pymunk.Body(body_type=pymunk.Body.STATIC)
    if is_infinite_mass(mass):
        raise ValueError("An entity with infinite mass must be immobile")
    return pymunk.Body(mass, moment)


def create_circle_entity(
    radius: float,
    mass: float,
    color: Color,
    info: Any = None,
    center: Tuple[float, float] = (0.0, 0.0),
    immobile: Optional[bool] = None,
) -> Entity:
    """
    Create a circular entity.

    Args:
        radius: Circle radius
        mass: Mass of the entity (math.inf makes it immobile)
        color: RGB triple in [0, 1]
        info: Opaque payload attached to the entity
        center: Initial centroid as (x, y)
        immobile: Force a static body even with finite mass (None = infer from mass)

    Returns:
        The new Entity (not yet added to a scene)
    """
    validate_mass(mass)
    if radius <= 0:
        raise ValueError(f"Radius must be positive, got {radius}")

    moment = pymunk.moment_for_circle(mass, 0, radius) if not is_infinite_mass(mass) else math.inf
    body = _make_body(mass, moment, immobile)
    body.position = center

    shape = pymunk.Circle(body, radius)
    shape.friction = 0.0
    shape.elasticity = 1.0

    return Entity(body, shape, mass, color, info)


def create_box_entity(
    width: float,
    height: float,
    mass: float,
    color: Color,
    info: Any = None,
    center: Tuple[float, float] = (0.0, 0.0),
    immobile: Optional[bool] = None,
) -> Entity:
    """
    Create a rectangular entity centered on its body.

    Args:
        width: Width of the rectangle
        height: Height of the rectangle
        mass: Mass of the entity (math.inf makes it immobile)
        color: RGB triple in [0, 1]
        info: Opaque payload attached to the entity
        center: Initial centroid as (x, y)
        immobile: Force a static body even with finite mass (None = infer from mass)

    Returns:
        The new Entity (not yet added to a scene)
    """
    validate_mass(mass)
    if width <= 0 or height <= 0:
        raise ValueError(f"Box size must be positive, got {width}x{height}")

    moment = pymunk.moment_for_box(mass, (width, height)) if not is_infinite_mass(mass) else math.inf
    body = _make_body(mass, moment, immobile)
    body.position = center

    shape = pymunk.Poly.create_box(body, (width, height))
    shape.friction = 0.0
    shape.elasticity = 1.0

    return Entity(body, shape, mass, color, info)
