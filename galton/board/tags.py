"""Entity taxonomy: the closed set of tags that drives every interaction decision."""

from enum import Enum

from galton.physics.entity import Entity


class EntityTag(Enum):
    BALL = "ball"  # Falling; the only tag that is ever replaced
    FROZEN = "frozen"  # Settled ball or the floor; freezes balls on contact
    OBSTACLE = "obstacle"  # Peg or funnel wall; elastic reflector
    GRAVITY_SOURCE = "gravity_source"  # Pulls every ball downward


def get_tag(entity: Entity) -> EntityTag:
    """Return the tag stored as the entity's info payload."""
    tag = entity.info
    if not isinstance(tag, EntityTag):
        raise TypeError(f"Entity {entity.entity_id} carries no EntityTag (info={tag!r})")
    return tag


def is_falling_ball(entity: Entity) -> bool:
    return not entity.is_removed and get_tag(entity) == EntityTag.BALL
