"""
Entity wrapper around a Pymunk body/shape pair.

An entity carries the attributes the board needs on top of Pymunk:
- mass (math.inf for immovable entities)
- color (presentation only)
- an opaque info payload (the board stores its tag here)
- a removed flag that outlives the Pymunk objects
"""

import math
from typing import Any, Optional, Tuple

import pymunk


Color = Tuple[float, float, float]


class Entity:
    """A simulated object: one Pymunk body with exactly one shape."""

    def __init__(
        self,
        body: pymunk.Body,
        shape: pymunk.Shape,
        mass: float,
        color: Color,
        info: Any = None,
    ):
        """
        Wrap an already-built body and shape.

        Args:
            body: The Pymunk body (DYNAMIC or STATIC)
            shape: The shape attached to the body
            mass: Mass used by force creators; math.inf for immovable entities
            color: RGB triple in [0, 1]
            info: Opaque payload attached by the caller
        """
        self.body = body
        self.shape = shape
        self.mass = mass
        self.color = color
        self.info = info
        self.entity_id: Optional[int] = None  # Assigned by the scene
        self._removed = False

    def __repr__(self) -> str:
        pos = self.body.position
        return (f"Entity(id={self.entity_id}, info={self.info!r}, "
                f"pos=({pos.x:.3f}, {pos.y:.3f}), removed={self._removed})")

    @property
    def is_immobile(self) -> bool:
        return self.body.body_type == pymunk.Body.STATIC

    @property
    def is_removed(self) -> bool:
        return self._removed

    def remove(self) -> None:
        """Mark the entity removed. The scene delists it after the current advance."""
        self._removed = True

    @property
    def centroid(self) -> pymunk.Vec2d:
        return self.body.position

    @centroid.setter
    def centroid(self, value) -> None:
        self.body.position = value
        # Static bodies are not re-indexed automatically once in a space
        if self.is_immobile and self.body.space is not None:
            self.body.space.reindex_shapes_for_body(self.body)

    @property
    def velocity(self) -> pymunk.Vec2d:
        return self.body.velocity

    @velocity.setter
    def velocity(self, value) -> None:
        self.body.velocity = value

    @property
    def angle(self) -> float:
        return self.body.angle

    def rotate_about(self, angle: float, pivot: Tuple[float, float]) -> None:
        """
        Rotate the entity rigidly by `angle` radians about a world-space pivot.

        Both the centroid and the orientation change, so a box anchored at the
        pivot stays anchored there.
        """
        pivot = pymunk.Vec2d(*pivot)
        offset = self.centroid - pivot
        self.body.angle = self.body.angle + angle
        self.centroid = pivot + offset.rotated(angle)

    def accelerate(self, force: pymunk.Vec2d) -> None:
        """Apply a force at the center of gravity for the next physics step."""
        if self.is_immobile or self._removed:
            return
        self.body.apply_force_at_world_point(force, self.body.position)


def is_infinite_mass(mass: float) -> bool:
    return math.isinf(mass)
