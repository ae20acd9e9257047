"""
2D rigid body scene using Pymunk.

The scene owns its entities and every pairwise interaction registered
between them. Pymunk does the integration, overlap tests and impulse
resolution; the scene decides which pairs collide at all and how.

Critical for determinism:
- Substeps of equal length, never longer than MAX_STEP
- NO threaded mode (space.threaded = False by default)
- Entities tracked in creation order
"""

import logging
import math
from collections import defaultdict
from typing import Any, Dict, List, Tuple

import pymunk

from .entity import Entity
from .objects import validate_elasticity
from .forces import (
    CollisionHandler,
    Interaction,
    InteractionKind,
    apply_newtonian_gravity,
)

logger = logging.getLogger(__name__)

PairKey = Tuple[int, int]


def _pair_key(a: Entity, b: Entity) -> PairKey:
    return (a.entity_id, b.entity_id) if a.entity_id <= b.entity_id else (b.entity_id, a.entity_id)


class PhysicsScene:
    """
    A collection of entities plus the interactions registered between them.

    Pairs of entities without a collision registration never collide, and
    the space has no built-in gravity: every force comes from a registered
    interaction.
    """

    MAX_STEP = 1 / 120.0  # Longest physics substep, in seconds

    def __init__(self):
        self.space = pymunk.Space()
        self.space.gravity = (0, 0)
        # DO NOT use space.threaded = True - breaks determinism
        self.space.on_collision(
            begin=self._on_begin,
            pre_solve=self._on_pre_solve,
        )
        self.frame = 0
        self.time = 0.0
        self._next_id = 0
        self._entities: List[Entity] = []  # Creation order
        self._by_shape: Dict[pymunk.Shape, Entity] = {}
        self._collisions: Dict[PairKey, List[Interaction]] = defaultdict(list)
        self._forces: List[Interaction] = []

    # ------------------------------------------------------------------
    # Entities
    # ------------------------------------------------------------------

    def add_entity(self, entity: Entity) -> Entity:
        """
        Add an entity to the scene.

        Pymunk defers the insertion when called from inside a step; the
        entity is listed (and can be registered against) immediately.
        """
        if entity.entity_id is not None:
            raise ValueError(f"Entity {entity.entity_id} already belongs to a scene")
        entity.entity_id = self._next_id
        self._next_id += 1
        self.space.add(entity.body, entity.shape)
        self._entities.append(entity)
        self._by_shape[entity.shape] = entity
        return entity

    def remove_entity(self, entity: Entity) -> None:
        """Mark an entity removed and take it out of the Pymunk space."""
        if entity.is_removed:
            return
        entity.remove()
        self.space.remove(entity.body, entity.shape)

    @property
    def entities(self) -> List[Entity]:
        """Live entities in creation order."""
        return [e for e in self._entities if not e.is_removed]

    @property
    def entity_count(self) -> int:
        """Number of listed entities, including ones removed during the current advance."""
        return len(self._entities)

    def get_entity(self, index: int) -> Entity:
        return self._entities[index]

    # ------------------------------------------------------------------
    # Interaction registration
    # ------------------------------------------------------------------

    def create_physics_collision(self, elasticity: float, a: Entity, b: Entity) -> Interaction:
        """Resolve collisions between a and b with the given restitution."""
        validate_elasticity(elasticity)
        interaction = Interaction(InteractionKind.PHYSICS_COLLISION, a, b, elasticity=elasticity)
        self._collisions[_pair_key(a, b)].append(interaction)
        return interaction

    def create_collision(
        self,
        a: Entity,
        b: Entity,
        handler: CollisionHandler,
        aux: Any = None,
    ) -> Interaction:
        """
        Call handler(a, b, axis, aux) when a and b first touch.

        The contact produces no impulse; the handler decides what happens.
        """
        interaction = Interaction(InteractionKind.COLLISION, a, b, handler=handler, aux=aux)
        self._collisions[_pair_key(a, b)].append(interaction)
        return interaction

    def create_newtonian_gravity(self, constant: float, a: Entity, b: Entity) -> Interaction:
        """Attract a and b with an inverse-square force every substep."""
        interaction = Interaction(InteractionKind.NEWTONIAN_GRAVITY, a, b, constant=constant)
        self._forces.append(interaction)
        return interaction

    def interactions_between(self, a: Entity, b: Entity) -> List[Interaction]:
        """All registrations (collision and force) pairing a with b."""
        if a is b:
            return []
        found = list(self._collisions.get(_pair_key(a, b), ()))
        found.extend(f for f in self._forces if f.pairs(a, b))
        return found

    @property
    def interaction_count(self) -> int:
        return sum(len(v) for v in self._collisions.values()) + len(self._forces)

    # ------------------------------------------------------------------
    # Pymunk callbacks
    # ------------------------------------------------------------------

    def _registered(self, arbiter: pymunk.Arbiter) -> List[Interaction]:
        shape_a, shape_b = arbiter.shapes
        a = self._by_shape.get(shape_a)
        b = self._by_shape.get(shape_b)
        if a is None or b is None:
            return []
        return [i for i in self._collisions.get(_pair_key(a, b), ())
                if i.is_active and i.is_collision]

    def _on_begin(self, arbiter: pymunk.Arbiter, space: pymunk.Space, data) -> None:
        registered = self._registered(arbiter)
        physical = [i for i in registered if i.kind == InteractionKind.PHYSICS_COLLISION]
        if not physical:
            arbiter.process_collision = False

        axis = arbiter.contact_point_set.normal
        for interaction in registered:
            if interaction.kind != InteractionKind.COLLISION or not interaction.is_active:
                continue
            interaction.handler(interaction.entity_a, interaction.entity_b, axis, interaction.aux)

    def _on_pre_solve(self, arbiter: pymunk.Arbiter, space: pymunk.Space, data) -> None:
        physical = [i for i in self._registered(arbiter)
                    if i.kind == InteractionKind.PHYSICS_COLLISION]
        if not physical:
            arbiter.process_collision = False
            return
        arbiter.restitution = physical[0].elasticity
        arbiter.friction = 0.0

    # ------------------------------------------------------------------
    # Time
    # ------------------------------------------------------------------

    def advance(self, dt: float) -> None:
        """
        Advance the scene by dt seconds.

        dt is split into equal substeps no longer than MAX_STEP. Continuous
        forces are re-applied before every substep (Pymunk clears forces
        after each step). Entities removed during the advance are delisted
        at the end, together with their registrations.
        """
        if dt <= 0:
            return
        steps = max(1, math.ceil(dt / self.MAX_STEP))
        h = dt / steps
        for _ in range(steps):
            for interaction in self._forces:
                if interaction.is_active:
                    apply_newtonian_gravity(interaction)
            self.space.step(h)
        self.frame += 1
        self.time += dt
        self._purge_removed()

    def _purge_removed(self) -> None:
        removed = [e for e in self._entities if e.is_removed]
        if not removed:
            return
        self._entities = [e for e in self._entities if not e.is_removed]
        for entity in removed:
            self._by_shape.pop(entity.shape, None)
        for key in list(self._collisions):
            live = [i for i in self._collisions[key] if i.is_active]
            if live:
                self._collisions[key] = live
            else:
                del self._collisions[key]
        self._forces = [f for f in self._forces if f.is_active]
        logger.debug("Purged %d removed entities at frame %d", len(removed), self.frame)

    def free(self) -> None:
        """Release every entity and registration."""
        for entity in self._entities:
            if not entity.is_removed:
                self.remove_entity(entity)
        self._entities = []
        self._by_shape.clear()
        self._collisions.clear()
        self._forces = []

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    def get_state(self) -> dict:
        """
        Get the current state of all live entities.

        Returns:
            dict with:
                - frame: Current frame number
                - time: Simulated seconds
                - objects: List of entity states with id, info, position,
                          velocity, angle and immobile flag
        """
        objects = []
        for entity in self.entities:
            pos = entity.centroid
            vel = entity.velocity
            info = entity.info
            objects.append({
                "id": entity.entity_id,
                "info": getattr(info, "value", info),
                "position": {"x": round(pos.x, 4), "y": round(pos.y, 4)},
                "velocity": {"x": round(vel.x, 4), "y": round(vel.y, 4)},
                "angle": round(entity.angle, 6),
                "immobile": entity.is_immobile,
            })

        return {
            "frame": self.frame,
            "time": round(self.time, 6),
            "objects": objects,
        }
