"""
Physics collaborator module.

Provides entities, pairwise interaction registration and time stepping on
top of Pymunk.
"""

from .entity import Entity
from .forces import Interaction, InteractionKind, newtonian_force
from .objects import create_box_entity, create_circle_entity
from .simulation import PhysicsScene

__all__ = [
    'Entity',
    'Interaction',
    'InteractionKind',
    'newtonian_force',
    'create_box_entity',
    'create_circle_entity',
    'PhysicsScene',
]
