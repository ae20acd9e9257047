"""
Frame formatting for board snapshots.

Each frame is a JSON-safe dict with one record per live entity. The same
records feed both the JSONL exporter and the renderer.
"""

from typing import TYPE_CHECKING, Dict, Any

import pymunk

from galton.board.constants import MAX_X, MAX_Y, N_ROWS
from galton.board.tags import EntityTag, get_tag

if TYPE_CHECKING:
    from galton.physics.entity import Entity
    from galton.physics.simulation import PhysicsScene


def format_entity(entity: "Entity") -> Dict[str, Any]:
    """Position, velocity, tag, color and world-space outline of one entity."""
    pos = entity.centroid
    vel = entity.velocity
    shape = entity.shape
    record = {
        "id": entity.entity_id,
        "tag": get_tag(entity).value,
        "position": {"x": round(pos.x, 4), "y": round(pos.y, 4)},
        "velocity": {"x": round(vel.x, 4), "y": round(vel.y, 4)},
        "color": list(entity.color),
    }
    if isinstance(shape, pymunk.Circle):
        record["shape"] = {"type": "circle", "radius": shape.radius}
    else:
        vertices = [entity.body.local_to_world(v) for v in shape.get_vertices()]
        record["shape"] = {
            "type": "polygon",
            "vertices": [[round(v.x, 4), round(v.y, 4)] for v in vertices],
        }
    return record


def format_frame(scene: "PhysicsScene", frame_num: int) -> Dict[str, Any]:
    """
    Format a single frame.

    Args:
        scene: The physics scene
        frame_num: Frame number to record

    Returns:
        dict with frame number, simulated time, tag counts and entity records
    """
    entities = scene.entities
    counts = {tag.value: 0 for tag in EntityTag}
    for entity in entities:
        counts[get_tag(entity).value] += 1
    return {
        "frame": frame_num,
        "time": round(scene.time, 6),
        "counts": counts,
        "entities": [format_entity(e) for e in entities],
    }


def format_session_header(seed, drop_interval: float) -> Dict[str, Any]:
    """Board-level metadata written once at the top of an export."""
    return {
        "board": {"width": MAX_X, "height": MAX_Y, "rows": N_ROWS},
        "seed": seed,
        "drop_interval": drop_interval,
        "description": (f"A {MAX_X:.0f}x{MAX_Y:.0f} Galton board with {N_ROWS} peg rows; "
                        f"one ball every {drop_interval:g} s."),
    }
