"""
Analysis of board runs.

Key components:
- pile_histogram / pile_height / pile_spread: shape of the settled pile
- gravity_acceleration / gravity_variation: quality of the gravity-source approximation
"""

from galton.analysis.metrics import (
    gravity_acceleration,
    gravity_variation,
    pile_height,
    pile_histogram,
    pile_spread,
    settled_positions,
)

__all__ = [
    "gravity_acceleration",
    "gravity_variation",
    "pile_height",
    "pile_histogram",
    "pile_spread",
    "settled_positions",
]
