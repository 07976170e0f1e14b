"""
Projection engine — deterministic per-period attendance, revenue and cost math.
"""

from .records import (
    WeeklyProjection,
    make_projection,
    projections_to_frame,
    projections_from_frame,
)
from .runner import project

__all__ = [
    "WeeklyProjection",
    "make_projection",
    "projections_to_frame",
    "projections_from_frame",
    "project",
]
