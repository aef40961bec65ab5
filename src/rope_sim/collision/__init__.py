# MIT License (see LICENSE)
"""
Continuous collision tests used by the eraser.

This subpackage provides:
    - point_swept: moving eraser vs moving point, with a radius.
    - link_swept / link_crossing_time: moving eraser vs moving link.

Typical usage:
    from rope_sim.collision import point_swept

    if point_swept(last_mouse, mouse, p.last_position, p.position, 12.0):
        ...
"""
from .sweep import (
    segment_origin_distance_sq,
    point_swept,
    link_crossing_time,
    link_swept,
)

__all__ = [
    "segment_origin_distance_sq",
    "point_swept",
    "link_crossing_time",
    "link_swept",
]
