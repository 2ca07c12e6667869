"""
Collision Detection - Collection-level overlap queries.

This module provides three overlap methods for a pair of shapes:
1. exact   - Dispatch table (closed-form circles, SAT for polygons)
2. sampled - SAT over vertex lists, circles as sampled polygons
3. shapely - Shapely geometry, used as an independent reference

Collection queries run an AABB pre-check before the detailed test.
"""

import logging
import math
import numpy as np
from numba import njit
from typing import List, Sequence, Tuple

from tqdm import tqdm

from .config import CONFIG
from .dispatch import sampled_overlap, shapes_overlap
from .shapes import Shape, ShapeType


logger = logging.getLogger(__name__)

METHODS = ('exact', 'sampled', 'shapely')


# =============================================================================
# AXIS-ALIGNED BOUNDING BOX (AABB) CHECKS
# =============================================================================

@njit(cache=True)
def bounds_overlap(
    b1_min_x: float, b1_min_y: float, b1_max_x: float, b1_max_y: float,
    b2_min_x: float, b2_min_y: float, b2_max_x: float, b2_max_y: float
) -> bool:
    """
    Check if two AABBs overlap.

    Returns True if overlapping, False if separated.
    """
    return not (
        b1_max_x < b2_min_x or b2_max_x < b1_min_x or
        b1_max_y < b2_min_y or b2_max_y < b1_min_y
    )


@njit(cache=True)
def bounds_overlap_array(b1: np.ndarray, b2: np.ndarray) -> bool:
    """Check if two AABB arrays [min_x, min_y, max_x, max_y] overlap."""
    return bounds_overlap(
        b1[0], b1[1], b1[2], b1[3],
        b2[0], b2[1], b2[2], b2[3]
    )


def get_all_bounds(shapes: Sequence[Shape]) -> np.ndarray:
    """
    Get bounding boxes for all shapes.

    Returns:
        (n, 4) array of (min_x, min_y, max_x, max_y)
    """
    bounds = np.empty((len(shapes), 4), dtype=np.float64)
    for i, shape in enumerate(shapes):
        bounds[i] = shape.bounds
    return bounds


def collision_margin(shape: Shape) -> float:
    """
    Widest gap next to `shape` that a detailed test may still accept.

    SAT accepts gaps up to the larger of the two SAT epsilons. For
    polygons, the circle/segment test also lets a root land
    `segment_param_tolerance * length` past an edge end, and the
    discriminant slack reaches `sqrt(discriminant_tolerance) / (2 * length)`
    from an edge, so both grow with the polygon's edge lengths.
    """
    geo = CONFIG.geometry
    margin = max(geo.sat_epsilon, geo.sampled_epsilon)
    if shape.get_shape_type() is ShapeType.CIRCLE:
        return margin

    vertices = shape.vertex_array
    edges = np.roll(vertices, -1, axis=0) - vertices
    squared = np.einsum('ij,ij->i', edges, edges)
    lengths = np.sqrt(squared[squared >= geo.degenerate_segment_tolerance])
    if len(lengths) == 0:
        return margin

    margin += geo.segment_param_tolerance * lengths.max()
    margin += math.sqrt(geo.discriminant_tolerance) / (2.0 * lengths.min())
    return margin


def get_all_padded_bounds(shapes: Sequence[Shape]) -> np.ndarray:
    """
    Bounding boxes grown by each shape's `collision_margin`.

    Used as the pre-filter, so a pair is never skipped when the detailed
    test would accept it.
    """
    bounds = get_all_bounds(shapes)
    for i, shape in enumerate(shapes):
        margin = collision_margin(shape)
        bounds[i, :2] -= margin
        bounds[i, 2:] += margin
    return bounds


# =============================================================================
# SHAPELY-BASED REFERENCE
# =============================================================================

def to_shapely(shape: Shape, quad_segs: int = 16):
    """
    Convert a shape to a Shapely polygon.

    Circles are buffered points (4 * quad_segs segments), polygons use
    their exact vertices.
    """
    from shapely.geometry import Point as ShapelyPoint, Polygon

    if shape.get_shape_type() is ShapeType.CIRCLE:
        return ShapelyPoint(shape.center.x, shape.center.y).buffer(shape.radius, quad_segs=quad_segs)
    return Polygon(shape.vertex_array)


def shapely_overlap(a: Shape, b: Shape) -> bool:
    """
    Check if two shapes overlap using Shapely.

    Returns True if interiors intersect (not just touching).
    """
    p1 = to_shapely(a)
    p2 = to_shapely(b)
    return bool(p1.intersects(p2) and not p1.touches(p2))


# =============================================================================
# MAIN COLLISION CHECKING FUNCTIONS
# =============================================================================

def _overlap_fn(method: str):
    if method == 'exact':
        return shapes_overlap
    if method == 'sampled':
        return sampled_overlap
    if method == 'shapely':
        return shapely_overlap
    raise ValueError(f"Unknown collision method {method!r}, expected one of {METHODS}")


def check_overlap(a: Shape, b: Shape, method: str = 'exact') -> bool:
    """
    Check if two shapes overlap.

    Args:
        a: First shape
        b: Second shape
        method: 'exact', 'sampled' or 'shapely'

    Returns:
        True if overlapping, False otherwise
    """
    return _overlap_fn(method)(a, b)


def check_any_collision(shapes: Sequence[Shape], method: str = 'exact') -> bool:
    """
    Check if ANY pair of shapes collides.

    Uses AABB pre-check for speed, then detailed check for candidates.
    """
    overlap = _overlap_fn(method)
    all_bounds = get_all_padded_bounds(shapes)
    n = len(shapes)

    for i in range(n):
        for j in range(i + 1, n):
            # Quick AABB check
            if bounds_overlap_array(all_bounds[i], all_bounds[j]):
                # Detailed shape check
                if overlap(shapes[i], shapes[j]):
                    return True

    return False


def check_all_collisions(
    shapes: Sequence[Shape],
    method: str = 'exact',
    progress: bool = False
) -> List[Tuple[int, int]]:
    """
    Find ALL colliding pairs.

    Args:
        shapes: Shapes to test
        method: 'exact', 'sampled' or 'shapely'
        progress: Show a tqdm progress bar over the outer loop

    Returns:
        List of (i, j) tuples for colliding pairs, i < j
    """
    overlap = _overlap_fn(method)
    all_bounds = get_all_padded_bounds(shapes)
    n = len(shapes)
    collisions = []
    candidates = 0

    for i in tqdm(range(n), desc="Collision check", disable=not progress):
        for j in range(i + 1, n):
            if bounds_overlap_array(all_bounds[i], all_bounds[j]):
                candidates += 1
                if overlap(shapes[i], shapes[j]):
                    collisions.append((i, j))

    logger.debug("%d shapes, %d AABB candidates, %d collisions (%s)",
                 n, candidates, len(collisions), method)
    return collisions


def check_shape_collides_with_others(
    shape_idx: int,
    shapes: Sequence[Shape],
    method: str = 'exact'
) -> bool:
    """
    Check if a specific shape collides with any other shape.

    Useful for checking a single new shape without full O(n²) check.
    """
    overlap = _overlap_fn(method)
    target = shapes[shape_idx]
    all_bounds = get_all_padded_bounds(shapes)

    for j, other in enumerate(shapes):
        if j == shape_idx:
            continue

        if bounds_overlap_array(all_bounds[shape_idx], all_bounds[j]):
            if overlap(target, other):
                return True

    return False


def collides_with_any(shape: Shape, others: Sequence[Shape], method: str = 'exact') -> bool:
    """Check a shape that is not part of `others` against all of them."""
    overlap = _overlap_fn(method)
    b1 = get_all_padded_bounds([shape])[0]

    for other in others:
        if bounds_overlap_array(b1, get_all_padded_bounds([other])[0]):
            if overlap(shape, other):
                return True

    return False


# =============================================================================
# WARMUP
# =============================================================================

def warmup():
    """Warm up JIT compilation."""
    _ = bounds_overlap(0, 0, 1, 1, 0.5, 0.5, 1.5, 1.5)
    _ = bounds_overlap_array(np.array([0, 0, 1, 1.0]), np.array([0.5, 0.5, 1.5, 1.5]))

    print("JIT warmup complete for collision module")
