"""
Overlap Dispatch - One table entry per (kind, kind) pair.

Every ordered pair of shape kinds is registered explicitly, so a new kind
cannot be added without deciding how it meets each existing one. All
circle/polygon orderings resolve to the same kernel function, and
polygon/polygon pairs use SAT over the exact vertex arrays.
"""

from itertools import product
from typing import Callable, Dict, Tuple

from .config import CONFIG
from .kernel import circle_polygon_overlap, sat_overlap
from .shapes import Shape, ShapeType


OverlapFn = Callable[[Shape, Shape], bool]


# =============================================================================
# PAIR HANDLERS
# =============================================================================

def circle_circle(a: Shape, b: Shape) -> bool:
    """Strict: touching circles do not overlap."""
    return a.center.distance_to(b.center) < a.radius + b.radius


def circle_polygon(circle: Shape, polygon: Shape) -> bool:
    """True circle (center, radius) against exact polygon vertices."""
    geo = CONFIG.geometry
    return bool(circle_polygon_overlap(
        circle.center.x, circle.center.y, circle.radius, polygon.vertex_array,
        geo.discriminant_tolerance, geo.segment_param_tolerance,
        geo.horizontal_edge_tolerance, geo.ray_perturbation,
        geo.degenerate_segment_tolerance,
    ))


def polygon_circle(polygon: Shape, circle: Shape) -> bool:
    return circle_polygon(circle, polygon)


def polygon_polygon(a: Shape, b: Shape) -> bool:
    return bool(sat_overlap(a.vertex_array, b.vertex_array, CONFIG.geometry.sat_epsilon))


# =============================================================================
# DISPATCH TABLE
# =============================================================================

_C = ShapeType.CIRCLE
_R = ShapeType.REGULAR_POLYGON
_I = ShapeType.IRREGULAR_POLYGON

OVERLAP_TABLE: Dict[Tuple[ShapeType, ShapeType], OverlapFn] = {
    (_C, _C): circle_circle,
    (_C, _R): circle_polygon,
    (_C, _I): circle_polygon,
    (_R, _C): polygon_circle,
    (_I, _C): polygon_circle,
    (_R, _R): polygon_polygon,
    (_R, _I): polygon_polygon,
    (_I, _R): polygon_polygon,
    (_I, _I): polygon_polygon,
}


def missing_pairs():
    """Kind pairs with no registered handler (empty when complete)."""
    return [pair for pair in product(ShapeType, repeat=2) if pair not in OVERLAP_TABLE]


def shapes_overlap(a: Shape, b: Shape) -> bool:
    """
    Check if two shapes overlap.

    Args:
        a: First shape
        b: Second shape

    Returns:
        True if overlapping, False otherwise

    Raises:
        TypeError: if either argument is not a Shape, or the pair has no handler
    """
    if not isinstance(a, Shape) or not isinstance(b, Shape):
        raise TypeError(
            f"overlap requires two shapes, got {type(a).__name__} and {type(b).__name__}"
        )

    key = (a.get_shape_type(), b.get_shape_type())
    handler = OVERLAP_TABLE.get(key)
    if handler is None:
        raise TypeError(f"No overlap handler registered for {key[0]} / {key[1]}")

    return handler(a, b)


def sampled_overlap(a: Shape, b: Shape) -> bool:
    """
    SAT over both vertex lists, with circles replaced by their samples.

    The epsilon is widened to `sampled_epsilon` whenever a circle takes
    part, to absorb the gap between the sampled polygon and the circle.
    """
    if not isinstance(a, Shape) or not isinstance(b, Shape):
        raise TypeError(
            f"overlap requires two shapes, got {type(a).__name__} and {type(b).__name__}"
        )

    geo = CONFIG.geometry
    involves_circle = ShapeType.CIRCLE in (a.get_shape_type(), b.get_shape_type())
    epsilon = geo.sampled_epsilon if involves_circle else geo.sat_epsilon
    return bool(sat_overlap(a.vertex_array, b.vertex_array, epsilon))
