"""
Geometry Kernel - Numba-compiled primitives for overlap detection.

This module provides the stateless building blocks used by every shape:
1. Vector helpers - normalize, dot, orientation
2. SAT (Separating Axis Theorem) - exact for convex polygons
3. Circle primitives - circle/segment intersection, circle/polygon overlap
4. Ray casting - even-odd point-in-polygon
5. Convex hull - Andrew's monotone chain

All polygon arguments are (N, 2) float64 arrays. Functions are compiled
without fastmath so the epsilon comparisons are evaluated as written.
"""

import numpy as np
from numba import njit
from typing import Tuple
import math


# Default tolerances (mirrored by GeometryConfig)
SAT_EPSILON = 1e-8
DISCRIMINANT_TOLERANCE = 1e-8
SEGMENT_PARAM_TOLERANCE = 1e-6
DEGENERATE_SEGMENT_TOLERANCE = 1e-12
HORIZONTAL_EDGE_TOLERANCE = 1e-12
RAY_PERTURBATION = 1e-10


# =============================================================================
# VECTOR HELPERS
# =============================================================================

@njit(cache=True)
def normalize(x: float, y: float) -> Tuple[float, float]:
    """
    Unit vector of (x, y).

    Returns (0, 0) for a zero-length vector (degenerate edge).
    """
    length = math.sqrt(x * x + y * y)
    if length == 0.0:
        return 0.0, 0.0
    return x / length, y / length


@njit(cache=True)
def dot(ax: float, ay: float, bx: float, by: float) -> float:
    """Standard 2-D dot product."""
    return ax * bx + ay * by


@njit(cache=True)
def orientation(px: float, py: float, qx: float, qy: float, rx: float, ry: float) -> float:
    """
    Cross product (q - p) x (r - p).

    Positive for a left (counter-clockwise) turn, negative for a right turn,
    zero when collinear.
    """
    return (qx - px) * (ry - py) - (qy - py) * (rx - px)


# =============================================================================
# SEPARATING AXIS THEOREM (SAT)
# =============================================================================

@njit(cache=True)
def extract_axes(vertices: np.ndarray) -> np.ndarray:
    """
    One candidate separating axis per polygon edge.

    Args:
        vertices: (N, 2) vertex loop, consistently wound

    Returns:
        (N, 2) array of normalized edge normals; a zero-length edge
        gives (0, 0)
    """
    n = len(vertices)
    axes = np.empty((n, 2), dtype=np.float64)

    for i in range(n):
        j = (i + 1) % n
        edge_x = vertices[j, 0] - vertices[i, 0]
        edge_y = vertices[j, 1] - vertices[i, 1]

        # Outward normal for a counter-clockwise loop
        axis_x, axis_y = normalize(edge_y, -edge_x)
        axes[i, 0] = axis_x
        axes[i, 1] = axis_y

    return axes


@njit(cache=True)
def project_onto_axis(vertices: np.ndarray, axis_x: float, axis_y: float) -> Tuple[float, float]:
    """
    Project polygon onto axis, return (min, max) projection.
    """
    min_proj = dot(vertices[0, 0], vertices[0, 1], axis_x, axis_y)
    max_proj = min_proj

    for i in range(1, len(vertices)):
        proj = dot(vertices[i, 0], vertices[i, 1], axis_x, axis_y)
        if proj < min_proj:
            min_proj = proj
        if proj > max_proj:
            max_proj = proj

    return min_proj, max_proj


@njit(cache=True)
def overlaps_on_axis(min_a: float, max_a: float, min_b: float, max_b: float,
                     epsilon: float = SAT_EPSILON) -> bool:
    """True unless the intervals are disjoint by more than epsilon."""
    return not (max_a < min_b - epsilon or max_b < min_a - epsilon)


@njit(cache=True)
def _separated_on_any(axes: np.ndarray, verts1: np.ndarray, verts2: np.ndarray,
                      epsilon: float) -> bool:
    for k in range(len(axes)):
        axis_x = axes[k, 0]
        axis_y = axes[k, 1]

        min1, max1 = project_onto_axis(verts1, axis_x, axis_y)
        min2, max2 = project_onto_axis(verts2, axis_x, axis_y)

        if not overlaps_on_axis(min1, max1, min2, max2, epsilon):
            return True  # Found separating axis

    return False


@njit(cache=True)
def sat_overlap(verts1: np.ndarray, verts2: np.ndarray, epsilon: float = SAT_EPSILON) -> bool:
    """
    Check if two convex polygons overlap using SAT.

    The axis set is the union of both polygons' edge normals, so the
    result does not depend on argument order.

    Returns True if overlapping, False if separated.
    """
    if _separated_on_any(extract_axes(verts1), verts1, verts2, epsilon):
        return False
    if _separated_on_any(extract_axes(verts2), verts1, verts2, epsilon):
        return False

    return True  # No separating axis found = overlapping


# =============================================================================
# CIRCLE PRIMITIVES
# =============================================================================

@njit(cache=True)
def circle_intersects_segment(
    cx: float, cy: float, radius: float,
    ax: float, ay: float, bx: float, by: float,
    discriminant_tolerance: float = DISCRIMINANT_TOLERANCE,
    param_tolerance: float = SEGMENT_PARAM_TOLERANCE,
    degenerate_tolerance: float = DEGENERATE_SEGMENT_TOLERANCE
) -> bool:
    """
    Check whether segment a-b meets the circle boundary.

    Solves |a + t(b - a) - c|^2 = r^2 for t and accepts a root that falls
    on the segment, with slack at both ends.

    Args:
        cx, cy: Circle center
        radius: Circle radius
        ax, ay, bx, by: Segment endpoints

    Returns:
        True if the segment intersects or touches the circle boundary
    """
    dx = bx - ax
    dy = by - ay
    fx = ax - cx
    fy = ay - cy

    a = dx * dx + dy * dy
    if a < degenerate_tolerance:
        # Zero-length edge: behaves like its endpoint
        return math.sqrt(fx * fx + fy * fy) <= radius

    b = 2.0 * (fx * dx + fy * dy)
    c = fx * fx + fy * fy - radius * radius

    discriminant = b * b - 4.0 * a * c
    if discriminant < -discriminant_tolerance:
        return False
    if discriminant < 0.0:
        discriminant = 0.0  # Tangent within tolerance

    sqrt_d = math.sqrt(discriminant)
    t1 = (-b - sqrt_d) / (2.0 * a)
    t2 = (-b + sqrt_d) / (2.0 * a)

    lo = -param_tolerance
    hi = 1.0 + param_tolerance
    return (t1 >= lo and t1 <= hi) or (t2 >= lo and t2 <= hi)


@njit(cache=True)
def point_in_polygon(
    px: float, py: float, polygon: np.ndarray,
    horizontal_tolerance: float = HORIZONTAL_EDGE_TOLERANCE,
    perturbation: float = RAY_PERTURBATION
) -> bool:
    """
    Even-odd ray casting with a horizontal ray towards +x.

    A point whose y equals an edge endpoint's y is nudged up by
    `perturbation` for that edge, so a vertex is never counted twice.

    Returns:
        True if an odd number of edges is crossed
    """
    n = len(polygon)
    count = 0

    for i in range(n):
        j = (i + 1) % n
        ax = polygon[i, 0]
        ay = polygon[i, 1]
        bx = polygon[j, 0]
        by = polygon[j, 1]

        if ay > by:
            ax, ay, bx, by = bx, by, ax, ay

        # Horizontal edges never cross a horizontal ray
        if abs(ay - by) < horizontal_tolerance:
            continue

        qy = py
        if qy == ay or qy == by:
            qy = py + perturbation

        if qy < ay or qy > by:
            continue
        if px >= max(ax, bx):
            continue

        x_intersect = (qy - ay) * (bx - ax) / (by - ay) + ax
        if px < x_intersect:
            count += 1

    return count % 2 == 1


@njit(cache=True)
def circle_polygon_overlap(
    cx: float, cy: float, radius: float, polygon: np.ndarray,
    discriminant_tolerance: float = DISCRIMINANT_TOLERANCE,
    param_tolerance: float = SEGMENT_PARAM_TOLERANCE,
    horizontal_tolerance: float = HORIZONTAL_EDGE_TOLERANCE,
    perturbation: float = RAY_PERTURBATION,
    degenerate_tolerance: float = DEGENERATE_SEGMENT_TOLERANCE
) -> bool:
    """
    Check if a true circle overlaps a polygon.

    Three configurations are tested in order:
    1. A polygon vertex lies inside or on the circle
    2. A polygon edge crosses the circle boundary
    3. The circle center lies inside the polygon (circle fully enclosed)
    """
    n = len(polygon)

    for i in range(n):
        vx = polygon[i, 0] - cx
        vy = polygon[i, 1] - cy
        if math.sqrt(vx * vx + vy * vy) <= radius:
            return True

    for i in range(n):
        j = (i + 1) % n
        if circle_intersects_segment(
            cx, cy, radius,
            polygon[i, 0], polygon[i, 1], polygon[j, 0], polygon[j, 1],
            discriminant_tolerance, param_tolerance, degenerate_tolerance
        ):
            return True

    return point_in_polygon(cx, cy, polygon, horizontal_tolerance, perturbation)


# =============================================================================
# CONVEX HULL
# =============================================================================

@njit(cache=True)
def _monotone_chain(points: np.ndarray) -> np.ndarray:
    """
    Andrew's monotone chain over points already sorted by (x, y).

    Collinear candidates are dropped (orientation <= 0 pops).
    """
    n = len(points)
    hull = np.empty((2 * n, 2), dtype=np.float64)
    k = 0

    # Lower chain, left to right
    for i in range(n):
        while k >= 2 and orientation(
            hull[k - 2, 0], hull[k - 2, 1],
            hull[k - 1, 0], hull[k - 1, 1],
            points[i, 0], points[i, 1]
        ) <= 0.0:
            k -= 1
        hull[k, 0] = points[i, 0]
        hull[k, 1] = points[i, 1]
        k += 1

    # Upper chain, right to left (starts from the lower chain's last point)
    lower_size = k + 1
    for i in range(n - 2, -1, -1):
        while k >= lower_size and orientation(
            hull[k - 2, 0], hull[k - 2, 1],
            hull[k - 1, 0], hull[k - 1, 1],
            points[i, 0], points[i, 1]
        ) <= 0.0:
            k -= 1
        hull[k, 0] = points[i, 0]
        hull[k, 1] = points[i, 1]
        k += 1

    # Last point repeats the first
    return hull[:k - 1].copy()


def convex_hull(points: np.ndarray) -> np.ndarray:
    """
    Convex hull of a point set, counter-clockwise.

    Args:
        points: (N, 2) array

    Returns:
        (M, 2) hull vertices, M <= N. Input of 3 or fewer points is
        returned unchanged (as a copy).
    """
    points = np.ascontiguousarray(points, dtype=np.float64).reshape(-1, 2)
    if len(points) <= 3:
        return points.copy()

    order = np.lexsort((points[:, 1], points[:, 0]))
    return _monotone_chain(np.ascontiguousarray(points[order]))


# =============================================================================
# POLYGON UTILITIES
# =============================================================================

@njit(cache=True)
def polygon_signed_area(vertices: np.ndarray) -> float:
    """Shoelace area, positive for counter-clockwise winding."""
    n = len(vertices)
    area = 0.0
    for i in range(n):
        j = (i + 1) % n
        area += vertices[i, 0] * vertices[j, 1]
        area -= vertices[j, 0] * vertices[i, 1]
    return area / 2.0


@njit(cache=True)
def is_convex(vertices: np.ndarray, tolerance: float = 1e-12) -> bool:
    """
    True if the loop is a simple convex polygon.

    Every consecutive vertex triple must turn the same way (near-collinear
    triples with |cross| <= tolerance are ignored) and the turns must add
    up to exactly one revolution, which rules out stars and loops that
    wind more than once.
    """
    n = len(vertices)
    if n < 3:
        return False

    sign = 0
    turning = 0.0
    for i in range(n):
        j = (i + 1) % n
        k = (i + 2) % n
        e1x = vertices[j, 0] - vertices[i, 0]
        e1y = vertices[j, 1] - vertices[i, 1]
        e2x = vertices[k, 0] - vertices[j, 0]
        e2y = vertices[k, 1] - vertices[j, 1]
        cross = e1x * e2y - e1y * e2x
        turning += math.atan2(cross, dot(e1x, e1y, e2x, e2y))
        if abs(cross) <= tolerance:
            continue
        current = 1 if cross > 0.0 else -1
        if sign == 0:
            sign = current
        elif current != sign:
            return False

    if sign == 0:
        return False
    return abs(abs(turning) - 2.0 * math.pi) < 1e-6


@njit(cache=True)
def get_bounds(vertices: np.ndarray) -> Tuple[float, float, float, float]:
    """
    Get axis-aligned bounding box for vertices.

    Returns:
        (min_x, min_y, max_x, max_y)
    """
    min_x = vertices[0, 0]
    max_x = vertices[0, 0]
    min_y = vertices[0, 1]
    max_y = vertices[0, 1]

    for i in range(1, len(vertices)):
        x = vertices[i, 0]
        y = vertices[i, 1]

        if x < min_x:
            min_x = x
        elif x > max_x:
            max_x = x

        if y < min_y:
            min_y = y
        elif y > max_y:
            max_y = y

    return min_x, min_y, max_x, max_y


# =============================================================================
# WARMUP
# =============================================================================

def warmup():
    """Warm up JIT compilation."""
    verts = np.array([
        [0.0, 0.0],
        [1.0, 0.0],
        [1.0, 1.0],
        [0.0, 1.0]
    ], dtype=np.float64)

    _ = normalize(3.0, 4.0)
    _ = extract_axes(verts)
    _ = project_onto_axis(verts, 1.0, 0.0)
    _ = sat_overlap(verts, verts)
    _ = circle_intersects_segment(0.0, 0.0, 1.0, -2.0, 0.0, 2.0, 0.0)
    _ = point_in_polygon(0.5, 0.5, verts)
    _ = circle_polygon_overlap(0.5, 0.5, 0.1, verts)
    _ = convex_hull(np.vstack([verts, [[0.5, 0.5]]]))
    _ = polygon_signed_area(verts)
    _ = is_convex(verts)
    _ = get_bounds(verts)

    print("JIT warmup complete for kernel module")


if __name__ == "__main__":
    warmup()

    square = np.array([[0.0, 0.0], [1.0, 0.0], [1.0, 1.0], [0.0, 1.0]])
    shifted = square + 2.0
    print(f"\nSquares at (0,0) and (2,2): overlap={sat_overlap(square, shifted)}")
    print(f"Square and itself: overlap={sat_overlap(square, square)}")
