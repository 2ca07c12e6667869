"""
Shapes - Circle, regular polygon and irregular polygon variants.

Every shape carries a center, a seed radius, an identifier and a color,
and is immutable once constructed. Polygon vertices are stored as
read-only (N, 2) float64 arrays so they can be handed straight to the
numba kernel.

Overlap tests are not implemented per class: `Shape.overlaps` funnels
every pair through the dispatch table in `shapecore.dispatch`.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import List, Optional, Tuple, Union
import logging
import math
import numbers
import uuid

import numpy as np

from .config import CONFIG
from .kernel import convex_hull, get_bounds, is_convex, polygon_signed_area
from .point import Point, array_to_points


logger = logging.getLogger(__name__)

PointLike = Union[Point, Tuple[float, float]]


class ShapeType(str, Enum):
    """Closed set of shape kinds. Values are the record `type` strings."""
    CIRCLE = "circle"
    REGULAR_POLYGON = "regularPolygon"
    IRREGULAR_POLYGON = "irregularPolygon"

    def __str__(self) -> str:
        return self.value


# =============================================================================
# VALIDATION HELPERS
# =============================================================================

def _as_point(center: PointLike) -> Point:
    if isinstance(center, Point):
        point = center
    else:
        x, y = center
        point = Point(x, y)
    if not point.is_finite():
        raise ValueError(f"center must have finite coordinates, got {point}")
    return point


def _check_radius(radius: float) -> float:
    if isinstance(radius, bool):
        raise TypeError("radius must be a number, got bool")
    radius = float(radius)
    if not math.isfinite(radius) or radius <= 0:
        raise ValueError(f"radius must be a positive finite number, got {radius}")
    return radius


def _check_count(value, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise TypeError(f"{name} must be an integer, got {type(value).__name__}")
    if value < 3:
        raise ValueError(f"{name} must be at least 3, got {value}")
    return int(value)


def _readonly(vertices: np.ndarray) -> np.ndarray:
    vertices = np.ascontiguousarray(vertices, dtype=np.float64)
    vertices.flags.writeable = False
    return vertices


# =============================================================================
# SHAPE BASE CLASS
# =============================================================================

class Shape(ABC):
    """
    Common shape state and the overlap contract.

    Attributes:
        center: Shape center
        radius: Generative (seed) radius
        id: Identifier, a fresh uuid4 hex string unless given
        color: Color name

    Properties:
        vertex_array: (N, 2) read-only vertex array
        bounds: Bounding box (min_x, min_y, max_x, max_y)
    """

    __slots__ = ['_center', '_radius', '_id', '_color']

    shape_type: ShapeType

    def __init__(self, center: PointLike, radius: float, id=None, color: Optional[str] = None):
        self._center = _as_point(center)
        self._radius = _check_radius(radius)
        self._id = uuid.uuid4().hex if id is None else id
        self._color = CONFIG.generation.default_color if color is None else str(color)

    @property
    def center(self) -> Point:
        return self._center

    @property
    def radius(self) -> float:
        return self._radius

    @property
    def id(self):
        return self._id

    @property
    def color(self) -> str:
        return self._color

    @property
    @abstractmethod
    def vertex_array(self) -> np.ndarray:
        """Vertices as a read-only (N, 2) array."""

    @property
    def bounds(self) -> Tuple[float, float, float, float]:
        """Get bounding box (min_x, min_y, max_x, max_y)."""
        return get_bounds(self.vertex_array)

    def get_vertices(self) -> List[Point]:
        """Ordered vertex list (a fresh copy)."""
        return array_to_points(self.vertex_array)

    def get_shape_type(self) -> ShapeType:
        return self.shape_type

    def overlaps(self, other: 'Shape') -> bool:
        """Check if this shape overlaps another shape."""
        from .dispatch import shapes_overlap
        return shapes_overlap(self, other)

    def to_record(self) -> dict:
        """Structured record for external consumers."""
        from .records import to_record
        return to_record(self)


# =============================================================================
# CIRCLE
# =============================================================================

class Circle(Shape):
    """
    Circle defined by center and radius only.

    The polygonal approximation returned by `vertex_array` is sampled on
    first use and cached; the exact overlap branches never use it.
    """

    __slots__ = ['_vertices']

    shape_type = ShapeType.CIRCLE

    def __init__(self, center: PointLike, radius: float, id=None, color: Optional[str] = None):
        super().__init__(center, radius, id=id, color=color)
        self._vertices = None

    @property
    def vertex_array(self) -> np.ndarray:
        """Sampled boundary points, starting at angle 0. Cached."""
        if self._vertices is None:
            self._vertices = _readonly(sample_circle(
                self._center, self._radius, CONFIG.geometry.circle_samples
            ))
        return self._vertices

    @property
    def bounds(self) -> Tuple[float, float, float, float]:
        c, r = self._center, self._radius
        return (c.x - r, c.y - r, c.x + r, c.y + r)

    def __repr__(self) -> str:
        return (f"Circle(id={self._id!r}, center=({self._center.x:.4f}, {self._center.y:.4f}), "
                f"radius={self._radius:.4f})")


def sample_circle(center: Point, radius: float, num_points: int = 32) -> np.ndarray:
    """
    Evenly spaced points on a circle.

    Returns:
        (num_points, 2) array, counter-clockwise from angle 0
    """
    angles = 2 * np.pi * np.arange(num_points) / num_points
    return np.column_stack([
        center.x + radius * np.cos(angles),
        center.y + radius * np.sin(angles),
    ])


# =============================================================================
# REGULAR POLYGON
# =============================================================================

class RegularPolygon(Shape):
    """
    Regular polygon with analytically computed vertices.

    Attributes:
        sides: Number of sides (>= 3)
        rotation_angle: Rotation of the first vertex, in radians
    """

    __slots__ = ['_sides', '_rotation_angle', '_vertices']

    shape_type = ShapeType.REGULAR_POLYGON

    def __init__(self, center: PointLike, radius: float, sides: int, rotation_angle: float = 0.0,
                 id=None, color: Optional[str] = None):
        super().__init__(center, radius, id=id, color=color)
        self._sides = _check_count(sides, "sides")
        self._rotation_angle = float(rotation_angle)
        if not math.isfinite(self._rotation_angle):
            raise ValueError(f"rotation_angle must be finite, got {rotation_angle}")
        self._vertices = _readonly(self._generate_vertices())

    def _generate_vertices(self) -> np.ndarray:
        angle_step = 2 * np.pi / self._sides
        angles = angle_step * np.arange(self._sides) + self._rotation_angle
        return np.column_stack([
            self._center.x + self._radius * np.cos(angles),
            self._center.y + self._radius * np.sin(angles),
        ])

    @property
    def sides(self) -> int:
        return self._sides

    @property
    def rotation_angle(self) -> float:
        return self._rotation_angle

    @property
    def vertex_array(self) -> np.ndarray:
        return self._vertices

    def __repr__(self) -> str:
        return (f"RegularPolygon(id={self._id!r}, center=({self._center.x:.4f}, {self._center.y:.4f}), "
                f"radius={self._radius:.4f}, sides={self._sides}, rotation={self._rotation_angle:.4f})")


# =============================================================================
# IRREGULAR POLYGON
# =============================================================================

class IrregularPolygon(Shape):
    """
    Random convex polygon.

    `num_vertices` points are placed at sorted uniform angles around the
    center, each at a uniform distance in
    [min_radius_fraction, max_radius_fraction] * radius, and reduced to
    their convex hull. The hull may have fewer vertices than requested.

    Args:
        center: Polygon center
        radius: Seed radius
        num_vertices: Number of candidate points (>= 3)
        rng: numpy Generator used for the draw
        seed: Seed for a fresh Generator (ignored when rng is given)
    """

    __slots__ = ['_num_vertices', '_vertices']

    shape_type = ShapeType.IRREGULAR_POLYGON

    def __init__(self, center: PointLike, radius: float, num_vertices: int,
                 rng: Optional[np.random.Generator] = None, seed: Optional[int] = None,
                 id=None, color: Optional[str] = None):
        super().__init__(center, radius, id=id, color=color)
        self._num_vertices = _check_count(num_vertices, "num_vertices")

        if rng is None:
            rng = np.random.default_rng(seed)
        elif not isinstance(rng, np.random.Generator):
            raise TypeError(f"rng must be a numpy.random.Generator, got {type(rng).__name__}")

        self._vertices = _readonly(self._generate_vertices(rng))

    @classmethod
    def from_vertices(cls, center: PointLike, radius: float, vertices, id=None,
                      color: Optional[str] = None) -> 'IrregularPolygon':
        """
        Rebuild a polygon from known vertices, without drawing.

        Args:
            vertices: (N, 2) array or sequence of Points, convex, N >= 3

        Raises:
            ValueError: fewer than 3 vertices, non-finite or non-convex input
        """
        if len(vertices) and isinstance(vertices[0], Point):
            vertices = [(p.x, p.y) for p in vertices]
        arr = np.asarray(vertices, dtype=np.float64)
        if arr.ndim != 2 or arr.shape[1] != 2:
            raise ValueError(f"vertices must be Nx2, got shape {arr.shape}")
        if len(arr) < 3:
            raise ValueError(f"Polygon must have at least 3 vertices, got {len(arr)}")
        if not np.all(np.isfinite(arr)):
            raise ValueError("vertices must be finite")
        arr = np.ascontiguousarray(arr)
        if not is_convex(arr):
            raise ValueError("vertices must form a convex polygon")
        if polygon_signed_area(arr) < 0.0:
            arr = arr[::-1]

        polygon = cls.__new__(cls)
        Shape.__init__(polygon, center, radius, id=id, color=color)
        polygon._num_vertices = len(arr)
        polygon._vertices = _readonly(arr.copy())
        return polygon

    def _generate_vertices(self, rng: np.random.Generator) -> np.ndarray:
        gen = CONFIG.generation

        for attempt in range(gen.max_hull_attempts):
            angles = np.sort(rng.uniform(0.0, 2 * np.pi, self._num_vertices))
            distances = self._radius * rng.uniform(
                gen.min_radius_fraction, gen.max_radius_fraction, self._num_vertices
            )
            points = np.column_stack([
                self._center.x + distances * np.cos(angles),
                self._center.y + distances * np.sin(angles),
            ])

            hull = convex_hull(points)
            if len(hull) < 3:
                logger.debug("Degenerate hull on attempt %d, redrawing", attempt + 1)
                continue

            area = polygon_signed_area(hull)
            if area == 0.0:
                logger.debug("Zero-area hull on attempt %d, redrawing", attempt + 1)
                continue
            if area < 0.0:
                # Only a 3-point draw can come back clockwise
                hull = hull[::-1].copy()
            return hull

        raise RuntimeError(
            f"Could not generate a non-degenerate hull in {gen.max_hull_attempts} attempts"
        )

    @property
    def num_vertices(self) -> int:
        """Number of candidate points requested at construction."""
        return self._num_vertices

    @property
    def vertex_array(self) -> np.ndarray:
        return self._vertices

    def __repr__(self) -> str:
        return (f"IrregularPolygon(id={self._id!r}, center=({self._center.x:.4f}, {self._center.y:.4f}), "
                f"radius={self._radius:.4f}, vertices={len(self._vertices)})")
