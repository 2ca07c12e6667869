"""
Shape Factory - Random shape generation and scattering.

Shapes are drawn inside a rectangular extent with random kind, radius and
color. `scatter_shapes` places shapes one at a time and rejects any
candidate that overlaps an already placed shape.
"""

import logging
import numpy as np
from typing import List, Optional, Tuple

from .collision import collides_with_any
from .config import CONFIG
from .shapes import Circle, IrregularPolygon, RegularPolygon, Shape, ShapeType


logger = logging.getLogger(__name__)


def _resolve_rng(rng: Optional[np.random.Generator], seed: Optional[int]) -> np.random.Generator:
    if rng is None:
        return np.random.default_rng(seed)
    if not isinstance(rng, np.random.Generator):
        raise TypeError(f"rng must be a numpy.random.Generator, got {type(rng).__name__}")
    return rng


def random_shape(
    rng: Optional[np.random.Generator] = None,
    kind: Optional[ShapeType] = None,
    extent: Optional[Tuple[float, float, float, float]] = None,
    radius_range: Optional[Tuple[float, float]] = None,
    id=None,
) -> Shape:
    """
    Draw one random shape.

    Args:
        rng: Random generator (fresh unseeded one if None)
        kind: Shape kind, drawn uniformly if None
        extent: (min_x, min_y, max_x, max_y) for the center
        radius_range: (min, max) seed radius

    Returns:
        A new Circle, RegularPolygon or IrregularPolygon
    """
    rng = _resolve_rng(rng, None)
    gen = CONFIG.generation
    min_x, min_y, max_x, max_y = extent if extent is not None else gen.extent
    r_min, r_max = radius_range if radius_range is not None else gen.radius_range

    if kind is None:
        kind = list(ShapeType)[rng.integers(len(ShapeType))]
    else:
        kind = ShapeType(kind)

    center = (rng.uniform(min_x, max_x), rng.uniform(min_y, max_y))
    radius = rng.uniform(r_min, r_max)
    color = gen.palette[rng.integers(len(gen.palette))]

    if kind is ShapeType.CIRCLE:
        return Circle(center, radius, id=id, color=color)

    if kind is ShapeType.REGULAR_POLYGON:
        lo, hi = gen.sides_range
        sides = int(rng.integers(lo, hi + 1))
        rotation = rng.uniform(0.0, 2 * np.pi)
        return RegularPolygon(center, radius, sides, rotation, id=id, color=color)

    lo, hi = gen.irregular_vertices_range
    num_vertices = int(rng.integers(lo, hi + 1))
    return IrregularPolygon(center, radius, num_vertices, rng=rng, id=id, color=color)


def scatter_shapes(
    n: int,
    rng: Optional[np.random.Generator] = None,
    seed: Optional[int] = None,
    allow_overlap: bool = False,
    kinds: Optional[List[ShapeType]] = None,
    extent: Optional[Tuple[float, float, float, float]] = None,
    radius_range: Optional[Tuple[float, float]] = None,
    max_attempts: Optional[int] = None,
    method: str = 'exact',
) -> List[Shape]:
    """
    Generate n random shapes.

    Args:
        n: Number of shapes
        rng: Random generator (takes precedence over seed)
        seed: Seed for a fresh generator
        allow_overlap: Skip the rejection step
        kinds: Kinds to draw from (all kinds if None)
        max_attempts: Candidates tried per shape before giving up
        method: Collision method used for rejection

    Returns:
        List of shapes, ids "0" .. str(n - 1)

    Raises:
        RuntimeError: a shape could not be placed within max_attempts
    """
    if n < 0:
        raise ValueError(f"n must be non-negative, got {n}")

    rng = _resolve_rng(rng, seed)
    attempts = max_attempts if max_attempts is not None else CONFIG.generation.max_placement_attempts
    placed: List[Shape] = []
    rejected = 0

    for idx in range(n):
        for _ in range(attempts):
            kind = None
            if kinds:
                kind = kinds[rng.integers(len(kinds))]
            candidate = random_shape(rng, kind=kind, extent=extent,
                                     radius_range=radius_range, id=str(idx))

            if allow_overlap or not collides_with_any(candidate, placed, method):
                placed.append(candidate)
                break
            rejected += 1
        else:
            raise RuntimeError(
                f"Could not place shape {idx} without overlap in {attempts} attempts"
            )

    logger.debug("Placed %d shapes, rejected %d candidates", len(placed), rejected)
    return placed
