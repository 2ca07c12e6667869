"""
Point - Immutable 2-D coordinate value.
"""

from dataclasses import dataclass
from typing import Dict
import math

import numpy as np


@dataclass(frozen=True)
class Point:
    """
    2-D point with value semantics.

    Attributes:
        x: X coordinate
        y: Y coordinate
    """

    x: float
    y: float

    def __post_init__(self):
        object.__setattr__(self, 'x', float(self.x))
        object.__setattr__(self, 'y', float(self.y))

    def distance_to(self, other: 'Point') -> float:
        """Euclidean distance to another point."""
        return math.hypot(self.x - other.x, self.y - other.y)

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)

    def to_array(self) -> np.ndarray:
        """Return [x, y] as numpy array."""
        return np.array([self.x, self.y], dtype=np.float64)

    def to_dict(self) -> Dict[str, float]:
        return {'x': self.x, 'y': self.y}

    @classmethod
    def from_dict(cls, d: Dict) -> 'Point':
        return cls(d['x'], d['y'])

    def __repr__(self) -> str:
        return f"Point(x={self.x:.4f}, y={self.y:.4f})"


def points_to_array(points) -> np.ndarray:
    """
    Convert a sequence of Points to a (N, 2) float64 array.

    Args:
        points: Iterable of Point

    Returns:
        C-contiguous (N, 2) array
    """
    arr = np.array([[p.x, p.y] for p in points], dtype=np.float64)
    return np.ascontiguousarray(arr.reshape(-1, 2))


def array_to_points(vertices: np.ndarray) -> list:
    """Convert a (N, 2) array to a list of Points."""
    return [Point(float(v[0]), float(v[1])) for v in vertices]
