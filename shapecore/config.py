"""
Shapecore - Global Configuration
All tolerances and generation settings in one place.
"""

from dataclasses import dataclass, field
from typing import Tuple


@dataclass
class GeometryConfig:
    """Numerical tolerances used by the geometry kernel."""
    # Separating axis test slack for exact polygon vertex lists
    sat_epsilon: float = 1e-8

    # Widened SAT slack, only used when a circle is compared as its sampled polygon
    sampled_epsilon: float = 1e-6

    # Circle / segment quadratic
    discriminant_tolerance: float = 1e-8
    segment_param_tolerance: float = 1e-6

    # Edges shorter than this (squared length) are treated as a single point
    degenerate_segment_tolerance: float = 1e-12

    # Ray casting
    horizontal_edge_tolerance: float = 1e-12
    ray_perturbation: float = 1e-10

    # Polygonal approximation of circles
    circle_samples: int = 32


@dataclass
class GenerationConfig:
    """Shape construction defaults."""
    # Irregular polygon vertex distance, as a fraction of the seed radius
    min_radius_fraction: float = 0.6
    max_radius_fraction: float = 1.0

    # Redraws allowed when a random draw hulls down to fewer than 3 points
    max_hull_attempts: int = 100

    default_color: str = "black"
    palette: Tuple[str, ...] = (
        "red", "orange", "yellow", "green", "blue", "purple", "black",
    )

    # Random scattering
    extent: Tuple[float, float, float, float] = (0.0, 0.0, 100.0, 100.0)
    radius_range: Tuple[float, float] = (2.0, 8.0)
    sides_range: Tuple[int, int] = (3, 8)
    irregular_vertices_range: Tuple[int, int] = (5, 12)
    max_placement_attempts: int = 1000


@dataclass
class ShapecoreConfig:
    """Master configuration combining all sub-configs."""
    geometry: GeometryConfig = field(default_factory=GeometryConfig)
    generation: GenerationConfig = field(default_factory=GenerationConfig)


# Global configuration instance
CONFIG = ShapecoreConfig()


def reset_config():
    """Restore every setting to its default value."""
    CONFIG.geometry = GeometryConfig()
    CONFIG.generation = GenerationConfig()
