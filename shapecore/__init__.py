"""
Shapecore - 2-D shapes, geometry kernel and overlap detection.
"""

from .config import CONFIG, ShapecoreConfig, GeometryConfig, GenerationConfig

from .point import Point

from .kernel import (
    normalize,
    dot,
    extract_axes,
    project_onto_axis,
    overlaps_on_axis,
    sat_overlap,
    circle_intersects_segment,
    point_in_polygon,
    circle_polygon_overlap,
    convex_hull,
)

from .shapes import (
    ShapeType,
    Shape,
    Circle,
    RegularPolygon,
    IrregularPolygon,
)

from .dispatch import shapes_overlap, sampled_overlap

from .records import to_record, from_record

from .collision import (
    check_overlap,
    check_any_collision,
    check_all_collisions,
    shapely_overlap,
)

from .factory import random_shape, scatter_shapes

__all__ = [
    'CONFIG',
    'ShapecoreConfig',
    'GeometryConfig',
    'GenerationConfig',
    'Point',
    'normalize',
    'dot',
    'extract_axes',
    'project_onto_axis',
    'overlaps_on_axis',
    'sat_overlap',
    'circle_intersects_segment',
    'point_in_polygon',
    'circle_polygon_overlap',
    'convex_hull',
    'ShapeType',
    'Shape',
    'Circle',
    'RegularPolygon',
    'IrregularPolygon',
    'shapes_overlap',
    'sampled_overlap',
    'to_record',
    'from_record',
    'check_overlap',
    'check_any_collision',
    'check_all_collisions',
    'shapely_overlap',
    'random_shape',
    'scatter_shapes',
]
