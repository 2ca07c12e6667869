"""
Shape Records - Structured mappings for external consumers.

Record layout (field names and type strings are a stable contract):

    common:           type, id, center {x, y}, radius, color
    regularPolygon:   + sides, rotationAngle, vertices [{x, y}, ...]
    irregularPolygon: + vertices [{x, y}, ...]
    circle:           nothing further
"""

from typing import Any, Dict, List

import numpy as np

from .point import Point
from .shapes import Circle, IrregularPolygon, RegularPolygon, Shape, ShapeType


def _vertex_list(vertices: np.ndarray) -> List[Dict[str, float]]:
    return [{'x': float(x), 'y': float(y)} for x, y in vertices]


def to_record(shape: Shape) -> Dict[str, Any]:
    """
    Build the structured record for a shape.

    Args:
        shape: Any Shape

    Returns:
        Plain dict of JSON-compatible values
    """
    shape_type = shape.get_shape_type()

    record = {
        'type': shape_type.value,
        'id': shape.id,
        'center': shape.center.to_dict(),
        'radius': shape.radius,
    }

    if shape_type is ShapeType.REGULAR_POLYGON:
        record['sides'] = shape.sides
        record['rotationAngle'] = shape.rotation_angle
        record['vertices'] = _vertex_list(shape.vertex_array)
    elif shape_type is ShapeType.IRREGULAR_POLYGON:
        record['vertices'] = _vertex_list(shape.vertex_array)

    record['color'] = shape.color
    return record


def from_record(record: Dict[str, Any]) -> Shape:
    """
    Rebuild a shape from its record.

    Regular polygons are regenerated from sides and rotation; irregular
    polygons reuse the stored vertices.

    Raises:
        ValueError: unknown type
        KeyError: missing field
    """
    try:
        shape_type = ShapeType(record['type'])
    except ValueError:
        raise ValueError(f"Unknown shape type: {record['type']!r}") from None

    center = Point.from_dict(record['center'])
    common = dict(id=record.get('id'), color=record.get('color'))

    if shape_type is ShapeType.CIRCLE:
        return Circle(center, record['radius'], **common)

    if shape_type is ShapeType.REGULAR_POLYGON:
        return RegularPolygon(
            center, record['radius'], record['sides'],
            rotation_angle=record.get('rotationAngle', 0.0),
            **common,
        )

    vertices = [(v['x'], v['y']) for v in record['vertices']]
    return IrregularPolygon.from_vertices(center, record['radius'], vertices, **common)


def records_from_shapes(shapes) -> List[Dict[str, Any]]:
    return [to_record(s) for s in shapes]


def shapes_from_records(records) -> List[Shape]:
    return [from_record(r) for r in records]
