import math

import pytest

from shapecore.point import Point
from shapecore.records import from_record, records_from_shapes, shapes_from_records, to_record
from shapecore.shapes import Circle, IrregularPolygon, RegularPolygon, ShapeType


@pytest.fixture
def shapes():
    return [
        Circle(Point(1, 2), 1.5, id="c1", color="red"),
        RegularPolygon(Point(-1, 0.5), 2.0, 5, 0.25, id="r1", color="green"),
        IrregularPolygon(Point(0.5, -1), 1.75, 9, seed=11, id="i1", color="blue"),
    ]


@pytest.fixture
def probes():
    return [
        Circle(Point(0, 0), 1.0),
        Circle(Point(3, 3), 0.5),
        RegularPolygon(Point(2, -1), 1.0, 3, 0.4),
        RegularPolygon(Point(-4, 4), 1.0, 6),
        IrregularPolygon(Point(-1, -2), 1.2, 7, seed=3),
    ]


def test_circle_record(shapes):
    record = to_record(shapes[0])
    assert record == {
        'type': 'circle',
        'id': 'c1',
        'center': {'x': 1.0, 'y': 2.0},
        'radius': 1.5,
        'color': 'red',
    }
    assert 'vertices' not in record


def test_regular_polygon_record(shapes):
    record = shapes[1].to_record()
    assert record['type'] == 'regularPolygon'
    assert record['sides'] == 5
    assert record['rotationAngle'] == 0.25
    assert len(record['vertices']) == 5
    assert set(record['vertices'][0]) == {'x', 'y'}
    assert set(record) == {'type', 'id', 'center', 'radius', 'sides', 'rotationAngle', 'vertices', 'color'}


def test_irregular_polygon_record(shapes):
    record = shapes[2].to_record()
    assert record['type'] == 'irregularPolygon'
    assert 'sides' not in record
    assert 'rotationAngle' not in record
    assert len(record['vertices']) == len(shapes[2].get_vertices())
    assert set(record) == {'type', 'id', 'center', 'radius', 'vertices', 'color'}


def test_round_trip_preserves_record(shapes):
    for shape in shapes:
        record = to_record(shape)
        rebuilt = from_record(record)
        assert type(rebuilt) is type(shape)
        assert to_record(rebuilt) == record


def test_round_trip_preserves_overlaps(shapes, probes):
    rebuilt = shapes_from_records(records_from_shapes(shapes))
    for original, copy in zip(shapes, rebuilt):
        for probe in probes:
            assert original.overlaps(probe) == copy.overlaps(probe)
            assert probe.overlaps(original) == probe.overlaps(copy)


def test_type_strings():
    assert ShapeType('circle') is ShapeType.CIRCLE
    assert ShapeType('regularPolygon') is ShapeType.REGULAR_POLYGON
    assert ShapeType('irregularPolygon') is ShapeType.IRREGULAR_POLYGON


def test_unknown_type_rejected():
    with pytest.raises(ValueError):
        from_record({'type': 'ellipse', 'id': 1, 'center': {'x': 0, 'y': 0}, 'radius': 1})


def test_missing_field_rejected():
    with pytest.raises(KeyError):
        from_record({'type': 'circle', 'id': 1, 'center': {'x': 0, 'y': 0}})
    with pytest.raises(KeyError):
        from_record({'type': 'irregularPolygon', 'center': {'x': 0, 'y': 0}, 'radius': 1})


def test_record_preconditions_apply():
    with pytest.raises(ValueError):
        from_record({'type': 'regularPolygon', 'center': {'x': 0, 'y': 0}, 'radius': 1, 'sides': 2})


def test_star_shaped_record_rejected():
    star = [{'x': math.cos(math.radians(a)), 'y': math.sin(math.radians(a))}
            for a in (90, 234, 18, 162, 306)]
    with pytest.raises(ValueError):
        from_record({'type': 'irregularPolygon', 'center': {'x': 0, 'y': 0}, 'radius': 1,
                     'vertices': star})
