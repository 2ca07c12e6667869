import math

import numpy as np
import pytest

from shapecore.config import CONFIG
from shapecore.kernel import is_convex, orientation, polygon_signed_area
from shapecore.point import Point
from shapecore.shapes import Circle, IrregularPolygon, RegularPolygon, ShapeType


# =============================================================================
# CONSTRUCTION PRECONDITIONS
# =============================================================================

@pytest.mark.parametrize("radius", [0, -1.0, float('nan'), float('inf')])
def test_invalid_radius_rejected(radius):
    with pytest.raises(ValueError):
        Circle(Point(0, 0), radius)
    with pytest.raises(ValueError):
        RegularPolygon(Point(0, 0), radius, 4)
    with pytest.raises(ValueError):
        IrregularPolygon(Point(0, 0), radius, 6, seed=0)


def test_invalid_center_rejected():
    with pytest.raises(ValueError):
        Circle(Point(float('nan'), 0), 1.0)


def test_bool_radius_rejected():
    with pytest.raises(TypeError):
        Circle(Point(0, 0), True)


@pytest.mark.parametrize("sides", [0, 1, 2])
def test_regular_polygon_needs_three_sides(sides):
    with pytest.raises(ValueError):
        RegularPolygon(Point(0, 0), 1.0, sides)


@pytest.mark.parametrize("sides", [3.5, "4", True])
def test_regular_polygon_sides_must_be_integer(sides):
    with pytest.raises(TypeError):
        RegularPolygon(Point(0, 0), 1.0, sides)


def test_irregular_polygon_needs_three_vertices():
    with pytest.raises(ValueError):
        IrregularPolygon(Point(0, 0), 1.0, 2, seed=0)


def test_irregular_polygon_rejects_foreign_rng():
    with pytest.raises(TypeError):
        IrregularPolygon(Point(0, 0), 1.0, 5, rng=np.random.RandomState(0))


def test_center_accepts_tuple():
    circle = Circle((1, 2), 3)
    assert circle.center == Point(1, 2)


# =============================================================================
# COMMON FIELDS
# =============================================================================

def test_shape_types():
    assert Circle(Point(0, 0), 1).get_shape_type() is ShapeType.CIRCLE
    assert RegularPolygon(Point(0, 0), 1, 5).get_shape_type() is ShapeType.REGULAR_POLYGON
    assert IrregularPolygon(Point(0, 0), 1, 5, seed=1).get_shape_type() is ShapeType.IRREGULAR_POLYGON
    assert [t.value for t in ShapeType] == ["circle", "regularPolygon", "irregularPolygon"]


def test_default_id_and_color():
    a = Circle(Point(0, 0), 1)
    b = Circle(Point(0, 0), 1)
    assert a.id != b.id
    assert a.color == CONFIG.generation.default_color


def test_explicit_id_and_color():
    shape = RegularPolygon(Point(0, 0), 1, 6, id=7, color="red")
    assert shape.id == 7
    assert shape.color == "red"


def test_shapes_are_read_only():
    shape = RegularPolygon(Point(0, 0), 1, 4)
    with pytest.raises(AttributeError):
        shape.radius = 2.0
    with pytest.raises(AttributeError):
        shape.center = Point(1, 1)
    with pytest.raises(ValueError):
        shape.vertex_array[0, 0] = 5.0


def test_get_vertices_returns_copy():
    shape = RegularPolygon(Point(0, 0), 1, 4)
    vertices = shape.get_vertices()
    vertices.clear()
    assert len(shape.get_vertices()) == 4


# =============================================================================
# CIRCLE
# =============================================================================

def test_circle_sampled_vertices():
    circle = Circle(Point(2, 3), 1.5)
    vertices = circle.get_vertices()

    assert len(vertices) == 32
    assert vertices[0].x == pytest.approx(3.5)
    assert vertices[0].y == pytest.approx(3.0)
    for v in vertices:
        assert v.distance_to(circle.center) == pytest.approx(1.5)


def test_circle_vertices_cached():
    circle = Circle(Point(0, 0), 1)
    assert circle.vertex_array is circle.vertex_array


def test_circle_sample_count_configurable():
    CONFIG.geometry.circle_samples = 8
    assert len(Circle(Point(0, 0), 1).get_vertices()) == 8


def test_circle_bounds():
    assert Circle(Point(1, 2), 3).bounds == (-2.0, -1.0, 4.0, 5.0)


# =============================================================================
# REGULAR POLYGON
# =============================================================================

def test_square_vertices():
    square = RegularPolygon(Point(0, 0), 1.0, 4, 0.0)
    np.testing.assert_allclose(
        square.vertex_array,
        [[1, 0], [0, 1], [-1, 0], [0, -1]],
        atol=1e-12,
    )


def test_regular_polygon_rotation_and_offset():
    hexagon = RegularPolygon(Point(5, -2), 2.0, 6, math.pi / 6)
    first = hexagon.get_vertices()[0]
    assert first.x == pytest.approx(5 + 2 * math.cos(math.pi / 6))
    assert first.y == pytest.approx(-2 + 2 * math.sin(math.pi / 6))
    for v in hexagon.get_vertices():
        assert v.distance_to(hexagon.center) == pytest.approx(2.0)


@pytest.mark.parametrize("sides", [3, 4, 5, 8, 20])
def test_regular_polygon_counter_clockwise(sides):
    polygon = RegularPolygon(Point(0, 0), 1.0, sides, 0.3)
    assert len(polygon.get_vertices()) == sides
    assert polygon.sides == sides
    assert polygon.rotation_angle == 0.3
    assert polygon_signed_area(polygon.vertex_array) > 0


def test_regular_polygon_deterministic():
    a = RegularPolygon(Point(1, 1), 2.0, 7, 0.5)
    b = RegularPolygon(Point(1, 1), 2.0, 7, 0.5)
    np.testing.assert_array_equal(a.vertex_array, b.vertex_array)


# =============================================================================
# IRREGULAR POLYGON
# =============================================================================

def _turns(vertices):
    n = len(vertices)
    return [
        orientation(*vertices[i], *vertices[(i + 1) % n], *vertices[(i + 2) % n])
        for i in range(n)
    ]


@pytest.mark.parametrize("seed", range(30))
def test_irregular_polygon_is_convex(seed):
    polygon = IrregularPolygon(Point(10, -4), 3.0, 10, seed=seed)
    turns = _turns(polygon.vertex_array)
    assert all(t > 0 for t in turns)
    assert is_convex(polygon.vertex_array)


@pytest.mark.parametrize("seed", range(30))
def test_irregular_triangle_counter_clockwise(seed):
    polygon = IrregularPolygon(Point(0, 0), 1.0, 3, seed=seed)
    assert len(polygon.get_vertices()) == 3
    assert polygon_signed_area(polygon.vertex_array) > 0


def test_irregular_polygon_vertex_distances(rng):
    polygon = IrregularPolygon(Point(1, 2), 5.0, 12, rng=rng)
    for v in polygon.get_vertices():
        d = v.distance_to(polygon.center)
        assert 0.6 * 5.0 - 1e-9 <= d <= 5.0 + 1e-9


def test_irregular_polygon_hull_may_shrink():
    sizes = [len(IrregularPolygon(Point(0, 0), 1.0, 12, seed=s).get_vertices()) for s in range(20)]
    assert all(3 <= n <= 12 for n in sizes)
    assert min(sizes) < 12


def test_irregular_polygon_seeded_reproducible():
    a = IrregularPolygon(Point(0, 0), 1.0, 8, seed=42)
    b = IrregularPolygon(Point(0, 0), 1.0, 8, rng=np.random.default_rng(42))
    c = IrregularPolygon(Point(0, 0), 1.0, 8, seed=43)
    np.testing.assert_array_equal(a.vertex_array, b.vertex_array)
    assert not np.array_equal(a.vertex_array, c.vertex_array)
    assert a.num_vertices == 8


def test_irregular_polygon_keeps_seed_radius():
    polygon = IrregularPolygon(Point(0, 0), 4.0, 6, seed=3)
    assert polygon.radius == 4.0


def test_from_vertices():
    square = [(0, 0), (1, 0), (1, 1), (0, 1)]
    polygon = IrregularPolygon.from_vertices(Point(0.5, 0.5), 1.0, square, id="sq", color="blue")
    np.testing.assert_array_equal(polygon.vertex_array, square)
    assert polygon.id == "sq"
    assert polygon.color == "blue"
    assert polygon.get_shape_type() is ShapeType.IRREGULAR_POLYGON


def test_from_vertices_accepts_points():
    points = [Point(0, 0), Point(1, 0), Point(0, 1)]
    polygon = IrregularPolygon.from_vertices(Point(0, 0), 1.0, points)
    assert polygon.get_vertices() == points


_PENTAGRAM = [
    (math.cos(math.radians(a)), math.sin(math.radians(a))) for a in (90, 234, 18, 162, 306)
]
_TWICE_AROUND = [
    (math.cos(2 * math.pi * k * 2 / 7), math.sin(2 * math.pi * k * 2 / 7)) for k in range(7)
]


@pytest.mark.parametrize("vertices", [
    [(0, 0), (1, 0)],
    [(0, 0), (2, 1), (0, 2), (1, 1)],
    [(0, 0), (1, 0), (float('nan'), 1)],
    _PENTAGRAM,
    _TWICE_AROUND,
])
def test_from_vertices_rejects_bad_input(vertices):
    with pytest.raises(ValueError):
        IrregularPolygon.from_vertices(Point(0, 0), 1.0, vertices)


def test_from_vertices_stores_counter_clockwise():
    clockwise = [(0, 0), (0, 1), (1, 1), (1, 0)]
    polygon = IrregularPolygon.from_vertices(Point(0.5, 0.5), 1.0, clockwise)
    assert polygon_signed_area(polygon.vertex_array) == pytest.approx(1.0)
    assert {tuple(v) for v in polygon.vertex_array} == set(clockwise)
