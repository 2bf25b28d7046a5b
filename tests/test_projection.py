import pytest

from gtasa_mapmarkers.editor.projection import (
    AxisRange,
    CoordinateMapper,
    number_map,
)


@pytest.fixture
def mapper():
    return CoordinateMapper()


def test_number_map_is_linear():
    assert number_map(5, 0, 10, 0, 100) == 50
    assert number_map(0, 0, 10, -1, 1) == -1


def test_number_map_extrapolates():
    assert number_map(20, 0, 10, 0, 100) == 200
    assert number_map(-10, 0, 10, 0, 100) == -100


@pytest.mark.parametrize(
    "lat,lng,expected",
    [
        (-96.0, 96.0, (0.0, 0.0)),
        (0.0, 192.0, (3000.0, 3000.0)),
        (-192.0, 0.0, (-3000.0, -3000.0)),
        (-48.0, 48.0, (-1500.0, 1500.0)),
    ],
)
def test_to_world_corners(mapper, lat, lng, expected):
    assert mapper.to_world(lat, lng) == pytest.approx(expected)


def test_to_world_out_of_range_is_not_clamped(mapper):
    x, y = mapper.to_world(192.0, 384.0)
    assert x == pytest.approx(9000.0)
    assert y == pytest.approx(9000.0)


@pytest.mark.parametrize("x,y", [(0.0, 0.0), (-904.35, 675.78), (3000.0, -3000.0), (1234.5, 2999.9)])
def test_screen_round_trip(mapper, x, y):
    lat, lng = mapper.to_screen(x, y)
    assert mapper.to_world(lat, lng) == pytest.approx((x, y))


def test_to_screen_orders_lat_first(mapper):
    assert mapper.to_screen(3000.0, -3000.0) == pytest.approx((-192.0, 192.0))


def test_dense_space_is_positive(mapper):
    assert mapper.to_dense(-3000.0, 3000.0) == pytest.approx((0.0, 6000.0))
    assert mapper.to_dense(0.0, 0.0) == pytest.approx((3000.0, 3000.0))
    assert mapper.from_dense(3050.0, 2990.0) == pytest.approx((50.0, -10.0))


def test_axis_range_inverse():
    axis = AxisRange(0.0, 192.0, -3000.0, 3000.0)
    assert axis.inverse(axis.forward(17.0)) == pytest.approx(17.0)
