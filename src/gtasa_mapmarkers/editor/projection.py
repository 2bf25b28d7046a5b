# projection.py
from dataclasses import dataclass
from typing import Tuple, Protocol

# GTA:SA world is 6000 x 6000 units centred on the origin.
WORLD_MIN = -3000.0
WORLD_MAX = 3000.0
# Leaflet CRS.Simple map: lat in [-192, 0], lng in [0, 192]
SCREEN_SIZE = 192.0


def number_map(num: float, in_min: float, in_max: float, out_min: float, out_max: float) -> float:
    """Linear range map. No clamping: out-of-range input extrapolates."""
    return (num - in_min) * (out_max - out_min) / (in_max - in_min) + out_min


class Projection(Protocol):
    def forward(self, a: float, b: float) -> Tuple[float, float]: ...
    def inverse(self, a: float, b: float) -> Tuple[float, float]: ...


@dataclass(frozen=True)
class AxisRange:
    in_min: float
    in_max: float
    out_min: float
    out_max: float

    def forward(self, v: float) -> float:
        return number_map(v, self.in_min, self.in_max, self.out_min, self.out_max)

    def inverse(self, v: float) -> float:
        return number_map(v, self.out_min, self.out_max, self.in_min, self.in_max)


@dataclass(frozen=True)
class ScreenProjection:
    """screen (lat, lng) <-> world (x, y)"""
    lng_to_x: AxisRange = AxisRange(0.0, SCREEN_SIZE, WORLD_MIN, WORLD_MAX)
    lat_to_y: AxisRange = AxisRange(-SCREEN_SIZE, 0.0, WORLD_MIN, WORLD_MAX)

    def forward(self, lat: float, lng: float) -> Tuple[float, float]:
        return self.lng_to_x.forward(lng), self.lat_to_y.forward(lat)

    def inverse(self, x: float, y: float) -> Tuple[float, float]:
        return self.lat_to_y.inverse(y), self.lng_to_x.inverse(x)


@dataclass(frozen=True)
class DenseProjection:
    """world (x, y) <-> dense (x, y), both axes shifted to [0, 6000]"""
    axis: AxisRange = AxisRange(WORLD_MIN, WORLD_MAX, 0.0, WORLD_MAX - WORLD_MIN)

    def forward(self, x: float, y: float) -> Tuple[float, float]:
        return self.axis.forward(x), self.axis.forward(y)

    def inverse(self, x: float, y: float) -> Tuple[float, float]:
        return self.axis.inverse(x), self.axis.inverse(y)


@dataclass(frozen=True)
class CoordinateMapper:
    screen: ScreenProjection = ScreenProjection()
    dense: DenseProjection = DenseProjection()

    # screen (lat, lng) -> world (x, y)
    def to_world(self, lat: float, lng: float) -> Tuple[float, float]:
        return self.screen.forward(lat, lng)

    # world (x, y) -> screen (lat, lng)
    def to_screen(self, x: float, y: float) -> Tuple[float, float]:
        return self.screen.inverse(x, y)

    # world -> positive, zoom-independent units for distance math
    def to_dense(self, x: float, y: float) -> Tuple[float, float]:
        return self.dense.forward(x, y)

    def from_dense(self, x: float, y: float) -> Tuple[float, float]:
        return self.dense.inverse(x, y)
