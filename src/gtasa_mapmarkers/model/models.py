from __future__ import annotations
from dataclasses import dataclass, field, asdict
from typing import Dict, List, Sequence, Tuple

Vec2 = Tuple[float, float]


# --- palettes ---------------------------------------------------------

ICON_COUNT = 64
DEFAULT_ICON = 41
NO_POLYGON = 0

# index 0 is "no polygon"
POLYGON_COLOURS: Tuple[str, ...] = (
    "none",
    "red",
    "green",
    "blue",
    "yellow",
    "purple",
    "orange",
    "cyan",
    "magenta",
    "lime",
    "pink",
    "teal",
    "brown",
    "navy",
    "olive",
    "maroon",
    "white",
)


def polygon_colour(polygon_id: int) -> str:
    """polygon id -> colour name (ids past the palette wrap around)"""
    if polygon_id <= NO_POLYGON:
        return POLYGON_COLOURS[0]
    n = len(POLYGON_COLOURS) - 1
    return POLYGON_COLOURS[(polygon_id - 1) % n + 1]


# --- marker -------------------------------------------------------------

@dataclass(frozen=True)
class Marker:
    """A point in world space with an icon and an optional polygon id."""
    x: float
    y: float
    icon: int = DEFAULT_ICON
    polygon: int = NO_POLYGON
    uid: int | None = field(default=None, compare=False, repr=False)

    @property
    def in_polygon(self) -> bool:
        return self.polygon > NO_POLYGON

    def to_dict(self) -> Dict[str, float | int]:
        d = asdict(self)
        d.pop("uid")
        return d


MarkerSequence = Tuple[Marker, ...]


def polygon_ids(markers: Sequence[Marker]) -> List[int]:
    """Ascending list of the positive polygon ids in use."""
    return sorted({m.polygon for m in markers if m.in_polygon})


def max_polygon_id(markers: Sequence[Marker]) -> int:
    return max((m.polygon for m in markers if m.in_polygon), default=NO_POLYGON)


def rings(markers: Sequence[Marker]) -> Dict[int, List[Marker]]:
    """polygon id -> its members in boundary traversal order"""
    out: Dict[int, List[Marker]] = {}
    for m in markers:
        if m.in_polygon:
            out.setdefault(m.polygon, []).append(m)
    return out


__all__ = [
    "Vec2",
    "ICON_COUNT",
    "DEFAULT_ICON",
    "NO_POLYGON",
    "POLYGON_COLOURS",
    "polygon_colour",
    "Marker",
    "MarkerSequence",
    "polygon_ids",
    "max_polygon_id",
    "rings",
]
