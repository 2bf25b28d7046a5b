"""
Polygon membership: decide which ring a marker belongs to and where to splice it.

Rings are implicit. The members of polygon ``p`` taken in list order (and read
cyclically) are its boundary, so joining a ring means moving the marker to the
slot right after the member whose outgoing edge it lies on.
"""
from __future__ import annotations
import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import List, Optional, Sequence, Tuple

import numpy as np

from gtasa_mapmarkers.model.models import Marker, MarkerSequence, polygon_ids
from .projection import CoordinateMapper

RAY_STEP = 10.0
RAY_CHUNK = 4096  # ray samples evaluated per batch
MAX_ZOOM = 7


class Mode(str, Enum):
    ASSIGN = "assign"      # fresh click: try every polygon, adopt the anchor's polygon/icon
    VALIDATE = "validate"  # drag: only re-order within the marker's own polygon


@dataclass(frozen=True)
class Hit:
    polygon: int
    anchor_index: int   # index into the full sequence
    step: float         # distance along the edge where the ray hit


def snap_radius(max_distance: float, current_zoom: int | None) -> float:
    """Hit tolerance in dense units; grows as the map is zoomed out."""
    zoom_normalised = MAX_ZOOM - (current_zoom or 0)
    return (max_distance / 5) * (zoom_normalised + 1)


def raycast(start: Tuple[float, float], end: Tuple[float, float],
            target: Tuple[float, float], radius: float) -> Optional[float]:
    """
    Walk from start towards end in RAY_STEP increments (step < edge length) and
    return the first step whose sample point lies within radius of target.
    """
    dx, dy = end[0] - start[0], end[1] - start[1]
    length = math.hypot(dx, dy)
    if not 0.0 < length < math.inf:
        return None
    angle = math.atan2(dy, dx)
    cos_a, sin_a = math.cos(angle), math.sin(angle)

    # A sample at `step` is at least |step - along| from the target, so only
    # steps within radius of the target's projection can hit (padded a step).
    along = (target[0] - start[0]) * cos_a + (target[1] - start[1]) * sin_a
    if not math.isfinite(along):
        return None
    k_lo = max(0, math.floor((along - radius) / RAY_STEP) - 1)
    k_hi = min(math.ceil(length / RAY_STEP), math.ceil((along + radius) / RAY_STEP) + 2)

    for k0 in range(k_lo, k_hi, RAY_CHUNK):
        steps = np.arange(k0, min(k0 + RAY_CHUNK, k_hi), dtype=float) * RAY_STEP
        steps = steps[steps < length]
        px = steps * cos_a + start[0]
        py = steps * sin_a + start[1]
        dist = np.hypot(px - target[0], py - target[1])

        hits = np.flatnonzero(dist <= radius)
        if hits.size:
            return float(steps[hits[0]])
    return None


class PolygonMembershipEngine:
    def __init__(self, mapper: CoordinateMapper | None = None):
        self.mapper = mapper or CoordinateMapper()

    def _ring(self, markers: Sequence[Marker], polygon: int, target_index: int) -> List[int]:
        return [i for i, m in enumerate(markers) if m.polygon == polygon and i != target_index]

    def _candidates(self, markers: Sequence[Marker], target: Marker, mode: Mode) -> List[int]:
        if mode is Mode.VALIDATE:
            return [target.polygon]
        return polygon_ids(markers)

    def find_anchor(self, markers: Sequence[Marker], target_index: int, mode: Mode,
                    max_distance: float, current_zoom: int | None = 0) -> Optional[Hit]:
        """First (polygon, ring position, step) hit, or None."""
        mode = Mode(mode)
        if not 0 <= target_index < len(markers):
            return None
        target = markers[target_index]
        if mode is Mode.VALIDATE and not target.in_polygon:
            return None

        radius = snap_radius(max_distance, current_zoom)
        dense = self.mapper.to_dense
        tpos = dense(target.x, target.y)

        for polygon in self._candidates(markers, target, mode):
            ring = self._ring(markers, polygon, target_index)
            for i, idx in enumerate(ring):
                nxt = markers[ring[(i + 1) % len(ring)]]
                cur = markers[idx]
                step = raycast(dense(cur.x, cur.y), dense(nxt.x, nxt.y), tpos, radius)
                if step is not None:
                    return Hit(polygon=polygon, anchor_index=idx, step=step)
        return None

    def evaluate(self, markers: Sequence[Marker], target_index: int, mode: Mode,
                 max_distance: float, current_zoom: int | None = 0) -> MarkerSequence:
        """
        Return a new sequence with the target spliced after its anchor, or the
        input (as a tuple) unchanged when nothing is hit. The input is never
        mutated.
        """
        markers = tuple(markers)
        mode = Mode(mode)
        hit = self.find_anchor(markers, target_index, mode, max_distance, current_zoom)
        if hit is None:
            return markers
        return splice_after(markers, target_index, hit.anchor_index, adopt=(mode is Mode.ASSIGN))


def splice_after(markers: Sequence[Marker], target_index: int, anchor_index: int,
                 adopt: bool = False) -> MarkerSequence:
    """Move markers[target_index] to just after markers[anchor_index]."""
    anchor = markers[anchor_index]
    target = markers[target_index]
    if adopt:
        target = replace(target, polygon=anchor.polygon, icon=anchor.icon)

    rest = [m for i, m in enumerate(markers) if i != target_index]
    pos = anchor_index if anchor_index < target_index else anchor_index - 1
    rest.insert(pos + 1, target)
    return tuple(rest)


_default_engine = PolygonMembershipEngine()


def evaluate(markers: Sequence[Marker], target_index: int, mode: Mode,
             max_distance: float, current_zoom: int | None = 0) -> MarkerSequence:
    return _default_engine.evaluate(markers, target_index, mode, max_distance, current_zoom)
