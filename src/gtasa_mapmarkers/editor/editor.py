from __future__ import annotations
import itertools
from collections import deque
from dataclasses import replace
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from gtasa_mapmarkers.model.models import Marker, MarkerSequence, max_polygon_id, rings
from gtasa_mapmarkers.model.codec import ImportReport, MarkerCodec
from .config import EditorConfig
from .membership import Mode, PolygonMembershipEngine
from .projection import CoordinateMapper


class ImportMode(str, Enum):
    REPLACE = "replace"
    APPEND_AS_NEW_POLYGON = "append_as_new_polygon"


class NothingToExport(RuntimeError):
    pass


class MarkerListEditor:
    """
    Owner of the canonical marker sequence.

    Every mutation builds a new tuple and commits it, so the engine only ever
    sees immutable snapshots and each commit can be undone. Markers are handed
    a uid on entry; the focused marker is tracked by uid so that it survives
    splices and deletions shift its index.

    Out-of-range indices are ignored silently (stale UI selections).
    """

    def __init__(
        self,
        markers: Iterable[Marker] = (),
        config: EditorConfig | None = None,
        mapper: CoordinateMapper | None = None,
        engine: PolygonMembershipEngine | None = None,
        codec: MarkerCodec | None = None,
    ):
        self.config = config or EditorConfig()
        self.mapper = mapper or CoordinateMapper()
        self.engine = engine or PolygonMembershipEngine(self.mapper)
        self.codec = codec or MarkerCodec(validate_schema=self.config.validate_schema)
        self.zoom: int | None = self.config.zoom

        self._uids = itertools.count(1)
        self._markers: MarkerSequence = tuple(self._issue(m) for m in markers)
        self._focus_uid: int | None = None
        self._undo: deque[MarkerSequence] = deque(maxlen=max(0, self.config.history_size))
        self._redo: List[MarkerSequence] = []
        self.version = 0

    # --- state ----------------------------------------------------------

    @property
    def markers(self) -> MarkerSequence:
        return self._markers

    def __len__(self) -> int:
        return len(self._markers)

    def __iter__(self) -> Iterator[Marker]:
        return iter(self._markers)

    def __getitem__(self, index: int) -> Marker:
        return self._markers[index]

    def _valid(self, index: int) -> bool:
        return 0 <= index < len(self._markers)

    def _issue(self, marker: Marker) -> Marker:
        if marker.uid is not None:
            return marker
        return replace(marker, uid=next(self._uids))

    def _commit(self, markers: Iterable[Marker]) -> None:
        self._undo.append(self._markers)
        self._redo.clear()
        self._markers = tuple(markers)
        self.version += 1

    def index_of(self, uid: int) -> Optional[int]:
        for i, m in enumerate(self._markers):
            if m.uid == uid:
                return i
        return None

    def polygons(self) -> Dict[int, List[Marker]]:
        return rings(self._markers)

    # --- focus ----------------------------------------------------------

    @property
    def focused_index(self) -> Optional[int]:
        if self._focus_uid is None:
            return None
        return self.index_of(self._focus_uid)

    def focus(self, index: int) -> None:
        if self._valid(index):
            self._focus_uid = self._markers[index].uid

    def clear_focus(self) -> None:
        self._focus_uid = None

    # --- marker operations ------------------------------------------------

    def add_marker(self, world_pos: Tuple[float, float], defaults: Mapping[str, int] | None = None) -> int:
        """Append a marker, let it join the nearest ring edge, return its final index."""
        last = self._markers[-1] if self._markers else None
        icon = last.icon if last and last.icon else self.config.default_icon
        polygon = last.polygon if last and last.polygon else self.config.default_polygon
        if defaults:
            icon = defaults.get("icon", icon)
            polygon = defaults.get("polygon", polygon)

        x, y = world_pos
        marker = self._issue(Marker(x=float(x), y=float(y), icon=icon, polygon=polygon))
        staged = self._markers + (marker,)
        result = self.engine.evaluate(
            staged, len(staged) - 1, Mode.ASSIGN, self.config.add_max_distance, self.zoom
        )
        self._commit(result)
        self._focus_uid = marker.uid
        return self.index_of(marker.uid)

    def move_marker(self, index: int, world_pos: Tuple[float, float]) -> None:
        if not self._valid(index):
            return
        x, y = world_pos
        staged = list(self._markers)
        staged[index] = replace(staged[index], x=float(x), y=float(y))
        result = self.engine.evaluate(
            staged, index, Mode.VALIDATE, self.config.move_max_distance, self.zoom
        )
        self._commit(result)

    def click(self, lat: float, lng: float) -> int:
        return self.add_marker(self.mapper.to_world(lat, lng))

    def drag(self, index: int, lat: float, lng: float) -> None:
        self.move_marker(index, self.mapper.to_world(lat, lng))

    def set_icon(self, index: int, icon_id: int) -> None:
        if not self._valid(index):
            return
        staged = list(self._markers)
        staged[index] = replace(staged[index], icon=icon_id)
        self._commit(staged)

    def set_polygon(self, index: int, polygon_id: int) -> None:
        if not self._valid(index):
            return
        staged = list(self._markers)
        staged[index] = replace(staged[index], polygon=polygon_id)
        self._commit(staged)

    def remove_marker(self, index: int) -> None:
        # polygon ids are left as they are, even if a ring empties out
        if not self._valid(index):
            return
        self._commit(self._markers[:index] + self._markers[index + 1:])

    def clear(self) -> None:
        self._commit(())

    # --- bulk import / export ------------------------------------------------

    def bulk_import(self, markers: Iterable[Marker], mode: ImportMode = ImportMode.REPLACE) -> None:
        """
        REPLACE swaps the whole sequence. APPEND_AS_NEW_POLYGON puts every
        imported marker on one fresh polygon id and appends them in the given
        order, which is trusted as ring order (no membership evaluation).
        """
        mode = ImportMode(mode)
        if mode is ImportMode.REPLACE:
            self._commit([self._issue(m) for m in markers])
            return
        # appended copies are new markers, even if they came from this editor
        new_id = max_polygon_id(self._markers) + 1
        self._commit(self._markers + tuple(
            replace(m, polygon=new_id, uid=next(self._uids)) for m in markers
        ))

    def _import(self, report: ImportReport, as_polygon: bool) -> ImportReport:
        mode = ImportMode.APPEND_AS_NEW_POLYGON if as_polygon else ImportMode.REPLACE
        self.bulk_import(report.markers, mode)
        return report

    def import_json(self, text: str, as_polygon: bool = False) -> ImportReport:
        return self._import(self.codec.loads_json(text), as_polygon)

    def import_list(self, text: str, as_polygon: bool = False) -> ImportReport:
        return self._import(self.codec.loads_list(text), as_polygon)

    def export_json(self) -> str:
        if not self._markers:
            raise NothingToExport("Nothing to export!")
        return self.codec.dumps_json(self._markers)

    def export_list(self) -> str:
        if not self._markers:
            raise NothingToExport("Nothing to export!")
        return self.codec.dumps_list(self._markers)

    # --- history ----------------------------------------------------------

    def undo(self) -> bool:
        if not self._undo:
            return False
        self._redo.append(self._markers)
        self._markers = self._undo.pop()
        self.version += 1
        return True

    def redo(self) -> bool:
        if not self._redo:
            return False
        self._undo.append(self._markers)
        self._markers = self._redo.pop()
        self.version += 1
        return True
