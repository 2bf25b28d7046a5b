from __future__ import annotations
import pathlib, json, math, re, warnings
from dataclasses import dataclass, field
from typing import Any, List, Sequence, Tuple

from jsonschema import ValidationError, validate

from .models import Marker, DEFAULT_ICON, NO_POLYGON

_FLOAT_PREFIX = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")

LIST_HEADER = ("x", "y", "icon", "polygon")


class ImportRejected(ValueError):
    """The whole payload was unusable; nothing was imported."""


@dataclass
class ImportReport:
    markers: Tuple[Marker, ...] = ()
    total: int = 0
    errors: List[str] = field(default_factory=list)

    @property
    def imported(self) -> int:
        return len(self.markers)

    @property
    def failed(self) -> int:
        return len(self.errors)

    def summary(self) -> str:
        return f"Imported {self.imported}/{self.total} markers."


# --- coercion ---------------------------------------------------------
# Leading-number parsing: "12.5abc" -> 12.5, "abc" -> None.

def parse_float(value: Any) -> float | None:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        f = float(value)
        return f if math.isfinite(f) else None
    m = _FLOAT_PREFIX.match(str(value))
    if not m:
        return None
    f = float(m.group(1))
    return f if math.isfinite(f) else None


def parse_int(value: Any) -> int | None:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, int):
        return value
    m = _INT_PREFIX.match(str(value))
    return int(m.group(1)) if m else None


def format_list_value(v: float | int) -> str:
    """Non-integer values get two decimals, integer values none."""
    if (v * 10.0) % 10 != 0:
        return f"{v:.2f}"
    return str(int(v))


class MarkerCodec:
    """JSON / delimited-list reader and writer for marker sequences"""

    def __init__(self, validate_schema: bool = True, schema_dir: str | pathlib.Path | None = None):
        self.validate_schema = validate_schema
        if schema_dir is None:
            self.schema_dir = pathlib.Path(__file__).parent.parent / "schemas"
        else:
            self.schema_dir = pathlib.Path(schema_dir)

    def _load_json(self, path: str | pathlib.Path) -> Any:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)

    def _validate(self, instance: Any, schema_name: str) -> None:
        if self.validate_schema:
            schema = self._load_json(self.schema_dir / schema_name)
            validate(instance=instance, schema=schema)

    # --- JSON ---------------------------------------------------------

    def loads_json(self, text: str) -> ImportReport:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ImportRejected(f"Unable to parse the JSON: {e}") from e
        if not isinstance(data, list):
            raise ImportRejected("You must supply a LIST of coords!")
        try:
            self._validate(data, "marker_list.schema.json")
        except ValidationError as e:
            raise ImportRejected(f"Marker list does not match schema: {e.message}") from e

        report = ImportReport(total=len(data))
        markers: List[Marker] = []
        for n, rec in enumerate(data):
            if not isinstance(rec, dict):
                report.errors.append(f"record {n}: not an object")
                continue
            if "x" not in rec:
                report.errors.append(f"record {n}: missing x")
                continue
            if "y" not in rec:
                report.errors.append(f"record {n}: missing y")
                continue
            x, y = parse_float(rec["x"]), parse_float(rec["y"])
            if x is None or y is None:
                report.errors.append(f"record {n}: non-numeric coordinate")
                continue
            # 0 and "absent" both fall back to the default
            icon = parse_int(rec.get("icon")) or DEFAULT_ICON
            polygon = parse_int(rec.get("polygon")) or NO_POLYGON
            markers.append(Marker(x=x, y=y, icon=icon, polygon=polygon))

        report.markers = tuple(markers)
        _warn_failures(report)
        return report

    def load_json(self, path: str | pathlib.Path) -> ImportReport:
        return self.loads_json(pathlib.Path(path).read_text(encoding="utf-8"))

    def dumps_json(self, markers: Sequence[Marker]) -> str:
        return json.dumps([m.to_dict() for m in markers], indent=4)

    # --- delimited list ----------------------------------------------

    def loads_list(self, text: str) -> ImportReport:
        lines = [ln for ln in text.splitlines() if ln.strip()]
        report = ImportReport(total=len(lines))
        markers: List[Marker] = []

        for ln in lines:
            ex = ln.split(",")
            x = parse_float(ex[0])
            if x is None:
                report.errors.append(f"The first coordinate of {ln!r} is not numeric")
                continue
            if len(ex) < 2:
                report.errors.append(f"Line {ln!r} has less than 2 coordinates")
                continue
            y = parse_float(ex[1])
            if y is None:
                report.errors.append(f"The second coordinate of {ln!r} is not numeric")
                continue

            icon, polygon = DEFAULT_ICON, NO_POLYGON
            if len(ex) >= 3 and ex[2].strip():
                icon = _or_default(parse_int(ex[2]), DEFAULT_ICON)
            if len(ex) >= 4 and ex[3].strip():
                polygon = _or_default(parse_int(ex[3]), NO_POLYGON)
            markers.append(Marker(x=x, y=y, icon=icon, polygon=polygon))

        report.markers = tuple(markers)
        _warn_failures(report)
        return report

    def load_list(self, path: str | pathlib.Path) -> ImportReport:
        return self.loads_list(pathlib.Path(path).read_text(encoding="utf-8"))

    def dumps_list(self, markers: Sequence[Marker]) -> str:
        rows = [",".join(LIST_HEADER)]
        for m in markers:
            rows.append(",".join(format_list_value(v) for v in m.to_dict().values()))
        return "\n".join(rows)

    # --- by format name ----------------------------------------------

    def loads(self, text: str, fmt: str) -> ImportReport:
        if fmt == "json":
            return self.loads_json(text)
        if fmt == "list":
            return self.loads_list(text)
        raise ValueError(f"Unknown marker format {fmt!r}")

    def dumps(self, markers: Sequence[Marker], fmt: str) -> str:
        if fmt == "json":
            return self.dumps_json(markers)
        if fmt == "list":
            return self.dumps_list(markers)
        raise ValueError(f"Unknown marker format {fmt!r}")


# ----------------- helpers -----------------

def _or_default(value: int | None, default: int) -> int:
    return default if value is None else value


def _warn_failures(report: ImportReport) -> None:
    if report.errors:
        warnings.warn(
            f"Skipped {report.failed} of {report.total} marker records: " + "; ".join(report.errors)
        )


def guess_format(path: str | pathlib.Path) -> str:
    return "json" if pathlib.Path(path).suffix.lower() == ".json" else "list"
