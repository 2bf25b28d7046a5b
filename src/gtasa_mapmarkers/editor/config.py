# config.py
from dataclasses import dataclass, field
from pathlib import Path
import json

from gtasa_mapmarkers.model.models import DEFAULT_ICON, NO_POLYGON

@dataclass
class EditorConfig:
    # session I/O (CLI)
    input: str | None = None
    input_format: str | None = None       # "json" | "list"; guessed from suffix when None
    append: list[str] = field(default_factory=list)  # files imported as additional polygons
    output: str | None = None
    output_format: str = "json"
    clicks: list[str] = field(default_factory=list)  # "lat,lng" screen positions
    # editor behaviour
    zoom: int | None = None
    add_max_distance: float = 15.0
    move_max_distance: float = 10.0
    default_icon: int = DEFAULT_ICON
    default_polygon: int = NO_POLYGON
    history_size: int = 100
    validate_schema: bool = True

def load_json(path: str | None) -> dict:
    if not path: return {}
    p = Path(path)
    if not p.exists(): raise FileNotFoundError(path)
    with p.open("r", encoding="utf-8") as f: return json.load(f)
