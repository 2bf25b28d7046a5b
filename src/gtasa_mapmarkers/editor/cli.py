# cli.py
import argparse, math, sys
from pathlib import Path
from .config import EditorConfig, load_json
from .editor import MarkerListEditor, NothingToExport
from gtasa_mapmarkers.model.codec import ImportRejected, guess_format

def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Batch-edit a GTA:SA map marker list")
    p.add_argument("--config", help="JSON file with EditorConfig defaults")
    p.add_argument("--input", help="marker file to load (replaces the session)")
    p.add_argument("--input-format", choices=["json", "list"])
    p.add_argument("--append", action="append", help="marker file to import as an additional polygon")
    p.add_argument("--click", dest="clicks", action="append", metavar="LAT,LNG",
                   help="simulate a map click at a screen position")
    p.add_argument("--zoom", type=int, help="map zoom level used for edge snapping")
    p.add_argument("--output", help="write the result here instead of stdout")
    p.add_argument("--output-format", choices=["json", "list"])
    return p.parse_args(_join_click_values(sys.argv[1:] if argv is None else argv))

def _join_click_values(argv):
    # "--click -96,96" would be taken for an option; rewrite it as "--click=-96,96"
    out, it = [], iter(argv)
    for a in it:
        v = next(it, None) if a == "--click" else None
        out.append(a if v is None else f"--click={v}")
    return out

def _parse_click(text: str) -> tuple[float, float]:
    parts = text.split(",")
    if len(parts) != 2:
        raise ValueError(f"expected LAT,LNG, got {text!r}")
    lat, lng = (float(v) for v in parts)
    if not (math.isfinite(lat) and math.isfinite(lng)):
        raise ValueError(f"non-finite click position {text!r}")
    return lat, lng

def _read(editor: MarkerListEditor, path: str, fmt: str | None, as_polygon: bool):
    text = Path(path).read_text(encoding="utf-8")
    fmt = fmt or guess_format(path)
    if fmt == "json":
        return editor.import_json(text, as_polygon=as_polygon)
    return editor.import_list(text, as_polygon=as_polygon)

def main(argv=None) -> int:
    args = parse_args(argv)
    cfg_dict = load_json(args.config)
    # JSON as defaults, CLI overrides
    for k, v in vars(args).items():
        if k == "config": continue
        if v is not None: cfg_dict[k] = v
    cfg = EditorConfig(**cfg_dict)

    try:
        clicks = [(c, _parse_click(c)) for c in cfg.clicks]
    except ValueError as e:
        print(f"[ERROR] bad --click value: {e}", file=sys.stderr)
        return 1

    editor = MarkerListEditor(config=cfg)

    try:
        if cfg.input:
            report = _read(editor, cfg.input, cfg.input_format, as_polygon=False)
            print(f"[{cfg.input}] {report.summary()}", file=sys.stderr)
        for path in cfg.append:
            report = _read(editor, path, None, as_polygon=True)
            print(f"[{path}] {report.summary()} (as additional polygon)", file=sys.stderr)
    except ImportRejected as e:
        print(f"[ERROR] import rejected: {e}", file=sys.stderr)
        return 1

    for c, (lat, lng) in clicks:
        idx = editor.click(lat, lng)
        m = editor[idx]
        print(f"click {c} -> marker {idx} ({m.x:.2f}, {m.y:.2f}) polygon={m.polygon}", file=sys.stderr)

    try:
        out = editor.export_json() if cfg.output_format == "json" else editor.export_list()
    except NothingToExport as e:
        print(f"[WARN] {e}", file=sys.stderr)
        return 1

    if cfg.output:
        Path(cfg.output).write_text(out + "\n", encoding="utf-8")
        print(f"Wrote {len(editor)} markers to {Path(cfg.output).resolve()}")
    else:
        print(out)
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
