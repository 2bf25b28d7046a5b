"""
Model layer: immutable markers plus text import/export.

- models: Marker, palettes, ring helpers
- codec: MarkerCodec (JSON / delimited list), ImportReport, ImportRejected
"""
__all__ = ["models", "codec"]
