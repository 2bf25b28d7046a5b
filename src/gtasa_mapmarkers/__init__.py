"""
gtasa_mapmarkers: marker / polygon editing core for the GTA:SA map.

- model: Marker data model and the JSON / list codec
- editor: coordinate mapping, polygon membership engine, MarkerListEditor, CLI
"""
from gtasa_mapmarkers.model.models import Marker
from gtasa_mapmarkers.editor.editor import ImportMode, MarkerListEditor
from gtasa_mapmarkers.editor.membership import Mode, evaluate

__version__ = "0.1.0"

__all__ = ["Marker", "MarkerListEditor", "ImportMode", "Mode", "evaluate"]
