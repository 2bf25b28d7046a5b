"""Shared fixtures for the marker editor test suite.

Fixtures:
    square: four-corner ring on polygon 1 (0,0)-(100,0)-(100,100)-(0,100)
    segment_with_click: the two-marker ring plus a fresh unaffiliated marker
    editor: MarkerListEditor with a fixed zoom of 4
"""
import pytest

from gtasa_mapmarkers.editor.config import EditorConfig
from gtasa_mapmarkers.editor.editor import MarkerListEditor
from gtasa_mapmarkers.model.models import Marker


@pytest.fixture
def square():
    return (
        Marker(0.0, 0.0, 41, 1),
        Marker(100.0, 0.0, 41, 1),
        Marker(100.0, 100.0, 41, 1),
        Marker(0.0, 100.0, 41, 1),
    )


@pytest.fixture
def segment_with_click():
    return (
        Marker(0.0, 0.0, 7, 1),
        Marker(100.0, 0.0, 7, 1),
        Marker(50.0, 1.0, 41, 0),
    )


@pytest.fixture
def editor():
    return MarkerListEditor(config=EditorConfig(zoom=4))
