"""Fingering Engine — chord voicings and shortest-path voice leading.

Sub-package containing:
    voicing      – voicing type and enumeration of a chord's voicings
    fingering    – barre detection, finger assignment and finger movement
    cost_model   – distance between two voicings
    solver       – layered voicing graph and shortest-path search
    annotate     – orchestrates the pipeline and exports results
"""

from .annotate import annotate_progression, annotations_to_json_bytes
from .cost_model import Distance, VoicingCostModel, distance
from .fingering import (
    Fingering,
    FretPosition,
    derive_fingering,
    fingering_distance,
    fingers_on_strings,
    has_barre,
)
from .solver import Unplayable, VoiceLeading, VoicingGraph, resolve_progression
from .voicing import Voicing, generate_voicings, parse_fret_pattern

__all__ = [
    "Distance",
    "Fingering",
    "FretPosition",
    "Unplayable",
    "VoiceLeading",
    "Voicing",
    "VoicingCostModel",
    "VoicingGraph",
    "annotate_progression",
    "annotations_to_json_bytes",
    "derive_fingering",
    "distance",
    "fingering_distance",
    "fingers_on_strings",
    "generate_voicings",
    "has_barre",
    "parse_fret_pattern",
    "resolve_progression",
]
