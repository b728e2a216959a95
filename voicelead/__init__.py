"""voicelead — chord voicings and voice leading for fretted instruments."""

from voicelead.config import VoicingConfig, load_config
from voicelead.errors import UnplayableProgression, ValidationError, VoiceLeadError
from voicelead.fingering_engine import (
    Distance,
    Unplayable,
    VoiceLeading,
    Voicing,
    VoicingGraph,
    annotate_progression,
    derive_fingering,
    distance,
    fingering_distance,
    generate_voicings,
    has_barre,
    resolve_progression,
)
from voicelead.theory import Chord, ChordSequence, Note, Tuning

__version__ = "0.1.0"

__all__ = [
    "Chord",
    "ChordSequence",
    "Distance",
    "Note",
    "Tuning",
    "Unplayable",
    "UnplayableProgression",
    "ValidationError",
    "VoiceLeadError",
    "VoiceLeading",
    "Voicing",
    "VoicingConfig",
    "VoicingGraph",
    "annotate_progression",
    "derive_fingering",
    "distance",
    "fingering_distance",
    "generate_voicings",
    "has_barre",
    "load_config",
    "resolve_progression",
]
