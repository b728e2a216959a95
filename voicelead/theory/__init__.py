"""Theory — the immutable music value layer.

Sub-package containing:
    notes   – pitch classes, staff-position spelling, notes and intervals
    chords  – chord types, chords and chord sequences
    tuning  – open-string tunings and presets
"""

from .chords import CHORD_TYPES, Chord, ChordSequence, ChordType
from .notes import Interval, Note
from .tuning import PRESET_TUNINGS, Tuning

__all__ = [
    "CHORD_TYPES",
    "Chord",
    "ChordSequence",
    "ChordType",
    "Interval",
    "Note",
    "PRESET_TUNINGS",
    "Tuning",
]
