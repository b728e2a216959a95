"""Errors — exception hierarchy shared by the theory layer and the engine.

Taxonomy:
    ValidationError        – malformed input (names, fret patterns, tunings,
                             configuration values); raised immediately.
    UnplayableProgression  – a chord in a progression has no voicing inside
                             the searched fret window; raised while building
                             the voicing graph, before any path search.

Single-chord unplayability is *not* an exception: the enumerator returns an
empty list and :func:`solver.resolve_progression` returns an
:class:`~voicelead.fingering_engine.solver.Unplayable` result.
"""

from __future__ import annotations

from typing import Any


class VoiceLeadError(Exception):
    """Base class for every error raised by ``voicelead``."""


class ValidationError(VoiceLeadError, ValueError):
    """Raised for malformed chords, notes, tunings, fret patterns or config."""


class UnplayableProgression(VoiceLeadError):
    """Raised when a chord position yields no candidate voicings.

    Args:
        position: 0-based index of the offending chord in the progression.
        chord: The chord that could not be voiced.
    """

    def __init__(self, position: int, chord: Any) -> None:
        self.position = position
        self.chord = chord
        super().__init__(
            f"No voicing found for chord {chord} at position {position}"
        )
