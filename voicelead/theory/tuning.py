"""Tuning — open-string notes of a fretted instrument.

Strings are ordered as they appear in a fret pattern (for the ukulele:
G C E A, the re-entrant G string first). Preset tunings transpose the
standard G C E A ukulele tuning:

    C  →  G  C  E  A   (standard)
    D  →  A  D  F# B
    G  →  D  G  B  E   (baritone)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from voicelead.errors import ValidationError
from voicelead.theory.notes import Interval, Note, pitch_class


_BASE_ROOTS: Final[tuple[str, ...]] = ("G", "C", "E", "A")

#: Preset name → transposition of the G C E A base tuning.
PRESET_TUNINGS: Final[dict[str, str]] = {
    "C": "P1",
    "D": "M2",
    "G": "P5",
}


@dataclass(frozen=True)
class Tuning:
    """An ordered set of open-string notes plus the transposition applied.

    Attributes:
        name:      Preset name (``"C"``) or the custom note list.
        roots:     Untransposed open-string notes, one per string.
        interval:  Transposition applied on top of *roots*.
    """

    name: str
    roots: tuple[Note, ...]
    interval: Interval = Interval.from_str("P1")

    def __post_init__(self) -> None:
        if not self.roots:
            raise ValidationError("A tuning needs at least one string")

    @classmethod
    def from_name(cls, name: str) -> Tuning:
        """Return one of the preset tunings (``C``, ``D`` or ``G``).

        Raises:
            ValidationError: If *name* is not a preset.
        """
        try:
            symbol = PRESET_TUNINGS[name.upper()]
        except KeyError:
            presets = ", ".join(PRESET_TUNINGS)
            raise ValidationError(
                f"Unknown tuning '{name}'. Use one of: {presets}."
            ) from None
        roots = tuple(Note.from_str(r) for r in _BASE_ROOTS)
        return cls(name.upper(), roots, Interval.from_str(symbol))

    @classmethod
    def from_notes(cls, notes: str) -> Tuning:
        """Build a custom tuning from whitespace-separated note names."""
        roots = tuple(Note.from_str(n) for n in notes.split())
        return cls(" ".join(str(r) for r in roots), roots)

    @property
    def string_count(self) -> int:
        return len(self.roots)

    def open_string_notes(self) -> tuple[Note, ...]:
        """The sounding open-string notes, lowest string index first."""
        return tuple(root + self.interval for root in self.roots)

    def fret_to_pitch_class(self, string: int, fret: int) -> int:
        """Pitch class sounded on *string* when pressed at *fret*."""
        if not 0 <= string < self.string_count:
            raise ValidationError(
                f"String index {string} out of range for {self.string_count} strings"
            )
        return pitch_class(self.open_string_notes()[string].pitch_class + fret)

    def __str__(self) -> str:
        return self.name
