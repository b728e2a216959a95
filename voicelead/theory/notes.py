"""Notes — pitch classes, staff positions, notes and intervals.

A note is a ``(pitch_class, staff_position)`` pair. The pitch class (0–11,
C = 0) says which key is played; the staff position (0–6, C..B) says how the
note is written, i.e. whether an enharmonic pitch is spelled sharp or flat.

Spelling rules:
    - a natural on its own staff position prints as the letter (``E``),
    - one or two semitones above the natural print with the sharp name,
    - one or two semitones below the natural print with the flat name.

So ``E#`` prints as ``F`` and ``C double flat`` prints as ``Bb``. Notes
compare equal when they print the same name.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Final

from voicelead.errors import ValidationError


# ── Pitch / staff constants ───────────────────────────────────
PITCH_CLASS_COUNT: Final[int] = 12
STAFF_POSITION_COUNT: Final[int] = 7

LETTERS: Final[str] = "CDEFGAB"
NATURAL_PITCH_CLASSES: Final[tuple[int, ...]] = (0, 2, 4, 5, 7, 9, 11)

SHARP_NAMES: Final[tuple[str, ...]] = (
    "C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B",
)
FLAT_NAMES: Final[tuple[str, ...]] = (
    "C", "Db", "D", "Eb", "E", "F", "Gb", "G", "Ab", "A", "Bb", "B",
)

_ACCIDENTALS: Final[dict[str, int]] = {"": 0, "#": 1, "b": -1}
_NOTE_RE = re.compile(r"^(?P<letter>[A-G])(?P<accidental>[#b]?)$")


def pitch_class(n: int) -> int:
    """Map any integer onto the 12 pitch classes (``12 → 0``, ``-1 → 11``)."""
    return n % PITCH_CLASS_COUNT


def semitones_between(low: int, high: int) -> int:
    """Semitones to go *up* from pitch class *low* to pitch class *high*.

    ``high`` is assumed to lie at most one octave above ``low``, so the
    result is always in ``[0, 11]`` (e.g. ``D`` above ``A`` is 5).
    """
    return (high - low) % PITCH_CLASS_COUNT


@dataclass(frozen=True)
class Interval:
    """A named musical interval.

    Attributes:
        symbol:    Short name such as ``"M3"`` or ``"P5"``.
        semitones: Size of the interval in semitones (may exceed 12).
        number:    Staff steps spanned, counted inclusively (unison = 1).
    """

    symbol: str
    semitones: int
    number: int

    @classmethod
    def from_str(cls, symbol: str) -> Interval:
        """Look up an interval by its symbol.

        Raises:
            ValidationError: If *symbol* is not a known interval.
        """
        try:
            return INTERVALS[symbol]
        except KeyError:
            raise ValidationError(f'Could not parse interval name "{symbol}"') from None

    @property
    def pitch_class_offset(self) -> int:
        """The interval folded into one octave (``M9`` → 2)."""
        return pitch_class(self.semitones)

    def __str__(self) -> str:
        return self.symbol


INTERVALS: Final[dict[str, Interval]] = {
    iv.symbol: iv
    for iv in (
        Interval("P1", 0, 1),
        Interval("M2", 2, 2),
        Interval("m3", 3, 3),
        Interval("M3", 4, 3),
        Interval("P4", 5, 4),
        Interval("d5", 6, 5),
        Interval("P5", 7, 5),
        Interval("A5", 8, 5),
        Interval("M6", 9, 6),
        Interval("d7", 9, 7),
        Interval("m7", 10, 7),
        Interval("M7", 11, 7),
        Interval("M9", 14, 9),
        Interval("P11", 17, 11),
        Interval("M13", 21, 13),
    )
}


@dataclass(frozen=True, eq=False)
class Note:
    """A note such as ``C``, ``C#`` or ``Db``."""

    pitch_class: int
    staff_position: int

    def __post_init__(self) -> None:
        offset = pitch_class(self.pitch_class - NATURAL_PITCH_CLASSES[self.staff_position])
        if offset not in (0, 1, 2, 10, 11):
            raise ValidationError(
                f"Impossible note: pitch class {self.pitch_class} "
                f"on staff position {LETTERS[self.staff_position]}"
            )

    # ── Constructors ──────────────────────────────────────────

    @classmethod
    def from_str(cls, name: str) -> Note:
        """Parse a note name (``C``, ``F#``, ``Bb`` …).

        Raises:
            ValidationError: If *name* is not a valid note name.
        """
        match = _NOTE_RE.match(name.strip())
        if match is None:
            raise ValidationError(f'Could not parse note name "{name}"')
        staff_position = LETTERS.index(match["letter"])
        natural = NATURAL_PITCH_CLASSES[staff_position]
        return cls(pitch_class(natural + _ACCIDENTALS[match["accidental"]]), staff_position)

    @classmethod
    def from_pitch_class(cls, pc: int, prefer_flat: bool = False) -> Note:
        """Build a note from a pitch class, spelled sharp unless *prefer_flat*."""
        pc = pitch_class(pc)
        name = FLAT_NAMES[pc] if prefer_flat else SHARP_NAMES[pc]
        return cls(pc, LETTERS.index(name[0]))

    # ── Spelling ──────────────────────────────────────────────

    @property
    def name(self) -> str:
        offset = pitch_class(self.pitch_class - NATURAL_PITCH_CLASSES[self.staff_position])
        if offset == 0:
            return LETTERS[self.staff_position]
        if offset in (1, 2):
            return SHARP_NAMES[self.pitch_class]
        return FLAT_NAMES[self.pitch_class]

    def is_white_note(self) -> bool:
        """Return ``True`` for notes of the C major scale."""
        return self.pitch_class in NATURAL_PITCH_CLASSES

    # ── Arithmetic ────────────────────────────────────────────

    def transpose(self, semitones: int) -> Note:
        """Move the note by *semitones*.

        The spelling is kept when the pitch class does not change (adding 0
        or 12). Otherwise moving up spells sharp and moving down spells flat.
        """
        pc = pitch_class(self.pitch_class + semitones)
        if pc == self.pitch_class:
            return self
        return Note.from_pitch_class(pc, prefer_flat=semitones < 0)

    def __add__(self, other: Interval | int) -> Note:
        if isinstance(other, Interval):
            return Note(
                pitch_class(self.pitch_class + other.semitones),
                (self.staff_position + other.number - 1) % STAFF_POSITION_COUNT,
            )
        if isinstance(other, int):
            return self.transpose(other)
        return NotImplemented

    def __sub__(self, other: int) -> Note:
        if isinstance(other, int):
            return self.transpose(-other)
        return NotImplemented

    # ── Identity ──────────────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Note):
            return NotImplemented
        return self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"Note({self.name})"
