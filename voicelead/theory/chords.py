"""Chords — chord types, chords and chord sequences.

A chord type is a finite mapping from a chord symbol (``""``, ``m``,
``maj7`` …) to its intervals. Some intervals are *optional*: a voicing may
leave them out (e.g. the fifth of a seventh chord) so that chords with more
tones than strings remain playable.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Final, Iterable, Iterator

from voicelead.errors import ValidationError
from voicelead.theory.notes import Interval, Note, pitch_class, semitones_between


_CHORD_RE = re.compile(r"^(?P<root>[A-G][#b]?)(?P<symbol>.*)$")


@dataclass(frozen=True)
class ChordType:
    """The quality of a chord, defined by the intervals it contains.

    Attributes:
        symbol:   Suffix used in chord names (``""`` for major).
        name:     Human-readable description (``"dominant 7th"``).
        intervals: All intervals above the root, in order.
        optional: Intervals that a voicing may omit.
    """

    symbol: str
    name: str
    intervals: tuple[Interval, ...]
    optional: tuple[Interval, ...] = field(default=())

    @property
    def required(self) -> tuple[Interval, ...]:
        """Intervals that every voicing of this chord type must sound."""
        return tuple(iv for iv in self.intervals if iv not in self.optional)

    @classmethod
    def from_symbol(cls, symbol: str) -> ChordType:
        """Look up a chord type by its symbol.

        Raises:
            ValidationError: If the symbol is unknown.
        """
        for chord_type in CHORD_TYPES:
            if chord_type.symbol == symbol:
                return chord_type
        raise ValidationError(f'No valid chord type "{symbol}"')

    @classmethod
    def from_pitch_classes(
        cls, pitch_classes: list[int], string_count: int
    ) -> ChordType:
        """Determine the chord type of a pitch-class list whose root comes first.

        Every required interval must be present and every other pitch class
        must be one of the type's optional intervals. A chord type with more
        intervals than strings is matched as soon as it fills all strings.

        Raises:
            ValidationError: If no chord type matches.
        """
        diffs = sorted(semitones_between(pitch_classes[0], pc) for pc in pitch_classes)

        for chord_type in CHORD_TYPES:
            min_len = min(len(chord_type.intervals), string_count)
            if len(diffs) < min_len:
                continue

            required = [iv.pitch_class_offset for iv in chord_type.required]
            if sum(1 for d in diffs if d in required) != len(required):
                continue

            optional = [iv.pitch_class_offset for iv in chord_type.optional]
            if all(d in optional for d in diffs if d not in required):
                return chord_type

        raise ValidationError("No matching chord type found.")

    def __str__(self) -> str:
        return self.name


def _intervals(*symbols: str) -> tuple[Interval, ...]:
    return tuple(Interval.from_str(s) for s in symbols)


# ── Chord-type table (order decides name lookup priority) ─────
CHORD_TYPES: Final[tuple[ChordType, ...]] = (
    ChordType("", "major", _intervals("P1", "M3", "P5")),
    ChordType("maj7", "major 7th", _intervals("P1", "M3", "P5", "M7"), _intervals("P5")),
    ChordType("maj9", "major 9th", _intervals("P1", "M3", "P5", "M7", "M9"), _intervals("P5")),
    ChordType(
        "maj13",
        "major 13th",
        _intervals("P1", "M3", "P5", "M7", "M9", "P11", "M13"),
        _intervals("P5", "M9", "P11"),
    ),
    ChordType("6", "major 6th", _intervals("P1", "M3", "P5", "M6"), _intervals("P5")),
    ChordType("6/9", "sixth/ninth", _intervals("P1", "M3", "P5", "M6", "M9"), _intervals("P5")),
    ChordType("7", "dominant 7th", _intervals("P1", "M3", "P5", "m7"), _intervals("P5")),
    ChordType("9", "dominant 9th", _intervals("P1", "M3", "P5", "m7", "M9"), _intervals("P5")),
    ChordType(
        "13",
        "dominant 13th",
        _intervals("P1", "M3", "P5", "m7", "M9", "P11", "M13"),
        _intervals("P5", "M9", "P11"),
    ),
    ChordType("sus4", "suspended 4th", _intervals("P1", "P4", "P5"), _intervals("P5")),
    ChordType("sus2", "suspended 2nd", _intervals("P1", "M2", "P5"), _intervals("P5")),
    ChordType(
        "7sus4", "dominant 7th suspended 4th", _intervals("P1", "P4", "P5", "m7"), _intervals("P5")
    ),
    ChordType(
        "7sus2", "dominant 7th suspended 2nd", _intervals("P1", "M2", "P5", "m7"), _intervals("P5")
    ),
    ChordType("m", "minor", _intervals("P1", "m3", "P5")),
    ChordType("m7", "minor 7th", _intervals("P1", "m3", "P5", "m7"), _intervals("P5")),
    ChordType("mMaj7", "minor/major 7th", _intervals("P1", "m3", "P5", "M7"), _intervals("P5")),
    ChordType("dim", "diminished", _intervals("P1", "m3", "d5")),
    ChordType("dim7", "diminished 7th", _intervals("P1", "m3", "d5", "d7")),
    ChordType("m7b5", "half-diminished 7th", _intervals("P1", "m3", "d5", "m7")),
    ChordType("aug", "augmented", _intervals("P1", "M3", "A5")),
    ChordType("aug7", "augmented 7th", _intervals("P1", "M3", "A5", "m7")),
    ChordType("augMaj7", "augmented major 7th", _intervals("P1", "M3", "A5", "M7")),
)


@dataclass(frozen=True)
class Chord:
    """A chord such as ``C``, ``F#m`` or ``Bbmaj7``."""

    root: Note
    chord_type: ChordType

    @classmethod
    def from_str(cls, name: str) -> Chord:
        """Parse a chord name.

        Raises:
            ValidationError: If the root or the chord symbol is invalid.
        """
        match = _CHORD_RE.match(name.strip())
        if match is None:
            raise ValidationError(f'Could not parse chord name "{name}"')
        return cls(Note.from_str(match["root"]), ChordType.from_symbol(match["symbol"]))

    @classmethod
    def from_pitch_classes(cls, pitch_classes: list[int], string_count: int) -> Chord:
        """Name the chord spelled by *pitch_classes*, the first one being the root."""
        chord_type = ChordType.from_pitch_classes(pitch_classes, string_count)
        return cls(Note.from_pitch_class(pitch_classes[0]), chord_type)

    # ── Accessors used by the voicing engine ──────────────────

    def root_note(self) -> Note:
        return self.root

    def required_intervals(self) -> tuple[Interval, ...]:
        return self.chord_type.required

    def optional_intervals(self) -> tuple[Interval, ...]:
        return self.chord_type.optional

    def notes(self) -> tuple[Note, ...]:
        """All chord notes, spelled relative to the root."""
        return tuple(self.root + iv for iv in self.chord_type.intervals)

    def required_notes(self) -> tuple[Note, ...]:
        return tuple(self.root + iv for iv in self.required_intervals())

    def required_pitch_classes(self) -> frozenset[int]:
        return frozenset(note.pitch_class for note in self.required_notes())

    def pitch_classes(self) -> frozenset[int]:
        """Pitch classes of all chord tones, optional ones included."""
        return frozenset(note.pitch_class for note in self.notes())

    def note_for_pitch_class(self, pc: int) -> Note:
        """Return the chord's own spelling of *pc* (sharp spelling if foreign)."""
        pc = pitch_class(pc)
        for note in self.notes():
            if note.pitch_class == pc:
                return note
        return Note.from_pitch_class(pc)

    def contains(self, note: Note) -> bool:
        return note in self.notes()

    def transpose(self, semitones: int) -> Chord:
        return Chord(self.root.transpose(semitones), self.chord_type)

    @property
    def name(self) -> str:
        return f"{self.root}{self.chord_type.symbol}"

    def __str__(self) -> str:
        notes = " ".join(str(n) for n in self.notes())
        return f"{self.name} - {notes}"


@dataclass(frozen=True)
class ChordSequence:
    """An ordered progression of chords, e.g. ``"C Am F G7"``."""

    chords: tuple[Chord, ...] = ()

    @classmethod
    def from_str(cls, s: str) -> ChordSequence:
        """Parse a whitespace-separated list of chord names.

        Raises:
            ValidationError: If any chord name is invalid.
        """
        try:
            return cls(tuple(Chord.from_str(token) for token in s.split()))
        except ValidationError as exc:
            raise ValidationError(f'Could not parse chord sequence "{s}": {exc}') from exc

    @classmethod
    def from_chords(cls, chords: Iterable[Chord]) -> ChordSequence:
        return cls(tuple(chords))

    def transpose(self, semitones: int) -> ChordSequence:
        return ChordSequence(tuple(c.transpose(semitones) for c in self.chords))

    def __iter__(self) -> Iterator[Chord]:
        return iter(self.chords)

    def __len__(self) -> int:
        return len(self.chords)

    def __str__(self) -> str:
        return " ".join(c.name for c in self.chords)
