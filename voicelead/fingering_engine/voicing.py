"""Voicing — fret combinations that sound a chord, and their enumeration.

Responsibilities:
    - Represent one concrete way to play a chord (a fret per string).
    - Enumerate every voicing of a chord under a tuning and fret window.
    - Name the chords that a given fret pattern spells.

Enumeration:
    For each string and each chord tone, the fret that sounds the tone is
    ``(tone - open_string) mod 12``; the same fret one octave up is a second
    candidate. The cross product of the per-string candidates is filtered
    down to voicings that sound every required tone and nothing outside the
    chord. Optional tones (e.g. the fifth of a seventh chord) may sound or
    be left out.

Ordering:
    Lowest pressed fret first (open strings ignored), then the fret tuple
    read from the first string to the last.
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass, field
from typing import Iterator, NamedTuple

from voicelead.config import VoicingConfig, default_config
from voicelead.errors import ValidationError
from voicelead.theory.chords import Chord
from voicelead.theory.notes import PITCH_CLASS_COUNT, Note, pitch_class
from voicelead.theory.tuning import Tuning

logger = logging.getLogger(__name__)


class StringState(NamedTuple):
    """One string of a voicing: open note, fret pressed and note sounded."""

    root: Note
    fret: int
    note: Note


@dataclass(frozen=True)
class Voicing:
    """A fret per string, lowest string index first.

    Attributes:
        tuning: The tuning the frets are played in.
        frets:  One fret per string (0 = open string).
        notes:  The sounded note per string. Derived from the frets when
            omitted (sharp spelling); the enumerator passes the chord's own
            spelling instead.

    Only negative frets are rejected here, since a voicing carries no
    instrument settings. The upper bound (``fret_limit``) is checked where a
    configuration is at hand: :meth:`from_pattern` and the enumerator.
    """

    tuning: Tuning
    frets: tuple[int, ...]
    notes: tuple[Note, ...] = field(default=(), compare=False)

    def __post_init__(self) -> None:
        frets = tuple(int(f) for f in self.frets)
        if len(frets) != self.tuning.string_count:
            raise ValidationError(
                f"Expected {self.tuning.string_count} frets for tuning {self.tuning}, "
                f"got {len(frets)}"
            )
        if any(f < 0 for f in frets):
            raise ValidationError(f"Frets must not be negative: {frets}")
        object.__setattr__(self, "frets", frets)

        if not self.notes:
            notes = tuple(
                root + fret for root, fret in zip(self.tuning.open_string_notes(), frets)
            )
            object.__setattr__(self, "notes", notes)

    @classmethod
    def for_chord(cls, frets: tuple[int, ...], tuning: Tuning, chord: Chord) -> Voicing:
        """Build a voicing whose notes are spelled the way *chord* spells them."""
        notes = tuple(
            chord.note_for_pitch_class(tuning.fret_to_pitch_class(string, fret))
            for string, fret in enumerate(frets)
        )
        return cls(tuning, frets, notes)

    @classmethod
    def from_pattern(
        cls, pattern: str, tuning: Tuning, config: VoicingConfig | None = None
    ) -> Voicing:
        """Build a voicing from a fret pattern such as ``"2220"`` or ``"7 8 9 10"``.

        Raises:
            ValidationError: If the pattern is malformed, has the wrong number
                of frets or uses a fret beyond ``config.fret_limit``.
        """
        cfg = config if config is not None else default_config()
        frets = parse_fret_pattern(pattern, tuning.string_count)
        check_frets(frets, cfg)
        return cls(tuning, frets)

    # ── Per-string views ──────────────────────────────────────

    @property
    def string_count(self) -> int:
        return len(self.frets)

    def strings(self) -> Iterator[StringState]:
        for root, fret, note in zip(self.tuning.open_string_notes(), self.frets, self.notes):
            yield StringState(root, fret, note)

    def pitch_classes(self) -> frozenset[int]:
        return frozenset(note.pitch_class for note in self.notes)

    # ── Fret statistics ───────────────────────────────────────

    def count_pressed_strings(self) -> int:
        """Number of strings pressed down (not open)."""
        return sum(1 for f in self.frets if f > 0)

    def count_pressed_strings_in_fret(self, fret: int) -> int:
        return sum(1 for f in self.frets if f == fret)

    def count_used_frets(self) -> int:
        """Number of distinct frets in which some string is pressed."""
        return len({f for f in self.frets if f > 0})

    @property
    def min_pressed_fret(self) -> int:
        """Lowest pressed fret, or 0 if every string is open."""
        return min((f for f in self.frets if f > 0), default=0)

    @property
    def min_fret(self) -> int:
        return min(self.frets)

    @property
    def max_fret(self) -> int:
        return max(self.frets)

    @property
    def span(self) -> int:
        """Frets between the lowest pressed and the highest fret."""
        return self.max_fret - self.min_pressed_fret

    def sort_key(self) -> tuple[int, tuple[int, ...]]:
        return (self.min_pressed_fret, self.frets)

    # ── Chord relations ───────────────────────────────────────

    def spells_out(self, chord: Chord) -> bool:
        """``True`` if every required tone sounds and every sounded tone is a chord tone."""
        sounded = self.pitch_classes()
        return chord.required_pitch_classes() <= sounded <= chord.pitch_classes()

    def chords(self) -> list[Chord]:
        """All chords this fret pattern spells, sorted by root then type.

        Each rotation of the sorted pitch classes is tried as a root
        (e.g. ``[C, D#, G#]``, ``[D#, G#, C]``, ``[G#, C, D#]``).
        """
        pitches = sorted(self.pitch_classes())
        found: list[Chord] = []

        for _ in range(len(pitches)):
            try:
                found.append(Chord.from_pitch_classes(pitches, self.string_count))
            except ValidationError:
                pass
            pitches = pitches[1:] + pitches[:1]

        return sorted(found, key=_chord_sort_key)

    def __str__(self) -> str:
        return " ".join(str(f) for f in self.frets)


def _chord_sort_key(chord: Chord) -> tuple[int, str]:
    return (chord.root.pitch_class, chord.chord_type.symbol)


def parse_fret_pattern(pattern: str, string_count: int | None = None) -> tuple[int, ...]:
    """Parse a compact fret pattern.

    Accepts both ``"2220"`` (one digit per string) and ``"7 8 9 10"``.

    Raises:
        ValidationError: If the pattern is malformed or has the wrong length.
    """
    tokens = pattern.split() if " " in pattern.strip() else list(pattern.strip())
    if not tokens or not all(t.isdigit() for t in tokens):
        raise ValidationError(
            f'Fret pattern "{pattern}" has wrong format '
            '(should be something like 1234 or "7 8 9 10")'
        )
    frets = tuple(int(t) for t in tokens)
    if string_count is not None and len(frets) != string_count:
        raise ValidationError(
            f'Fret pattern "{pattern}" has {len(frets)} frets, expected {string_count}'
        )
    return frets


# ── Enumeration ───────────────────────────────────────────────

def check_frets(frets: tuple[int, ...], config: VoicingConfig) -> None:
    """Raise if some fret lies beyond the instrument's last fret."""
    too_high = [f for f in frets if f > config.fret_limit]
    if too_high:
        raise ValidationError(
            f"Frets {too_high} exceed the last fret ({config.fret_limit})"
        )


def check_tuning(tuning: Tuning, config: VoicingConfig) -> None:
    """Raise if *tuning* does not have the configured number of strings."""
    if tuning.string_count != config.string_count:
        raise ValidationError(
            f"Tuning {tuning} has {tuning.string_count} strings, "
            f"expected {config.string_count}"
        )


def _candidate_frets(
    chord: Chord, tuning: Tuning, octaves: int, max_fret: int
) -> list[list[int]]:
    """Per string, the sorted frets sounding some chord tone."""
    tones = chord.pitch_classes()
    per_string: list[list[int]] = []

    for open_note in tuning.open_string_notes():
        frets: set[int] = set()
        for pc in tones:
            base = pitch_class(pc - open_note.pitch_class)
            for octave in range(octaves):
                fret = base + octave * PITCH_CLASS_COUNT
                if fret <= max_fret:
                    frets.add(fret)
        per_string.append(sorted(frets))

    return per_string


def _accepts(voicing: Voicing, chord: Chord, min_fret: int, max_span: int) -> bool:
    if not voicing.spells_out(chord):
        return False
    if any(0 < f < min_fret for f in voicing.frets):
        return False
    return voicing.span <= max_span


def generate_voicings(
    chord: Chord,
    tuning: Tuning,
    min_fret: int = 0,
    config: VoicingConfig | None = None,
) -> list[Voicing]:
    """Enumerate every voicing of *chord* playable from *min_fret* upward.

    Args:
        chord: The chord to voice.
        tuning: Tuning of the instrument; must have ``config.string_count``
            strings.
        min_fret: Lowest fret a *pressed* string may use. Open strings are
            always allowed.
        config: Search-window settings (``max_fret``, ``max_span``).
            Defaults to the packaged configuration.

    Returns:
        Voicings ordered by lowest pressed fret, then by fret tuple.
        Empty if the chord cannot be played inside the window.

    Raises:
        ValidationError: If the tuning has the wrong number of strings or
            *min_fret* is outside ``[0, fret_limit]``.
    """
    cfg = config if config is not None else default_config()
    check_tuning(tuning, cfg)
    if not 0 <= min_fret <= cfg.fret_limit:
        raise ValidationError(f"min_fret must be between 0 and {cfg.fret_limit}, got {min_fret}")

    # Base position plus one octave; widen by an octave at a time while a
    # minimum fret leaves the window empty and the next octave still starts
    # at or below max_fret (only possible on necks of 24 frets or more).
    octaves = 2
    while True:
        candidates = _candidate_frets(chord, tuning, octaves, cfg.max_fret)
        voicings: list[Voicing] = []
        for frets in itertools.product(*candidates):
            voicing = Voicing.for_chord(frets, tuning, chord)
            if _accepts(voicing, chord, min_fret, cfg.max_span):
                voicings.append(voicing)

        if voicings or min_fret == 0 or octaves * PITCH_CLASS_COUNT > cfg.max_fret:
            break
        octaves += 1

    voicings.sort(key=Voicing.sort_key)
    logger.debug(
        "Chord %s in tuning %s from fret %d: %d voicing(s)",
        chord.name, tuning, min_fret, len(voicings),
    )
    return voicings
