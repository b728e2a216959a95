"""Fingering — barre detection and finger assignment for a voicing.

Fingers are numbered 1 (index) to 4 (pinky). Two views are provided:
    fingers_on_strings – finger id per string (0 = open / no finger)
    derive_fingering   – position per finger slot (``None`` = unused)

Assignment walks the distinct pressed frets from low to high:
    - with a barre, the lowest fret is held by finger 1 on all its strings,
    - every other pressed string gets the next finger,
    - an empty fret between two used frets skips a finger (hand position),
    - the finger is pulled back whenever too few fingers would remain for
      the strings still to be assigned.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, NamedTuple

from voicelead.errors import ValidationError

from .voicing import Voicing


# ── Public constants ──────────────────────────────────────────
DEFAULT_FINGER_COUNT: int = 4


class FretPosition(NamedTuple):
    """A point on the fretboard grid."""

    string: int
    fret: int


@dataclass(frozen=True)
class Fingering:
    """Position held by each finger, ``None`` for unused fingers.

    For a barre only the first string covered by the finger is recorded.
    """

    positions: tuple[FretPosition | None, ...]

    def __iter__(self) -> Iterator[FretPosition | None]:
        return iter(self.positions)

    def __len__(self) -> int:
        return len(self.positions)

    def __getitem__(self, finger_index: int) -> FretPosition | None:
        return self.positions[finger_index]

    def used_fingers(self) -> list[int]:
        """1-based ids of the fingers that press something."""
        return [i + 1 for i, pos in enumerate(self.positions) if pos is not None]


# ── Barre detection ───────────────────────────────────────────

def _alternates(levels: list[int]) -> bool:
    """Two fret levels with neighbouring pressed strings never on the same one."""
    if len(set(levels)) != 2:
        return False
    return all(a != b for a, b in zip(levels, levels[1:]))


def _paired_levels(voicing: Voicing) -> bool:
    """Every string pressed, two on the lowest fret and the rest on one other."""
    return (
        voicing.count_pressed_strings() == voicing.string_count
        and voicing.count_used_frets() == 2
        and voicing.count_pressed_strings_in_fret(voicing.min_pressed_fret) == 2
    )


def has_barre(voicing: Voicing) -> bool:
    """Return ``True`` if playing *voicing* needs a barre.

    A barre lays finger 1 across every string from the first one pressed
    at the lowest fret to the last string. It is ruled out when
        - nothing is pressed,
        - an open string lies under that stretch,
        - the pressed strings alternate between two frets (0212-style),
        - all strings are pressed, two on each of two frets (2233-style),
        - all pressed strings share one fret while some string stays open.
    Otherwise a barre is used when at least two strings share the lowest
    pressed fret.
    """
    frets = voicing.frets
    pressed = [f for f in frets if f > 0]
    if not pressed:
        return False

    min_fret = voicing.min_pressed_fret
    min_fret_count = voicing.count_pressed_strings_in_fret(min_fret)

    first = frets.index(min_fret)
    if any(f == 0 for f in frets[first:]):
        return False

    if _alternates(pressed) or _paired_levels(voicing):
        return False

    if min_fret_count == len(pressed) < len(frets):
        return False

    return min_fret_count >= 2


# ── Finger assignment ─────────────────────────────────────────

def fingers_on_strings(
    voicing: Voicing, finger_count: int = DEFAULT_FINGER_COUNT
) -> tuple[int, ...]:
    """Finger id pressing each string (0 for open strings).

    Args:
        voicing: The voicing to finger.
        finger_count: Fingers available to the fretting hand.

    Returns:
        A tuple with one finger id per string.
    """
    frets = voicing.frets
    fingers = [0] * len(frets)
    pressed_count = voicing.count_pressed_strings()

    if pressed_count == 0:
        return tuple(fingers)

    # A lone pressed string near the nut is played in first position
    # (finger n on fret n), otherwise with the index finger.
    if pressed_count == 1:
        string = next(s for s, f in enumerate(frets) if f > 0)
        fret = frets[string]
        fingers[string] = fret if fret < finger_count else 1
        return tuple(fingers)

    barre = has_barre(voicing)
    levels = sorted({f for f in frets if f > 0})
    remaining = pressed_count
    next_finger = 1
    previous_level: int | None = None

    for level in levels:
        strings = [s for s, f in enumerate(frets) if f == level]
        is_barre_level = barre and level == levels[0]

        # Fingers still needed, counting the barre as a single finger.
        needed = remaining - len(strings) + 1 if is_barre_level else remaining

        finger = next_finger
        if previous_level is not None:
            finger += level - previous_level - 1
        finger = max(next_finger, min(finger, finger_count - needed + 1))

        if is_barre_level:
            for s in strings:
                fingers[s] = min(finger, finger_count)
            finger += 1
        else:
            for s in strings:
                fingers[s] = min(finger, finger_count)
                finger += 1

        next_finger = finger
        remaining -= len(strings)
        previous_level = level

    return tuple(fingers)


def derive_fingering(
    voicing: Voicing, finger_count: int = DEFAULT_FINGER_COUNT
) -> Fingering:
    """Map each finger to the first position it presses in *voicing*."""
    positions: list[FretPosition | None] = [None] * finger_count

    for string, finger in enumerate(fingers_on_strings(voicing, finger_count)):
        if finger > 0 and positions[finger - 1] is None:
            positions[finger - 1] = FretPosition(string, voicing.frets[string])

    return Fingering(tuple(positions))


# ── Movement between fingerings ───────────────────────────────

def finger_movement(a: FretPosition | None, b: FretPosition | None) -> int:
    """Cost of moving one finger from position *a* to position *b*.

    Returns:
        0 if unused in both or unmoved, 1 for placing/lifting the finger or
        sliding it along its string, otherwise the grid (Manhattan) distance.
    """
    if a is None and b is None:
        return 0
    if a is None or b is None:
        return 1
    if a == b:
        return 0
    if a.string == b.string:
        return 1
    return abs(a.string - b.string) + abs(a.fret - b.fret)


def fingering_distance(a: Fingering, b: Fingering) -> int:
    """Sum of per-finger movement costs between two fingerings.

    Raises:
        ValidationError: If the fingerings have different finger counts.
    """
    if len(a) != len(b):
        raise ValidationError(
            f"Cannot compare fingerings with {len(a)} and {len(b)} fingers"
        )
    return sum(finger_movement(pa, pb) for pa, pb in zip(a, b))
