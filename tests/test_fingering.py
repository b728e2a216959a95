"""Unit tests for barre detection, finger assignment and finger movement."""

import pytest

from voicelead.errors import ValidationError
from voicelead.fingering_engine.fingering import (
    Fingering,
    FretPosition,
    derive_fingering,
    finger_movement,
    fingering_distance,
    fingers_on_strings,
    has_barre,
)
from voicelead.fingering_engine.voicing import Voicing
from voicelead.theory import Tuning

TUNING_C = Tuning.from_name("C")


def _voicing(*frets: int) -> Voicing:
    return Voicing(TUNING_C, frets)


# ── Barre detection ───────────────────────────────────────────

@pytest.mark.parametrize(
    "frets, expected",
    [
        ((0, 2, 1, 1), True),
        ((0, 1, 2, 1), False),
        ((1, 1, 1, 1), True),
        ((0, 0, 0, 0), False),
        ((2, 2, 2, 3), True),
        ((0, 4, 3, 3), True),
        ((4, 2, 3, 2), True),
        ((2, 2, 2, 0), False),
        ((1, 0, 1, 3), False),
        ((0, 2, 1, 2), False),
        ((1, 2, 1, 2), False),
        ((0, 0, 0, 3), False),
        ((3, 3, 3, 1), False),
        ((2, 3, 5, 3), False),
        ((2, 2, 3, 3), False),
        ((2, 3, 2, 3), False),
        ((2, 4, 1, 3), False),
        ((4, 2, 2, 2), True),
        ((3, 2, 1, 1), True),
        ((1, 1, 1, 4), True),
        ((11, 0, 10, 12), False),
        ((0, 0, 0, 10), False),
    ],
)
def test_has_barre(frets: tuple[int, ...], expected: bool) -> None:
    assert has_barre(_voicing(*frets)) is expected


# ── Finger assignment ─────────────────────────────────────────

@pytest.mark.parametrize(
    "frets, fingers",
    [
        ((0, 0, 0, 0), (0, 0, 0, 0)),
        ((0, 0, 0, 3), (0, 0, 0, 3)),
        ((0, 0, 0, 7), (0, 0, 0, 1)),
        ((9, 0, 0, 0), (1, 0, 0, 0)),
        ((2, 0, 1, 0), (2, 0, 1, 0)),
        ((1, 0, 1, 3), (1, 0, 2, 4)),
        ((1, 4, 4, 4), (1, 2, 3, 4)),
        ((3, 3, 3, 1), (2, 3, 4, 1)),
        ((4, 2, 3, 2), (3, 1, 2, 1)),
        ((2, 3, 5, 3), (1, 2, 4, 3)),
        ((2, 2, 2, 0), (1, 2, 3, 0)),
        ((2, 2, 2, 3), (1, 1, 1, 2)),
        ((0, 4, 3, 3), (0, 2, 1, 1)),
        ((0, 2, 1, 1), (0, 2, 1, 1)),
        ((1, 1, 1, 1), (1, 1, 1, 1)),
        ((11, 12, 10, 12), (2, 3, 1, 4)),
        ((11, 0, 10, 12), (2, 0, 1, 3)),
        ((2, 2, 3, 3), (1, 2, 3, 4)),
        ((2, 3, 2, 3), (1, 3, 2, 4)),
        ((2, 4, 1, 3), (2, 4, 1, 3)),
        ((4, 2, 2, 2), (3, 1, 1, 1)),
        ((3, 2, 1, 1), (3, 2, 1, 1)),
        ((1, 1, 1, 4), (1, 1, 1, 4)),
    ],
)
def test_fingers_on_strings(frets: tuple[int, ...], fingers: tuple[int, ...]) -> None:
    assert fingers_on_strings(_voicing(*frets)) == fingers


def test_finger_ids_stay_in_range() -> None:
    for frets in [(1, 2, 3, 4), (5, 6, 7, 8), (1, 3, 5, 7), (2, 1, 4, 3)]:
        fingers = fingers_on_strings(_voicing(*frets))
        assert all(1 <= f <= 4 for f in fingers)


def test_derive_fingering_slots() -> None:
    fingering = derive_fingering(_voicing(2, 2, 2, 0))
    assert fingering.positions == (
        FretPosition(0, 2),
        FretPosition(1, 2),
        FretPosition(2, 2),
        None,
    )
    assert fingering.used_fingers() == [1, 2, 3]


def test_derive_fingering_barre_records_first_string_only() -> None:
    fingering = derive_fingering(_voicing(2, 2, 2, 2))
    assert fingering.positions == (FretPosition(0, 2), None, None, None)


def test_derive_fingering_open_strings() -> None:
    assert derive_fingering(_voicing(0, 0, 0, 0)).positions == (None, None, None, None)


# ── Finger movement ───────────────────────────────────────────

@pytest.mark.parametrize(
    "a, b, cost",
    [
        (None, None, 0),
        (None, FretPosition(1, 2), 1),
        (FretPosition(1, 2), None, 1),
        (FretPosition(1, 2), FretPosition(1, 2), 0),
        (FretPosition(1, 2), FretPosition(1, 5), 1),
        (FretPosition(0, 2), FretPosition(1, 3), 2),
        (FretPosition(0, 1), FretPosition(3, 4), 6),
    ],
)
def test_finger_movement(a, b, cost: int) -> None:
    assert finger_movement(a, b) == cost


def test_fingering_distance_counts_placed_finger() -> None:
    a = derive_fingering(_voicing(0, 0, 0, 3))
    b = derive_fingering(_voicing(0, 0, 0, 0))
    assert fingering_distance(a, b) == 1
    assert fingering_distance(a, a) == 0


def test_fingering_distance_is_symmetric() -> None:
    a = derive_fingering(_voicing(0, 4, 3, 3))
    b = derive_fingering(_voicing(2, 2, 2, 0))
    assert fingering_distance(a, b) == fingering_distance(b, a) > 0


def test_fingering_distance_rejects_mismatched_slots() -> None:
    with pytest.raises(ValidationError):
        fingering_distance(Fingering((None,) * 4), Fingering((None,) * 5))
