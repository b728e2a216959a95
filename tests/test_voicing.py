"""Unit tests for voicing enumeration and fret-pattern helpers."""

import pytest

from voicelead.config import default_config
from voicelead.errors import ValidationError
from voicelead.fingering_engine.voicing import Voicing, generate_voicings, parse_fret_pattern
from voicelead.theory import Chord, Tuning

TUNING_C = Tuning.from_name("C")


def _voicing(frets: tuple[int, ...], tuning: Tuning = TUNING_C) -> Voicing:
    return Voicing(tuning, frets)


def test_c_major_open_shape_comes_first() -> None:
    voicings = generate_voicings(Chord.from_str("C"), TUNING_C)
    assert voicings[0].frets == (0, 0, 0, 3)
    assert [n.name for n in voicings[0].notes] == ["G", "C", "E", "C"]


@pytest.mark.parametrize("name", ["C", "Cm", "F", "G7", "Bb", "D#dim", "Amaj7", "Esus4"])
def test_every_voicing_sounds_required_tones_and_only_chord_tones(name: str) -> None:
    chord = Chord.from_str(name)
    voicings = generate_voicings(chord, TUNING_C)
    assert voicings
    for voicing in voicings:
        assert chord.required_pitch_classes() <= voicing.pitch_classes() <= chord.pitch_classes()


@pytest.mark.parametrize(
    "name, frets",
    [
        ("C7", (0, 0, 0, 1)),
        ("A7", (0, 1, 0, 0)),
        ("G7", (0, 2, 1, 2)),
        ("Cmaj7", (0, 0, 0, 2)),
    ],
)
def test_seventh_chord_shapes_may_sound_the_fifth(name: str, frets: tuple[int, ...]) -> None:
    voicings = generate_voicings(Chord.from_str(name), TUNING_C)
    assert voicings[0].frets == frets


def test_optional_fifth_may_be_left_out() -> None:
    chord = Chord.from_str("C7")
    voicings = generate_voicings(chord, TUNING_C)
    with_fifth = [v for v in voicings if 7 in v.pitch_classes()]
    without_fifth = [v for v in voicings if 7 not in v.pitch_classes()]
    assert with_fifth
    assert without_fifth


@pytest.mark.parametrize("name", ["C", "Am", "F#m7", "Bb"])
def test_voicings_are_ordered_by_min_pressed_fret_then_frets(name: str) -> None:
    voicings = generate_voicings(Chord.from_str(name), TUNING_C)
    keys = [(v.min_pressed_fret, v.frets) for v in voicings]
    assert keys == sorted(keys)
    assert len(set(keys)) == len(keys)


def test_window_limits_are_respected() -> None:
    config = default_config()
    for voicing in generate_voicings(Chord.from_str("D"), TUNING_C):
        assert voicing.max_fret <= config.max_fret
        assert voicing.span <= config.max_span


def test_min_fret_keeps_open_strings() -> None:
    voicings = generate_voicings(Chord.from_str("C"), TUNING_C, min_fret=10)
    assert voicings[0].frets == (0, 0, 0, 10)
    for voicing in voicings:
        assert all(f == 0 or f >= 10 for f in voicing.frets)


def test_unplayable_chord_yields_empty_list() -> None:
    assert generate_voicings(Chord.from_str("C#"), TUNING_C, min_fret=10) == []


def test_min_fret_widens_search_on_long_neck() -> None:
    config = default_config().with_overrides(max_fret=36, fret_limit=36)
    voicings = generate_voicings(Chord.from_str("C#"), TUNING_C, min_fret=25, config=config)
    assert voicings
    assert voicings[0].frets == (25, 25, 25, 28)
    for voicing in voicings:
        assert all(f == 0 or f >= 25 for f in voicing.frets)


def test_wider_span_finds_more_voicings() -> None:
    chord = Chord.from_str("C")
    narrow = generate_voicings(chord, TUNING_C)
    wide = generate_voicings(chord, TUNING_C, config=default_config().with_overrides(max_span=7))
    assert len(wide) > len(narrow)
    assert set(v.frets for v in narrow) <= set(v.frets for v in wide)


def test_wrong_string_count_raises() -> None:
    with pytest.raises(ValidationError):
        generate_voicings(Chord.from_str("C"), Tuning.from_notes("E A D G B E"))


def test_min_fret_out_of_range_raises() -> None:
    with pytest.raises(ValidationError):
        generate_voicings(Chord.from_str("C"), TUNING_C, min_fret=22)


def test_other_tunings() -> None:
    d_voicings = generate_voicings(Chord.from_str("D"), Tuning.from_name("D"))
    assert d_voicings[0].frets == (0, 0, 0, 3)
    g_voicings = generate_voicings(Chord.from_str("G"), Tuning.from_name("G"))
    assert g_voicings[0].frets == (0, 0, 0, 3)


# ── Voicing helpers ───────────────────────────────────────────

def test_fret_statistics() -> None:
    voicing = _voicing((0, 4, 3, 3))
    assert voicing.count_pressed_strings() == 3
    assert voicing.count_pressed_strings_in_fret(3) == 2
    assert voicing.count_used_frets() == 2
    assert voicing.min_pressed_fret == 3
    assert voicing.min_fret == 0
    assert voicing.max_fret == 4
    assert voicing.span == 1


def test_all_open_voicing() -> None:
    voicing = _voicing((0, 0, 0, 0))
    assert voicing.min_pressed_fret == 0
    assert voicing.pitch_classes() == frozenset({7, 0, 4, 9})
    assert not voicing.spells_out(Chord.from_str("C"))
    assert voicing.chords() == [Chord.from_str("C6"), Chord.from_str("Am7")]


def test_spells_out() -> None:
    voicing = _voicing((0, 0, 0, 3))
    assert voicing.spells_out(Chord.from_str("C"))
    assert not voicing.spells_out(Chord.from_str("Cm"))


@pytest.mark.parametrize(
    "frets, chords",
    [
        ((0, 0, 0, 3), ["C"]),
        ((2, 2, 2, 0), ["D"]),
        ((1, 2, 3, 4), []),
    ],
)
def test_chords_spelled_by_fret_pattern(frets: tuple[int, ...], chords: list[str]) -> None:
    assert _voicing(frets).chords() == [Chord.from_str(c) for c in chords]


def test_voicing_validates_frets() -> None:
    with pytest.raises(ValidationError):
        _voicing((0, 0, 0))
    with pytest.raises(ValidationError):
        _voicing((0, 0, -1, 3))


def test_voicing_equality_ignores_spelling() -> None:
    chord = Chord.from_str("C")
    assert Voicing.for_chord((0, 0, 0, 3), TUNING_C, chord) == _voicing((0, 0, 0, 3))


@pytest.mark.parametrize(
    "pattern, frets",
    [("2220", (2, 2, 2, 0)), ("7 8 9 10", (7, 8, 9, 10)), (" 0003 ", (0, 0, 0, 3))],
)
def test_parse_fret_pattern(pattern: str, frets: tuple[int, ...]) -> None:
    assert parse_fret_pattern(pattern, 4) == frets


def test_voicing_from_pattern() -> None:
    assert Voicing.from_pattern("0003", TUNING_C).frets == (0, 0, 0, 3)
    assert Voicing.from_pattern("0 0 0 21", TUNING_C).frets == (0, 0, 0, 21)


def test_voicing_from_pattern_rejects_frets_past_the_last_fret() -> None:
    with pytest.raises(ValidationError, match="exceed the last fret"):
        Voicing.from_pattern("0 0 0 99", TUNING_C)
    with pytest.raises(ValidationError):
        Voicing.from_pattern("0 0 0 22", TUNING_C)


@pytest.mark.parametrize("pattern", ["", "22a0", "2 2 x 0", "222"])
def test_parse_fret_pattern_rejects_bad_input(pattern: str) -> None:
    with pytest.raises(ValidationError):
        parse_fret_pattern(pattern, 4)
