"""Annotator — run the full voice-leading pipeline and export results.

Responsibilities:
    1. Parse a chord progression string (e.g. ``"C F G Am"``).
    2. Optionally transpose it.
    3. Call the path solver to pick the optimal voicing per chord.
    4. Return one JSON-serialisable record per chord.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from voicelead.config import load_config
from voicelead.errors import UnplayableProgression
from voicelead.theory.chords import ChordSequence
from voicelead.theory.tuning import Tuning

from .cost_model import VoicingCostModel
from .fingering import fingers_on_strings, has_barre
from .solver import Unplayable, resolve_progression


def annotate_progression(
    chord_sequence: str,
    tuning: str = "C",
    min_fret: int = 0,
    transpose: int = 0,
    config_path: str | Path | None = None,
) -> list[dict[str, Any]]:
    """Resolve a chord progression and describe every chosen voicing.

    Args:
        chord_sequence: Whitespace-separated chord names.
        tuning: Preset tuning name (``C``, ``D`` or ``G``).
        min_fret: Lowest fret a pressed string may use.
        transpose: Semitones to transpose the progression by before voicing.
        config_path: Path to a settings YAML.
            Defaults to ``configs/voicing_defaults.yaml``.

    Returns:
        List of annotation dicts, each containing:
            ``chord``, ``frets``, ``notes``, ``fingers``, ``has_barre``,
            ``semitone_distance``, ``fingering_distance`` (the last two
            measured from the previous voicing, 0 for the first chord).

    Raises:
        ValidationError: For unknown chord or tuning names.
        UnplayableProgression: If some chord has no voicing.
    """
    config = load_config(config_path)

    # ── Pipeline ──────────────────────────────────────────────
    chords = ChordSequence.from_str(chord_sequence).transpose(transpose)
    result = resolve_progression(chords, Tuning.from_name(tuning), min_fret, config)
    if isinstance(result, Unplayable):
        raise UnplayableProgression(result.position, result.chord)

    # ── Records ───────────────────────────────────────────────
    cost_model = VoicingCostModel(config)
    annotations: list[dict[str, Any]] = []
    previous = None

    for chord, voicing in zip(chords, result.voicings):
        if previous is None:
            semitones = fingering = 0
        else:
            step = cost_model.total_cost(previous, voicing)
            semitones, fingering = step.as_tuple()

        annotations.append({
            "chord": chord.name,
            "frets": list(voicing.frets),
            "notes": [note.name for note in voicing.notes],
            "fingers": list(fingers_on_strings(voicing, config.finger_count)),
            "has_barre": has_barre(voicing),
            "semitone_distance": semitones,
            "fingering_distance": fingering,
        })
        previous = voicing

    return annotations


def annotations_to_json_bytes(annotations: list[dict[str, Any]]) -> bytes:
    """Serialise annotations to UTF-8 JSON bytes.

    Args:
        annotations: The list of annotation dicts.

    Returns:
        UTF-8 encoded JSON bytes.
    """
    return json.dumps(annotations, indent=2, ensure_ascii=False).encode("utf-8")
