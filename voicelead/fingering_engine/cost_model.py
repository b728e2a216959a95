"""Cost Model — distance between two voicings.

The distance of a chord change is a pair
``(semitone_distance, fingering_distance)``:

    semitone_cost   – total fret travel, summed over strings
    fingering_cost  – finger movement between the two derived fingerings
    total_cost      – both components as a :class:`Distance`
    layer_costs     – both components for every pair of two voicing lists

Distances add component-wise and compare lexicographically, so fret travel
always dominates and finger movement only breaks ties.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from voicelead.config import VoicingConfig, default_config
from voicelead.errors import ValidationError

from .fingering import Fingering, derive_fingering, fingering_distance
from .voicing import Voicing


@dataclass(frozen=True, order=True)
class Distance:
    """Cost of moving between voicings; ordered semitones first."""

    semitone_distance: int = 0
    fingering_distance: int = 0

    def __add__(self, other: Distance) -> Distance:
        if not isinstance(other, Distance):
            return NotImplemented
        return Distance(
            self.semitone_distance + other.semitone_distance,
            self.fingering_distance + other.fingering_distance,
        )

    def as_tuple(self) -> tuple[int, int]:
        return (self.semitone_distance, self.fingering_distance)


class VoicingCostModel:
    """Physical cost of changing from one voicing to another.

    Args:
        config: Engine settings; only ``finger_count`` is used here.
            Defaults to the packaged configuration.
    """

    def __init__(self, config: VoicingConfig | None = None) -> None:
        self.config = config if config is not None else default_config()
        self.finger_count: int = self.config.finger_count

    # ── Individual cost components ────────────────────────────

    def semitone_cost(self, a: Voicing, b: Voicing) -> int:
        """Sum over strings of the absolute fret difference.

        Raises:
            ValidationError: If the voicings have different string counts.
        """
        if a.string_count != b.string_count:
            raise ValidationError(
                f"Cannot compare voicings with {a.string_count} and {b.string_count} strings"
            )
        return sum(abs(fa - fb) for fa, fb in zip(a.frets, b.frets))

    def fingering(self, voicing: Voicing) -> Fingering:
        return derive_fingering(voicing, self.finger_count)

    def fingering_cost(self, a: Voicing, b: Voicing) -> int:
        """Finger movement between the fingerings of *a* and *b*."""
        return fingering_distance(self.fingering(a), self.fingering(b))

    # ── Aggregate ─────────────────────────────────────────────

    def total_cost(self, a: Voicing, b: Voicing) -> Distance:
        return Distance(self.semitone_cost(a, b), self.fingering_cost(a, b))

    def layer_costs(
        self, left: list[Voicing], right: list[Voicing]
    ) -> tuple[np.ndarray, np.ndarray]:
        """Cost matrices between two lists of voicings.

        Args:
            left: Voicings of the earlier chord (rows).
            right: Voicings of the later chord (columns).

        Returns:
            ``(semitones, fingering)``, two integer arrays of shape
            ``(len(left), len(right))``.
        """
        if not left or not right:
            empty = np.zeros((len(left), len(right)), dtype=np.int64)
            return empty, empty.copy()

        left_frets = np.array([v.frets for v in left], dtype=np.int64)
        right_frets = np.array([v.frets for v in right], dtype=np.int64)
        if left_frets.shape[1] != right_frets.shape[1]:
            raise ValidationError(
                f"Cannot compare voicings with {left_frets.shape[1]} "
                f"and {right_frets.shape[1]} strings"
            )
        semitones = np.abs(left_frets[:, None, :] - right_frets[None, :, :]).sum(axis=2)

        left_fingerings = [self.fingering(v) for v in left]
        right_fingerings = [self.fingering(v) for v in right]
        fingering = np.array(
            [[fingering_distance(a, b) for b in right_fingerings] for a in left_fingerings],
            dtype=np.int64,
        )
        return semitones, fingering


def distance(a: Voicing, b: Voicing, config: VoicingConfig | None = None) -> Distance:
    """Distance of changing from voicing *a* to voicing *b*."""
    return VoicingCostModel(config).total_cost(a, b)
