"""Solver — layered voicing graph and optimal voice leading.

Graph:  a synthetic start node, one layer of candidate voicings per chord
        and a synthetic end node. Start connects to every voicing of the
        first chord, every voicing of the last chord connects to end (both
        at zero cost), and neighbouring layers are fully connected with
        edges weighted by :class:`~.cost_model.Distance`.
Search: shortest path from start to end. The graph is a strictly layered
        DAG, so relaxing one layer after the other settles every node in
        Dijkstra order; a dynamic programme over the layers finds the same
        optimum without a priority queue.
Output: the minimum-distance voicing per chord and the total distance.

Design choices:
    - Edge weights are stored as one pair of cost matrices per layer gap
      instead of a generic graph structure.
    - Distances compare lexicographically (semitones, then fingering) and
      add component-wise along the path.
    - Ties go to the candidate that the enumerator returned first, so the
      result is deterministic.
    - A chord without voicings stops construction before any search.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Union

import numpy as np

from voicelead.config import VoicingConfig, default_config
from voicelead.errors import UnplayableProgression
from voicelead.theory.chords import Chord
from voicelead.theory.tuning import Tuning

from .cost_model import Distance, VoicingCostModel
from .voicing import Voicing, check_tuning, generate_voicings

logger = logging.getLogger(__name__)


# ── Public types ──────────────────────────────────────────────
START_NODE: str = "start"
END_NODE: str = "end"

# (layer index, candidate index) or one of the synthetic node names
Node = Union[str, tuple[int, int]]


@dataclass(frozen=True)
class VoiceLeading:
    """The optimal voicing per chord and the accumulated distance."""

    voicings: list[Voicing] = field(default_factory=list)
    distance: Distance = field(default_factory=Distance)

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Unplayable:
    """No voicing exists for the chord at *position* (0-based)."""

    position: int
    chord: Chord

    @property
    def ok(self) -> bool:
        return False

    def __str__(self) -> str:
        return f"No voicing found for chord {self.chord.name} at position {self.position}"


class VoicingGraph:
    """Layered graph of voicing candidates for a chord progression.

    Args:
        tuning: Tuning all voicings are played in.
        min_fret: Lowest fret a pressed string may use.
        config: Engine settings. Defaults to the packaged configuration.
    """

    def __init__(
        self,
        tuning: Tuning,
        min_fret: int = 0,
        config: VoicingConfig | None = None,
    ) -> None:
        self.config = config if config is not None else default_config()
        check_tuning(tuning, self.config)
        self.tuning = tuning
        self.min_fret = min_fret
        self.cost_model = VoicingCostModel(self.config)

        self.chords: list[Chord] = []
        self.layers: list[list[Voicing]] = []
        # _costs[i] holds (semitones, fingering) between layer i and i + 1
        self._costs: list[tuple[np.ndarray, np.ndarray]] = []

    # ── Construction ──────────────────────────────────────────

    def add_chord(self, chord: Chord) -> list[Node]:
        """Add a layer with every voicing of *chord* and connect it.

        Returns:
            The nodes of the new layer.

        Raises:
            UnplayableProgression: If *chord* has no voicing in the window.
        """
        position = len(self.layers)
        voicings = generate_voicings(chord, self.tuning, self.min_fret, self.config)
        if not voicings:
            raise UnplayableProgression(position, chord)

        if self.layers:
            self._costs.append(self.cost_model.layer_costs(self.layers[-1], voicings))

        self.chords.append(chord)
        self.layers.append(voicings)
        return [(position, j) for j in range(len(voicings))]

    def add(self, chords: Iterable[Chord]) -> None:
        """Add one layer per chord, in order."""
        for chord in chords:
            self.add_chord(chord)

        logger.debug(
            "Voicing graph: %d layer(s), %d node(s), %d edge(s)",
            len(self.layers), self.node_count, self.edge_count,
        )

    # ── Inspection ────────────────────────────────────────────

    @property
    def node_count(self) -> int:
        """Voicing nodes plus the start and end nodes."""
        return 2 + sum(len(layer) for layer in self.layers)

    @property
    def edge_count(self) -> int:
        if not self.layers:
            return 0
        inner = sum(
            len(left) * len(right) for left, right in zip(self.layers, self.layers[1:])
        )
        return len(self.layers[0]) + inner + len(self.layers[-1])

    def voicing(self, node: Node) -> Voicing:
        """The voicing stored at a (layer, index) node."""
        if isinstance(node, str):
            raise KeyError(f"Synthetic node '{node}' carries no voicing")
        layer, index = node
        return self.layers[layer][index]

    def edges(self) -> Iterator[tuple[Node, Node, Distance]]:
        """Yield every edge as ``(source, target, weight)``."""
        if not self.layers:
            return

        for j in range(len(self.layers[0])):
            yield START_NODE, (0, j), Distance()

        for i, (semitones, fingering) in enumerate(self._costs):
            rows, cols = semitones.shape
            for p in range(rows):
                for j in range(cols):
                    weight = Distance(int(semitones[p, j]), int(fingering[p, j]))
                    yield (i, p), (i + 1, j), weight

        last = len(self.layers) - 1
        for j in range(len(self.layers[last])):
            yield (last, j), END_NODE, Distance()

    # ── Search ────────────────────────────────────────────────

    def find_best_path(self) -> VoiceLeading:
        """Find the minimum-distance path from start to end.

        Returns:
            The voicings on the path (synthetic nodes stripped) and the
            accumulated distance. An empty graph yields an empty path.
        """
        n = len(self.layers)
        if n == 0:
            return VoiceLeading()

        # ── DP tables ─────────────────────────────────────────
        # dp[i][j] = minimum distance from start to voicing j of layer i
        # bp[i][j] = predecessor index in layer i - 1
        dp: list[list[Distance]] = [[Distance() for _ in self.layers[0]]]
        bp: list[list[int | None]] = [[None for _ in self.layers[0]]]

        # ── Forward pass ──────────────────────────────────────
        for i in range(1, n):
            semitones, fingering = self._costs[i - 1]
            costs: list[Distance] = []
            prevs: list[int | None] = []

            for j in range(len(self.layers[i])):
                best_cost: Distance | None = None
                best_prev: int | None = None

                for p, prev_cost in enumerate(dp[i - 1]):
                    total = prev_cost + Distance(int(semitones[p, j]), int(fingering[p, j]))
                    if best_cost is None or total < best_cost:
                        best_cost = total
                        best_prev = p

                costs.append(best_cost if best_cost is not None else Distance())
                prevs.append(best_prev)

            dp.append(costs)
            bp.append(prevs)

        # ── Best final state (edge to end costs nothing) ─────
        best_final = min(range(len(dp[n - 1])), key=lambda j: dp[n - 1][j])

        # ── Backtrack ─────────────────────────────────────────
        path: list[int] = [best_final]
        for i in range(n - 1, 0, -1):
            prev = bp[i][path[-1]]
            if prev is None:
                raise RuntimeError(f"Broken back-pointer at layer {i}")
            path.append(prev)
        path.reverse()

        voicings = [self.layers[i][j] for i, j in enumerate(path)]
        return VoiceLeading(voicings, dp[n - 1][best_final])


def resolve_progression(
    chords: Iterable[Chord],
    tuning: Tuning,
    min_fret: int = 0,
    config: VoicingConfig | None = None,
) -> VoiceLeading | Unplayable:
    """Pick the easiest-to-play voicing sequence for a chord progression.

    Args:
        chords: The progression, in playing order.
        tuning: Tuning of the instrument.
        min_fret: Lowest fret a pressed string may use.
        config: Engine settings. Defaults to the packaged configuration.

    Returns:
        :class:`VoiceLeading` with one voicing per chord and the total
        distance, or :class:`Unplayable` naming the first chord that has no
        voicing (no search is attempted in that case).

    Raises:
        ValidationError: If the tuning has the wrong number of strings.
    """
    graph = VoicingGraph(tuning, min_fret, config)
    try:
        graph.add(chords)
    except UnplayableProgression as exc:
        logger.debug("Progression unplayable: %s", exc)
        return Unplayable(exc.position, exc.chord)
    return graph.find_best_path()
