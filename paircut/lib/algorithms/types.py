"""Types and data structures for pairwise term reduction and solving."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from paircut.lib.algorithms.base import Cost, SolveMode


@dataclass(frozen=True)
class Decomposition:
    """Result of reducing one pairwise term to unary pushes plus a residual.

    The residual is either a pair of edge capacities (``forward`` for
    ``(0, 1)``, ``backward`` for ``(1, 0)``) or, for a linearized
    non-submodular term, a positive ``aux_score`` paid for ``(1, 1)``.

    Attributes:
        p0: Cost pushed into label 0 of the first node.
        p1: Cost pushed into label 1 of the first node.
        q0: Cost pushed into label 0 of the second node.
        q1: Cost pushed into label 1 of the second node.
        forward: Capacity of the edge first -> second.
        backward: Capacity of the edge second -> first.
        aux_score: Residual cost for both labels being 1; zero for edge results.
        dropped: Constant removed from all four entries during the reduction.
    """

    p0: Cost
    p1: Cost
    q0: Cost
    q1: Cost
    forward: Cost = 0
    backward: Cost = 0
    aux_score: Cost = 0
    dropped: Cost = 0

    @property
    def is_auxiliary(self) -> bool:
        """True if the residual is an auxiliary penalty instead of an edge."""
        return self.aux_score > 0

    def energy(self, label_p: int, label_q: int) -> Cost:
        """Cost this decomposition assigns to ``(label_p, label_q)``."""
        total = self.dropped
        total += self.p1 if label_p else self.p0
        total += self.q1 if label_q else self.q0
        if label_p == 0 and label_q == 1:
            total += self.forward
        elif label_p == 1 and label_q == 0:
            total += self.backward
        elif label_p == 1 and label_q == 1:
            total += self.aux_score
        return total


@dataclass(frozen=True)
class AuxPenalty:
    """Linearized non-submodular residual between two nodes.

    Attributes:
        p: First node.
        q: Second node.
        score: Cost paid when both nodes take label 1. Always positive.
    """

    p: int
    q: int
    score: Cost


@dataclass(frozen=True)
class SolveResult:
    """Outcome of a single solve.

    Attributes:
        mode: Strategy used for the solve.
        flow: Cut value returned by the min-cut computation.
        bound: Reported minimum-energy bound (relative to the energy offset).
            Equals ``flow`` in direct mode and ``min(flow, baseline)`` in
            auxiliary-biased mode.
        baseline: Energy of the all-zero labeling relative to the offset, or
            None in direct mode.
        anomaly: True if the auxiliary-biased flow exceeded the baseline.
    """

    mode: SolveMode
    flow: Cost
    bound: Cost
    baseline: Optional[Cost] = None
    anomaly: bool = False
