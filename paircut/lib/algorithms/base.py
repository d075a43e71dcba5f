from __future__ import annotations

from enum import IntEnum
from typing import Tuple, Union

#: Numeric energy value (unary or pairwise cost, capacity, flow).
Cost = Union[int, float]

#: Pairwise cost matrix ``(f00, f01, f10, f11)`` indexed by ``(label(p), label(q))``.
PairMatrix = Tuple[Cost, Cost, Cost, Cost]

#: Canonical identifier of an unordered node pair: ``(min(p, q), max(p, q))``.
PairKey = Tuple[int, int]

#: Slack used when testing submodularity before auxiliary linearization.
SUBMODULAR_TOLERANCE = 0.1


class RepairPolicy(IntEnum):
    """How the auxiliary entry point treats non-submodular pairwise terms."""

    #: Clamp the larger diagonal entry until the matrix is submodular (lossy).
    TRUNCATION = 1
    #: Move the non-submodular residual into an auxiliary penalty.
    LSA_AUX = 2


class Segment(IntEnum):
    """Side of the minimum cut a node ends up on."""

    SOURCE = 0
    SINK = 1


class SolveMode(IntEnum):
    """Which solve strategy produced a result."""

    #: Single min-cut over the graph as built.
    DIRECT = 1
    #: Single min-cut after biasing terminals with half of each auxiliary score.
    AUX_BIASED = 2


def is_submodular(matrix: PairMatrix, tolerance: float = 0.0) -> bool:
    """Return True if ``f00 + f11 <= f01 + f10 + tolerance``."""
    f00, f01, f10, f11 = matrix
    return f00 + f11 <= f01 + f10 + tolerance


def canonical_key(p: int, q: int) -> PairKey:
    """Return the ordered ``(min, max)`` key for the pair ``(p, q)``.

    Raises:
        ValueError: If ``p == q``.
    """
    if p == q:
        raise ValueError(f"Pairwise term needs two distinct nodes, got {p} twice.")
    return (p, q) if p < q else (q, p)
