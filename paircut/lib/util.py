from itertools import product
from typing import Iterable, List, Sequence, Tuple

from paircut.lib.algorithms.base import Cost, PairMatrix

#: A raw pairwise term: (p, q, (f00, f01, f10, f11)).
PairTerm = Tuple[int, int, PairMatrix]


def evaluate_energy(
    unaries: Sequence[Tuple[Cost, Cost]],
    pairwise: Iterable[PairTerm],
    labels: Sequence[int],
) -> Cost:
    """
    Score a binary labeling against raw energy terms.

    Args:
        unaries: Per-node ``(cost0, cost1)``.
        pairwise: Terms ``(p, q, (f00, f01, f10, f11))`` indexed by
            ``(label(p), label(q))``.
        labels: One label (0 or 1) per node.

    Returns:
        The total energy of the labeling.
    """
    if len(labels) != len(unaries):
        raise ValueError(
            f"Expected {len(unaries)} labels, got {len(labels)}."
        )
    total = 0
    for (cost0, cost1), label in zip(unaries, labels):
        total += cost1 if label else cost0
    for p, q, matrix in pairwise:
        total += matrix[2 * labels[p] + labels[q]]
    return total


def brute_force_minimum(
    unaries: Sequence[Tuple[Cost, Cost]],
    pairwise: Iterable[PairTerm],
) -> Tuple[Cost, List[int]]:
    """
    Exhaustively minimize a small binary energy.

    Enumerates all ``2**n`` labelings, so it is only meant for verification
    on a handful of nodes.

    Returns:
        Tuple of (minimum energy, first labeling reaching it).
    """
    terms = list(pairwise)
    best_energy = None
    best_labels: List[int] = []
    for labels in product((0, 1), repeat=len(unaries)):
        energy = evaluate_energy(unaries, terms, labels)
        if best_energy is None or energy < best_energy:
            best_energy = energy
            best_labels = list(labels)
    return best_energy, best_labels
