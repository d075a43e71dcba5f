"""Accumulation of repeated pairwise terms between the same node pair."""

from __future__ import annotations

from typing import Dict, Iterator, Tuple

from paircut.lib.algorithms.base import PairKey, PairMatrix, canonical_key


def transpose(matrix: PairMatrix) -> PairMatrix:
    """Swap the roles of the two nodes: ``(f00, f10, f01, f11)``."""
    f00, f01, f10, f11 = matrix
    return (f00, f10, f01, f11)


class MergeBuffer:
    """
    Sums pairwise matrices per unordered node pair before graph construction.

    Matrices are stored under the canonical key ``(min(p, q), max(p, q))``.
    A term submitted as ``(p, q)`` with ``p > q`` is transposed first, so
    every stored ``f01`` means "first node 0, second node 1" in key order.
    """

    def __init__(self) -> None:
        self._terms: Dict[PairKey, PairMatrix] = {}

    def __len__(self) -> int:
        return len(self._terms)

    def __contains__(self, key: object) -> bool:
        return key in self._terms

    def __getitem__(self, key: PairKey) -> PairMatrix:
        return self._terms[key]

    def store(self, p: int, q: int, matrix: PairMatrix) -> PairKey:
        """
        Add ``matrix`` to the accumulated term of the pair ``(p, q)``.

        Args:
            p: First node of the term.
            q: Second node of the term.
            matrix: Costs ``(f00, f01, f10, f11)`` indexed by ``(label(p), label(q))``.

        Returns:
            PairKey: The canonical key the term was stored under.

        Raises:
            ValueError: If ``p == q`` or the matrix does not have four entries.
        """
        key = canonical_key(p, q)
        if len(matrix) != 4:
            raise ValueError(f"Pairwise matrix needs 4 entries, got {len(matrix)}.")
        term = tuple(matrix) if p < q else transpose(tuple(matrix))

        current = self._terms.get(key)
        if current is None:
            self._terms[key] = term
        else:
            self._terms[key] = tuple(a + b for a, b in zip(current, term))
        return key

    def items(self) -> Iterator[Tuple[PairKey, PairMatrix]]:
        """Iterate over ``(key, matrix)`` in ascending key order."""
        for key in sorted(self._terms):
            yield key, self._terms[key]

    def drain(self) -> Iterator[Tuple[PairKey, PairMatrix]]:
        """Like items(), but empties the buffer once iteration finishes."""
        try:
            yield from self.items()
        finally:
            self.clear()

    def clear(self) -> None:
        self._terms.clear()
