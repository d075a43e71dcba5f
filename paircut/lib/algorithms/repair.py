"""Policies that make a pairwise matrix usable by the min-cut decomposition.

Two policies are provided:

  - ``truncate`` clamps a diagonal entry until the matrix is submodular.
    The energy represented afterwards differs from the input.
  - ``linearize_aux`` keeps the energy exact by reducing a non-submodular
    matrix to a single positive ``(1, 1)`` residual, which is carried as an
    auxiliary penalty instead of a graph edge.
"""

from __future__ import annotations

from paircut.errors import DecompositionError
from paircut.lib.algorithms.base import PairMatrix, is_submodular
from paircut.lib.algorithms.types import Decomposition


def _clamp_diagonal(matrix: PairMatrix) -> PairMatrix:
    f00, f01, f10, f11 = matrix
    if f00 + f11 > f01 + f10:
        if f00 > f11:
            f00 = max(0, f01 + f10 - f11)
        else:
            f11 = max(0, f01 + f10 - f00)
    return (f00, f01, f10, f11)


def truncate(matrix: PairMatrix) -> PairMatrix:
    """Return a submodular version of ``matrix``.

    If ``f00 + f11 > f01 + f10`` the larger of ``f00`` and ``f11`` is lowered
    to ``max(0, f01 + f10 - other)``. The clamp runs twice because the lower
    bound of zero can leave the first pass short. Submodular input is
    returned unchanged. If ``f01 + f10 < 0`` the zero floor keeps the result
    non-submodular.

    Args:
        matrix: Costs ``(f00, f01, f10, f11)``.

    Returns:
        PairMatrix: The clamped matrix.
    """
    return _clamp_diagonal(_clamp_diagonal(matrix))


def linearize_aux(matrix: PairMatrix) -> Decomposition:
    """Reduce a non-submodular matrix to unary pushes and one auxiliary score.

    Reduction order: ``min(f00, f01)`` into label 0 of p, ``min(f00, f10)``
    into label 0 of q, any positive ``f00`` left is removed from all four
    entries, then ``min(f10, f11)`` into label 1 of p and ``min(f01, f11)``
    into label 1 of q. Negative input is first lifted by its minimum entry so
    that the reduction always ends with three zero entries.

    Args:
        matrix: Costs ``(f00, f01, f10, f11)`` with ``f00 + f11 > f01 + f10``.

    Returns:
        Decomposition: Unary pushes, the removed constant and the positive
        ``(1, 1)`` residual as ``aux_score``. No edge capacities.

    Raises:
        ValueError: If the matrix is submodular.
        DecompositionError: If the reduction does not end with
            ``f00 == f01 == f10 == 0`` and ``f11 > 0``.
    """
    if is_submodular(matrix):
        raise ValueError(f"Matrix {matrix} is submodular; decompose it directly.")

    f00, f01, f10, f11 = matrix
    dropped = 0

    lowest = min(matrix)
    if lowest < 0:
        f00, f01, f10, f11 = f00 - lowest, f01 - lowest, f10 - lowest, f11 - lowest
        dropped += lowest

    p0 = min(f00, f01)
    f00 -= p0
    f01 -= p0

    q0 = min(f00, f10)
    f00 -= q0
    f10 -= q0

    if f00 > 0:
        shift = f00
        f00, f01, f10, f11 = 0, f01 - shift, f10 - shift, f11 - shift
        dropped += shift

    p1 = min(f10, f11)
    f10 -= p1
    f11 -= p1

    q1 = min(f01, f11)
    f01 -= q1
    f11 -= q1

    if not (f00 == 0 and f01 == 0 and f10 == 0 and f11 > 0):
        raise DecompositionError(
            f"Reduction of {matrix} left residual {(f00, f01, f10, f11)}; "
            "expected three zeros and one positive entry."
        )

    return Decomposition(p0=p0, p1=p1, q0=q0, q1=q1, aux_score=f11, dropped=dropped)
