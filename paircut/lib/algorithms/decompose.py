from __future__ import annotations

from paircut.lib.algorithms.base import PairMatrix
from paircut.lib.algorithms.types import Decomposition


def decompose_submodular(matrix: PairMatrix) -> Decomposition:
    """Split a submodular pairwise matrix into unary pushes and one edge.

    Minima are extracted in a fixed order: row ``p=0``, row ``p=1``, then
    column ``q=0`` and column ``q=1`` of the residual. What remains of
    ``f01`` and ``f10`` becomes the forward and backward capacity.

    The matrix must satisfy ``f00 + f11 <= f01 + f10``. For other matrices
    the diagonal residual is silently lost.

    Args:
        matrix: Costs ``(f00, f01, f10, f11)``.

    Returns:
        Decomposition: Unary pushes and edge capacities. Both capacities are
        non-negative for any input.

    Examples:
        >>> d = decompose_submodular((0, 2, 2, 0))
        >>> (d.p0, d.p1, d.q0, d.q1, d.forward, d.backward)
        (0, 0, 0, 0, 2, 2)
    """
    f00, f01, f10, f11 = matrix

    p0 = min(f00, f01)
    f00 -= p0
    f01 -= p0

    p1 = min(f10, f11)
    f10 -= p1
    f11 -= p1

    q0 = min(f00, f10)
    f00 -= q0
    f10 -= q0

    q1 = min(f01, f11)
    f01 -= q1
    f11 -= q1

    return Decomposition(p0=p0, p1=p1, q0=q0, q1=q1, forward=f01, backward=f10)
