"""Pairwise term reduction: submodular decomposition and repair policies."""

from paircut.lib.algorithms.base import (
    RepairPolicy,
    Segment,
    SolveMode,
    canonical_key,
    is_submodular,
)
from paircut.lib.algorithms.decompose import decompose_submodular
from paircut.lib.algorithms.repair import linearize_aux, truncate
from paircut.lib.algorithms.types import AuxPenalty, Decomposition, SolveResult

__all__ = [
    "RepairPolicy",
    "Segment",
    "SolveMode",
    "canonical_key",
    "is_submodular",
    "decompose_submodular",
    "linearize_aux",
    "truncate",
    "AuxPenalty",
    "Decomposition",
    "SolveResult",
]
