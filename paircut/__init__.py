"""paircut: binary pairwise energy minimization by minimum cut.

paircut compiles unary and pairwise costs over binary variables into a
two-terminal flow network whose minimum cut is the energy minimum.
Non-submodular pairwise terms are either truncated or linearized into
auxiliary penalties.

Primary API:
    EnergyModel - Build, finalize and solve an energy
    GraphCutConfig - Repair policy, tolerance and min-cut algorithm
    RepairPolicy - TRUNCATION or LSA_AUX
    CutGraph - Two-terminal capacity graph on top of networkx

Example:
    from paircut import EnergyModel

    model = EnergyModel()
    model.create(n_nodes=2, n_edges=1)
    model.setup(2)
    model.add_unary_term(0, 0, 3)
    model.add_unary_term(1, 4, 0)
    model.add_pairwise_term_lsa_aux(0, 1, 0, 1, 1, 0)
    model.finalize()
    flow = model.solve()
    labels = model.labeling()
"""

from __future__ import annotations

from paircut import logging
from paircut._version import __version__
from paircut.config import DEFAULT_CONFIG, GraphCutConfig
from paircut.energy import EnergyModel
from paircut.errors import DecompositionError
from paircut.lib.algorithms import (
    AuxPenalty,
    Decomposition,
    RepairPolicy,
    Segment,
    SolveMode,
    SolveResult,
    canonical_key,
    decompose_submodular,
    is_submodular,
    linearize_aux,
    truncate,
)
from paircut.lib.graph import CutGraph
from paircut.lib.util import brute_force_minimum, evaluate_energy
from paircut.merge import MergeBuffer

__all__ = [
    # Version
    "__version__",
    # Model
    "EnergyModel",
    "GraphCutConfig",
    "DEFAULT_CONFIG",
    "RepairPolicy",
    # Graph
    "CutGraph",
    "Segment",
    # Reduction
    "decompose_submodular",
    "truncate",
    "linearize_aux",
    "is_submodular",
    "canonical_key",
    "MergeBuffer",
    # Results
    "AuxPenalty",
    "Decomposition",
    "SolveMode",
    "SolveResult",
    "DecompositionError",
    # Verification
    "evaluate_energy",
    "brute_force_minimum",
    # Utilities
    "logging",
]
