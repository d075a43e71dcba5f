"""Configuration classes for paircut components."""

from dataclasses import dataclass, field

from networkx.algorithms import flow as nx_flow

from paircut.lib.algorithms.base import SUBMODULAR_TOLERANCE, RepairPolicy

# networkx flow functions usable for the min-cut computation.
# dinitz is excluded: it can raise IndexError on float capacities.
FLOW_FUNCS = {
    "boykov_kolmogorov": nx_flow.boykov_kolmogorov,
    "preflow_push": nx_flow.preflow_push,
    "edmonds_karp": nx_flow.edmonds_karp,
    "shortest_augmenting_path": nx_flow.shortest_augmenting_path,
}


@dataclass
class GraphCutConfig:
    """Configuration for building and solving a binary energy model."""

    # Treatment of non-submodular terms submitted through the auxiliary entry point
    policy: RepairPolicy = RepairPolicy.LSA_AUX

    # Slack on f00 + f11 <= f01 + f10 before a term counts as non-submodular
    submodular_tolerance: float = SUBMODULAR_TOLERANCE

    # Name of the networkx flow function used for the min cut
    flow_func: str = field(default="boykov_kolmogorov")

    def __post_init__(self) -> None:
        self.policy = RepairPolicy(self.policy)
        if self.submodular_tolerance < 0:
            raise ValueError(
                "submodular_tolerance must be non-negative, "
                f"got {self.submodular_tolerance}"
            )
        if self.flow_func not in FLOW_FUNCS:
            raise ValueError(
                f"Unknown flow function '{self.flow_func}'. "
                f"Expected one of: {', '.join(sorted(FLOW_FUNCS))}"
            )

    def resolve_flow_func(self):
        """Return the networkx flow function named by ``flow_func``."""
        return FLOW_FUNCS[self.flow_func]


# Global configuration instance
DEFAULT_CONFIG = GraphCutConfig()
