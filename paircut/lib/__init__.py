"""Graph and reduction primitives for paircut."""

from paircut.lib.graph import SINK_NODE, SOURCE_NODE, CutGraph

__all__ = [
    "CutGraph",
    "SOURCE_NODE",
    "SINK_NODE",
]
