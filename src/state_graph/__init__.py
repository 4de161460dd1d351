"""
State graph construction for the bridge/torch crossing puzzle.

Builds every reachable configuration and the weighted crossings between them,
ready for a separate shortest-path stage.
"""

from .builder import (
    Crossing,
    GraphNode,
    StateGraph,
    StateGraphBuilder,
    build_state_graph,
    max_possible_states,
)
from .config import GraphConfig
from .export import graph_from_dict, graph_to_dict, load_graph, save_graph, to_adjacency_matrix

__all__ = [
    "GraphConfig",
    "Crossing",
    "GraphNode",
    "StateGraph",
    "StateGraphBuilder",
    "build_state_graph",
    "max_possible_states",
    "graph_to_dict",
    "graph_from_dict",
    "save_graph",
    "load_graph",
    "to_adjacency_matrix",
]
