"""
Serialization and matrix export of a built state graph.
"""

import json
from typing import Any, Dict, List

import numpy as np

from ..bridge.errors import BridgeStateError
from ..bridge.state import BridgeState
from .builder import END_INDEX, START_INDEX, Crossing, GraphNode, StateGraph
from .logger import logger

_logger = logger.bind(component="graph_export")


def graph_to_dict(graph: StateGraph) -> Dict[str, Any]:
    """Convert a graph to plain JSON-compatible data.

    Args:
        graph: Built state graph

    Returns:
        Dictionary with the crossing times, connection count and one record per
        node holding its packed state and ``[target_index, time]`` crossings
    """
    return {
        "crossing_times": list(graph.crossing_times),
        "connection_count": graph.connection_count,
        "nodes": [
            {
                "state_repr": node.state.state_repr,
                "bits": node.state.as_bits(),
                "crossings": [
                    [c.state_index_after_crossing, c.time_to_cross]
                    for c in node.possible_crossings
                ],
            }
            for node in graph.nodes
        ],
    }


def graph_from_dict(data: Dict[str, Any]) -> StateGraph:
    """Rebuild a graph from ``graph_to_dict`` output.

    Args:
        data: Dictionary as produced by ``graph_to_dict``

    Returns:
        The restored StateGraph

    Raises:
        ValueError: If a state is not a valid configuration for the crossing
            times, appears twice, the first two nodes are not the start and end,
            or a crossing points outside the node list or has no reverse
    """
    crossing_times = list(data["crossing_times"])
    people_count = len(crossing_times)
    start_state = BridgeState.start(people_count)
    end_state = BridgeState.end(people_count)

    nodes: List[GraphNode] = []
    seen_reprs: Dict[int, int] = {}
    for index, node_data in enumerate(data["nodes"]):
        try:
            state = BridgeState(state_repr=node_data["state_repr"])
        except BridgeStateError as e:
            raise ValueError(f"Node {index} has an invalid state: {e}") from e

        if state.people_count != people_count:
            raise ValueError(
                f"Node {index} encodes {state.people_count} people, "
                f"expected {people_count}"
            )
        if state.state_repr in seen_reprs:
            raise ValueError(
                f"Node {index} repeats the state of node {seen_reprs[state.state_repr]}"
            )
        seen_reprs[state.state_repr] = index

        nodes.append(
            GraphNode(
                state=state,
                possible_crossings=[
                    Crossing(state_index_after_crossing=target, time_to_cross=cost)
                    for target, cost in node_data["crossings"]
                ],
            )
        )

    if len(nodes) < 2:
        raise ValueError("Graph needs at least the start and end nodes")
    if nodes[START_INDEX].state != start_state:
        raise ValueError(f"Node {START_INDEX} must be the start state")
    if nodes[END_INDEX].state != end_state:
        raise ValueError(f"Node {END_INDEX} must be the end state")

    for index, node in enumerate(nodes):
        for crossing in node.possible_crossings:
            target = crossing.state_index_after_crossing
            if not 0 <= target < len(nodes):
                raise ValueError(f"Node {index} has crossing to unknown node {target}")
            reverse = Crossing(
                state_index_after_crossing=index, time_to_cross=crossing.time_to_cross
            )
            if reverse not in nodes[target].possible_crossings:
                raise ValueError(
                    f"Crossing {index} -> {target} has no matching reverse crossing"
                )

    return StateGraph(
        nodes=nodes,
        crossing_times=crossing_times,
        connection_count=data.get(
            "connection_count",
            sum(len(node.possible_crossings) for node in nodes) // 2,
        ),
    )


def save_graph(graph: StateGraph, filename: str) -> None:
    with open(filename, "w") as f:
        json.dump(graph_to_dict(graph), f, indent=2)
    _logger.info(f"Saved {len(graph)} states to {filename}")


def load_graph(filename: str) -> StateGraph:
    with open(filename, "r") as f:
        data = json.load(f)
    graph = graph_from_dict(data)
    _logger.info(f"Loaded {len(graph)} states from {filename}")
    return graph


def to_adjacency_matrix(graph: StateGraph) -> np.ndarray:
    """Convert a graph to a dense matrix of crossing times.

    Args:
        graph: Built state graph

    Returns:
        ``n x n`` float64 array with 0 on the diagonal and ``inf`` for pairs
        with no crossing
    """
    size = len(graph)
    matrix = np.full((size, size), np.inf, dtype=np.float64)
    np.fill_diagonal(matrix, 0.0)

    for index, node in enumerate(graph.nodes):
        for crossing in node.possible_crossings:
            matrix[index, crossing.state_index_after_crossing] = crossing.time_to_cross

    return matrix
