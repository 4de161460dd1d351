"""
Breadth-first construction of the bridge/torch crossing state graph.
"""

import time
from collections import deque
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Sequence, Set, Tuple

from ..bridge.state import BridgeState, iter_set_bits
from .config import GraphConfig
from .logger import logger

START_INDEX = 0
END_INDEX = 1


@dataclass
class Crossing:
    """One direction of a crossing between two graph nodes."""

    state_index_after_crossing: int
    time_to_cross: int


@dataclass
class GraphNode:
    state: BridgeState
    possible_crossings: List[Crossing] = field(default_factory=list)


def max_possible_states(people_count: int) -> int:
    """Upper bound on the number of configurations for ``people_count`` people.

    Every bank assignment times both torch sides, minus the torch alone on the
    end bank and everyone on the end bank without the torch.
    """
    return (1 << (people_count + 1)) - 2


@dataclass
class StateGraph:
    """Result of graph construction. Node 0 is the start, node 1 the end."""

    nodes: List[GraphNode]
    crossing_times: List[int]
    connection_count: int
    time_taken_ms: float = 0.0

    @property
    def start(self) -> GraphNode:
        return self.nodes[START_INDEX]

    @property
    def end(self) -> GraphNode:
        return self.nodes[END_INDEX]

    @property
    def people_count(self) -> int:
        return len(self.crossing_times)

    def find_index(self, state: BridgeState) -> Optional[int]:
        """Find the node holding a configuration.

        Args:
            state: Configuration to look up

        Returns:
            Node index, or None if the configuration is not in the graph
        """
        for index, node in enumerate(self.nodes):
            if node.state == state:
                return index
        return None

    def edges(self) -> Iterator[Tuple[int, int, int]]:
        """Yield each undirected crossing once as (lower, higher, time)."""
        for index, node in enumerate(self.nodes):
            for crossing in node.possible_crossings:
                if crossing.state_index_after_crossing > index:
                    yield index, crossing.state_index_after_crossing, crossing.time_to_cross

    def reachable_from(self, index: int = START_INDEX) -> Set[int]:
        """Collect every node reachable through crossings.

        Args:
            index: Node to start from

        Returns:
            Set of reachable node indices, including ``index``
        """
        visited: Set[int] = {index}
        queue = deque([index])
        while queue:
            current = queue.popleft()
            for crossing in self.nodes[current].possible_crossings:
                if crossing.state_index_after_crossing not in visited:
                    visited.add(crossing.state_index_after_crossing)
                    queue.append(crossing.state_index_after_crossing)
        return visited

    def is_connected(self) -> bool:
        return len(self.reachable_from(START_INDEX)) == len(self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)

    def __getitem__(self, index: int) -> GraphNode:
        return self.nodes[index]

    def __iter__(self) -> Iterator[GraphNode]:
        return iter(self.nodes)


class StateGraphBuilder:
    """Enumerates every reachable configuration and the crossings between them.

    The node list doubles as the work list: nodes appended while index ``k`` is
    processed get their own turn once the scan reaches them, and the scan stops
    when it catches up with the end of the list.
    """

    def __init__(self, config: GraphConfig):
        self.logger = logger.bind(component="graph_builder", people=config.people_count)
        self.config = config

    def build(self) -> StateGraph:
        """Enumerate all reachable configurations and their crossings.

        Returns:
            StateGraph with the start at index 0 and the end at index 1

        Raises:
            PersonCountOutOfRange: If the number of crossing times is unsupported
        """
        start_time = time.time()
        times_to_cross = self.config.crossing_times
        people_count = self.config.people_count

        # Both raise PersonCountOutOfRange before any work is done
        start_state = BridgeState.start(people_count)
        end_state = BridgeState.end(people_count)

        self.logger.debug(
            f"Building state graph for crossing times {times_to_cross} "
            f"(at most {max_possible_states(people_count)} states)"
        )

        states: List[GraphNode] = []
        state_to_states_index: Dict[int, int] = {}

        for state in (start_state, end_state):
            state_to_states_index[state.state_repr] = len(states)
            states.append(GraphNode(state))

        connection_count = 0

        curr_state_index = 0
        while curr_state_index < len(states):
            curr_state = states[curr_state_index].state
            possible_crosser_indices = curr_state.get_possible_crosser_indices()

            for crosser_index in iter_set_bits(possible_crosser_indices):
                connection_count += self._try_add_or_connect_crossed_state(
                    states,
                    state_to_states_index,
                    curr_state_index,
                    curr_state.after_single_crossing(crosser_index),
                    times_to_cross[crosser_index],
                )

            for first_crosser_index in iter_set_bits(possible_crosser_indices):
                remaining = possible_crosser_indices >> (first_crosser_index + 1)
                for offset in iter_set_bits(remaining):
                    second_crosser_index = first_crosser_index + 1 + offset
                    connection_count += self._try_add_or_connect_crossed_state(
                        states,
                        state_to_states_index,
                        curr_state_index,
                        curr_state.after_double_crossing(
                            first_crosser_index, second_crosser_index
                        ),
                        max(
                            times_to_cross[first_crosser_index],
                            times_to_cross[second_crosser_index],
                        ),
                    )

            curr_state_index += 1
            if (
                self.config.log_progress_every
                and curr_state_index % self.config.log_progress_every == 0
            ):
                self.logger.debug(
                    f"Processed {curr_state_index}/{len(states)} states, "
                    f"{connection_count} crossings so far"
                )

        elapsed_ms = (time.time() - start_time) * 1000
        self.logger.info(
            f"State graph complete: {len(states)} states, "
            f"{connection_count} crossings in {elapsed_ms:.2f}ms"
        )

        return StateGraph(
            nodes=states,
            crossing_times=list(times_to_cross),
            connection_count=connection_count,
            time_taken_ms=elapsed_ms,
        )

    def _try_add_or_connect_crossed_state(
        self,
        states: List[GraphNode],
        state_to_states_index: Dict[int, int],
        curr_state_index: int,
        crossed_state: BridgeState,
        time_to_cross: int,
    ) -> bool:
        """Add ``crossed_state`` if unseen, then link it to the current node.

        A known state is only linked when its index is above the current one;
        otherwise the edge was already made while that lower node was processed.

        Returns:
            True if a reciprocal crossing pair was added
        """
        crossed_state_index = state_to_states_index.get(crossed_state.state_repr)

        if crossed_state_index is None:
            crossed_state_index = len(states)
            state_to_states_index[crossed_state.state_repr] = crossed_state_index
            states.append(GraphNode(crossed_state))
        elif crossed_state_index <= curr_state_index:
            return False

        states[curr_state_index].possible_crossings.append(
            Crossing(
                state_index_after_crossing=crossed_state_index,
                time_to_cross=time_to_cross,
            )
        )
        states[crossed_state_index].possible_crossings.append(
            Crossing(
                state_index_after_crossing=curr_state_index,
                time_to_cross=time_to_cross,
            )
        )
        return True


def build_state_graph(crossing_times: Sequence[int]) -> StateGraph:
    """Build the state graph for the given per-person crossing times.

    Args:
        crossing_times: Crossing time of each person, in person index order

    Returns:
        StateGraph with the start at index 0 and the end at index 1
    """
    return StateGraphBuilder(GraphConfig(crossing_times=list(crossing_times))).build()
