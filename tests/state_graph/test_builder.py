"""
Tests for the state graph builder.
"""

from math import comb

import pytest

from src.bridge.errors import PersonCountOutOfRange
from src.bridge.state import BridgeState, iter_set_bits
from src.state_graph.builder import (
    END_INDEX,
    START_INDEX,
    StateGraphBuilder,
    build_state_graph,
    max_possible_states,
)
from src.state_graph.config import GraphConfig

TIMES = [1, 10, 100, 1000]


def expected_crossing_count(people_count):
    """Undirected crossings: one per eligible single or pair, counted from the torch bank."""
    return sum(
        comb(people_count, k) * (k + comb(k, 2)) for k in range(1, people_count + 1)
    )


class TestStateGraphBuilder:
    """Test graph construction for the four-person example."""

    def setup_method(self):
        """Set up test fixtures."""
        self.graph = StateGraphBuilder(GraphConfig(crossing_times=TIMES)).build()

    def test_start_and_end_indices(self):
        assert self.graph[START_INDEX].state == BridgeState.start(4)
        assert self.graph[END_INDEX].state == BridgeState.end(4)
        assert self.graph.start is self.graph.nodes[0]
        assert self.graph.end is self.graph.nodes[1]

    def test_node_count(self):
        """Every configuration except the two impossible ones is reachable."""
        assert len(self.graph) == 30
        assert len(self.graph) == max_possible_states(4)

    def test_crossing_count(self):
        assert self.graph.connection_count == 56
        assert len(list(self.graph.edges())) == 56
        total = sum(len(node.possible_crossings) for node in self.graph)
        assert total == 2 * 56

    def test_states_are_unique(self):
        reprs = [node.state.state_repr for node in self.graph]
        assert len(set(reprs)) == len(reprs)

    def test_graph_is_connected(self):
        assert self.graph.is_connected()
        assert END_INDEX in self.graph.reachable_from(START_INDEX)

    def test_crossings_are_reciprocal(self):
        for index, node in enumerate(self.graph):
            for crossing in node.possible_crossings:
                target = self.graph[crossing.state_index_after_crossing]
                reverse = [
                    c
                    for c in target.possible_crossings
                    if c.state_index_after_crossing == index
                ]
                assert len(reverse) == 1
                assert reverse[0].time_to_cross == crossing.time_to_cross

    def test_no_self_loops_or_duplicate_edges(self):
        for index, node in enumerate(self.graph):
            targets = [c.state_index_after_crossing for c in node.possible_crossings]
            assert index not in targets
            assert len(set(targets)) == len(targets)

    def test_crossing_costs(self):
        """Single crossings cost the crosser's time, pairs the slower one's."""
        for index, node in enumerate(self.graph):
            for crossing in node.possible_crossings:
                target = self.graph[crossing.state_index_after_crossing]
                diff = node.state.state_repr ^ target.state.state_repr
                assert diff & 1 == 1
                crossers = list(iter_set_bits(diff >> 1))
                assert len(crossers) in (1, 2)
                assert crossing.time_to_cross == max(TIMES[i] for i in crossers)

    def test_crossers_come_from_torch_bank(self):
        for node in self.graph:
            eligible = node.state.get_possible_crosser_indices()
            for crossing in node.possible_crossings:
                target = self.graph[crossing.state_index_after_crossing]
                moved = (node.state.state_repr ^ target.state.state_repr) >> 1
                assert moved & ~eligible == 0

    def test_degree_matches_eligible_count(self):
        for node in self.graph:
            k = bin(node.state.get_possible_crosser_indices()).count("1")
            assert len(node.possible_crossings) == k + comb(k, 2)

    def test_breadth_first_order(self):
        """Start's singles come first, then its pairs in (i, j) order."""
        describe = [node.state.describe(TIMES) for node in self.graph]
        assert describe[2] == "([10, 100, 1000], >, [1])"
        assert describe[5] == "([1, 10, 100], >, [1000])"
        assert describe[6] == "([100, 1000], >, [1, 10])"
        assert describe[11] == "([1, 10], >, [100, 1000])"
        # end is processed next and sends person 0 back first
        assert describe[12] == "([1], <, [10, 100, 1000])"

    def test_start_crossings(self):
        costs = [c.time_to_cross for c in self.graph.start.possible_crossings]
        assert costs == [1, 10, 100, 1000, 10, 100, 1000, 100, 1000, 1000]

    def test_find_index(self):
        state = BridgeState.start(4).after_single_crossing(3)
        assert self.graph.find_index(state) == 5
        assert self.graph.find_index(BridgeState.start(3)) is None


class TestGraphSizes:
    """Test graph invariants across person counts."""

    @pytest.mark.parametrize("people_count", [1, 2, 3, 5, 6])
    def test_counts(self, people_count):
        times = [2**i for i in range(people_count)]
        graph = build_state_graph(times)

        assert len(graph) == max_possible_states(people_count)
        assert graph.connection_count == expected_crossing_count(people_count)
        assert graph.is_connected()

    def test_single_person(self):
        graph = build_state_graph([7])
        assert len(graph) == 2
        assert graph.connection_count == 1
        assert graph.start.possible_crossings[0].state_index_after_crossing == END_INDEX
        assert graph.start.possible_crossings[0].time_to_cross == 7
        assert graph.end.possible_crossings[0].state_index_after_crossing == START_INDEX

    def test_equal_times(self):
        graph = build_state_graph([5, 5, 5])
        assert len(graph) == 14
        assert all(cost == 5 for _, _, cost in graph.edges())

    def test_deterministic(self):
        first = build_state_graph(TIMES)
        second = build_state_graph(TIMES)
        assert [n.state for n in first] == [n.state for n in second]
        assert list(first.edges()) == list(second.edges())

    def test_builder_can_be_reused(self):
        builder = StateGraphBuilder(GraphConfig(crossing_times=TIMES))
        first = builder.build()
        second = builder.build()
        assert first.connection_count == second.connection_count == 56
        assert not hasattr(builder, "_connection_count")

    def test_zero_time_crossings(self):
        graph = build_state_graph([0, 3])
        assert len(graph) == 6
        assert graph.connection_count == 5
        assert sorted(cost for _, _, cost in graph.edges()) == [0, 0, 3, 3, 3]

    def test_progress_logging_does_not_change_result(self):
        graph = StateGraphBuilder(
            GraphConfig(crossing_times=TIMES, log_progress_every=5)
        ).build()
        assert len(graph) == 30
        assert graph.connection_count == 56


class TestInvalidInput:
    """Test rejection of unsupported person counts."""

    def test_no_people(self):
        with pytest.raises(PersonCountOutOfRange):
            build_state_graph([])

    def test_too_many_people(self):
        with pytest.raises(PersonCountOutOfRange):
            build_state_graph([1] * 31)


class TestMaxPossibleStates:
    def test_values(self):
        assert max_possible_states(1) == 2
        assert max_possible_states(4) == 30
        assert max_possible_states(30) == 2**31 - 2
