#!/usr/bin/env python3
"""
Bridge/Torch Crossing State Graph

Builds the full state graph of the generalized bridge crossing puzzle:
every reachable configuration and every legal crossing between them.
"""

import argparse

from src.state_graph import GraphConfig, StateGraphBuilder, save_graph

DEFAULT_CROSSING_TIMES = [1, 10, 100, 1000]


def print_graph(graph, verbose=False):
    """Print a summary of the graph, and every node when verbose."""
    times = graph.crossing_times
    print(f"Crossing times: {times}")
    print(f"States: {len(graph)}")
    print(f"Crossings: {graph.connection_count}")
    print(f"Start: {graph.start.state.describe(times)}")
    print(f"End: {graph.end.state.describe(times)}")

    if not verbose:
        return

    print()
    for index, node in enumerate(graph):
        print(f"[{index:>3}] {node.state.as_bits()}  {node.state.describe(times)}")
        for crossing in node.possible_crossings:
            target = graph[crossing.state_index_after_crossing]
            print(
                f"        --{crossing.time_to_cross}--> "
                f"[{crossing.state_index_after_crossing:>3}] {target.state.describe(times)}"
            )


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Bridge/Torch Crossing State Graph",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py                          # Default times 1 10 100 1000
  python main.py --times 1 2 5 10 -v      # List every state and crossing
  python main.py --output graph.json      # Save the graph as JSON
        """,
    )

    parser.add_argument(
        "--times",
        type=int,
        nargs="+",
        default=DEFAULT_CROSSING_TIMES,
        help="Crossing time of each person",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Print every state and crossing"
    )
    parser.add_argument(
        "--output", type=str, default=None, help="Write the graph to a JSON file"
    )

    args = parser.parse_args()

    graph = StateGraphBuilder(GraphConfig(crossing_times=args.times)).build()
    print_graph(graph, verbose=args.verbose)

    if args.output:
        save_graph(graph, args.output)


if __name__ == "__main__":
    main()
