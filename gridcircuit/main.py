#!/usr/bin/env python3
"""
Command line entry point.

Builds one of the example layouts, derives its topology and prints the layout,
the nets, a connectivity summary and the netlist.

Usage:
    python3 -m gridcircuit [--example {simple,series,parallel}] [--output PATH] [--verbose]
"""

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from .examples import EXAMPLES
from .graph import Graph
from .netlist import build_net_mapping, connectivity_summary, edge_label, to_netlist


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the grid circuit tool."""
    args = _parse_arguments(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    example = EXAMPLES[args.example]()
    graph = example.circuit.derive_graph()

    _print_header(args.example)
    print(example.circuit.render())
    _print_nets(graph)
    _print_summary(graph)

    netlist = to_netlist(graph, title=f"{args.example} example")
    print("\nNetlist:")
    print(netlist)

    if args.output:
        _save_netlist(netlist, args.output)
    return 0


def _parse_arguments(argv: Optional[List[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description='Grid circuit topology tool')
    parser.add_argument('--example', choices=sorted(EXAMPLES), default='simple',
                        help='Example layout to build (default: simple)')
    parser.add_argument('--output', type=Path, default=None,
                        help='Also write the netlist to this file')
    parser.add_argument('--verbose', action='store_true',
                        help='Log placement and derivation details')
    return parser.parse_args(argv)


def _print_header(name: str):
    print("=" * 70)
    print(f"Example circuit: {name}")
    print("=" * 70)


def _print_nets(graph: Graph):
    edge_to_net = build_net_mapping(graph)
    print(f"\nNodes: {len(graph.nodes)}  Nets: {len(graph.edges)}")
    for edge in graph.edges:
        print(f"  {edge_to_net[edge.index]:>3}: {edge_label(edge)}")


def _print_summary(graph: Graph):
    summary = connectivity_summary(graph)
    print("\nConnectivity:")
    print(f"  Ground present: {summary['has_ground']}")
    print(f"  All components connected: {summary['all_components_connected']}")
    if summary["dangling_nets"]:
        print(f"  Dangling nets: {', '.join(summary['dangling_nets'])}")


def _save_netlist(netlist: str, path: Path):
    path.write_text(netlist + "\n")
    print(f"\nNetlist saved to {path}")


if __name__ == "__main__":
    raise SystemExit(main())
