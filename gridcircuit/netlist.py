"""
Netlist export and connectivity checks for derived graphs.

Net naming:
- The net holding a ground pin -> "0"
- Every other net -> "n0", "n1", ... in edge order
"""

from collections import defaultdict, deque
from typing import Dict, List, Optional, Set

from .electronic import ElectronicKind
from .graph import Edge, Graph, Node

GROUND_NET = "0"


def build_net_mapping(graph: Graph) -> Dict[int, str]:
    """
    Maps each edge index to a net name.

    Returns:
        Dictionary mapping edge indices to net names (e.g., "0", "n0")
    """
    edge_to_net: Dict[int, str] = {}
    net_counter = 0
    for edge in graph.edges:
        if any(node.electronic.kind is ElectronicKind.GROUND for node, _ in edge.terminals):
            edge_to_net[edge.index] = GROUND_NET
        else:
            edge_to_net[edge.index] = f"n{net_counter}"
            net_counter += 1
    return edge_to_net


def to_netlist(graph: Graph, title: str = "grid circuit") -> str:
    """
    Converts a derived graph to a SPICE-style netlist.

    Ground components are not emitted; they only name their net "0". Pins with
    no net (a hand-built graph) are written as "?".

    Args:
        graph: Derived (or hand-built) graph
        title: Text for the header comment

    Returns:
        Netlist text ending with ".end"
    """
    edge_to_net = build_net_mapping(graph)
    lines = [f"* Auto-generated netlist: {title}", ""]
    lines.append("* Circuit components")

    counters: Dict[str, int] = defaultdict(int)
    for node in graph.nodes:
        line = _component_line(node, edge_to_net, counters)
        if line:
            lines.append(line)

    lines.append("")
    lines.append(".end")
    return "\n".join(lines)


def _component_line(node: Node, edge_to_net: Dict[int, str],
                    counters: Dict[str, int]) -> Optional[str]:
    electronic = node.electronic
    prefix = electronic.info.prefix
    if prefix is None:
        return None

    counters[prefix] += 1
    nets = []
    for pin_name in electronic.pin_names:
        edge = node.edge(pin_name)
        nets.append(edge_to_net[edge.index] if edge is not None else "?")

    line = f"{prefix}{counters[prefix]} {' '.join(nets)}"
    if electronic.value is not None:
        value = f"{electronic.value:g}"
        line += f" DC {value}" if electronic.kind is ElectronicKind.SOURCE else f" {value}"
    return line


def connectivity_summary(graph: Graph) -> Dict[str, object]:
    """
    Summarises how the components of a graph are wired together.

    Components are adjacent when they share a net; reachability is a BFS from
    the first node.

    Returns:
        Dictionary with node/edge counts, dangling nets, ground presence and
        whether every component is reachable from every other
    """
    edge_to_net = build_net_mapping(graph)
    summary: Dict[str, object] = {
        "node_count": len(graph.nodes),
        "edge_count": len(graph.edges),
        "dangling_nets": [edge_to_net[edge.index] for edge in graph.dangling_edges()],
        "unconnected_pins": [],
        "has_ground": GROUND_NET in edge_to_net.values(),
        "all_components_connected": False,
        "isolated_components": [],
    }

    unconnected: List[str] = []
    adjacency: Dict[str, Set[str]] = defaultdict(set)
    for node in graph.nodes:
        identity = node.electronic.identity
        for pin_name in node.electronic.pin_names:
            edge = node.edge(pin_name)
            if edge is None:
                unconnected.append(f"{identity}.{pin_name}")
                continue
            for other, _ in edge.terminals:
                if other is not node:
                    adjacency[identity].add(other.electronic.identity)
    summary["unconnected_pins"] = unconnected

    if not graph.nodes:
        return summary

    start = graph.nodes[0].electronic.identity
    visited: Set[str] = {start}
    queue: deque = deque([start])
    while queue:
        current = queue.popleft()
        for neighbor in adjacency.get(current, ()):
            if neighbor not in visited:
                visited.add(neighbor)
                queue.append(neighbor)

    identities = [node.electronic.identity for node in graph.nodes]
    summary["isolated_components"] = [i for i in identities if not adjacency.get(i)]
    summary["all_components_connected"] = len(visited) == len(identities)
    return summary


def edge_label(edge: Edge) -> str:
    return ", ".join(f"{node.electronic.identity}.{pin}" if pin else node.electronic.identity
                     for node, pin in edge.terminals)
