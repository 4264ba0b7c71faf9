"""
Electrical topology derived from a circuit layout.

A ``Node`` wraps one placed component; an ``Edge`` is one electrical net and
collects every (node, pin) terminal wired to it. ``derive_graph`` collapses the
grid's point-to-point links into nets by walking wire links outward from each
pin cell.
"""

import logging
from collections import deque
from typing import TYPE_CHECKING, Dict, FrozenSet, List, Optional, Set, Tuple

from .electronic import Electronic
from .unit import Coordinate, PinLink

if TYPE_CHECKING:
    from .circuit import Circuit

logger = logging.getLogger(__name__)

Terminal = Tuple["Node", str]


class Edge:
    """One electrical net."""

    def __init__(self, index: int):
        self.index = index
        self._terminals: List[Terminal] = []

    @property
    def terminals(self) -> List[Terminal]:
        return list(self._terminals)

    def pin_keys(self) -> FrozenSet[Tuple[str, str]]:
        """(electronic identity, pin name) of every attached terminal."""
        return frozenset((node.electronic.identity, pin) for node, pin in self._terminals)

    def is_dangling(self) -> bool:
        return len(self._terminals) < 2

    def _attach(self, node: "Node", pin_name: str):
        self._terminals.append((node, pin_name))

    def __repr__(self) -> str:
        pins = ", ".join(f"{node.electronic.identity}.{pin or '<>'}" for node, pin in self._terminals)
        return f"Edge#{self.index}({pins})"


class Node:
    """Graph vertex for one component."""

    def __init__(self, electronic: Electronic):
        self.electronic = electronic
        self._pins: Dict[str, Edge] = {}

    @property
    def pins(self) -> Dict[str, Edge]:
        return dict(self._pins)

    def edge(self, pin_name: str) -> Optional[Edge]:
        return self._pins.get(pin_name)

    def connect(self, edge: Edge, pin_name: Optional[str] = None) -> "Node":
        """
        Attaches one of this component's pins to a net.

        Args:
            edge: Net to attach to
            pin_name: Pin to attach; may be omitted for single-pin components

        Raises:
            ValueError: If the pin name is ambiguous, unknown, or already attached
        """
        names = self.electronic.pin_names
        if pin_name is None:
            if len(names) != 1:
                raise ValueError(f"{self.electronic.identity} has {len(names)} pins; name one")
            pin_name = names[0]
        if pin_name not in names:
            raise ValueError(f"{self.electronic.identity} has no pin named {pin_name!r}")
        if pin_name in self._pins:
            raise ValueError(f"Pin {pin_name!r} of {self.electronic.identity} is already connected")

        self._pins[pin_name] = edge
        edge._attach(self, pin_name)
        return self

    def __repr__(self) -> str:
        return f"Node({self.electronic.identity})"


class Graph:
    def __init__(self):
        self.nodes: List[Node] = []
        self.edges: List[Edge] = []

    def create_node(self, electronic: Electronic) -> Node:
        node = Node(electronic)
        self.nodes.append(node)
        return node

    def create_edge(self) -> Edge:
        edge = Edge(len(self.edges))
        self.edges.append(edge)
        return edge

    def node_for(self, electronic: Electronic) -> Optional[Node]:
        return next((n for n in self.nodes if n.electronic.identity == electronic.identity), None)

    def edge_of(self, electronic: Electronic, pin_name: str = "") -> Optional[Edge]:
        node = self.node_for(electronic)
        return node.edge(pin_name) if node else None

    def dangling_edges(self) -> List[Edge]:
        return [edge for edge in self.edges if edge.is_dangling()]

    def signature(self) -> Tuple[Tuple[str, ...], Tuple[FrozenSet[Tuple[str, str]], ...]]:
        """Order-sensitive structural key: node identities and each edge's terminals."""
        return (
            tuple(node.electronic.identity for node in self.nodes),
            tuple(edge.pin_keys() for edge in self.edges),
        )

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Graph) and self.signature() == other.signature()

    def __repr__(self) -> str:
        return f"Graph(nodes={len(self.nodes)}, edges={self.edges})"


# ============================================================
# Derivation
# ============================================================
def derive_graph(circuit: "Circuit") -> Graph:
    """
    Builds one node per component and one edge per distinct net.

    Strategy:
    1. Create nodes in attachment order
    2. For every pin not yet on a net, trace the net from the pin's recorded cell
    3. Attach every pin found by the trace to a fresh edge

    Returns:
        The derived graph
    """
    graph = Graph()
    nodes = {identity: graph.create_node(e) for identity, e in circuit.electronics.items()}

    for identity in circuit.electronics:
        for pin_name, cell in circuit.placement(identity).pin_cells():
            if nodes[identity].edge(pin_name) is not None:
                continue
            edge = graph.create_edge()
            for link in _trace_net(circuit, cell):
                nodes[link.electronic.identity].connect(edge, link.pin_name)
            logger.debug("Derived %r", edge)

    return graph


def _trace_net(circuit: "Circuit", start: Coordinate) -> List[PinLink]:
    """
    Collects every pin reachable from ``start`` over wire links.

    Iterative BFS over cells. Pin links are terminals: they are collected but
    never followed, so a trace does not cross a component body.
    """
    found: List[PinLink] = []
    seen_pins: Set[Tuple[str, str]] = set()
    visited: Set[Coordinate] = {start}
    frontier = deque([start])

    while frontier:
        unit = circuit.unit_at(frontier.popleft())
        for _, link in unit.pin_links():
            if link.key not in seen_pins:
                seen_pins.add(link.key)
                found.append(link)
        for _, wire in unit.wire_links():
            if wire.coordinate not in visited:
                visited.add(wire.coordinate)
                frontier.append(wire.coordinate)

    return found
