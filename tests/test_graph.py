#!/usr/bin/env python3
"""
Test suite for graph derivation from circuit layouts.

Tests cover:
1. Simple, series and parallel example layouts
2. Nets joining more than two terminals through wire branches
3. Singleton nets for unwired pins
4. Cyclic wiring terminating
5. Hand-built graph construction rules
"""

import pytest

from gridcircuit import Circuit, ElectronicKind, Graph, create_electronic
from gridcircuit.examples import linear_parallel, linear_series, simple_circuit


def test_simple_circuit_layout():
    """Resistor, source and ground wired into exactly two nets."""
    print("\n=== Test 1: Simple Circuit Graph ===")

    example = simple_circuit()
    resistor, source, ground = (example.components[k] for k in ("resistor", "source", "ground"))

    graph = Graph()
    n1 = graph.create_node(resistor)
    n2 = graph.create_node(source)
    n3 = graph.create_node(ground)

    e1 = graph.create_edge()
    n1.connect(e1, "1")
    n2.connect(e1, "POSITIVE")

    e2 = graph.create_edge()
    n1.connect(e2, "2")
    n2.connect(e2, "NEGATIVE")
    n3.connect(e2)

    derived = example.circuit.derive_graph()

    assert derived == graph
    assert len(derived.nodes) == 3
    assert len(derived.edges) == 2
    assert derived.edges[0].pin_keys() == {(resistor.identity, "1"), (source.identity, "POSITIVE")}
    assert derived.edges[1].pin_keys() == {
        (resistor.identity, "2"), (source.identity, "NEGATIVE"), (ground.identity, ""),
    }

    print("✅ PASSED: 3 nodes, 2 edges")


def test_simple_circuit_layout_cells():
    example = simple_circuit()
    assert example.circuit.render() == "\n".join([
        "[ a a a a a ]",
        "[ a n o n a ]",
        "[ a o a w a ]",
        "[ a n n w a ]",
        "[ a a o a a ]",
    ])


def test_series_circuit_layout():
    example = linear_series()
    c = example.components

    graph = Graph()
    n1 = graph.create_node(c["resistor1"])
    n2 = graph.create_node(c["resistor2"])
    n3 = graph.create_node(c["source"])
    n4 = graph.create_node(c["ground"])

    e1 = graph.create_edge()
    n1.connect(e1, "1")
    n3.connect(e1, "POSITIVE")

    e2 = graph.create_edge()
    n1.connect(e2, "2")
    n2.connect(e2, "1")

    e3 = graph.create_edge()
    n2.connect(e3, "2")
    n4.connect(e3)
    n3.connect(e3, "NEGATIVE")

    assert example.circuit.derive_graph() == graph


def test_parallel_circuit_layout():
    """Both nets join three or more terminals through branching wires."""
    example = linear_parallel()
    c = example.components

    graph = Graph()
    n1 = graph.create_node(c["resistor1"])
    n2 = graph.create_node(c["resistor2"])
    n3 = graph.create_node(c["source"])
    n4 = graph.create_node(c["ground"])

    e1 = graph.create_edge()
    n1.connect(e1, "1")
    n2.connect(e1, "1")
    n3.connect(e1, "POSITIVE")

    e2 = graph.create_edge()
    n1.connect(e2, "2")
    n2.connect(e2, "2")
    n3.connect(e2, "NEGATIVE")
    n4.connect(e2)

    derived = example.circuit.derive_graph()
    assert derived == graph
    assert len(derived.edges[1].terminals) == 4


def test_unwired_pins_get_singleton_nets():
    circuit = Circuit(5)
    resistor = create_electronic(ElectronicKind.RESISTOR, (2, 2))
    circuit.append_electronics(resistor)

    graph = circuit.derive_graph()

    assert len(graph.nodes) == 1
    assert len(graph.edges) == 2
    assert all(edge.is_dangling() for edge in graph.edges)
    assert graph.edge_of(resistor, "1") is not graph.edge_of(resistor, "2")


def test_pin_to_pin_junction_shares_net():
    circuit = Circuit(6, 1)
    resistor1 = create_electronic(ElectronicKind.RESISTOR, (1, 0))
    resistor2 = create_electronic(ElectronicKind.RESISTOR, (3, 0))
    circuit.append_electronics(resistor1)
    circuit.append_electronics(resistor2)

    graph = circuit.derive_graph()

    assert len(graph.edges) == 3
    assert graph.edge_of(resistor1, "2") is graph.edge_of(resistor2, "1")
    assert graph.edge_of(resistor1, "2").pin_keys() == {
        (resistor1.identity, "2"), (resistor2.identity, "1"),
    }


def test_traversal_does_not_cross_component_body():
    """Each resistor pin is a separate terminal even with wires on both sides."""
    circuit = Circuit(5)
    resistor = create_electronic(ElectronicKind.RESISTOR, (2, 2))
    circuit.append_electronics(resistor)
    circuit.add_joint((1, 2), (0, 2))
    circuit.add_joint((3, 2), (4, 2))

    graph = circuit.derive_graph()

    assert len(graph.edges) == 2


def test_cyclic_wiring_terminates():
    """A closed wire loop around a pin cell is traversed once."""
    circuit = Circuit(5)
    ground = create_electronic(ElectronicKind.GROUND, (1, 2))
    circuit.append_electronics(ground)
    # Loop through (1, 1) -> (2, 1) -> (2, 0) -> (1, 0) -> (1, 1)
    circuit.add_joint((1, 1), (2, 1))
    circuit.add_joint((2, 1), (2, 0))
    circuit.add_joint((2, 0), (1, 0))
    circuit.add_joint((1, 0), (1, 1))

    graph = circuit.derive_graph()

    assert len(graph.edges) == 1
    assert graph.edges[0].pin_keys() == {(ground.identity, "")}


def test_four_way_junction():
    circuit = Circuit(5)
    resistors = []
    for coordinate, rotations in (((2, 1), 1), ((3, 2), 2), ((2, 3), 3), ((1, 2), 0)):
        resistor = create_electronic(ElectronicKind.RESISTOR, coordinate)
        for _ in range(rotations):
            resistor.rotate()
        circuit.append_electronics(resistor)
        resistors.append(resistor)

    graph = circuit.derive_graph()

    centre = graph.edge_of(resistors[0], "2")
    assert centre.pin_keys() == {(r.identity, "2") for r in resistors}
    assert len(graph.edges) == 5


def test_node_connect_rules():
    resistor = create_electronic(ElectronicKind.RESISTOR)
    ground = create_electronic(ElectronicKind.GROUND)
    graph = Graph()
    node = graph.create_node(resistor)
    edge = graph.create_edge()

    with pytest.raises(ValueError, match="name one"):
        node.connect(edge)
    with pytest.raises(ValueError, match="no pin named"):
        node.connect(edge, "POSITIVE")

    node.connect(edge, "1")
    with pytest.raises(ValueError, match="already connected"):
        node.connect(graph.create_edge(), "1")

    ground_node = graph.create_node(ground).connect(edge)
    assert ground_node.edge("") is edge
    assert [pin for _, pin in edge.terminals] == ["1", ""]


def test_graph_equality_is_structural():
    resistor = create_electronic(ElectronicKind.RESISTOR)
    a, b = Graph(), Graph()
    for graph in (a, b):
        node = graph.create_node(resistor)
        node.connect(graph.create_edge(), "1")

    assert a == b
    b.nodes[0].connect(b.create_edge(), "2")
    assert a != b
