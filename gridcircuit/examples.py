"""
Canonical example layouts.

Diagrams use the render() legend: o body, n pin, w wire, a empty.
"""

from dataclasses import dataclass, field
from typing import Dict

from .circuit import Circuit
from .electronic import Electronic, ElectronicKind, create_electronic


@dataclass
class CircuitExample:
    circuit: Circuit
    components: Dict[str, Electronic] = field(default_factory=dict)


def _build(circuit: Circuit, components: Dict[str, Electronic], joints) -> CircuitExample:
    for electronic in components.values():
        circuit.append_electronics(electronic)
    for a, b in joints:
        circuit.add_joint(a, b)
    return CircuitExample(circuit, components)


def simple_circuit() -> CircuitExample:
    """
    One resistor fed by a source, returning through ground.

    [ a a a a a ]
    [ a n o n a ]
    [ a o a w a ]
    [ a n n w a ]
    [ a a o a a ]
    """
    components = {
        "resistor": create_electronic(ElectronicKind.RESISTOR, (2, 1), value=1000.0),
        "source": create_electronic(ElectronicKind.SOURCE, (1, 2), value=5.0),
        "ground": create_electronic(ElectronicKind.GROUND, (2, 4)),
    }
    joints = [((3, 1), (3, 2)), ((3, 2), (3, 3)), ((3, 3), (2, 3)), ((2, 3), (1, 3))]
    return _build(Circuit(5), components, joints)


def linear_series() -> CircuitExample:
    """
    Two resistors in series across the source.

    [ a n o n a ]
    [ a o a o a ]
    [ a n n n a ]
    [ a a o a a ]
    [ a a a a a ]
    """
    components = {
        "resistor1": create_electronic(ElectronicKind.RESISTOR, (2, 0), value=1000.0),
        "resistor2": create_electronic(ElectronicKind.RESISTOR, (3, 1), orientation=1, value=2000.0),
        "source": create_electronic(ElectronicKind.SOURCE, (1, 1), value=9.0),
        "ground": create_electronic(ElectronicKind.GROUND, (2, 3)),
    }
    joints = [((1, 2), (2, 2)), ((2, 2), (3, 2))]
    return _build(Circuit(5), components, joints)


def linear_parallel() -> CircuitExample:
    """
    Two resistors in parallel across the source.

    [ a a a a a ]
    [ n n o n a ]
    [ o w a w n ]
    [ n n o n o ]
    [ w w w w a ]
    """
    components = {
        "resistor1": create_electronic(ElectronicKind.RESISTOR, (2, 1), value=1000.0),
        "resistor2": create_electronic(ElectronicKind.RESISTOR, (2, 3), value=1000.0),
        "source": create_electronic(ElectronicKind.SOURCE, (0, 2), value=3.0),
        "ground": create_electronic(ElectronicKind.GROUND, (4, 3)),
    }
    joints = [
        ((0, 1), (1, 1)), ((1, 1), (1, 2)), ((1, 2), (1, 3)),
        ((3, 1), (3, 2)), ((3, 2), (3, 3)), ((3, 2), (4, 2)),
        ((3, 3), (3, 4)), ((3, 4), (2, 4)), ((2, 4), (1, 4)), ((1, 4), (0, 4)), ((0, 4), (0, 3)),
    ]
    return _build(Circuit(5), components, joints)


EXAMPLES = {
    "simple": simple_circuit,
    "series": linear_series,
    "parallel": linear_parallel,
}
