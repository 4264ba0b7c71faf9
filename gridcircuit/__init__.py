"""
Grid circuit: place components on a discrete board, derive the electrical
topology and solve the linear equations written over it.
"""

from .circuit import Circuit, Placement
from .electronic import ELECTRONIC_CATALOG, Electronic, ElectronicInfo, ElectronicKind, create_electronic
from .equation import Equation
from .graph import Edge, Graph, Node, derive_graph
from .netlist import connectivity_summary, to_netlist
from .simultaneous_equations import (
    InconsistentEquationsError,
    InsufficientEquationsError,
    InsufficientUnknownsError,
    NameMismatchError,
    QuantityMismatchError,
    SimultaneousEquations,
    SimultaneousEquationsError,
    UnknownNameMismatchError,
)
from .unit import Coordinate, Direction, PinLink, Unit, WireLink

__version__ = "0.1.0"

__all__ = [
    "Circuit", "Placement", "Unit", "Direction", "Coordinate", "WireLink", "PinLink",
    "Electronic", "ElectronicKind", "ElectronicInfo", "ELECTRONIC_CATALOG", "create_electronic",
    "Graph", "Node", "Edge", "derive_graph",
    "Equation", "SimultaneousEquations",
    "SimultaneousEquationsError", "InsufficientUnknownsError", "QuantityMismatchError",
    "NameMismatchError", "UnknownNameMismatchError", "InsufficientEquationsError",
    "InconsistentEquationsError",
    "connectivity_summary", "to_netlist",
]
