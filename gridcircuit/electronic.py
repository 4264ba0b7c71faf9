"""
Electronic component model: kind catalog, orientation and pin geometry.

A component's body sits on its origin cell; each pin projects one cell away
from the origin in a direction resolved from the kind's base direction and the
component's current orientation. Rotation is clockwise with period 4.
"""

import itertools
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from .unit import Coordinate, Direction

ORIENTATIONS = 4


# ============================================================
# Component Metadata
# ============================================================
class ElectronicKind(Enum):
    RESISTOR = "resistor"
    SOURCE = "source"
    GROUND = "ground"


@dataclass(frozen=True)
class ElectronicInfo:
    """
    Metadata for a component kind.

    Attributes:
        pin_names: Names of the pins, in netlist order.
        base_directions: Direction of each pin at orientation 0 (0 degrees).
        prefix: Netlist designator prefix, or None for kinds that are not
            emitted as netlist elements (ground).
    """
    pin_names: Tuple[str, ...]
    base_directions: Tuple[Direction, ...]
    prefix: Optional[str] = None

    @property
    def pin_count(self) -> int:
        return len(self.pin_names)


ELECTRONIC_CATALOG: Dict[ElectronicKind, ElectronicInfo] = {
    ElectronicKind.RESISTOR: ElectronicInfo(
        ("1", "2"), (Direction.LEFT, Direction.RIGHT), prefix="R"),
    ElectronicKind.SOURCE: ElectronicInfo(
        ("POSITIVE", "NEGATIVE"), (Direction.TOP, Direction.BOTTOM), prefix="V"),
    ElectronicKind.GROUND: ElectronicInfo(("",), (Direction.TOP,)),
}

_identities = itertools.count(1)


def _next_identity(kind: ElectronicKind) -> str:
    return f"{kind.value}-{next(_identities)}"


def _as_coordinate(value: Sequence[int]) -> Coordinate:
    x, y = value
    return (int(x), int(y))


# ============================================================
# Electronic
# ============================================================
class Electronic:
    """A component that can be placed on a circuit board."""

    def __init__(self, kind: ElectronicKind, coordinate: Sequence[int] = (0, 0),
                 orientation: int = 0, identity: Optional[str] = None,
                 value: Optional[float] = None):
        self.kind = ElectronicKind(kind)
        self.info = ELECTRONIC_CATALOG[self.kind]
        self.identity = identity or _next_identity(self.kind)
        self.coordinate = _as_coordinate(coordinate)
        self.orientation = orientation
        self.value = value

    @property
    def orientation(self) -> int:
        return self._orientation

    @orientation.setter
    def orientation(self, orientation: int):
        if not 0 <= orientation < ORIENTATIONS:
            raise ValueError(f"Orientation must be in [0, {ORIENTATIONS}) (got {orientation})")
        self._orientation = orientation

    @property
    def degrees(self) -> int:
        return self._orientation * 90

    @property
    def pin_names(self) -> Tuple[str, ...]:
        return self.info.pin_names

    def rotate(self) -> "Electronic":
        """Advances the orientation by 90 degrees clockwise."""
        self._orientation = (self._orientation + 1) % ORIENTATIONS
        return self

    def move_to(self, coordinate: Sequence[int]) -> "Electronic":
        self.coordinate = _as_coordinate(coordinate)
        return self

    def pins(self) -> Iterator[Tuple[str, Direction]]:
        """Yields (pin_name, direction) for every pin under the current orientation."""
        for name, base in zip(self.info.pin_names, self.info.base_directions):
            yield name, base.clockwise(self._orientation)

    def pin_direction(self, pin_name: str) -> Direction:
        for name, direction in self.pins():
            if name == pin_name:
                return direction
        raise KeyError(f"{self.kind.value} has no pin named {pin_name!r}")

    def pin_coordinate(self, pin_name: str) -> Coordinate:
        return self.pin_direction(pin_name).step(self.coordinate)

    def footprint(self) -> List[Coordinate]:
        """Origin cell followed by the target cell of every pin."""
        return [self.coordinate] + [direction.step(self.coordinate) for _, direction in self.pins()]

    def __copy__(self) -> "Electronic":
        return Electronic(self.kind, self.coordinate, self._orientation, self.identity, self.value)

    def __repr__(self) -> str:
        return (f"Electronic({self.kind.value}, id={self.identity!r}, "
                f"coordinate={self.coordinate}, orientation={self.degrees})")


def create_electronic(kind: ElectronicKind, coordinate: Sequence[int] = (0, 0),
                      orientation: int = 0, identity: Optional[str] = None,
                      value: Optional[float] = None) -> Electronic:
    """Factory for standalone (unattached) components."""
    return Electronic(kind, coordinate, orientation=orientation, identity=identity, value=value)
