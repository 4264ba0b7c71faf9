"""
Grid cell model for the circuit board.

Every cell of the board is a ``Unit``. A unit can hold the body of at most one
electronic component and has four directional link slots (top/right/bottom/
left). Each slot holds at most one link, which is one of:

- ``WireLink``: a plain wire segment to the neighboring cell
- ``PinLink``: a component pin terminating in (or leaving) this cell

Units are only mutated through ``Circuit``; the reciprocal half of every link
is written by the circuit's linking primitive.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Dict, Iterator, Optional, Tuple, Union

if TYPE_CHECKING:
    from .electronic import Electronic

Coordinate = Tuple[int, int]


class Direction(Enum):
    TOP = "top"
    RIGHT = "right"
    BOTTOM = "bottom"
    LEFT = "left"

    @property
    def offset(self) -> Coordinate:
        """(dx, dy) step towards the neighbor in this direction. Rows grow downwards."""
        return _OFFSETS[self]

    def opposite(self) -> "Direction":
        return self.clockwise(2)

    def clockwise(self, turns: int = 1) -> "Direction":
        index = _CLOCKWISE.index(self)
        return _CLOCKWISE[(index + turns) % len(_CLOCKWISE)]

    def step(self, coordinate: Coordinate) -> Coordinate:
        dx, dy = self.offset
        return (coordinate[0] + dx, coordinate[1] + dy)

    @classmethod
    def between(cls, a: Coordinate, b: Coordinate) -> Optional["Direction"]:
        """Direction from ``a`` to ``b`` if they are orthogonal neighbors, else None."""
        delta = (b[0] - a[0], b[1] - a[1])
        for direction, offset in _OFFSETS.items():
            if offset == delta:
                return direction
        return None


_CLOCKWISE = (Direction.TOP, Direction.RIGHT, Direction.BOTTOM, Direction.LEFT)
_OFFSETS: Dict[Direction, Coordinate] = {
    Direction.TOP: (0, -1),
    Direction.RIGHT: (1, 0),
    Direction.BOTTOM: (0, 1),
    Direction.LEFT: (-1, 0),
}


# ============================================================
# Link variants
# ============================================================
@dataclass(frozen=True)
class WireLink:
    """Plain wire segment to the neighboring unit at ``coordinate``."""
    coordinate: Coordinate


@dataclass(frozen=True, eq=False)
class PinLink:
    """A pin of ``electronic`` named ``pin_name`` attached through this slot."""
    electronic: "Electronic"
    pin_name: str

    @property
    def key(self) -> Tuple[str, str]:
        return (self.electronic.identity, self.pin_name)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, PinLink) and self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def __repr__(self) -> str:
        return f"PinLink({self.electronic.identity!r}, {self.pin_name!r})"


Link = Union[WireLink, PinLink]


def _empty_slots() -> Dict[Direction, Optional[Link]]:
    return {direction: None for direction in _CLOCKWISE}


# ============================================================
# Unit
# ============================================================
@dataclass
class Unit:
    coordinate: Coordinate
    occupied_by: Optional[str] = None
    connections: Dict[Direction, Optional[Link]] = field(default_factory=_empty_slots)

    def connection(self, direction: Union[Direction, str]) -> Optional[Link]:
        return self.connections[Direction(direction)]

    def connect(self, direction: Union[Direction, str], target: Union[Link, "Unit"]):
        """
        Stores a link in one direction slot.

        A ``Unit`` target is stored as a wire link to that unit. Only this side
        is written; the circuit writes the reciprocal half.

        Raises:
            ValueError: If the slot already holds a different link
        """
        direction = Direction(direction)
        if isinstance(target, Unit):
            target = WireLink(target.coordinate)
        current = self.connections[direction]
        if current is not None and current != target:
            raise ValueError(
                f"Slot {direction.value} of unit {self.coordinate} already holds {current!r}"
            )
        self.connections[direction] = target

    def disconnect(self, direction: Union[Direction, str]) -> Optional[Link]:
        direction = Direction(direction)
        link = self.connections[direction]
        self.connections[direction] = None
        return link

    def set_electronic(self, identity: Optional[str]):
        self.occupied_by = identity

    def links(self) -> Iterator[Tuple[Direction, Link]]:
        """Yields the filled slots in clockwise order starting at the top."""
        for direction in _CLOCKWISE:
            link = self.connections[direction]
            if link is not None:
                yield direction, link

    def wire_links(self) -> Iterator[Tuple[Direction, WireLink]]:
        for direction, link in self.links():
            if isinstance(link, WireLink):
                yield direction, link

    def pin_links(self) -> Iterator[Tuple[Direction, PinLink]]:
        for direction, link in self.links():
            if isinstance(link, PinLink):
                yield direction, link

    def is_free(self, direction: Direction) -> bool:
        return self.connections[direction] is None

    def is_empty(self) -> bool:
        return self.occupied_by is None and all(link is None for link in self.connections.values())
