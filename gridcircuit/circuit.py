"""
Grid placement engine for circuit layouts.

This module provides a bounded 2D board of ``Unit`` cells on which electronic
components are placed and wired together. It validates placements against
cell occupancy and records connectivity as explicit link slots.

GRID MODEL:
- Coordinates are (x, y): x is the column, y is the row, both zero-based
- The layout is indexed ``layout[row][col]``
- A component body occupies its origin cell; each pin terminates in the
  neighboring cell in the pin's direction
- Several pins and wires may meet in one cell (junction); bodies never overlap
- Every link is written in both cells by ``_join`` so traversal is symmetric
- The geometry used at attach time is kept as a ``Placement``; grid edits and
  graph derivation read it instead of the component's current orientation
"""

import copy
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, List, Optional, Sequence, Tuple

from .electronic import Electronic
from .unit import Coordinate, Direction, Link, PinLink, Unit, WireLink

if TYPE_CHECKING:
    from .graph import Graph

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Placement:
    """Geometry a component had when it was attached."""
    origin: Coordinate
    orientation: int
    pins: Tuple[Tuple[str, Direction], ...]

    def pin_cells(self) -> List[Tuple[str, Coordinate]]:
        return [(name, direction.step(self.origin)) for name, direction in self.pins]


class Circuit:
    DEFAULT_SIZE = 5
    MIN_SIZE = 1

    def __init__(self, width: int = DEFAULT_SIZE, height: Optional[int] = None):
        height = width if height is None else height
        if width < self.MIN_SIZE or height < self.MIN_SIZE:
            raise ValueError(
                f"Circuit requires at least {self.MIN_SIZE}x{self.MIN_SIZE} cells (got {width}x{height})"
            )

        self.width = width
        self.height = height
        self._layout: List[List[Unit]] = [
            [Unit((x, y)) for x in range(width)] for y in range(height)
        ]
        self._electronics: Dict[str, Electronic] = {}
        self._placements: Dict[str, Placement] = {}
        self._joints: List[Tuple[Coordinate, Coordinate]] = []

    @property
    def layout(self) -> Tuple[Tuple[Unit, ...], ...]:
        """Rows of units. The units are live; mutate them only through the circuit."""
        return tuple(tuple(row) for row in self._layout)

    @property
    def electronics(self) -> Dict[str, Electronic]:
        return dict(self._electronics)

    @property
    def joints(self) -> List[Tuple[Coordinate, Coordinate]]:
        return list(self._joints)

    def placement(self, identity: str) -> Placement:
        """
        Recorded geometry of an attached component. Calling ``rotate()`` or
        ``move_to()`` on the component itself does not change it; use
        ``rotate_electronics`` or ``move_electronics`` to re-place it.

        Raises:
            KeyError: If no component with this identity is attached
        """
        return self._placements[identity]

    def unit_at(self, coordinate: Sequence[int]) -> Unit:
        x, y = coordinate
        if not self._is_position_valid((x, y)):
            raise IndexError(f"Coordinate {(x, y)} is outside the {self.width}x{self.height} circuit")
        return self._layout[y][x]

    def _is_position_valid(self, coordinate: Coordinate) -> bool:
        x, y = coordinate
        return 0 <= x < self.width and 0 <= y < self.height

    # ============================================================
    # Placement
    # ============================================================
    def can_attach_component(self, electronic: Electronic) -> bool:
        """
        Checks whether a component fits at its coordinate under its orientation.

        Pure query: never raises and never mutates the board.

        Args:
            electronic: Standalone component to test

        Returns:
            True if the body cell and every pin cell are inside the board, the
            body cell is empty and no pin terminates inside another body
        """
        footprint = electronic.footprint()
        origin, pin_cells = footprint[0], footprint[1:]

        if not all(self._is_position_valid(cell) for cell in footprint):
            logger.debug("%s rejected: out of bounds", electronic.identity)
            return False

        # Body-to-body overlap, or a body dropped onto existing wiring
        if not self._unit(origin).is_empty():
            logger.debug("%s rejected: origin %s is not empty", electronic.identity, origin)
            return False

        # Pins may share cells with wires and other pins, never with a body
        for cell in pin_cells:
            if self._unit(cell).occupied_by is not None:
                logger.debug("%s rejected: pin blocked at %s", electronic.identity, cell)
                return False

        return True

    def append_electronics(self, electronic: Electronic):
        """
        Places a component and links each of its pins to the body cell.

        Raises:
            ValueError: If the placement is invalid or the identity is taken
        """
        if electronic.identity in self._electronics:
            raise ValueError(f"Electronic {electronic.identity!r} is already attached")
        if not self.can_attach_component(electronic):
            logger.warning("Refused to attach %r", electronic)
            raise ValueError(f"Invalid placement: {electronic!r}")

        placement = Placement(electronic.coordinate, electronic.orientation, tuple(electronic.pins()))
        self._unit(placement.origin).set_electronic(electronic.identity)
        for pin_name, direction in placement.pins:
            link = PinLink(electronic, pin_name)
            self._join(placement.origin, direction, link, link)

        self._electronics[electronic.identity] = electronic
        self._placements[electronic.identity] = placement
        logger.debug("Attached %r", electronic)

    def remove_electronics(self, identity: str) -> Electronic:
        """
        Detaches a component, clearing its body cell and both halves of each
        pin link as they were written at attach time. Wires are left in place.

        Raises:
            KeyError: If no component with this identity is attached
        """
        electronic = self._electronics.pop(identity)
        placement = self._placements.pop(identity)
        self._unit(placement.origin).set_electronic(None)
        for _, direction in placement.pins:
            self._unjoin(placement.origin, direction)
        logger.debug("Removed %r", electronic)
        return electronic

    def rotate_electronics(self, identity: str) -> Electronic:
        """
        Turns an attached component 90 degrees clockwise from its recorded
        orientation, re-validating the new footprint.

        Raises:
            KeyError: If no component with this identity is attached
            ValueError: If the rotated footprint does not fit; the component is
                restored to its recorded placement
        """
        placement = self._placements[identity]
        return self._replace(identity, placement.origin, placement.orientation + 1)

    def move_electronics(self, identity: str, coordinate: Sequence[int]) -> Electronic:
        """
        Moves an attached component, keeping its recorded orientation.

        Raises:
            KeyError: If no component with this identity is attached
            ValueError: If the component does not fit at ``coordinate``; it is
                restored to its recorded placement
        """
        placement = self._placements[identity]
        return self._replace(identity, coordinate, placement.orientation)

    def _replace(self, identity: str, coordinate: Sequence[int], orientation: int) -> Electronic:
        placement = self._placements[identity]
        electronic = self.remove_electronics(identity)
        electronic.move_to(coordinate)
        electronic.orientation = orientation % 4
        if not self.can_attach_component(electronic):
            electronic.move_to(placement.origin)
            electronic.orientation = placement.orientation
            self.append_electronics(electronic)
            raise ValueError(f"{identity!r} does not fit at {tuple(coordinate)} "
                             f"(orientation {orientation % 4 * 90})")
        self.append_electronics(electronic)
        return electronic

    # ============================================================
    # Wiring
    # ============================================================
    def can_add_joint(self, a: Sequence[int], b: Sequence[int]) -> bool:
        a, b = tuple(a), tuple(b)
        if not self._is_position_valid(a) or not self._is_position_valid(b):
            return False
        direction = Direction.between(a, b)
        if direction is None:
            return False
        unit_a, unit_b = self._unit(a), self._unit(b)
        # Wires end at pins, never inside a body
        if unit_a.occupied_by is not None or unit_b.occupied_by is not None:
            return False
        return unit_a.is_free(direction) and unit_b.is_free(direction.opposite())

    def add_joint(self, a: Sequence[int], b: Sequence[int]):
        """
        Wires two orthogonally adjacent cells together.

        Args:
            a: First endpoint (x, y)
            b: Second endpoint (x, y)

        Raises:
            ValueError: If either cell is out of bounds or a component body,
                the cells are not adjacent, or either slot is already linked
        """
        a, b = (int(a[0]), int(a[1])), (int(b[0]), int(b[1]))
        if not self.can_add_joint(a, b):
            raise ValueError(f"Invalid joint: {a} -> {b}")
        self._join(a, Direction.between(a, b), WireLink(b), WireLink(a))
        self._joints.append((a, b))
        logger.debug("Joined %s -> %s", a, b)

    def _join(self, origin: Coordinate, direction: Direction, origin_link: Link, target_link: Link):
        """Writes a link and its reciprocal half. Both slots must be free."""
        target = direction.step(origin)
        origin_unit, target_unit = self._unit(origin), self._unit(target)
        back = direction.opposite()
        if not origin_unit.is_free(direction) or not target_unit.is_free(back):
            raise ValueError(f"Link slots between {origin} and {target} are already in use")
        origin_unit.connect(direction, origin_link)
        target_unit.connect(back, target_link)

    def _unjoin(self, origin: Coordinate, direction: Direction):
        self._unit(origin).disconnect(direction)
        self._unit(direction.step(origin)).disconnect(direction.opposite())

    def _unit(self, coordinate: Coordinate) -> Unit:
        x, y = coordinate
        return self._layout[y][x]

    # ============================================================
    # Topology
    # ============================================================
    def derive_graph(self) -> "Graph":
        from .graph import derive_graph
        return derive_graph(self)

    def clone(self) -> "Circuit":
        """Independent copy; each component is copied at its recorded placement."""
        new_circuit = self.__class__(self.width, self.height)
        for identity, electronic in self._electronics.items():
            placement = self._placements[identity]
            duplicate = copy.copy(electronic).move_to(placement.origin)
            duplicate.orientation = placement.orientation
            new_circuit.append_electronics(duplicate)
        for a, b in self._joints:
            new_circuit.add_joint(a, b)
        return new_circuit

    def render(self) -> str:
        """
        ASCII view of the board, one bracketed line per row:
        ``o`` body, ``n`` pin terminal, ``w`` wire only, ``a`` empty.
        """
        lines = []
        for row in self._layout:
            cells = []
            for unit in row:
                if unit.occupied_by is not None:
                    cells.append("o")
                elif any(True for _ in unit.pin_links()):
                    cells.append("n")
                elif any(True for _ in unit.wire_links()):
                    cells.append("w")
                else:
                    cells.append("a")
            lines.append("[ " + " ".join(cells) + " ]")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"Circuit({self.width}x{self.height}, electronics={len(self._electronics)})"
