"""Tests for the grid cell model and directions."""

import pytest

from gridcircuit import Direction, ElectronicKind, PinLink, Unit, WireLink, create_electronic


def test_direction_geometry():
    assert Direction.TOP.opposite() is Direction.BOTTOM
    assert Direction.LEFT.opposite() is Direction.RIGHT
    assert Direction.LEFT.clockwise() is Direction.TOP
    assert Direction.TOP.clockwise(3) is Direction.LEFT
    assert Direction.TOP.step((2, 2)) == (2, 1)
    assert Direction.RIGHT.step((2, 2)) == (3, 2)
    assert Direction.between((1, 1), (1, 2)) is Direction.BOTTOM
    assert Direction.between((1, 1), (2, 2)) is None
    assert Direction("left") is Direction.LEFT


def test_new_unit_is_empty():
    unit = Unit((0, 0))

    assert unit.is_empty()
    assert unit.occupied_by is None
    assert all(unit.connection(direction) is None for direction in Direction)


def test_connect_unit_stores_wire_link():
    a, b = Unit((0, 0)), Unit((1, 0))
    a.connect("right", b)

    assert a.connection("right") == WireLink((1, 0))
    # Only one side is written at unit level
    assert b.is_empty()


def test_slot_holds_at_most_one_link():
    resistor = create_electronic(ElectronicKind.RESISTOR, (1, 0))
    unit = Unit((0, 0))
    unit.connect("right", PinLink(resistor, "1"))

    # Same link again is a no-op
    unit.connect("right", PinLink(resistor, "1"))
    with pytest.raises(ValueError, match="already holds"):
        unit.connect("right", PinLink(resistor, "2"))


def test_pin_links_compare_by_identity_and_pin():
    resistor = create_electronic(ElectronicKind.RESISTOR, identity="r1")
    same_identity = create_electronic(ElectronicKind.RESISTOR, (3, 3), identity="r1")

    assert PinLink(resistor, "1") == PinLink(same_identity, "1")
    assert PinLink(resistor, "1") != PinLink(resistor, "2")
    assert len({PinLink(resistor, "1"), PinLink(same_identity, "1")}) == 1


def test_links_iterate_clockwise_from_top():
    resistor = create_electronic(ElectronicKind.RESISTOR)
    unit = Unit((1, 1))
    unit.connect("left", WireLink((0, 1)))
    unit.connect("top", PinLink(resistor, "2"))
    unit.connect("bottom", WireLink((1, 2)))

    assert [d for d, _ in unit.links()] == [Direction.TOP, Direction.BOTTOM, Direction.LEFT]
    assert [d for d, _ in unit.wire_links()] == [Direction.BOTTOM, Direction.LEFT]
    assert [link.pin_name for _, link in unit.pin_links()] == ["2"]

    assert unit.disconnect("top") == PinLink(resistor, "2")
    assert unit.is_free(Direction.TOP)
