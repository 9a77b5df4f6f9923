"""
Grid primitives - positions and directions on the platform.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum


class Direction(Enum):
    """Axis-aligned single-step directions."""
    NORTH = (0, 1)
    EAST = (1, 0)
    SOUTH = (0, -1)
    WEST = (-1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]


@dataclass(frozen=True, order=True)
class GridPosition:
    """
    An integer cell coordinate.

    Value type: equality and hashing by (x, y).
    """
    x: int
    y: int

    def step(self, direction: Direction) -> GridPosition:
        """Return the neighbouring position in the given direction."""
        return GridPosition(self.x + direction.dx, self.y + direction.dy)

    def neighbors(self) -> list[GridPosition]:
        """The 4-neighbourhood in N/E/S/W order."""
        return [self.step(d) for d in Direction]

    def direction_to(self, other: GridPosition) -> Direction | None:
        """
        Direction of a single step from this position to `other`.

        Returns None when `other` is not an orthogonal neighbour.
        """
        delta = (other.x - self.x, other.y - self.y)
        for direction in Direction:
            if direction.value == delta:
                return direction
        return None

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"
