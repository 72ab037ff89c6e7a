"""
Coordinate primitives shared by the grid toolkit.

Points use screen orientation: x grows to the right (column), y grows
downwards (row).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Union

__all__ = ["Point", "Direction", "DirectionGroup", "DirectionLike", "expand", "Bounds"]


class Direction(Enum):
    """Unit step on the plane. The value is the (dx, dy) delta."""

    TOP = (0, -1)
    RIGHT = (1, 0)
    BOTTOM = (0, 1)
    LEFT = (-1, 0)
    TOP_RIGHT = (1, -1)
    BOTTOM_RIGHT = (1, 1)
    BOTTOM_LEFT = (-1, 1)
    TOP_LEFT = (-1, -1)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @property
    def opposite(self) -> Direction:
        return Direction((-self.dx, -self.dy))


class DirectionGroup(Enum):
    """Named, fixed-arity list of directions used for neighbour queries."""

    NON_DIAGONAL = "non_diagonal"
    TLBR = "tlbr"  # top-left / bottom-right diagonal
    TRBL = "trbl"  # top-right / bottom-left diagonal
    ALL = "all"

    @property
    def directions(self) -> tuple[Direction, ...]:
        return _GROUPS[self]


_GROUPS: dict[DirectionGroup, tuple[Direction, ...]] = {
    DirectionGroup.NON_DIAGONAL: (Direction.TOP, Direction.RIGHT, Direction.BOTTOM, Direction.LEFT),
    DirectionGroup.TLBR: (Direction.TOP_LEFT, Direction.BOTTOM_RIGHT),
    DirectionGroup.TRBL: (Direction.TOP_RIGHT, Direction.BOTTOM_LEFT),
    DirectionGroup.ALL: tuple(Direction),
}

DirectionLike = Union[Direction, DirectionGroup]


def expand(group: DirectionLike) -> tuple[Direction, ...]:
    """Expand a group to its directions. A single direction expands to itself."""
    if isinstance(group, Direction):
        return (group,)
    return group.directions


@dataclass(frozen=True)
class Point:
    """An integer coordinate. May lie outside any grid."""

    x: int
    y: int

    def translate_in_direction(self, direction: Direction, distance: int = 1) -> Point:
        return Point(self.x + direction.dx * distance, self.y + direction.dy * distance)

    def manhattan_distance(self, other: Point) -> int:
        return abs(self.x - other.x) + abs(self.y - other.y)

    def get_points_around(self, group: DirectionLike) -> list[Point]:
        """One-step neighbours, in the group's declaration order."""
        return [self.translate_in_direction(direction) for direction in expand(group)]

    def get_points_within_manhattan_distance(self, radius: int) -> list[Point]:
        """
        Every point whose manhattan distance to this one is at most radius.

        The diamond is walked row by row (ascending y, then ascending x), so
        each point appears exactly once and the order is stable.
        """
        if radius < 0:
            raise ValueError(f"Radius must be non-negative, got {radius}")

        points: list[Point] = []
        for dy in range(-radius, radius + 1):
            span = radius - abs(dy)
            for dx in range(-span, span + 1):
                points.append(Point(self.x + dx, self.y + dy))
        return points

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned rectangle of valid coordinates. Zero area means empty."""

    top: int
    left: int
    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(
                f"Bounds size must be non-negative\n"
                f"  width: {self.width}\n"
                f"  height: {self.height}"
            )

    @classmethod
    def from_size(cls, width: int, height: int) -> Bounds:
        return cls(top=0, left=0, width=width, height=height)

    @classmethod
    def from_point(cls, point: Point) -> Bounds:
        return cls(top=point.y, left=point.x, width=1, height=1)

    @classmethod
    def empty(cls) -> Bounds:
        return cls(top=0, left=0, width=0, height=0)

    @property
    def right(self) -> int:
        """Last column inside the bounds."""
        return self.left + self.width - 1

    @property
    def bottom(self) -> int:
        """Last row inside the bounds."""
        return self.top + self.height - 1

    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    def top_left(self) -> Point:
        return Point(self.left, self.top)

    def bottom_right(self) -> Point:
        return Point(self.right, self.bottom)

    def contains(self, point: Point) -> bool:
        return self.left <= point.x <= self.right and self.top <= point.y <= self.bottom

    def __contains__(self, point: object) -> bool:
        return isinstance(point, Point) and self.contains(point)

    def x(self) -> range:
        return range(self.left, self.left + self.width)

    def y(self) -> range:
        return range(self.top, self.top + self.height)

    def points(self) -> Iterator[Point]:
        """Row-major walk over every coordinate."""
        for y in self.y():
            for x in self.x():
                yield Point(x, y)

    def union(self, other: Bounds) -> Bounds:
        """Smallest bounds covering both. Empty bounds are ignored."""
        if other.is_empty():
            return self
        if self.is_empty():
            return other

        left = min(self.left, other.left)
        top = min(self.top, other.top)
        right = max(self.right, other.right)
        bottom = max(self.bottom, other.bottom)
        return Bounds(top=top, left=left, width=right - left + 1, height=bottom - top + 1)
