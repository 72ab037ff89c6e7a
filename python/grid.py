"""
Coordinate-indexed grid built from text.

A grid is either sparse (no default: unset cells read as None) or dense
(a default value: every in-bounds cell reads as the default until set).
Bounds grow when a point outside them is set and never shrink.
"""

from __future__ import annotations

import logging
import textwrap
from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterator, Sequence, TypeVar

from geometry import Bounds, Direction, DirectionLike, Point
from token_parser import ParseError

logger = logging.getLogger(__name__)

__all__ = ["GridFormat", "Grid", "parse_grid", "render_grid"]

T = TypeVar("T")


@dataclass(frozen=True)
class GridFormat:
    """Text layout used when parsing and rendering grids."""

    token_width: int = 1  # Characters per cell
    placeholder: str = " "  # Drawn for cells without a value

    def __post_init__(self) -> None:
        if self.token_width < 1:
            raise ValueError(f"token_width must be at least 1, got {self.token_width}")
        if len(self.placeholder) != 1:
            raise ValueError(f"placeholder must be a single character, got '{self.placeholder}'")


DEFAULT_FORMAT = GridFormat()


class Grid(Generic[T]):
    """A mapping from Point to cell value over a rectangular region."""

    def __init__(
        self,
        bounds: Bounds | None = None,
        cells: dict[Point, T] | None = None,
        default: T | None = None,
    ) -> None:
        self.bounds = bounds if bounds is not None else Bounds.empty()
        self.cells: dict[Point, T] = dict(cells) if cells else {}
        self.default = default

        outside = [p for p in self.cells if not self.bounds.contains(p)]
        if outside:
            raise ValueError(
                f"Cells outside grid bounds\n"
                f"  Bounds: {self.bounds}\n"
                f"  Points: {', '.join(str(p) for p in outside[:5])}"
            )

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def empty(cls) -> Grid[Any]:
        return cls()

    @classmethod
    def with_size(cls, bounds: Bounds, default: T) -> Grid[T]:
        if default is None:
            raise ValueError("with_size requires a default value; use Grid.empty() for a sparse grid")
        return cls(bounds, default=default)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[T]]) -> Grid[T]:
        """Build a grid from row-major nested values, top-left at (0, 0)."""
        width = max((len(row) for row in rows), default=0)
        cells = {Point(x, y): value for y, row in enumerate(rows) for x, value in enumerate(row)}
        return cls(Bounds.from_size(width, len(rows)), cells)

    @classmethod
    def parse(
        cls,
        text: str,
        parse_cell: Callable[[str], T] = str,  # type: ignore[assignment]
        fmt: GridFormat = DEFAULT_FORMAT,
    ) -> Grid[T]:
        return parse_grid(text, parse_cell, fmt, grid_cls=cls)

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def width(self) -> int:
        return self.bounds.width

    @property
    def height(self) -> int:
        return self.bounds.height

    def get(self, point: Point) -> T | None:
        if not self.bounds.contains(point):
            return None
        return self.cells.get(point, self.default)

    def set(self, point: Point, value: T) -> None:
        if not self.bounds.contains(point):
            grown = self.bounds.union(Bounds.from_point(point))
            logger.debug("Grid bounds grew from %s to %s", self.bounds, grown)
            self.bounds = grown
        self.cells[point] = value

    def points(self) -> list[Point]:
        return list(self.bounds.points())

    def entries(self) -> list[tuple[Point, T]]:
        """Cells with a value, row-major. Dense grids report every in-bounds cell."""
        if self.default is None:
            return sorted(self.cells.items(), key=lambda item: (item[0].y, item[0].x))
        return [(p, self.cells.get(p, self.default)) for p in self.bounds.points()]

    def find(self, value: T) -> Point | None:
        """First point holding value, in scan order."""
        for point, cell in self.entries():
            if cell == value:
                return point
        return None

    # -------------------------------------------------------------------------
    # Directional queries
    # -------------------------------------------------------------------------

    def get_in_direction(self, point: Point, direction: Direction) -> Iterator[T | None]:
        """Values from one step beyond point until the ray leaves the bounds."""
        current = point.translate_in_direction(direction)
        while self.bounds.contains(current):
            yield self.get(current)
            current = current.translate_in_direction(direction)

    def get_adjacent(self, point: Point, group: DirectionLike) -> tuple[T, ...] | None:
        """
        Values of every neighbour in the group, in group order.

        Returns None unless all of them exist, e.g. both ends of a diagonal
        pair. Use get_adjacent_entries where a partial set is acceptable.
        """
        values: list[T] = []
        for neighbour in point.get_points_around(group):
            value = self.get(neighbour)
            if value is None:
                return None
            values.append(value)
        return tuple(values)

    def get_adjacent_entries(self, point: Point, group: DirectionLike) -> list[tuple[Point, T]]:
        entries: list[tuple[Point, T]] = []
        for neighbour in point.get_points_around(group):
            value = self.get(neighbour)
            if value is not None:
                entries.append((neighbour, value))
        return entries

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def render(
        self,
        format_cell: Callable[[T], str] = str,
        fmt: GridFormat = DEFAULT_FORMAT,
    ) -> str:
        return render_grid(self, format_cell, fmt)

    def __str__(self) -> str:
        return render_grid(self)

    def __repr__(self) -> str:
        return f"Grid(bounds={self.bounds}, cells={len(self.cells)}, default={self.default!r})"

    def __contains__(self, point: object) -> bool:
        return point in self.bounds

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self.bounds == other.bounds and self.cells == other.cells and self.default == other.default

    __hash__ = None  # type: ignore[assignment]


def parse_grid(
    text: str,
    parse_cell: Callable[[str], T] = str,  # type: ignore[assignment]
    fmt: GridFormat = DEFAULT_FORMAT,
    grid_cls: type[Grid[Any]] = Grid,
) -> Grid[T]:
    """
    Parse a text grid, one row per line.

    Format:
    - Shared leading indentation is removed, so indented fixtures work
    - Blank lines are skipped, trailing whitespace is dropped
    - Each row is cut into tokens of fmt.token_width characters
    - Each token is converted with parse_cell; any exception from it, or a
      None result, becomes a ParseError naming the token, row and column
    - Rows may be ragged: width is the longest row, missing cells are absent

    Example:
        parse_grid(".X.\\nXXX\\n.X.") -> 3x3 grid of str

    Args:
        text: Grid text
        parse_cell: Converts one token to a cell value
        fmt: Token width used to split rows
        grid_cls: Grid class to build, so subclasses parse to themselves

    Returns:
        Sparse grid with top-left at (0, 0)
    """
    lines = [line.rstrip() for line in textwrap.dedent(text).splitlines() if line.strip()]
    width = fmt.token_width
    cells: dict[Point, T] = {}
    columns = 0

    for row_idx, line in enumerate(lines):
        if len(line) % width:
            raise ParseError(
                f"Incomplete token in row {row_idx}\n"
                f"  Row: \"{line}\"\n"
                f"  Length {len(line)} is not a multiple of token width {width}",
                token=line[len(line) - len(line) % width:],
                row=row_idx,
                column=len(line) // width,
            )

        tokens = [line[i:i + width] for i in range(0, len(line), width)]
        columns = max(columns, len(tokens))

        for col_idx, token in enumerate(tokens):
            try:
                value = parse_cell(token)
            except Exception as exc:
                raise _cell_error(token, line, row_idx, col_idx, str(exc)) from exc
            # None means absent to get(), so it cannot be stored as a value
            if value is None:
                raise _cell_error(token, line, row_idx, col_idx, "parse_cell returned None")
            cells[Point(col_idx, row_idx)] = value

    logger.debug("parse_grid: width=%d, height=%d, cells=%d", columns, len(lines), len(cells))
    return grid_cls(Bounds.from_size(columns, len(lines)), cells)


def _cell_error(token: str, line: str, row_idx: int, col_idx: int, reason: str) -> ParseError:
    return ParseError(
        f"Invalid cell token: '{token}'\n"
        f"  Row {row_idx}: \"{line}\"\n"
        f"  Position: column {col_idx}\n"
        f"  Reason: {reason}",
        token=token,
        row=row_idx,
        column=col_idx,
    )


def render_grid(
    grid: Grid[T],
    format_cell: Callable[[T], str] = str,
    fmt: GridFormat = DEFAULT_FORMAT,
) -> str:
    """Render row by row; absent cells are drawn with the placeholder."""
    absent = fmt.placeholder * fmt.token_width
    rows: list[str] = []
    for y in grid.bounds.y():
        row: list[str] = []
        for x in grid.bounds.x():
            value = grid.get(Point(x, y))
            row.append(absent if value is None else format_cell(value))
        rows.append("".join(row))
    return "\n".join(rows)
