"""
Coloured ASCII rendering for grids.

Provides two rendering approaches:
1. Single grid rendering with per-value colours and highlighted points
2. Flow rendering - several boxed grids laid out side by side
"""

from __future__ import annotations

import logging
from typing import Callable, Collection, Hashable, Iterable, TypeVar

import simple_chalk as chalk  # type: ignore[import-untyped]

from geometry import Point
from grid import DEFAULT_FORMAT, Grid, GridFormat

logger = logging.getLogger(__name__)

__all__ = ["palette_for", "render_grid_colored", "render_grid_boxed", "render_grids_flow"]

T = TypeVar("T")

Colorizer = Callable[[str], str]

COLORS: list[Colorizer] = [
    chalk.red,
    chalk.green,
    chalk.yellow,
    chalk.blue,
    chalk.magenta,
    chalk.cyan,
    chalk.redBright,
    chalk.greenBright,
    chalk.yellowBright,
    chalk.blueBright,
]


def _plain(s: str) -> str:
    return s


def _highlight(s: str) -> str:
    return chalk.bgWhite.black(s)


def palette_for(values: Iterable[Hashable]) -> Callable[[Hashable], Colorizer]:
    """
    Assign a stable colour to each distinct value.

    Values are ordered by their string form so the same set of values always
    gets the same colours. Unknown values are left uncoloured.
    """
    distinct = sorted(set(values), key=str)
    colors = {value: COLORS[i % len(COLORS)] for i, value in enumerate(distinct)}

    def color_fn(value: Hashable) -> Colorizer:
        return colors.get(value, _plain)

    return color_fn


# =============================================================================
# Single Grid Rendering
# =============================================================================


def _render_rows(
    grid: Grid[T],
    color_fn: Callable[[T], Colorizer] | None,
    format_cell: Callable[[T], str],
    highlight: Collection[Point],
    fmt: GridFormat,
) -> list[str]:
    absent = fmt.placeholder * fmt.token_width
    rows: list[str] = []

    for y in grid.bounds.y():
        parts: list[str] = []
        for x in grid.bounds.x():
            point = Point(x, y)
            value = grid.get(point)

            if value is None:
                content = absent
                colorize = _plain
            else:
                content = format_cell(value)
                colorize = color_fn(value) if color_fn is not None else _plain

            if point in highlight:
                colorize = _highlight

            parts.append(colorize(content))
        rows.append("".join(parts))

    return rows


def render_grid_colored(
    grid: Grid[T],
    color_fn: Callable[[T], Colorizer] | None = None,
    format_cell: Callable[[T], str] = str,
    highlight: Collection[Point] | None = None,
    fmt: GridFormat = DEFAULT_FORMAT,
) -> str:
    """
    Render a grid with ANSI colours.

    Args:
        grid: The grid to render
        color_fn: Optional function returning a colouriser for a cell value
        format_cell: Text for a cell value (default str)
        highlight: Points drawn black on white (e.g. a path or a cursor)
        fmt: Token width and placeholder for absent cells

    Returns:
        Newline-joined rows; with no colours or highlights this equals
        grid.render(format_cell, fmt)
    """
    return "\n".join(_render_rows(grid, color_fn, format_cell, highlight or (), fmt))


def render_grid_boxed(
    grid: Grid[T],
    title: str,
    color_fn: Callable[[T], Colorizer] | None = None,
    format_cell: Callable[[T], str] = str,
    highlight: Collection[Point] | None = None,
    fmt: GridFormat = DEFAULT_FORMAT,
) -> list[str]:
    """
    Render a grid inside a box border with a centred title.

    Returns:
        List of strings representing the rendered lines, all of visible width
        grid.width * fmt.token_width + 2
    """
    inner_width = grid.width * fmt.token_width
    title_text = f" {title} "

    if len(title_text) <= inner_width:
        title_start = (inner_width - len(title_text)) // 2
        top = "┌" + "─" * title_start + title_text + "─" * (inner_width - title_start - len(title_text)) + "┐"
    else:
        top = "┌" + "─" * inner_width + "┐"

    lines = [top]
    for row in _render_rows(grid, color_fn, format_cell, highlight or (), fmt):
        lines.append("│" + row + "│")
    lines.append("└" + "─" * inner_width + "┘")
    return lines


# =============================================================================
# Flow Rendering
# =============================================================================


def render_grids_flow(
    grids: dict[str, Grid[T]],
    terminal_width: int = 120,
    color_fn: Callable[[T], Colorizer] | None = None,
    format_cell: Callable[[T], str] = str,
    fmt: GridFormat = DEFAULT_FORMAT,
) -> str:
    """
    Render several grids in flow layout (multiple grids per row).

    Grids are placed in name order, left to right, starting a new row when
    the next grid would exceed terminal_width.

    Args:
        grids: Grids keyed by title
        terminal_width: Maximum width for layout (default 120)
        color_fn: Optional function returning a colouriser for a cell value
        format_cell: Text for a cell value (default str)
        fmt: Token width and placeholder for absent cells

    Returns:
        Rendered string with all grids in flow layout
    """
    grid_spacing = 2
    names = sorted(grids)

    rendered: dict[str, list[str]] = {}
    widths: dict[str, int] = {}
    for name in names:
        grid = grids[name]
        rendered[name] = render_grid_boxed(grid, name, color_fn, format_cell, None, fmt)
        # ANSI codes inflate len(), so width comes from the grid itself
        widths[name] = grid.width * fmt.token_width + 2

    output_lines: list[str] = []
    current_row: list[str] = []
    current_width = 0
    row_count = 0

    for name in names:
        needed = widths[name] + (grid_spacing if current_row else 0)
        if current_row and current_width + needed > terminal_width:
            _flush_grid_row(current_row, rendered, widths, output_lines, grid_spacing)
            row_count += 1
            current_row = []
            current_width = 0
            needed = widths[name]

        current_row.append(name)
        current_width += needed

    if current_row:
        _flush_grid_row(current_row, rendered, widths, output_lines, grid_spacing)
        row_count += 1

    logger.info("render_grids_flow: grids=%d, rows=%d, terminal_width=%d", len(names), row_count, terminal_width)
    return "\n".join(output_lines)


def _flush_grid_row(
    row_names: list[str],
    rendered: dict[str, list[str]],
    widths: dict[str, int],
    output_lines: list[str],
    grid_spacing: int,
) -> None:
    """Append one row of grids, padded to the tallest, followed by a blank line."""
    max_height = max(len(rendered[name]) for name in row_names)

    for line_idx in range(max_height):
        parts = []
        for name in row_names:
            lines = rendered[name]
            parts.append(lines[line_idx] if line_idx < len(lines) else " " * widths[name])
        output_lines.append((" " * grid_spacing).join(parts))

    output_lines.append("")
