"""
Interactive grid explorer.
Display a parsed grid, move a cursor around it and cast rays from the cursor.
"""

import logging
import sys

import readchar
from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from ascii_render import palette_for, render_grid_colored
from geometry import Direction, DirectionGroup, Point
from grid import Grid


MOVE_KEYS = {
    "w": Direction.TOP,
    "a": Direction.LEFT,
    "s": Direction.BOTTOM,
    "d": Direction.RIGHT,
}

RAY_KEYS = {
    "i": Direction.TOP,
    "j": Direction.LEFT,
    "k": Direction.BOTTOM,
    "l": Direction.RIGHT,
}


class GridExplorer:
    """Cursor-driven view over a character grid."""

    def __init__(self, grid: Grid[str], cursor: Point | None = None) -> None:
        self.grid = grid
        self.start = cursor if cursor is not None else grid.bounds.top_left()
        self.cursor = self.start
        self.ray: list[Point] = []
        self.console = Console()
        self.status_message = "Ready"

    def move(self, direction: Direction) -> bool:
        """Step the cursor if the destination is inside the grid."""
        target = self.cursor.translate_in_direction(direction)
        self.ray = []

        if not self.grid.bounds.contains(target):
            self.status_message = f"✗ Cannot move {direction.name}: {target} is outside the grid"
            return False

        self.cursor = target
        self.status_message = f"✓ Moved {direction.name} to {target}"
        return True

    def cast_ray(self, direction: Direction) -> list[Point]:
        """Points visited walking from the cursor until leaving the grid."""
        values = list(self.grid.get_in_direction(self.cursor, direction))
        self.ray = [self.cursor.translate_in_direction(direction, i + 1) for i in range(len(values))]
        seen = "".join(v if v is not None else "?" for v in values)
        self.status_message = f"Ray {direction.name}: {len(values)} cells '{seen}'"
        return self.ray

    def reset(self) -> None:
        self.cursor = self.start
        self.ray = []
        self.status_message = "Cursor reset to start"

    def generate_display(self) -> Panel:
        """Generate the current display with grid and status."""
        values = [value for _, value in self.grid.entries()]
        grid_text = render_grid_colored(
            self.grid,
            color_fn=palette_for(values),
            highlight={self.cursor, *self.ray},
        )

        status = Text()
        status.append("Cursor: ", style="bold")
        status.append(f"{self.cursor} = {self.grid.get(self.cursor)!r}\n")

        neighbours = self.grid.get_adjacent_entries(self.cursor, DirectionGroup.NON_DIAGONAL)
        status.append("Neighbours: ", style="bold")
        status.append(", ".join(f"{p}={v!r}" for p, v in neighbours) + "\n\n")

        status.append(Text.from_ansi(grid_text))
        status.append("\n\n")
        status.append("Keys:\n", style="bold cyan")
        status.append("  WASD - Move cursor\n")
        status.append("  IJKL - Cast ray\n")
        status.append("  R - Reset cursor\n")
        status.append("  Q - Quit\n\n")

        status.append("─" * 40 + "\n", style="dim")
        status.append("Status: ", style="bold")
        status.append(self.status_message)

        return Panel(status, title="Grid Explorer", border_style="green", width=80)

    def handle_key(self, key: str) -> bool:
        """Apply one key press. Returns False when the explorer should stop."""
        key = key.lower()
        if key == "q":
            self.status_message = "Quitting..."
            return False
        if key == "r":
            self.reset()
        elif key in MOVE_KEYS:
            self.move(MOVE_KEYS[key])
        elif key in RAY_KEYS:
            self.cast_ray(RAY_KEYS[key])
        else:
            self.status_message = f"Unknown key: {key!r}"
        return True

    def run(self) -> None:
        """Run the explorer until Q is pressed."""
        with Live(self.generate_display(), console=self.console, refresh_per_second=4) as live:
            try:
                while True:
                    live.update(self.generate_display())
                    if not self.handle_key(readchar.readkey()):
                        live.update(self.generate_display())
                        break
            except KeyboardInterrupt:
                self.status_message = "Interrupted by user"
                live.update(self.generate_display())


LAYOUTS = dict(
    word_search="""
        MMMSXXMASM
        MSAMXMSMSA
        AMXSXMAAMM
        MSAMASMSMX
        XMASAMXAMM
        XXAMMXXAMA
        SMSMSASXSS
        SAXAMASAAA
        MAMMMXMMMM
        MXMXAXMASX
    """,
    guard="""
        ....#.....
        .........#
        ..........
        ..#.......
        .......#..
        ..........
        .#..^.....
        ........#.
        #.........
        ......#...
    """,
)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

    grid = Grid.parse(LAYOUTS[sys.argv[1] if len(sys.argv) > 1 else "word_search"])
    start = grid.find("^")
    GridExplorer(grid, start).run()
