"""
Interactive console for the grid editor.
Move a cursor over the grid and edit it with keyboard commands.
"""

import logging
import sys

import readchar
from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from ascii_render import render_grid
from engine import GridEditor, GridValidationError
from grid_ops import find_special_cells
from grid_types import CellEdit

MOVES = {
    "w": (0, -1),
    "s": (0, 1),
    "a": (-1, 0),
    "d": (1, 0),
}


class InteractiveDemo:
    """Keyboard-driven editing session over a GridEditor."""

    def __init__(self, editor: GridEditor) -> None:
        self.editor = editor
        self.cursor = (0, 0)
        self.painting = False  # Drag mode: every cursor move edits the cell it lands on
        self.console = Console()
        self.status_message = "Ready"

    def generate_display(self) -> Panel:
        """Generate the current display with grid and status."""
        grid = self.editor.grid
        x, y = self.cursor

        status = Text()
        status.append("Cursor: ", style="bold")
        status.append(f"({x}, {y}) {grid.cells[y][x].state.value}\n")
        start, end = find_special_cells(grid)
        status.append("Start: ", style="bold")
        status.append(f"{(start.x, start.y) if start else '-'}  ")
        status.append("End: ", style="bold")
        status.append(f"{(end.x, end.y) if end else '-'}\n\n")

        status.append(Text.from_ansi(render_grid(grid, cursor=self.cursor, title="editor")))
        status.append("\n\n")
        status.append("Keys:\n", style="bold cyan")
        status.append("  W/A/S/D - Move cursor\n")
        status.append("  Space   - Edit cell\n")
        status.append("  P       - Toggle paint (drag) mode\n")
        status.append("  M       - Generate maze\n")
        status.append("  C / X   - Clear walls / Reset grid\n")
        status.append("  V       - Check ready to run\n")
        status.append("  U / R   - Undo / Redo\n")
        status.append("  Q       - Quit\n\n")

        status.append("─" * 40 + "\n", style="dim")
        status.append("Mode: ", style="bold")
        status.append("painting\n" if self.painting else "editing\n")
        status.append("Status: ", style="bold")
        status.append(self.status_message)

        return Panel(status, title="Grid Editor", border_style="green")

    def move_cursor(self, dx: int, dy: int) -> None:
        x = min(max(self.cursor[0] + dx, 0), self.editor.cols - 1)
        y = min(max(self.cursor[1] + dy, 0), self.editor.rows - 1)
        self.cursor = (x, y)
        if self.painting:
            self.editor.update_cell(CellEdit(x, y), commit=False)
        self.status_message = f"Moved to ({x}, {y})"

    def toggle_painting(self) -> None:
        if self.painting:
            self.finish_stroke()
            self.status_message = "Stroke committed"
        else:
            self.painting = True
            self.editor.update_cell(CellEdit(*self.cursor), commit=False)
            self.status_message = "Painting - move to draw, P to finish"

    def finish_stroke(self) -> None:
        if self.painting:
            # One history entry for the whole stroke
            self.editor.update_cell([], commit=True)
            self.painting = False

    def undo(self) -> None:
        self.finish_stroke()
        if not self.editor.can_undo():
            self.status_message = "Nothing to undo"
            return
        self.editor.undo()
        self.status_message = "Undone"

    def redo(self) -> None:
        self.finish_stroke()
        if not self.editor.can_redo():
            self.status_message = "Nothing to redo"
            return
        self.editor.redo()
        self.status_message = "Redone"

    def check_ready(self) -> None:
        try:
            self.editor.ready_to_run()
        except GridValidationError as e:
            self.status_message = f"✗ {e}"
            return
        self.status_message = "✓ Ready to run"

    def run(self) -> None:
        """Run the key loop."""
        with Live(self.generate_display(), console=self.console, refresh_per_second=4) as live:
            try:
                while True:
                    live.update(self.generate_display())

                    key = readchar.readkey().lower()

                    if key == "q":
                        self.status_message = "Quitting..."
                        live.update(self.generate_display())
                        break
                    elif key in MOVES:
                        self.move_cursor(*MOVES[key])
                    elif key == " ":
                        self.editor.update_cell(CellEdit(*self.cursor))
                        self.status_message = "Cell updated"
                    elif key == "p":
                        self.toggle_painting()
                    elif key == "m":
                        self.painting = False
                        self.editor.generate_maze()
                        self.status_message = "Maze generated"
                    elif key == "c":
                        self.painting = False
                        self.editor.clear_walls()
                        self.status_message = "Walls cleared"
                    elif key == "x":
                        self.painting = False
                        self.editor.reset_grid()
                        self.status_message = "Grid reset"
                    elif key == "v":
                        self.check_ready()
                    elif key == "u":
                        self.undo()
                    elif key == "r":
                        self.redo()
                    else:
                        self.status_message = f"Unknown key: {repr(key)}"

            except KeyboardInterrupt:
                self.status_message = "Interrupted by user"
                live.update(self.generate_display())


def main(rows: int = 15, cols: int = 25) -> None:
    """Run the interactive console on an empty grid."""
    demo = InteractiveDemo(GridEditor(rows, cols))
    demo.run()


if __name__ == "__main__":
    if len(sys.argv) > 1 and sys.argv[1] == "print":
        # Non-interactive: print one generated maze and exit
        logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

        seed = int(sys.argv[2]) if len(sys.argv) > 2 else None
        editor = GridEditor(15, 25)
        editor.update_cell([CellEdit(1, 1), CellEdit(23, 13)])
        editor.generate_maze(seed)
        print(render_grid(editor.grid, title=f"maze seed={seed}"))
    else:
        main()
