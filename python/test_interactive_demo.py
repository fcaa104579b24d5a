"""Tests for the interactive console's editing commands (no key loop)."""

from engine import GridEditor
from grid_parser import format_grid
from interactive_demo import InteractiveDemo


class TestUndoRedoStatus:
    """Tests for undo/redo status reporting."""

    def test_empty_stroke_reports_nothing_to_undo(self) -> None:
        """A stroke that cancels itself out leaves nothing to undo."""
        demo = InteractiveDemo(GridEditor(3, 3))
        demo.toggle_painting()
        demo.move_cursor(-1, 0)  # Clamped: repaints (0, 0) back to empty

        demo.undo()
        assert demo.status_message == "Nothing to undo"
        assert not demo.painting
        assert format_grid(demo.editor.grid) == "___|___|___"

    def test_undo_during_stroke_reverts_it(self) -> None:
        """Undo closes the open stroke and reverts it."""
        demo = InteractiveDemo(GridEditor(3, 3))
        demo.toggle_painting()
        demo.move_cursor(1, 0)

        demo.undo()
        assert demo.status_message == "Undone"
        assert format_grid(demo.editor.grid) == "___|___|___"
        assert demo.editor.can_redo()

    def test_redo(self) -> None:
        """Redo reports whether anything was reapplied."""
        demo = InteractiveDemo(GridEditor(2, 2))
        demo.redo()
        assert demo.status_message == "Nothing to redo"

        demo.toggle_painting()
        demo.toggle_painting()
        demo.undo()
        demo.redo()
        assert demo.status_message == "Redone"
        assert format_grid(demo.editor.grid) == "S_|__"


class TestCheckReady:
    """Tests for the ready-to-run check."""

    def test_missing_cells(self) -> None:
        demo = InteractiveDemo(GridEditor(2, 2))
        demo.check_ready()
        assert demo.status_message.startswith("✗")

    def test_ready(self) -> None:
        demo = InteractiveDemo(GridEditor(2, 2))
        demo.toggle_painting()
        demo.move_cursor(1, 0)
        demo.toggle_painting()
        demo.check_ready()
        assert demo.status_message == "✓ Ready to run"
