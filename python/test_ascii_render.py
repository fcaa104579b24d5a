"""Tests for the developer console renderer."""

from ascii_render import render_grid
from grid_parser import parse_grid


class TestRenderGrid:
    """Tests for plain-text rendering."""

    def test_plain_rendering(self) -> None:
        """One line per row between box borders."""
        lines = render_grid(parse_grid("S_#|__E"), cell_width=1, title="g", color=False).split("\n")
        assert lines == ["┌ g ┐", "│S_#│", "│__E│", "└───┘"]

    def test_cursor_marker(self) -> None:
        """The cursor cell is drawn as '@' without colour."""
        lines = render_grid(parse_grid("S_#|__E"), cursor=(1, 0), cell_width=1, color=False).split("\n")
        assert lines[1] == "│S@#│"
        assert lines[2] == "│__E│"

    def test_cell_width(self) -> None:
        """Wider cells centre their character."""
        lines = render_grid(parse_grid("S#"), cell_width=3, title="t", color=False).split("\n")
        assert lines[1] == "│ S  # │"
        assert len(lines[0]) == len(lines[1])

    def test_long_title_is_dropped(self) -> None:
        """Titles wider than the grid leave a plain border."""
        top = render_grid(parse_grid("S_E"), cell_width=1, title="a long title", color=False).split("\n")[0]
        assert top == "┌───┐"

    def test_colour_rendering_keeps_cells(self) -> None:
        """Coloured output still contains every cell character."""
        text = render_grid(parse_grid("S#*|o_E"))
        for char in "S#*o_E":
            assert char in text
