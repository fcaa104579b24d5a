"""Tests for grid_parser module."""

import pytest

from grid_parser import format_grid, parse_grid
from grid_types import CellState


class TestParseGrid:
    """Tests for the compact grid parser."""

    def test_simple_grid(self) -> None:
        """Parse a grid with every cell kind."""
        grid = parse_grid("S_#|*oE")

        assert grid.rows == 2
        assert grid.cols == 3
        assert grid.cells[0][0].state == CellState.START
        assert grid.cells[0][1].state == CellState.EMPTY
        assert grid.cells[0][2].state == CellState.WALL
        assert grid.cells[1][0].state == CellState.PATH
        assert grid.cells[1][1].state == CellState.VISITED
        assert grid.cells[1][2].state == CellState.END

    def test_cell_ids_and_coordinates(self) -> None:
        """Cells carry row-major ids and their own coordinates."""
        grid = parse_grid("___|___")

        cell = grid.cells[1][2]
        assert (cell.x, cell.y) == (2, 1)
        assert cell.id == 1 * 3 + 2

    def test_dot_is_empty(self) -> None:
        """'.' is accepted as an alternative empty marker."""
        grid = parse_grid("._|_.")
        assert all(cell.state == CellState.EMPTY for cell in grid)

    def test_whitespace_around_rows_is_ignored(self) -> None:
        """Rows may be laid out on separate lines."""
        grid = parse_grid(
            """
            S__ |
            _#_ |
            __E
            """
        )
        assert format_grid(grid) == "S__|_#_|__E"

    def test_single_row(self) -> None:
        """Parse a one-row grid."""
        grid = parse_grid("S#E")
        assert grid.rows == 1
        assert grid.cols == 3

    def test_single_column(self) -> None:
        """Parse a one-column grid."""
        grid = parse_grid("S|#|E")
        assert grid.rows == 3
        assert grid.cols == 1

    def test_invalid_character_raises_error(self) -> None:
        """Unknown characters are rejected."""
        with pytest.raises(ValueError, match="Invalid cell character"):
            parse_grid("S_x|___")

    def test_invalid_character_error_details(self) -> None:
        """The error names the row and column of the bad character."""
        with pytest.raises(ValueError) as exc_info:
            parse_grid("___|_?_")

        message = str(exc_info.value)
        assert "'?'" in message
        assert "Row 1" in message
        assert "column 1" in message

    def test_inconsistent_row_length_raises_error(self) -> None:
        """Ragged rows are rejected."""
        with pytest.raises(ValueError, match="Inconsistent row lengths"):
            parse_grid("___|__")

    def test_inconsistent_row_length_error_details(self) -> None:
        """The error lists each mismatched row."""
        with pytest.raises(ValueError) as exc_info:
            parse_grid("___|__|____")

        message = str(exc_info.value)
        assert "Expected: 3 columns" in message
        assert "Row 1: 2 columns" in message
        assert "Row 2: 4 columns" in message

    def test_empty_definition_raises_error(self) -> None:
        """An empty definition is not a grid."""
        with pytest.raises(ValueError):
            parse_grid("")


class TestFormatGrid:
    """Tests for formatting grids back to text."""

    def test_format_is_inverse_of_parse(self) -> None:
        """Formatting a parsed grid gives back the definition."""
        definition = "S_#*|o__E|####"
        assert format_grid(parse_grid(definition)) == definition

    def test_dots_format_as_underscores(self) -> None:
        """Empty cells always format as '_'."""
        assert format_grid(parse_grid("S.|.E")) == "S_|_E"
