"""Unit tests for the game board."""

import pytest
from mathgrid.core.board import GameBoard, CellKind
from mathgrid.errors import InvalidBoardError
from conftest import SAMPLE_BOARD


class TestGameBoard:
    """Tests for GameBoard class."""

    def test_create_empty_board(self):
        """An empty board has the checkerboard layout and no values."""
        board = GameBoard(5)
        assert board.size == 5
        assert board.count_empty() == 25
        assert board.is_checkerboard()
        assert not board.is_complete()

    def test_unsupported_size(self):
        with pytest.raises(InvalidBoardError):
            GameBoard(6)

    def test_from_string(self, sample_board):
        """Board text parses into typed cells."""
        assert sample_board.get(0, 0) == 2
        assert sample_board.get(0, 1) == "+"
        assert sample_board.get(3, 2) == "/"
        assert sample_board.kind(3, 4) is CellKind.OPERATOR
        assert sample_board.is_checkerboard()
        assert sample_board.is_complete()

    def test_to_string_round_trip(self, sample_board):
        text = sample_board.to_string()
        assert text.splitlines()[0] == "2 + 2 * 7"
        assert GameBoard.from_string(text) == sample_board

    def test_from_string_rejects_unknown_token(self):
        with pytest.raises(InvalidBoardError):
            GameBoard.from_string(SAMPLE_BOARD.replace("^", "x"))

    def test_from_string_rejects_ragged_rows(self):
        with pytest.raises(InvalidBoardError):
            GameBoard.from_string("1 + 2;3")

    def test_authored_board_kinds(self, authored_board):
        """Authored boards may put numbers next to numbers."""
        assert authored_board.is_number(0, 0)
        assert authored_board.is_number(0, 1)
        assert not authored_board.is_checkerboard()

    def test_with_cell_returns_new_board(self, sample_board):
        """Boards are immutable; with_cell leaves the original alone."""
        changed = sample_board.with_cell(0, 0, 9)
        assert changed.get(0, 0) == 9
        assert sample_board.get(0, 0) == 2

    def test_with_cell_changes_kind(self, sample_board):
        changed = sample_board.with_cell(0, 0, "-", CellKind.OPERATOR)
        assert changed.kind(0, 0) is CellKind.OPERATOR
        assert not changed.is_checkerboard()

    def test_value_must_match_kind(self, sample_board):
        with pytest.raises(InvalidBoardError):
            sample_board.with_cell(0, 0, "+")
        with pytest.raises(InvalidBoardError):
            sample_board.with_cell(0, 1, 3)

    def test_out_of_bounds(self, sample_board):
        assert not sample_board.in_bounds(5, 0)
        with pytest.raises(ValueError):
            sample_board.get(-1, 0)

    def test_grid_is_read_only(self, sample_board):
        with pytest.raises(ValueError):
            sample_board.number_mask[0, 0] = False

    def test_dict_payload_round_trip(self, authored_board):
        payload = authored_board.to_dicts()
        assert payload[0][2] == {"value": "+", "type": "operation", "row": 0, "col": 2}
        assert GameBoard.from_dicts(payload) == authored_board

    def test_tokens_along_path(self, sample_board):
        assert sample_board.tokens([(0, 0), (0, 1), (0, 2)]) == [2, "+", 2]

    def test_pretty_print(self, sample_board):
        text = str(sample_board)
        assert "2 + 2 * 7" in text
        assert text.startswith("+")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
