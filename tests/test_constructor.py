"""Unit tests for the custom board constructor."""

import random
import pytest
from mathgrid.core.board import CellKind, GameBoard
from mathgrid.errors import PublishError
from mathgrid.game import BoardConstructor, CustomBoard, SessionState, suggest_targets
from mathgrid.game.constructor import autofill_operators, parse_cell_value
from mathgrid.generator import Difficulty

from conftest import AUTHORED_ROWS


def fill(constructor, rows):
    for i, row in enumerate(rows):
        for j, value in enumerate(row):
            constructor.set_cell(i, j, value)


def tap_line(constructor, cells):
    for cell in cells:
        constructor.tap(*cell)
    return constructor.release()


@pytest.fixture
def constructor():
    c = BoardConstructor(size=5, rng=random.Random(0))
    fill(c, AUTHORED_ROWS)
    c.add_target(15)
    c.add_target(6)
    c.name = "Twelve plus"
    c.creator_name = "sam"
    return c


def solve(constructor):
    constructor.start_test()
    tap_line(constructor, [(0, 0), (0, 1), (0, 2), (0, 3)])
    return tap_line(constructor, [(0, 0), (1, 0), (2, 0)])


class TestParseCellValue:
    @pytest.mark.parametrize("value, expected", [
        ("+", ("+", CellKind.OPERATOR)),
        ("^", ("^", CellKind.OPERATOR)),
        (7, (7, CellKind.NUMBER)),
        ("42", (42, CellKind.NUMBER)),
        (0, (0, CellKind.NUMBER)),
    ])
    def test_accepted(self, value, expected):
        assert parse_cell_value(value) == expected

    @pytest.mark.parametrize("value", [100, -1, "x", "1.5", 2.0, True])
    def test_rejected(self, value):
        with pytest.raises(ValueError):
            parse_cell_value(value)


class TestBoardConstructor:
    """Tests for the authoring workflow."""

    def test_fresh_board(self):
        c = BoardConstructor(size=10)
        assert c.board.size == 10
        assert c.board.count_empty() == 100
        assert all(cell.is_number for cell in c.board.cells())
        assert not c.is_solved
        assert not c.is_dirty

    def test_cells_take_the_kind_of_their_value(self, constructor, authored_board):
        assert constructor.board == authored_board
        assert constructor.board.kind(1, 0) is CellKind.OPERATOR

    def test_set_kind_clears_value(self, constructor):
        constructor.set_kind(0, 0, CellKind.OPERATOR)
        assert constructor.board.get(0, 0) is None
        assert constructor.board.kind(0, 0) is CellKind.OPERATOR
        assert not constructor.board.is_complete()

    def test_targets(self, constructor):
        assert constructor.targets == [15, 6]
        assert not constructor.add_target(15.0)
        assert constructor.add_target("2.5")
        assert constructor.targets == [15, 6, 2.5]
        assert constructor.remove_target(2.5)
        assert not constructor.remove_target(99)

    def test_test_mode_requires_full_board(self):
        c = BoardConstructor()
        c.add_target(3)
        with pytest.raises(ValueError):
            c.start_test()

    def test_test_mode_requires_targets(self, constructor):
        constructor.remove_target(15)
        constructor.remove_target(6)
        with pytest.raises(ValueError):
            constructor.start_test()

    def test_tap_outside_test_mode(self, constructor):
        with pytest.raises(ValueError):
            constructor.tap(0, 0)
        with pytest.raises(ValueError):
            constructor.release()

    def test_solving_in_test_mode(self, constructor):
        session = constructor.start_test()
        assert constructor.is_testing
        assert session.selection.name == "concatenation"

        outcome = tap_line(constructor, [(0, 0), (0, 1), (0, 2), (0, 3)])
        assert outcome.new_target == 15
        assert constructor.found_targets == {15}
        assert not constructor.is_solved

        outcome = tap_line(constructor, [(0, 0), (1, 0), (2, 0)])
        assert outcome.new_target == 6
        assert session.state is SessionState.WON
        assert constructor.is_solved
        assert not constructor.is_dirty

    def test_edit_after_solving_marks_dirty(self, constructor):
        solve(constructor)
        constructor.set_cell(4, 4, 8)

        assert constructor.is_dirty
        assert not constructor.is_solved
        assert not constructor.is_testing
        assert "The board must be solved before publishing" in constructor.validate()

    def test_target_change_after_solving_marks_dirty(self, constructor):
        solve(constructor)
        constructor.add_target(99999)
        assert constructor.is_dirty
        assert not constructor.is_solved

    def test_interrupted_test_marks_dirty(self, constructor):
        constructor.start_test()
        tap_line(constructor, [(0, 0), (0, 1), (0, 2), (0, 3)])
        constructor.stop_test()
        assert constructor.is_dirty
        assert not constructor.is_testing

    def test_resolving_clears_dirty(self, constructor):
        solve(constructor)
        constructor.set_cell(4, 4, 8)
        solve(constructor)
        assert constructor.is_solved
        assert not constructor.is_dirty
        assert constructor.validate() == []

    def test_auto_fill(self):
        c = BoardConstructor(difficulty="hard", rng=random.Random(5))
        c.set_cell(0, 1, "+")
        c.set_kind(1, 1, CellKind.OPERATOR)
        c.auto_fill()

        assert c.board.is_complete()
        assert c.board.get(0, 1) == "+"
        assert c.board.get(1, 1) in autofill_operators(Difficulty.HARD)
        for cell in c.board.cells():
            if cell.is_number:
                assert 0 <= cell.value <= 9

    def test_auto_fill_keeps_declared_targets(self, constructor):
        constructor.set_kind(4, 4, CellKind.OPERATOR)
        constructor.auto_fill()
        assert constructor.targets == [15, 6]

    def test_autofill_operators(self):
        assert "^" not in autofill_operators(Difficulty.EASY)
        assert "/" in autofill_operators(Difficulty.EASY)
        assert "^" in autofill_operators(Difficulty.MEDIUM)

    def test_suggest_targets(self, authored_board):
        targets = suggest_targets(authored_board, random.Random(1), count=10)
        assert len(targets) <= 10
        assert len(set(targets)) == len(targets)

    def test_reset(self, constructor):
        solve(constructor)
        constructor.reset(15)
        assert constructor.board.size == 15
        assert constructor.targets == []
        assert not constructor.is_solved
        assert not constructor.is_testing


class TestPublish:
    """Tests for publish validation and the stored payload."""

    def test_publish_unsolved(self, constructor):
        with pytest.raises(PublishError) as exc_info:
            constructor.publish()
        assert exc_info.value.reasons == ["The board must be solved before publishing"]

    def test_publish_reports_every_problem(self):
        c = BoardConstructor()
        with pytest.raises(PublishError) as exc_info:
            c.publish()
        assert len(exc_info.value.reasons) == 5
        assert isinstance(exc_info.value, ValueError)

    def test_publish(self, constructor, authored_board):
        solve(constructor)
        published = constructor.publish()

        assert published.name == "Twelve plus"
        assert published.creator_name == "sam"
        assert published.board == authored_board
        assert published.targets == (15, 6)
        assert published.is_solved

    def test_payload(self, constructor):
        solve(constructor)
        data = constructor.publish().to_dict()

        assert data["boardSize"] == 5
        assert data["difficulty"] == "easy"
        assert data["isSolved"] is True
        assert data["boardData"][0][2] == {"value": "+", "type": "operation", "row": 0, "col": 2}

        restored = CustomBoard.from_dict(data)
        assert restored.board == GameBoard.from_2d_list(AUTHORED_ROWS)
        assert restored.targets == (15, 6)

    def test_published_board_plays_as_a_game(self, constructor):
        solve(constructor)
        session = constructor.publish().new_session(mode="concatenation")
        assert session.state is SessionState.PLAYING
        assert session.targets == (15, 6)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
