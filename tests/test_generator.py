"""Unit tests for board and target generation."""

import json
import pytest
from mathgrid.config import MAX_TARGET_VALUE, target_count_for
from mathgrid.generator import BoardGenerator, Difficulty, TargetGenerator, generate_targets


class TestBoardGenerator:
    """Tests for BoardGenerator class."""

    @pytest.mark.parametrize("size", [5, 10, 15])
    def test_checkerboard_layout(self, size):
        """Every generated cell's kind follows (row + col) parity."""
        board = BoardGenerator(seed=42).generate(Difficulty.HARD, size)
        assert board.size == size
        assert board.is_checkerboard()
        for cell in board.cells():
            assert cell.is_number == ((cell.row + cell.col) % 2 == 0)

    def test_values_by_kind(self):
        board = BoardGenerator(seed=1).generate(Difficulty.EASY, 15)
        for cell in board.cells():
            if cell.is_number:
                assert 1 <= cell.value <= 9
            else:
                assert cell.value in Difficulty.EASY.operators

    def test_difficulty_gates_operators(self):
        assert Difficulty.EASY.operators == ("+", "-", "*")
        assert Difficulty.MEDIUM.operators == ("+", "-", "*", "/")
        assert Difficulty.HARD.operators == ("+", "-", "*", "/", "^")

        board = BoardGenerator(seed=3).generate(Difficulty.MEDIUM, 15)
        assert "^" not in [c.value for c in board.cells()]

    def test_seed_reproducibility(self):
        board1 = BoardGenerator(seed=123).generate(Difficulty.HARD, 10)
        board2 = BoardGenerator(seed=123).generate(Difficulty.HARD, 10)
        assert board1 == board2

    def test_difficulty_by_name(self):
        board = BoardGenerator(seed=5).generate("Medium", 5)
        assert board.size == 5
        with pytest.raises(ValueError):
            Difficulty.from_name("impossible")

    def test_unsupported_size(self):
        with pytest.raises(ValueError):
            BoardGenerator().generate(Difficulty.EASY, 7)

    def test_generate_batch(self):
        boards = BoardGenerator(seed=42).generate_batch(3, Difficulty.EASY, 5)
        assert len(boards) == 3
        assert all(b.is_checkerboard() for b in boards)

    def test_save_to_folder(self, tmp_path):
        boards = BoardGenerator(seed=9).generate_batch(2, Difficulty.EASY, 5)
        BoardGenerator.save_to_folder(boards, str(tmp_path), prefix="easy")

        saved = json.loads((tmp_path / "easy_1.json").read_text())
        assert saved["board"] == boards[0].to_string()
        assert saved["targets"] == generate_targets(boards[0])


class TestTargetGenerator:
    """Tests for target derivation."""

    def test_canonical_order(self, sample_board):
        """Row 0 runs come first, shortest first, then column 0."""
        assert generate_targets(sample_board) == [4, 28, 14, 7]

    def test_deterministic(self, sample_board):
        assert generate_targets(sample_board) == generate_targets(sample_board.copy())

    def test_custom_count(self, sample_board):
        assert TargetGenerator(count=2).generate(sample_board) == [4, 28]
        assert TargetGenerator(count=0).generate(sample_board) == []

    def test_target_count_by_size(self):
        assert target_count_for(5) == 4
        assert target_count_for(10) == 5
        assert target_count_for(15) == 7

    @pytest.mark.parametrize("seed", range(5))
    def test_targets_are_distinct_and_bounded(self, seed):
        board, targets = BoardGenerator(seed=seed).generate_with_targets(Difficulty.HARD, 10)
        assert len(targets) <= target_count_for(10)
        assert len(set(targets)) == len(targets)
        for target in targets:
            assert 0 < target <= MAX_TARGET_VALUE


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
