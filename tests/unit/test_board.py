"""
Unit tests for Board class.

Tests board generation, fixed layouts, revealing and flood fill, flag
accounting, reward reveals, win conditions and observation generation.
"""
import dataclasses
import random

import numpy as np
import pytest
from minefield import EASY, HARD, Board, CellContent, Game, GameState


CASCADE_LAYOUT = [
    ".....",
    ".....",
    "...*.",
    ".....",
    "*....",
]

MINE_POSITIONS = {(2, 3), (4, 0)}


def count_content(board: Board, content: CellContent) -> int:
    return sum(1 for cell in board.iter_cells() if cell.content == content)


# ============================================================================
# Board Generation Tests
# ============================================================================

class TestBoardGeneration:
    """Test random board generation."""

    @pytest.mark.parametrize("seed", [0, 1, 2, 3, 4])
    def test_content_counts_match_difficulty(self, seed: int) -> None:
        """Each board gets the configured mines and special cells."""
        game = Game(EASY, random.Random(seed))
        for board in game.boards:
            assert count_content(board, CellContent.MINE) == 10
            assert count_content(board, CellContent.QUESTION) == 6
            assert count_content(board, CellContent.SURPRISE) == 2

    @pytest.mark.parametrize("seed", [0, 1, 2, 3, 4])
    def test_special_cells_never_touch_mines(self, seed: int) -> None:
        """Special cells are placed only where no neighbour is a mine."""
        game = Game(EASY, random.Random(seed))
        for board in game.boards:
            for cell in board.iter_cells():
                if cell.is_special:
                    assert cell.adjacent_mines == 0

    def test_numbers_match_adjacent_mines(self, easy_game: Game) -> None:
        """Number cells have a positive count, empty cells a zero count."""
        for cell in easy_game.board1.iter_cells():
            if cell.content == CellContent.NUMBER:
                assert cell.adjacent_mines > 0
            elif cell.content == CellContent.EMPTY:
                assert cell.adjacent_mines == 0

    def test_new_board_all_cells_hidden(self, easy_game: Game) -> None:
        """All cells should be hidden on a new board."""
        assert all(cell.is_hidden for cell in easy_game.board1.iter_cells())

    def test_new_board_counters(self, easy_game: Game) -> None:
        """Counters start from the difficulty values."""
        board = easy_game.board1
        assert board.safe_cells_remaining == 71
        assert board.flags_placed == 0
        assert board.hidden_mine_count == 10
        assert board.mines_left == 10

    def test_boards_are_generated_independently(self, easy_game: Game) -> None:
        """The two players get different layouts."""
        mines1 = {(c.row, c.col) for c in easy_game.board1.iter_cells() if c.is_mine}
        mines2 = {(c.row, c.col) for c in easy_game.board2.iter_cells() if c.is_mine}
        assert mines1 != mines2

    def test_too_few_eligible_cells_places_what_fits(self) -> None:
        """A crowded board skips special cells that have no room."""
        crowded = dataclasses.replace(
            EASY, rows=3, cols=3, mines=8, question_cells=2, surprise_cells=1
        )
        game = Game(crowded, random.Random(0))
        assert count_content(game.board1, CellContent.MINE) == 8
        assert count_content(game.board1, CellContent.QUESTION) == 0
        assert count_content(game.board1, CellContent.SURPRISE) == 0


# ============================================================================
# Layout Tests
# ============================================================================

class TestLoadLayout:
    """Test fixed layouts."""

    def test_layout_sets_totals(self, small_game: Game) -> None:
        """Totals and counters follow the layout."""
        board = small_game.board1
        assert (board.rows, board.cols) == (5, 5)
        assert board.total_mines == 2
        assert board.safe_cells_remaining == 23

    def test_layout_computes_numbers(self, small_game: Game) -> None:
        """Numbers are derived from the mines."""
        board = small_game.board1
        assert board.get_cell(0, 0).adjacent_mines == 0
        assert board.get_cell(1, 2).content == CellContent.NUMBER
        assert board.get_cell(1, 2).adjacent_mines == 1
        assert board.get_cell(3, 1).adjacent_mines == 1
        assert board.get_cell(4, 4).content == CellContent.EMPTY

    def test_layout_with_special_cells(self, small_game: Game) -> None:
        """Special symbols become question and surprise cells."""
        board = small_game.board1
        board.load_layout(["Q....", ".....", "..S..", ".....", "....*"])
        assert board.get_cell(0, 0).content == CellContent.QUESTION
        assert board.get_cell(2, 2).content == CellContent.SURPRISE
        assert board.total_question_cells == 1
        assert board.total_surprise_cells == 1

    def test_empty_layout_raises_error(self, small_game: Game) -> None:
        """An empty layout should raise ValueError."""
        with pytest.raises(ValueError, match="at least one row"):
            small_game.board1.load_layout([])

    def test_ragged_layout_raises_error(self, small_game: Game) -> None:
        """Rows of different length should raise ValueError."""
        with pytest.raises(ValueError, match="equal length"):
            small_game.board1.load_layout(["...", ".."])

    def test_unknown_symbol_raises_error(self, small_game: Game) -> None:
        """Unknown symbols should raise ValueError."""
        with pytest.raises(ValueError, match="Unknown layout symbol"):
            small_game.board1.load_layout(["..X"])

    def test_special_next_to_mine_raises_error(self, small_game: Game) -> None:
        """Special cells may not touch a mine."""
        with pytest.raises(ValueError, match="touches a mine"):
            small_game.board1.load_layout(["Q*", ".."])


# ============================================================================
# Reveal Tests
# ============================================================================

class TestReveal:
    """Test reveal behavior."""

    def test_reveal_zero_cell_cascades(self, small_game: Game) -> None:
        """A zero cell opens its region and the numbered border."""
        board = small_game.board1
        assert board.reveal_cell(0, 0) is True

        revealed = [cell for cell in board.iter_cells() if cell.is_revealed]
        assert len(revealed) == 16
        assert small_game.shared_score == 16
        assert board.safe_cells_remaining == 7
        assert small_game.shared_lives == 10
        assert not any(cell.is_mine for cell in revealed)

    def test_cascade_stops_at_numbers(self, small_game: Game) -> None:
        """Cells behind the numbered border stay hidden."""
        board = small_game.board1
        board.reveal_cell(0, 0)
        assert board.get_cell(2, 4).is_hidden is True
        assert board.get_cell(4, 2).is_hidden is True

    def test_reveal_number_cell_reveals_one(self, small_game: Game) -> None:
        """Numbered cells do not spread."""
        small_game.board1.reveal_cell(1, 2)
        assert small_game.shared_score == 1
        assert small_game.board1.safe_cells_remaining == 22

    def test_reveal_mine_costs_a_life(self, small_game: Game) -> None:
        """A mine costs one life and no points."""
        board = small_game.board1
        assert board.reveal_cell(2, 3) is True
        assert small_game.shared_lives == 9
        assert small_game.shared_score == 0
        assert board.get_cell(2, 3).is_revealed is True
        assert board.safe_cells_remaining == 23
        assert small_game.is_running is True

    def test_reveal_twice_is_rejected(self, small_game: Game) -> None:
        """Revealing a revealed cell changes nothing."""
        board = small_game.board1
        board.reveal_cell(1, 2)
        assert board.reveal_cell(1, 2) is False
        assert small_game.shared_score == 1

    def test_reveal_flagged_cell_is_rejected(self, small_game: Game) -> None:
        """Flagged cells cannot be revealed."""
        board = small_game.board1
        board.toggle_flag(0, 0)
        assert board.reveal_cell(0, 0) is False
        assert board.get_cell(0, 0).is_flagged is True

    def test_cascade_skips_flagged_cells(self, small_game: Game) -> None:
        """The flood fill leaves flagged cells alone."""
        board = small_game.board1
        board.toggle_flag(0, 4)
        board.reveal_cell(0, 0)
        assert board.get_cell(0, 4).is_flagged is True
        assert small_game.shared_score == -3 + 15

    @pytest.mark.parametrize("row,col", [(-1, 0), (0, -1), (5, 0), (0, 5)])
    def test_reveal_out_of_bounds(
        self, small_game: Game, row: int, col: int
    ) -> None:
        """Positions outside the board are rejected."""
        assert small_game.board1.reveal_cell(row, col) is False

    def test_reveal_after_game_over(self, small_game: Game) -> None:
        """No reveal happens once the game has ended."""
        small_game.deduct_lives(10)
        assert small_game.board2.reveal_cell(0, 0) is False

    def test_question_cell_cascades(self, small_game: Game) -> None:
        """Special cells spread the reveal like empty cells."""
        board = small_game.board1
        board.load_layout(["Q.*..", "..*..", "***..", ".....", "..S.."])
        board.reveal_cell(0, 0)
        assert board.get_cell(1, 1).is_revealed is True
        assert small_game.shared_score == 4


# ============================================================================
# Flag Tests
# ============================================================================

class TestFlags:
    """Test flag placement, removal and the flag cap."""

    def test_flag_mine_rewards(self, small_game: Game) -> None:
        """Flagging a mine scores the reward."""
        assert small_game.board1.toggle_flag(2, 3) is True
        assert small_game.shared_score == 1
        assert small_game.board1.flags_placed == 1
        assert small_game.board1.mines_left == 1

    def test_flag_safe_cell_penalizes(self, small_game: Game) -> None:
        """Flagging a safe cell scores the penalty."""
        small_game.board1.toggle_flag(0, 0)
        assert small_game.shared_score == -3

    def test_unflag_keeps_score(self, small_game: Game) -> None:
        """Removing a flag never changes the score."""
        board = small_game.board1
        board.toggle_flag(0, 0)
        assert board.toggle_flag(0, 0) is True
        assert small_game.shared_score == -3
        assert board.flags_placed == 0

    def test_flag_cap_rejects_extra_flag(self, small_game: Game) -> None:
        """Flags cannot exceed the mines still hidden."""
        board = small_game.board1
        board.toggle_flag(2, 3)
        board.toggle_flag(0, 0)

        assert board.toggle_flag(4, 0) is False
        assert board.get_cell(4, 0).is_hidden is True
        assert board.flags_placed == 2
        assert small_game.shared_score == 1 - 3
        assert "No flags left" in small_game.pop_last_action_message()

    def test_flag_cap_follows_revealed_mines(self, small_game: Game) -> None:
        """A revealed mine lowers the cap."""
        board = small_game.board1
        board.reveal_cell(2, 3)
        assert board.hidden_mine_count == 1
        assert board.toggle_flag(0, 0) is True
        assert board.toggle_flag(0, 1) is False

    def test_flag_revealed_cell_is_rejected(self, small_game: Game) -> None:
        """Revealed cells cannot be flagged."""
        board = small_game.board1
        board.reveal_cell(1, 2)
        assert board.toggle_flag(1, 2) is False
        assert board.flags_placed == 0

    def test_flag_out_of_bounds(self, small_game: Game) -> None:
        """Positions outside the board are rejected."""
        assert small_game.board1.toggle_flag(9, 9) is False


# ============================================================================
# Win/Lose Condition Tests
# ============================================================================

class TestWinLoseConditions:
    """Test game over conditions driven by a board."""

    def test_win_by_revealing_all_safe_cells(self, small_game: Game) -> None:
        """Revealing every safe cell wins and converts lives."""
        board = small_game.board1
        board.reveal_cell(0, 0)
        board.reveal_cell(4, 4)
        assert small_game.shared_score == 22
        assert board.safe_cells_remaining == 1

        board.reveal_cell(2, 4)
        assert small_game.game_state == GameState.WON
        assert small_game.shared_score == 23 + 10 * 5
        assert board.is_solved() is True

    def test_win_by_flagging_all_mines(self, small_game: Game) -> None:
        """Flagging every mine wins."""
        board = small_game.board1
        board.toggle_flag(2, 3)
        assert small_game.is_running is True
        board.toggle_flag(4, 0)

        assert small_game.is_won is True
        assert small_game.shared_score == 2 + 10 * 5

    def test_end_reveals_both_boards(self, small_game: Game) -> None:
        """Every cell of both boards is revealed once the game ends."""
        small_game.board1.toggle_flag(2, 3)
        small_game.board1.toggle_flag(4, 0)
        for board in small_game.boards:
            assert all(cell.is_revealed for cell in board.iter_cells())
            assert board.flags_placed == 0
            assert board.safe_cells_remaining == 0

    def test_loss_on_last_life(self) -> None:
        """A mine on the last life loses the game with no bonus."""
        hard_small = dataclasses.replace(
            HARD, rows=5, cols=5, mines=2, question_cells=0, surprise_cells=0
        )
        game = Game(hard_small, random.Random(5))
        game.board1.load_layout(CASCADE_LAYOUT)
        game.deduct_lives(5)
        assert game.shared_lives == 1

        game.board1.reveal_cell(2, 3)
        assert game.game_state == GameState.LOST
        assert game.shared_lives == 0
        assert game.shared_score == 0
        assert all(cell.is_revealed for cell in game.board2.iter_cells())

    def test_board_without_mines_is_cleared(self, small_game: Game) -> None:
        """With no mines, every mine is trivially found."""
        small_game.board1.load_layout(["...", "..."])
        assert small_game.board1.are_all_mines_found() is True
        assert small_game.board1.is_cleared() is True


# ============================================================================
# Reward Reveal Tests
# ============================================================================

class TestRewardReveals:
    """Test reveals granted by question rewards."""

    def test_reveal_random_mine(self, small_game: Game) -> None:
        """One hidden mine is revealed without losing a life."""
        board = small_game.board1
        position = board.reveal_random_mine()

        assert position in MINE_POSITIONS
        assert board.get_cell(*position).is_revealed is True
        assert small_game.shared_lives == 10
        assert small_game.shared_score == 0
        assert board.hidden_mine_count == 1
        assert small_game.is_running is True

    def test_reveal_random_mine_skips_flagged(self, small_game: Game) -> None:
        """Flagged mines are not candidates."""
        board = small_game.board1
        board.toggle_flag(2, 3)
        assert board.reveal_random_mine() == (4, 0)
        assert small_game.is_won is True

    def test_reveal_random_mine_lifts_extra_flags(
        self, small_game: Game
    ) -> None:
        """Flags never outnumber the hidden mines after a reward reveal."""
        board = small_game.board1
        board.toggle_flag(0, 0)
        board.toggle_flag(0, 1)
        score = small_game.shared_score
        assert board.flags_placed == board.hidden_mine_count == 2

        board.reveal_random_mine()

        assert board.flags_placed == board.hidden_mine_count == 1
        flagged = [cell for cell in board.iter_cells() if cell.is_flagged]
        assert [(cell.row, cell.col) for cell in flagged] == [(0, 1)]
        assert board.get_cell(0, 0).is_hidden is True
        assert small_game.shared_score == score
        assert small_game.is_running is True

    def test_reveal_random_mine_keeps_flag_on_mine(
        self, small_game: Game
    ) -> None:
        """Only flags on safe cells are lifted."""
        board = small_game.board1
        board.load_layout(["*.*..", ".....", "....*", ".....", "....."])
        for position in [(0, 0), (0, 1), (1, 1)]:
            assert board.toggle_flag(*position) is True

        assert board.reveal_random_mine() in [(0, 2), (2, 4)]

        assert board.flags_placed == board.hidden_mine_count == 2
        assert board.get_cell(0, 0).is_flagged is True
        assert board.get_cell(0, 1).is_flagged is False
        assert board.get_cell(1, 1).is_flagged is True

    def test_reveal_best_area_keeps_flag_cap(self, small_game: Game) -> None:
        board = small_game.board1
        board.toggle_flag(0, 0)
        board.toggle_flag(0, 1)

        board.reveal_best_3x3_area()

        flagged = sum(1 for cell in board.iter_cells() if cell.is_flagged)
        assert board.flags_placed == flagged
        assert board.flags_placed <= board.hidden_mine_count

    def test_reveal_random_mine_none_left(self, small_game: Game) -> None:
        """Returns None when no mine is hidden."""
        board = small_game.board1
        board.reveal_cell(2, 3)
        board.reveal_cell(4, 0)
        assert board.reveal_random_mine() is None

    def test_reveal_best_area(self, small_game: Game) -> None:
        """A 3x3 block is revealed with no score or life effect."""
        board = small_game.board1
        top, left = board.reveal_best_3x3_area()

        assert 0 <= top <= 2 and 0 <= left <= 2
        for row in range(top, top + 3):
            for col in range(left, left + 3):
                assert board.get_cell(row, col).is_revealed is True
        assert small_game.shared_score == 0
        assert small_game.shared_lives == 10
        hidden_safe = sum(
            1 for cell in board.iter_cells()
            if not cell.is_mine and not cell.is_revealed
        )
        assert board.safe_cells_remaining == hidden_safe

    def test_reveal_best_area_can_win(self, small_game: Game) -> None:
        """Uncovering the whole board through a reward ends the game."""
        board = small_game.board1
        board.load_layout(["...", "...", "..*"])
        assert board.reveal_best_3x3_area() == (0, 0)
        assert small_game.is_won is True

    def test_reveal_best_area_none_hidden(self, small_game: Game) -> None:
        """Returns None when nothing is hidden."""
        small_game.board1.reveal_all()
        assert small_game.board1.reveal_best_3x3_area() is None


# ============================================================================
# Observation Tests
# ============================================================================

class TestObservation:
    """Test observation generation and accessors."""

    def test_observation_shape(self, small_game: Game) -> None:
        """Observation should have the board shape."""
        obs = small_game.board1.get_observation()
        assert obs.shape == (5, 5)
        assert obs.dtype == np.int8

    def test_initial_observation_all_hidden(self, small_game: Game) -> None:
        """All cells should be -1 initially."""
        assert np.all(small_game.board1.get_observation() == -1)

    def test_observation_after_reveal(self, small_game: Game) -> None:
        """Revealed cells show their counts."""
        small_game.board1.reveal_cell(0, 0)
        obs = small_game.board1.get_observation()
        assert obs[0, 0] == 0
        assert obs[1, 2] == 1
        assert obs[2, 3] == -1

    def test_valid_actions_shrink(self, small_game: Game) -> None:
        """Only hidden cells are valid reveals."""
        board = small_game.board1
        assert len(board.get_valid_actions()) == 25
        board.reveal_cell(0, 0)
        assert len(board.get_valid_actions()) == 9

    def test_invalid_position_accessors(self, small_game: Game) -> None:
        """Accessors return None outside the board."""
        assert small_game.board1.get_cell(7, 0) is None
        assert small_game.board1.cell_view(0, 7) is None

    def test_reveal_all(self, small_game: Game) -> None:
        """reveal_all uncovers everything and keeps counters consistent."""
        board = small_game.board1
        board.toggle_flag(0, 0)
        board.reveal_all()
        assert all(cell.is_revealed for cell in board.iter_cells())
        assert board.safe_cells_remaining == 0
        assert board.flags_placed == 0
