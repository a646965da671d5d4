"""
Board module for the cooperative Minesweeper engine.

Implements one player's board: mine and special-cell placement,
flood-fill revealing, flag accounting and win detection. Score and
life effects are reported to the owning Game.
"""
import logging
import random
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterator, List, Optional, Sequence, Tuple

import numpy as np

from .cell import Cell, CellContent, CellView
from .difficulty import Difficulty

if TYPE_CHECKING:
    from .game import Game

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

LAYOUT_SYMBOLS = {
    ".": CellContent.EMPTY,
    "*": CellContent.MINE,
    "Q": CellContent.QUESTION,
    "S": CellContent.SURPRISE,
}

AREA_SIZE = 3
AREA_SAMPLES = 20


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    One player's board.

    Manages the grid of cells, content placement, revealing logic
    and the per-board win conditions. The owning game supplies the
    running state and receives score/life changes.
    """

    difficulty: Difficulty
    game: "Game" = field(repr=False)
    rng: random.Random = field(default_factory=random.Random, repr=False)
    rows: int = field(init=False)
    cols: int = field(init=False)
    total_mines: int = field(init=False)
    total_question_cells: int = field(init=False)
    total_surprise_cells: int = field(init=False)
    _grid: List[List[Cell]] = field(default_factory=list, init=False, repr=False)
    _flags_placed: int = field(default=0, init=False)
    _safe_cells_remaining: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        """Generate the board after dataclass creation."""
        self.rows = self.difficulty.rows
        self.cols = self.difficulty.cols
        self.total_mines = self.difficulty.mines
        self.total_question_cells = self.difficulty.question_cells
        self.total_surprise_cells = self.difficulty.surprise_cells
        self._generate()

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def _generate(self) -> None:
        """Build a random board for the configured difficulty."""
        self._init_grid()
        self._place_mines()
        self._calculate_adjacent_mines()
        self._place_special_cells()
        self._flags_placed = 0
        self._safe_cells_remaining = self.rows * self.cols - self.total_mines
        logger.debug(
            "Generated %dx%d board: %d mines, %d questions, %d surprises",
            self.rows, self.cols, self.total_mines,
            self.total_question_cells, self.total_surprise_cells,
        )

    def _init_grid(self) -> None:
        """Create empty grid of cells."""
        self._grid = [
            [Cell(row, col) for col in range(self.cols)]
            for row in range(self.rows)
        ]

    def _place_mines(self) -> None:
        """Place mines by rejection sampling over random cells."""
        placed = 0
        while placed < self.total_mines:
            row = self.rng.randrange(self.rows)
            col = self.rng.randrange(self.cols)
            cell = self._grid[row][col]
            if cell.content == CellContent.EMPTY:
                cell.content = CellContent.MINE
                placed += 1

    def _calculate_adjacent_mines(self) -> None:
        """Turn empty cells next to mines into numbered cells."""
        for row in range(self.rows):
            for col in range(self.cols):
                cell = self._grid[row][col]
                if cell.is_mine:
                    continue
                count = self._count_adjacent_mines(row, col)
                cell.adjacent_mines = count
                if count > 0 and cell.content == CellContent.EMPTY:
                    cell.content = CellContent.NUMBER

    def _count_adjacent_mines(self, row: int, col: int) -> int:
        """Count mines adjacent to a specific cell."""
        count = 0
        for neighbor_row, neighbor_col in self._get_neighbors(row, col):
            if self._grid[neighbor_row][neighbor_col].is_mine:
                count += 1
        return count

    def _place_special_cells(self) -> None:
        """
        Place question and surprise cells on mine-free interior cells.

        Only empty cells with no adjacent mine are eligible. If there
        are not enough, as many as fit are placed.
        """
        eligible = [
            cell for cell in self.iter_cells()
            if cell.content == CellContent.EMPTY and cell.adjacent_mines == 0
        ]
        self.rng.shuffle(eligible)
        questions = eligible[:self.total_question_cells]
        surprises = eligible[
            len(questions):len(questions) + self.total_surprise_cells
        ]
        for cell in questions:
            cell.content = CellContent.QUESTION
        for cell in surprises:
            cell.content = CellContent.SURPRISE
        if len(questions) + len(surprises) < (
            self.total_question_cells + self.total_surprise_cells
        ):
            logger.debug(
                "Only %d eligible cells for special content", len(eligible)
            )

    def load_layout(self, layout: Sequence[str]) -> None:
        """
        Replace the board with a fixed layout.

        Symbols: "." empty, "*" mine, "Q" question, "S" surprise.
        Numbers are computed. Board totals follow the layout.

        Args:
            layout: One string per row, all of equal length.

        Raises:
            ValueError: If the layout is empty, ragged, uses an unknown
                symbol, or puts a special cell next to a mine.
        """
        if not layout or not layout[0]:
            raise ValueError("Layout must have at least one row and column")
        width = len(layout[0])
        if any(len(line) != width for line in layout):
            raise ValueError("Layout rows must have equal length")

        self.rows = len(layout)
        self.cols = width
        self._init_grid()
        for row, line in enumerate(layout):
            for col, symbol in enumerate(line):
                if symbol not in LAYOUT_SYMBOLS:
                    raise ValueError(f"Unknown layout symbol {symbol!r}")
                self._grid[row][col].content = LAYOUT_SYMBOLS[symbol]

        self._calculate_adjacent_mines()
        for cell in self.iter_cells():
            if cell.is_special and cell.adjacent_mines > 0:
                raise ValueError(
                    f"Special cell at ({cell.row}, {cell.col}) touches a mine"
                )

        self.total_mines = self._count_content(CellContent.MINE)
        self.total_question_cells = self._count_content(CellContent.QUESTION)
        self.total_surprise_cells = self._count_content(CellContent.SURPRISE)
        self._flags_placed = 0
        self._safe_cells_remaining = self.rows * self.cols - self.total_mines

    def _count_content(self, content: CellContent) -> int:
        return sum(1 for cell in self.iter_cells() if cell.content == content)

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def _get_neighbors(
        self, row: int, col: int
    ) -> List[Tuple[int, int]]:
        """
        Get valid neighboring cell positions.

        Args:
            row: Row index of center cell.
            col: Column index of center cell.

        Returns:
            List of (row, col) tuples for valid neighbors.
        """
        neighbors = []
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                if delta_row == 0 and delta_col == 0:
                    continue
                new_row = row + delta_row
                new_col = col + delta_col
                if self._is_valid_position(new_row, new_col):
                    neighbors.append((new_row, new_col))
        return neighbors

    def _is_valid_position(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.rows and 0 <= col < self.cols

    # ========================================================================
    # Game Actions (Mid-level)
    # ========================================================================

    def reveal_cell(self, row: int, col: int) -> bool:
        """
        Reveal a cell at the given position.

        Safe cells award one point, mines cost one life. Empty, question
        and surprise cells spread the reveal to their neighbours; numbered
        cells stop it. The game status is checked after every cell.

        Args:
            row: Row index to reveal.
            col: Column index to reveal.

        Returns:
            True if the reveal happened, False if it was rejected.
        """
        if not self._can_reveal(row, col):
            return False

        pending = [(row, col)]
        while pending and self.game.is_running:
            current_row, current_col = pending.pop()
            cell = self._grid[current_row][current_col]
            if not cell.is_hidden:
                continue
            self._reveal_single(cell)
            if cell.cascades:
                for neighbor_row, neighbor_col in self._get_neighbors(
                    current_row, current_col
                ):
                    neighbor = self._grid[neighbor_row][neighbor_col]
                    if neighbor.is_hidden and not neighbor.is_mine:
                        pending.append((neighbor_row, neighbor_col))
        return True

    def _can_reveal(self, row: int, col: int) -> bool:
        """Check if a cell can be revealed."""
        if not self.game.is_running:
            return False
        if not self._is_valid_position(row, col):
            return False
        return self._grid[row][col].is_hidden

    def _reveal_single(self, cell: Cell) -> None:
        """Reveal one cell and apply its score or life effect."""
        cell.reveal()
        if cell.is_mine:
            self.game.deduct_lives(1)
        else:
            self._safe_cells_remaining -= 1
            self.game.add_score(1)
        self.game.check_game_status()

    def toggle_flag(self, row: int, col: int) -> bool:
        """
        Toggle flag on a cell.

        Placing a flag scores the difficulty's mine reward or safe-cell
        penalty; removing one never changes the score. Flags are capped
        at the number of mines still hidden on this board.

        Args:
            row: Row index.
            col: Column index.

        Returns:
            True if flag was toggled, False otherwise.
        """
        if not self.game.is_running:
            return False
        if not self._is_valid_position(row, col):
            return False
        cell = self._grid[row][col]
        if cell.is_revealed:
            return False

        if cell.is_flagged:
            cell.toggle_flag()
            self._flags_placed -= 1
            self.game.check_game_status()
            return True

        if self._flags_placed >= self.hidden_mine_count:
            self.game.set_last_action_message(
                f"No flags left: {self._flags_placed} flags already cover "
                f"the {self.hidden_mine_count} hidden mines on this board."
            )
            return False

        cell.toggle_flag()
        self._flags_placed += 1
        if cell.is_mine:
            self.game.add_score(self.difficulty.mine_flag_reward)
        else:
            self.game.add_score(self.difficulty.non_mine_flag_penalty)
        self.game.check_game_status()
        return True

    def activate_special_cell(self, row: int, col: int) -> bool:
        """
        Activate a revealed question or surprise cell.

        The cell is marked used only when the activation succeeds, so a
        rejected attempt can be retried later.

        Returns:
            True if the activation succeeded.
        """
        if not self._is_valid_position(row, col):
            return False
        cell = self._grid[row][col]
        if not cell.is_revealed:
            self.game.set_last_action_message(
                "Reveal this cell before activating it."
            )
            return False
        if not cell.is_special:
            self.game.set_last_action_message(
                "Only question and surprise cells can be activated."
            )
            return False
        if cell.used:
            self.game.set_last_action_message("This cell was already used.")
            return False
        if not self.game.activate_special_cell(self, cell):
            return False
        cell.mark_used()
        return True

    # ========================================================================
    # Reward Reveals (no score or life effects)
    # ========================================================================

    def reveal_random_mine(self) -> Optional[Tuple[int, int]]:
        """
        Reveal one random mine that is neither revealed nor flagged.

        Returns:
            Position of the revealed mine, or None if there was none.
        """
        candidates = [
            cell for cell in self.iter_cells()
            if cell.is_mine and cell.is_hidden
        ]
        if not candidates:
            logger.info("Reward: no hidden mine left to reveal")
            return None
        cell = self.rng.choice(candidates)
        cell.reveal()
        logger.info("Reward: mine at (%d, %d) revealed", cell.row, cell.col)
        self._restore_flag_cap()
        self.game.check_game_status()
        return cell.row, cell.col

    def reveal_best_3x3_area(self) -> Optional[Tuple[int, int]]:
        """
        Reveal the 3x3 block holding the most hidden cells.

        Tries a handful of random blocks first and scans the whole
        board only if none of them had a hidden cell.

        Returns:
            Top-left position of the revealed block, or None if the
            board has no hidden cell.
        """
        top_limit = max(1, self.rows - AREA_SIZE + 1)
        left_limit = max(1, self.cols - AREA_SIZE + 1)

        best, best_count = None, 0
        for _ in range(AREA_SAMPLES):
            top = self.rng.randrange(top_limit)
            left = self.rng.randrange(left_limit)
            count = len(self._hidden_cells_in_area(top, left))
            if count > best_count:
                best, best_count = (top, left), count

        if best is None:
            for top in range(top_limit):
                for left in range(left_limit):
                    count = len(self._hidden_cells_in_area(top, left))
                    if count > best_count:
                        best, best_count = (top, left), count

        if best is None:
            return None

        for cell in self._hidden_cells_in_area(*best):
            cell.reveal()
            if not cell.is_mine:
                self._safe_cells_remaining -= 1
        logger.info("Reward: revealed 3x3 area at %s", best)
        self._restore_flag_cap()
        self.game.check_game_status()
        return best

    def _restore_flag_cap(self) -> None:
        """
        Lift flags from safe cells until flags fit the hidden mines again.

        A reward reveal can uncover an unflagged mine and drop the hidden
        mine count below the flags placed. Removing a flag never scores.
        """
        excess = self._flags_placed - self.hidden_mine_count
        if excess <= 0:
            return
        for cell in self.iter_cells():
            if excess == 0:
                break
            if cell.is_flagged and not cell.is_mine:
                cell.toggle_flag()
                self._flags_placed -= 1
                excess -= 1
        logger.info("Reward: lifted flags, %d left", self._flags_placed)

    def _hidden_cells_in_area(self, top: int, left: int) -> List[Cell]:
        """Hidden cells inside the block starting at (top, left)."""
        return [
            self._grid[row][col]
            for row in range(top, min(top + AREA_SIZE, self.rows))
            for col in range(left, min(left + AREA_SIZE, self.cols))
            if self._grid[row][col].is_hidden
        ]

    def reveal_all(self) -> None:
        """Reveal every cell for the final display, with no score effects."""
        for cell in self.iter_cells():
            if cell.force_reveal() and not cell.is_mine:
                self._safe_cells_remaining -= 1
        self._flags_placed = 0

    # ========================================================================
    # Win Conditions
    # ========================================================================

    def are_all_mines_found(self) -> bool:
        """Check if every mine is revealed or flagged."""
        return all(
            cell.is_revealed or cell.is_flagged
            for cell in self.iter_cells()
            if cell.is_mine
        )

    def is_solved(self) -> bool:
        """Check if every safe cell has been revealed."""
        return self._safe_cells_remaining == 0

    def is_cleared(self) -> bool:
        """Check if this board ends the game in a win."""
        return self.is_solved() or self.are_all_mines_found()

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def flags_placed(self) -> int:
        """Number of flags currently on the board."""
        return self._flags_placed

    @property
    def safe_cells_remaining(self) -> int:
        """Number of safe cells not revealed yet."""
        return self._safe_cells_remaining

    @property
    def hidden_mine_count(self) -> int:
        """Number of mines not revealed (flagged mines included)."""
        return sum(
            1 for cell in self.iter_cells()
            if cell.is_mine and not cell.is_revealed
        )

    @property
    def mines_left(self) -> int:
        """Mines neither revealed nor flagged."""
        found = sum(
            1 for cell in self.iter_cells()
            if cell.is_mine and (cell.is_revealed or cell.is_flagged)
        )
        return max(self.total_mines - found, 0)

    def iter_cells(self) -> Iterator[Cell]:
        """Iterate over all cells in row-major order."""
        for line in self._grid:
            yield from line

    def get_cell(self, row: int, col: int) -> Optional[Cell]:
        """Get cell at position, or None if invalid."""
        if not self._is_valid_position(row, col):
            return None
        return self._grid[row][col]

    def cell_view(self, row: int, col: int) -> Optional[CellView]:
        """Get the read-only view of a cell, or None if invalid."""
        cell = self.get_cell(row, col)
        return cell.view() if cell is not None else None

    def get_observation(self) -> np.ndarray:
        """
        Get board state as numpy array for agents.

        Returns:
            2D int8 array of Cell.to_observation() values.
        """
        obs = np.zeros((self.rows, self.cols), dtype=np.int8)
        for row in range(self.rows):
            for col in range(self.cols):
                obs[row, col] = self._grid[row][col].to_observation()
        return obs

    def get_valid_actions(self) -> List[Tuple[int, int]]:
        """
        Get list of valid cells to reveal.

        Returns:
            List of (row, col) positions that are still hidden.
        """
        actions = []
        for row in range(self.rows):
            for col in range(self.cols):
                if self._grid[row][col].is_hidden:
                    actions.append((row, col))
        return actions
