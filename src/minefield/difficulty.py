"""
Difficulty presets for the cooperative game.

A difficulty fixes board size, mine and special-cell counts, the starting
lives and every point value of the shared economy.
"""
from dataclasses import dataclass
from typing import Dict


# ============================================================================
# Difficulty Configuration
# ============================================================================

@dataclass(frozen=True)
class Difficulty:
    """
    Immutable configuration for one game.

    Attributes:
        name: Preset name, also the key of the question scoring table.
        rows: Number of rows on each board.
        cols: Number of columns on each board.
        mines: Mines placed on each board.
        question_cells: Question cells placed on each board.
        surprise_cells: Surprise cells placed on each board.
        starting_lives: Shared lives at game start.
        activation_cost: Points paid to activate a special cell. Also the
            rate at which lives convert into score.
        surprise_value: Points won or lost by a surprise cell.
        mine_flag_reward: Points for flagging a mine.
        non_mine_flag_penalty: Points (negative) for flagging a safe cell.
    """

    name: str
    rows: int
    cols: int
    mines: int
    question_cells: int
    surprise_cells: int
    starting_lives: int
    activation_cost: int
    surprise_value: int
    mine_flag_reward: int = 1
    non_mine_flag_penalty: int = -3

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.rows < 1 or self.cols < 1:
            raise ValueError("Board dimensions must be positive")
        if self.mines < 0:
            raise ValueError("Number of mines cannot be negative")
        max_mines = self.rows * self.cols - 1
        if self.mines > max_mines:
            raise ValueError(f"Too many mines (max {max_mines})")
        if self.question_cells < 0 or self.surprise_cells < 0:
            raise ValueError("Special cell counts cannot be negative")
        if self.starting_lives < 1:
            raise ValueError("Starting lives must be positive")
        if self.activation_cost < 0 or self.surprise_value < 0:
            raise ValueError("Point values cannot be negative")

    @property
    def total_cells(self) -> int:
        """Cells on one board."""
        return self.rows * self.cols

    @property
    def safe_cells(self) -> int:
        """Non-mine cells on one board."""
        return self.total_cells - self.mines


# Preset difficulty levels
EASY = Difficulty(
    "EASY", rows=9, cols=9, mines=10,
    question_cells=6, surprise_cells=2,
    starting_lives=10, activation_cost=5, surprise_value=8,
)
MEDIUM = Difficulty(
    "MEDIUM", rows=13, cols=13, mines=26,
    question_cells=7, surprise_cells=3,
    starting_lives=8, activation_cost=8, surprise_value=12,
)
HARD = Difficulty(
    "HARD", rows=16, cols=16, mines=44,
    question_cells=11, surprise_cells=4,
    starting_lives=6, activation_cost=12, surprise_value=16,
)

DIFFICULTIES: Dict[str, Difficulty] = {
    preset.name: preset for preset in (EASY, MEDIUM, HARD)
}


def get_difficulty(name: str) -> Difficulty:
    """
    Look up a preset by name (case-insensitive).

    Raises:
        ValueError: If no preset has that name.
    """
    try:
        return DIFFICULTIES[name.strip().upper()]
    except KeyError:
        valid = ", ".join(DIFFICULTIES)
        raise ValueError(f"Unknown difficulty {name!r} (expected one of {valid})") from None
