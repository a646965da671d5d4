"""
Game module for the cooperative Minesweeper engine.

The Game owns both players' boards and the shared economy (score and
lives), tracks turns and the win/loss state machine, and routes
special-cell activations to their activators.
"""
import logging
import random
from enum import Enum, auto
from typing import List, Optional, Tuple

from .board import Board
from .cell import Cell
from .difficulty import EASY, Difficulty
from .questions import QuestionLevel, QuestionPresenter, QuestionSource
from .score_rules import ScoreOutcome, compute
from .specialcell import create_activator, run_activation
from .summary import GameSummary

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

MAX_LIVES = 10


class GameState(Enum):
    """Possible states of the game."""

    RUNNING = auto()
    WON = auto()
    LOST = auto()


# ============================================================================
# Game Class
# ============================================================================

class Game:
    """
    Cooperative two-board game with shared score and lives.

    Every mutator of score, lives or turn is a no-op once the game is
    over, and re-checks the win/loss conditions after running.
    """

    def __init__(
        self,
        difficulty: Difficulty = EASY,
        rng: Optional[random.Random] = None,
        question_source: Optional[QuestionSource] = None,
        question_presenter: Optional[QuestionPresenter] = None,
    ) -> None:
        """
        Create a game and generate both boards.

        Args:
            difficulty: Difficulty preset or custom configuration.
            rng: Random source for placement and coin flips.
            question_source: Supplies questions for question cells.
            question_presenter: Asks the players a question.
        """
        self.rng = rng or random.Random()
        self.question_source = question_source
        self.question_presenter = question_presenter
        self.start_new_game(difficulty)

    # ========================================================================
    # Lifecycle
    # ========================================================================

    def start_new_game(self, difficulty: Difficulty) -> None:
        """Reset all game data for the given difficulty."""
        self._difficulty = difficulty
        self._shared_lives = min(difficulty.starting_lives, MAX_LIVES)
        self._shared_score = 0
        self._game_state = GameState.RUNNING
        self._current_player_turn = 1
        self._last_action_message: Optional[str] = None
        self._questions_answered = 0
        self._correct_answers = 0
        self._surprises_opened = 0
        if self.question_source is not None:
            self.question_source.reset()

        self.board1 = Board(difficulty, self, self.rng)
        self.board2 = Board(difficulty, self, self.rng)
        logger.debug("New %s game started", difficulty.name)

    def restart(self) -> None:
        """Start over with the same difficulty."""
        self.start_new_game(self._difficulty)

    # ========================================================================
    # Status & End Game
    # ========================================================================

    def check_game_status(self) -> None:
        """
        Move to LOST when lives run out, or to WON when either board is
        cleared. Runs end-of-game processing on the transition.
        """
        if self._game_state != GameState.RUNNING:
            return

        if self._shared_lives <= 0:
            self._shared_lives = 0
            self._game_state = GameState.LOST
            self._end_game()
            return

        if self.board1.is_cleared() or self.board2.is_cleared():
            self._game_state = GameState.WON
            self._end_game()

    def _end_game(self) -> None:
        """Convert remaining lives into score and reveal both boards."""
        life_value = self._difficulty.activation_cost
        bonus = self._shared_lives * life_value
        self._shared_score += bonus
        logger.info(
            "Game ended: %s. Life bonus %d lives * %d pts = +%d",
            self._game_state.name, self._shared_lives, life_value, bonus,
        )
        self.board1.reveal_all()
        self.board2.reveal_all()

    # ========================================================================
    # Shared Economy
    # ========================================================================

    def add_score(self, delta: int) -> None:
        """Add (or subtract) points."""
        if not self.is_running:
            return
        self._shared_score += delta
        self.check_game_status()

    def add_lives(self, count: int = 1) -> None:
        """
        Gain lives. Lives above MAX_LIVES are converted into score at
        the activation-cost rate.
        """
        if not self.is_running or count <= 0:
            return
        new_lives = self._shared_lives + count
        if new_lives > MAX_LIVES:
            excess = new_lives - MAX_LIVES
            converted = excess * self._difficulty.activation_cost
            self._shared_score += converted
            new_lives = MAX_LIVES
            logger.info(
                "Life cap reached: %d excess lives converted to %d points",
                excess, converted,
            )
        self._shared_lives = new_lives
        self.check_game_status()

    def deduct_lives(self, count: int = 1) -> None:
        """Lose lives; the game is lost when none remain."""
        if not self.is_running or count <= 0:
            return
        self._shared_lives = max(self._shared_lives - count, 0)
        self.check_game_status()

    def process_question_answer(
        self, level: QuestionLevel, correct: bool
    ) -> ScoreOutcome:
        """
        Apply the scoring table to an answered question.

        Args:
            level: Level of the answered question.
            correct: Whether the answer was correct.

        Returns:
            The applied outcome (a zero outcome if the game is over).
        """
        if not self.is_running:
            return ScoreOutcome(0, 0, "Game not running.")

        self._questions_answered += 1
        if correct:
            self._correct_answers += 1

        outcome = compute(self._difficulty, level, correct, self.rng)
        self.add_score(outcome.score_delta)
        if outcome.life_delta > 0:
            self.add_lives(outcome.life_delta)
        elif outcome.life_delta < 0:
            self.deduct_lives(-outcome.life_delta)
        self.check_game_status()
        return outcome

    def record_surprise_opened(self) -> None:
        """Count an opened surprise cell."""
        self._surprises_opened += 1

    # ========================================================================
    # Special Cells
    # ========================================================================

    def activate_special_cell(self, board: Board, cell: Cell) -> bool:
        """
        Run the activation sequence for a special cell.

        Args:
            board: Board holding the cell.
            cell: The revealed question or surprise cell.

        Returns:
            True if the activation succeeded.
        """
        if not self.is_running:
            self.set_last_action_message("The game is over.")
            return False
        activator = create_activator(cell.content, self, board)
        if activator is None:
            return False
        return run_activation(activator)

    # ========================================================================
    # Turns & Messages
    # ========================================================================

    def switch_turn(self) -> None:
        """Hand the turn to the other player."""
        if not self.is_running:
            return
        self._current_player_turn = 2 if self._current_player_turn == 1 else 1

    def set_last_action_message(self, message: str) -> None:
        """Store the message shown for the last action."""
        self._last_action_message = message

    def pop_last_action_message(self) -> Optional[str]:
        """Fetch and clear the last action message."""
        message = self._last_action_message
        self._last_action_message = None
        return message

    # ========================================================================
    # Summary
    # ========================================================================

    def summarize(self, duration_seconds: int = 0) -> Optional[GameSummary]:
        """
        Build the finished-game summary.

        Args:
            duration_seconds: Play time tracked by the caller.

        Returns:
            The summary, or None while the game is still running.
        """
        if self.is_running:
            return None
        return GameSummary(
            difficulty=self._difficulty.name,
            result=self._game_state.name,
            final_score=self._shared_score,
            final_lives=self._shared_lives,
            questions_answered=self._questions_answered,
            correct_answers=self._correct_answers,
            duration_seconds=int(duration_seconds),
        )

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def difficulty(self) -> Difficulty:
        return self._difficulty

    @property
    def shared_score(self) -> int:
        return self._shared_score

    @property
    def shared_lives(self) -> int:
        return self._shared_lives

    @property
    def max_lives(self) -> int:
        return MAX_LIVES

    @property
    def game_state(self) -> GameState:
        return self._game_state

    @property
    def is_running(self) -> bool:
        """Check if game is still in progress."""
        return self._game_state == GameState.RUNNING

    @property
    def is_won(self) -> bool:
        return self._game_state == GameState.WON

    @property
    def is_lost(self) -> bool:
        return self._game_state == GameState.LOST

    @property
    def current_player_turn(self) -> int:
        return self._current_player_turn

    @property
    def questions_answered(self) -> int:
        return self._questions_answered

    @property
    def correct_answers(self) -> int:
        return self._correct_answers

    @property
    def surprises_opened(self) -> int:
        return self._surprises_opened

    @property
    def boards(self) -> Tuple[Board, Board]:
        return self.board1, self.board2

    def get_board(self, board_number: int) -> Board:
        """
        Get a board by player number.

        Raises:
            ValueError: If the number is not 1 or 2.
        """
        if board_number == 1:
            return self.board1
        if board_number == 2:
            return self.board2
        raise ValueError(f"Board number must be 1 or 2, got {board_number}")

    def status_lines(self) -> List[str]:
        """Human-readable status, one fact per line."""
        return [
            f"State: {self._game_state.name}",
            f"Turn: player {self._current_player_turn}",
            f"Lives: {self._shared_lives}/{MAX_LIVES}",
            f"Score: {self._shared_score}",
            f"Board 1 safe cells left: {self.board1.safe_cells_remaining}",
            f"Board 2 safe cells left: {self.board2.safe_cells_remaining}",
        ]
