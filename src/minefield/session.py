"""
Per-session controller.

A GameSession is the caller-owned handle on one game: it addresses
boards by player number, measures play time, optionally enforces that
players act on their own board, and serializes every operation behind
one lock so concurrent callers see each action as a single unit.
"""
import random
import threading
import time
from typing import Callable, Optional

from .cell import CellView
from .difficulty import EASY, Difficulty
from .game import Game, GameState
from .questions import QuestionPresenter, QuestionSource
from .summary import GameSummary


# ============================================================================
# Game Session
# ============================================================================

class GameSession:
    """
    Thread-safe wrapper around a Game.

    Attributes:
        enforce_turns: If True, only the current player's board accepts
            actions.
    """

    def __init__(
        self,
        difficulty: Difficulty = EASY,
        *,
        rng: Optional[random.Random] = None,
        question_source: Optional[QuestionSource] = None,
        question_presenter: Optional[QuestionPresenter] = None,
        enforce_turns: bool = False,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._lock = threading.RLock()
        self._clock = clock
        self.enforce_turns = enforce_turns
        self._game = Game(difficulty, rng, question_source, question_presenter)
        self._started_at = clock()
        self._finished_at: Optional[float] = None

    @property
    def game(self) -> Game:
        """The wrapped game (reads only; mutate through the session)."""
        return self._game

    # ========================================================================
    # Actions
    # ========================================================================

    def reveal(self, board_number: int, row: int, col: int) -> bool:
        """Reveal a cell on a player's board."""
        with self._lock:
            if not self._may_act(board_number):
                return False
            result = self._game.get_board(board_number).reveal_cell(row, col)
            self._note_finish()
            return result

    def toggle_flag(self, board_number: int, row: int, col: int) -> bool:
        """Place or remove a flag on a player's board."""
        with self._lock:
            if not self._may_act(board_number):
                return False
            result = self._game.get_board(board_number).toggle_flag(row, col)
            self._note_finish()
            return result

    def activate(self, board_number: int, row: int, col: int) -> bool:
        """Activate a revealed special cell on a player's board."""
        with self._lock:
            if not self._may_act(board_number):
                return False
            board = self._game.get_board(board_number)
            result = board.activate_special_cell(row, col)
            self._note_finish()
            return result

    def end_turn(self) -> int:
        """
        Pass the turn to the other player.

        Returns:
            The player whose turn it now is.
        """
        with self._lock:
            self._game.switch_turn()
            return self._game.current_player_turn

    def restart(self, difficulty: Optional[Difficulty] = None) -> None:
        """Start a new game, keeping the difficulty unless one is given."""
        with self._lock:
            if difficulty is None:
                self._game.restart()
            else:
                self._game.start_new_game(difficulty)
            self._started_at = self._clock()
            self._finished_at = None

    def _may_act(self, board_number: int) -> bool:
        """Check the board number and the turn policy."""
        if board_number not in (1, 2):
            self._game.set_last_action_message("Board number must be 1 or 2.")
            return False
        if not self._game.is_running:
            return False
        if self.enforce_turns and board_number != self._game.current_player_turn:
            self._game.set_last_action_message(
                f"It is player {self._game.current_player_turn}'s turn."
            )
            return False
        return True

    def _note_finish(self) -> None:
        if self._finished_at is None and not self._game.is_running:
            self._finished_at = self._clock()

    # ========================================================================
    # Reads
    # ========================================================================

    def cell_view(
        self, board_number: int, row: int, col: int
    ) -> Optional[CellView]:
        """Read-only view of a cell, or None for an unknown board or cell."""
        if board_number not in (1, 2):
            return None
        with self._lock:
            return self._game.get_board(board_number).cell_view(row, col)

    def pop_message(self) -> Optional[str]:
        """Fetch and clear the last action message."""
        with self._lock:
            return self._game.pop_last_action_message()

    @property
    def state(self) -> GameState:
        with self._lock:
            return self._game.game_state

    @property
    def score(self) -> int:
        with self._lock:
            return self._game.shared_score

    @property
    def lives(self) -> int:
        with self._lock:
            return self._game.shared_lives

    @property
    def current_player(self) -> int:
        with self._lock:
            return self._game.current_player_turn

    @property
    def elapsed_seconds(self) -> float:
        """Play time so far, frozen when the game ends."""
        with self._lock:
            end = self._finished_at if self._finished_at is not None else self._clock()
            return max(end - self._started_at, 0.0)

    def summary(self) -> Optional[GameSummary]:
        """Finished-game summary, or None while the game runs."""
        with self._lock:
            return self._game.summarize(int(self.elapsed_seconds))
