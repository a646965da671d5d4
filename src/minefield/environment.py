"""
Gymnasium environment wrapper for the cooperative game.

Provides a standard RL interface where a single policy plays both
players in turn.
"""
import random
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import Board
from .cell import (
    Cell,
    CellContent,
    OBS_FLAGGED,
    OBS_HIDDEN,
    OBS_MINE,
    OBS_QUESTION,
    OBS_SURPRISE,
    OBS_USED_SPECIAL,
)
from .difficulty import EASY, Difficulty
from .game import Game
from .questions import Question, QuestionResult, QuestionSource


# ============================================================================
# Constants
# ============================================================================

REVEAL, FLAG, ACTIVATE = 0, 1, 2
ACTION_KINDS = ("reveal", "flag", "activate")

INVALID_ACTION_REWARD = -0.1

RENDER_SYMBOLS = {
    OBS_HIDDEN: ".",
    OBS_FLAGGED: "F",
    OBS_MINE: "*",
    OBS_QUESTION: "Q",
    OBS_SURPRISE: "S",
    OBS_USED_SPECIAL: "u",
    0: " ",
}


# ============================================================================
# Cooperative Minesweeper Environment
# ============================================================================

class CoopMinesweeperEnv(gym.Env):
    """
    Gymnasium environment for the cooperative two-board game.

    Observation:
        int8 array of shape (2, rows, cols), one layer per board, using
        Cell.to_observation() values (-2..12).

    Actions:
        Discrete space of size 3 * rows * cols. Action a decodes to
        kind = a // (rows * cols) (reveal, flag, activate) and cell
        index a % (rows * cols) on the current player's board. A valid
        reveal or activation passes the turn to the other player; a flag
        keeps the turn.

    Rewards:
        - Change of the shared score caused by the action (end-of-game
          life bonus included)
        - -0.1 for an invalid action (turn does not pass)
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        difficulty: Difficulty = EASY,
        render_mode: Optional[str] = None,
        question_source: Optional[QuestionSource] = None,
        answer_accuracy: float = 0.5,
    ) -> None:
        """
        Initialize the environment.

        Args:
            difficulty: Game difficulty.
            render_mode: How to render the environment.
            question_source: Questions for question cells; without one,
                question cells cannot be activated.
            answer_accuracy: Probability that a presented question is
                answered correctly.
        """
        super().__init__()

        self.difficulty = difficulty
        self.render_mode = render_mode
        self.question_source = question_source
        self.answer_accuracy = answer_accuracy
        self._cells = difficulty.rows * difficulty.cols

        self.observation_space = spaces.Box(
            low=OBS_FLAGGED,
            high=OBS_USED_SPECIAL,
            shape=(2, difficulty.rows, difficulty.cols),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(len(ACTION_KINDS) * self._cells)

        self.game = self._new_game(random.Random())
        self._steps = 0

    def _new_game(self, rng: random.Random) -> Game:
        presenter = (
            self._present_question if self.question_source is not None else None
        )
        return Game(self.difficulty, rng, self.question_source, presenter)

    def _present_question(self, question: Question) -> QuestionResult:
        """Simulated players answer correctly with answer_accuracy odds."""
        if self.np_random.random() < self.answer_accuracy:
            return QuestionResult.CORRECT
        return QuestionResult.WRONG

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Reset the environment for a new episode.

        Args:
            seed: Random seed for reproducibility.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        game_seed = int(self.np_random.integers(2**32))
        self.game = self._new_game(random.Random(game_seed))
        self._steps = 0
        return self._get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Encoded (kind, cell) action.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        kind, row, col = self.decode_action(action)
        self._steps += 1

        score_before = self.game.shared_score
        if self._apply(kind, row, col):
            reward = float(self.game.shared_score - score_before)
            if kind != FLAG:
                self.game.switch_turn()
        else:
            reward = INVALID_ACTION_REWARD + (
                self.game.shared_score - score_before
            )
        # Rejected actions may leave a message; agents do not read it
        self.game.pop_last_action_message()

        terminated = not self.game.is_running
        return (
            self._get_observation(), reward, terminated, False, self._get_info()
        )

    def _apply(self, kind: int, row: int, col: int) -> bool:
        board = self.current_board
        if kind == REVEAL:
            return board.reveal_cell(row, col)
        if kind == FLAG:
            return board.toggle_flag(row, col)
        return board.activate_special_cell(row, col)

    def decode_action(self, action: int) -> Tuple[int, int, int]:
        """Convert flat action index to (kind, row, col)."""
        kind, index = divmod(int(action), self._cells)
        row, col = divmod(index, self.difficulty.cols)
        return kind, row, col

    def encode_action(self, kind: int, row: int, col: int) -> int:
        """Convert (kind, row, col) to a flat action index."""
        return kind * self._cells + row * self.difficulty.cols + col

    @property
    def current_board(self) -> Board:
        return self.game.get_board(self.game.current_player_turn)

    def _get_observation(self) -> np.ndarray:
        return np.stack(
            [board.get_observation() for board in self.game.boards]
        )

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        return {
            "steps": self._steps,
            "score": self.game.shared_score,
            "lives": self.game.shared_lives,
            "player": self.game.current_player_turn,
            "game_state": self.game.game_state.name,
            "questions_answered": self.game.questions_answered,
            "correct_answers": self.game.correct_answers,
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return self._render_ansi()
        if self.render_mode == "human":
            print(self._render_ansi())
        return None

    def _render_ansi(self) -> str:
        """Render both boards side by side as ASCII."""
        obs = self._get_observation()
        lines = [
            f"Score: {self.game.shared_score}  "
            f"Lives: {self.game.shared_lives}  "
            f"Turn: player {self.game.current_player_turn}"
        ]
        for row in range(self.difficulty.rows):
            halves = []
            for layer in obs:
                halves.append(" ".join(
                    RENDER_SYMBOLS.get(int(value), str(value))
                    for value in layer[row]
                ))
            lines.append("   |   ".join(halves))
        return "\n".join(lines)

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of valid actions for the current player.

        Returns:
            Boolean array where True = valid action.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        if not self.game.is_running:
            return mask

        board = self.current_board
        can_flag = board.flags_placed < board.hidden_mine_count
        can_pay = self.game.shared_score >= self.difficulty.activation_cost
        for cell in board.iter_cells():
            if cell.is_hidden:
                mask[self.encode_action(REVEAL, cell.row, cell.col)] = True
            if cell.is_flagged or (cell.is_hidden and can_flag):
                mask[self.encode_action(FLAG, cell.row, cell.col)] = True
            if can_pay and self._can_activate(cell):
                mask[self.encode_action(ACTIVATE, cell.row, cell.col)] = True
        return mask

    def _can_activate(self, cell: Cell) -> bool:
        if not cell.view().can_activate:
            return False
        if cell.content == CellContent.QUESTION:
            return self.question_source is not None
        return True


# ============================================================================
# Vectorized Environment Factory
# ============================================================================

def make_vec_env(
    n_envs: int = 4,
    difficulty: Difficulty = EASY,
) -> gym.vector.VectorEnv:
    """
    Create vectorized environment for parallel simulation.

    Args:
        n_envs: Number of parallel environments.
        difficulty: Game difficulty.

    Returns:
        Vectorized environment.
    """
    def make_env() -> CoopMinesweeperEnv:
        return CoopMinesweeperEnv(difficulty=difficulty)

    return gym.vector.AsyncVectorEnv([make_env for _ in range(n_envs)])
