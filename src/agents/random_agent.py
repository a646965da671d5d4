"""
Random agent for the cooperative Minesweeper environment.

Serves as a baseline by selecting random valid actions.
"""
from typing import Optional

import numpy as np

from .base_agent import BaseAgent


# ============================================================================
# Random Agent
# ============================================================================

class RandomAgent(BaseAgent):
    """
    Agent that selects actions uniformly at random.

    With ``reveal_bias`` it first decides between revealing and the
    other action kinds, so flags and activations do not dominate.
    """

    def __init__(
        self,
        board_height: int = 9,
        board_width: int = 9,
        seed: Optional[int] = None,
        reveal_bias: float = 0.8,
    ) -> None:
        """
        Initialize the random agent.

        Args:
            board_height: Number of rows in each board.
            board_width: Number of columns in each board.
            seed: Random seed for reproducibility.
            reveal_bias: Probability of choosing a reveal when one is valid.
        """
        super().__init__(board_height, board_width)
        self.rng = np.random.default_rng(seed)
        self.reveal_bias = reveal_bias

    def select_action(
        self,
        observation: np.ndarray,
        valid_actions: Optional[np.ndarray] = None,
    ) -> int:
        """
        Select a random valid action.

        Args:
            observation: (2, rows, cols) array of cell states.
            valid_actions: Optional mask of valid actions.

        Returns:
            Random action index from valid actions.
        """
        if valid_actions is None:
            valid_actions = self.get_valid_actions_from_obs(observation)

        valid_indices = np.where(valid_actions)[0]

        if len(valid_indices) == 0:
            # No valid actions, return any action (will be invalid)
            return 0

        reveals = valid_indices[valid_indices < self.total_cells]
        others = valid_indices[valid_indices >= self.total_cells]
        if len(reveals) and (
            not len(others) or self.rng.random() < self.reveal_bias
        ):
            return int(self.rng.choice(reveals))
        return int(self.rng.choice(others))
