"""
Base agent interface for the cooperative Minesweeper environment.

Defines the abstract interface that all agents must implement.
"""
from abc import ABC, abstractmethod
from typing import Optional, Tuple

import numpy as np


# ============================================================================
# Base Agent Interface
# ============================================================================

class BaseAgent(ABC):
    """
    Abstract base class for agents.

    All agents must implement the select_action method to choose
    an encoded (kind, cell) action for the current player.
    """

    NUM_ACTION_KINDS = 3

    def __init__(self, board_height: int, board_width: int) -> None:
        """
        Initialize the agent.

        Args:
            board_height: Number of rows in each board.
            board_width: Number of columns in each board.
        """
        self.board_height = board_height
        self.board_width = board_width
        self.total_cells = board_height * board_width
        self.total_actions = self.NUM_ACTION_KINDS * self.total_cells

    @abstractmethod
    def select_action(
        self,
        observation: np.ndarray,
        valid_actions: Optional[np.ndarray] = None,
    ) -> int:
        """
        Select an action based on the current observation.

        Args:
            observation: (2, rows, cols) array of cell states.
            valid_actions: Optional mask of valid actions.

        Returns:
            Action index (kind * cells + row * width + col).
        """
        pass

    def action_to_position(self, action: int) -> Tuple[int, int, int]:
        """Convert flat action index to (kind, row, col)."""
        kind, index = divmod(action, self.total_cells)
        row, col = divmod(index, self.board_width)
        return kind, row, col

    def position_to_action(self, kind: int, row: int, col: int) -> int:
        """Convert (kind, row, col) to flat action index."""
        return kind * self.total_cells + row * self.board_width + col

    def get_valid_actions_from_obs(self, observation: np.ndarray) -> np.ndarray:
        """
        Get a reveal-only action mask from the observation.

        Without the environment's mask the agent cannot know which
        board is active, so a hidden cell on either board is allowed.

        Args:
            observation: (2, rows, cols) array of cell states.

        Returns:
            Boolean mask where True = valid action.
        """
        hidden = np.any(observation == -1, axis=0).flatten()
        mask = np.zeros(self.total_actions, dtype=bool)
        mask[:self.total_cells] = hidden
        return mask

    def reset(self) -> None:
        """Reset agent state for new episode."""
        pass
