"""
Special-cell activation protocol.

Defines the interface every special-cell variant implements and the
fixed activation sequence that drives it.
"""
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, NamedTuple, Optional

from ..cell import CellContent, SPECIAL_CONTENTS

if TYPE_CHECKING:
    from ..board import Board
    from ..game import Game

logger = logging.getLogger(__name__)


# ============================================================================
# Result Types
# ============================================================================

@dataclass(frozen=True)
class ActivationResult:
    """
    Outcome of a variant's effect step.

    Attributes:
        succeeded: False if the effect could not run (e.g. no question).
        was_correct: Whether a question was answered correctly.
        detail: Explanation lines for the players.
    """

    succeeded: bool
    was_correct: bool = False
    detail: str = ""


class Snapshot(NamedTuple):
    """Shared economy at one point of an activation."""

    score: int
    lives: int


# ============================================================================
# Activator Interface
# ============================================================================

class SpecialCellActivator(ABC):
    """
    Abstract base class for special-cell variants.

    Variants supply only the variable steps; the order of steps is
    fixed by run_activation.
    """

    content: CellContent = CellContent.EMPTY

    def __init__(self, game: "Game", board: "Board") -> None:
        """
        Initialize the activator.

        Args:
            game: Game whose shared economy pays and receives.
            board: Board holding the activated cell.
        """
        self.game = game
        self.board = board
        self.cost = game.difficulty.activation_cost

    @property
    def kind(self) -> str:
        """Lower-case name of the handled content."""
        return self.content.name.lower()

    def precheck(self) -> Optional[str]:
        """
        Variant-specific preconditions.

        Returns:
            An error message to block activation, or None to continue.
        """
        return None

    @abstractmethod
    def effect(self) -> ActivationResult:
        """Run the variable core step."""

    def post_effect(self, result: ActivationResult) -> str:
        """
        Optional extra behaviour after the effect.

        Returns:
            Extra text for the outcome message.
        """
        return ""

    @abstractmethod
    def build_message(
        self,
        result: ActivationResult,
        before: Snapshot,
        after: Snapshot,
        extra: str,
    ) -> str:
        """Compose the outcome message shown to the players."""


# ============================================================================
# Activation Sequence
# ============================================================================

def _snapshot(game: "Game") -> Snapshot:
    return Snapshot(game.shared_score, game.shared_lives)


def run_activation(activator: SpecialCellActivator) -> bool:
    """
    Run the fixed activation sequence for a special cell.

    The activation cost is paid as soon as the preconditions pass,
    even if the effect then fails or the question is skipped.

    Args:
        activator: Variant supplying the variable steps.

    Returns:
        True if the preconditions passed and the effect succeeded.
    """
    game = activator.game

    if activator.content not in SPECIAL_CONTENTS:
        return False

    if game.shared_score < activator.cost:
        game.set_last_action_message(
            f"You need at least {activator.cost} points to activate "
            f"this {activator.kind} cell."
        )
        return False

    error = activator.precheck()
    if error is not None:
        game.set_last_action_message(error)
        return False

    before = _snapshot(game)
    game.add_score(-activator.cost)

    result = activator.effect()
    extra = activator.post_effect(result)

    after = _snapshot(game)
    game.set_last_action_message(
        activator.build_message(result, before, after, extra)
    )
    logger.debug(
        "Activated %s cell: succeeded=%s score %d -> %d, lives %d -> %d",
        activator.kind, result.succeeded,
        before.score, after.score, before.lives, after.lives,
    )
    return result.succeeded
