"""
Question cell activator.

Fetches an unused question, presents it through the injected callback
and applies the scoring table to the answer.
"""
from typing import TYPE_CHECKING, Optional

from ..cell import CellContent
from ..questions import Question, QuestionLevel, QuestionResult
from .base_activator import ActivationResult, Snapshot, SpecialCellActivator

if TYPE_CHECKING:
    from ..board import Board
    from ..game import Game


# ============================================================================
# Question Activator
# ============================================================================

class QuestionActivator(SpecialCellActivator):
    """
    Activator for question cells.

    On an Easy game, a correct Medium question reveals one mine and a
    correct Hard question reveals a 3x3 area, on top of the points.
    """

    content = CellContent.QUESTION

    def __init__(self, game: "Game", board: "Board") -> None:
        super().__init__(game, board)
        self.question: Optional[Question] = None

    def precheck(self) -> Optional[str]:
        if self.game.question_source is None:
            return "Question system is not available."
        if self.game.question_presenter is None:
            return "Question system is not available."
        return None

    def effect(self) -> ActivationResult:
        self.question = self.game.question_source.fetch_unused_question(
            self.game.difficulty
        )
        if self.question is None:
            return ActivationResult(False, False, "No questions available.")

        answer = self.game.question_presenter(self.question)
        if answer == QuestionResult.SKIPPED:
            return ActivationResult(
                True, False,
                "You didn't answer the question.\n"
                "Activation cost was deducted.",
            )

        is_correct = answer == QuestionResult.CORRECT
        outcome = self.game.process_question_answer(
            self.question.level, is_correct
        )
        verdict = "Correct!" if is_correct else "Wrong!"
        return ActivationResult(
            True, is_correct, f"{verdict}\n{outcome.description}"
        )

    def post_effect(self, result: ActivationResult) -> str:
        if self.question is None or not result.was_correct:
            return ""
        if self.game.difficulty.name.upper() != "EASY":
            return ""

        if self.question.level == QuestionLevel.MEDIUM:
            if self.board.reveal_random_mine() is not None:
                return "\nSpecial effect: revealed 1 mine (reward)."
        elif self.question.level == QuestionLevel.HARD:
            if self.board.reveal_best_3x3_area() is not None:
                return "\nSpecial effect: revealed 3x3 area (reward)."
        return ""

    def build_message(
        self,
        result: ActivationResult,
        before: Snapshot,
        after: Snapshot,
        extra: str,
    ) -> str:
        if not result.succeeded:
            return (
                f"{result.detail}\n"
                f"Activation cost: -{self.cost} pts"
            )
        return (
            f"{result.detail}\n"
            f"Activation cost: -{self.cost} pts"
            f"{extra}\n"
            f"Score: {before.score} → {after.score}\n"
            f"Lives: {before.lives} → {after.lives}"
        )
