"""
Surprise cell activator: a fair coin decides between reward and penalty.
"""
from ..cell import CellContent
from ..score_rules import coin_flip
from .base_activator import ActivationResult, Snapshot, SpecialCellActivator


class SurpriseActivator(SpecialCellActivator):
    """Activator for surprise cells."""

    content = CellContent.SURPRISE

    def effect(self) -> ActivationResult:
        value = self.game.difficulty.surprise_value
        self.game.record_surprise_opened()

        if coin_flip(self.game.rng):
            self.game.add_score(value)
            self.game.add_lives(1)
            return ActivationResult(
                True, False,
                f"Surprise result: GOOD\nReward: +{value} pts, +1 life.",
            )

        self.game.add_score(-value)
        self.game.deduct_lives(1)
        return ActivationResult(
            True, False,
            f"Surprise result: BAD\nPenalty: -{value} pts, -1 life.",
        )

    def build_message(
        self,
        result: ActivationResult,
        before: Snapshot,
        after: Snapshot,
        extra: str,
    ) -> str:
        return (
            "Surprise activated!\n"
            f"Activation cost: -{self.cost} pts\n"
            f"{result.detail}{extra}\n"
            f"Score: {before.score} → {after.score}\n"
            f"Lives: {before.lives} → {after.lives}"
        )
