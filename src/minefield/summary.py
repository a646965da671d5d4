"""
Finished-game summary handed to history/reporting collaborators.
"""
from dataclasses import asdict, dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class GameSummary:
    """
    Record of one finished game.

    Attributes:
        difficulty: Name of the difficulty played.
        result: "WON" or "LOST".
        final_score: Shared score after end-of-game bonuses.
        final_lives: Shared lives left.
        questions_answered: Questions answered (skips excluded).
        correct_answers: Questions answered correctly.
        duration_seconds: Play time measured by the caller.
    """

    difficulty: str
    result: str
    final_score: int
    final_lives: int
    questions_answered: int
    correct_answers: int
    duration_seconds: int

    @property
    def won(self) -> bool:
        return self.result == "WON"

    @property
    def accuracy(self) -> float:
        """Percentage of correct answers (0 when nothing was answered)."""
        if self.questions_answered <= 0:
            return 0.0
        return self.correct_answers * 100.0 / self.questions_answered

    @property
    def formatted_accuracy(self) -> str:
        if self.questions_answered <= 0:
            return "-"
        return f"{self.accuracy:.0f}%"

    @property
    def formatted_duration(self) -> str:
        """Duration as mm:ss."""
        minutes, seconds = divmod(max(self.duration_seconds, 0), 60)
        return f"{minutes:02d}:{seconds:02d}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        data = asdict(self)
        data["accuracy"] = self.accuracy
        return data
