"""
Question types and the question-source boundary.

The engine never stores or loads questions itself. It asks a
QuestionSource for one unused question and hands it to a presenter
callback that reports whether the players answered correctly.
"""
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Dict, Iterable, List, Optional, Set, Tuple

from .difficulty import Difficulty


OPTION_LETTERS = ("A", "B", "C", "D")


# ============================================================================
# Enums
# ============================================================================

class QuestionLevel(Enum):
    """Difficulty tag carried by a question."""

    EASY = auto()
    MEDIUM = auto()
    HARD = auto()
    EXPERT = auto()

    @classmethod
    def from_tag(cls, tag: str) -> "QuestionLevel":
        """
        Parse a level tag such as "hard" or "3".

        Numeric tags map 1-4 onto EASY-EXPERT.

        Raises:
            ValueError: If the tag is not recognised.
        """
        text = str(tag).strip().upper()
        if text.isdigit():
            number = int(text)
            members = list(cls)
            if 1 <= number <= len(members):
                return members[number - 1]
        elif text in cls.__members__:
            return cls[text]
        raise ValueError(f"Unknown question level {tag!r}")


class QuestionResult(Enum):
    """Outcome reported by the presenter."""

    CORRECT = auto()
    WRONG = auto()
    SKIPPED = auto()


# ============================================================================
# Question
# ============================================================================

@dataclass(frozen=True)
class Question:
    """
    A multiple-choice question with four options.

    Attributes:
        id: Unique identifier within a source.
        text: Prompt shown to the players.
        options: The four answer texts, in A-D order.
        correct_option: Letter of the correct option.
        level: Difficulty tag used by the scoring table.
    """

    id: int
    text: str
    options: Tuple[str, str, str, str]
    correct_option: str
    level: QuestionLevel

    def __post_init__(self) -> None:
        """Normalise and validate fields."""
        if len(self.options) != len(OPTION_LETTERS):
            raise ValueError("A question needs exactly 4 options")
        object.__setattr__(self, "options", tuple(self.options))
        object.__setattr__(
            self, "correct_option", _normalise_option(self.correct_option)
        )

    @property
    def correct_answer(self) -> str:
        """Text of the correct option."""
        return self.options[OPTION_LETTERS.index(self.correct_option)]

    def is_correct(self, answer: str) -> bool:
        """
        Evaluate an answer given as a letter (A-D) or a number (1-4).

        Raises:
            ValueError: If the answer is not a valid option.
        """
        return _normalise_option(answer) == self.correct_option


def _normalise_option(option: str) -> str:
    """Map "b", "B" or "2" onto "B"."""
    text = str(option).strip().upper()
    if text in ("1", "2", "3", "4"):
        return OPTION_LETTERS[int(text) - 1]
    if text not in OPTION_LETTERS:
        raise ValueError(f"Invalid option {option!r}")
    return text


# ============================================================================
# Presenter
# ============================================================================

QuestionPresenter = Callable[[Question], QuestionResult]


def answer_presenter(
    choose: Callable[[Question], Optional[str]],
) -> QuestionPresenter:
    """
    Build a presenter from a callable that picks an option.

    Args:
        choose: Returns the chosen option letter, or None to skip.

    Returns:
        Presenter that grades the choice against the question.
    """
    def present(question: Question) -> QuestionResult:
        answer = choose(question)
        if answer is None:
            return QuestionResult.SKIPPED
        if question.is_correct(answer):
            return QuestionResult.CORRECT
        return QuestionResult.WRONG

    return present


# ============================================================================
# Question Sources
# ============================================================================

class QuestionSource(ABC):
    """Supplies questions to the engine."""

    @abstractmethod
    def fetch_unused_question(
        self, difficulty: Difficulty
    ) -> Optional[Question]:
        """
        Fetch one question not yet used in the current game.

        Args:
            difficulty: Difficulty of the running game.

        Returns:
            A question, or None when nothing is available.
        """

    def reset(self) -> None:
        """Forget which questions were used (new game)."""


class InMemoryQuestionBank(QuestionSource):
    """
    Question source backed by a plain list.

    Questions of every level are eligible for every game difficulty;
    the scoring table weighs the level against the game difficulty.
    When every question has been used, the pool is recycled unless
    ``recycle`` is False.
    """

    def __init__(
        self,
        questions: Iterable[Question] = (),
        rng: Optional[random.Random] = None,
        recycle: bool = True,
    ) -> None:
        self._questions: Dict[int, Question] = {}
        self._used: Set[int] = set()
        self.rng = rng or random.Random()
        self.recycle = recycle
        for question in questions:
            self.add(question)

    def __len__(self) -> int:
        return len(self._questions)

    @property
    def questions(self) -> List[Question]:
        """All questions in insertion order."""
        return list(self._questions.values())

    def add(self, question: Question) -> None:
        """Add a question, replacing any with the same id."""
        self._questions[question.id] = question

    def remove(self, question_id: int) -> bool:
        """Remove a question; returns False if the id is unknown."""
        self._used.discard(question_id)
        return self._questions.pop(question_id, None) is not None

    def fetch_unused_question(
        self, difficulty: Difficulty
    ) -> Optional[Question]:
        pool = [q for q in self._questions.values() if q.id not in self._used]
        if not pool and self.recycle:
            self._used.clear()
            pool = list(self._questions.values())
        if not pool:
            return None
        chosen = self.rng.choice(pool)
        self._used.add(chosen.id)
        return chosen

    def reset(self) -> None:
        self._used.clear()
