"""
Pytest configuration and shared fixtures.
"""
import dataclasses
import random
import pytest
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minefield import (
    Cell,
    CellContent,
    EASY,
    Game,
    InMemoryQuestionBank,
    Question,
    QuestionLevel,
    QuestionResult,
)


# ============================================================================
# Random Sources
# ============================================================================

class FixedCoin(random.Random):
    """Random source whose coin flips always land the same way."""

    def __init__(self, heads: bool) -> None:
        super().__init__(0)
        self.heads = heads

    def random(self) -> float:
        return 0.0 if self.heads else 0.99

    # Integer draws (placement, choice, shuffle) stay on the seeded generator
    def getrandbits(self, k: int) -> int:
        return super().getrandbits(k)


@pytest.fixture
def heads_rng() -> FixedCoin:
    """Coin flips pick the first option (good surprise)."""
    return FixedCoin(True)


@pytest.fixture
def tails_rng() -> FixedCoin:
    """Coin flips pick the second option (bad surprise)."""
    return FixedCoin(False)


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden empty cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(content=CellContent.MINE)


@pytest.fixture
def question_cell() -> Cell:
    """Create a revealed question cell."""
    cell = Cell(content=CellContent.QUESTION)
    cell.reveal()
    return cell


# ============================================================================
# Layouts
# ============================================================================

# Two separate mines. Revealing (0,0) opens 16 cells; (4,4) opens 6 more;
# (2,4) is then the last safe cell.
CASCADE_LAYOUT = [
    ".....",
    ".....",
    "...*.",
    ".....",
    "*....",
]


# ============================================================================
# Game Fixtures
# ============================================================================

@pytest.fixture
def easy_game() -> Game:
    """EASY game with a seeded random source."""
    return Game(EASY, random.Random(7))


@pytest.fixture
def small_difficulty():
    """EASY rules on a 5x5 board with 2 mines and no special cells."""
    return dataclasses.replace(
        EASY, rows=5, cols=5, mines=2, question_cells=0, surprise_cells=0
    )


@pytest.fixture
def small_game(small_difficulty) -> Game:
    """Small EASY game with board 1 set to CASCADE_LAYOUT."""
    game = Game(small_difficulty, random.Random(3))
    game.board1.load_layout(CASCADE_LAYOUT)
    return game


# ============================================================================
# Question Fixtures
# ============================================================================

def make_question(
    question_id: int = 1, level: QuestionLevel = QuestionLevel.EASY
) -> Question:
    return Question(
        question_id, f"Question {question_id}?",
        ("alpha", "beta", "gamma", "delta"), "B", level,
    )


@pytest.fixture
def question_bank() -> InMemoryQuestionBank:
    """Bank with one question per level."""
    return InMemoryQuestionBank(
        [make_question(index + 1, level) for index, level in enumerate(QuestionLevel)],
        rng=random.Random(1),
    )


class ScriptedPresenter:
    """Presenter that replays fixed results and records questions."""

    def __init__(self, *results: QuestionResult) -> None:
        self.results = list(results)
        self.asked = []

    def __call__(self, question: Question) -> QuestionResult:
        self.asked.append(question)
        return self.results.pop(0) if self.results else QuestionResult.SKIPPED


@pytest.fixture
def question_factory():
    """Build questions with a given id and level."""
    return make_question


@pytest.fixture
def presenter_cls():
    """The scripted presenter class."""
    return ScriptedPresenter
