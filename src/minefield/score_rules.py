"""
Scoring table for answered questions.

Maps (game difficulty, question level, correctness) onto a score delta,
a life delta and a description. Some entries are a fair coin flip
between two outcomes; those are listed as two options and resolved with
the injected random source.
"""
import random
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from .difficulty import Difficulty
from .questions import QuestionLevel


# ============================================================================
# Outcome Types
# ============================================================================

@dataclass(frozen=True)
class ScoreOutcome:
    """Result of applying the scoring table."""

    score_delta: int
    life_delta: int
    description: str


def coin_flip(rng: random.Random) -> bool:
    """Fair coin: True with probability 1/2."""
    return rng.random() < 0.5


# (score, lives) per option; a second option means "OR" with equal odds
_Options = Tuple[Tuple[int, int], ...]

E, M, H, X = (
    QuestionLevel.EASY,
    QuestionLevel.MEDIUM,
    QuestionLevel.HARD,
    QuestionLevel.EXPERT,
)

SCORE_TABLE: Dict[Tuple[str, QuestionLevel, bool], _Options] = {
    # EASY game
    ("EASY", E, True): ((3, 1),),
    ("EASY", M, True): ((6, 0),),
    ("EASY", H, True): ((10, 0),),
    ("EASY", X, True): ((15, 2),),
    ("EASY", E, False): ((-3, 0), (0, 0)),
    ("EASY", M, False): ((-6, 0), (0, 0)),
    ("EASY", H, False): ((-10, 0),),
    ("EASY", X, False): ((-15, -1),),
    # MEDIUM game
    ("MEDIUM", E, True): ((8, 1),),
    ("MEDIUM", M, True): ((10, 1),),
    ("MEDIUM", H, True): ((15, 1),),
    ("MEDIUM", X, True): ((20, 2),),
    ("MEDIUM", E, False): ((-8, 0),),
    ("MEDIUM", M, False): ((-10, -1), (0, 0)),
    ("MEDIUM", H, False): ((-15, -1),),
    ("MEDIUM", X, False): ((-20, -1), (-20, -2)),
    # HARD game
    ("HARD", E, True): ((10, 1),),
    ("HARD", M, True): ((15, 1), (15, 2)),
    ("HARD", H, True): ((20, 2),),
    ("HARD", X, True): ((40, 3),),
    ("HARD", E, False): ((-10, -1),),
    ("HARD", M, False): ((-15, -1), (-15, -2)),
    ("HARD", H, False): ((-20, -2),),
    ("HARD", X, False): ((-40, -3),),
}

# Reward effects applied outside the score/life economy
SPECIAL_EFFECTS: Dict[Tuple[str, QuestionLevel, bool], str] = {
    ("EASY", M, True): "reveal 1 mine",
    ("EASY", H, True): "reveal random 3x3",
}


# ============================================================================
# Lookup
# ============================================================================

def _describe_option(score: int, lives: int) -> str:
    if score == 0 and lives == 0:
        return "nothing"
    parts = [f"{score:+d} pts"]
    if lives:
        noun = "life" if abs(lives) == 1 else "lives"
        parts.append(f"{lives:+d} {noun}")
    return ", ".join(parts)


def _table_key(
    difficulty: Difficulty, level: QuestionLevel, correct: bool
) -> Tuple[str, QuestionLevel, bool]:
    key = (difficulty.name.upper(), level, bool(correct))
    if key not in SCORE_TABLE:
        raise ValueError(f"No scoring rules for difficulty {difficulty.name!r}")
    return key


def possible_outcomes(
    difficulty: Difficulty, level: QuestionLevel, correct: bool
) -> Tuple[ScoreOutcome, ...]:
    """
    List every outcome the table allows for this answer.

    Returns:
        One outcome for fixed entries, two for coin-flip entries.
    """
    key = _table_key(difficulty, level, correct)
    options = SCORE_TABLE[key]
    verdict = "Correct" if correct else "Wrong"
    labels = [_describe_option(score, lives) for score, lives in options]
    header = f"{verdict} {level.name}: "
    if len(options) == 1:
        header += labels[0] + "."
    else:
        header += " OR ".join(f"({label})" for label in labels) + "."
    effect = SPECIAL_EFFECTS.get(key)
    if effect:
        header += f" Special effect: {effect} (Easy game)."

    outcomes = []
    for (score, lives), label in zip(options, labels):
        description = header
        if len(options) > 1:
            description += f" Chosen: {label}."
        outcomes.append(ScoreOutcome(score, lives, description))
    return tuple(outcomes)


def compute(
    difficulty: Difficulty,
    level: QuestionLevel,
    correct: bool,
    rng: Optional[random.Random] = None,
) -> ScoreOutcome:
    """
    Resolve the table entry for an answered question.

    Args:
        difficulty: Game difficulty (table selected by its name).
        level: Level of the answered question.
        correct: Whether the answer was correct.
        rng: Random source for coin-flip entries.

    Returns:
        The chosen outcome.
    """
    outcomes = possible_outcomes(difficulty, level, correct)
    if len(outcomes) == 1:
        return outcomes[0]
    rng = rng or random.Random()
    return outcomes[0] if coin_flip(rng) else outcomes[1]
