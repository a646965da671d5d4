"""
Cooperative two-board Minesweeper rules engine.

Provides board generation, reveal/flag rules, the shared score and life
economy, special-cell activation and the turn/win/loss state machine.
"""
from .cell import Cell, CellContent, CellState, CellView
from .difficulty import Difficulty, EASY, MEDIUM, HARD, DIFFICULTIES, get_difficulty
from .questions import (
    Question,
    QuestionLevel,
    QuestionResult,
    QuestionSource,
    InMemoryQuestionBank,
    answer_presenter,
)
from .score_rules import ScoreOutcome, compute, possible_outcomes
from .board import Board
from .game import Game, GameState, MAX_LIVES
from .summary import GameSummary
from .session import GameSession
from .environment import CoopMinesweeperEnv, make_vec_env

__all__ = [
    "Cell",
    "CellContent",
    "CellState",
    "CellView",
    "Difficulty",
    "EASY",
    "MEDIUM",
    "HARD",
    "DIFFICULTIES",
    "get_difficulty",
    "Question",
    "QuestionLevel",
    "QuestionResult",
    "QuestionSource",
    "InMemoryQuestionBank",
    "answer_presenter",
    "ScoreOutcome",
    "compute",
    "possible_outcomes",
    "Board",
    "Game",
    "GameState",
    "MAX_LIVES",
    "GameSummary",
    "GameSession",
    "CoopMinesweeperEnv",
    "make_vec_env",
]
