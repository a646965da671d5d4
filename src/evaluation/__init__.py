"""
Evaluation module for cooperative Minesweeper agents.

Plays full games and aggregates finished-game summaries.
"""
from .evaluator import EvaluationStats, Evaluator

__all__ = [
    "EvaluationStats",
    "Evaluator",
]
