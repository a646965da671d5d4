"""
Special cell activation.

Provides the fixed activation sequence and its two variants:
- QuestionActivator: quiz-driven reward or penalty
- SurpriseActivator: coin-flip reward or penalty
"""
from .base_activator import (
    ActivationResult,
    Snapshot,
    SpecialCellActivator,
    run_activation,
)
from .question_activator import QuestionActivator
from .surprise_activator import SurpriseActivator
from .factory import ACTIVATORS, create_activator

__all__ = [
    "ActivationResult",
    "Snapshot",
    "SpecialCellActivator",
    "run_activation",
    "QuestionActivator",
    "SurpriseActivator",
    "ACTIVATORS",
    "create_activator",
]
