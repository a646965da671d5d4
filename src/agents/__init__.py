"""
Agents for the cooperative Minesweeper environment.

- RandomAgent: baseline random selection
"""
from .base_agent import BaseAgent
from .random_agent import RandomAgent

__all__ = [
    "BaseAgent",
    "RandomAgent",
]
