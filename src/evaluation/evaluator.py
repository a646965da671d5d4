"""
Evaluation module for cooperative Minesweeper agents.

Plays complete games through the Gymnasium environment and aggregates
the finished-game summaries.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
import time

from minefield import CoopMinesweeperEnv, Difficulty, EASY, GameSummary, QuestionSource

from agents.base_agent import BaseAgent


# ============================================================================
# Evaluation Statistics
# ============================================================================

@dataclass
class EvaluationStats:
    """Accumulated statistics over evaluated games."""

    summaries: List[GameSummary] = field(default_factory=list)
    total_reward: float = 0.0
    total_steps: int = 0
    unfinished: int = 0

    @property
    def games(self) -> int:
        return len(self.summaries) + self.unfinished

    @property
    def wins(self) -> int:
        return sum(1 for summary in self.summaries if summary.won)

    @property
    def win_rate(self) -> float:
        return self.wins / self.games if self.games else 0.0

    @property
    def avg_score(self) -> float:
        if not self.summaries:
            return 0.0
        return sum(s.final_score for s in self.summaries) / len(self.summaries)

    @property
    def accuracy(self) -> float:
        """Answer accuracy over every finished game, in percent."""
        answered = sum(s.questions_answered for s in self.summaries)
        correct = sum(s.correct_answers for s in self.summaries)
        return correct * 100.0 / answered if answered else 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "games": self.games,
            "wins": self.wins,
            "unfinished": self.unfinished,
            "win_rate": self.win_rate,
            "avg_score": self.avg_score,
            "avg_reward": self.total_reward / self.games if self.games else 0.0,
            "avg_steps": self.total_steps / self.games if self.games else 0.0,
            "accuracy": self.accuracy,
        }


# ============================================================================
# Evaluator
# ============================================================================

class Evaluator:
    """
    Evaluate and compare agents on full cooperative games.

    Provides standardized evaluation across different agent types.
    """

    def __init__(
        self,
        difficulty: Difficulty = EASY,
        num_episodes: int = 100,
        max_steps: int = 2000,
        question_source: Optional[QuestionSource] = None,
        answer_accuracy: float = 0.5,
        seed: Optional[int] = None,
    ) -> None:
        """
        Initialize the evaluator.

        Args:
            difficulty: Difficulty of every evaluated game.
            num_episodes: Number of evaluation games.
            max_steps: Maximum steps per game before giving up.
            question_source: Questions for question cells.
            answer_accuracy: Chance that simulated players answer right.
            seed: Seed of the first game; later games follow from it.
        """
        self.difficulty = difficulty
        self.num_episodes = num_episodes
        self.max_steps = max_steps
        self.question_source = question_source
        self.answer_accuracy = answer_accuracy
        self.seed = seed

    def evaluate(self, agent: BaseAgent) -> EvaluationStats:
        """
        Evaluate a single agent.

        Args:
            agent: Agent to evaluate.

        Returns:
            Statistics over all games.
        """
        env = CoopMinesweeperEnv(
            difficulty=self.difficulty,
            question_source=self.question_source,
            answer_accuracy=self.answer_accuracy,
        )
        stats = EvaluationStats()

        for episode in range(self.num_episodes):
            seed = self.seed if episode == 0 else None
            observation, _ = env.reset(seed=seed)
            agent.reset()
            started = time.monotonic()

            for _ in range(self.max_steps):
                valid_actions = env.get_action_mask()
                action = agent.select_action(observation, valid_actions)
                observation, reward, terminated, truncated, _ = env.step(action)

                stats.total_reward += float(reward)
                stats.total_steps += 1

                if terminated or truncated:
                    break

            summary = env.game.summarize(int(time.monotonic() - started))
            if summary is None:
                stats.unfinished += 1
            else:
                stats.summaries.append(summary)

        return stats

    def compare(
        self, agents: Dict[str, BaseAgent]
    ) -> Dict[str, Dict[str, Any]]:
        """
        Compare multiple agents.

        Args:
            agents: Dictionary of agent_name -> agent.

        Returns:
            Dictionary of agent_name -> evaluation metrics.
        """
        return {
            name: self.evaluate(agent).to_dict()
            for name, agent in agents.items()
        }
