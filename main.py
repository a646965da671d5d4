#!/usr/bin/env python3
"""
Co-op Minesweeper - Main entry point.

Usage:
    python main.py simulate [--difficulty {easy,medium,hard}] [--games N]
    python main.py watch [--difficulty {easy,medium,hard}] [--delay S]
"""
import argparse
import sys
import time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent / "src"))

from minefield import (  # noqa: E402
    CoopMinesweeperEnv,
    InMemoryQuestionBank,
    Question,
    QuestionLevel,
    get_difficulty,
)
from agents import RandomAgent  # noqa: E402
from evaluation import Evaluator  # noqa: E402


SAMPLE_QUESTIONS = (
    Question(1, "How many cells surround an interior cell?",
             ("4", "6", "8", "9"), "C", QuestionLevel.EASY),
    Question(2, "Which shape is a Minesweeper cell?",
             ("Square", "Hexagon", "Triangle", "Circle"), "A", QuestionLevel.EASY),
    Question(3, "What does a revealed 0 cell trigger?",
             ("Nothing", "A flood fill", "A flag", "A mine"), "B", QuestionLevel.MEDIUM),
    Question(4, "What is 2 to the power of 10?",
             ("512", "1000", "1024", "2048"), "C", QuestionLevel.MEDIUM),
    Question(5, "Which traversal uses a FIFO queue?",
             ("DFS", "BFS", "Inorder", "Postorder"), "B", QuestionLevel.HARD),
    Question(6, "Which design pattern fixes an algorithm's skeleton?",
             ("Observer", "Factory", "Template method", "Singleton"), "C", QuestionLevel.HARD),
    Question(7, "Minimum mines for an 8 on a board?",
             ("7", "8", "9", "It cannot happen"), "B", QuestionLevel.EXPERT),
    Question(8, "Is deciding Minesweeper consistency NP-complete?",
             ("Yes", "No", "Unknown", "Only on hex grids"), "A", QuestionLevel.EXPERT),
)


def simulate(args: argparse.Namespace) -> None:
    """Play many games with the random agent and print the results."""
    difficulty = get_difficulty(args.difficulty)
    questions = None if args.no_questions else InMemoryQuestionBank(SAMPLE_QUESTIONS)
    evaluator = Evaluator(
        difficulty=difficulty,
        num_episodes=args.games,
        question_source=questions,
        answer_accuracy=args.accuracy,
        seed=args.seed,
    )
    agent = RandomAgent(difficulty.rows, difficulty.cols, seed=args.seed)

    print(f"Simulating {args.games} {difficulty.name} games...")
    results = evaluator.evaluate(agent).to_dict()

    print("Results for Random agent:")
    print(f"  Win rate: {results['win_rate']:.1%}")
    print(f"  Avg score: {results['avg_score']:.1f}")
    print(f"  Avg steps: {results['avg_steps']:.1f}")
    print(f"  Answer accuracy: {results['accuracy']:.0f}%")
    if results["unfinished"]:
        print(f"  Unfinished games: {results['unfinished']}")


def watch(args: argparse.Namespace) -> None:
    """Render one game played by the random agent."""
    difficulty = get_difficulty(args.difficulty)
    env = CoopMinesweeperEnv(
        difficulty=difficulty,
        render_mode="ansi",
        question_source=InMemoryQuestionBank(SAMPLE_QUESTIONS),
    )
    agent = RandomAgent(difficulty.rows, difficulty.cols, seed=args.seed)

    obs, _ = env.reset(seed=args.seed)
    print(env.render())
    done = False
    step = 0
    while not done and step < args.max_steps:
        action = agent.select_action(obs, env.get_action_mask())
        kind, row, col = env.decode_action(action)
        obs, reward, terminated, truncated, info = env.step(action)
        done = terminated or truncated
        step += 1

        print(f"\n=== Step {step} | {('reveal', 'flag', 'activate')[kind]} ({row}, {col}) | reward {reward:+.1f} ===")
        print(env.render())
        time.sleep(args.delay)

    summary = env.game.summarize(step)
    if summary is not None:
        print(f"\n*** {summary.result} with {summary.final_score} points ***")


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(
        description="Co-op Minesweeper - simulate and watch games"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    simulate_parser = subparsers.add_parser(
        "simulate", help="Play many games with a random agent"
    )
    simulate_parser.add_argument(
        "--difficulty", default="easy", choices=["easy", "medium", "hard"]
    )
    simulate_parser.add_argument(
        "--games", type=int, default=100, help="Number of games to play"
    )
    simulate_parser.add_argument(
        "--accuracy", type=float, default=0.5,
        help="Chance that a question is answered correctly",
    )
    simulate_parser.add_argument(
        "--no-questions", action="store_true",
        help="Play without a question bank",
    )
    simulate_parser.add_argument("--seed", type=int, default=None)

    watch_parser = subparsers.add_parser("watch", help="Watch one game")
    watch_parser.add_argument(
        "--difficulty", default="easy", choices=["easy", "medium", "hard"]
    )
    watch_parser.add_argument(
        "--delay", type=float, default=0.3, help="Delay between moves"
    )
    watch_parser.add_argument("--max-steps", type=int, default=500)
    watch_parser.add_argument("--seed", type=int, default=None)

    args = parser.parse_args()

    if args.command == "simulate":
        simulate(args)
    elif args.command == "watch":
        watch(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
