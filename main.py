#!/usr/bin/env python3
"""
Minesweeper engine - Main entry point.

Usage:
    python main.py evaluate [--difficulty {easy,medium,hard}] [--games N]
    python main.py compare [--games N]
"""
import argparse
import logging
import sys
from pathlib import Path

# Add src to path for imports when running from a checkout
sys.path.insert(0, str(Path(__file__).parent / "src"))

from minesweeper import Difficulty
from simulation import Evaluator

DIFFICULTY_CHOICES = [difficulty.name.lower() for difficulty in Difficulty]


def evaluate(args: argparse.Namespace) -> None:
    """Evaluate the random baseline on one difficulty."""
    difficulty = Difficulty.from_name(args.difficulty)
    evaluator = Evaluator(difficulty, num_episodes=args.games, seed=args.seed)

    print(
        f"\nEvaluating Random on {difficulty.name} "
        f"({difficulty.rows}x{difficulty.cols}, {difficulty.mines} mines) "
        f"over {args.games} games..."
    )
    results = evaluator.evaluate()

    print("Results:")
    print(f"  Win rate: {results['win_rate']:.1%}")
    print(f"  Avg reward: {results['avg_reward']:.2f}")
    print(f"  Avg steps: {results['avg_steps']:.1f}")
    print(f"  Avg revealed: {results['avg_revealed']:.1f} cells")


def compare(args: argparse.Namespace) -> None:
    """Run the random baseline across every difficulty."""
    evaluator = Evaluator(num_episodes=args.games, seed=args.seed)
    results = evaluator.compare(
        {difficulty.name: difficulty for difficulty in Difficulty}
    )

    print("\n" + "=" * 50)
    print("Random Baseline by Difficulty")
    print("=" * 50)
    print(f"{'Difficulty':<20} {'Win Rate':<12} {'Avg Reward':<12} {'Avg Steps':<10}")
    print("-" * 50)

    for name, metrics in results.items():
        print(
            f"{name:<20} {metrics['win_rate']:>10.1%} "
            f"{metrics['avg_reward']:>10.2f} "
            f"{metrics['avg_steps']:>10.1f}"
        )


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(
        description="Minesweeper engine - play simulated games"
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Evaluate command
    eval_parser = subparsers.add_parser(
        "evaluate", help="Evaluate the random baseline"
    )
    eval_parser.add_argument(
        "--difficulty",
        choices=DIFFICULTY_CHOICES,
        default="easy",
        help="Difficulty preset",
    )
    eval_parser.add_argument(
        "--games", type=int, default=100, help="Number of games to play"
    )
    eval_parser.add_argument(
        "--seed", type=int, default=None, help="Random seed"
    )

    # Compare command
    compare_parser = subparsers.add_parser(
        "compare", help="Evaluate the random baseline on every difficulty"
    )
    compare_parser.add_argument(
        "--games", type=int, default=100, help="Number of games per difficulty"
    )
    compare_parser.add_argument(
        "--seed", type=int, default=None, help="Random seed"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    if args.command == "evaluate":
        evaluate(args)
    elif args.command == "compare":
        compare(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
