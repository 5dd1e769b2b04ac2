"""
Simulation module for the Minesweeper engine.

Plays batches of random games and aggregates outcome statistics.
"""
from .evaluator import Evaluator

__all__ = [
    "Evaluator",
]
