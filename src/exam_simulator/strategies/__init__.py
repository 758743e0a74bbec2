"""
Guessing strategies for an exam with a known answer distribution.
"""

from exam_simulator.strategies.base import (
    GuessStrategy,
    OracleStrategy,
    Strategy,
    StrategyFn,
)
from exam_simulator.strategies.heuristics import (
    eliminate_and_scale,
    eliminate_and_scale_distribution,
    guess_common,
    random_guess,
)
from exam_simulator.strategies.registry import (
    ELIMINATE_AND_SCALE,
    GUESS_COMMON,
    RANDOM_EXAM,
    STRATEGIES,
    TRUE_CHEATER,
    default_strategies,
    get_available_strategies,
    get_strategy,
)

__all__ = [
    # Types
    "GuessStrategy",
    "OracleStrategy",
    "Strategy",
    "StrategyFn",
    # Heuristics
    "eliminate_and_scale",
    "eliminate_and_scale_distribution",
    "guess_common",
    "random_guess",
    # Registry
    "ELIMINATE_AND_SCALE",
    "GUESS_COMMON",
    "RANDOM_EXAM",
    "STRATEGIES",
    "TRUE_CHEATER",
    "default_strategies",
    "get_available_strategies",
    "get_strategy",
]
