"""
Strategy types.

A strategy is either a guessing function that only sees the answer
distribution, or the oracle that is handed the key itself. The oracle is
its own type so the engine never has to call a function that secretly
copies the key.
"""

from collections.abc import Callable
from dataclasses import dataclass

from numpy.random import Generator

from exam_simulator.core.data_models import Distribution, Exam, ExamShape

StrategyFn = Callable[[Distribution, ExamShape, Generator], Exam]


@dataclass(frozen=True)
class GuessStrategy:
    """A strategy that produces a guess from the distribution alone."""

    name: str
    guess_fn: StrategyFn

    def guess(
        self, distribution: Distribution, shape: ExamShape, rng: Generator
    ) -> Exam:
        return self.guess_fn(distribution, shape, rng)


@dataclass(frozen=True)
class OracleStrategy:
    """Reference upper bound: the guess is the key."""

    name: str = "TrueCheater"


Strategy = GuessStrategy | OracleStrategy
