"""
Closed-form expectations used to cross-check the Monte Carlo estimates.

If the key is a uniform shuffle of distribution d and the guess is drawn
independently from distribution g, question i matches with probability
sum_k (d[k] / n) * (g[k] / n), so the expected grade is
sum_k d[k] * g[k] / n.
"""

from exam_simulator.core.data_models import (
    DEFAULT_SHAPE,
    Distribution,
    Exam,
    ExamShape,
)
from exam_simulator.core.ranking import rank
from exam_simulator.strategies.base import OracleStrategy, Strategy
from exam_simulator.strategies.heuristics import (
    eliminate_and_scale,
    eliminate_and_scale_distribution,
    guess_common,
    random_guess,
)


def expected_grade(
    truth: Distribution,
    guess: Distribution,
    shape: ExamShape = DEFAULT_SHAPE,
) -> float:
    """Expected grade of an independent guess drawn from `guess` against a key from `truth`."""
    truth.validate(shape)
    guess.validate(shape)
    return float(truth.as_array() @ guess.as_array()) / shape.exam_length


def guess_distribution(
    strategy: Strategy,
    distribution: Distribution,
    shape: ExamShape = DEFAULT_SHAPE,
) -> Distribution | None:
    """
    Distribution of the guesses a built-in strategy draws from.

    Returns None for the oracle and for strategies it does not know.
    """
    if isinstance(strategy, OracleStrategy):
        return None
    if strategy.guess_fn is random_guess:
        return distribution
    if strategy.guess_fn is guess_common:
        return Exam.uniform(rank(distribution)[0], shape).distribution()
    if strategy.guess_fn is eliminate_and_scale:
        return eliminate_and_scale_distribution(distribution, shape)
    return None


def expected_grade_for(
    strategy: Strategy,
    distribution: Distribution,
    shape: ExamShape = DEFAULT_SHAPE,
) -> float | None:
    """Exact expected grade of a strategy, or None if unknown."""
    if isinstance(strategy, OracleStrategy):
        distribution.validate(shape)
        return float(shape.exam_length)
    guessed = guess_distribution(strategy, distribution, shape)
    if guessed is None:
        return None
    return expected_grade(distribution, guessed, shape)
