"""
Guessing heuristics that use only the known answer distribution.
"""

from numpy.random import Generator

from exam_simulator.core.data_models import (
    DEFAULT_SHAPE,
    Distribution,
    Exam,
    ExamShape,
)
from exam_simulator.core.ranking import rank
from exam_simulator.generation.generators import random_exam


def random_guess(
    distribution: Distribution,
    shape: ExamShape = DEFAULT_SHAPE,
    rng: Generator | None = None,
) -> Exam:
    """
    Guess a random exam drawn from the same distribution as the key.

    The guess is independent of the key, so this is the baseline of
    random guessing matched to the known frequencies.
    """
    return random_exam(distribution, shape, rng)


def guess_common(
    distribution: Distribution,
    shape: ExamShape = DEFAULT_SHAPE,
    rng: Generator | None = None,
) -> Exam:
    """Answer every question with the most frequent option."""
    distribution.validate(shape)
    return Exam.uniform(rank(distribution)[0], shape)


def eliminate_and_scale_distribution(
    distribution: Distribution, shape: ExamShape = DEFAULT_SHAPE
) -> Distribution:
    """
    Drop the least frequent option and scale the others back up.

    Each surviving count becomes floor(count * exam_length / survivors_sum).
    The rounding shortfall is added to option 0, whichever option that is.

    Raises:
        InvalidDistributionError: If the distribution does not match the shape.
    """
    distribution.validate(shape)
    exam_length = shape.exam_length

    counts = list(distribution.counts)
    counts[rank(distribution)[-1]] = 0

    survivors_sum = sum(counts)
    counts = [count * exam_length // survivors_sum for count in counts]

    # Remainder from flooring goes to slot 0
    counts[0] += exam_length - sum(counts)

    return Distribution(counts)


def eliminate_and_scale(
    distribution: Distribution,
    shape: ExamShape = DEFAULT_SHAPE,
    rng: Generator | None = None,
) -> Exam:
    """
    Eliminate the least common answer and guess a random exam from the
    rescaled distribution of the remaining answers.
    """
    scaled = eliminate_and_scale_distribution(distribution, shape)
    return random_exam(scaled, shape, rng)
