"""
Generation of random exams with an exact answer distribution.
"""

import numpy as np
from numpy.random import Generator
from numpy.typing import NDArray

from exam_simulator.core.data_models import (
    DEFAULT_SHAPE,
    Distribution,
    Exam,
    ExamShape,
)
from exam_simulator.core.utils import get_rng


def sorted_answers(
    distribution: Distribution, shape: ExamShape = DEFAULT_SHAPE
) -> NDArray[np.int8]:
    """
    Lay out the answers of a distribution in ascending option order.

    Option 0 is repeated d[0] times, then option 1 d[1] times, and so on.
    The distribution itself is left untouched.

    Raises:
        InvalidDistributionError: If the distribution does not match the shape.
    """
    distribution.validate(shape)
    options = np.arange(shape.options_per_question, dtype=np.int8)
    return np.repeat(options, distribution.as_array())


def random_exam(
    distribution: Distribution,
    shape: ExamShape = DEFAULT_SHAPE,
    rng: Generator | None = None,
) -> Exam:
    """
    Draw a random exam whose answer distribution equals the given one.

    Algorithm:
        1. Build the sorted answer sequence implied by the distribution
        2. Draw a uniform random permutation of question positions
        3. Place the answer at sorted position i on question permutation[i]

    Every assignment of the answer multiset to questions is equally likely.

    Args:
        distribution: Target answer distribution. Not modified.
        shape: Exam shape the distribution must match.
        rng: Random number generator.

    Returns:
        Exam with exam.distribution() == distribution.

    Raises:
        InvalidDistributionError: If the distribution does not match the shape.
    """
    if rng is None:
        rng = get_rng()

    ordered = sorted_answers(distribution, shape)
    permutation = rng.permutation(shape.exam_length)

    answers = np.empty(shape.exam_length, dtype=np.int8)
    answers[permutation] = ordered

    return Exam(answers=answers, n_options=shape.options_per_question)
