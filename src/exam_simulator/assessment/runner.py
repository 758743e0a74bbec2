"""
Monte Carlo assessment of guessing strategies.
"""

import logging
from collections.abc import Iterator, Sequence
from concurrent.futures import ProcessPoolExecutor

from numpy.random import SeedSequence

from exam_simulator.assessment.data_models import (
    Assessment,
    DistributionReport,
    TrialTally,
)
from exam_simulator.core.constants import DEFAULT_N_ITERATIONS
from exam_simulator.core.data_models import (
    DEFAULT_SHAPE,
    Distribution,
    ExamShape,
    as_distribution,
)
from exam_simulator.core.exceptions import InvalidDistributionError
from exam_simulator.core.utils import get_rng, spawn_seeds
from exam_simulator.generation.generators import random_exam
from exam_simulator.strategies.base import OracleStrategy, Strategy

logger = logging.getLogger(__name__)


def run_trials(
    strategy: Strategy,
    distribution: Distribution,
    shape: ExamShape,
    n_trials: int,
    seed: int | SeedSequence | None = None,
) -> TrialTally:
    """
    Run independent trials of one strategy against one distribution.

    Each trial draws a fresh key, asks the strategy for a guess (or uses
    the key for the oracle), and grades the guess.

    Args:
        strategy: Strategy to assess.
        distribution: Answer distribution of the key. Must be valid.
        shape: Exam shape.
        n_trials: Number of trials.
        seed: Seed for this batch's random generator.

    Returns:
        TrialTally with the batch totals.
    """
    rng = get_rng(seed)
    tally = TrialTally()

    for _ in range(n_trials):
        key = random_exam(distribution, shape, rng)
        if isinstance(strategy, OracleStrategy):
            guess = key
        else:
            guess = strategy.guess(distribution, shape, rng)
        tally.record(key.check(guess), shape.pass_grade)

    return tally


def _chunk_sizes(n_iterations: int, n_chunks: int) -> list[int]:
    """Split n_iterations into n_chunks contiguous, nearly equal sizes."""
    base, extra = divmod(n_iterations, n_chunks)
    sizes = [base + 1 if i < extra else base for i in range(n_chunks)]
    return [s for s in sizes if s > 0]


def assess_strategy(
    strategy: Strategy,
    distribution: Distribution | Sequence[int],
    shape: ExamShape = DEFAULT_SHAPE,
    n_iterations: int = DEFAULT_N_ITERATIONS,
    seed: int | SeedSequence | None = None,
    n_workers: int = 1,
) -> Assessment:
    """
    Estimate the average grade and pass probability of a strategy.

    With n_workers > 1 the iterations are split into one chunk per worker.
    Each chunk gets its own generator spawned from the seed, and the
    chunk tallies are summed. Results are reproducible for a given seed
    and worker count.

    Args:
        strategy: Strategy to assess.
        distribution: Answer distribution of the key.
        shape: Exam shape.
        n_iterations: Number of independent trials.
        seed: Base random seed.
        n_workers: Number of worker processes.

    Returns:
        Assessment over all trials.

    Raises:
        InvalidDistributionError: If the distribution does not match the shape.
        ValueError: If n_iterations or n_workers is not positive.
    """
    if n_iterations < 1:
        raise ValueError(f"n_iterations must be >= 1, got {n_iterations}")
    if n_workers < 1:
        raise ValueError(f"n_workers must be >= 1, got {n_workers}")

    distribution = as_distribution(distribution)
    distribution.validate(shape)

    if n_workers == 1:
        tally = run_trials(strategy, distribution, shape, n_iterations, seed)
    else:
        sizes = _chunk_sizes(n_iterations, n_workers)
        seeds = spawn_seeds(seed, len(sizes))
        tally = TrialTally()
        with ProcessPoolExecutor(max_workers=len(sizes)) as executor:
            futures = [
                executor.submit(
                    run_trials, strategy, distribution, shape, size, chunk_seed
                )
                for size, chunk_seed in zip(sizes, seeds, strict=True)
            ]
            for future in futures:
                tally = tally.merge(future.result())

    assessment = tally.to_assessment(strategy.name, distribution.counts)
    logger.debug(
        "%s on %s: average grade %.3f, pass probability %.4f (%d iterations)",
        strategy.name,
        distribution,
        assessment.average_grade,
        assessment.pass_probability,
        n_iterations,
    )
    return assessment


def run_assessment(
    distributions: Sequence[Distribution | Sequence[int]],
    strategies: Sequence[Strategy],
    shape: ExamShape = DEFAULT_SHAPE,
    n_iterations: int = DEFAULT_N_ITERATIONS,
    base_seed: int | None = None,
    n_workers: int = 1,
) -> Iterator[DistributionReport]:
    """
    Assess every strategy against every distribution.

    Invalid distributions are logged and reported with is_valid=False;
    they do not stop the run.

    Uses SeedSequence to derive independent seeds per distribution and
    per strategy.

    Args:
        distributions: Answer distributions to test.
        strategies: Strategies to assess against each distribution.
        shape: Exam shape.
        n_iterations: Trials per (strategy, distribution) pair.
        base_seed: Base random seed.
        n_workers: Worker processes per assessment.

    Yields:
        DistributionReport for each distribution, in input order.
    """
    parsed = [as_distribution(d) for d in distributions]
    distribution_seeds = spawn_seeds(base_seed, len(parsed))

    for distribution, distribution_seed in zip(
        parsed, distribution_seeds, strict=True
    ):
        try:
            distribution.validate(shape)
        except InvalidDistributionError as e:
            logger.warning("Skipping distribution: %s", e)
            yield DistributionReport(
                distribution=distribution.counts, is_valid=False
            )
            continue

        logger.info(
            "Assessing %d strategies on %s", len(strategies), distribution
        )
        strategy_seeds = distribution_seed.spawn(len(strategies))
        assessments = tuple(
            assess_strategy(
                strategy,
                distribution,
                shape=shape,
                n_iterations=n_iterations,
                seed=strategy_seed,
                n_workers=n_workers,
            )
            for strategy, strategy_seed in zip(
                strategies, strategy_seeds, strict=True
            )
        )

        yield DistributionReport(
            distribution=distribution.counts,
            is_valid=True,
            assessments=assessments,
        )
