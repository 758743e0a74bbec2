import numpy as np

from exam_simulator.core.data_models import Distribution


def rank(distribution: Distribution) -> tuple[int, ...]:
    """
    Order the options of a distribution from most to least frequent.

    Ties keep ascending option order, so the ranking of a given
    distribution never depends on the random seed.

    Args:
        distribution: Answer distribution.

    Returns:
        Tuple of all option indices; position 0 is the most frequent.
    """
    counts = distribution.as_array()
    order = np.argsort(-counts, kind="stable")
    return tuple(int(option) for option in order)
