"""
Plotting utilities for assessment results.
"""

from collections.abc import Sequence

import numpy as np
from matplotlib.figure import Figure

from exam_simulator.assessment.data_models import DistributionReport


def _format_distribution(counts: Sequence[int]) -> str:
    return "{" + ",".join(str(c) for c in counts) + "}"


def plot_pass_probabilities(
    reports: Sequence[DistributionReport],
) -> Figure:
    """
    Grouped bar chart of pass probability per distribution and strategy.

    Invalid distributions are left out.

    Args:
        reports: Reports from run_assessment.

    Returns:
        matplotlib Figure with one group of bars per valid distribution.
    """
    import matplotlib.pyplot as plt

    valid = [r for r in reports if r.is_valid and r.assessments]
    if not valid:
        raise ValueError("No valid distributions to plot")

    strategy_names = [a.strategy_name for a in valid[0].assessments]
    n_strategies = len(strategy_names)
    x = np.arange(len(valid))
    width = 0.8 / n_strategies

    fig, ax = plt.subplots(figsize=(max(8, 1.5 * len(valid)), 5))

    for j, name in enumerate(strategy_names):
        heights = [r.get(name).pass_probability for r in valid]
        offset = (j - (n_strategies - 1) / 2) * width
        ax.bar(x + offset, heights, width, label=name)

    ax.set_xticks(x)
    ax.set_xticklabels(
        [_format_distribution(r.distribution) for r in valid], rotation=30
    )
    ax.set_ylim(0, 1.05)
    ax.set_xlabel("Answer distribution")
    ax.set_ylabel("Pass probability")
    n_iterations = valid[0].assessments[0].n_iterations
    ax.set_title(f"Pass probability by strategy (n={n_iterations} trials)")
    ax.legend()

    fig.tight_layout()
    return fig
