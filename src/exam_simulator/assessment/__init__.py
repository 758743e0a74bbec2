"""
Assessment of guessing strategies by Monte Carlo simulation.

This module provides tools for:
- Running repeated trials of a strategy against a distribution
- Closed-form expected grades for cross-checking
- Tabulating, saving and plotting results
"""

from exam_simulator.assessment.analysis import (
    expected_grade,
    expected_grade_for,
    guess_distribution,
)
from exam_simulator.assessment.data_models import (
    Assessment,
    DistributionReport,
    TrialTally,
)
from exam_simulator.assessment.plotting import plot_pass_probabilities
from exam_simulator.assessment.reporting import save_results, to_dataframe
from exam_simulator.assessment.runner import (
    assess_strategy,
    run_assessment,
    run_trials,
)

__all__ = [
    # Data models
    "Assessment",
    "DistributionReport",
    "TrialTally",
    # Analysis
    "expected_grade",
    "expected_grade_for",
    "guess_distribution",
    # Runner
    "assess_strategy",
    "run_assessment",
    "run_trials",
    # Reporting
    "plot_pass_probabilities",
    "save_results",
    "to_dataframe",
]
