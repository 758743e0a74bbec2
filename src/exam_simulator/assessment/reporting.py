"""
Tabular and file output for assessment results.
"""

import json
import math
from collections.abc import Sequence
from datetime import datetime
from pathlib import Path

import pandas as pd

from exam_simulator.assessment.analysis import expected_grade_for
from exam_simulator.assessment.data_models import DistributionReport
from exam_simulator.core.data_models import (
    DEFAULT_SHAPE,
    Distribution,
    ExamShape,
)
from exam_simulator.strategies.registry import STRATEGIES

COLUMNS = [
    "distribution",
    "is_valid",
    "strategy",
    "average_grade",
    "pass_probability",
    "grade_std",
    "expected_grade",
]


def to_dataframe(
    reports: Sequence[DistributionReport],
    shape: ExamShape = DEFAULT_SHAPE,
) -> pd.DataFrame:
    """
    Flatten reports into one row per (distribution, strategy).

    Invalid distributions get a single row with NaN statistics.
    expected_grade is filled in for the built-in strategies.
    """
    rows: list[dict[str, object]] = []
    for report in reports:
        label = str(Distribution(report.distribution))
        if not report.is_valid:
            rows.append(
                {
                    "distribution": label,
                    "is_valid": False,
                    "strategy": None,
                    "average_grade": math.nan,
                    "pass_probability": math.nan,
                    "grade_std": math.nan,
                    "expected_grade": math.nan,
                }
            )
            continue

        for a in report.assessments:
            strategy = STRATEGIES.get(a.strategy_name)
            expected = None
            if strategy is not None:
                expected = expected_grade_for(
                    strategy, Distribution(a.distribution), shape
                )
            rows.append(
                {
                    "distribution": label,
                    "is_valid": True,
                    "strategy": a.strategy_name,
                    "average_grade": a.average_grade,
                    "pass_probability": a.pass_probability,
                    "grade_std": a.grade_std,
                    "expected_grade": math.nan
                    if expected is None
                    else expected,
                }
            )

    return pd.DataFrame(rows, columns=COLUMNS)


def save_results(
    reports: Sequence[DistributionReport],
    output_dir: Path,
    params: dict[str, object],
    shape: ExamShape = DEFAULT_SHAPE,
    plot: bool = True,
) -> None:
    """Write summary.json, assessments.csv and pass_probability.png."""
    output_dir.mkdir(parents=True, exist_ok=True)

    summary = {
        "params": params,
        "reports": [r.model_dump(mode="json") for r in reports],
        "timestamp": datetime.now().isoformat(),
    }
    with open(output_dir / "summary.json", "w") as f:
        json.dump(summary, f, indent=2)

    to_dataframe(reports, shape).to_csv(
        output_dir / "assessments.csv", index=False
    )

    if plot and any(r.is_valid for r in reports):
        import matplotlib.pyplot as plt

        from exam_simulator.assessment.plotting import (
            plot_pass_probabilities,
        )

        fig = plot_pass_probabilities(reports)
        fig.savefig(output_dir / "pass_probability.png", dpi=150)
        plt.close(fig)
