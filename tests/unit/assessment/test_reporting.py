"""Tests for result tables, files and plots."""

import json
import math
from pathlib import Path

import pytest
from matplotlib.figure import Figure

from exam_simulator.assessment.data_models import (
    Assessment,
    DistributionReport,
)
from exam_simulator.assessment.plotting import plot_pass_probabilities
from exam_simulator.assessment.reporting import (
    COLUMNS,
    save_results,
    to_dataframe,
)


def _assessment(name: str, distribution: tuple[int, ...]) -> Assessment:
    return Assessment(
        strategy_name=name,
        distribution=distribution,
        n_iterations=10,
        average_grade=30.0,
        pass_probability=0.2,
        grade_std=1.0,
    )


@pytest.fixture
def reports() -> list[DistributionReport]:
    valid = (54, 20, 13, 13)
    return [
        DistributionReport(
            distribution=valid,
            is_valid=True,
            assessments=(
                _assessment("RandomExam", valid),
                _assessment("GuessCommon", valid),
                _assessment("Custom", valid),
            ),
        ),
        DistributionReport(distribution=(24, 25, 25, 25), is_valid=False),
    ]


class TestToDataframe:
    def test_rows_and_columns(
        self, reports: list[DistributionReport]
    ) -> None:
        df = to_dataframe(reports)
        assert list(df.columns) == COLUMNS
        assert len(df) == 4
        assert df["distribution"].iloc[0] == "{54, 20, 13, 13}"

    def test_expected_grade_for_known_strategies(
        self, reports: list[DistributionReport]
    ) -> None:
        df = to_dataframe(reports).set_index("strategy", drop=False)
        assert df.loc["RandomExam", "expected_grade"] == pytest.approx(36.54)
        assert df.loc["GuessCommon", "expected_grade"] == pytest.approx(54.0)
        assert math.isnan(df.loc["Custom", "expected_grade"])

    def test_invalid_row(self, reports: list[DistributionReport]) -> None:
        df = to_dataframe(reports)
        invalid = df[~df["is_valid"]]
        assert len(invalid) == 1
        assert math.isnan(invalid["average_grade"].iloc[0])


class TestSaveResults:
    def test_writes_files(
        self, reports: list[DistributionReport], tmp_path: Path
    ) -> None:
        output_dir = tmp_path / "out"
        save_results(reports, output_dir, params={"seed": 1}, plot=False)

        summary = json.loads((output_dir / "summary.json").read_text())
        assert summary["params"] == {"seed": 1}
        assert len(summary["reports"]) == 2
        assert summary["reports"][1]["is_valid"] is False
        assert (output_dir / "assessments.csv").exists()
        assert not (output_dir / "pass_probability.png").exists()

    def test_writes_plot(
        self, reports: list[DistributionReport], tmp_path: Path
    ) -> None:
        save_results(reports, tmp_path, params={})
        assert (tmp_path / "pass_probability.png").exists()


class TestPlotPassProbabilities:
    def test_returns_figure(self, reports: list[DistributionReport]) -> None:
        import matplotlib.pyplot as plt

        fig = plot_pass_probabilities(reports)
        assert isinstance(fig, Figure)
        ax = fig.axes[0]
        assert len(ax.patches) == 3
        plt.close(fig)

    def test_no_valid_reports_raises(self) -> None:
        invalid = [DistributionReport(distribution=(1, 2), is_valid=False)]
        with pytest.raises(ValueError, match="No valid"):
            plot_pass_probabilities(invalid)
