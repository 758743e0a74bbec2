"""Tests for assessment data models."""

import math

import pytest
from pydantic import ValidationError

from exam_simulator.assessment.data_models import (
    Assessment,
    DistributionReport,
    TrialTally,
)


def _make_assessment(
    pass_probability: float = 0.5,
    n_iterations: int = 100,
    strategy_name: str = "GuessCommon",
) -> Assessment:
    return Assessment(
        strategy_name=strategy_name,
        distribution=(25, 25, 25, 25),
        n_iterations=n_iterations,
        average_grade=25.0,
        pass_probability=pass_probability,
        grade_std=2.0,
    )


class TestTrialTally:
    def test_record(self) -> None:
        tally = TrialTally()
        tally.record(60, pass_grade=55)
        tally.record(50, pass_grade=55)
        tally.record(55, pass_grade=55)
        assert tally.n_trials == 3
        assert tally.total_grade == 165
        assert tally.total_squared_grade == 3600 + 2500 + 3025
        assert tally.passes == 2

    def test_merge(self) -> None:
        a = TrialTally(
            n_trials=2, total_grade=10, total_squared_grade=50, passes=1
        )
        b = TrialTally(
            n_trials=3, total_grade=20, total_squared_grade=150, passes=0
        )
        merged = a.merge(b)
        assert merged == TrialTally(
            n_trials=5, total_grade=30, total_squared_grade=200, passes=1
        )

    def test_to_assessment(self) -> None:
        tally = TrialTally()
        for grade in (50, 60):
            tally.record(grade, pass_grade=55)
        assessment = tally.to_assessment("RandomExam", (25, 25, 25, 25))
        assert assessment.n_iterations == 2
        assert assessment.average_grade == 55.0
        assert assessment.pass_probability == 0.5
        assert assessment.grade_std == pytest.approx(5.0)

    def test_constant_grades_have_zero_std(self) -> None:
        tally = TrialTally()
        for _ in range(10):
            tally.record(25, pass_grade=55)
        assessment = tally.to_assessment("GuessCommon", (25, 25, 25, 25))
        assert assessment.grade_std == 0.0
        assert assessment.pass_probability == 0.0

    def test_empty_tally_raises(self) -> None:
        with pytest.raises(ValueError, match="empty"):
            TrialTally().to_assessment("GuessCommon", (25, 25, 25, 25))


class TestAssessment:
    def test_frozen(self) -> None:
        assessment = _make_assessment()
        with pytest.raises(ValidationError):
            assessment.average_grade = 10.0  # type: ignore[misc]

    def test_pass_probability_out_of_range(self) -> None:
        with pytest.raises(ValidationError):
            _make_assessment(pass_probability=1.5)

    def test_zero_iterations_rejected(self) -> None:
        with pytest.raises(ValidationError):
            _make_assessment(n_iterations=0)

    def test_stderr(self) -> None:
        assessment = _make_assessment(n_iterations=100)
        assert assessment.average_grade_stderr == pytest.approx(0.2)

    def test_interval_contains_estimate(self) -> None:
        assessment = _make_assessment(pass_probability=0.3, n_iterations=1000)
        low, high = assessment.pass_probability_interval()
        assert low < 0.3 < high
        # normal approximation half width is about 0.028
        assert high - low == pytest.approx(2 * 0.0284, abs=0.002)

    def test_interval_at_zero(self) -> None:
        assessment = _make_assessment(pass_probability=0.0, n_iterations=100)
        low, high = assessment.pass_probability_interval()
        assert low == pytest.approx(0.0, abs=1e-12)
        assert 0.0 < high < 0.05

    def test_interval_at_one(self) -> None:
        assessment = _make_assessment(pass_probability=1.0, n_iterations=100)
        low, high = assessment.pass_probability_interval()
        assert 0.95 < low < 1.0
        assert high == pytest.approx(1.0, abs=1e-12)

    def test_wider_confidence_wider_interval(self) -> None:
        assessment = _make_assessment(pass_probability=0.5)
        low90, high90 = assessment.pass_probability_interval(0.90)
        low99, high99 = assessment.pass_probability_interval(0.99)
        assert low99 < low90
        assert high99 > high90

    def test_invalid_confidence_raises(self) -> None:
        with pytest.raises(ValueError, match="confidence"):
            _make_assessment().pass_probability_interval(1.0)

    def test_json_round_trip(self) -> None:
        assessment = _make_assessment()
        restored = Assessment.model_validate_json(assessment.model_dump_json())
        assert restored == assessment
        assert not math.isnan(restored.grade_std)


class TestDistributionReport:
    def test_get(self) -> None:
        report = DistributionReport(
            distribution=(25, 25, 25, 25),
            is_valid=True,
            assessments=(
                _make_assessment(strategy_name="RandomExam"),
                _make_assessment(strategy_name="GuessCommon"),
            ),
        )
        assert report.get("GuessCommon").strategy_name == "GuessCommon"

    def test_get_missing_raises(self) -> None:
        report = DistributionReport(distribution=(1, 2), is_valid=False)
        with pytest.raises(KeyError):
            report.get("GuessCommon")

    def test_invalid_report_has_no_assessments(self) -> None:
        report = DistributionReport(
            distribution=(24, 25, 25, 25), is_valid=False
        )
        assert report.assessments == ()
