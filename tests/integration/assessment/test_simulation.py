"""
End-to-end checks of the Monte Carlo estimates against closed-form
expectations, and of parallel execution.
"""

import pytest

from exam_simulator.assessment import (
    DistributionReport,
    assess_strategy,
    expected_grade_for,
    run_assessment,
)
from exam_simulator.core.data_models import Distribution
from exam_simulator.presets import get_preset
from exam_simulator.strategies import (
    ELIMINATE_AND_SCALE,
    GUESS_COMMON,
    RANDOM_EXAM,
    TRUE_CHEATER,
)

N_ITERATIONS = 5000


class TestAgreementWithExpectation:
    @pytest.fixture
    def reports(self) -> list[DistributionReport]:
        config = get_preset("default")
        return list(
            run_assessment(
                distributions=config.distribution_objects(),
                strategies=config.strategy_objects(),
                shape=config.shape,
                n_iterations=N_ITERATIONS,
                base_seed=config.random_seed,
            )
        )

    def test_average_grade_matches_expectation(
        self, reports: list[DistributionReport]
    ) -> None:
        for report in reports:
            assert report.is_valid
            distribution = Distribution(report.distribution)
            for strategy in (RANDOM_EXAM, GUESS_COMMON, ELIMINATE_AND_SCALE):
                assessment = report.get(strategy.name)
                expected = expected_grade_for(strategy, distribution)
                assert expected is not None
                tolerance = max(5 * assessment.average_grade_stderr, 1e-9)
                assert assessment.average_grade == pytest.approx(
                    expected, abs=tolerance
                ), (strategy.name, report.distribution)

    def test_oracle_is_perfect_everywhere(
        self, reports: list[DistributionReport]
    ) -> None:
        for report in reports:
            oracle = report.get(TRUE_CHEATER.name)
            assert oracle.average_grade == 100.0
            assert oracle.pass_probability == 1.0

    def test_guess_common_never_passes_below_threshold(
        self, reports: list[DistributionReport]
    ) -> None:
        for report in reports:
            common = report.get(GUESS_COMMON.name)
            expected_pass = 1.0 if max(report.distribution) >= 55 else 0.0
            assert common.pass_probability == expected_pass


class TestStrategyComparison:
    def test_eliminate_beats_random_on_skewed(self) -> None:
        d = Distribution([54, 20, 13, 13])
        random = assess_strategy(RANDOM_EXAM, d, n_iterations=4000, seed=1)
        eliminate = assess_strategy(
            ELIMINATE_AND_SCALE, d, n_iterations=4000, seed=2
        )
        assert eliminate.average_grade > random.average_grade

    def test_random_guessing_rarely_passes_uniform(self) -> None:
        d = Distribution([25, 25, 25, 25])
        assessment = assess_strategy(
            RANDOM_EXAM, d, n_iterations=4000, seed=3
        )
        assert assessment.average_grade == pytest.approx(25.0, abs=0.3)
        assert assessment.pass_probability < 0.001


class TestParallel:
    def test_oracle_with_workers(self) -> None:
        assessment = assess_strategy(
            TRUE_CHEATER,
            Distribution([25, 25, 25, 25]),
            n_iterations=101,
            seed=0,
            n_workers=2,
        )
        assert assessment.n_iterations == 101
        assert assessment.average_grade == 100.0
        assert assessment.pass_probability == 1.0

    def test_reproducible_for_same_workers(self) -> None:
        d = Distribution([40, 25, 25, 10])
        a = assess_strategy(
            RANDOM_EXAM, d, n_iterations=400, seed=4, n_workers=2
        )
        b = assess_strategy(
            RANDOM_EXAM, d, n_iterations=400, seed=4, n_workers=2
        )
        assert a == b

    def test_parallel_estimate_matches_expectation(self) -> None:
        d = Distribution([54, 20, 13, 13])
        assessment = assess_strategy(
            ELIMINATE_AND_SCALE, d, n_iterations=4000, seed=5, n_workers=3
        )
        expected = expected_grade_for(ELIMINATE_AND_SCALE, d)
        assert expected is not None
        assert assessment.average_grade == pytest.approx(
            expected, abs=5 * assessment.average_grade_stderr
        )

    def test_run_assessment_with_workers(self) -> None:
        reports = list(
            run_assessment(
                distributions=[[100, 0, 0, 0], [24, 25, 25, 25]],
                strategies=[GUESS_COMMON, TRUE_CHEATER],
                n_iterations=20,
                base_seed=1,
                n_workers=2,
            )
        )
        assert reports[0].get("GuessCommon").average_grade == 100.0
        assert not reports[1].is_valid
