"""
Data models for assessment results.
"""

import math
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field
from scipy import stats


@dataclass
class TrialTally:
    """Running totals over a batch of trials.

    Totals are integers so that partial tallies from independent workers
    merge without loss.
    """

    n_trials: int = 0
    total_grade: int = 0
    total_squared_grade: int = 0
    passes: int = 0

    def record(self, grade: int, pass_grade: int) -> None:
        self.n_trials += 1
        self.total_grade += grade
        self.total_squared_grade += grade * grade
        if grade >= pass_grade:
            self.passes += 1

    def merge(self, other: "TrialTally") -> "TrialTally":
        """Return the combined tally of two disjoint batches."""
        return TrialTally(
            n_trials=self.n_trials + other.n_trials,
            total_grade=self.total_grade + other.total_grade,
            total_squared_grade=self.total_squared_grade
            + other.total_squared_grade,
            passes=self.passes + other.passes,
        )

    def to_assessment(
        self, strategy_name: str, distribution: tuple[int, ...]
    ) -> "Assessment":
        """
        Summarize the tally.

        Raises:
            ValueError: If no trials were recorded.
        """
        if self.n_trials == 0:
            raise ValueError("Cannot assess an empty tally")

        n = self.n_trials
        mean = self.total_grade / n
        # Population variance; clamp rounding noise
        variance = max(self.total_squared_grade / n - mean * mean, 0.0)

        return Assessment(
            strategy_name=strategy_name,
            distribution=distribution,
            n_iterations=n,
            average_grade=mean,
            pass_probability=self.passes / n,
            grade_std=math.sqrt(variance),
        )


class Assessment(BaseModel):
    """How well one strategy does against one distribution."""

    strategy_name: str
    distribution: tuple[int, ...]
    n_iterations: int = Field(ge=1)
    average_grade: float = Field(ge=0)
    pass_probability: float = Field(ge=0, le=1)
    grade_std: float = Field(default=0.0, ge=0)
    model_config = ConfigDict(frozen=True)

    @property
    def average_grade_stderr(self) -> float:
        """Standard error of the average grade."""
        return self.grade_std / math.sqrt(self.n_iterations)

    def pass_probability_interval(
        self, confidence: float = 0.95
    ) -> tuple[float, float]:
        """
        Wilson score interval for the pass probability.

        Stays inside [0, 1] and is well behaved when the observed
        probability is exactly 0 or 1.

        Args:
            confidence: Confidence level in (0, 1).

        Returns:
            (lower, upper) bounds.
        """
        if not (0 < confidence < 1):
            raise ValueError(
                f"confidence must be in (0, 1), got {confidence}"
            )
        n = self.n_iterations
        p = self.pass_probability
        z = float(stats.norm.ppf(0.5 + confidence / 2))

        denominator = 1 + z * z / n
        center = (p + z * z / (2 * n)) / denominator
        half_width = (
            z * math.sqrt(p * (1 - p) / n + z * z / (4 * n * n)) / denominator
        )
        return max(0.0, center - half_width), min(1.0, center + half_width)


class DistributionReport(BaseModel):
    """Assessments of every strategy against one distribution.

    Invalid distributions are reported with is_valid=False and no
    assessments.
    """

    distribution: tuple[int, ...]
    is_valid: bool
    assessments: tuple[Assessment, ...] = ()
    model_config = ConfigDict(frozen=True)

    def get(self, strategy_name: str) -> Assessment:
        for assessment in self.assessments:
            if assessment.strategy_name == strategy_name:
                return assessment
        raise KeyError(strategy_name)
