"""
Simulation configuration and YAML loading using OmegaConf.
"""

from dataclasses import dataclass, field
from pathlib import Path

from omegaconf import OmegaConf

from exam_simulator.core.constants import (
    DEFAULT_N_ITERATIONS,
    EXAM_LENGTH,
    OPTIONS_PER_QUESTION,
    PASS_GRADE,
)
from exam_simulator.core.data_models import Distribution, ExamShape
from exam_simulator.strategies.base import Strategy
from exam_simulator.strategies.registry import (
    get_available_strategies,
    get_strategy,
)


@dataclass
class SimulationConfig:
    """Complete configuration for a simulation run.

    Distributions are not checked here: invalid ones are reported by the
    runner and skipped.

    Attributes:
        exam_length: Number of questions.
        options_per_question: Number of answer options per question.
        pass_grade: Minimum grade that passes.
        n_iterations: Trials per (strategy, distribution) pair.
        random_seed: Base random seed.
        n_workers: Worker processes per assessment.
        distributions: Answer distributions to test.
        strategies: Names of the strategies to assess.
    """

    exam_length: int = EXAM_LENGTH
    options_per_question: int = OPTIONS_PER_QUESTION
    pass_grade: int = PASS_GRADE

    n_iterations: int = DEFAULT_N_ITERATIONS

    # Reproducibility
    random_seed: int = 42
    n_workers: int = 1

    distributions: list[list[int]] = field(default_factory=list)
    strategies: list[str] = field(default_factory=get_available_strategies)

    def __post_init__(self) -> None:
        # Raises ValueError for an inconsistent shape
        _ = self.shape
        if self.n_iterations < 1:
            raise ValueError(
                f"n_iterations must be >= 1, got {self.n_iterations}"
            )
        if self.n_workers < 1:
            raise ValueError(f"n_workers must be >= 1, got {self.n_workers}")
        if not self.distributions:
            raise ValueError("Must have at least 1 distribution")
        if not self.strategies:
            raise ValueError("Must have at least 1 strategy")
        for name in self.strategies:
            get_strategy(name)

    @property
    def shape(self) -> ExamShape:
        return ExamShape(
            exam_length=self.exam_length,
            options_per_question=self.options_per_question,
            pass_grade=self.pass_grade,
        )

    def distribution_objects(self) -> list[Distribution]:
        return [Distribution(d) for d in self.distributions]

    def strategy_objects(self) -> list[Strategy]:
        return [get_strategy(name) for name in self.strategies]


def load_config(yaml_path: Path) -> SimulationConfig:
    """Load and validate a simulation configuration from YAML.

    Args:
        yaml_path: Path to YAML config file

    Returns:
        Validated SimulationConfig

    Raises:
        FileNotFoundError: If yaml_path doesn't exist
        ValueError: If the configuration is inconsistent
    """
    schema = OmegaConf.structured(SimulationConfig)

    if not yaml_path.exists():
        raise FileNotFoundError(f"Config file not found: {yaml_path}")

    user_config = OmegaConf.load(yaml_path)
    config = OmegaConf.merge(schema, user_config)

    result = OmegaConf.to_object(config)
    assert isinstance(result, SimulationConfig)

    return result
