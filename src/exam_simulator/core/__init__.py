"""
Core types and utilities shared by the generator, strategies and
assessment engine.
"""

from exam_simulator.core.constants import (
    DEFAULT_N_ITERATIONS,
    EXAM_LENGTH,
    OPTIONS_PER_QUESTION,
    PASS_GRADE,
)
from exam_simulator.core.data_models import (
    DEFAULT_SHAPE,
    Distribution,
    Exam,
    ExamShape,
)
from exam_simulator.core.exceptions import (
    InvalidAnswerError,
    InvalidDistributionError,
    SimulationError,
)
from exam_simulator.core.ranking import rank
from exam_simulator.core.utils import get_rng, spawn_seeds

__all__ = [
    "DEFAULT_N_ITERATIONS",
    "DEFAULT_SHAPE",
    "EXAM_LENGTH",
    "OPTIONS_PER_QUESTION",
    "PASS_GRADE",
    "Distribution",
    "Exam",
    "ExamShape",
    "InvalidAnswerError",
    "InvalidDistributionError",
    "SimulationError",
    "get_rng",
    "rank",
    "spawn_seeds",
]
