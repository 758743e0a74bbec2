"""
Random key generation for multiple-choice exams.

Keys are drawn uniformly among all exams that match a known answer
distribution.
"""

from exam_simulator.generation.generators import (
    random_exam,
    sorted_answers,
)

__all__ = [
    "random_exam",
    "sorted_answers",
]
