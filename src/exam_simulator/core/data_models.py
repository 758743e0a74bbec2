"""
Data models for exams and answer distributions.

This module defines:
- ExamShape: the fixed parameters of an exam (length, options, pass grade)
- Distribution: how many questions have each option as the correct answer
- Exam: one answer per question, used for both keys and guesses
"""

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike, NDArray

from exam_simulator.core.constants import (
    EXAM_LENGTH,
    MAX_OPTIONS,
    OPTIONS_PER_QUESTION,
    PASS_GRADE,
)
from exam_simulator.core.exceptions import (
    InvalidAnswerError,
    InvalidDistributionError,
)
from exam_simulator.core.utils import index_to_letter, letter_to_index


@dataclass(frozen=True)
class ExamShape:
    """
    Shape of a multiple-choice exam.

    Attributes:
        exam_length: Number of questions.
        options_per_question: Number of answer options per question.
        pass_grade: Minimum number of correct answers needed to pass.
    """

    exam_length: int = EXAM_LENGTH
    options_per_question: int = OPTIONS_PER_QUESTION
    pass_grade: int = PASS_GRADE

    def __post_init__(self) -> None:
        if self.exam_length < 1:
            raise ValueError(
                f"exam_length must be >= 1, got {self.exam_length}"
            )
        if not (2 <= self.options_per_question <= MAX_OPTIONS):
            raise ValueError(
                f"options_per_question must be in [2, {MAX_OPTIONS}], "
                f"got {self.options_per_question}"
            )
        if not (0 <= self.pass_grade <= self.exam_length):
            raise ValueError(
                f"pass_grade must be in [0, {self.exam_length}], "
                f"got {self.pass_grade}"
            )


DEFAULT_SHAPE = ExamShape()


@dataclass(frozen=True)
class Distribution:
    """
    Number of questions whose correct answer is each option.

    Entry k is the count of option k. Entries are not checked at
    construction so that invalid inputs can be reported rather than
    rejected; use is_valid() or validate() before simulating.
    """

    counts: tuple[int, ...]

    def __init__(self, counts: Iterable[int]) -> None:
        object.__setattr__(self, "counts", tuple(int(c) for c in counts))

    @classmethod
    def of(cls, exam: "Exam") -> "Distribution":
        """Count each answer value across all positions of an exam."""
        return exam.distribution()

    @property
    def n_options(self) -> int:
        return len(self.counts)

    def __len__(self) -> int:
        return len(self.counts)

    def __iter__(self) -> Iterator[int]:
        return iter(self.counts)

    def __getitem__(self, option: int) -> int:
        return self.counts[option]

    def total(self) -> int:
        """Sum of all entries."""
        return sum(self.counts)

    def is_valid(self, exam_length: int = EXAM_LENGTH) -> bool:
        """True iff every entry is non-negative and the entries sum to exam_length."""
        total = 0
        for count in self.counts:
            if count < 0:
                return False
            total += count
        return total == exam_length

    def validate(self, shape: ExamShape = DEFAULT_SHAPE) -> None:
        """
        Check the distribution against an exam shape.

        Raises:
            InvalidDistributionError: If the number of entries differs from
                the shape's options per question, an entry is negative, or
                the entries do not sum to the exam length.
        """
        if self.n_options != shape.options_per_question or not self.is_valid(
            shape.exam_length
        ):
            raise InvalidDistributionError(self.counts, shape.exam_length)

    def with_count(self, option: int, count: int) -> "Distribution":
        """Return a copy with the count of one option replaced."""
        counts = list(self.counts)
        counts[option] = count
        return Distribution(counts)

    def as_array(self) -> NDArray[np.int64]:
        return np.array(self.counts, dtype=np.int64)

    def __str__(self) -> str:
        return "{" + ", ".join(str(c) for c in self.counts) + "}"


@dataclass(frozen=True, eq=False)
class Exam:
    """
    One answer per question.

    The same type represents the key (correct answers) and a guess. The
    answer array is copied and made read-only at construction.

    Attributes:
        answers: 1D array of option indices in [0, n_options).
        n_options: Number of options per question.
    """

    answers: NDArray[np.int8]
    n_options: int = OPTIONS_PER_QUESTION

    def __post_init__(self) -> None:
        if not (2 <= self.n_options <= MAX_OPTIONS):
            raise InvalidAnswerError(
                f"n_options must be in [2, {MAX_OPTIONS}], got {self.n_options}"
            )
        raw = np.asarray(self.answers)
        if raw.ndim != 1:
            raise InvalidAnswerError(
                f"answers must be 1D, got shape {raw.shape}"
            )
        if raw.size > 0:
            if raw.dtype.kind not in "iu":
                raise InvalidAnswerError(
                    f"answers must be integers, got dtype {raw.dtype}"
                )
            if raw.min() < 0 or raw.max() >= self.n_options:
                raise InvalidAnswerError(
                    f"answers must be in [0, {self.n_options}), "
                    f"got range [{raw.min()}, {raw.max()}]"
                )
        answers = raw.astype(np.int8, copy=True)
        answers.setflags(write=False)
        object.__setattr__(self, "answers", answers)

    @classmethod
    def from_answers(
        cls, answers: ArrayLike, n_options: int = OPTIONS_PER_QUESTION
    ) -> "Exam":
        return cls(answers=np.asarray(answers), n_options=n_options)

    @classmethod
    def uniform(cls, answer: int, shape: ExamShape = DEFAULT_SHAPE) -> "Exam":
        """An exam answering every question with the same option."""
        return cls(
            answers=np.full(shape.exam_length, answer, dtype=np.int8),
            n_options=shape.options_per_question,
        )

    @classmethod
    def from_string(
        cls, answer_string: str, n_options: int = OPTIONS_PER_QUESTION
    ) -> "Exam":
        """Parse a letter string ("ABCD...") into an exam."""
        return cls(
            answers=np.array(
                [letter_to_index(char) for char in answer_string],
                dtype=np.int64,
            ),
            n_options=n_options,
        )

    def __len__(self) -> int:
        return int(self.answers.shape[0])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Exam):
            return NotImplemented
        return self.n_options == other.n_options and bool(
            np.array_equal(self.answers, other.answers)
        )

    def __hash__(self) -> int:
        return hash((self.n_options, self.answers.tobytes()))

    def check(self, other: "Exam") -> int:
        """
        Grade one exam against another.

        Returns the number of positions where both exams give the same
        answer. The result does not depend on which exam is the key.

        Raises:
            ValueError: If the exams have different lengths or option counts.
        """
        if len(self) != len(other):
            raise ValueError(
                f"Cannot grade exams of different lengths: "
                f"{len(self)} != {len(other)}"
            )
        if self.n_options != other.n_options:
            raise ValueError(
                f"Cannot grade exams with different option counts: "
                f"{self.n_options} != {other.n_options}"
            )
        return int(np.count_nonzero(self.answers == other.answers))

    def distribution(self) -> Distribution:
        """Count of each option across all questions."""
        counts = np.bincount(
            self.answers.astype(np.int64), minlength=self.n_options
        )
        return Distribution(counts.tolist())

    def to_string(self) -> str:
        return "".join(index_to_letter(int(a)) for a in self.answers)


def as_distribution(value: Distribution | Sequence[int]) -> Distribution:
    """Accept either a Distribution or a plain sequence of counts."""
    if isinstance(value, Distribution):
        return value
    return Distribution(value)
