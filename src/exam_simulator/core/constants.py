"""Fixed shape of the reference exam."""

EXAM_LENGTH = 100
OPTIONS_PER_QUESTION = 4
PASS_GRADE = 55
DEFAULT_N_ITERATIONS = 100_000

# Letters A-Z are used to print answers.
MAX_OPTIONS = 26
