class SimulationError(Exception):
    """Base class for errors raised by the simulator."""


class InvalidDistributionError(SimulationError, ValueError):
    def __init__(self, counts: tuple[int, ...], exam_length: int) -> None:
        self.counts = counts
        self.exam_length = exam_length
        super().__init__(
            f"Invalid distribution {list(counts)}: entries must be >= 0 "
            f"and sum to {exam_length}"
        )


class InvalidAnswerError(SimulationError, ValueError):
    pass
