from exam_simulator.strategies.base import (
    GuessStrategy,
    OracleStrategy,
    Strategy,
)
from exam_simulator.strategies.heuristics import (
    eliminate_and_scale,
    guess_common,
    random_guess,
)

RANDOM_EXAM = GuessStrategy(name="RandomExam", guess_fn=random_guess)
GUESS_COMMON = GuessStrategy(name="GuessCommon", guess_fn=guess_common)
ELIMINATE_AND_SCALE = GuessStrategy(
    name="EliminateAndScale", guess_fn=eliminate_and_scale
)
TRUE_CHEATER = OracleStrategy(name="TrueCheater")

# Report order
STRATEGIES: dict[str, Strategy] = {
    s.name: s
    for s in (RANDOM_EXAM, GUESS_COMMON, ELIMINATE_AND_SCALE, TRUE_CHEATER)
}


def get_available_strategies() -> list[str]:
    return list(STRATEGIES)


def get_strategy(name: str) -> Strategy:
    """Get a built-in strategy by name."""
    if name not in STRATEGIES:
        raise ValueError(
            f"Unknown strategy: {name}. "
            f"Available strategies: {get_available_strategies()}"
        )
    return STRATEGIES[name]


def default_strategies() -> list[Strategy]:
    return list(STRATEGIES.values())
