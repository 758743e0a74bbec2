"""
Random source helpers shared across simulator modules.
"""

import numpy as np
from numpy.random import Generator, SeedSequence


def get_rng(seed: int | SeedSequence | None = None) -> Generator:
    """
    Create a numpy random Generator with optional seed.

    Args:
        seed: Random seed or SeedSequence. If None, uses entropy.

    Returns:
        A numpy random Generator instance.
    """
    return np.random.default_rng(seed)


def spawn_seeds(
    seed: int | SeedSequence | None, n: int
) -> list[SeedSequence]:
    """
    Derive n statistically independent child seed sequences.

    Args:
        seed: Base seed. An int is wrapped in a SeedSequence.
        n: Number of children.

    Returns:
        List of n SeedSequence instances.
    """
    if n < 0:
        raise ValueError(f"n must be >= 0, got {n}")
    root = seed if isinstance(seed, SeedSequence) else SeedSequence(seed)
    return root.spawn(n)


def index_to_letter(index: int) -> str:
    """Convert a 0-based option index to a letter (0 -> 'A')."""
    if not (0 <= index <= 25):
        raise ValueError(f"Index must be in [0, 25], got {index}")
    return chr(ord("A") + index)


def letter_to_index(letter: str) -> int:
    """Convert a letter to a 0-based option index ('A' -> 0)."""
    if len(letter) != 1 or not ("A" <= letter <= "Z"):
        raise ValueError(f"Letter must be A-Z, got '{letter}'")
    return ord(letter) - ord("A")
