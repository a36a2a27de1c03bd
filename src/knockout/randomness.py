"""
Random source used to seed and simulate brackets.
"""
import random


class RandomSource:
    """
    Uniform integers and in-place shuffling over a private ``random.Random``.

    Pass a seed for a reproducible run; without one every run gets fresh entropy.
    Subclasses only need to override ``randint``: ``shuffle`` draws through it.
    """

    def __init__(self, seed=None):
        self._rng = random.Random(seed)

    def randint(self, low: int, high: int) -> int:
        """Uniform integer in the inclusive range [low, high]."""
        return self._rng.randint(low, high)

    def shuffle(self, items: list) -> None:
        """Fisher-Yates shuffle: walk from the last index down to 1, swapping with [0, i]."""
        for i in range(len(items) - 1, 0, -1):
            j = self.randint(0, i)
            items[i], items[j] = items[j], items[i]
