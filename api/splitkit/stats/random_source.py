"""Sources of allocation draws.

A random source is any iterator of floats.  The engine pulls one value per
allocation with ``next(source, None)``; an exhausted iterator and a value
outside ``[0, 1)`` are both reported as ``RandomOutOfRangeError``.  In tests a
plain ``iter([0.1, 0.5, 0.3])`` is a complete deterministic source.
"""

from __future__ import annotations

from typing import Iterator

import numpy as np

RandomSource = Iterator[float]


class UniformRandomSource:
    """Endless uniform draws in ``[0, 1)`` from a numpy ``Generator``.

    Parameters
    ----------
    seed : int | None
        Optional RNG seed for reproducibility.
    """

    def __init__(self, seed: int | None = None) -> None:
        self._rng = np.random.default_rng(seed)

    def __iter__(self) -> UniformRandomSource:
        return self

    def __next__(self) -> float:
        return float(self._rng.random())
