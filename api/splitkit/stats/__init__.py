"""Variant allocation primitives.

Public API:
- allocate: map a random draw to a variant index via cumulative weights
- cumulative_breakpoints: the running sum of weights used for bucketing
- UniformRandomSource: endless uniform draws backed by numpy
"""

from splitkit.stats.distribution import allocate, cumulative_breakpoints
from splitkit.stats.random_source import RandomSource, UniformRandomSource

__all__ = [
    "allocate",
    "cumulative_breakpoints",
    "RandomSource",
    "UniformRandomSource",
]
