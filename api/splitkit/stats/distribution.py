"""Cumulative-weight bucketing.

Weights are turned into a running sum of breakpoints and a draw in ``[0, 1)``
selects the first bucket whose breakpoint lies above it:

    [0.15, 0.5, 0.1, 0.2, 0.05] -> [0.15, 0.65, 0.75, 0.95, 1.0]

Buckets are half-open ``[previous, current)``, so a draw that sits exactly on
a breakpoint belongs to the next bucket.  The running sum must end at exactly
``1.0``; there is no tolerance.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from splitkit.core.errors import (
    AllocationIndexNotFoundError,
    RandomOutOfRangeError,
    TooFewVariantsError,
    WeightsNotNormalizedError,
)


def cumulative_breakpoints(weights: Sequence[float]) -> np.ndarray:
    """Running left-to-right sum of ``weights``.

    Parameters
    ----------
    weights : Sequence[float]
        Per-variant traffic share, in variant order.

    Returns
    -------
    np.ndarray
        ``c[i] = c[i-1] + weights[i]`` with ``c[-1] = 0``.
    """
    # accumulate adds strictly in order, matching a plain running sum
    return np.add.accumulate(np.asarray(weights, dtype=np.float64))


def allocate(weights: Sequence[float], draw: float | None) -> int:
    """Select a variant index for ``draw``.

    Parameters
    ----------
    weights : Sequence[float]
        Per-variant traffic share; must have more than one entry and sum
        to exactly 1.
    draw : float | None
        Random value in ``[0, 1)``.  ``None`` means the random source had
        nothing to give.

    Returns
    -------
    int
        Smallest index ``i`` with ``draw < cumulative[i]``.

    Raises
    ------
    TooFewVariantsError, WeightsNotNormalizedError, RandomOutOfRangeError,
    AllocationIndexNotFoundError
    """
    if len(weights) <= 1:
        raise TooFewVariantsError(len(weights))

    breakpoints = cumulative_breakpoints(weights)
    total = float(breakpoints[-1])
    if total != 1.0:
        raise WeightsNotNormalizedError(total)

    if draw is None or not (0.0 <= draw < 1.0):
        raise RandomOutOfRangeError(draw)

    hits = np.flatnonzero(draw < breakpoints)
    if hits.size == 0:
        raise AllocationIndexNotFoundError(draw)
    return int(hits[0])
