"""Error taxonomy for variant lookup and allocation.

Every error here is a local validation failure: nothing is transient and
nothing is worth retrying.  Callers of ``variant``, ``set_variant``,
``is_test_variant`` and ``run`` see them directly.
"""

from __future__ import annotations


class SplitKitError(Exception):
    """Base class for all splitkit errors."""


class UnknownTestError(SplitKitError, LookupError):
    """No test with the given name is registered."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown test: {name!r}")
        self.name = name


class UnknownVariantError(SplitKitError, ValueError):
    """The variant is not one of the test's declared names."""

    def __init__(self, variant: str, test_name: str) -> None:
        super().__init__(f"Unknown variant {variant!r} for test {test_name!r}")
        self.variant = variant
        self.test_name = test_name


class AllocationError(SplitKitError):
    """A variant could not be drawn for a test."""


class TooFewVariantsError(AllocationError):
    def __init__(self, count: int) -> None:
        super().__init__(f"Number of variants must be greater than one, got {count}")
        self.count = count


class WeightsNotNormalizedError(AllocationError):
    def __init__(self, total: float) -> None:
        super().__init__(f"Variant weights must sum to exactly 1, got {total!r}")
        self.total = total


class RandomOutOfRangeError(AllocationError):
    def __init__(self, draw: float | None) -> None:
        super().__init__(f"Random draw must be in [0, 1), got {draw!r}")
        self.draw = draw


class AllocationIndexNotFoundError(AllocationError):
    def __init__(self, draw: float) -> None:
        super().__init__(f"No bucket found for draw {draw!r}")
        self.draw = draw
