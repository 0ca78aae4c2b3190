"""splitkit: deterministic variant allocation with persisted assignments."""

from splitkit.core.errors import (
    AllocationError,
    AllocationIndexNotFoundError,
    RandomOutOfRangeError,
    SplitKitError,
    TooFewVariantsError,
    UnknownTestError,
    UnknownVariantError,
    WeightsNotNormalizedError,
)
from splitkit.models.ab_test import ABSplit, ABTest, EvenSplit, WeightedSplit
from splitkit.services.engine import ExperimentEngine
from splitkit.services.registry import Configuration, TestRegistry
from splitkit.stats.random_source import UniformRandomSource
from splitkit.storage.memory import InMemoryStorage
from splitkit.storage.sql import SQLStorage

__all__ = [
    "ABSplit",
    "ABTest",
    "AllocationError",
    "AllocationIndexNotFoundError",
    "Configuration",
    "EvenSplit",
    "ExperimentEngine",
    "InMemoryStorage",
    "RandomOutOfRangeError",
    "SQLStorage",
    "SplitKitError",
    "TestRegistry",
    "TooFewVariantsError",
    "UniformRandomSource",
    "UnknownTestError",
    "UnknownVariantError",
    "WeightsNotNormalizedError",
    "WeightedSplit",
]
