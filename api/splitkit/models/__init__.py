from splitkit.models.ab_test import ABSplit, ABTest, EvenSplit, VariantSpec, WeightedSplit
from splitkit.models.assignment_record import AssignmentRecord
from splitkit.models.base import Base, TimestampMixin

__all__ = [
    "ABSplit",
    "ABTest",
    "AssignmentRecord",
    "Base",
    "EvenSplit",
    "TimestampMixin",
    "VariantSpec",
    "WeightedSplit",
]
