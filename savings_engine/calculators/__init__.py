"""
Calculators Package

Provides all calculation components for a savings projection.
"""

from .growth import SavingsGrowthCalculator, compound_factor
from .interest import InterestCalculator
from .payment import PaymentCalculator

__all__ = [
    "SavingsGrowthCalculator",
    "PaymentCalculator",
    "InterestCalculator",
    "compound_factor",
]
