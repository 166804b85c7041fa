"""
Rough Social Security and tax estimates.

Both are deliberately simple; ``ProjectionEngine`` takes them as callables
so a better model can be dropped in without touching the year loop.
"""

from typing import Callable

from config import (
    EFFECTIVE_TAX_RATE,
    SOCIAL_SECURITY_CLAIM_AGE,
    SOCIAL_SECURITY_REPLACEMENT_RATE,
)

SocialSecurityModel = Callable[[float, int], float]
TaxModel = Callable[[float], float]


def estimate_social_security(high3: float, age: int) -> float:
    """Annual benefit: a flat share of High-3 from the claiming age on."""
    if age < SOCIAL_SECURITY_CLAIM_AGE:
        return 0.0
    monthly_estimate = (high3 / 12) * SOCIAL_SECURITY_REPLACEMENT_RATE
    return monthly_estimate * 12


def estimate_taxes(gross_income: float) -> float:
    return gross_income * EFFECTIVE_TAX_RATE
