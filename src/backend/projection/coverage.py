"""
FEHB (Federal Employee Health Benefits) cost calculator.
"""

from typing import Dict, List

from config import (
    FEHB_AGE_ADJUSTMENT_PER_YEAR,
    FEHB_AGE_ADJUSTMENT_START,
    FEHB_BASE_COSTS,
    MEDICARE_PART_B_ANNUAL_PREMIUM,
    MEDICARE_SUPPLEMENT_REDUCTION,
)
from .service import is_fehb_eligible


def calculate_annual_fehb_cost(
    coverage_level: str,
    age: int,
    years_from_start: float,
    healthcare_inflation: float,
) -> float:
    """Annual premium: base cost, healthcare inflation, then 1%/year past 65."""
    base_cost = FEHB_BASE_COSTS[coverage_level]
    adjusted_cost = base_cost * (1 + healthcare_inflation) ** years_from_start

    if age > FEHB_AGE_ADJUSTMENT_START:
        adjusted_cost *= 1 + (age - FEHB_AGE_ADJUSTMENT_START) * FEHB_AGE_ADJUSTMENT_PER_YEAR

    return adjusted_cost


def is_fehb_eligible_in_retirement(years_of_service: float) -> bool:
    return is_fehb_eligible(years_of_service)


def calculate_medicare_savings(fehb_cost: float) -> float:
    """
    Net effect of FEHB acting as a Medicare supplement.
    Negative when the Part B premium outweighs the reduction.
    """
    return fehb_cost * MEDICARE_SUPPLEMENT_REDUCTION - MEDICARE_PART_B_ANNUAL_PREMIUM


def project_fehb_costs(
    coverage_level: str,
    retirement_age: int,
    end_age: int,
    healthcare_inflation: float,
) -> List[Dict[str, float]]:
    return [
        {
            "age": age,
            "cost": calculate_annual_fehb_cost(
                coverage_level, age, age - retirement_age, healthcare_inflation
            ),
        }
        for age in range(retirement_age, end_age + 1)
    ]
