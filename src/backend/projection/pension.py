"""
Pension calculation logic.
Handles FERS and CSRS basic annuity calculations.
"""

from datetime import date

from config import (
    CSRS_ACCRUAL_RATES,
    FERS_ACCRUAL_RATE,
    SURVIVOR_ANNUITY_REDUCTION,
    SURVIVOR_BENEFIT_SHARE,
)
from models import EmploymentInfo, PensionBreakdown, Profile
from .service import calculate_service_by_system


def survivor_reduction_for(survivor_annuity: str) -> float:
    """Reduction applied to the retiree's own annuity for a survivor election."""
    return SURVIVOR_ANNUITY_REDUCTION.get(survivor_annuity, 0.0)


def _apply_survivor_reduction(annual_pension: float, survivor_annuity: str) -> float:
    return annual_pension * (1 - survivor_reduction_for(survivor_annuity))


def calculate_high3(employment: EmploymentInfo) -> float:
    """
    High-3 average salary.

    An explicit override wins, then the average of three supplied high
    years, then the current or last salary as an estimate.
    """
    if employment.high3_override:
        return employment.high3_override

    if employment.high_three_years is not None:
        years = employment.high_three_years
        return (years.year1 + years.year2 + years.year3) / 3

    return employment.current_salary


def calculate_fers_pension(high3: float, years_of_service: float, survivor_annuity: str = "none") -> float:
    """FERS basic annuity: 1% x High-3 x years."""
    annual_pension = high3 * FERS_ACCRUAL_RATE * years_of_service
    return _apply_survivor_reduction(annual_pension, survivor_annuity)


def calculate_csrs_pension(high3: float, years_of_service: float, survivor_annuity: str = "none") -> float:
    """
    CSRS basic annuity with graduated accrual:
    - 1.5% for the first 5 years
    - 1.75% for years 6-10
    - 2% for years beyond 10
    """
    annual_pension = 0.0

    first5 = min(5.0, years_of_service)
    annual_pension += high3 * CSRS_ACCRUAL_RATES["first5"] * first5

    if years_of_service > 5:
        next5 = min(5.0, years_of_service - 5)
        annual_pension += high3 * CSRS_ACCRUAL_RATES["next5"] * next5

    if years_of_service > 10:
        beyond10 = years_of_service - 10
        annual_pension += high3 * CSRS_ACCRUAL_RATES["beyond10"] * beyond10

    return _apply_survivor_reduction(annual_pension, survivor_annuity)


def calculate_mixed_pension(
    high3: float,
    fers_years: float,
    csrs_years: float,
    survivor_annuity: str = "none",
) -> float:
    """Each component unreduced, summed, then reduced once."""
    total_pension = 0.0
    if fers_years > 0:
        total_pension += calculate_fers_pension(high3, fers_years)
    if csrs_years > 0:
        total_pension += calculate_csrs_pension(high3, csrs_years)
    return _apply_survivor_reduction(total_pension, survivor_annuity)


def calculate_survivor_benefit(annual_pension: float, survivor_annuity: str) -> float:
    """What the survivor receives: half of the unreduced annuity."""
    reduction = survivor_reduction_for(survivor_annuity)
    if survivor_annuity == "none" or reduction >= 1:
        return 0.0
    unreduced = annual_pension / (1 - reduction)
    return unreduced * SURVIVOR_BENEFIT_SHARE


def calculate_pension_with_cola(base_pension: float, years_from_claim: float, cola_rate: float) -> float:
    return base_pension * (1 + cola_rate) ** years_from_claim


def _safe_ratio(numerator: float, denominator: float) -> float:
    if denominator == 0:
        return 0.0
    return numerator / denominator


def calculate_annual_pension(profile: Profile, as_of: date) -> PensionBreakdown:
    """Work out which system applies and build the pension breakdown."""
    employment = profile.employment
    survivor_annuity = profile.retirement.survivor_annuity
    high3 = calculate_high3(employment)
    service = calculate_service_by_system(
        employment.service_periods, as_of, employment.sick_leave_hours
    )
    fers_years, csrs_years = service.fers_years, service.csrs_years
    total_years = service.total_years

    if csrs_years > 0 and fers_years > 0:
        annual_pension = calculate_mixed_pension(high3, fers_years, csrs_years, survivor_annuity)
        accrual_rate = _safe_ratio(annual_pension, high3 * total_years)
    elif csrs_years > 0:
        annual_pension = calculate_csrs_pension(high3, csrs_years, survivor_annuity)
        accrual_rate = _safe_ratio(annual_pension, high3 * csrs_years)
    else:
        # FERS only (most common)
        annual_pension = calculate_fers_pension(high3, fers_years, survivor_annuity)
        accrual_rate = FERS_ACCRUAL_RATE

    return PensionBreakdown(
        high3=high3,
        years_of_service=total_years,
        fers_years=fers_years,
        csrs_years=csrs_years,
        accrual_rate=accrual_rate,
        survivor_reduction=survivor_reduction_for(survivor_annuity),
        annual_pension=annual_pension,
        monthly_pension=annual_pension / 12,
        survivor_benefit=calculate_survivor_benefit(annual_pension, survivor_annuity),
    )
