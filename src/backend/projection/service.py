"""
Retirement system detection and eligibility rules.
Classifies service history into FERS/CSRS years and works out MRA,
immediate-annuity eligibility and the earliest retirement age.
"""

from dataclasses import dataclass
from datetime import date
from typing import Callable, List, Sequence, Tuple

from config import (
    DAYS_PER_YEAR,
    FERS_START_DATE,
    FULL_BENEFITS_AGE,
    SICK_LEAVE_HOURS_PER_YEAR,
)
from models import EligibilityInfo, Profile, ResolvedSystem, RetirementSystem, ServicePeriod


@dataclass(frozen=True)
class ServiceBreakdown:
    """Creditable years split by retirement system."""
    fers_years: float
    csrs_years: float
    sick_leave_years: float = 0.0

    @property
    def total_years(self) -> float:
        return self.fers_years + self.csrs_years


def detect_retirement_system(start_date: date) -> ResolvedSystem:
    """Hires before the FERS start date are CSRS, everyone else FERS."""
    if start_date < FERS_START_DATE:
        return "CSRS"
    return "FERS"


def resolve_system(period: ServicePeriod) -> ResolvedSystem:
    if period.system == "auto":
        return detect_retirement_system(period.start_date)
    return period.system


def period_years(period: ServicePeriod, as_of: date) -> float:
    """Length of one period in fractional years; ongoing periods run to ``as_of``."""
    end = period.end_date or as_of
    return (end - period.start_date).days / DAYS_PER_YEAR


def calculate_total_service(periods: Sequence[ServicePeriod], as_of: date) -> float:
    # Breaks in service simply don't accrue
    return sum(period_years(p, as_of) for p in periods)


def sick_leave_credit(sick_leave_hours: float) -> float:
    return (sick_leave_hours or 0.0) / SICK_LEAVE_HOURS_PER_YEAR


def calculate_service_by_system(
    periods: Sequence[ServicePeriod],
    as_of: date,
    sick_leave_hours: float = 0.0,
) -> ServiceBreakdown:
    """
    Sum service years per system and add unused sick leave.

    The sick leave credit goes to whichever system already has more
    years (FERS on a tie, and FERS when there is no service at all).
    """
    fers_years = 0.0
    csrs_years = 0.0

    for period in periods:
        years = period_years(period, as_of)
        if resolve_system(period) == "CSRS":
            csrs_years += years
        else:
            fers_years += years

    credit = sick_leave_credit(sick_leave_hours)
    if csrs_years > fers_years:
        csrs_years += credit
    else:
        fers_years += credit

    return ServiceBreakdown(fers_years=fers_years, csrs_years=csrs_years, sick_leave_years=credit)


def calculate_mra(birth_year: int) -> int:
    """Minimum Retirement Age by birth year."""
    if birth_year < 1948:
        return 55
    if birth_year <= 1952:
        return 55
    if birth_year <= 1969:
        return 56
    return 57


def can_retire_now(current_age: float, total_years: float, birth_year: int) -> bool:
    """Immediate annuity: 62/5, 60/20, MRA/30 or MRA/10 (reduced)."""
    mra = calculate_mra(birth_year)

    if current_age >= 62 and total_years >= 5:
        return True
    if current_age >= 60 and total_years >= 20:
        return True
    if current_age >= mra and total_years >= 30:
        return True
    if current_age >= mra and total_years >= 10:
        return True
    return False


def is_fehb_eligible(total_years: float) -> bool:
    # Simplified: immediate annuity requirement is not checked here
    return total_years >= 5


# Checked in order, first match wins
_EARLIEST_AGE_RULES: List[Tuple[float, Callable[[int, int], float]]] = [
    (5, lambda mra, current_age: 62),
    (20, lambda mra, current_age: min(60, current_age)),
    (30, lambda mra, current_age: min(mra, current_age)),
    (10, lambda mra, current_age: min(mra, current_age)),
]


def calculate_earliest_retirement_age(
    birth_year: int,
    total_years: float,
    current_age: int,
) -> Tuple[float, float]:
    """
    Earliest age at which an immediate annuity is available.

    Returns:
        (age, years_of_service) where years_of_service is the service
        the age is based on (5 when the person is not yet vested).
    """
    mra = calculate_mra(birth_year)

    for min_years, age_for in _EARLIEST_AGE_RULES:
        if total_years >= min_years:
            return age_for(mra, current_age), total_years

    # Not yet vested: project forward to five years of service
    years_until_vested = max(0.0, 5 - total_years)
    return max(62, current_age + years_until_vested), 5


def determine_eligibility(profile: Profile, as_of: date) -> EligibilityInfo:
    """Eligibility snapshot for ``profile`` as of the given date."""
    birth_year = profile.personal.birth_year
    current_age = as_of.year - birth_year
    employment = profile.employment

    service = calculate_service_by_system(
        employment.service_periods, as_of, employment.sick_leave_hours
    )
    total_years = service.total_years
    mra = calculate_mra(birth_year)
    earliest_age, _ = calculate_earliest_retirement_age(birth_year, total_years, current_age)

    return EligibilityInfo(
        can_retire_immediately=can_retire_now(current_age, total_years, birth_year),
        earliest_retirement_age=earliest_age,
        earliest_retirement_date=date(birth_year + int(earliest_age), 1, 1),
        full_benefits_age=FULL_BENEFITS_AGE,
        full_benefits_date=date(birth_year + FULL_BENEFITS_AGE, 1, 1),
        fehb_eligible=is_fehb_eligible(total_years),
        total_years_of_service=total_years,
        detected_system=detect_primary_system(service),
        mra=mra,
        current_age=current_age,
    )


def detect_primary_system(service: ServiceBreakdown) -> RetirementSystem:
    fers, csrs = service.fers_years, service.csrs_years
    if fers > 0 and csrs == 0:
        return "FERS"
    if csrs > 0 and fers == 0:
        return "CSRS"
    if fers > csrs:
        return "FERS"
    if csrs > 0:
        return "CSRS"
    return "auto"
