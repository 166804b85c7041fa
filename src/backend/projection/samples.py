"""
Pre-built scenarios to help users understand the tool.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional

from models import (
    EmploymentInfo,
    PersonalInfo,
    Profile,
    RetirementInfo,
    ServicePeriod,
    SpouseInfo,
    TSPInfo,
)


@dataclass(frozen=True)
class SampleScenario:
    id: str
    name: str
    description: str
    profile: Profile
    tags: List[str] = field(default_factory=list)


BOOMERANG_FED = SampleScenario(
    id="boomerang-fed",
    name="The Boomerang Fed",
    description=(
        "Joined federal service in 2000, left for the private sector in 2008, "
        "returned in 2015. Exploring retirement options with a service break."
    ),
    tags=["service-break", "mid-career", "fers"],
    profile=Profile(
        personal=PersonalInfo(birth_year=1980),
        employment=EmploymentInfo(
            service_periods=[
                ServicePeriod(start_date=date(2000, 1, 1), end_date=date(2008, 12, 31), system="FERS"),
                ServicePeriod(start_date=date(2015, 1, 1), system="FERS", is_active=True),
            ],
            current_salary=95_000,
        ),
        retirement=RetirementInfo(survivor_annuity="none", claim_pension_age=60),
        tsp=TSPInfo(current_balance=120_000, annual_contribution=10_000),
    ),
)

EARLY_RETIREMENT = SampleScenario(
    id="early-retirement",
    name="Early Retirement Dream",
    description=(
        "Hired in 1988 with continuous service. Exploring retirement at 55 "
        "with survivor benefits for a spouse."
    ),
    tags=["early-retirement", "long-career", "fers", "survivor-benefits"],
    profile=Profile(
        personal=PersonalInfo(birth_year=1971, spouse=SpouseInfo(age=52)),
        employment=EmploymentInfo(
            service_periods=[
                ServicePeriod(start_date=date(1988, 1, 1), system="FERS", is_active=True),
            ],
            current_salary=155_000,
        ),
        retirement=RetirementInfo(survivor_annuity="standard", claim_pension_age=55),
        tsp=TSPInfo(current_balance=650_000, annual_contribution=23_000),
    ),
)

LONG_CAREER_HEALTHCARE = SampleScenario(
    id="long-career-healthcare",
    name="Long Career + Healthcare Focus",
    description=(
        "Continuous service since 1992, nearing traditional retirement age. "
        "Main concern is the healthcare transition to Medicare and FEHB."
    ),
    tags=["traditional-retirement", "healthcare", "fers", "single"],
    profile=Profile(
        personal=PersonalInfo(birth_year=1963),
        employment=EmploymentInfo(
            service_periods=[
                ServicePeriod(start_date=date(1992, 1, 1), system="FERS", is_active=True),
            ],
            current_salary=140_000,
        ),
        retirement=RetirementInfo(survivor_annuity="none", claim_pension_age=62),
        tsp=TSPInfo(current_balance=520_000, annual_contribution=20_000),
    ),
)

SAMPLE_SCENARIOS: Dict[str, SampleScenario] = {
    s.id: s for s in (BOOMERANG_FED, EARLY_RETIREMENT, LONG_CAREER_HEALTHCARE)
}


def get_sample_scenario(sid: str) -> Optional[SampleScenario]:
    return SAMPLE_SCENARIOS.get(sid)
