"""
Pydantic models for the retirement projection engine.
All data models and validation logic.

Every model is frozen: a Profile is never changed in place, updates go
through ``projection.merge.merge_profile`` which builds a new value.
"""

from datetime import date
from typing import Any, List, Dict, Optional, Literal
from pydantic import BaseModel, ConfigDict, Field, conint, confloat

from config import (
    DEFAULT_COLA_RATE,
    DEFAULT_COLLEGE_START_AGE,
    DEFAULT_COLLEGE_YEARS,
    DEFAULT_HEALTHCARE_INFLATION,
    DEFAULT_INFLATION_RATE,
    DEFAULT_TSP_DRAWDOWN_RATE,
    DEFAULT_TSP_RETURN,
)

RetirementSystem = Literal["FERS", "CSRS", "auto"]
ResolvedSystem = Literal["FERS", "CSRS"]
SurvivorAnnuityType = Literal["none", "standard", "court_ordered"]
FEHBCoverageLevel = Literal["self", "self+one", "self+family"]
Phase = Literal["working", "bridge", "drawing"]


class FrozenModel(BaseModel):
    """Base for immutable value objects."""
    model_config = ConfigDict(frozen=True)


# ============================
# Personal Models
# ============================
class SpouseInfo(FrozenModel):
    """Spouse income tracked on its own retirement timeline"""
    name: str = ""
    age: conint(ge=0)  # age in the as-of year
    current_income: float = 0.0
    retirement_age: Optional[int] = None
    retirement_income: float = 0.0


class PersonalInfo(FrozenModel):
    birth_year: int
    life_expectancy: Optional[int] = None  # falls back to DEFAULT_LIFE_EXPECTANCY
    spouse: Optional[SpouseInfo] = None


# ============================
# Employment Models
# ============================
class ServicePeriod(FrozenModel):
    """One interval of creditable federal service"""
    start_date: date
    end_date: Optional[date] = None  # None while still employed
    system: RetirementSystem = "auto"
    is_active: bool = False


class HighThreeYears(FrozenModel):
    year1: float
    year2: float
    year3: float


class EmploymentInfo(FrozenModel):
    service_periods: List[ServicePeriod] = Field(default_factory=list)
    current_salary: float = 0.0
    high3_override: Optional[float] = None
    high_three_years: Optional[HighThreeYears] = None
    sick_leave_hours: confloat(ge=0) = 0.0


# ============================
# Retirement Choices
# ============================
class BridgeIncome(FrozenModel):
    """Part-time income window, independent of leave and claim ages"""
    enabled: bool = False
    annual_income: Optional[float] = None
    start_age: Optional[int] = None
    end_age: Optional[int] = None  # inclusive


class RetirementInfo(FrozenModel):
    survivor_annuity: SurvivorAnnuityType = "none"
    leave_service_age: Optional[int] = None  # stop federal employment
    claim_pension_age: Optional[int] = None  # start drawing the annuity
    bridge: Optional[BridgeIncome] = None


# ============================
# Savings Models
# ============================
class TSPInfo(FrozenModel):
    current_balance: float = 0.0
    annual_contribution: float = 0.0
    return_rate: float = DEFAULT_TSP_RETURN
    # Decimal fraction of salary; when set the agency match is added
    employee_contribution_percent: Optional[confloat(ge=0, le=1)] = None


class OtherAccount(FrozenModel):
    """IRA, brokerage, savings and similar accounts outside the TSP"""
    name: str = ""
    type: str = "other"  # "traditional_ira", "roth_ira", "401k", "brokerage", "savings", ...
    current_balance: float = 0.0
    annual_contribution: float = 0.0
    return_rate: Optional[float] = None


# ============================
# Assumptions
# ============================
class Assumptions(FrozenModel):
    inflation_rate: float = DEFAULT_INFLATION_RATE
    cola_rate: float = DEFAULT_COLA_RATE
    healthcare_inflation: float = DEFAULT_HEALTHCARE_INFLATION
    fehb_coverage_level: FEHBCoverageLevel = "self"
    tsp_drawdown_rate: Optional[confloat(ge=0, le=1)] = DEFAULT_TSP_DRAWDOWN_RATE
    annual_living_expenses: Optional[float] = None  # retirement spending in today's dollars


# ============================
# Planning Models
# ============================
class Child(FrozenModel):
    name: str = ""
    birth_year: int
    college_start_age: int = DEFAULT_COLLEGE_START_AGE
    college_years: int = DEFAULT_COLLEGE_YEARS
    annual_college_cost: float = 0.0


class LifeEvent(FrozenModel):
    """Dated cash outflow; a negative amount is a windfall"""
    name: str = ""
    type: str = "other"  # "home_purchase", "car_purchase", "major_expense", ...
    year: int
    amount: float = 0.0
    recurring: bool = False
    duration: conint(ge=1) = 1  # years, when recurring


MilestoneCriteria = Literal[
    "reach_age",
    "reach_milestone",
    "net_worth_above",
    "liquid_net_worth_above",
    "total_debt_below",
]


class Milestone(FrozenModel):
    """Planning target; evaluated against a projection, never drives it"""
    id: str
    name: str = ""
    criteria: MilestoneCriteria
    target_value: Optional[float] = None
    linked_milestone: Optional[str] = None


class Debt(FrozenModel):
    name: str = ""
    type: str = "other"  # "mortgage", "student_loan", "car_loan", "credit_card"
    current_balance: float = 0.0
    interest_rate: float = 0.0  # annual
    minimum_payment: float = 0.0  # monthly
    extra_payment: float = 0.0  # monthly


class Asset(FrozenModel):
    name: str = ""
    type: str = "other"  # "home", "car"
    current_value: float = 0.0
    appreciation_rate: float = 0.0


class PlanningInfo(FrozenModel):
    children: List[Child] = Field(default_factory=list)
    life_events: List[LifeEvent] = Field(default_factory=list)
    milestones: List[Milestone] = Field(default_factory=list)
    debts: List[Debt] = Field(default_factory=list)
    assets: List[Asset] = Field(default_factory=list)


# ============================
# Main Profile Model
# ============================
class Profile(FrozenModel):
    """Complete retirement profile; the engine's only input"""
    personal: PersonalInfo
    employment: EmploymentInfo = EmploymentInfo()
    retirement: RetirementInfo = RetirementInfo()
    tsp: TSPInfo = TSPInfo()
    other_investments: List[OtherAccount] = Field(default_factory=list)
    assumptions: Assumptions = Assumptions()
    planning: PlanningInfo = PlanningInfo()


# ============================
# Response Models
# ============================
class ProjectionYear(FrozenModel):
    """One simulated year of the projection"""
    age: int
    year: int
    phase: Phase
    pension: float
    tsp_distribution: float
    social_security: float
    spouse_income: float
    other_income: float
    fehb_cost: float
    living_expenses: float
    college_costs: float
    life_event_costs: float
    debt_payments: float
    total_income: float
    expenses: float
    taxes: float
    net_income: float
    tsp_balance: float
    other_investments_balance: float
    total_debt: float
    total_assets: float
    net_worth: float
    liquid_net_worth: float
    cumulative_savings: float


class EligibilityInfo(FrozenModel):
    can_retire_immediately: bool
    earliest_retirement_age: float
    earliest_retirement_date: date
    full_benefits_age: int
    full_benefits_date: date
    fehb_eligible: bool
    total_years_of_service: float
    detected_system: RetirementSystem
    mra: int
    current_age: int


class PensionBreakdown(FrozenModel):
    high3: float
    years_of_service: float
    fers_years: float
    csrs_years: float
    accrual_rate: float
    survivor_reduction: float
    annual_pension: float
    monthly_pension: float
    survivor_benefit: float


class SummaryStats(FrozenModel):
    total_lifetime_income: float
    average_annual_income: float
    tsp_depletion_age: Optional[int]
    final_tsp_balance: float
    final_net_worth: float


class ProjectionResult(FrozenModel):
    """Everything a caller renders for one profile"""
    projections: List[ProjectionYear]
    eligibility: EligibilityInfo
    pension_breakdown: PensionBreakdown
    summary: SummaryStats


class MilestoneStatus(FrozenModel):
    id: str
    name: str
    achieved: bool
    achieved_age: Optional[int] = None
    achieved_year: Optional[int] = None


class ScenarioSummary(FrozenModel):
    name: str
    annual_pension: float
    first_year_income: float
    lifetime_income: float
    final_tsp_balance: float
    final_net_worth: float
    tsp_depletion_age: Optional[int]


class ScenarioComparison(FrozenModel):
    scenarios: List[ScenarioSummary]
    best_lifetime_income: str
    best_final_net_worth: str


# ============================
# Request Models
# ============================
class ProjectionRequest(BaseModel):
    profile: Profile
    as_of: Optional[date] = None  # defaults to today at the API boundary


class NamedProfile(BaseModel):
    name: str
    profile: Profile


class CompareRequest(BaseModel):
    scenarios: List[NamedProfile]
    as_of: Optional[date] = None


class MergeRequest(BaseModel):
    profile: Profile
    updates: Dict[str, Any] = Field(default_factory=dict)


class SustainableWithdrawalRequest(BaseModel):
    balance: float
    years: int
    return_rate: confloat(gt=-1) = DEFAULT_TSP_RETURN


class TSPSimulationRequest(BaseModel):
    current_balance: confloat(ge=0)
    annual_contribution: confloat(ge=0) = 0.0
    return_rate: confloat(gt=-1) = DEFAULT_TSP_RETURN
    drawdown_rate: confloat(ge=0, le=1) = DEFAULT_TSP_DRAWDOWN_RATE
    years_contributing: conint(ge=0) = 0
    years_drawing: conint(ge=0) = 0


class FixedWithdrawalRequest(BaseModel):
    balance: confloat(ge=0)
    annual_distribution: confloat(ge=0)
    return_rate: confloat(gt=-1) = DEFAULT_TSP_RETURN
    years: conint(ge=0)


class EmployerMatchRequest(BaseModel):
    salary: float
    employee_contribution_percent: confloat(ge=0, le=1)


class FEHBCostRequest(BaseModel):
    coverage_level: FEHBCoverageLevel = "self"
    start_age: int
    end_age: int
    healthcare_inflation: float = DEFAULT_HEALTHCARE_INFLATION
