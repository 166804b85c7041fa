"""
Core projection engine for federal retirement planning.
Generates year-by-year projections combining pension, TSP, FEHB,
Social Security and household cash flow.
"""

import logging
import math
from datetime import date
from typing import List, Optional, Tuple

import numpy as np

from config import DEFAULT_LIFE_EXPECTANCY, DEFAULT_OTHER_ACCOUNT_RETURN, DEFAULT_TSP_DRAWDOWN_RATE
from models import EligibilityInfo, PensionBreakdown, Profile, ProjectionResult, ProjectionYear
from .coverage import calculate_annual_fehb_cost
from .heuristics import SocialSecurityModel, TaxModel, estimate_social_security, estimate_taxes
from .pension import calculate_annual_pension, calculate_pension_with_cola
from .savings import (
    accumulate_year,
    calculate_balance_after_year,
    calculate_distribution,
    calculate_employer_match,
)
from .service import determine_eligibility
from .summary import summarize

logger = logging.getLogger(__name__)


def amortize_debt(balance: float, interest_rate: float, annual_payment: float) -> Tuple[float, float]:
    """
    One year of a debt: interest accrues, then the payment comes off.

    Returns:
        (remaining_balance, amount_paid)
    """
    if balance <= 0:
        return 0.0, 0.0
    owed = balance * (1 + interest_rate)
    paid = min(annual_payment, owed)
    return max(0.0, owed - paid), paid


class ProjectionEngine:
    """Deterministic year-by-year simulation of one profile."""

    def __init__(
        self,
        profile: Profile,
        as_of: date,
        social_security: SocialSecurityModel = estimate_social_security,
        tax_estimator: TaxModel = estimate_taxes,
    ):
        """
        Initialize the projection engine.

        Args:
            profile: The retirement profile to project; never modified
            as_of: Anchor date for ages and ongoing service periods
            social_security: (high3, age) -> annual benefit
            tax_estimator: gross income -> annual tax
        """
        self.profile = profile
        self.as_of = as_of
        self.social_security = social_security
        self.tax_estimator = tax_estimator

        self.current_age = as_of.year - profile.personal.birth_year
        self.end_age = profile.personal.life_expectancy or DEFAULT_LIFE_EXPECTANCY

        self._eligibility = determine_eligibility(profile, as_of)
        self._pension = calculate_annual_pension(profile, as_of)
        self.leave_age, self.claim_age = self._resolve_ages()

    def _resolve_ages(self) -> Tuple[int, int]:
        """Leave age falls back to the claim age, then to earliest eligibility."""
        retirement = self.profile.retirement
        if retirement.leave_service_age is not None:
            leave_age = retirement.leave_service_age
        elif retirement.claim_pension_age is not None:
            leave_age = retirement.claim_pension_age
        else:
            leave_age = int(math.ceil(self._eligibility.earliest_retirement_age))

        claim_age = retirement.claim_pension_age
        if claim_age is None:
            claim_age = leave_age
        return leave_age, claim_age

    def eligibility(self) -> EligibilityInfo:
        return self._eligibility

    def pension_breakdown(self) -> PensionBreakdown:
        return self._pension

    def phase_for(self, age: int) -> str:
        if age < self.leave_age:
            return "working"
        if age < self.claim_age:
            return "bridge"
        return "drawing"

    def _tsp_contribution(self) -> float:
        """Employee contribution plus the agency match when one is configured."""
        tsp = self.profile.tsp
        contribution = tsp.annual_contribution
        if tsp.employee_contribution_percent is not None:
            contribution += calculate_employer_match(
                self.profile.employment.current_salary, tsp.employee_contribution_percent
            )
        return contribution

    def _blended_other_return(self) -> float:
        """Balance-weighted return across the non-TSP accounts."""
        accounts = self.profile.other_investments
        if not accounts:
            return 0.0
        rates = np.array(
            [a.return_rate if a.return_rate is not None else DEFAULT_OTHER_ACCOUNT_RETURN for a in accounts],
            dtype=float,
        )
        balances = np.array([a.current_balance for a in accounts], dtype=float)
        if balances.sum() <= 0:
            return float(rates.mean())
        return float(np.average(rates, weights=balances))

    def _spouse_income(self, age: int) -> float:
        spouse = self.profile.personal.spouse
        if spouse is None:
            return 0.0
        spouse_age = spouse.age + (age - self.current_age)
        if spouse.retirement_age is not None and spouse_age >= spouse.retirement_age:
            return spouse.retirement_income
        return spouse.current_income

    def _bridge_income(self, age: int) -> float:
        bridge = self.profile.retirement.bridge
        if bridge is None or not bridge.enabled:
            return 0.0
        # Incomplete settings switch bridge income off
        if not bridge.annual_income or bridge.start_age is None or bridge.end_age is None:
            return 0.0
        if bridge.start_age <= age <= bridge.end_age:
            return bridge.annual_income
        return 0.0

    def _college_costs(self, year: int) -> float:
        total = 0.0
        for child in self.profile.planning.children:
            child_age = year - child.birth_year
            if child.college_start_age <= child_age < child.college_start_age + child.college_years:
                total += child.annual_college_cost
        return total

    def _life_event_costs(self, year: int) -> float:
        total = 0.0
        for event in self.profile.planning.life_events:
            if event.recurring:
                if event.year <= year < event.year + event.duration:
                    total += event.amount
            elif event.year == year:
                total += event.amount
        return total

    def _living_expenses(self, age: int) -> float:
        assumptions = self.profile.assumptions
        if not assumptions.annual_living_expenses:
            return 0.0
        years = age - self.current_age
        return assumptions.annual_living_expenses * (1 + assumptions.inflation_rate) ** years

    def run(self) -> List[ProjectionYear]:
        """
        Run the projection from the current age through life expectancy.

        Returns:
            Freshly built list of ProjectionYear, one per age
        """
        profile = self.profile
        tsp = profile.tsp
        assumptions = profile.assumptions
        planning = profile.planning

        drawdown_rate = assumptions.tsp_drawdown_rate
        if drawdown_rate is None:
            drawdown_rate = DEFAULT_TSP_DRAWDOWN_RATE
        tsp_contribution = self._tsp_contribution()
        other_contribution = sum(a.annual_contribution for a in profile.other_investments)
        other_return = self._blended_other_return()
        base_pension = self._pension.annual_pension
        high3 = self._pension.high3

        # Running state carried between years
        tsp_balance = tsp.current_balance
        other_balance = sum(a.current_balance for a in profile.other_investments)
        debt_balances = [d.current_balance for d in planning.debts]
        asset_values = [a.current_value for a in planning.assets]
        cumulative_savings = 0.0

        logger.debug(
            "Projecting ages %s-%s (leave %s, claim %s)",
            self.current_age, self.end_age, self.leave_age, self.claim_age,
        )

        projections: List[ProjectionYear] = []
        for age in range(self.current_age, self.end_age + 1):
            year = profile.personal.birth_year + age
            phase = self.phase_for(age)
            working = phase == "working"

            # 1. TSP
            if working:
                tsp_distribution = 0.0
                tsp_balance = accumulate_year(tsp_balance, tsp_contribution, tsp.return_rate)
            else:
                tsp_distribution = calculate_distribution(tsp_balance, drawdown_rate)
                tsp_balance = calculate_balance_after_year(tsp_balance, tsp_distribution, tsp.return_rate)

            # 2. Pension with COLA from the claim age
            pension = 0.0
            if phase == "drawing":
                pension = calculate_pension_with_cola(base_pension, age - self.claim_age, assumptions.cola_rate)

            # 3. FEHB once off the payroll
            fehb_cost = 0.0
            living_expenses = 0.0
            if not working:
                fehb_cost = calculate_annual_fehb_cost(
                    assumptions.fehb_coverage_level,
                    age,
                    age - self.leave_age,
                    assumptions.healthcare_inflation,
                )
                living_expenses = self._living_expenses(age)

            # 4-6. Other income sources
            social_security = self.social_security(high3, age)
            spouse_income = self._spouse_income(age)
            other_income = self._bridge_income(age)

            # 7. Other accounts
            if working:
                other_balance += other_contribution
            other_balance *= 1 + other_return

            # 8-9. Planning costs
            college_costs = self._college_costs(year)
            life_event_costs = self._life_event_costs(year)

            # 10. Debts
            debt_payments = 0.0
            for i, debt in enumerate(planning.debts):
                annual_payment = 12 * (debt.minimum_payment + debt.extra_payment)
                debt_balances[i], paid = amortize_debt(debt_balances[i], debt.interest_rate, annual_payment)
                debt_payments += paid

            # 11. Assets
            for i, asset in enumerate(planning.assets):
                asset_values[i] *= 1 + asset.appreciation_rate

            total_income = pension + tsp_distribution + social_security + spouse_income + other_income
            expenses = fehb_cost + living_expenses + college_costs + life_event_costs + debt_payments
            taxes = self.tax_estimator(total_income)
            net_income = total_income - expenses - taxes
            cumulative_savings += net_income

            reported_tsp = max(0.0, tsp_balance)
            reported_other = max(0.0, other_balance)
            total_debt = sum(debt_balances)
            total_assets = sum(asset_values)

            projections.append(ProjectionYear(
                age=age,
                year=year,
                phase=phase,
                pension=pension,
                tsp_distribution=tsp_distribution,
                social_security=social_security,
                spouse_income=spouse_income,
                other_income=other_income,
                fehb_cost=fehb_cost,
                living_expenses=living_expenses,
                college_costs=college_costs,
                life_event_costs=life_event_costs,
                debt_payments=debt_payments,
                total_income=total_income,
                expenses=expenses,
                taxes=taxes,
                net_income=net_income,
                tsp_balance=reported_tsp,
                other_investments_balance=reported_other,
                total_debt=total_debt,
                total_assets=total_assets,
                net_worth=reported_tsp + reported_other + total_assets - total_debt,
                liquid_net_worth=reported_tsp + reported_other - total_debt,
                cumulative_savings=cumulative_savings,
            ))

        logger.debug(
            "Projection complete: %d years, annual pension %.2f",
            len(projections), base_pension,
        )
        return projections


def generate_projections(profile: Profile, as_of: date) -> List[ProjectionYear]:
    return ProjectionEngine(profile, as_of).run()


def get_pension_breakdown(profile: Profile, as_of: date) -> PensionBreakdown:
    return calculate_annual_pension(profile, as_of)


def run_projection(
    profile: Profile,
    as_of: date,
    social_security: Optional[SocialSecurityModel] = None,
    tax_estimator: Optional[TaxModel] = None,
) -> ProjectionResult:
    """Projection, eligibility and pension breakdown from one profile."""
    engine = ProjectionEngine(
        profile,
        as_of,
        social_security=social_security or estimate_social_security,
        tax_estimator=tax_estimator or estimate_taxes,
    )
    projections = engine.run()
    return ProjectionResult(
        projections=projections,
        eligibility=engine.eligibility(),
        pension_breakdown=engine.pension_breakdown(),
        summary=summarize(projections),
    )
