"""
Thrift Savings Plan (TSP) projection calculator.
Accumulation while employed, percentage drawdown once separated.
"""

from dataclasses import dataclass
from typing import List

from config import (
    TSP_AUTOMATIC_CONTRIBUTION,
    TSP_FULL_MATCH_LIMIT,
    TSP_HALF_MATCH_LIMIT,
    TSP_MAX_AGENCY_CONTRIBUTION,
)


@dataclass(frozen=True)
class TSPYear:
    """One year of the TSP simulation."""
    year_index: int
    phase: str  # "accumulation" | "drawdown"
    contribution: float
    distribution: float
    end_balance: float


def accumulate_year(balance: float, contribution: float, return_rate: float) -> float:
    """Contribution lands at the start of the year, then the year's growth."""
    return (balance + contribution) * (1 + return_rate)


def calculate_balance_at_retirement(
    current_balance: float,
    annual_contribution: float,
    years_until_retirement: int,
    return_rate: float,
) -> float:
    balance = current_balance
    for _ in range(max(0, years_until_retirement)):
        balance = accumulate_year(balance, annual_contribution, return_rate)
    return balance


def calculate_distribution(balance: float, drawdown_rate: float) -> float:
    return max(0.0, balance) * drawdown_rate


def calculate_balance_after_year(starting_balance: float, annual_distribution: float, return_rate: float) -> float:
    """Withdraw at the start of the year, grow what is left; never below zero."""
    remaining = starting_balance - annual_distribution
    return max(0.0, remaining * (1 + return_rate))


def simulate_tsp(
    current_balance: float,
    annual_contribution: float,
    return_rate: float,
    drawdown_rate: float,
    years_contributing: int,
    years_drawing: int,
) -> List[TSPYear]:
    """
    Year-by-year TSP path: ``years_contributing`` accumulation years
    followed by ``years_drawing`` drawdown years.
    """
    path: List[TSPYear] = []
    balance = current_balance

    for i in range(max(0, years_contributing)):
        balance = accumulate_year(balance, annual_contribution, return_rate)
        path.append(TSPYear(i, "accumulation", annual_contribution, 0.0, max(0.0, balance)))

    start = len(path)
    for i in range(max(0, years_drawing)):
        distribution = calculate_distribution(balance, drawdown_rate)
        balance = calculate_balance_after_year(balance, distribution, return_rate)
        path.append(TSPYear(start + i, "drawdown", 0.0, distribution, balance))

    return path


def project_tsp_balance(
    initial_balance: float,
    annual_distribution: float,
    return_rate: float,
    years: int,
) -> List[float]:
    """Balance path under a fixed-dollar withdrawal."""
    balances = [initial_balance]
    current = initial_balance
    for _ in range(years):
        current = calculate_balance_after_year(current, annual_distribution, return_rate)
        balances.append(current)
    return balances


def calculate_sustainable_withdrawal(current_balance: float, years_to_last: int, return_rate: float) -> float:
    """
    Level annual payment that exhausts ``current_balance`` over
    ``years_to_last`` years: PMT = PV * r(1+r)^n / ((1+r)^n - 1).
    """
    if years_to_last <= 0:
        return current_balance
    if return_rate == 0:
        return current_balance / years_to_last

    growth = (1 + return_rate) ** years_to_last
    if growth == 1:
        return current_balance / years_to_last
    return current_balance * (return_rate * growth) / (growth - 1)


def calculate_employer_match(salary: float, employee_contribution_percent: float) -> float:
    """
    FERS agency contributions:
    - 1% automatic, even at 0% employee contribution
    - 100% match on the first 3%
    - 50% match on the next 2%
    Capped at 5% of salary.
    """
    automatic = salary * TSP_AUTOMATIC_CONTRIBUTION
    if employee_contribution_percent <= 0:
        return automatic

    match = automatic + salary * min(employee_contribution_percent, TSP_FULL_MATCH_LIMIT)

    if employee_contribution_percent >= TSP_HALF_MATCH_LIMIT:
        match += salary * (TSP_HALF_MATCH_LIMIT - TSP_FULL_MATCH_LIMIT) * 0.5
    elif employee_contribution_percent > TSP_FULL_MATCH_LIMIT:
        match += salary * (employee_contribution_percent - TSP_FULL_MATCH_LIMIT) * 0.5

    return min(match, salary * TSP_MAX_AGENCY_CONTRIBUTION)
