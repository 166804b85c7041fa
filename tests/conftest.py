"""
Shared fixtures for projection engine testing.
"""

import sys
import os
from datetime import date

import pytest

# Add backend to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src', 'backend'))

from models import Profile


AS_OF = date(2026, 1, 1)


@pytest.fixture
def as_of():
    """Fixed anchor date so every run sees the same ages."""
    return AS_OF


@pytest.fixture
def fers_profile_dict():
    """Single FERS career, retiring at 60, claiming at 62."""
    return {
        "personal": {"birth_year": 1970, "life_expectancy": 85},
        "employment": {
            "service_periods": [
                {"start_date": "1996-01-01", "system": "FERS", "is_active": True},
            ],
            "current_salary": 120000,
        },
        "retirement": {
            "survivor_annuity": "none",
            "leave_service_age": 60,
            "claim_pension_age": 62,
        },
        "tsp": {
            "current_balance": 400000,
            "annual_contribution": 20000,
            "return_rate": 0.06,
        },
        "assumptions": {
            "inflation_rate": 0.03,
            "cola_rate": 0.02,
            "healthcare_inflation": 0.05,
            "fehb_coverage_level": "self+one",
            "tsp_drawdown_rate": 0.04,
        },
    }


@pytest.fixture
def household_profile_dict(fers_profile_dict):
    """FERS profile with spouse, bridge income, accounts, debts, assets and plans."""
    data = dict(fers_profile_dict)
    data["personal"] = {
        "birth_year": 1970,
        "life_expectancy": 85,
        "spouse": {
            "name": "Pat",
            "age": 58,
            "current_income": 70000,
            "retirement_age": 65,
            "retirement_income": 25000,
        },
    }
    data["retirement"] = {
        **fers_profile_dict["retirement"],
        "bridge": {"enabled": True, "annual_income": 30000, "start_age": 61, "end_age": 63},
    }
    data["other_investments"] = [
        {"name": "Roth", "type": "roth_ira", "current_balance": 100000, "return_rate": 0.07},
        {"name": "Brokerage", "type": "brokerage", "current_balance": 50000, "return_rate": 0.04,
         "annual_contribution": 5000},
    ]
    data["assumptions"] = {**fers_profile_dict["assumptions"], "annual_living_expenses": 60000}
    data["planning"] = {
        "children": [
            {"name": "Sam", "birth_year": 2010, "annual_college_cost": 25000},
        ],
        "life_events": [
            {"name": "New roof", "type": "major_expense", "year": 2028, "amount": 18000},
            {"name": "Wedding help", "type": "other", "year": 2030, "amount": 5000,
             "recurring": True, "duration": 3},
        ],
        "debts": [
            {"name": "Mortgage", "type": "mortgage", "current_balance": 150000,
             "interest_rate": 0.04, "minimum_payment": 1500, "extra_payment": 200},
        ],
        "assets": [
            {"name": "Home", "type": "home", "current_value": 450000, "appreciation_rate": 0.03},
        ],
        "milestones": [
            {"id": "debt-free", "name": "Mortgage paid off", "criteria": "total_debt_below",
             "target_value": 1},
            {"id": "celebrate", "name": "Celebrate", "criteria": "reach_milestone",
             "linked_milestone": "debt-free"},
        ],
    }
    return data


@pytest.fixture
def fers_profile(fers_profile_dict):
    return Profile(**fers_profile_dict)


@pytest.fixture
def household_profile(household_profile_dict):
    return Profile(**household_profile_dict)


@pytest.fixture
def make_profile(fers_profile_dict):
    """Factory fixture: FERS profile with per-section overrides."""
    def _make(**sections):
        data = dict(fers_profile_dict)
        for key, value in sections.items():
            if isinstance(value, dict) and isinstance(data.get(key), dict):
                data[key] = {**data[key], **value}
            else:
                data[key] = value
        return Profile(**data)

    return _make
