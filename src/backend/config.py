"""
Application configuration and constants.
"""

import os
from datetime import date
from typing import Dict, List

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Retirement system detection
FERS_START_DATE = date(1984, 1, 1)  # hires before this date default to CSRS
DAYS_PER_YEAR = 365.25
SICK_LEAVE_HOURS_PER_YEAR = 2087  # one work year of hours

# Pension accrual
FERS_ACCRUAL_RATE = 0.01
CSRS_ACCRUAL_RATES: Dict[str, float] = {
    "first5": 0.015,
    "next5": 0.0175,
    "beyond10": 0.02,
}
# Both elections share one constant for now
SURVIVOR_ANNUITY_REDUCTION: Dict[str, float] = {
    "standard": 0.10,
    "court_ordered": 0.10,
}
SURVIVOR_BENEFIT_SHARE = 0.5
FULL_BENEFITS_AGE = 62

# Default assumptions
DEFAULT_LIFE_EXPECTANCY = 85
DEFAULT_INFLATION_RATE = 0.035
DEFAULT_COLA_RATE = 0.025
DEFAULT_HEALTHCARE_INFLATION = 0.05
DEFAULT_TSP_RETURN = 0.065
DEFAULT_TSP_DRAWDOWN_RATE = 0.04
DEFAULT_OTHER_ACCOUNT_RETURN = 0.06

# TSP agency match
TSP_AUTOMATIC_CONTRIBUTION = 0.01
TSP_FULL_MATCH_LIMIT = 0.03
TSP_HALF_MATCH_LIMIT = 0.05
TSP_MAX_AGENCY_CONTRIBUTION = 0.05

# FEHB (annual employee share, 2026 estimates)
FEHB_BASE_COSTS: Dict[str, float] = {
    "self": 4200,
    "self+one": 9600,
    "self+family": 11800,
}
FEHB_AGE_ADJUSTMENT_START = 65
FEHB_AGE_ADJUSTMENT_PER_YEAR = 0.01
MEDICARE_START_AGE = 65
MEDICARE_PART_B_ANNUAL_PREMIUM = 2000
MEDICARE_SUPPLEMENT_REDUCTION = 0.25

# Rough estimates, replaceable via heuristics module
SOCIAL_SECURITY_CLAIM_AGE = 67
SOCIAL_SECURITY_REPLACEMENT_RATE = 0.30
EFFECTIVE_TAX_RATE = 0.15

# Planning defaults
DEFAULT_COLLEGE_START_AGE = 18
DEFAULT_COLLEGE_YEARS = 4

# API configuration
API_VERSION = "1.0.0"
API_TITLE = "Federal Retirement Projection API"
API_DESCRIPTION = "Year-by-year FERS/CSRS retirement projections with TSP, FEHB and household cash flow"

# CORS configuration
CORS_ORIGINS: List[str] = os.getenv("CORS_ORIGINS", "*").split(",")
CORS_CREDENTIALS = True
CORS_METHODS = ["*"]
CORS_HEADERS = ["*"]

# Logging configuration
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
