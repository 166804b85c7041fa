from __future__ import annotations
import logging
from dataclasses import asdict
from datetime import date
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from config import (
    API_DESCRIPTION,
    API_TITLE,
    API_VERSION,
    CORS_CREDENTIALS,
    CORS_HEADERS,
    CORS_METHODS,
    CORS_ORIGINS,
    LOG_FORMAT,
    LOG_LEVEL,
    MEDICARE_START_AGE,
)
from models import (
    CompareRequest,
    EligibilityInfo,
    EmployerMatchRequest,
    FEHBCostRequest,
    FixedWithdrawalRequest,
    MergeRequest,
    MilestoneStatus,
    PensionBreakdown,
    Profile,
    ProjectionRequest,
    ProjectionResult,
    ScenarioComparison,
    SustainableWithdrawalRequest,
    TSPSimulationRequest,
)
from projection import (
    ProjectionError,
    compare_scenarios,
    determine_eligibility,
    evaluate_milestones,
    get_pension_breakdown,
    merge_profile,
    run_projection,
)
from projection.coverage import calculate_medicare_savings, project_fehb_costs
from projection.samples import EARLY_RETIREMENT, SAMPLE_SCENARIOS, get_sample_scenario
from projection.savings import (
    calculate_balance_at_retirement,
    calculate_employer_match,
    calculate_sustainable_withdrawal,
    project_tsp_balance,
    simulate_tsp,
)

logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
logger = logging.getLogger(__name__)


def _as_of(requested: Optional[date]) -> date:
    # The only place the wall clock is read
    return requested or date.today()


# ============================
# FastAPI app
# ============================
app = FastAPI(title=API_TITLE, description=API_DESCRIPTION, version=API_VERSION)
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=CORS_CREDENTIALS,
    allow_methods=CORS_METHODS,
    allow_headers=CORS_HEADERS,
)

@app.get("/")
def root():
    return {"message": API_TITLE, "docs": "Visit /docs for API documentation"}

@app.get("/api/default_profile")
def default_profile() -> Profile:
    return EARLY_RETIREMENT.profile

@app.get("/api/sample_scenarios")
def list_sample_scenarios():
    return [
        {"id": s.id, "name": s.name, "description": s.description, "tags": s.tags}
        for s in SAMPLE_SCENARIOS.values()
    ]

@app.get("/api/sample_scenarios/{sid}")
def sample_scenario(sid: str) -> Profile:
    scenario = get_sample_scenario(sid)
    if scenario is None:
        raise HTTPException(404, "Not found")
    return scenario.profile

@app.post("/api/project")
def project(req: ProjectionRequest) -> ProjectionResult:
    as_of = _as_of(req.as_of)
    logger.info("Projection requested (birth year %s, as of %s)", req.profile.personal.birth_year, as_of)
    try:
        return run_projection(req.profile, as_of)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

@app.post("/api/eligibility")
def eligibility(req: ProjectionRequest) -> EligibilityInfo:
    return determine_eligibility(req.profile, _as_of(req.as_of))

@app.post("/api/pension")
def pension(req: ProjectionRequest) -> PensionBreakdown:
    return get_pension_breakdown(req.profile, _as_of(req.as_of))

@app.post("/api/milestones")
def milestones(req: ProjectionRequest) -> List[MilestoneStatus]:
    result = run_projection(req.profile, _as_of(req.as_of))
    return evaluate_milestones(result.projections, req.profile.planning.milestones)

@app.post("/api/profile/merge")
def merge(req: MergeRequest) -> Profile:
    try:
        return merge_profile(req.profile, req.updates)
    except ValueError as e:
        # pydantic's ValidationError is a ValueError too
        raise HTTPException(status_code=400, detail=str(e))

@app.post("/api/compare")
def compare(req: CompareRequest) -> ScenarioComparison:
    try:
        return compare_scenarios([(s.name, s.profile) for s in req.scenarios], _as_of(req.as_of))
    except ProjectionError as e:
        raise HTTPException(status_code=400, detail=str(e))

@app.post("/api/tsp/sustainable_withdrawal")
def sustainable_withdrawal(req: SustainableWithdrawalRequest) -> Dict[str, float]:
    amount = calculate_sustainable_withdrawal(req.balance, req.years, req.return_rate)
    return {"annual_withdrawal": amount}

@app.post("/api/tsp/simulate")
def tsp_simulate(req: TSPSimulationRequest) -> Dict[str, Any]:
    path = simulate_tsp(
        req.current_balance,
        req.annual_contribution,
        req.return_rate,
        req.drawdown_rate,
        req.years_contributing,
        req.years_drawing,
    )
    balance_at_retirement = calculate_balance_at_retirement(
        req.current_balance, req.annual_contribution, req.years_contributing, req.return_rate
    )
    return {"balance_at_retirement": balance_at_retirement, "years": [asdict(y) for y in path]}

@app.post("/api/tsp/fixed_withdrawal")
def tsp_fixed_withdrawal(req: FixedWithdrawalRequest) -> Dict[str, List[float]]:
    balances = project_tsp_balance(req.balance, req.annual_distribution, req.return_rate, req.years)
    return {"balances": balances}

@app.post("/api/tsp/employer_match")
def employer_match(req: EmployerMatchRequest) -> Dict[str, float]:
    return {"annual_match": calculate_employer_match(req.salary, req.employee_contribution_percent)}

@app.post("/api/fehb/costs")
def fehb_costs(req: FEHBCostRequest) -> List[Dict[str, Any]]:
    costs = project_fehb_costs(req.coverage_level, req.start_age, req.end_age, req.healthcare_inflation)
    return [
        {**row, "medicare_savings": calculate_medicare_savings(row["cost"]) if row["age"] >= MEDICARE_START_AGE else 0.0}
        for row in costs
    ]
