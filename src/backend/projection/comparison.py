"""
Side-by-side comparison of several scenarios.
Runs the engine once per scenario and aggregates lifetime totals.
"""

import logging
from datetime import date
from typing import List, Sequence, Tuple

from models import Profile, ScenarioComparison, ScenarioSummary
from .engine import run_projection

logger = logging.getLogger(__name__)


class ProjectionError(ValueError):
    """Raised when a request cannot be turned into a projection."""


def compare_scenarios(scenarios: Sequence[Tuple[str, Profile]], as_of: date) -> ScenarioComparison:
    """
    Args:
        scenarios: (name, profile) pairs, compared in the given order
        as_of: Anchor date shared by every run

    Returns:
        Per-scenario totals plus the names of the leaders; ties go to
        the earlier scenario.
    """
    if not scenarios:
        raise ProjectionError("At least one scenario is required for a comparison")

    summaries: List[ScenarioSummary] = []
    for name, profile in scenarios:
        result = run_projection(profile, as_of)
        projections = result.projections
        summaries.append(ScenarioSummary(
            name=name,
            annual_pension=result.pension_breakdown.annual_pension,
            first_year_income=projections[0].total_income if projections else 0.0,
            lifetime_income=result.summary.total_lifetime_income,
            final_tsp_balance=result.summary.final_tsp_balance,
            final_net_worth=result.summary.final_net_worth,
            tsp_depletion_age=result.summary.tsp_depletion_age,
        ))

    logger.info("Compared %d scenarios", len(summaries))

    best_income = max(summaries, key=lambda s: s.lifetime_income)
    best_net_worth = max(summaries, key=lambda s: s.final_net_worth)
    return ScenarioComparison(
        scenarios=summaries,
        best_lifetime_income=best_income.name,
        best_final_net_worth=best_net_worth.name,
    )
