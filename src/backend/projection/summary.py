"""
Summary statistics over a finished projection.
"""

from typing import Sequence

import numpy as np

from models import ProjectionYear, SummaryStats


def summarize(projections: Sequence[ProjectionYear]) -> SummaryStats:
    if not projections:
        return SummaryStats(
            total_lifetime_income=0.0,
            average_annual_income=0.0,
            tsp_depletion_age=None,
            final_tsp_balance=0.0,
            final_net_worth=0.0,
        )

    incomes = np.array([p.total_income for p in projections], dtype=float)
    # First year the TSP reports an empty balance
    depletion_age = next((p.age for p in projections if p.tsp_balance == 0), None)
    final = projections[-1]

    return SummaryStats(
        total_lifetime_income=float(incomes.sum()),
        average_annual_income=float(incomes.mean()),
        tsp_depletion_age=depletion_age,
        final_tsp_balance=final.tsp_balance,
        final_net_worth=final.net_worth,
    )
