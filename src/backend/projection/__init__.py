"""
Federal retirement projection engine.
"""

from .comparison import ProjectionError, compare_scenarios
from .engine import ProjectionEngine, generate_projections, get_pension_breakdown, run_projection
from .merge import merge_profile
from .milestones import evaluate_milestones
from .service import determine_eligibility

__all__ = [
    "ProjectionEngine",
    "ProjectionError",
    "compare_scenarios",
    "determine_eligibility",
    "evaluate_milestones",
    "generate_projections",
    "get_pension_breakdown",
    "merge_profile",
    "run_projection",
]
