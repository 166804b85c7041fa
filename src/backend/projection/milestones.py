"""
Milestone tracking against a finished projection.
Milestones are advisory only and never feed back into the simulation.
"""

from typing import Dict, List, Optional, Sequence, Set

from models import Milestone, MilestoneStatus, ProjectionYear


def _meets(milestone: Milestone, p: ProjectionYear) -> bool:
    target = milestone.target_value
    if target is None:
        return False
    if milestone.criteria == "reach_age":
        return p.age >= target
    if milestone.criteria == "net_worth_above":
        return p.net_worth > target
    if milestone.criteria == "liquid_net_worth_above":
        return p.liquid_net_worth > target
    if milestone.criteria == "total_debt_below":
        return p.total_debt < target
    return False


def evaluate_milestones(
    projections: Sequence[ProjectionYear],
    milestones: Sequence[Milestone],
) -> List[MilestoneStatus]:
    """First projection year in which each milestone is met."""
    by_id = {m.id: m for m in milestones}
    resolved: Dict[str, Optional[ProjectionYear]] = {}

    def achieved_in(milestone: Milestone, visiting: Set[str]) -> Optional[ProjectionYear]:
        if milestone.id in resolved:
            return resolved[milestone.id]
        if milestone.criteria == "reach_milestone":
            linked = by_id.get(milestone.linked_milestone or "")
            # Unknown or circular links are never met
            if linked is None or linked.id in visiting:
                hit = None
            else:
                hit = achieved_in(linked, visiting | {milestone.id})
        else:
            hit = next((p for p in projections if _meets(milestone, p)), None)
        resolved[milestone.id] = hit
        return hit

    statuses = []
    for milestone in milestones:
        hit = achieved_in(milestone, {milestone.id})
        statuses.append(MilestoneStatus(
            id=milestone.id,
            name=milestone.name,
            achieved=hit is not None,
            achieved_age=hit.age if hit else None,
            achieved_year=hit.year if hit else None,
        ))
    return statuses
