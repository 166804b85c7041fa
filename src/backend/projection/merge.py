"""
Side-effect free profile updates.

A partial update is merged section by section into a copy of the base
profile and re-validated, so callers holding the old profile (or results
computed from it) never see a change.
"""

from typing import Any, Mapping

from pydantic import BaseModel

from models import Profile

PROFILE_SECTIONS = (
    "personal",
    "employment",
    "retirement",
    "tsp",
    "other_investments",
    "assumptions",
    "planning",
)


def _plain(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(exclude_unset=True)
    return value


def merge_profile(base: Profile, updates: Mapping[str, Any]) -> Profile:
    """
    Merge ``updates`` into ``base`` and return a new Profile.

    Each section is shallow-merged: keys present in the patch replace the
    base values, lists (service periods, accounts, debts, ...) are replaced
    as a whole. Raises ``ValueError`` for unknown or wrongly shaped sections and pydantic's
    ``ValidationError`` when the merged result is invalid.
    """
    unknown = sorted(set(updates) - set(PROFILE_SECTIONS))
    if unknown:
        raise ValueError(f"Unknown profile sections: {', '.join(unknown)}")

    merged = base.model_dump()
    for section, patch in updates.items():
        if patch is None:
            continue
        if section == "other_investments":
            if not isinstance(patch, (list, tuple)):
                raise ValueError(f"Section {section} must be a list")
            merged[section] = [_plain(account) for account in patch]
        else:
            if not isinstance(patch, (Mapping, BaseModel)):
                raise ValueError(f"Section {section} must be an object")
            merged[section] = {**merged[section], **_plain(patch)}

    return Profile.model_validate(merged)
