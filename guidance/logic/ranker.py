"""
Ranker

Orders scored careers and applies the two overrides on top of raw ranking:
sector diversity for the exploring path, and the explicit-selection pin.
"""

import logging
from typing import List, Optional, Tuple

from .catalog import CareerCatalog
from .contracts import Career, ScoredCareer, StudentProfile
from .errors import CatalogLookupError

logger = logging.getLogger(__name__)


def rank_careers(scored: List[ScoredCareer]) -> List[ScoredCareer]:
    """
    Rank by match score, then average salary, both descending.

    Python's sort is stable, so remaining ties keep catalog order.
    """
    return sorted(
        scored,
        key=lambda s: (-s.match_score, -s.career.average_salary),
    )


def resolve_explicit_selection(profile: StudentProfile, catalog: CareerCatalog) -> Optional[Career]:
    """
    Look up the career the student named directly.

    Unknown references are logged and ignored; they never fail the request.
    """
    if not profile.explicit_career:
        return None
    try:
        return catalog.lookup(profile.explicit_career)
    except CatalogLookupError as e:
        logger.warning(f"⚠️ Explicit career selection skipped: {e}")
        return None


def split_pinned(
    ranked: List[ScoredCareer],
    pinned: Optional[Career],
) -> Tuple[Optional[ScoredCareer], List[ScoredCareer]]:
    """Pull the pinned career out of the ranked list."""
    if pinned is None:
        return None, ranked
    head = None
    rest = []
    for scored in ranked:
        if head is None and scored.career.id == pinned.id:
            head = scored
        else:
            rest.append(scored)
    return head, rest


def select_diverse(
    ranked: List[ScoredCareer],
    count: int,
    pinned: Optional[ScoredCareer] = None,
) -> List[ScoredCareer]:
    """
    Best career from each distinct sector, highest first, until `count` picks.

    A pinned career always takes the first slot and claims its sector.
    """
    selected: List[ScoredCareer] = []
    sectors = set()

    if pinned is not None:
        selected.append(pinned)
        sectors.add(pinned.career.sector)

    for scored in ranked:
        if len(selected) >= count:
            break
        if scored.career.sector in sectors:
            continue
        selected.append(scored)
        sectors.add(scored.career.sector)

    if len(selected) < count:
        logger.warning(f"⚠️ Only {len(selected)} distinct sectors available for a diverse selection of {count}")
    return selected


def select_top(
    ranked: List[ScoredCareer],
    limit: int,
    pinned: Optional[ScoredCareer] = None,
) -> List[ScoredCareer]:
    head = [pinned] if pinned is not None else []
    return (head + ranked)[:limit]
