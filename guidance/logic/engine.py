"""
Matching Engine

Scores the career catalog against a StudentProfile and returns ranked matches.

Pipeline flow:
1. Explicit selection - resolve a directly named career before any scoring
2. Dimension Scoring + Aggregation - one integer score per career
3. Ranking - score, then salary, then catalog order
4. Overrides - pin the explicit selection, sector diversity on the exploring path
5. Labor market context - demand tier and salary range (optional)
"""

import logging
from typing import List, Optional

from .aggregator import batch_aggregate
from .catalog import CareerCatalog, default_catalog
from .constants import EXPLICIT_SELECTION_FACTOR, EXPLORING_MATCH_COUNT, DemandLevel, PathId
from .contracts import CareerMatch, ScoredCareer, StudentProfile
from .labor_market import LaborMarketProvider, StaticLaborMarketProvider, safe_estimate
from .ranker import rank_careers, resolve_explicit_selection, select_diverse, select_top, split_pinned

logger = logging.getLogger(__name__)


class MatchingEngine:
    """
    Catalog and labor-market provider are injected; the catalog is shared by
    reference and never modified.
    """

    def __init__(
        self,
        catalog: Optional[CareerCatalog] = None,
        labor_market: Optional[LaborMarketProvider] = None,
        default_limit: int = 10,
    ):
        self.catalog = catalog or default_catalog()
        self.labor_market = labor_market if labor_market is not None else StaticLaborMarketProvider()
        self.default_limit = default_limit

    def match(
        self,
        profile: StudentProfile,
        limit: Optional[int] = None,
        zip_code: Optional[str] = None,
    ) -> List[CareerMatch]:
        limit = limit or self.default_limit

        explicit = resolve_explicit_selection(profile, self.catalog)

        scored = batch_aggregate(profile, self.catalog.all())
        ranked = rank_careers(scored)
        pinned, rest = split_pinned(ranked, explicit)

        if profile.path == PathId.EXPLORING:
            selected = select_diverse(rest, EXPLORING_MATCH_COUNT, pinned)
        else:
            selected = select_top(rest, limit, pinned)

        matches = [
            self._to_match(scored_career, rank, explicit=pinned is not None and rank == 1)
            for rank, scored_career in enumerate(selected, start=1)
        ]

        if self.labor_market is not None and matches:
            self._attach_labor_market(matches, zip_code or profile.zip_code)

        logger.info(
            f"🏁 Matched {len(matches)} careers for path={profile.path}"
            + (f" (explicit: {explicit.id})" if explicit else "")
        )
        return matches

    def _to_match(self, scored: ScoredCareer, rank: int, explicit: bool) -> CareerMatch:
        factors = list(scored.factors)
        if explicit:
            factors.insert(0, EXPLICIT_SELECTION_FACTOR)
        return CareerMatch(
            career_id=scored.career.id,
            career=scored.career,
            match_score=scored.match_score,
            reasoning_factors=factors,
            explicit_selection=explicit,
            rank=rank,
        )

    def _attach_labor_market(self, matches: List[CareerMatch], zip_code: str) -> None:
        estimates = safe_estimate(self.labor_market, zip_code, [m.career for m in matches])
        for match in matches:
            estimate = estimates.get(match.career_id)
            if estimate is None:
                match.local_demand = DemandLevel.UNKNOWN.value
                continue
            match.local_demand = estimate.demand
            match.salary_min = estimate.salary_min
            match.salary_max = estimate.salary_max
