"""
Local labor-market context (demand tier and salary range per career).

Purely additive: matching never depends on it, and a failing provider only
leaves demand as "unknown".
"""

import logging
from typing import Dict, Iterable, Protocol

from .constants import DemandLevel, Sector
from .contracts import Career, LaborMarketEstimate

logger = logging.getLogger(__name__)

SALARY_SPREAD = 0.15


class LaborMarketProvider(Protocol):
    def estimate(self, zip_code: str, careers: Iterable[Career]) -> Dict[str, LaborMarketEstimate]:
        ...


def demand_from_outlook(career: Career) -> DemandLevel:
    outlook = career.growth_outlook.lower()
    if career.sector == Sector.HEALTHCARE or "faster" in outlook:
        return DemandLevel.HIGH
    if "declin" in outlook or "slower" in outlook:
        return DemandLevel.LOW
    return DemandLevel.MEDIUM


class StaticLaborMarketProvider:
    """Estimates from catalog data alone; the same answer for every ZIP code."""

    def estimate(self, zip_code: str, careers: Iterable[Career]) -> Dict[str, LaborMarketEstimate]:
        estimates = {}
        for career in careers:
            estimates[career.id] = LaborMarketEstimate(
                career_id=career.id,
                demand=demand_from_outlook(career),
                salary_min=int(round(career.average_salary * (1 - SALARY_SPREAD), -3)),
                salary_max=int(round(career.average_salary * (1 + SALARY_SPREAD), -3)),
            )
        return estimates


def safe_estimate(
    provider: LaborMarketProvider,
    zip_code: str,
    careers: Iterable[Career],
) -> Dict[str, LaborMarketEstimate]:
    """Call the provider; any failure is logged and yields no estimates."""
    careers = list(careers)
    try:
        return provider.estimate(zip_code, careers)
    except Exception as e:
        logger.warning(f"⚠️ Labor market lookup failed for {zip_code}: {e}")
        return {}
