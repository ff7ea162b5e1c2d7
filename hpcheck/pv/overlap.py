"""
PV Overlap Estimator

Estimates how much of the heat pump's electricity can be covered directly
by an on-site PV system:
- Monthly yield from a south-facing reference curve (kWh/kWp)
- Orientation and regional yield corrections
- Direct self-consumption overlap, raised by battery storage
- Self-consumption share and euro savings versus grid purchase

Heat pump demand peaks in winter while PV peaks in summer, so the overlap
is limited per month by the heat pump's share of annual consumption.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from ..consumption.annualizer import monthly_share
from ..core.profile import PVConfig, PVOrientation, PVPresence

logger = logging.getLogger(__name__)


MONTH_NAMES = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

# Monthly yield per kWp, south-facing reference (Germany average)
MONTHLY_YIELD_KWH_PER_KWP = (30, 45, 80, 110, 130, 135, 130, 120, 90, 55, 30, 22)

ORIENTATION_FACTOR = {
    PVOrientation.SOUTH: 1.0,
    PVOrientation.SOUTH_EAST: 0.93,
    PVOrientation.SOUTH_WEST: 0.93,
    PVOrientation.EAST: 0.82,
    PVOrientation.WEST: 0.82,
}

# Direct overlap without storage; battery adds up to 0.30 on top
BASE_OVERLAP = 0.35
BATTERY_OVERLAP_GAIN = 0.20
BATTERY_REFERENCE_KWH = 10.0
BATTERY_MAX_RATIO = 1.5

DEFAULT_FEED_IN_EUR_PER_KWH = 0.082


@dataclass(frozen=True)
class PVMonth:
    """One month of the PV / heat pump balance."""
    month: str
    pv_yield_kwh: int
    heat_pump_kwh: int
    self_consumption_kwh: int


@dataclass(frozen=True)
class PVAnalysis:
    """Annual PV coverage of heat pump electricity."""
    annual_yield_kwh: int
    self_consumption_kwh: int
    self_consumption_share_percent: int
    savings_eur: int
    overlap_fraction: float
    has_battery: bool
    monthly: List[PVMonth] = field(default_factory=list)


def regional_yield_factor(postal_code: str) -> float:
    """Yield multiplier by postal region: north lower, south higher."""
    try:
        prefix = int(str(postal_code).strip()[:2])
    except ValueError:
        return 1.0
    if 17 <= prefix <= 29:
        return 0.92
    if 1 <= prefix <= 16 or 60 <= prefix <= 99:
        return 1.05
    return 1.0


def overlap_fraction(has_battery: bool, battery_capacity_kwh: Optional[float] = None) -> float:
    if not has_battery:
        return BASE_OVERLAP
    capacity = battery_capacity_kwh
    if capacity is None or capacity <= 0:
        capacity = BATTERY_REFERENCE_KWH
    ratio = min(capacity / BATTERY_REFERENCE_KWH, BATTERY_MAX_RATIO)
    return BASE_OVERLAP + BATTERY_OVERLAP_GAIN * ratio


class PVOverlapEstimator:
    """
    Estimate PV coverage of heat pump electricity.

    Usage:
        estimator = PVOverlapEstimator(feed_in_eur_per_kwh=0.082)
        analysis = estimator.estimate(
            pv=PVConfig(present=PVPresence.YES, capacity_kwp=8),
            postal_code="80331",
            annual_consumption_kwh=4200,
            price_eur_per_kwh=0.30,
        )
    """

    def __init__(self, feed_in_eur_per_kwh: float = DEFAULT_FEED_IN_EUR_PER_KWH):
        self.feed_in_eur_per_kwh = feed_in_eur_per_kwh

    @staticmethod
    def applies(pv: Optional[PVConfig]) -> bool:
        """PV installed or planned with a usable capacity."""
        if pv is None or pv.present not in (PVPresence.YES, PVPresence.PLANNED):
            return False
        return pv.capacity_kwp is not None and pv.capacity_kwp > 0

    def estimate(
        self,
        pv: Optional[PVConfig],
        postal_code: str,
        annual_consumption_kwh: float,
        price_eur_per_kwh: float,
    ) -> Optional[PVAnalysis]:
        """
        Estimate self-consumption for the heat pump.

        Args:
            pv: PV answers
            postal_code: Used for the regional yield factor
            annual_consumption_kwh: Heat pump electricity per year
            price_eur_per_kwh: Retail electricity price

        Returns:
            PVAnalysis, or None when no PV system applies
        """
        if not self.applies(pv):
            return None

        orientation = ORIENTATION_FACTOR.get(pv.orientation, 1.0)
        regional = regional_yield_factor(postal_code)
        overlap = overlap_fraction(pv.has_battery, pv.battery_capacity_kwh)

        months = []
        for i, specific_yield in enumerate(MONTHLY_YIELD_KWH_PER_KWP):
            pv_kwh = round(specific_yield * pv.capacity_kwp * orientation * regional)
            hp_kwh = round(annual_consumption_kwh * monthly_share(i))
            self_kwh = round(min(pv_kwh * overlap, hp_kwh))
            months.append(PVMonth(MONTH_NAMES[i], pv_kwh, hp_kwh, self_kwh))

        annual_yield = sum(m.pv_yield_kwh for m in months)
        self_consumption = sum(m.self_consumption_kwh for m in months)
        share = (
            round(self_consumption / annual_consumption_kwh * 100)
            if annual_consumption_kwh > 0 else 0
        )
        savings = round(self_consumption * (price_eur_per_kwh - self.feed_in_eur_per_kwh))

        logger.debug(
            f"PV {pv.capacity_kwp} kWp: yield {annual_yield} kWh, "
            f"self-consumption {self_consumption} kWh ({share} %)"
        )

        return PVAnalysis(
            annual_yield_kwh=annual_yield,
            self_consumption_kwh=self_consumption,
            self_consumption_share_percent=share,
            savings_eur=savings,
            overlap_fraction=overlap,
            has_battery=pv.has_battery,
            monthly=months,
        )
