"""
Scenario Calculator - Combine selected interventions.

Metrics:
- Summed cost range and midpoint
- Electricity and euro savings, scaled to the home's size
- Aggregate efficiency gain with diminishing returns
- Projected seasonal performance factor
- Simple payback period
"""

import logging
from dataclasses import dataclass, field
from typing import List, Sequence

from .catalog import InterventionCostModel

logger = logging.getLogger(__name__)


REFERENCE_AREA_M2 = 120.0


def size_scaling_factor(area_m2: float) -> float:
    """
    Scale catalog savings to the home's heated area.

    Baseline: 120 m² = 1.0, clamped to [0.5, 2.0]
    """
    if area_m2 <= 0:
        return 1.0
    return max(0.5, min(2.0, area_m2 / REFERENCE_AREA_M2))


def combine_gains(gains_percent: Sequence[float]) -> float:
    """
    Aggregate efficiency gains with diminishing returns.

    Each gain applies only to the part not yet gained, so the total
    approaches but never reaches 100 %.
    """
    running = 0.0
    for gain in gains_percent:
        running += gain * (1 - running / 100)
    return running


@dataclass(frozen=True)
class InterventionBreakdown:
    """Per-intervention line of a scenario."""
    intervention_id: str
    label: str
    cost_min: float
    cost_max: float
    unit: str
    kwh_savings: int
    eur_savings: int


@dataclass(frozen=True)
class ScenarioResult:
    """Aggregated outcome of a set of interventions."""
    cost_min: float
    cost_max: float
    cost_mid: int
    total_kwh_savings: int
    total_eur_savings: int
    efficiency_gain_percent: float  # Unrounded
    projected_factor: float
    payback_years: float  # 0 = no savings to pay back from
    breakdown: List[InterventionBreakdown] = field(default_factory=list)


class ScenarioCalculator:
    """
    Calculate cost, savings and payback for selected interventions.

    Usage:
        calculator = ScenarioCalculator()
        result = calculator.compute(
            selection=catalog.resolve(["hydraulic_balancing", "smart_thermostats"]),
            price_per_kwh=0.30,
            baseline_consumption=4500,
            current_factor=3.1,
            area_m2=150,
        )
    """

    def compute(
        self,
        selection: Sequence[InterventionCostModel],
        price_per_kwh: float,
        baseline_consumption: float,
        current_factor: float,
        area_m2: float,
    ) -> ScenarioResult:
        """
        Compute a scenario.

        Args:
            selection: Interventions in the order the user picked them
            price_per_kwh: Electricity price (EUR/kWh)
            baseline_consumption: Current annual electricity (kWh)
            current_factor: Current heating JAZ
            area_m2: Heated area

        Returns:
            ScenarioResult
        """
        scale = size_scaling_factor(area_m2)

        cost_min = 0.0
        cost_max = 0.0
        total_kwh = 0
        breakdown = []

        for item in selection:
            kwh = round(item.baseline_kwh_savings * scale)
            eur = round(kwh * price_per_kwh)
            cost_min += item.cost_min
            cost_max += item.cost_max
            total_kwh += kwh
            breakdown.append(InterventionBreakdown(
                intervention_id=item.id,
                label=item.label,
                cost_min=item.cost_min,
                cost_max=item.cost_max,
                unit=item.unit,
                kwh_savings=kwh,
                eur_savings=eur,
            ))

        if baseline_consumption > 0 and total_kwh > baseline_consumption:
            logger.warning(
                f"Scenario savings ({total_kwh} kWh) exceed current consumption "
                f"({baseline_consumption:.0f} kWh)"
            )

        gain = combine_gains([item.efficiency_gain_percent for item in selection])
        cost_mid = round((cost_min + cost_max) / 2)
        total_eur = round(total_kwh * price_per_kwh)
        projected = round(current_factor * (1 + gain / 100), 2)
        payback = round(cost_mid / total_eur, 1) if total_eur > 0 else 0.0

        logger.debug(
            f"Scenario with {len(breakdown)} interventions: {cost_mid} € for "
            f"{total_eur} €/yr, gain {gain:.1f} %, payback {payback} yr"
        )

        return ScenarioResult(
            cost_min=cost_min,
            cost_max=cost_max,
            cost_mid=cost_mid,
            total_kwh_savings=total_kwh,
            total_eur_savings=total_eur,
            efficiency_gain_percent=gain,
            projected_factor=projected,
            payback_years=payback,
            breakdown=breakdown,
        )
