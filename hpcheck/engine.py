"""
Heat pump efficiency check - top-level entry points.

Pipeline for one run:
1. Climate lookup by postal code
2. Space heating and hot water demand
3. Flow temperature and seasonal performance factors
4. Simulated electricity vs. annualized metered consumption
5. Cost analysis, backup heater and PV refinements
6. Recommendations and matching federal funding

Every function here is pure: inputs are frozen value objects, the current
date is passed in explicitly and nothing is cached between calls.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, Sequence, Union

from .climate import ClimateProfile, lookup
from .consumption import ConsumptionAnnualizer
from .core.config import Settings, settings as default_settings
from .core.models import SimulationRequest
from .core.profile import EngineProfile
from .demand import HotWaterDemandEstimator, ThermalDemandEstimator
from .funding import FundingMatcher, FundingProgram
from .hvac import (
    AuxiliaryHeaterAnalysis,
    AuxiliaryHeaterAnalyzer,
    EfficiencyEstimator,
    resolve_flow_temperature,
)
from .pv import PVAnalysis, PVOverlapEstimator
from .recommend import Recommendation, RecommendationEngine, RuleContext
from .roi import InterventionCatalog, InterventionCostModel, ScenarioCalculator, ScenarioResult
from .utils.validation import normalize_request, round_half_up

logger = logging.getLogger(__name__)


# Comparability score loses 1.5 points per percent of deviation
SCORE_PENALTY_PER_PERCENT = 1.5


@dataclass(frozen=True)
class CostAnalysis:
    """Annual electricity cost, simulated vs. actual."""
    price_eur_per_kwh: float
    simulated_cost_eur: int
    actual_cost_eur: int
    excess_cost_eur: int       # Actual above simulated, never negative
    heating_cost_eur: int      # Simulated space heating share
    hot_water_cost_eur: int    # Simulated hot water share


@dataclass(frozen=True)
class SimulationResult:
    """Everything one engine run derives from a profile."""
    score: Optional[float]             # None without a metered reading
    deviation_percent: int
    simulated_kwh: int
    actual_kwh: float
    heating_factor: float
    hot_water_factor: float
    heating_demand_kwh: int
    hot_water_demand_kwh: int
    specific_demand: int               # Envelope only, kWh/m²·a
    adjusted_specific_demand: float    # After climate and usage corrections
    climate: ClimateProfile
    flow_temp_c: float
    flow_temp_estimated: bool
    has_metered_consumption: bool
    measurement_days: int
    is_partial_period: bool
    measured_factor: Optional[float]   # Produced heat / metered electricity
    measured_factor_full_season: bool
    cost: CostAnalysis
    auxiliary_heater: Optional[AuxiliaryHeaterAnalysis] = None
    pv: Optional[PVAnalysis] = None
    recommendations: List[Recommendation] = field(default_factory=list)
    funding: List[FundingProgram] = field(default_factory=list)

    @property
    def climate_region(self) -> str:
        return self.climate.region


@dataclass(frozen=True)
class ScenarioContext:
    """Inputs the scenario calculator needs besides the selection."""
    price_eur_per_kwh: float
    baseline_consumption: float
    current_factor: float
    area_m2: float
    catalog: InterventionCatalog = field(default_factory=InterventionCatalog)

    @classmethod
    def from_result(
        cls,
        profile: EngineProfile,
        result: SimulationResult,
        catalog: Optional[InterventionCatalog] = None,
    ) -> "ScenarioContext":
        return cls(
            price_eur_per_kwh=profile.price_eur_per_kwh,
            baseline_consumption=result.actual_kwh,
            current_factor=result.heating_factor,
            area_m2=profile.building.area_m2,
            catalog=catalog or InterventionCatalog(),
        )


def comparability_score(deviation_percent: float) -> float:
    """0-100, 100 = metered consumption matches the simulation. Not rounded."""
    score = 100 - abs(deviation_percent) * SCORE_PENALTY_PER_PERCENT
    return max(0.0, min(100.0, score))


def run(profile: EngineProfile, today: date, settings: Optional[Settings] = None) -> SimulationResult:
    """
    Run the efficiency check for a defaulted profile.

    Args:
        profile: Output of ``normalize_request``
        today: Used as billing end when only a start date is known
        settings: Thresholds and tariffs (module settings when omitted)

    Returns:
        SimulationResult
    """
    cfg = settings or default_settings
    building = profile.building
    hp = profile.heat_pump
    price = profile.price_eur_per_kwh

    # Demand
    climate = lookup(profile.postal_code)
    thermal = ThermalDemandEstimator(climate).estimate(building)
    hot_water_kwh = HotWaterDemandEstimator().estimate(building.occupants, profile.showers_per_day)

    # Efficiency
    flow_temp, flow_estimated = resolve_flow_temperature(hp)
    estimator = EfficiencyEstimator()
    heating_factor = estimator.estimate_for_config(hp, flow_temp, climate.avg_outdoor_temp_c)
    hot_water_factor = estimator.estimate_hot_water_factor(climate.avg_outdoor_temp_c)

    heating_kwh = thermal.absolute_demand / heating_factor
    hot_water_elec_kwh = hot_water_kwh / hot_water_factor
    simulated = round_half_up(heating_kwh + hot_water_elec_kwh)

    # Comparison with the metered reading
    has_metered = profile.has_metered_consumption
    measured_factor = None
    measured_full_season = False
    if has_metered:
        record = profile.consumption
        end = record.billing_end
        if record.billing_start is not None and end is None:
            end = today
        annualized = ConsumptionAnnualizer(cfg.annualization_full_year_days).annualize(
            record.metered_kwh, record.billing_start, end
        )
        actual = annualized.annualized_kwh
        days = annualized.days
        is_partial = annualized.is_partial

        deviation = round_half_up((actual - simulated) / simulated * 100) if simulated > 0 else 0
        score = comparability_score(deviation)

        if record.produced_kwh is not None:
            measured_factor = round(record.produced_kwh / record.metered_kwh, 2)
            measured_full_season = days >= cfg.measured_factor_full_year_days
    else:
        actual = simulated
        days = 365
        is_partial = False
        deviation = 0
        score = None

    cost = CostAnalysis(
        price_eur_per_kwh=price,
        simulated_cost_eur=round(simulated * price),
        actual_cost_eur=round(actual * price),
        excess_cost_eur=round(max(0.0, actual - simulated) * price),
        heating_cost_eur=round(heating_kwh * price),
        hot_water_cost_eur=round(hot_water_elec_kwh * price),
    )

    # Refinements
    auxiliary = AuxiliaryHeaterAnalyzer(thermal.climate_factor).analyze(
        config=profile.auxiliary_heater,
        total_heat_kwh=thermal.absolute_demand + hot_water_kwh,
        simulated_kwh=simulated,
        actual_kwh=actual,
        heating_factor=heating_factor,
        price_eur_per_kwh=price,
    )
    pv = PVOverlapEstimator(cfg.feed_in_tariff_eur_per_kwh).estimate(
        pv=profile.pv,
        postal_code=profile.postal_code,
        annual_consumption_kwh=simulated,
        price_eur_per_kwh=price,
    )

    # Recommendations
    ctx = RuleContext(
        profile=profile,
        flow_temp_c=flow_temp,
        heating_factor=heating_factor,
        specific_demand=thermal.specific_demand,
        simulated_kwh=simulated,
        deviation_percent=deviation,
        auxiliary=auxiliary,
        pv_min_kwh=cfg.pv_recommendation_min_kwh,
        auditor_deviation_percent=cfg.auditor_deviation_percent,
    )
    recommendations = RecommendationEngine().evaluate(ctx)
    funding = FundingMatcher().match(recommendations)

    logger.info(
        f"{climate.region}: simulated {simulated} kWh, actual {actual:.0f} kWh, "
        f"JAZ {heating_factor:.2f}, {len(recommendations)} recommendations",
        extra={"postal_code": profile.postal_code},
    )

    return SimulationResult(
        score=score,
        deviation_percent=deviation,
        simulated_kwh=simulated,
        actual_kwh=actual,
        heating_factor=round(heating_factor, 2),
        hot_water_factor=round(hot_water_factor, 2),
        heating_demand_kwh=round(thermal.absolute_demand),
        hot_water_demand_kwh=round(hot_water_kwh),
        specific_demand=round(thermal.specific_demand),
        adjusted_specific_demand=round(thermal.adjusted_specific_demand, 1),
        climate=climate,
        flow_temp_c=flow_temp,
        flow_temp_estimated=flow_estimated,
        has_metered_consumption=has_metered,
        measurement_days=days,
        is_partial_period=is_partial,
        measured_factor=measured_factor,
        measured_factor_full_season=measured_full_season,
        cost=cost,
        auxiliary_heater=auxiliary,
        pv=pv,
        recommendations=recommendations,
        funding=funding,
    )


def run_request(
    request: SimulationRequest,
    today: date,
    settings: Optional[Settings] = None,
) -> SimulationResult:
    """Default a loose request and run it."""
    return run(normalize_request(request, settings), today, settings)


def compute_scenario(
    selection: Sequence[Union[str, InterventionCostModel]],
    context: ScenarioContext,
) -> ScenarioResult:
    """
    Cost and payback for the interventions a user picked.

    Args:
        selection: Catalog IDs or resolved interventions, in pick order
        context: Price, baseline and home size
    """
    items = []
    for entry in selection:
        if isinstance(entry, InterventionCostModel):
            items.append(entry)
        else:
            items.extend(context.catalog.resolve([entry]))

    return ScenarioCalculator().compute(
        selection=items,
        price_per_kwh=context.price_eur_per_kwh,
        baseline_consumption=context.baseline_consumption,
        current_factor=context.current_factor,
        area_m2=context.area_m2,
    )


def match_funding(recommendations: Sequence[Recommendation]) -> List[FundingProgram]:
    """Federal funding programs for a set of recommendations."""
    return FundingMatcher().match(recommendations)
