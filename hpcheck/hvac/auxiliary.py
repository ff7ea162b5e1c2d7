"""
Auxiliary (resistive) heater analysis.

The heating rod converts electricity to heat at near-unity efficiency, so
every kWh it delivers costs JAZ times more electricity than the heat pump
would have needed. Overuse is the most common reason for a poor measured
seasonal performance factor.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..core.profile import AuxHeaterMode, AuxiliaryHeaterConfig, TriState

logger = logging.getLogger(__name__)


DEFAULT_RATED_POWER_KW = 6.0
RESISTIVE_EFFICIENCY = 0.98

# Operating hours per year when the user does not know them
EMERGENCY_HOURS = 75.0
PARALLEL_HOURS = 500.0  # Scaled by climate factor
UNKNOWN_MODE_HOURS = 200.0

# Share bands (percent of heat pump electricity)
NOTICEABLE_SHARE_PERCENT = 5.0
CRITICAL_SHARE_PERCENT = 15.0


class AuxHeaterRating(str, Enum):
    GOOD = "good"
    NOTICEABLE = "noticeable"
    CRITICAL = "critical"


@dataclass(frozen=True)
class AuxiliaryHeaterAnalysis:
    """Electricity share and efficiency penalty of the backup heater."""
    rated_power_kw: float
    operating_hours: float
    hours_estimated: bool
    electricity_kwh: float
    heat_kwh: float
    share_percent: float
    factor_with_aux: float
    factor_without_aux: float
    rating: AuxHeaterRating
    extra_cost_eur: float


def rate_share(share_percent: float) -> AuxHeaterRating:
    if share_percent < NOTICEABLE_SHARE_PERCENT:
        return AuxHeaterRating.GOOD
    if share_percent <= CRITICAL_SHARE_PERCENT:
        return AuxHeaterRating.NOTICEABLE
    return AuxHeaterRating.CRITICAL


class AuxiliaryHeaterAnalyzer:
    """
    Estimate the backup heater's share of consumption.

    Usage:
        analyzer = AuxiliaryHeaterAnalyzer(climate_factor=1.0)
        analysis = analyzer.analyze(
            config=aux_config,
            total_heat_kwh=14000,
            simulated_kwh=4200,
            actual_kwh=5100,
            heating_factor=3.4,
            price_eur_per_kwh=0.30,
        )
    """

    def __init__(self, climate_factor: float = 1.0):
        self.climate_factor = climate_factor

    def operating_hours(self, config: AuxiliaryHeaterConfig) -> tuple[float, bool]:
        """
        Annual operating hours.

        Returns:
            (hours, was_estimated)
        """
        if config.operating_hours is not None and config.operating_hours >= 0:
            return config.operating_hours, False
        if config.mode == AuxHeaterMode.EMERGENCY:
            return EMERGENCY_HOURS, True
        if config.mode == AuxHeaterMode.PARALLEL:
            return PARALLEL_HOURS * self.climate_factor, True
        return UNKNOWN_MODE_HOURS, True

    def analyze(
        self,
        config: Optional[AuxiliaryHeaterConfig],
        total_heat_kwh: float,
        simulated_kwh: float,
        actual_kwh: float,
        heating_factor: float,
        price_eur_per_kwh: float,
    ) -> Optional[AuxiliaryHeaterAnalysis]:
        """
        Analyze the backup heater.

        Args:
            config: Backup heater answers (None = not asked)
            total_heat_kwh: Space heating plus hot water demand
            simulated_kwh: Simulated heat pump electricity
            actual_kwh: Annualized metered electricity (or simulated)
            heating_factor: Estimated heating JAZ
            price_eur_per_kwh: Electricity price

        Returns:
            AuxiliaryHeaterAnalysis, or None unless a heater is declared present
        """
        if config is None or config.present != TriState.YES:
            return None

        power = config.rated_power_kw
        if power is None or power <= 0:
            power = DEFAULT_RATED_POWER_KW
        hours, estimated = self.operating_hours(config)

        aux_kwh = power * hours
        total_electricity = max(actual_kwh, simulated_kwh)
        share = aux_kwh / total_electricity * 100 if total_electricity > 0 else 0.0
        aux_heat = aux_kwh * RESISTIVE_EFFICIENCY

        factor_with = total_heat_kwh / total_electricity if total_electricity > 0 else 0.0
        factor_without = (
            max(total_heat_kwh - aux_heat, 1.0) / max(total_electricity - aux_kwh, 1.0)
        )

        # Electricity the heat pump would have needed for the same heat
        hp_equivalent_kwh = aux_heat / heating_factor if heating_factor > 0 else aux_kwh
        extra_cost = max(0.0, (aux_kwh - hp_equivalent_kwh) * price_eur_per_kwh)

        rating = rate_share(share)
        logger.debug(
            f"Backup heater: {power:.1f} kW x {hours:.0f} h = {aux_kwh:.0f} kWh "
            f"({share:.1f} %, {rating.value})"
        )

        return AuxiliaryHeaterAnalysis(
            rated_power_kw=power,
            operating_hours=hours,
            hours_estimated=estimated,
            electricity_kwh=aux_kwh,
            heat_kwh=aux_heat,
            share_percent=share,
            factor_with_aux=factor_with,
            factor_without_aux=factor_without,
            rating=rating,
            extra_cost_eur=extra_cost,
        )
