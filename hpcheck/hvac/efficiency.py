"""
Seasonal performance factor (JAZ) estimation for air-to-water heat pumps.

Simplified Carnot model with an empirical efficiency coefficient:
    COP_carnot = T_sink / (T_sink - T_source)    (Kelvin)
    JAZ = eta * COP_carnot

eta is typically 0.40-0.50 for modern air-source units. The source
temperature is the annual mean outdoor temperature plus 2 K (intake air is
slightly warmer than ambient), the sink is the flow temperature.
"""

from dataclasses import dataclass
from typing import Optional

from ..core.profile import (
    EmitterType,
    HeatPumpConfig,
    RadiatorCondition,
    TriState,
)

KELVIN = 273.15
SOURCE_OFFSET_K = 2.0

# Hot water is charged to ~52 °C (anti-legionella target)
HOT_WATER_SINK_C = 52.0

# Valid explicit flow temperatures (°C); anything else is re-estimated
FLOW_TEMP_MIN_C = 20.0
FLOW_TEMP_MAX_C = 80.0


@dataclass(frozen=True)
class CarnotModel:
    """
    Carnot-fraction performance model with output clamping.

    Attributes:
        name: Model identifier
        base_efficiency: Carnot efficiency coefficient before adjustments
        output_min: Lower clamp for the resulting factor
        output_max: Upper clamp for the resulting factor
    """
    name: str
    base_efficiency: float
    output_min: float
    output_max: float

    def carnot_ceiling(self, source_temp_c: float, sink_temp_c: float) -> float:
        """Theoretical COP for the given source/sink temperatures."""
        t_source = source_temp_c + SOURCE_OFFSET_K + KELVIN
        t_sink = sink_temp_c + KELVIN
        lift = t_sink - t_source
        if lift <= 0:
            return float("inf")
        return t_sink / lift

    def evaluate(self, source_temp_c: float, sink_temp_c: float, efficiency: float) -> float:
        """Clamped seasonal factor."""
        value = efficiency * self.carnot_ceiling(source_temp_c, sink_temp_c)
        return max(self.output_min, min(value, self.output_max))


HEATING_MODEL = CarnotModel("space_heating", base_efficiency=0.45, output_min=2.0, output_max=5.5)
HOT_WATER_MODEL = CarnotModel("hot_water", base_efficiency=0.40, output_min=1.8, output_max=3.5)


# Additive eta adjustments
ETA_UNDERFLOOR = 0.02        # Better heat transfer
ETA_HP_RADIATORS = 0.015
ETA_BALANCED = 0.02
ETA_UNBALANCED = -0.02
ETA_BUFFER_TANK = -0.01      # Storage losses


def estimate_flow_temperature(
    emitter_type: EmitterType,
    radiator_condition: Optional[RadiatorCondition] = None,
    has_heat_pump_radiators: TriState = TriState.UNKNOWN,
) -> float:
    """Typical design flow temperature for an emitter setup (°C)."""
    if emitter_type == EmitterType.UNDERFLOOR:
        return 35.0
    if has_heat_pump_radiators == TriState.YES:
        return 42.0
    if radiator_condition == RadiatorCondition.RENOVATED:
        return 45.0
    return 55.0  # Legacy radiators


def resolve_flow_temperature(config: HeatPumpConfig) -> tuple[float, bool]:
    """
    Flow temperature to simulate with.

    Returns:
        (flow_temp_c, was_estimated)
    """
    explicit = config.flow_temp_c
    if explicit is not None and FLOW_TEMP_MIN_C <= explicit <= FLOW_TEMP_MAX_C:
        return explicit, False
    estimated = estimate_flow_temperature(
        config.emitter_type,
        config.radiator_condition,
        config.has_heat_pump_radiators,
    )
    return estimated, True


class EfficiencyEstimator:
    """
    Estimate heating and hot water seasonal performance factors.

    Usage:
        estimator = EfficiencyEstimator()
        jaz = estimator.estimate_heating_factor(
            flow_temp_c=35,
            avg_outdoor_temp_c=9.0,
            emitter_type=EmitterType.UNDERFLOOR,
        )
    """

    def heating_efficiency(
        self,
        emitter_type: EmitterType,
        has_heat_pump_radiators: TriState = TriState.UNKNOWN,
        balancing_done: TriState = TriState.UNKNOWN,
        has_buffer_tank: bool = False,
    ) -> float:
        """Carnot efficiency coefficient after configuration adjustments."""
        eta = HEATING_MODEL.base_efficiency

        if emitter_type == EmitterType.UNDERFLOOR:
            eta += ETA_UNDERFLOOR
        if has_heat_pump_radiators == TriState.YES:
            eta += ETA_HP_RADIATORS
        if balancing_done == TriState.YES:
            eta += ETA_BALANCED
        elif balancing_done == TriState.NO:
            eta += ETA_UNBALANCED
        if has_buffer_tank:
            eta += ETA_BUFFER_TANK

        return eta

    def estimate_heating_factor(
        self,
        flow_temp_c: float,
        avg_outdoor_temp_c: float,
        emitter_type: EmitterType,
        has_heat_pump_radiators: TriState = TriState.UNKNOWN,
        balancing_done: TriState = TriState.UNKNOWN,
        has_buffer_tank: bool = False,
    ) -> float:
        """
        Heating JAZ, clamped to [2.0, 5.5].

        Args:
            flow_temp_c: Flow temperature (sink)
            avg_outdoor_temp_c: Annual mean outdoor temperature
            emitter_type: Underfloor or radiators
            has_heat_pump_radiators: Heat-pump specific radiators installed
            balancing_done: Hydraulic balancing status
            has_buffer_tank: Buffer tank in the heating circuit
        """
        eta = self.heating_efficiency(
            emitter_type, has_heat_pump_radiators, balancing_done, has_buffer_tank
        )
        return HEATING_MODEL.evaluate(avg_outdoor_temp_c, flow_temp_c, eta)

    def estimate_hot_water_factor(self, avg_outdoor_temp_c: float) -> float:
        """Hot water JAZ, clamped to [1.8, 3.5]."""
        return HOT_WATER_MODEL.evaluate(
            avg_outdoor_temp_c, HOT_WATER_SINK_C, HOT_WATER_MODEL.base_efficiency
        )

    def estimate_for_config(self, config: HeatPumpConfig, flow_temp_c: float,
                            avg_outdoor_temp_c: float) -> float:
        """Heating JAZ for a full heat pump configuration."""
        return self.estimate_heating_factor(
            flow_temp_c=flow_temp_c,
            avg_outdoor_temp_c=avg_outdoor_temp_c,
            emitter_type=config.emitter_type,
            has_heat_pump_radiators=config.has_heat_pump_radiators,
            balancing_done=config.hydraulic_balancing,
            has_buffer_tank=config.has_buffer_tank,
        )
