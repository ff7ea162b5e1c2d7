"""
Space heating demand estimation.

Simplified static method (VDI 4650 / DIN V 18599 flavoured):
- Specific demand from construction period and building type
- Fixed reductions per completed envelope measure
- Corrections for climate, room temperature and room controllers
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from ..climate.lookup import ClimateProfile, climate_factor
from ..core.profile import (
    BuildingProfile,
    BuildingType,
    ConstructionPeriod,
    Renovation,
    TriState,
)


# Base specific heat demand (kWh/m²·a) for existing buildings
BASE_DEMAND_BY_PERIOD: Mapping[ConstructionPeriod, float] = MappingProxyType({
    ConstructionPeriod.BEFORE_1960: 180,
    ConstructionPeriod.P1960_1978: 150,
    ConstructionPeriod.P1979_1995: 120,
    ConstructionPeriod.P1996_2002: 90,
    ConstructionPeriod.P2003_2015: 65,
    ConstructionPeriod.FROM_2016: 40,
    ConstructionPeriod.UNKNOWN: 130,
})

# New builds: standard is set by the regulation in force
NEW_BUILD_DEMAND_BY_PERIOD: Mapping[ConstructionPeriod, float] = MappingProxyType({
    ConstructionPeriod.FROM_2016: 35,
    ConstructionPeriod.P2003_2015: 50,
})
NEW_BUILD_DEFAULT_DEMAND = 40.0  # KfW 55 / GEG

# kWh/m²·a removed per completed measure
RENOVATION_SAVINGS: Mapping[Renovation, float] = MappingProxyType({
    Renovation.ROOF: 20,
    Renovation.WINDOWS: 18,
    Renovation.FACADE: 35,
    Renovation.BASEMENT_CEILING: 12,
})

MIN_DEMAND_NEW = 35.0
MIN_DEMAND_EXISTING = 45.0

DEFAULT_ROOM_TEMP_C = 21.0
ROOM_TEMP_SENSITIVITY = 0.06  # ~6 % demand per kelvin
CONTROLLER_FACTOR = 0.95


@dataclass(frozen=True)
class ThermalDemand:
    """Space heating demand estimate."""
    specific_demand: float  # kWh/m²·a, envelope only
    absolute_demand: float  # kWh/a, all corrections applied
    climate_factor: float
    room_temp_factor: float
    controller_factor: float

    @property
    def adjusted_specific_demand(self) -> float:
        """Specific demand after climate and usage corrections."""
        total = self.climate_factor * self.room_temp_factor * self.controller_factor
        return self.specific_demand * total


def specific_heat_demand(building: BuildingProfile) -> float:
    """Envelope-only specific heat demand (kWh/m²·a)."""
    if building.building_type == BuildingType.NEW:
        demand = NEW_BUILD_DEMAND_BY_PERIOD.get(
            building.construction_period, NEW_BUILD_DEFAULT_DEMAND
        )
        return max(demand, MIN_DEMAND_NEW)

    demand = BASE_DEMAND_BY_PERIOD[building.construction_period]
    demand -= sum(RENOVATION_SAVINGS[r] for r in building.renovations)
    return max(demand, MIN_DEMAND_EXISTING)


def room_temp_factor(target_room_temp_c: float) -> float:
    return 1 + (target_room_temp_c - 20) * ROOM_TEMP_SENSITIVITY


def controller_factor(has_auto_controllers: TriState) -> float:
    return CONTROLLER_FACTOR if has_auto_controllers == TriState.YES else 1.0


class ThermalDemandEstimator:
    """
    Estimate annual space heating demand.

    Usage:
        estimator = ThermalDemandEstimator(climate)
        demand = estimator.estimate(building)
    """

    def __init__(self, climate: ClimateProfile):
        self.climate = climate

    def estimate(self, building: BuildingProfile) -> ThermalDemand:
        specific = specific_heat_demand(building)

        target = building.target_room_temp_c
        if target is None:
            target = DEFAULT_ROOM_TEMP_C

        c_factor = climate_factor(self.climate)
        r_factor = room_temp_factor(target)
        k_factor = controller_factor(building.has_auto_controllers)

        absolute = specific * building.area_m2 * c_factor * r_factor * k_factor

        return ThermalDemand(
            specific_demand=specific,
            absolute_demand=absolute,
            climate_factor=c_factor,
            room_temp_factor=r_factor,
            controller_factor=k_factor,
        )
