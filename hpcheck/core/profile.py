"""
Normalized engine profile.

Tagged enumerations and frozen value objects for everything the engine
consumes. These are produced by the defaulting pass in
``hpcheck.utils.validation`` and never mutated afterwards.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import FrozenSet, Optional


# =============================================================================
# ENUMS
# =============================================================================

class TriState(str, Enum):
    """Yes / no / don't know answers from the questionnaire."""
    YES = "yes"
    NO = "no"
    UNKNOWN = "unknown"


class BuildingType(str, Enum):
    NEW = "new"
    EXISTING = "existing"


class ConstructionPeriod(str, Enum):
    """Construction-year brackets (German thermal regulation eras)."""
    BEFORE_1960 = "before_1960"     # Uninsulated
    P1960_1978 = "1960_1978"        # First insulation attempts
    P1979_1995 = "1979_1995"        # 1st WSchV
    P1996_2002 = "1996_2002"        # 2nd/3rd WSchV
    P2003_2015 = "2003_2015"        # EnEV
    FROM_2016 = "from_2016"         # EnEV 2016 / GEG
    UNKNOWN = "unknown"


class Renovation(str, Enum):
    """Completed envelope measures."""
    ROOF = "roof"
    WINDOWS = "windows"
    FACADE = "facade"
    BASEMENT_CEILING = "basement_ceiling"


class EmitterType(str, Enum):
    UNDERFLOOR = "underfloor"       # Floor / wall heating
    RADIATOR = "radiator"


class RadiatorCondition(str, Enum):
    LEGACY = "legacy"               # Radiators kept from the old boiler
    RENOVATED = "renovated"


class AuxHeaterMode(str, Enum):
    EMERGENCY = "emergency"         # Only on heat pump failure / defrost
    PARALLEL = "parallel"           # Supports the heat pump on cold days
    UNKNOWN = "unknown"


class PVPresence(str, Enum):
    YES = "yes"
    NO = "no"
    PLANNED = "planned"


class PVOrientation(str, Enum):
    SOUTH = "south"
    SOUTH_EAST = "south_east"
    SOUTH_WEST = "south_west"
    EAST = "east"
    WEST = "west"


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        return {"high": 0, "medium": 1, "low": 2}[self.value]


class RecommendationCategory(str, Enum):
    """Shared by recommendations and catalog interventions."""
    SETTINGS = "settings"
    MEASURE = "measure"
    BEHAVIOUR = "behaviour"
    INVESTMENT = "investment"
    HOT_WATER = "hot_water"
    BUILDING_ENVELOPE = "building_envelope"
    MAINTENANCE = "maintenance"
    SPECIALIST = "specialist"
    AUXILIARY_HEATER = "auxiliary_heater"
    DIAGNOSIS = "diagnosis"
    PV = "pv"


# =============================================================================
# PROFILE VALUE OBJECTS
# =============================================================================

@dataclass(frozen=True)
class BuildingProfile:
    """Building envelope and occupancy."""
    area_m2: float
    building_type: BuildingType
    construction_period: ConstructionPeriod
    renovations: FrozenSet[Renovation] = frozenset()
    occupants: int = 3
    target_room_temp_c: Optional[float] = None  # None = not supplied
    has_auto_controllers: TriState = TriState.UNKNOWN


@dataclass(frozen=True)
class HeatPumpConfig:
    """Heat distribution and hydraulic configuration."""
    emitter_type: EmitterType
    radiator_condition: Optional[RadiatorCondition] = None  # Only for radiators
    has_heat_pump_radiators: TriState = TriState.UNKNOWN
    hydraulic_balancing: TriState = TriState.UNKNOWN
    has_buffer_tank: bool = False
    flow_temp_c: Optional[float] = None  # None = estimate from emitters

    @property
    def has_legacy_radiators(self) -> bool:
        return (
            self.emitter_type == EmitterType.RADIATOR
            and self.radiator_condition == RadiatorCondition.LEGACY
        )

    @property
    def has_renovated_radiators(self) -> bool:
        return (
            self.emitter_type == EmitterType.RADIATOR
            and self.radiator_condition == RadiatorCondition.RENOVATED
        )


@dataclass(frozen=True)
class AuxiliaryHeaterConfig:
    """Resistive backup heater (heating rod)."""
    present: TriState = TriState.UNKNOWN
    rated_power_kw: Optional[float] = None
    operating_hours: Optional[float] = None
    mode: AuxHeaterMode = AuxHeaterMode.UNKNOWN


@dataclass(frozen=True)
class PVConfig:
    """On-site photovoltaic system."""
    present: PVPresence = PVPresence.NO
    capacity_kwp: Optional[float] = None
    orientation: PVOrientation = PVOrientation.SOUTH
    has_battery: bool = False
    battery_capacity_kwh: Optional[float] = None


@dataclass(frozen=True)
class ConsumptionRecord:
    """Metered heat pump electricity from a bill or meter readings."""
    metered_kwh: float
    billing_start: Optional[date] = None
    billing_end: Optional[date] = None
    produced_kwh: Optional[float] = None  # Heat delivered (heat meter)


@dataclass(frozen=True)
class EngineProfile:
    """Everything one engine run needs, already defaulted."""
    postal_code: str
    building: BuildingProfile
    heat_pump: HeatPumpConfig
    consumption: Optional[ConsumptionRecord] = None
    auxiliary_heater: Optional[AuxiliaryHeaterConfig] = None
    pv: Optional[PVConfig] = None
    showers_per_day: Optional[float] = None
    price_ct_per_kwh: float = 30.0

    @property
    def price_eur_per_kwh(self) -> float:
        return self.price_ct_per_kwh / 100.0

    @property
    def has_metered_consumption(self) -> bool:
        return self.consumption is not None and self.consumption.metered_kwh > 0
