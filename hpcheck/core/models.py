"""
Pydantic models for the heat pump check request.

The request mirrors what the questionnaire collects: every field optional,
values possibly free text or numbers typed as strings. Nothing here is
trusted; ``hpcheck.utils.validation.normalize_request`` turns a request
into a defaulted ``EngineProfile``.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


# Numbers arrive as numbers or as form strings
Number = float | str | None

# Yes/no answers arrive as JSON booleans or as form strings
Answer = bool | str | None


class _Section(BaseModel):
    model_config = ConfigDict(extra="ignore")


# =============================================================================
# INPUT SCHEMA
# =============================================================================


class BuildingInput(_Section):
    """Building and occupancy answers."""

    postal_code: str | None = None             # digits, JSON numbers accepted
    area_m2: Number = None
    building_type: str | None = None           # new | existing
    construction_period: str | None = None     # before_1960 ... from_2016
    renovations: list[str] = Field(default_factory=list)
    occupants: Number = None

    @field_validator("postal_code", mode="before")
    @classmethod
    def postal_code_as_text(cls, v: Any) -> Any:
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v).zfill(5)
        return v

    @field_validator("renovations", mode="before")
    @classmethod
    def renovations_as_list(cls, v: Any) -> Any:
        """Accept null, a single value or a list."""
        if v is None:
            return []
        if isinstance(v, (str, int, float)):
            return [str(v)]
        if isinstance(v, (list, tuple)):
            return [str(item) for item in v if item is not None]
        return v


class EquipmentInput(_Section):
    """Heat pump and distribution answers."""

    emitter_type: str | None = None            # underfloor | radiator
    radiator_condition: str | None = None      # legacy | renovated
    heat_pump_radiators: Answer = None         # yes | no | unknown
    hydraulic_balancing: Answer = None         # yes | no | unknown
    buffer_tank: Answer = None                 # yes | no
    flow_temp_c: Number = None

    # Advanced questionnaire
    target_room_temp_c: Number = None
    auto_controllers: Answer = None            # yes | no
    showers_per_day: Number = None


class ConsumptionInput(_Section):
    """Electricity bill or meter readings."""

    available: Answer = None
    metered_kwh: Number = None
    billing_start: str | None = Field(default=None, description="ISO date")
    billing_end: str | None = Field(default=None, description="ISO date")
    produced_kwh: Number = None
    price_ct_per_kwh: Number = None


class AuxiliaryHeaterInput(_Section):
    present: Answer = None                     # yes | no | unknown
    rated_power_kw: Number = None
    operating_hours: Number = None
    mode: str | None = None                    # emergency | parallel | unknown


class PVInput(_Section):
    present: Answer = None                     # yes | no | planned
    capacity_kwp: Number = None
    orientation: str | None = None
    has_battery: Answer = None
    battery_capacity_kwh: Number = None


class SimulationRequest(_Section):
    """Complete questionnaire payload."""

    building: BuildingInput = Field(default_factory=BuildingInput)
    equipment: EquipmentInput = Field(default_factory=EquipmentInput)
    consumption: ConsumptionInput | None = None
    auxiliary_heater: AuxiliaryHeaterInput | None = None
    pv: PVInput | None = None


class ScenarioRequest(_Section):
    """Interventions picked by the user, with optional cost overrides."""

    selection: list[str] = Field(default_factory=list)
    overrides: dict[str, dict[str, float]] = Field(default_factory=dict)
