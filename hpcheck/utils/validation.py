"""
Input validation and defaulting for hpcheck.

The questionnaire discloses fields progressively and the engine produces an
estimate from whatever has been entered. Every field is parsed here and
falls back to a default when missing or malformed; the engine itself never
sees a malformed value.

``ValidationError`` is reserved for the outer shell: unreadable request
files and invalid cost overrides.

Usage:
    from hpcheck.utils.validation import normalize_request, load_request

    request = load_request("request.json")
    profile = normalize_request(request)
"""

import json
import logging
import math
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Type, TypeVar

from pydantic import ValidationError as PydanticValidationError

from ..core.config import Settings, settings as default_settings
from ..core.models import (
    AuxiliaryHeaterInput,
    ConsumptionInput,
    PVInput,
    ScenarioRequest,
    SimulationRequest,
)
from ..core.profile import (
    AuxHeaterMode,
    AuxiliaryHeaterConfig,
    BuildingProfile,
    BuildingType,
    ConsumptionRecord,
    ConstructionPeriod,
    EmitterType,
    EngineProfile,
    HeatPumpConfig,
    PVConfig,
    PVOrientation,
    PVPresence,
    RadiatorCondition,
    Renovation,
    TriState,
)

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)

# Target room temperatures outside this band are treated as typos
ROOM_TEMP_RANGE_C = (12.0, 30.0)

_TRUE_TOKENS = {"yes", "true", "1", "y", "ja"}
_FALSE_TOKENS = {"no", "false", "0", "n", "nein"}


class ValidationError(ValueError):
    """Raised when input validation fails."""

    def __init__(self, message: str, field: str = "", suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field = field
        self.suggestions = suggestions or []


# =============================================================================
# FIELD PARSERS
# =============================================================================


def _token(value: Any) -> str:
    return str(value).strip().lower().replace("-", "_").replace(" ", "_")


def parse_number(value: Any, field: str = "") -> Optional[float]:
    """
    Parse a number from a form value.

    Returns:
        The value as float, or None when absent or not numeric
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = str(value).strip().replace(",", ".")
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            logger.debug(f"Ignoring non-numeric {field or 'value'}: {value!r}")
            return None
    if number != number or number in (float("inf"), float("-inf")):
        return None
    return number


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards +infinity."""
    return math.floor(value + 0.5)


def parse_enum(value: Any, enum_cls: Type[E], default: Optional[E], field: str = "") -> Optional[E]:
    """Map a free-text token to an enum member, or the default."""
    if value is None or value == "":
        return default
    token = _token(value)
    for member in enum_cls:
        if member.value == token:
            return member
    logger.warning(f"Unknown {field or enum_cls.__name__} '{value}', using {default}")
    return default


def parse_tristate(value: Any, field: str = "") -> TriState:
    if isinstance(value, bool):
        return TriState.YES if value else TriState.NO
    if value is None or value == "":
        return TriState.UNKNOWN
    token = _token(value)
    if token in _TRUE_TOKENS:
        return TriState.YES
    if token in _FALSE_TOKENS:
        return TriState.NO
    return parse_enum(value, TriState, TriState.UNKNOWN, field)


def parse_flag(value: Any, default: bool = False) -> bool:
    """Yes/no answer as bool; anything unrecognized gives the default."""
    state = parse_tristate(value)
    if state == TriState.UNKNOWN:
        return default
    return state == TriState.YES


def parse_date(value: Any, field: str = "") -> Optional[date]:
    """Parse an ISO calendar date; invalid input counts as absent."""
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip()[:10])
    except ValueError:
        logger.warning(f"Ignoring invalid {field or 'date'}: {value!r}")
        return None


def parse_renovations(values: List[Any]) -> frozenset:
    found = set()
    for value in values or []:
        item = parse_enum(value, Renovation, None, "renovation")
        if item is not None:
            found.add(item)
    return frozenset(found)


# =============================================================================
# SECTIONS
# =============================================================================


def _normalize_consumption(section: Optional[ConsumptionInput]) -> Optional[ConsumptionRecord]:
    if section is None:
        return None
    if section.available is not None and not parse_flag(section.available, default=True):
        return None

    metered = parse_number(section.metered_kwh, "metered_kwh")
    if metered is None or metered <= 0:
        logger.debug("No usable metered consumption, comparison disabled")
        return None

    produced = parse_number(section.produced_kwh, "produced_kwh")
    return ConsumptionRecord(
        metered_kwh=metered,
        billing_start=parse_date(section.billing_start, "billing_start"),
        billing_end=parse_date(section.billing_end, "billing_end"),
        produced_kwh=produced if produced is not None and produced > 0 else None,
    )


def _normalize_auxiliary(section: Optional[AuxiliaryHeaterInput]) -> Optional[AuxiliaryHeaterConfig]:
    if section is None:
        return None
    power = parse_number(section.rated_power_kw, "rated_power_kw")
    hours = parse_number(section.operating_hours, "operating_hours")
    return AuxiliaryHeaterConfig(
        present=parse_tristate(section.present, "auxiliary_heater.present"),
        rated_power_kw=power if power is not None and power > 0 else None,
        operating_hours=hours if hours is not None and hours >= 0 else None,
        mode=parse_enum(section.mode, AuxHeaterMode, AuxHeaterMode.UNKNOWN, "auxiliary_heater.mode"),
    )


def _normalize_pv(section: Optional[PVInput]) -> Optional[PVConfig]:
    if section is None:
        return None
    capacity = parse_number(section.capacity_kwp, "capacity_kwp")
    battery = parse_number(section.battery_capacity_kwh, "battery_capacity_kwh")
    present = section.present
    if isinstance(present, bool):
        present = "yes" if present else "no"
    return PVConfig(
        present=parse_enum(present, PVPresence, PVPresence.NO, "pv.present"),
        capacity_kwp=capacity if capacity is not None and capacity > 0 else None,
        orientation=parse_enum(section.orientation, PVOrientation, PVOrientation.SOUTH, "pv.orientation"),
        has_battery=parse_flag(section.has_battery),
        battery_capacity_kwh=battery if battery is not None and battery > 0 else None,
    )


# =============================================================================
# REQUEST
# =============================================================================


def normalize_request(
    request: SimulationRequest,
    settings: Optional[Settings] = None,
) -> EngineProfile:
    """
    Default and validate a loose request into an engine profile.

    Never raises for missing or malformed fields.

    Args:
        request: Questionnaire payload
        settings: Defaults (module settings when omitted)

    Returns:
        EngineProfile ready for ``hpcheck.engine.run``
    """
    cfg = settings or default_settings
    b = request.building
    eq = request.equipment

    postal_code = (b.postal_code or "").strip() or cfg.default_postal_code

    area = parse_number(b.area_m2, "area_m2")
    if not area:
        area = cfg.default_area_m2
    area = max(area, cfg.min_area_m2)

    occupants = parse_number(b.occupants, "occupants")
    occupants = max(int(round(occupants)) if occupants else cfg.default_occupants, 1)

    room_temp = parse_number(eq.target_room_temp_c, "target_room_temp_c")
    if room_temp is not None and not ROOM_TEMP_RANGE_C[0] <= room_temp <= ROOM_TEMP_RANGE_C[1]:
        logger.warning(f"Ignoring implausible target room temperature {room_temp} °C")
        room_temp = None

    building = BuildingProfile(
        area_m2=area,
        building_type=parse_enum(b.building_type, BuildingType, BuildingType.EXISTING, "building_type"),
        construction_period=parse_enum(
            b.construction_period, ConstructionPeriod, ConstructionPeriod.UNKNOWN, "construction_period"
        ),
        renovations=parse_renovations(b.renovations),
        occupants=occupants,
        target_room_temp_c=room_temp,
        has_auto_controllers=parse_tristate(eq.auto_controllers, "auto_controllers"),
    )

    emitter = parse_enum(eq.emitter_type, EmitterType, EmitterType.UNDERFLOOR, "emitter_type")
    condition = None
    if emitter == EmitterType.RADIATOR:
        condition = parse_enum(eq.radiator_condition, RadiatorCondition, None, "radiator_condition")
        if condition is None:
            logger.debug("Radiator condition not given, assuming legacy radiators")
            condition = RadiatorCondition.LEGACY

    heat_pump = HeatPumpConfig(
        emitter_type=emitter,
        radiator_condition=condition,
        has_heat_pump_radiators=parse_tristate(eq.heat_pump_radiators, "heat_pump_radiators"),
        hydraulic_balancing=parse_tristate(eq.hydraulic_balancing, "hydraulic_balancing"),
        has_buffer_tank=parse_flag(eq.buffer_tank),
        flow_temp_c=parse_number(eq.flow_temp_c, "flow_temp_c"),
    )

    showers = parse_number(eq.showers_per_day, "showers_per_day")
    if showers is not None and showers <= 0:
        showers = None

    price = None
    if request.consumption is not None:
        price = parse_number(request.consumption.price_ct_per_kwh, "price_ct_per_kwh")
    if price is None or price <= 0:
        price = cfg.default_price_ct_per_kwh

    return EngineProfile(
        postal_code=postal_code,
        building=building,
        heat_pump=heat_pump,
        consumption=_normalize_consumption(request.consumption),
        auxiliary_heater=_normalize_auxiliary(request.auxiliary_heater),
        pv=_normalize_pv(request.pv),
        showers_per_day=showers,
        price_ct_per_kwh=price,
    )


# =============================================================================
# FILE LOADING (CLI)
# =============================================================================


def _read_json(path: Path, field: str) -> Dict[str, Any]:
    if not path.exists():
        raise ValidationError(
            f"File not found: {path}",
            field=field,
            suggestions=["Check the path to the request JSON file"],
        )
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValidationError(
            f"Invalid JSON in {path}: {e.msg} (line {e.lineno})",
            field=field,
        ) from e
    if not isinstance(data, dict):
        raise ValidationError(
            f"Expected a JSON object in {path}",
            field=field,
            suggestions=['Wrap the answers in {"building": {...}, "equipment": {...}}'],
        )
    return data


def load_request(path: Path) -> SimulationRequest:
    """
    Read a simulation request from a JSON file.

    Raises:
        ValidationError: Missing file, invalid JSON or wrong structure
    """
    data = _read_json(Path(path), "request")
    try:
        return SimulationRequest.model_validate(data)
    except PydanticValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"])
        raise ValidationError(
            f"Invalid request field '{location}': {first['msg']}",
            field=location,
        ) from e


def load_scenario_request(path: Path) -> ScenarioRequest:
    """
    Read a scenario selection / cost override file.

    Raises:
        ValidationError: Missing file, invalid JSON or wrong structure
    """
    data = _read_json(Path(path), "scenario")
    try:
        return ScenarioRequest.model_validate(data)
    except PydanticValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"])
        raise ValidationError(
            f"Invalid scenario field '{location}': {first['msg']}",
            field=location,
        ) from e
