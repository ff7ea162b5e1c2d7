"""
Recommendation rules.

Each rule is a predicate over a frozen ``RuleContext`` plus a builder that
produces one ``Recommendation``. ``RULES`` lists them in evaluation order;
the engine sorts the fired recommendations by priority afterwards, keeping
this order within each priority tier.

Flow temperature rules are mutually exclusive by emitter:
- Underfloor: lower to 35 °C (high above 45 °C, medium between 35 and 45 °C)
- Heat pump or renovated radiators: lower to 42 / 45 °C
- Legacy radiators: staged test above 50 °C plus an emitter upgrade
"""

from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from ..core.profile import (
    BuildingType,
    EmitterType,
    EngineProfile,
    Priority,
    PVPresence,
    RecommendationCategory,
    Renovation,
    TriState,
)
from ..demand.thermal import DEFAULT_ROOM_TEMP_C
from ..hvac.auxiliary import AuxHeaterRating, AuxiliaryHeaterAnalysis


# JAZ improvement per kelvin of flow temperature reduction (%)
GAIN_PER_KELVIN = 2.5
# Heating energy change per kelvin of room temperature (%)
ROOM_TEMP_SAVINGS_PER_K = 6

FLOW_TEMP_HIGH_C = 45.0
FLOW_TEMP_LEGACY_STAGED_C = 50.0
UNDERFLOOR_TARGET_C = 35.0
HP_RADIATOR_TARGET_C = 42.0
RENOVATED_RADIATOR_TARGET_C = 45.0

MAJOR_RENOVATION_DEMAND = 100.0
TARGETED_RENOVATION_DEMAND = 70.0
HIGH_SHOWER_COUNT = 4


@dataclass(frozen=True)
class Recommendation:
    """One prioritized, explained improvement action."""
    rule_id: str
    category: RecommendationCategory
    title: str
    impact: str
    priority: Priority
    prerequisites: Tuple[str, ...] = ()
    context: Optional[str] = None
    intervention_id: Optional[str] = None  # Matching catalog entry, if costed

    @property
    def text(self) -> str:
        """All text of the recommendation, for keyword matching."""
        return " ".join(
            [self.title, self.impact, self.context or ""] + list(self.prerequisites)
        )


@dataclass(frozen=True)
class RuleContext:
    """Profile plus derived metrics the rules evaluate."""
    profile: EngineProfile
    flow_temp_c: float
    heating_factor: float
    specific_demand: float
    simulated_kwh: float
    deviation_percent: float
    auxiliary: Optional[AuxiliaryHeaterAnalysis] = None
    pv_min_kwh: float = 3000.0
    auditor_deviation_percent: float = 30.0

    @property
    def heat_pump(self):
        return self.profile.heat_pump

    @property
    def building(self):
        return self.profile.building

    @property
    def is_underfloor(self) -> bool:
        return self.heat_pump.emitter_type == EmitterType.UNDERFLOOR

    @property
    def has_hp_radiators(self) -> bool:
        return self.heat_pump.has_heat_pump_radiators == TriState.YES

    @property
    def has_legacy_radiators(self) -> bool:
        return self.heat_pump.has_legacy_radiators and not self.has_hp_radiators


@dataclass(frozen=True)
class Rule:
    """Declarative condition -> recommendation pair."""
    rule_id: str
    predicate: Callable[[RuleContext], bool]
    build: Callable[[RuleContext], Recommendation]

    def evaluate(self, ctx: RuleContext) -> Optional[Recommendation]:
        if not self.predicate(ctx):
            return None
        return self.build(ctx)


def _t(value: float) -> str:
    """Temperature without a trailing .0"""
    return f"{value:g}"


def _gain(from_c: float, to_c: float) -> int:
    return round((from_c - to_c) * GAIN_PER_KELVIN)


# =============================================================================
# AUXILIARY HEATER / PV
# =============================================================================


def _aux_share_fires(ctx: RuleContext) -> bool:
    return ctx.auxiliary is not None and ctx.auxiliary.rating in (
        AuxHeaterRating.NOTICEABLE, AuxHeaterRating.CRITICAL
    )


def _aux_share(ctx: RuleContext) -> Recommendation:
    aux = ctx.auxiliary
    critical = aux.rating == AuxHeaterRating.CRITICAL
    return Recommendation(
        rule_id="auxiliary_heater_share",
        category=RecommendationCategory.AUXILIARY_HEATER,
        title="Reduce backup heater use",
        impact=(
            f"The backup heater accounts for about {aux.share_percent:.0f} % of the electricity "
            f"({aux.electricity_kwh:.0f} kWh/yr). Extra cost compared to heat pump operation: "
            f"about {aux.extra_cost_eur:.0f} € per year."
        ),
        priority=Priority.HIGH if critical else Priority.MEDIUM,
        context=(
            "A backup heater turns one kWh of electricity into one kWh of heat, the heat pump "
            f"into about {ctx.heating_factor:.1f}. It should only cover defrosting, emergencies "
            "and the occasional anti-legionella cycle."
        ),
        prerequisites=(
            "Read the backup heater operating hours from the heat pump controller",
            "Have the installer check the bivalence point and the heating curve",
        ),
        intervention_id="aux_heater_optimization",
    )


def _aux_unknown(ctx: RuleContext) -> Recommendation:
    return Recommendation(
        rule_id="auxiliary_heater_unknown",
        category=RecommendationCategory.DIAGNOSIS,
        title="Check whether the backup heater is running",
        impact="Unnoticed backup heater operation can raise electricity use by 10-30 %.",
        priority=Priority.MEDIUM,
        context=(
            "Most heat pumps log the operating hours or energy of the backup heater. "
            "Look for it in the controller menu or the installer's app."
        ),
        intervention_id="aux_heater_check",
    )


def _pv_missing(ctx: RuleContext) -> Recommendation:
    low = round(ctx.simulated_kwh * 0.25)
    high = round(ctx.simulated_kwh * 0.35)
    return Recommendation(
        rule_id="pv_missing",
        category=RecommendationCategory.PV,
        title="Consider a PV system for the heat pump",
        impact=(
            f"Own solar power could cover roughly {low}-{high} kWh of the "
            f"{ctx.simulated_kwh:.0f} kWh heat pump electricity per year."
        ),
        priority=Priority.MEDIUM,
        context=(
            "Heat pump demand peaks in winter while PV yield peaks in summer, so direct "
            "coverage is limited. Hot water and transition months benefit most."
        ),
        intervention_id="pv_system",
    )


def _pv_battery_missing(ctx: RuleContext) -> Recommendation:
    return Recommendation(
        rule_id="pv_battery_missing",
        category=RecommendationCategory.PV,
        title="Add battery storage to the PV system",
        impact="A battery raises the direct PV share for the heat pump from about 35 % to up to 65 %.",
        priority=Priority.LOW,
        context="Worth it mainly when most PV power is exported at the low feed-in tariff.",
        intervention_id="battery_storage",
    )


# =============================================================================
# FLOW TEMPERATURE / EMITTERS
# =============================================================================


def _flow_underfloor_high(ctx: RuleContext) -> Recommendation:
    flow = ctx.flow_temp_c
    return Recommendation(
        rule_id="flow_temp_underfloor_high",
        category=RecommendationCategory.SETTINGS,
        title=f"Lower the flow temperature from {_t(flow)} °C to 35 °C",
        impact=(
            "With underfloor heating 35 °C is sufficient. Estimated JAZ improvement "
            f"of about {_gain(flow, UNDERFLOOR_TARGET_C)} %."
        ),
        priority=Priority.HIGH,
        context=(
            "Underfloor and wall heating work efficiently at low temperatures. Lowering "
            "is usually possible without any construction work."
        ),
        intervention_id="lower_flow_temperature",
    )


def _flow_radiator_high_fires(ctx: RuleContext) -> bool:
    if ctx.flow_temp_c <= FLOW_TEMP_HIGH_C or ctx.is_underfloor:
        return False
    return ctx.has_hp_radiators or ctx.heat_pump.has_renovated_radiators


def _flow_radiator_high(ctx: RuleContext) -> Recommendation:
    flow = ctx.flow_temp_c
    target = HP_RADIATOR_TARGET_C if ctx.has_hp_radiators else RENOVATED_RADIATOR_TARGET_C
    kind = "Heat pump radiators" if ctx.has_hp_radiators else "Renovated radiators"
    return Recommendation(
        rule_id="flow_temp_radiator_high",
        category=RecommendationCategory.SETTINGS,
        title=f"Lower the flow temperature from {_t(flow)} °C to {_t(target)} °C",
        impact=(
            f"{kind} are designed for lower flow temperatures. "
            f"About {_gain(flow, target)} % savings."
        ),
        priority=Priority.HIGH,
        context=(
            "Heat pump radiators have large transfer surfaces and work efficiently at 42 °C."
            if ctx.has_hp_radiators else
            "Check with your installer whether the radiators were sized correctly during the renovation."
        ),
        intervention_id="lower_flow_temperature",
    )


def _flow_legacy_staged(ctx: RuleContext) -> Recommendation:
    flow = ctx.flow_temp_c
    target = max(flow - 5, FLOW_TEMP_LEGACY_STAGED_C)
    return Recommendation(
        rule_id="flow_temp_legacy_staged",
        category=RecommendationCategory.SETTINGS,
        title=f"Test lowering the flow temperature step by step from {_t(flow)} °C to {_t(target)} °C",
        impact=(
            f"Just {_t(flow - target)} K less saves about {_gain(flow, target)} %."
        ),
        priority=Priority.MEDIUM,
        context=(
            "Lower the flow temperature in 2 K steps and check over a few days whether every "
            "room still gets warm. Do not drop straight to 42 °C, legacy radiators are "
            "usually not sized for it."
        ),
        prerequisites=(
            "Adjust the heating curve in the heat pump controller (not just the room thermostat)",
            "On cold days, check that all rooms still get warm enough",
        ),
        intervention_id="lower_flow_temperature",
    )


def _emitter_upgrade(ctx: RuleContext) -> Recommendation:
    return Recommendation(
        rule_id="emitter_upgrade",
        category=RecommendationCategory.INVESTMENT,
        title="Enlarge heating surfaces or switch to heat pump radiators",
        impact=(
            "Allows a flow temperature of 42 °C and raises the JAZ by up to "
            f"{_gain(ctx.flow_temp_c, HP_RADIATOR_TARGET_C)} %."
        ),
        priority=Priority.HIGH,
        context=(
            "Legacy radiators were sized for 55-70 °C flow. Efficient heat pump operation needs "
            "larger heating surfaces: bigger radiators, heat pump radiators (e.g. type 33) "
            "or underfloor heating."
        ),
        prerequisites=(
            "Have a room-by-room heat load calculation done by a specialist planner",
            "Decide which rooms to convert first (bathroom and living room are often critical)",
            "Check funding options (BEG subsidy for heating optimization)",
        ),
        intervention_id="heat_pump_radiators",
    )


def _flow_underfloor_moderate(ctx: RuleContext) -> Recommendation:
    flow = ctx.flow_temp_c
    return Recommendation(
        rule_id="flow_temp_underfloor_moderate",
        category=RecommendationCategory.SETTINGS,
        title=f"Optimize the flow temperature from {_t(flow)} °C to 35 °C",
        impact=(
            "Underfloor heating usually gets by with 35 °C. "
            f"About {_gain(flow, UNDERFLOOR_TARGET_C)} % savings possible."
        ),
        priority=Priority.MEDIUM,
        context="Lower the heating curve gradually. Well insulated new builds can even run at 30 °C.",
        intervention_id="lower_flow_temperature",
    )


# =============================================================================
# HYDRAULICS / CONTROLS / USAGE
# =============================================================================


def _hydraulic_balancing(ctx: RuleContext) -> Recommendation:
    prerequisites = ["Commission a heating contractor to carry out hydraulic balancing"]
    if ctx.heat_pump.has_legacy_radiators:
        prerequisites.append("Retrofit presettable thermostatic valves (if not present)")
    return Recommendation(
        rule_id="hydraulic_balancing",
        category=RecommendationCategory.MEASURE,
        title="Have hydraulic balancing carried out",
        impact="10-15 % efficiency gain from optimal heat distribution. Cost: about 500-1,000 €.",
        priority=Priority.HIGH,
        context=(
            "Hydraulic balancing makes sure every radiator gets exactly the right amount of water. "
            "Without it, nearby rooms are oversupplied and distant ones undersupplied. "
            "Eligible for BEG funding."
        ),
        prerequisites=tuple(prerequisites),
        intervention_id="hydraulic_balancing",
    )


def _room_temp_fires(ctx: RuleContext) -> bool:
    target = ctx.building.target_room_temp_c
    return target is not None and target > DEFAULT_ROOM_TEMP_C


def _room_temperature(ctx: RuleContext) -> Recommendation:
    target = ctx.building.target_room_temp_c
    savings = round((target - DEFAULT_ROOM_TEMP_C) * ROOM_TEMP_SAVINGS_PER_K)
    return Recommendation(
        rule_id="room_temperature",
        category=RecommendationCategory.BEHAVIOUR,
        title=f"Lower the room temperature from {_t(target)} °C to 21 °C",
        impact=f"About {savings} % lower heating cost. Each kelvin less saves roughly 6 % energy.",
        priority=Priority.MEDIUM,
        context=(
            "Start with rarely used rooms. Bedrooms and hallways usually need only 18 °C, "
            "living areas can be set to 21 °C."
        ),
        intervention_id="lower_room_temperature",
    )


def _room_controllers(ctx: RuleContext) -> Recommendation:
    return Recommendation(
        rule_id="room_controllers",
        category=RecommendationCategory.INVESTMENT,
        title="Retrofit smart thermostats / automatic room controllers",
        impact="5 % savings from demand-driven room control and automatic night setback.",
        priority=Priority.MEDIUM,
        context=(
            "Smart thermostats allow per-room schedules and setback when nobody is home. "
            "Cost: about 50-80 € per unit, quick payback."
        ),
        intervention_id="smart_thermostats",
    )


def _radiator_retrofit_fires(ctx: RuleContext) -> bool:
    return ctx.has_legacy_radiators and ctx.flow_temp_c <= FLOW_TEMP_HIGH_C


def _radiator_retrofit(ctx: RuleContext) -> Recommendation:
    return Recommendation(
        rule_id="radiator_retrofit",
        category=RecommendationCategory.INVESTMENT,
        title="Swap individual critical radiators for heat pump radiators",
        impact="Allows lower flow temperatures in problem rooms and improves the overall JAZ.",
        priority=Priority.MEDIUM,
        context=(
            "Not every radiator has to go. Often converting the 2-3 worst supplied rooms "
            "(e.g. bathroom, large living room) is enough."
        ),
        prerequisites=(
            "Room-by-room heat load calculation to identify the critical rooms",
            "Check whether the existing pipes can supply larger radiators",
        ),
        intervention_id="heat_pump_radiators",
    )


def _hot_water_usage(ctx: RuleContext) -> Recommendation:
    showers = ctx.profile.showers_per_day
    return Recommendation(
        rule_id="hot_water_usage",
        category=RecommendationCategory.HOT_WATER,
        title="Optimize hot water use",
        impact="High hot water demand strains the heat pump. Low-flow shower heads and shorter showers help.",
        priority=Priority.MEDIUM,
        context=(
            f"With {_t(showers)} showers or baths per day, hot water takes an above-average share "
            "of the electricity. Low-flow shower heads (6-8 l/min instead of 12-15 l/min) can cut "
            "hot water demand by 30-40 %."
        ),
        intervention_id="hot_water_optimization",
    )


# =============================================================================
# BUILDING ENVELOPE
# =============================================================================

# (renovation, name, savings text, catalog id), in recommendation order
ENVELOPE_MEASURES = (
    (Renovation.FACADE, "Facade insulation", "20-35 kWh/m²", "facade_insulation"),
    (Renovation.ROOF, "Roof insulation", "15-20 kWh/m²", "roof_insulation"),
    (Renovation.WINDOWS, "Window replacement", "10-18 kWh/m²", "window_replacement"),
    (Renovation.BASEMENT_CEILING, "Basement ceiling insulation", "8-12 kWh/m²", "basement_ceiling_insulation"),
)
SAVINGS_PER_MEASURE_LOW = 12
SAVINGS_PER_MEASURE_HIGH = 25


def _missing_envelope(ctx: RuleContext):
    done = ctx.building.renovations
    return [m for m in ENVELOPE_MEASURES if m[0] not in done]


def _envelope_major_fires(ctx: RuleContext) -> bool:
    return ctx.specific_demand > MAJOR_RENOVATION_DEMAND and bool(_missing_envelope(ctx))


def _envelope_major(ctx: RuleContext) -> Recommendation:
    missing = _missing_envelope(ctx)
    low = len(missing) * SAVINGS_PER_MEASURE_LOW
    high = len(missing) * SAVINGS_PER_MEASURE_HIGH
    items = "\n".join(f"• {name}: {saving}" for _, name, saving, _ in missing)
    return Recommendation(
        rule_id="envelope_major",
        category=RecommendationCategory.BUILDING_ENVELOPE,
        title="Energy-efficient renovation: " + ", ".join(name for _, name, _, _ in missing),
        impact=(
            f"Space heating demand ({ctx.specific_demand:.0f} kWh/m²·yr) is high. "
            f"Possible reduction: {low}-{high} kWh/m²."
        ),
        priority=Priority.HIGH,
        context=(
            "A better building envelope not only cuts consumption, it also allows lower flow "
            "temperatures, a double efficiency gain for the heat pump.\n\n"
            f"Individual potentials:\n{items}"
        ),
        prerequisites=(
            "Get a subsidized energy advice (BAFA covers about 80 %)",
            "Have an individual renovation roadmap (iSFP) drawn up, it raises subsidy rates by 5 %",
            "Plan the measures in a sensible order (insulation before heating replacement)",
        ),
        intervention_id=missing[0][3],
    )


def _targeted_missing(ctx: RuleContext):
    done = ctx.building.renovations
    missing = []
    if Renovation.BASEMENT_CEILING not in done:
        missing.append(("Basement ceiling insulation", "basement_ceiling_insulation"))
    if Renovation.ROOF not in done:
        missing.append(("Roof / top floor ceiling insulation", "roof_insulation"))
    return missing


def _envelope_targeted_fires(ctx: RuleContext) -> bool:
    return (
        TARGETED_RENOVATION_DEMAND < ctx.specific_demand <= MAJOR_RENOVATION_DEMAND
        and ctx.building.building_type == BuildingType.EXISTING
        and bool(_targeted_missing(ctx))
    )


def _envelope_targeted(ctx: RuleContext) -> Recommendation:
    missing = _targeted_missing(ctx)
    return Recommendation(
        rule_id="envelope_targeted",
        category=RecommendationCategory.BUILDING_ENVELOPE,
        title="Targeted insulation: " + ", ".join(name for name, _ in missing),
        impact="Low-cost measures with quick payback. Heating demand can drop by 10-20 kWh/m².",
        priority=Priority.MEDIUM,
        context=(
            "Basement ceiling and roof insulation are often the most economical measures "
            "and can partly be done yourself."
        ),
        intervention_id=missing[0][1],
    )


# =============================================================================
# REVIEW / MAINTENANCE / SPECIALIST
# =============================================================================


def _buffer_tank_review(ctx: RuleContext) -> Recommendation:
    return Recommendation(
        rule_id="buffer_tank_review",
        category=RecommendationCategory.SETTINGS,
        title="Review whether the buffer tank is needed",
        impact="A buffer tank causes losses (about 1-3 % of heat demand). Often unnecessary with underfloor heating.",
        priority=Priority.LOW,
        context=(
            "Underfloor heating has a large thermal mass and acts as a buffer itself. Ask your "
            "installer whether the tank can be bypassed or removed."
        ),
        intervention_id="buffer_tank_review",
    )


def _maintenance(ctx: RuleContext) -> Recommendation:
    return Recommendation(
        rule_id="maintenance",
        category=RecommendationCategory.MAINTENANCE,
        title="Regular maintenance and filter check",
        impact="3-5 % efficiency gain. Recommended: yearly service by a heating contractor.",
        priority=Priority.LOW,
        context=(
            "Clogged air filters, scaled heat exchangers or low refrigerant charge noticeably "
            "reduce performance."
        ),
        intervention_id="maintenance",
    )


def _energy_auditor(ctx: RuleContext) -> Recommendation:
    deviation = abs(ctx.deviation_percent)
    return Recommendation(
        rule_id="energy_auditor",
        category=RecommendationCategory.SPECIALIST,
        title="Professional analysis by an energy auditor recommended",
        impact=(
            f"With a {deviation:.0f} % deviation from the expected consumption, a certified "
            "energy auditor should inspect the system."
        ),
        priority=Priority.HIGH,
        context=(
            "A deviation this large points to systematic problems beyond simple setting changes. "
            "An auditor can analyze the heat pump, the pipework and the controls in depth."
        ),
        prerequisites=(
            "Find an energy auditor on the federal energy efficiency expert list (www.energie-effizienz-experten.de)",
            "Apply for BAFA funding of the energy advice (up to 80 % subsidy)",
            "Document operating data (meter readings, settings) for the auditor",
        ),
        intervention_id="energy_audit",
    )


# =============================================================================
# RULE ORDER
# =============================================================================

RULES: Tuple[Rule, ...] = (
    Rule("auxiliary_heater_share", _aux_share_fires, _aux_share),
    Rule(
        "auxiliary_heater_unknown",
        lambda ctx: (
            ctx.profile.auxiliary_heater is not None
            and ctx.profile.auxiliary_heater.present == TriState.UNKNOWN
        ),
        _aux_unknown,
    ),
    Rule(
        "pv_missing",
        lambda ctx: (
            ctx.profile.pv is not None
            and ctx.profile.pv.present == PVPresence.NO
            and ctx.simulated_kwh >= ctx.pv_min_kwh
        ),
        _pv_missing,
    ),
    Rule(
        "pv_battery_missing",
        lambda ctx: (
            ctx.profile.pv is not None
            and ctx.profile.pv.present == PVPresence.YES
            and not ctx.profile.pv.has_battery
        ),
        _pv_battery_missing,
    ),
    Rule(
        "flow_temp_underfloor_high",
        lambda ctx: ctx.flow_temp_c > FLOW_TEMP_HIGH_C and ctx.is_underfloor,
        _flow_underfloor_high,
    ),
    Rule("flow_temp_radiator_high", _flow_radiator_high_fires, _flow_radiator_high),
    Rule(
        "flow_temp_legacy_staged",
        lambda ctx: ctx.flow_temp_c > FLOW_TEMP_LEGACY_STAGED_C and ctx.has_legacy_radiators,
        _flow_legacy_staged,
    ),
    Rule(
        "emitter_upgrade",
        lambda ctx: ctx.flow_temp_c > FLOW_TEMP_HIGH_C and ctx.has_legacy_radiators,
        _emitter_upgrade,
    ),
    Rule(
        "flow_temp_underfloor_moderate",
        lambda ctx: UNDERFLOOR_TARGET_C < ctx.flow_temp_c <= FLOW_TEMP_HIGH_C and ctx.is_underfloor,
        _flow_underfloor_moderate,
    ),
    Rule(
        "hydraulic_balancing",
        lambda ctx: ctx.heat_pump.hydraulic_balancing == TriState.NO,
        _hydraulic_balancing,
    ),
    Rule("room_temperature", _room_temp_fires, _room_temperature),
    Rule(
        "room_controllers",
        lambda ctx: ctx.building.has_auto_controllers == TriState.NO,
        _room_controllers,
    ),
    Rule("radiator_retrofit", _radiator_retrofit_fires, _radiator_retrofit),
    Rule(
        "hot_water_usage",
        lambda ctx: ctx.profile.showers_per_day is not None and ctx.profile.showers_per_day > HIGH_SHOWER_COUNT,
        _hot_water_usage,
    ),
    Rule("envelope_major", _envelope_major_fires, _envelope_major),
    Rule("envelope_targeted", _envelope_targeted_fires, _envelope_targeted),
    Rule(
        "buffer_tank_review",
        lambda ctx: ctx.heat_pump.has_buffer_tank and ctx.is_underfloor,
        _buffer_tank_review,
    ),
    Rule("maintenance", lambda ctx: True, _maintenance),
    Rule(
        "energy_auditor",
        lambda ctx: abs(ctx.deviation_percent) > ctx.auditor_deviation_percent,
        _energy_auditor,
    ),
)


def rule_ids() -> List[str]:
    return [rule.rule_id for rule in RULES]
