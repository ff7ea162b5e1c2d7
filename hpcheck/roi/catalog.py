"""
Intervention Catalog - Costed heat pump optimization measures.

Defines every intervention the scenario calculator can combine:
- Cost range (EUR, German market prices 2024/2025)
- Efficiency gain on the seasonal performance factor (%)
- Baseline electricity savings for a 120 m² reference home
- Relations between interventions (requires / supersedes)

The default catalog is immutable. Per-user cost overrides are resolved by
the caller and applied with ``InterventionCatalog.with_overrides()``, which
returns a new catalog.
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic import ValidationError as PydanticValidationError

from ..core.profile import RecommendationCategory
from ..utils.validation import ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InterventionCostModel:
    """A costed intervention."""
    id: str
    label: str
    cost_min: float
    cost_max: float
    unit: str
    efficiency_gain_percent: float
    baseline_kwh_savings: float  # Normalized to a 120 m² reference home
    category: RecommendationCategory

    @property
    def cost_mid(self) -> float:
        return (self.cost_min + self.cost_max) / 2

    @property
    def is_simulatable(self) -> bool:
        """Has an effect or a price worth putting into a scenario."""
        return self.baseline_kwh_savings > 0 or self.cost_max > 0


# =============================================================================
# DEFAULT CATALOG
# =============================================================================

_C = RecommendationCategory

_DEFAULT_INTERVENTIONS = [
    InterventionCostModel(
        "hydraulic_balancing", "Hydraulic balancing",
        650, 1250, "flat rate", 12, 500, _C.MEASURE,
    ),
    InterventionCostModel(
        "heat_pump_radiators", "Replace radiators with heat pump radiators",
        800, 2000, "per unit (2-4 typical)", 18, 700, _C.INVESTMENT,
    ),
    InterventionCostModel(
        "lower_flow_temperature", "Lower the flow temperature",
        0, 150, "flat rate (installer adjustment)", 10, 400, _C.SETTINGS,
    ),
    InterventionCostModel(
        "smart_thermostats", "Retrofit smart thermostats",
        300, 800, "for 6-10 radiators", 5, 200, _C.INVESTMENT,
    ),
    InterventionCostModel(
        "aux_heater_optimization", "Reduce / optimize backup heater use",
        0, 300, "flat rate (parameter adjustment)", 8, 350, _C.AUXILIARY_HEATER,
    ),
    InterventionCostModel(
        "facade_insulation", "Facade insulation (ETICS)",
        15000, 35000, "for 120 m² facade", 25, 1200, _C.BUILDING_ENVELOPE,
    ),
    InterventionCostModel(
        "roof_insulation", "Roof / top floor ceiling insulation",
        5000, 15000, "for 80-100 m² roof", 15, 700, _C.BUILDING_ENVELOPE,
    ),
    InterventionCostModel(
        "window_replacement", "Replace windows (triple glazing)",
        8000, 20000, "for 8-12 windows", 12, 500, _C.BUILDING_ENVELOPE,
    ),
    InterventionCostModel(
        "basement_ceiling_insulation", "Basement ceiling insulation",
        2000, 5000, "for 80-100 m² basement", 8, 350, _C.BUILDING_ENVELOPE,
    ),
    InterventionCostModel(
        "pv_system", "Install a PV system (10 kWp)",
        12000, 18000, "incl. mounting", 0, 1500, _C.PV,
    ),
    InterventionCostModel(
        "battery_storage", "Battery storage (5-10 kWh)",
        5000, 10000, "incl. installation", 0, 600, _C.PV,
    ),
    InterventionCostModel(
        "maintenance", "Professional maintenance and filter check",
        200, 400, "per year", 4, 150, _C.MAINTENANCE,
    ),
    InterventionCostModel(
        "energy_audit", "Energy advice / renovation roadmap (iSFP)",
        300, 500, "own share after 80 % subsidy", 0, 0, _C.SPECIALIST,
    ),
    InterventionCostModel(
        "lower_room_temperature", "Lower room temperature to 21 °C",
        0, 0, "free", 6, 250, _C.BEHAVIOUR,
    ),
    InterventionCostModel(
        "buffer_tank_review", "Review whether the buffer tank is needed",
        0, 200, "installer check", 2, 100, _C.SETTINGS,
    ),
    InterventionCostModel(
        "aux_heater_check", "Check backup heater operating hours",
        0, 0, "do it yourself", 0, 0, _C.DIAGNOSIS,
    ),
    InterventionCostModel(
        "hot_water_optimization", "Optimize hot water use (low-flow shower heads)",
        50, 200, "for 2-3 shower heads", 3, 200, _C.HOT_WATER,
    ),
]

DEFAULT_CATALOG: Mapping[str, InterventionCostModel] = MappingProxyType(
    {item.id: item for item in _DEFAULT_INTERVENTIONS}
)


# =============================================================================
# RELATIONS
# =============================================================================

class RelationType(Enum):
    """Type of relationship between interventions."""
    REQUIRES = "requires"           # Needs the other one installed or selected
    SUPERSEDES = "supersedes"       # Makes the other one unnecessary


@dataclass(frozen=True)
class InterventionRelation:
    """A relationship between two interventions."""
    intervention_a: str
    intervention_b: str
    relation_type: RelationType
    reason: str = ""


RELATIONS: List[InterventionRelation] = [
    InterventionRelation(
        "battery_storage", "pv_system",
        RelationType.REQUIRES,
        reason="Battery storage only makes sense with a PV system",
    ),
    InterventionRelation(
        "aux_heater_optimization", "aux_heater_check",
        RelationType.SUPERSEDES,
        reason="Optimizing the backup heater includes checking its hours",
    ),
]


# =============================================================================
# OVERRIDES
# =============================================================================

class CostOverride(BaseModel):
    """Per-user adjustment of one catalog entry."""

    model_config = ConfigDict(extra="forbid")

    cost_min: Optional[float] = Field(default=None, ge=0)
    cost_max: Optional[float] = Field(default=None, ge=0)
    efficiency_gain_percent: Optional[float] = Field(default=None, ge=0, lt=100)
    baseline_kwh_savings: Optional[float] = Field(default=None, ge=0)

    @model_validator(mode="after")
    def check_cost_range(self) -> "CostOverride":
        if self.cost_min is not None and self.cost_max is not None and self.cost_min > self.cost_max:
            raise ValueError("cost_min must not exceed cost_max")
        return self


class InterventionCatalog:
    """
    Access and filter the intervention catalog.

    Usage:
        catalog = InterventionCatalog()
        envelope = catalog.by_category(RecommendationCategory.BUILDING_ENVELOPE)
        custom = catalog.with_overrides({"hydraulic_balancing": {"cost_max": 900}})
    """

    def __init__(self, interventions: Optional[Mapping[str, InterventionCostModel]] = None):
        self.interventions = interventions if interventions is not None else DEFAULT_CATALOG

    def all(self) -> List[InterventionCostModel]:
        """Get all interventions."""
        return list(self.interventions.values())

    def get(self, intervention_id: str) -> Optional[InterventionCostModel]:
        """Get intervention by ID."""
        return self.interventions.get(intervention_id)

    def by_category(self, category: RecommendationCategory) -> List[InterventionCostModel]:
        return [i for i in self.interventions.values() if i.category == category]

    def simulatable(self) -> List[InterventionCostModel]:
        """Interventions worth offering in the scenario simulator."""
        return [i for i in self.interventions.values() if i.is_simulatable]

    def resolve(self, intervention_ids: Iterable[str]) -> List[InterventionCostModel]:
        """Look up a selection in order, skipping unknown IDs."""
        selected = []
        for intervention_id in intervention_ids:
            item = self.get(intervention_id)
            if item is None:
                logger.warning(f"Unknown intervention '{intervention_id}' ignored")
                continue
            selected.append(item)
        return selected

    def with_overrides(self, overrides: Mapping[str, Mapping[str, float]]) -> "InterventionCatalog":
        """
        Return a new catalog with per-user overrides applied.

        Args:
            overrides: intervention ID -> {field: value}

        Raises:
            ValidationError: Unknown ID or invalid values
        """
        updated: Dict[str, InterventionCostModel] = dict(self.interventions)
        for intervention_id, values in overrides.items():
            base = updated.get(intervention_id)
            if base is None:
                raise ValidationError(
                    f"Unknown intervention '{intervention_id}' in cost overrides",
                    field="overrides",
                    suggestions=[f"Valid IDs are: {', '.join(sorted(updated))}"],
                )
            try:
                override = CostOverride.model_validate(values)
            except PydanticValidationError as e:
                raise ValidationError(
                    f"Invalid cost override for '{intervention_id}': {e.errors()[0]['msg']}",
                    field=intervention_id,
                ) from e

            changes = override.model_dump(exclude_none=True)
            merged = replace(base, **changes)
            if merged.cost_min > merged.cost_max:
                raise ValidationError(
                    f"Override for '{intervention_id}' gives cost_min {merged.cost_min} "
                    f"above cost_max {merged.cost_max}",
                    field=intervention_id,
                )
            updated[intervention_id] = merged
            logger.debug(f"Applied cost override for {intervention_id}: {changes}")

        return InterventionCatalog(MappingProxyType(updated))

    def blocked_by(
        self,
        intervention_id: str,
        selected: Iterable[str],
        existing: Iterable[str] = (),
    ) -> List[str]:
        """
        Reasons an intervention should not be added to a selection.

        Args:
            intervention_id: Candidate intervention
            selected: Interventions already in the scenario
            existing: Measures already present in the home (e.g. "pv_system")

        Returns:
            Human-readable reasons, empty when the candidate is fine
        """
        selected = set(selected)
        available = selected | set(existing)
        reasons = []
        for rel in RELATIONS:
            if rel.relation_type == RelationType.REQUIRES:
                if rel.intervention_a == intervention_id and rel.intervention_b not in available:
                    reasons.append(f"Requires {rel.intervention_b}: {rel.reason}")
            elif rel.relation_type == RelationType.SUPERSEDES:
                if rel.intervention_b == intervention_id and rel.intervention_a in selected:
                    reasons.append(f"Superseded by {rel.intervention_a}: {rel.reason}")
        return reasons
