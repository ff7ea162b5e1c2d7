"""
ROI Module - Intervention costs and scenario payback.
"""

from .catalog import (
    CostOverride,
    DEFAULT_CATALOG,
    InterventionCatalog,
    InterventionCostModel,
    InterventionRelation,
    RELATIONS,
    RelationType,
)
from .scenario import (
    InterventionBreakdown,
    ScenarioCalculator,
    ScenarioResult,
    combine_gains,
    size_scaling_factor,
)

__all__ = [
    'CostOverride', 'DEFAULT_CATALOG', 'InterventionCatalog', 'InterventionCostModel',
    'InterventionRelation', 'RELATIONS', 'RelationType',
    'InterventionBreakdown', 'ScenarioCalculator', 'ScenarioResult',
    'combine_gains', 'size_scaling_factor',
]
