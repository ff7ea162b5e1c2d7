"""
HVAC Module - Heat pump performance and backup heater analysis.
"""

from .efficiency import (
    CarnotModel,
    EfficiencyEstimator,
    HEATING_MODEL,
    HOT_WATER_MODEL,
    estimate_flow_temperature,
    resolve_flow_temperature,
)
from .auxiliary import (
    AuxHeaterRating,
    AuxiliaryHeaterAnalysis,
    AuxiliaryHeaterAnalyzer,
    rate_share,
)

__all__ = [
    'CarnotModel', 'EfficiencyEstimator', 'HEATING_MODEL', 'HOT_WATER_MODEL',
    'estimate_flow_temperature', 'resolve_flow_temperature',
    'AuxHeaterRating', 'AuxiliaryHeaterAnalysis', 'AuxiliaryHeaterAnalyzer', 'rate_share',
]
