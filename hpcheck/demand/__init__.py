"""
Demand Module - Space heating and hot water demand.
"""

from .thermal import (
    ThermalDemand,
    ThermalDemandEstimator,
    specific_heat_demand,
    MIN_DEMAND_NEW,
    MIN_DEMAND_EXISTING,
    DEFAULT_ROOM_TEMP_C,
)
from .hot_water import HotWaterDemandEstimator

__all__ = [
    'ThermalDemand', 'ThermalDemandEstimator', 'specific_heat_demand',
    'MIN_DEMAND_NEW', 'MIN_DEMAND_EXISTING', 'DEFAULT_ROOM_TEMP_C',
    'HotWaterDemandEstimator',
]
