"""
PV Module - Photovoltaic self-consumption for heat pump electricity.
"""

from .overlap import (
    PVAnalysis,
    PVMonth,
    PVOverlapEstimator,
    MONTHLY_YIELD_KWH_PER_KWP,
    ORIENTATION_FACTOR,
    overlap_fraction,
    regional_yield_factor,
)

__all__ = [
    'PVAnalysis', 'PVMonth', 'PVOverlapEstimator',
    'MONTHLY_YIELD_KWH_PER_KWP', 'ORIENTATION_FACTOR',
    'overlap_fraction', 'regional_yield_factor',
]
