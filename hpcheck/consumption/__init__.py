"""
Consumption Module - Metered consumption normalization.
"""

from .annualizer import (
    AnnualizedConsumption,
    ConsumptionAnnualizer,
    MONTHLY_DEMAND_FRACTION,
    FLAT_BASE_SHARE,
    monthly_share,
)

__all__ = [
    'AnnualizedConsumption', 'ConsumptionAnnualizer',
    'MONTHLY_DEMAND_FRACTION', 'FLAT_BASE_SHARE', 'monthly_share',
]
