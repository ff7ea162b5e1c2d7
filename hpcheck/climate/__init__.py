"""
Climate Module - Postal-code based climate and region data.
"""

from .lookup import (
    ClimateProfile,
    CLIMATE_BY_PREFIX,
    DEFAULT_CLIMATE,
    REFERENCE_HDD,
    lookup,
    climate_factor,
)
from .regions import federal_state

__all__ = [
    'ClimateProfile', 'CLIMATE_BY_PREFIX', 'DEFAULT_CLIMATE', 'REFERENCE_HDD',
    'lookup', 'climate_factor', 'federal_state',
]
