"""
Domestic hot water demand.

VDI 2067 reference: ~500 kWh per person and year for standard use.
"""

from typing import Optional

BASE_KWH_PER_OCCUPANT = 500.0
SHOWERS_PER_OCCUPANT = 0.7  # Average daily showers per person
MIN_USAGE_FACTOR = 0.6
MAX_USAGE_FACTOR = 2.0


class HotWaterDemandEstimator:
    """Annual hot water heat demand from occupancy."""

    def estimate(self, occupants: int, showers_per_day: Optional[float] = None) -> float:
        """
        Args:
            occupants: Persons in the household
            showers_per_day: Showers/baths per day for the whole household

        Returns:
            Hot water heat demand in kWh/a
        """
        demand = occupants * BASE_KWH_PER_OCCUPANT

        if showers_per_day is not None and showers_per_day > 0:
            expected = max(occupants * SHOWERS_PER_OCCUPANT, 1.0)
            factor = showers_per_day / expected
            demand *= max(MIN_USAGE_FACTOR, min(factor, MAX_USAGE_FACTOR))

        return demand
