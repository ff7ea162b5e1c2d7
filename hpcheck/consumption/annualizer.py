"""
Partial-year consumption annualization.

A bill covering only part of the year is extrapolated to a full year by
weighting each covered day with the share of annual heat pump consumption
expected in its month. Heating dominates, so a winter half-year covers far
more than 50 % of the annual consumption.
"""

import calendar
import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional, Tuple

from ..utils.validation import round_half_up

logger = logging.getLogger(__name__)


# Fraction of annual heating degree days per month (Germany average, DWD).
# Sums to ~0.90; the remaining ~0.10 is the hot water base load.
MONTHLY_DEMAND_FRACTION: Tuple[float, ...] = (
    0.17,  # Jan
    0.14,  # Feb
    0.11,  # Mar
    0.07,  # Apr
    0.02,  # May
    0.00,  # Jun
    0.00,  # Jul
    0.00,  # Aug
    0.02,  # Sep
    0.08,  # Oct
    0.13,  # Nov
    0.16,  # Dec
)

# Base load spread evenly over the year
FLAT_BASE_SHARE = 0.10

# Lower bound on the covered fraction, limits extrapolation of short periods
MIN_COVERED_FRACTION = 0.05

DEFAULT_FULL_YEAR_DAYS = 350


def monthly_share(month_index: int) -> float:
    """Expected share of annual consumption in a month (0 = January)."""
    return MONTHLY_DEMAND_FRACTION[month_index] + FLAT_BASE_SHARE / 12


@dataclass(frozen=True)
class AnnualizedConsumption:
    """Consumption projected to a full year."""
    annualized_kwh: float
    days: int
    is_partial: bool
    covered_fraction: float = 1.0


class ConsumptionAnnualizer:
    """
    Project partial-period meter readings to a full year.

    Usage:
        annualizer = ConsumptionAnnualizer()
        result = annualizer.annualize(4000, date(2024, 10, 1), date(2025, 3, 31))
    """

    def __init__(self, full_year_days: int = DEFAULT_FULL_YEAR_DAYS):
        self.full_year_days = full_year_days

    def covered_fraction(self, start: date, end: date) -> float:
        """Share of annual consumption falling in [start, end)."""
        fraction = 0.0
        current = start
        while current < end:
            days_in_month = calendar.monthrange(current.year, current.month)[1]
            fraction += monthly_share(current.month - 1) / days_in_month
            current += timedelta(days=1)
        return fraction

    def annualize(
        self,
        metered_kwh: float,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> AnnualizedConsumption:
        """
        Annualize a metered reading.

        Args:
            metered_kwh: Consumption over the billing period
            start: Billing period start (inclusive)
            end: Billing period end (exclusive)

        Returns:
            AnnualizedConsumption; full-year or missing periods are returned unscaled
        """
        if start is None or end is None:
            return AnnualizedConsumption(metered_kwh, 365, False)

        days = (end - start).days
        if days <= 0:
            logger.warning(f"Billing period ends before it starts ({start} - {end}), not annualizing")
            return AnnualizedConsumption(metered_kwh, 0, False)
        if days >= self.full_year_days:
            return AnnualizedConsumption(metered_kwh, days, False)

        fraction = max(self.covered_fraction(start, end), MIN_COVERED_FRACTION)
        annualized = round_half_up(metered_kwh / fraction)

        logger.debug(
            f"Annualized {metered_kwh:.0f} kWh over {days} days "
            f"(covered fraction {fraction:.3f}) to {annualized} kWh"
        )
        return AnnualizedConsumption(annualized, days, True, fraction)
